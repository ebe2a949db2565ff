"""
Factory for the five REST handlers every ledger entity exposes.

    POST   /<resource>          create
    GET    /<resource>          list
    GET    /<resource>/{id}     get
    PATCH  /<resource>/{id}     update (partial)
    DELETE /<resource>/{id}     delete

The authenticated user id comes from the authorizer context; path ids are
always looked up together with it, so users only ever see their own rows.
"""

from typing import Callable, NamedTuple, Type

from models.base import RecordCreate, RecordUpdate
from services.store import Result
from utils.decorators import (extract_path_params, lambda_handler,
                              require_auth, validate_json_body, validate_model)
from utils.responses import HTTPStatus, result_error_response, success_response


class CrudHandlers(NamedTuple):
    create: Callable
    get: Callable
    list: Callable
    update: Callable
    delete: Callable


def make_crud_handlers(
    resource: str,
    create_model: Type[RecordCreate],
    update_model: Type[RecordUpdate],
    create_fn: Callable[..., Result],
    get_fn: Callable[..., Result],
    list_fn: Callable[..., Result],
    update_fn: Callable[..., Result],
    delete_fn: Callable[..., Result],
    id_param: str = "id",
) -> CrudHandlers:
    """
    Build Lambda handlers around a set of data-access functions.

    :param resource: Entity name used in response messages, e.g. ``"Account"``.
    """

    @lambda_handler()
    @require_auth
    @validate_json_body()
    @validate_model(create_model)
    def create(event, context):
        result = create_fn(event["auth"]["user_id"], event["model"])
        if not result.ok:
            return result_error_response(resource, result.error)

        return success_response(
            data=result.data,
            message=f"{resource} created successfully",
            status_code=HTTPStatus.CREATED,
        )

    @lambda_handler()
    @require_auth
    @extract_path_params(id_param)
    def get(event, context):
        result = get_fn(event["auth"]["user_id"], event["path_params"][id_param])
        if not result.ok:
            return result_error_response(resource, result.error)
        return success_response(data=result.data)

    @lambda_handler()
    @require_auth
    def list_(event, context):
        result = list_fn(event["auth"]["user_id"])
        if not result.ok:
            return result_error_response(resource, result.error)
        return success_response(data=result.data)

    @lambda_handler()
    @require_auth
    @extract_path_params(id_param)
    @validate_json_body()
    @validate_model(update_model)
    def update(event, context):
        result = update_fn(
            event["auth"]["user_id"], event["path_params"][id_param], event["model"]
        )
        if not result.ok:
            return result_error_response(resource, result.error)

        return success_response(
            data=result.data, message=f"{resource} updated successfully"
        )

    @lambda_handler()
    @require_auth
    @extract_path_params(id_param)
    def delete(event, context):
        record_id = event["path_params"][id_param]
        result = delete_fn(event["auth"]["user_id"], record_id)
        if not result.ok:
            return result_error_response(resource, result.error)

        return success_response(message=f"{resource} '{record_id}' deleted successfully")

    return CrudHandlers(create, get, list_, update, delete)
