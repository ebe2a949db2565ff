"""
Bank account handlers.

/accounts and /accounts/{id}. Lists put the primary account first.
"""

from handlers.crud import make_crud_handlers
from models.accounts import AccountCreate, AccountUpdate
from services import accounts

(
    create_account,
    get_account,
    list_accounts,
    update_account,
    delete_account,
) = make_crud_handlers(
    "Account",
    AccountCreate,
    AccountUpdate,
    create_fn=accounts.create_account,
    get_fn=accounts.get_account,
    list_fn=accounts.get_accounts,
    update_fn=accounts.update_account,
    delete_fn=accounts.delete_account,
)
