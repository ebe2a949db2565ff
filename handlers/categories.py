"""Spending category handlers for /categories."""

from handlers.crud import make_crud_handlers
from models.categories import CategoryCreate, CategoryUpdate
from services import categories

(
    create_category,
    get_category,
    list_categories,
    update_category,
    delete_category,
) = make_crud_handlers(
    "Category",
    CategoryCreate,
    CategoryUpdate,
    create_fn=categories.create_category,
    get_fn=categories.get_category,
    list_fn=categories.get_categories,
    update_fn=categories.update_category,
    delete_fn=categories.delete_category,
)
