"""Data access for transaction categories."""

from models.categories import Category, CategoryCreate, CategoryUpdate
from services.store import Result, RowStore

categories = RowStore(Category, "categories")


def get_categories(user_id: str) -> Result:
    return categories.list(user_id)


def get_category(user_id: str, category_id: str) -> Result:
    return categories.get(user_id, category_id)


def create_category(user_id: str, category: CategoryCreate) -> Result:
    return categories.create(user_id, category)


def update_category(user_id: str, category_id: str, updates: CategoryUpdate) -> Result:
    return categories.update(user_id, category_id, updates)


def delete_category(user_id: str, category_id: str) -> Result:
    return categories.delete(user_id, category_id)
