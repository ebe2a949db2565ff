"""Data access for bank accounts."""

from models.accounts import Account, AccountCreate, AccountUpdate
from services.store import Result, RowStore

# Primary account first, then alphabetical
accounts = RowStore(Account, "accounts", order=("is_primary.desc", "name.asc"))


def get_accounts(user_id: str) -> Result:
    return accounts.list(user_id)


def get_account(user_id: str, account_id: str) -> Result:
    return accounts.get(user_id, account_id)


def create_account(user_id: str, account: AccountCreate) -> Result:
    return accounts.create(user_id, account)


def update_account(user_id: str, account_id: str, updates: AccountUpdate) -> Result:
    return accounts.update(user_id, account_id, updates)


def delete_account(user_id: str, account_id: str) -> Result:
    return accounts.delete(user_id, account_id)
