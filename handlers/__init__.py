"""
Handlers package for Lambda function handlers.

One module per API area; each exported function is a Lambda entry point.
"""

from . import (accounts, ai, auth, budget, categories, debts, forecast, goals,
               recurring, transactions, users)

__all__ = [
    "accounts",
    "ai",
    "auth",
    "budget",
    "categories",
    "debts",
    "forecast",
    "goals",
    "recurring",
    "transactions",
    "users",
]
