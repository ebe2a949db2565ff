import itertools
import json
import os
from collections import defaultdict
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

import pytest
import requests

# Configuration must come from the environment before app modules import
os.environ["USE_PARAMETER_STORE"] = "false"
os.environ["SUPABASE_URL"] = "https://test-project.supabase.co"
os.environ["SUPABASE_ANON_KEY"] = "anon-key"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "service-role-key"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret-with-at-least-32-bytes"
os.environ["AI_GOOGLE_API_KEY"] = "google-key"
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

from models.debts import DebtAccount  # noqa: E402
from models.recurring import RecurringItem  # noqa: E402
from services import supabase_client  # noqa: E402
from services.supabase_client import SupabaseError  # noqa: E402

USER_ID = "user-1"
OTHER_USER_ID = "user-2"


def _sort_value(value):
    if isinstance(value, str):
        try:
            return Decimal(value)
        except InvalidOperation:
            return value
    return value


class FakeSupabase:
    """In-memory stand-in for ``SupabaseClient``."""

    def __init__(self):
        self.tables = defaultdict(list)
        self.rpc_calls = []
        self.rpc_results = {}
        self.failures = {}
        self._ids = itertools.count(1)

    def fail(self, method, target, error=None):
        """Make ``method`` on ``target`` (table or rpc function) raise."""
        self.failures[(method, target)] = error or SupabaseError(
            f"{method} on {target} failed", status_code=500
        )

    def _check(self, method, target):
        error = self.failures.get((method, target))
        if error:
            raise error

    @staticmethod
    def _matches(row, filters, conditions=()):
        for column, value in (filters or {}).items():
            if value is None:
                if row.get(column) is not None:
                    return False
            elif str(row.get(column)) != str(value):
                return False
        for column, operator, value in conditions:
            current = row.get(column)
            if current is None:
                return False
            if operator == "gte" and not str(current) >= str(value):
                return False
            if operator == "lte" and not str(current) <= str(value):
                return False
        return True

    def seed(self, table, **row):
        row.setdefault("id", str(next(self._ids)))
        row.setdefault("created_at", "2024-01-01T00:00:00+00:00")
        self.tables[table].append(dict(row))
        return dict(row)

    def select(
        self,
        table,
        filters=None,
        conditions=(),
        order=(),
        columns="*",
        limit=None,
        offset=None,
    ):
        self._check("select", table)
        rows = [r for r in self.tables[table] if self._matches(r, filters, conditions)]
        for term in reversed(list(order)):
            column, direction = term.split(".")
            rows.sort(
                key=lambda r: _sort_value(r.get(column)), reverse=direction == "desc"
            )
        if offset:
            rows = rows[offset:]
        if limit is not None:
            rows = rows[:limit]
        return [dict(r) for r in rows]

    def insert(self, table, row):
        self._check("insert", table)
        return self.seed(table, **row)

    def update(self, table, values, filters):
        self._check("update", table)
        updated = []
        for row in self.tables[table]:
            if self._matches(row, filters):
                row.update(values)
                updated.append(dict(row))
        return updated

    def upsert(self, table, row, on_conflict):
        self._check("upsert", table)
        for existing in self.tables[table]:
            if existing.get(on_conflict) == row.get(on_conflict):
                existing.update(row)
                return [dict(existing)]
        return [self.seed(table, **row)]

    def delete(self, table, filters):
        self._check("delete", table)
        kept, removed = [], []
        for row in self.tables[table]:
            (removed if self._matches(row, filters) else kept).append(row)
        self.tables[table] = kept
        return [dict(r) for r in removed]

    def rpc(self, function, params=None):
        self.rpc_calls.append((function, params or {}))
        self._check("rpc", function)
        return self.rpc_results.get(function)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text
        self.content = text.encode()

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Records requests and answers them from a queue of ``FakeResponse``."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            return FakeResponse(200, {})
        return self.responses.pop(0)

    def post(self, url, **kwargs):
        return self.request("POST", url, **kwargs)


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeSupabase()
    monkeypatch.setattr(supabase_client, "_default_client", db)
    return db


@pytest.fixture
def make_debt():
    def factory(**overrides):
        values = {
            "id": "debt-1",
            "user_id": USER_ID,
            "name": "Visa",
            "type": "credit-card",
            "balance": Decimal("1000"),
            "apr": Decimal("19.9"),
            "minimum_payment": Decimal("50"),
            "payment_day_of_month": 15,
            "payment_frequency": "monthly",
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        values.update(overrides)
        return DebtAccount(**values)

    return factory


@pytest.fixture
def make_item():
    def factory(**overrides):
        values = {
            "id": "item-1",
            "user_id": USER_ID,
            "name": "Salary",
            "type": "income",
            "amount": Decimal("1000"),
            "frequency": "monthly",
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        values.update(overrides)
        return RecurringItem(**values)

    return factory


def api_event(
    user_id=USER_ID, body=None, path_params=None, query=None, headers=None
):
    """API Gateway HTTP API event as seen behind the Lambda authorizer."""
    event = {
        "requestContext": {
            "http": {"method": "GET"},
            "authorizer": {"lambda": {"userId": user_id, "email": "ada@example.com"}}
            if user_id
            else {},
        },
        "headers": headers or {},
        "pathParameters": path_params,
        "queryStringParameters": query,
    }
    if body is not None:
        event["body"] = json.dumps(body)
    return event
