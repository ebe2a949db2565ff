import json
import time

import jwt
from conftest import USER_ID, FakeResponse, FakeSession, api_event

import authorizer
import main
from handlers import accounts, ai
from handlers import auth as auth_handlers
from handlers import (budget, debts, forecast, goals, recurring, transactions,
                      users)
from services.supabase_auth import SupabaseAuth


def _body(response):
    return json.loads(response["body"])


def test_healthz():
    response = main.healthz({}, None)

    assert response["statusCode"] == 200
    assert _body(response)["service"] == "pocket-ledger-api"
    assert response["headers"]["Access-Control-Allow-Origin"] == "*"


def test_requests_without_authorizer_context_are_rejected(fake_db):
    response = accounts.list_accounts(api_event(user_id=None), None)

    assert response["statusCode"] == 401


def test_create_then_fetch_account(fake_db):
    created = accounts.create_account(
        api_event(body={"name": "Checking", "type": "checking", "isPrimary": True}),
        None,
    )

    assert created["statusCode"] == 201
    body = _body(created)
    assert body["name"] == "Checking"
    assert body["isPrimary"] is True
    assert body["balance"] == 0

    fetched = accounts.get_account(api_event(path_params={"id": body["id"]}), None)
    assert fetched["statusCode"] == 200
    assert _body(fetched)["userId"] == USER_ID


def test_invalid_body_is_a_400(fake_db):
    response = accounts.create_account(
        api_event(body={"name": "Checking", "type": "piggy-bank"}), None
    )

    assert response["statusCode"] == 400
    body = _body(response)
    assert body["error_code"] == "VALIDATION_ERROR"
    assert body["details"]["validation_errors"][0]["loc"] == ["type"]


def test_unknown_id_is_a_404(fake_db):
    response = accounts.get_account(api_event(path_params={"id": "nope"}), None)

    assert response["statusCode"] == 404
    assert _body(response)["error"] == "Account 'nope' not found"


def test_storage_failure_is_a_500(fake_db):
    fake_db.fail("select", "accounts")

    response = accounts.list_accounts(api_event(), None)

    assert response["statusCode"] == 500
    assert "Account request failed" in _body(response)["error"]


def test_partial_update_over_http(fake_db):
    row = fake_db.seed(
        "accounts", user_id=USER_ID, name="Checking", type="checking",
        is_primary=True, balance="5",
    )

    response = accounts.update_account(
        api_event(path_params={"id": row["id"]}, body={"balance": 99.5}), None
    )

    assert response["statusCode"] == 200
    body = _body(response)
    assert body["balance"] == 99.5
    assert body["isPrimary"] is True


def test_transactions_list_validates_query(fake_db):
    fake_db.seed("transactions", user_id=USER_ID, date="2024-02-01",
                 description="Rent", amount="-1200")

    ok = transactions.list_transactions(
        api_event(query={"startDate": "2024-01-01", "limit": "5"}), None
    )
    bad = transactions.list_transactions(api_event(query={"limit": "0"}), None)

    assert ok["statusCode"] == 200
    assert [t["description"] for t in _body(ok)["data"]] == ["Rent"]
    assert bad["statusCode"] == 400


def test_debt_strategy_and_plan(fake_db):
    for name, balance, apr in [("Card", "900", "24.9"), ("Loan", "300", "6")]:
        fake_db.seed(
            "debt_accounts", user_id=USER_ID, name=name, type="other",
            balance=balance, apr=apr, minimum_payment="30", payment_day_of_month=5,
        )

    put = debts.set_debt_strategy(api_event(body={"strategy": "snowball"}), None)
    plan = debts.get_debt_plan(api_event(), None)

    assert put["statusCode"] == 200
    body = _body(plan)
    assert body["strategy"] == "snowball"
    assert body["totalBalance"] == 1200
    assert [d["name"] for d in body["debtAccounts"]] == ["Loan", "Card"]


def test_debt_payment_requires_positive_amount(fake_db):
    response = debts.make_debt_payment(
        api_event(path_params={"id": "1"}, body={"amount": -5}), None
    )

    assert response["statusCode"] == 400


def test_forecast_for_requested_year(fake_db):
    fake_db.seed(
        "debt_accounts", user_id=USER_ID, name="Card", type="credit-card",
        balance="900", apr="24.9", minimum_payment="30", payment_day_of_month=31,
    )

    response = forecast.get_forecast(api_event(query={"year": "2024"}), None)

    assert response["statusCode"] == 200
    body = _body(response)
    assert body["year"] == 2024
    assert len(body["months"]) == 12
    assert all(m["totalDebtMinimumPayments"] == 30 for m in body["months"])
    assert body["months"][1]["monthLabel"] == "February 2024"


def test_onboarding_failure_still_answers_ok(fake_db):
    fake_db.fail("upsert", "user_preferences")

    response = users.complete_onboarding(api_event(), None)

    assert response["statusCode"] == 200
    body = _body(response)
    assert body["showOnboarding"] is False
    assert body["saved"] is False
    assert body["notifications"]


def test_me_reports_onboarding_flag(fake_db):
    response = users.get_me(api_event(), None)

    body = _body(response)
    assert body["user"]["name"] == "ada"
    assert body["showOnboarding"] is True
    assert body["preferences"]["currency"] == "USD"


def test_ai_failures_become_500(monkeypatch, fake_db):
    def boom(data):
        raise RuntimeError("model unavailable")

    monkeypatch.setattr(ai, "categorize_transaction", boom)

    response = ai.categorize(
        api_event(body={"transactionDescription": "UBER *TRIP"}), None
    )

    assert response["statusCode"] == 500
    assert _body(response)["error"] == "Internal server error"


def test_authorizer_passes_user_id_from_claims():
    token = jwt.encode(
        {
            "sub": "u-77",
            "email": "ada@example.com",
            "aud": "authenticated",
            "exp": int(time.time()) + 600,
        },
        "test-jwt-secret-with-at-least-32-bytes",
        algorithm="HS256",
    )

    allowed = authorizer.lambda_handler(
        {"headers": {"authorization": f"Bearer {token}"}}, None
    )
    denied = authorizer.lambda_handler({"headers": {}}, None)

    assert allowed == {
        "isAuthorized": True,
        "context": {"userId": "u-77", "email": "ada@example.com"},
    }
    assert denied == {"isAuthorized": False}


def test_budget_spending_period(fake_db):
    fake_db.rpc_results["get_budget_category_spending"] = [
        {"budget_category_id": "b1", "budgeted": 300, "spent": 120}
    ]

    ok = budget.get_budget_spending(
        api_event(query={"startDate": "2024-03-01", "endDate": "2024-03-31"}), None
    )
    backwards = budget.get_budget_spending(
        api_event(query={"startDate": "2024-03-31", "endDate": "2024-03-01"}), None
    )

    assert ok["statusCode"] == 200
    assert _body(ok)["data"][0]["spent"] == 120
    assert fake_db.rpc_calls[0][1]["p_start_date"] == "2024-03-01"
    assert backwards["statusCode"] == 400


def test_month_summary(fake_db):
    fake_db.seed(
        "debt_accounts", user_id=USER_ID, name="Card", type="credit-card",
        balance="900", apr="24.9", minimum_payment="30", payment_day_of_month=1,
    )

    response = forecast.get_month_summary(api_event(), None)

    assert response["statusCode"] == 200
    assert _body(response)["totalDebtPayments"] == 30


def _auth_with(*responses):
    return lambda: SupabaseAuth(
        url="https://proj.supabase.co",
        anon_key="anon",
        jwt_secret="",
        session=FakeSession(*responses),
    )


def test_login_returns_session(monkeypatch):
    session = {
        "access_token": "access",
        "refresh_token": "refresh",
        "expires_in": 3600,
        "user": {"id": "u1", "email": "ada@example.com"},
    }
    monkeypatch.setattr(
        auth_handlers, "SupabaseAuth", _auth_with(FakeResponse(200, session))
    )

    response = auth_handlers.login(
        api_event(
            user_id=None,
            body={"email": "Ada@Example.com", "password": "secret1"},
        ),
        None,
    )

    assert response["statusCode"] == 200
    body = _body(response)
    assert body["user"]["id"] == "u1"
    assert body["session"]["accessToken"] == "access"


def test_login_with_bad_credentials_is_401(monkeypatch):
    monkeypatch.setattr(
        auth_handlers,
        "SupabaseAuth",
        _auth_with(
            FakeResponse(400, {"error_description": "Invalid login credentials"})
        ),
    )

    response = auth_handlers.login(
        api_event(
            user_id=None,
            body={"email": "ada@example.com", "password": "wrong!"},
        ),
        None,
    )

    assert response["statusCode"] == 401
    assert _body(response)["error"] == "Invalid login credentials"


def test_signup_requiring_confirmation(monkeypatch, fake_db):
    monkeypatch.setattr(
        auth_handlers,
        "SupabaseAuth",
        _auth_with(FakeResponse(200, {"id": "u3", "email": "grace@example.com"})),
    )

    response = auth_handlers.signup(
        api_event(
            user_id=None,
            body={"email": "grace@example.com", "password": "secret1"},
        ),
        None,
    )

    assert response["statusCode"] == 201
    body = _body(response)
    assert body["confirmationRequired"] is True
    assert body["user"]["name"] == "grace"
    assert fake_db.tables["users"][0]["id"] == "u3"


def test_logout_requires_bearer_token(monkeypatch):
    monkeypatch.setattr(
        auth_handlers, "SupabaseAuth", _auth_with(FakeResponse(204, text=""))
    )

    missing = auth_handlers.logout(api_event(user_id=None), None)
    ok = auth_handlers.logout(
        api_event(user_id=None, headers={"Authorization": "Bearer access"}), None
    )

    assert missing["statusCode"] == 401
    assert ok["statusCode"] == 200


def test_goal_contribution_over_http(fake_db):
    created = goals.create_goal(
        api_event(
            body={"name": "Trip", "targetAmount": 1200, "targetDate": "2099-06-01"}
        ),
        None,
    )
    goal_id = _body(created)["id"]

    contributed = goals.add_goal_contribution(
        api_event(path_params={"id": goal_id}, body={"amount": 200}), None
    )
    missing = goals.add_goal_contribution(
        api_event(path_params={"id": "nope"}, body={"amount": 200}), None
    )

    assert created["statusCode"] == 201
    assert _body(created)["icon"] == "default"
    assert contributed["statusCode"] == 201
    assert _body(contributed)["goalId"] == goal_id
    assert missing["statusCode"] == 404


def test_forecast_includes_goal_contributions(fake_db):
    fake_db.seed(
        "financial_goals", user_id=USER_ID, name="Trip", target_amount="1200",
        current_amount="0", target_date="2024-12-31",
    )

    response = forecast.get_forecast(api_event(query={"year": "2024"}), None)

    months = _body(response)["months"]
    assert months[0]["totalGoalContributions"] == 100
    assert months[11]["goalContributions"][0]["name"] == "Trip"


def test_generate_transactions_over_http(fake_db):
    fake_db.rpc_results["generate_transactions_from_recurring"] = {"count": 3}

    ok = recurring.generate_transactions(
        api_event(body={"startDate": "2024-03-01", "endDate": "2024-03-31"}), None
    )
    backwards = recurring.generate_transactions(
        api_event(body={"startDate": "2024-03-31", "endDate": "2024-03-01"}), None
    )

    assert ok["statusCode"] == 201
    assert _body(ok)["count"] == 3
    assert backwards["statusCode"] == 400
