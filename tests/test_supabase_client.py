import pytest
from conftest import FakeResponse, FakeSession

from services.supabase_client import SupabaseClient, SupabaseError


def _client(*responses):
    session = FakeSession(*responses)
    client = SupabaseClient(
        url="https://proj.supabase.co/", api_key="service-key", session=session
    )
    return client, session


def test_select_builds_postgrest_query():
    client, session = _client(FakeResponse(200, [{"id": 1}]))

    rows = client.select(
        "accounts",
        filters={"user_id": "u1", "archived_at": None},
        conditions=[("date", "gte", "2024-01-01")],
        order=("is_primary.desc", "name.asc"),
        limit=10,
    )

    assert rows == [{"id": 1}]
    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://proj.supabase.co/rest/v1/accounts"
    assert call["params"] == [
        ("select", "*"),
        ("user_id", "eq.u1"),
        ("archived_at", "is.null"),
        ("date", "gte.2024-01-01"),
        ("order", "is_primary.desc,name.asc"),
        ("limit", "10"),
    ]
    assert call["headers"]["apikey"] == "service-key"
    assert call["headers"]["Authorization"] == "Bearer service-key"
    assert call["timeout"] == 10


def test_insert_returns_representation():
    client, session = _client(FakeResponse(201, [{"id": "a", "name": "Rent"}]))

    row = client.insert("categories", {"name": "Rent", "user_id": "u1"})

    assert row == {"id": "a", "name": "Rent"}
    assert session.calls[0]["headers"]["Prefer"] == "return=representation"
    assert session.calls[0]["json"] == {"name": "Rent", "user_id": "u1"}


def test_upsert_merges_on_conflict_column():
    client, session = _client(FakeResponse(201, [{"user_id": "u1"}]))

    client.upsert("user_preferences", {"user_id": "u1"}, on_conflict="user_id")

    call = session.calls[0]
    assert call["params"] == [("on_conflict", "user_id")]
    assert "resolution=merge-duplicates" in call["headers"]["Prefer"]


def test_update_and_delete_filter_rows():
    client, session = _client(FakeResponse(200, []), FakeResponse(200, [{"id": "1"}]))

    assert client.update("accounts", {"name": "x"}, {"id": "1", "user_id": "u"}) == []
    assert client.delete("accounts", {"id": "1", "is_primary": True}) == [{"id": "1"}]

    assert session.calls[0]["method"] == "PATCH"
    assert session.calls[1]["params"] == [("id", "eq.1"), ("is_primary", "eq.true")]


def test_rpc_posts_to_function_endpoint():
    client, session = _client(FakeResponse(204, text=""))

    assert client.rpc("make_debt_payment", {"p_amount": "10"}) is None
    assert session.calls[0]["url"].endswith("/rest/v1/rpc/make_debt_payment")


def test_error_status_raises_supabase_error():
    client, _ = _client(
        FakeResponse(
            409,
            {"message": "duplicate key value", "code": "23505", "details": "exists"},
        )
    )

    with pytest.raises(SupabaseError) as excinfo:
        client.insert("categories", {"name": "Rent"})

    assert excinfo.value.status_code == 409
    assert excinfo.value.code == "23505"
    assert str(excinfo.value) == "duplicate key value"


def test_empty_insert_response_is_an_error():
    client, _ = _client(FakeResponse(201, []))

    with pytest.raises(SupabaseError):
        client.insert("categories", {"name": "Rent"})
