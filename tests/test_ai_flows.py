import json

import pytest
import requests
from conftest import FakeResponse, FakeSession
from pydantic import ValidationError

from services.ai_flows import (CategorizeTransactionInput,
                               CategorizeTransactionOutput, GenerativeModel,
                               SuggestCategoriesInput, SuggestCategoriesOutput,
                               categorize_transaction, response_schema,
                               suggest_categories)


def _reply(payload):
    return FakeResponse(
        200,
        {"candidates": [{"content": {"parts": [{"text": json.dumps(payload)}]}}]},
    )


def _model(*responses):
    session = FakeSession(*responses)
    model = GenerativeModel(
        api_key="key",
        model="gemini-test",
        base_url="https://ai.example.com/v1beta",
        session=session,
    )
    return model, session


def test_categorize_transaction_parses_reply():
    model, session = _model(
        _reply({"suggestedCategory": "Groceries", "confidenceScore": 0.92})
    )

    result = categorize_transaction(
        CategorizeTransactionInput(transaction_description="WHOLE FOODS #123"),
        model=model,
    )

    assert result == CategorizeTransactionOutput(
        suggested_category="Groceries", confidence_score=0.92
    )
    call = session.calls[0]
    assert call["url"] == "https://ai.example.com/v1beta/models/gemini-test:generateContent"
    assert call["params"] == {"key": "key"}
    assert "WHOLE FOODS #123" in call["json"]["contents"][0]["parts"][0]["text"]
    config = call["json"]["generationConfig"]
    assert config["responseMimeType"] == "application/json"
    assert set(config["responseSchema"]["properties"]) == {
        "suggestedCategory",
        "confidenceScore",
    }


def test_confidence_outside_unit_interval_is_rejected():
    model, _ = _model(_reply({"suggestedCategory": "Dining", "confidenceScore": 1.4}))

    with pytest.raises(ValidationError):
        categorize_transaction(
            CategorizeTransactionInput(transaction_description="Cafe"), model=model
        )


def test_http_errors_propagate():
    model, _ = _model(FakeResponse(503, {"error": {"message": "overloaded"}}))

    with pytest.raises(requests.HTTPError):
        suggest_categories(SuggestCategoriesInput(description="bus"), model=model)


def test_suggest_categories_keeps_at_most_five():
    model, _ = _model(
        _reply({"categories": ["Transit", "Commute", "Travel", "Bus", "City", "Misc"]})
    )

    result = suggest_categories(
        SuggestCategoriesInput(description="monthly bus pass"), model=model
    )

    assert result.categories == ["Transit", "Commute", "Travel", "Bus", "City"]


def test_missing_field_in_reply_is_rejected():
    model, _ = _model(_reply({"labels": ["Food"]}))

    with pytest.raises(ValidationError):
        suggest_categories(SuggestCategoriesInput(description="pizza"), model=model)


def test_response_schema_uses_gemini_types():
    schema = response_schema(SuggestCategoriesOutput)

    assert schema == {
        "type": "OBJECT",
        "properties": {
            "categories": {
                "type": "ARRAY",
                "description": "Suggested expense categories.",
                "items": {"type": "STRING"},
            }
        },
        "required": ["categories"],
    }
    assert response_schema(CategorizeTransactionOutput)["properties"][
        "confidenceScore"
    ]["type"] == "NUMBER"
