"""
AI suggestion flows backed by the Gemini ``generateContent`` API.

Each flow sends one prompt, asks for JSON matching its output model, and
validates the reply with pydantic. Failures are not retried; HTTP errors and
validation errors reach the caller.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import pydantic
import requests
from pydantic import Field

from models.base import LedgerModel
from services.parameter_store import config

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=pydantic.BaseModel)

MAX_SUGGESTED_CATEGORIES = 5


class CategorizeTransactionInput(LedgerModel):
    transaction_description: str = Field(
        ...,
        min_length=1,
        description="The description of the transaction from the bank.",
    )


class CategorizeTransactionOutput(LedgerModel):
    suggested_category: str = Field(
        ...,
        description="The suggested category for the transaction, "
        "e.g. Groceries, Dining, Utilities.",
    )
    confidence_score: float = Field(
        ...,
        ge=0,
        le=1,
        description="Confidence in the suggested category, from 0 to 1.",
    )


class SuggestCategoriesInput(LedgerModel):
    description: str = Field(
        ..., min_length=1, description="The description of the expense."
    )


class SuggestCategoriesOutput(LedgerModel):
    categories: List[str] = Field(
        ...,
        max_length=MAX_SUGGESTED_CATEGORIES,
        description="Suggested expense categories.",
    )

    @pydantic.field_validator("categories", mode="before")
    @classmethod
    def at_most_five(cls, v):
        if isinstance(v, list):
            return v[:MAX_SUGGESTED_CATEGORIES]
        return v


def response_schema(model: Type[pydantic.BaseModel]) -> Dict[str, Any]:
    """
    Translate a flat model's JSON schema into Gemini's schema dialect.

    Properties use the model's aliases, which is also what validation of the
    reply expects.
    """
    source = model.model_json_schema(by_alias=True)

    def convert(node: Dict[str, Any]) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": node["type"].upper()}
        if "description" in node:
            out["description"] = node["description"]
        if "items" in node:
            out["items"] = convert(node["items"])
        return out

    return {
        "type": "OBJECT",
        "properties": {
            name: convert(prop) for name, prop in source["properties"].items()
        },
        "required": source.get("required", []),
    }


class GenerativeModel:
    """Calls ``models/{model}:generateContent`` and parses JSON replies."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
    ):
        if api_key is None or model is None or base_url is None:
            settings = config.load_ai_config()
            api_key = api_key or settings["api_key"]
            model = model or settings["model"]
            base_url = base_url or settings["base_url"]

        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def generate(self, prompt: str, output: Type[M]) -> M:
        response = self.session.post(
            f"{self.base_url}/models/{self.model}:generateContent",
            params={"key": self.api_key},
            json={
                "contents": [{"role": "user", "parts": [{"text": prompt}]}],
                "generationConfig": {
                    "responseMimeType": "application/json",
                    "responseSchema": response_schema(output),
                },
            },
            timeout=self.timeout,
        )
        response.raise_for_status()

        text = response.json()["candidates"][0]["content"]["parts"][0]["text"]
        return output.model_validate(json.loads(text))


_default_model: Optional[GenerativeModel] = None


def get_model() -> GenerativeModel:
    global _default_model
    if _default_model is None:
        _default_model = GenerativeModel()
    return _default_model


CATEGORIZE_PROMPT = (
    "Given the following transaction description, suggest an appropriate "
    "expense category and a confidence score (0-1) for the suggestion.\n\n"
    "Transaction Description: {transaction_description}"
)

SUGGEST_PROMPT = (
    "You are an AI assistant helping users categorize their expenses.\n\n"
    "Given the following expense description, suggest up to 5 relevant "
    "expense categories.\n\n"
    "Description: {description}"
)


def categorize_transaction(
    data: CategorizeTransactionInput, model: Optional[GenerativeModel] = None
) -> CategorizeTransactionOutput:
    """Suggest a category for a bank transaction description."""
    model = model or get_model()
    prompt = CATEGORIZE_PROMPT.format(
        transaction_description=data.transaction_description
    )
    result = model.generate(prompt, CategorizeTransactionOutput)
    logger.info(
        "Categorized transaction as %s (confidence %.2f)",
        result.suggested_category,
        result.confidence_score,
    )
    return result


def suggest_categories(
    data: SuggestCategoriesInput, model: Optional[GenerativeModel] = None
) -> SuggestCategoriesOutput:
    """Suggest up to five expense categories for a description."""
    model = model or get_model()
    result = model.generate(
        SUGGEST_PROMPT.format(description=data.description), SuggestCategoriesOutput
    )
    logger.info("Suggested %d categories", len(result.categories))
    return result
