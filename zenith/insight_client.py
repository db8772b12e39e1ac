"""AI insight API interactions (OpenAI-compatible chat completions)."""

from typing import Any

import requests

from zenith.config import DEFAULT_INSIGHT_MODEL
from zenith.domain.insight import SYSTEM_PROMPT, build_insight_prompt
from zenith.domain.models import Transaction
from zenith.logging_setup import get_logger

API_URL = "https://api.groq.com/openai/v1/chat/completions"
MAX_TOKENS = 60
TIMEOUT_SECONDS = 15

UNREACHABLE_MESSAGE = "AI Insight: Unable to connect to Zenith Brain."
MALFORMED_MESSAGE = "AI Insight: Data analysis failed."

logger = get_logger(__name__)


def build_request_body(transactions: list[Transaction], model: str = DEFAULT_INSIGHT_MODEL) -> dict[str, Any]:
    """Build the chat completion payload.

    Args:
        transactions: Transactions, newest first.
        model: Model name.

    Returns:
        JSON-serializable request body.
    """
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_insight_prompt(transactions)},
        ],
        "max_tokens": MAX_TOKENS,
    }


def extract_message(payload: Any) -> str | None:
    """Pull the first choice's message content out of a response payload."""
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(content, str):
        return None
    return content.strip()


def fetch_financial_insight(
    api_key: str,
    transactions: list[Transaction],
    model: str = DEFAULT_INSIGHT_MODEL,
    url: str = API_URL,
) -> str:
    """Ask the AI service for a one-sentence insight.

    Failures never raise: they are logged and replaced by a fallback message,
    since the insight is decorative.

    Args:
        api_key: Bearer token.
        transactions: Transactions, newest first.
        model: Model name.
        url: Chat completions endpoint.

    Returns:
        Insight text, or a fallback message.
    """
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    try:
        response = requests.post(
            url,
            headers=headers,
            json=build_request_body(transactions, model),
            timeout=TIMEOUT_SECONDS,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning("Insight request failed: %s", e)
        return UNREACHABLE_MESSAGE

    try:
        payload = response.json()
    except ValueError as e:
        logger.warning("Insight response was not JSON: %s", e)
        return MALFORMED_MESSAGE

    message = extract_message(payload)
    if message is None:
        logger.warning("Insight response had no message content")
        return MALFORMED_MESSAGE
    return message
