"""
Energy assistant chat backed by the Gemini generateContent API.
The model is an opaque collaborator: we send one prompt and return its text.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import httpx

from energy_tracker.core.config import get_settings
from energy_tracker.core.errors import InputValidationError, UpstreamUnavailableError
from energy_tracker.models.usage import UsageEntry
from energy_tracker.services.aggregator import aggregate_usage

logger = logging.getLogger(__name__)

NO_API_KEY_RESPONSE = (
    "🔑 API key not configured. Please add your Google Gemini API key to enable AI features."
)
NO_CANDIDATES_RESPONSE = "I couldn't generate a response. Please try rephrasing your question."

_SYSTEM_PROMPT = """You are an intelligent Energy Assistant chatbot for a Smart Energy Consumption Dashboard. Your role is to help users:
- Understand their energy consumption patterns
- Get actionable energy-saving tips
- Learn about appliance efficiency
- Reduce their electricity bills
- Understand environmental impact of energy usage

Be friendly, concise, and provide practical advice. Use emojis sparingly for readability. Focus on actionable recommendations."""

_GENERATION_CONFIG = {
    "temperature": 0.7,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 500,
}


def build_user_context(entries: Iterable[UsageEntry]) -> str:
    aggregate = aggregate_usage(entries)
    if aggregate.count == 0:
        return ""
    return (
        f"\n\nUser Context: The user has {aggregate.count} energy usage entries "
        f"with an average daily consumption of {aggregate.average:.1f} kWh."
    )


def build_prompt(message: str, entries: Iterable[UsageEntry]) -> str:
    return f"{_SYSTEM_PROMPT}{build_user_context(entries)}\n\nUser question: {message}"


def _extract_text(data: Any) -> Optional[str]:
    """Text of the first candidate; None when the model returned no candidates."""
    if not isinstance(data, dict):
        raise UpstreamUnavailableError("Failed to get AI response", retryable=False)
    candidates = data.get("candidates") or []
    if not candidates:
        return None
    if not isinstance(candidates, list) or not isinstance(candidates[0], dict):
        raise UpstreamUnavailableError("Failed to get AI response", retryable=False)
    content = candidates[0].get("content") or {}
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return None
    texts = [p.get("text", "") for p in parts if isinstance(p, dict)]
    return "".join(t for t in texts if isinstance(t, str)) or None


def ask_assistant(
    message: str,
    entries: Iterable[UsageEntry],
    client: Optional[httpx.Client] = None,
) -> dict[str, Any]:
    """
    Send the user's question (with their usage context) to the model.

    Returns {"response": str, "fallback": bool}. Raises UpstreamUnavailableError
    (not retryable) when the model call times out or fails.
    """
    if not message or not message.strip():
        raise InputValidationError("Message is required")

    settings = get_settings()
    if not settings.gemini_api_key:
        logger.warning("Gemini API key not found - returning fallback response (set GEMINI_API_KEY)")
        return {"response": NO_API_KEY_RESPONSE, "fallback": True}

    url = f"{settings.gemini_base_url}/models/{settings.gemini_model}:generateContent"
    payload = {
        "contents": [{"parts": [{"text": build_prompt(message, entries)}]}],
        "generationConfig": _GENERATION_CONFIG,
    }

    http = client or httpx.Client()
    try:
        response = http.post(
            url,
            params={"key": settings.gemini_api_key},
            json=payload,
            timeout=settings.llm_timeout_seconds,
        )
        response.raise_for_status()
        data = response.json()
    except httpx.TimeoutException as e:
        logger.warning(f"Gemini request timed out after {settings.llm_timeout_seconds}s")
        raise UpstreamUnavailableError("AI assistant timed out", retryable=False) from e
    except httpx.HTTPStatusError as e:
        logger.warning(f"Gemini API error: {e.response.status_code} - {e.response.text[:200]}")
        raise UpstreamUnavailableError(
            "Failed to get AI response",
            retryable=False,
            status=e.response.status_code,
        ) from e
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Gemini request failed: {e}")
        raise UpstreamUnavailableError("Failed to get AI response", retryable=False) from e
    finally:
        if client is None:
            http.close()

    text = _extract_text(data)
    if text is None:
        logger.info("No response candidates from Gemini API")
        return {"response": NO_CANDIDATES_RESPONSE, "fallback": True}
    return {"response": text, "fallback": False}
