"""
Age insight text from an OpenAI-compatible chat endpoint (xAI Grok or Groq).

The insight is decorative: fetch_insight always returns a string and never
raises. Failures are logged and replaced with a static fallback.
"""

from __future__ import annotations

import json
import re
import time
from typing import Any, Protocol

import requests

from src.utils.config import (
    llm_api_key,
    llm_base_url,
    llm_max_tokens,
    llm_model,
)
from src.utils.logger import get_logger

logger = get_logger()

MAX_RETRIES = 3
REQUEST_TIMEOUT = 30

FALLBACK_INSIGHT = "Time flies when you're having fun!"
EMPTY_INSIGHT = "You are unique in the universe!"

SYSTEM_PROMPT = "You are a witty, encouraging companion who shares short facts about ages."

PROMPT_TEMPLATE = """The user is exactly {years} years and {months} months old.
Give me a short, fascinating, positive fact or "stat" related to this specific age.
It could be biological (what happens to the body), historical (what a famous person did at this age), or statistical.
Keep it under 2 sentences. Be witty and encouraging."""


class InsightProvider(Protocol):
    def fetch_insight(self, years: int, months: int) -> str: ...


class StaticInsightProvider:
    """Returns the same text every time. Used when insights are disabled."""

    def __init__(self, text: str = FALLBACK_INSIGHT) -> None:
        self._text = text

    def fetch_insight(self, years: int, months: int) -> str:
        return self._text


def build_prompt(years: int, months: int) -> str:
    return PROMPT_TEMPLATE.format(years=years, months=months)


def _retry_after_seconds(body: str | None) -> float | None:
    """Wait hint from a 429 body ("... try again in 7.5s ..."), if any."""
    if not body:
        return None
    try:
        msg = json.loads(body).get("error", {}).get("message", "")
    except (json.JSONDecodeError, AttributeError):
        return None
    match = re.search(r"try again in ([\d.]+)s", msg, re.IGNORECASE)
    if not match:
        return None
    return max(float(match.group(1)) + 0.5, 1.0)


class LLMInsightClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        fallback: str = FALLBACK_INSIGHT,
    ) -> None:
        self._base_url = base_url or llm_base_url()
        self._api_key = api_key
        self.model = model or llm_model()
        self.max_tokens = max_tokens or llm_max_tokens()
        self.fallback = fallback

    @property
    def api_key(self) -> str:
        # Resolved lazily so a missing key surfaces as a fallback, not at construction.
        if not self._api_key:
            self._api_key = llm_api_key()
        return self._api_key

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _chat_request(self, messages: list[dict[str, Any]]) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": self.max_tokens,
        }
        last_err: Exception | None = None
        for attempt in range(MAX_RETRIES):
            try:
                r = requests.post(
                    self._base_url,
                    headers=self._headers(),
                    json=payload,
                    timeout=REQUEST_TIMEOUT,
                )
                r.raise_for_status()
                return r.json()
            except requests.RequestException as e:
                last_err = e
                logger.warning("Insight API attempt %d failed: %s", attempt + 1, e)
                if attempt < MAX_RETRIES - 1:
                    delay: float = 2 ** attempt
                    response = getattr(e, "response", None)
                    if response is not None and getattr(response, "status_code", None) == 429:
                        delay = _retry_after_seconds(getattr(response, "text", None)) or max(5.0, delay * 2)
                    time.sleep(delay)
        raise RuntimeError(f"Insight API failed after {MAX_RETRIES} retries: {last_err}") from last_err

    def fetch_insight(self, years: int, months: int) -> str:
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(years, months)},
        ]
        try:
            out = self._chat_request(messages)
        except Exception as e:
            logger.warning("Insight fetch failed, using fallback: %s", e)
            return self.fallback
        if not isinstance(out, dict):
            return self.fallback
        choices = out.get("choices") or []
        if not choices:
            return EMPTY_INSIGHT
        content = ((choices[0] or {}).get("message") or {}).get("content") or ""
        return content.strip() or EMPTY_INSIGHT


def make_insight_provider(enabled: bool) -> InsightProvider:
    """LLM-backed provider when enabled, otherwise the static one."""
    if enabled:
        return LLMInsightClient()
    return StaticInsightProvider()
