from __future__ import annotations

import logging
import os

import httpx

from rpos.application.ports.insights import InsightsGenerator

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.0-flash"

NOT_CONFIGURED_MESSAGE = "API key not configured. Unable to generate insights."
UNAVAILABLE_MESSAGE = "Could not generate the analysis. Check the connection or the API key."

_PROMPT_TEMPLATE = """You are an expert restaurant business analyst. Analyze the following fast food sales data.
Data:
{summary}

Provide a concise analysis in Markdown covering:
1. Key performance trends.
2. Which items seem popular or often bought together.
3. Specific actionable advice for the manager to increase revenue or efficiency.
4. A "Quote of the day" to motivate the kitchen staff.

Keep it professional but encouraging."""


def build_prompt(summary_text: str) -> str:
    return _PROMPT_TEMPLATE.format(summary=summary_text)


def _extract_text(payload: dict) -> str:
    candidates = payload.get("candidates") or []
    if not candidates:
        raise ValueError("gemini response has no candidates")
    parts = candidates[0].get("content", {}).get("parts") or []
    text = "".join(part.get("text", "") for part in parts)
    if not text:
        raise ValueError("gemini response has no text parts")
    return text


class GeminiInsightsClient(InsightsGenerator):
    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout_seconds: float = 20.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else os.getenv("GEMINI_API_KEY")
        self._model = model or os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
        self._timeout_seconds = timeout_seconds
        self._http_client = http_client

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def generate(self, summary_text: str) -> str:
        if not self.configured:
            return NOT_CONFIGURED_MESSAGE

        body = {"contents": [{"parts": [{"text": build_prompt(summary_text)}]}]}
        url = f"{GEMINI_BASE_URL}/models/{self._model}:generateContent"
        try:
            if self._http_client is not None:
                response = self._http_client.post(
                    url,
                    params={"key": self._api_key},
                    json=body,
                    timeout=self._timeout_seconds,
                )
            else:
                with httpx.Client(timeout=self._timeout_seconds) as client:
                    response = client.post(url, params={"key": self._api_key}, json=body)
            response.raise_for_status()
            return _extract_text(response.json())
        except Exception:
            logger.exception("insights_generation_failed")
            return UNAVAILABLE_MESSAGE
