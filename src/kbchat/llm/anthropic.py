"""Minimal client for the Anthropic Messages API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Sequence

import requests

from kbchat.config import AppConfig
from kbchat.models import ChatMessage

LOGGER = logging.getLogger(__name__)


class LLMError(Exception):
    """Upstream model call failed; carries the HTTP status to report."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return "Claude API error."
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return "Claude API error."


class AnthropicClient:
    """Sends one non-streaming Messages request per call."""

    def __init__(self, config: AppConfig, *, session: requests.Session | None = None) -> None:
        if not config.api_key:
            raise LLMError(500, "ANTHROPIC_API_KEY not set in environment variables.")
        self.config = config
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "content-type": "application/json",
            "x-api-key": self.config.api_key or "",
            "anthropic-version": self.config.anthropic_version,
        }

    def create_message(self, system: str, messages: Sequence[ChatMessage]) -> Dict[str, Any]:
        """Return the decoded response body, raising ``LLMError`` on failure."""
        payload: Dict[str, Any] = {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "system": system,
            "messages": [message.to_payload() for message in messages],
        }
        LOGGER.debug("Calling %s with %d messages", self.config.api_url, len(messages))

        try:
            response = self.session.post(
                self.config.api_url,
                json=payload,
                headers=self._headers(),
                timeout=self.config.timeout,
            )
        except requests.RequestException as exc:
            LOGGER.error("Model request failed: %s", exc)
            raise LLMError(500, f"Fetch failed: {exc}") from exc

        if not response.ok:
            message = _error_message(response)
            LOGGER.warning("Model API returned %s: %s", response.status_code, message)
            raise LLMError(response.status_code, message)

        try:
            return response.json()
        except ValueError as exc:
            raise LLMError(502, "Claude API returned an invalid JSON body.") from exc
