"""
Inference collaborator.

Defines the InferenceClient interface used by the decision service and the
Gemini implementation that talks to the generateContent REST endpoint.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from trustless_agent.core.config import Settings
from trustless_agent.core.errors import TransportError

logger = logging.getLogger(__name__)


class InferenceClient(ABC):
    """Text-in, text-out language model endpoint."""

    name = "base"

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        """Return the raw text of the model reply."""
        raise NotImplementedError


class GeminiClient(InferenceClient):
    """Gemini ``generateContent`` over httpx."""

    name = "gemini"

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None):
        """
        Initialize the Gemini client.

        Args:
            settings: Application settings (API key, model, base URL, timeout)
            http_client: Optional shared client; a short-lived one is used otherwise
        """
        self.settings = settings
        self.model = settings.gemini_model
        self.timeout = settings.gemini_timeout_seconds
        self.http_client = http_client

    @property
    def endpoint(self) -> str:
        return f"{self.settings.gemini_base_url.rstrip('/')}/models/{self.model}:generateContent"

    async def _post(self, url: str, **kwargs: Any) -> httpx.Response:
        if self.http_client is not None:
            return await self.http_client.post(url, **kwargs)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(url, **kwargs)

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        """
        Call the model once.

        Args:
            prompt: Full prompt text
            temperature: Sampling temperature
            max_output_tokens: Output length cap

        Returns:
            Text of the first candidate, or "" when the reply has none

        Raises:
            ConfigurationError: GEMINI_API_KEY is not set
            TransportError: non-2xx status or network failure
        """
        self.settings.require("gemini_api_key")

        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_output_tokens,
            },
        }
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.settings.gemini_api_key,
        }

        try:
            response = await self._post(self.endpoint, json=body, headers=headers)
        except httpx.RequestError as e:
            logger.error(f"Gemini request failed: {e}")
            raise TransportError(
                f"Gemini request failed: {e}",
                details={"message": str(e)},
            ) from e

        if not response.is_success:
            raise TransportError(
                f"Gemini error {response.status_code}: {response.text}",
                status_code=response.status_code,
                details=response.text,
            )

        try:
            data = response.json()
        except ValueError:
            logger.warning("Gemini returned a non-JSON body")
            return ""

        return _first_candidate_text(data)


def _first_candidate_text(data: Any) -> str:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    return text if isinstance(text, str) else ""
