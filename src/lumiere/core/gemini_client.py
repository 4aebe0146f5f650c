"""Async HTTP transport for the Gemini ``generateContent`` REST endpoint.

:class:`GeminiClient` owns one ``aiohttp.ClientSession`` that is created
lazily on first use and shared by all concurrent requests (the five gallery
calls run through the same session).  Call :meth:`GeminiClient.close` when
the owning application shuts down, or use the client as an async context
manager.

Authentication uses the ``key`` query parameter.  The key never appears in
log output: only the model name and status are logged.

The client performs no retries and enforces no timeout beyond the aiohttp
total timeout taken from :attr:`LumiereConfig.request_timeout`.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import aiohttp

from lumiere.core.config import LumiereConfig
from lumiere.core.errors import GeminiAPIError, MalformedResponseError, MissingAPIKeyError

logger = logging.getLogger(__name__)


def build_request_body(parts: list[dict], generation_config: dict | None = None) -> dict:
    """Build a single-turn ``generateContent`` request body.

    Args:
        parts: Multimodal parts (``{"text": ...}`` / ``{"inlineData": ...}``)
        generation_config: Optional ``generationConfig`` object

    Returns:
        JSON-serialisable request body.
    """
    body: dict[str, Any] = {"contents": [{"parts": parts}]}
    if generation_config:
        body["generationConfig"] = generation_config
    return body


def response_parts(result: dict) -> list[dict]:
    """Return the content parts of the first candidate, or an empty list."""
    candidates = result.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return []
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return []
    parts = content.get("parts")
    if not isinstance(parts, list):
        return []
    return [part for part in parts if isinstance(part, dict)]


class GeminiClient:
    """Minimal async client for ``POST {base_url}/{model}:generateContent``.

    Attributes:
        config: Configuration supplying the key, base URL and timeout
    """

    def __init__(self, config: LumiereConfig) -> None:
        self.config = config
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> GeminiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the shared HTTP session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.request_timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if one was opened."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def generate_content(
        self,
        model: str,
        parts: list[dict],
        generation_config: dict | None = None,
    ) -> dict:
        """Send one ``generateContent`` request and return the decoded JSON.

        Args:
            model: Model name, e.g. ``"gemini-2.5-flash"``
            parts: Request parts for the single user turn
            generation_config: Optional ``generationConfig`` object

        Returns:
            The decoded JSON response body.

        Raises:
            MissingAPIKeyError: If no API key is configured
            GeminiAPIError: If the endpoint returns a non-2xx status
            MalformedResponseError: If a success body is not a JSON object
            aiohttp.ClientError: On connection failures
        """
        if not self.config.has_api_key:
            raise MissingAPIKeyError()

        session = await self._get_session()
        url = f"{self.config.base_url.rstrip('/')}/{model}:generateContent"
        body = build_request_body(parts, generation_config)

        start_time = time.time()
        async with session.post(
            url,
            json=body,
            params={"key": self.config.api_key},
            headers={"Content-Type": "application/json"},
        ) as response:
            if response.status < 200 or response.status >= 300:
                error_text = await response.text()
                logger.error(f"Gemini API error {response.status} from {model}: {error_text}")
                raise GeminiAPIError(response.status, response.reason or "", error_text)

            try:
                result = await response.json(content_type=None)
            except ValueError as e:
                logger.error(f"Gemini returned a non-JSON body from {model}: {e}")
                raise MalformedResponseError(model, "body is not JSON") from e

        if not isinstance(result, dict):
            logger.error(f"Gemini returned a non-object body from {model}")
            raise MalformedResponseError(model, f"expected a JSON object, got {type(result).__name__}")

        logger.info(f"Gemini request to {model} succeeded in {time.time() - start_time:.2f}s")
        return result
