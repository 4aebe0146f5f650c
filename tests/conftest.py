"""Shared pytest fixtures for Lumière tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest
from PIL import Image

from lumiere.core.compositions import COMPOSITIONS
from lumiere.core.config import LumiereConfig
from lumiere.core.image_payload import encode_image, parse_image_payload
from lumiere.ui.models import StudioState

_KEY_ENV_VARS = ("LUMIERE_API_KEY", "GOOGLE_API_KEY", "API_KEY")


# ---------------------------------------------------------------------------
# Gemini response builders.
# ---------------------------------------------------------------------------


def image_response(data: str) -> dict:
    """A generateContent response carrying one inline image."""
    return {
        "candidates": [
            {"content": {"parts": [{"inlineData": {"mimeType": "image/png", "data": data}}]}}
        ]
    }


def text_response(text: str) -> dict:
    """A generateContent response carrying only text."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def empty_response() -> dict:
    """A generateContent response with no usable parts."""
    return {"candidates": [{"content": {"parts": []}}]}


class FakeGeminiClient:
    """Records generateContent calls and answers with canned responses.

    ``responder`` receives ``(model, prompt_text)`` and returns the decoded
    JSON body, or raises to simulate a failed call.
    """

    def __init__(self, responder: Callable[[str, str], dict]):
        self.responder = responder
        self.calls: list[dict] = []
        self.closed = False

    async def generate_content(self, model, parts, generation_config=None):
        self.calls.append({"model": model, "parts": parts})
        prompt = next(p["text"] for p in parts if "text" in p)
        return self.responder(model, prompt)

    async def close(self):
        self.closed = True

    @property
    def prompts(self) -> list[str]:
        return [next(p["text"] for p in call["parts"] if "text" in p) for call in self.calls]


class FakeResponse:
    """Stand-in for an aiohttp response used as an async context manager."""

    def __init__(
        self,
        status: int,
        payload=None,
        text: str = "",
        reason: str = "OK",
        json_error: Exception | None = None,
    ):
        self.status = status
        self.reason = reason
        self._payload = payload
        self._text = text
        self._json_error = json_error

    async def json(self, content_type=None):
        if self._json_error is not None:
            raise self._json_error
        return self._payload

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    """Stand-in for ``aiohttp.ClientSession`` that records POSTs.

    ``response`` is either a :class:`FakeResponse` or a callable taking the
    JSON request body and returning one.
    """

    def __init__(self, response):
        self.response = response
        self.requests: list[dict] = []
        self.closed = False

    def post(self, url, json=None, params=None, headers=None):
        self.requests.append({"url": url, "json": json, "params": params, "headers": headers})
        if callable(self.response):
            return self.response(json)
        return self.response

    async def close(self):
        self.closed = True


def composition_for(prompt: str) -> str:
    """Return the id of the composition whose directive appears in ``prompt``."""
    return next(c.id for c in COMPOSITIONS if c.directive in prompt)


# ---------------------------------------------------------------------------
# Fixtures.
# ---------------------------------------------------------------------------


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove API key variables so tests control the credential."""
    for name in _KEY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def test_config(temp_dir: Path, clean_env) -> LumiereConfig:
    """Create a test configuration with an API key and temporary outputs."""
    return LumiereConfig(
        api_key="test-key",
        outputs_dir=temp_dir / "outputs",
        _env_file=None,
    )


@pytest.fixture
def no_key_config(temp_dir: Path, clean_env) -> LumiereConfig:
    """Create a test configuration without an API key."""
    return LumiereConfig(
        api_key=None,
        outputs_dir=temp_dir / "outputs",
        _env_file=None,
    )


@pytest.fixture
def png_data_uri() -> str:
    """A real 8x8 PNG encoded as a data URI."""
    return encode_image(Image.new("RGB", (8, 8), color=(240, 180, 190)))


@pytest.fixture
def png_base64(png_data_uri: str) -> str:
    """Base64 payload of :func:`png_data_uri`."""
    return parse_image_payload(png_data_uri).data


@pytest.fixture
def studio_client(png_base64: str) -> FakeGeminiClient:
    """Fake client: text model writes a description, image model returns a PNG."""

    def respond(model: str, prompt: str) -> dict:
        if "image" in model:
            return image_response(png_base64)
        return text_response("  Rose petals drift over a pale marble plinth in soft light.  ")

    return FakeGeminiClient(respond)


@pytest.fixture
def studio_state() -> StudioState:
    """Empty studio state for testing."""
    return StudioState()
