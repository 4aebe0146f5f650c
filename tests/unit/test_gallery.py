"""Tests for lumiere.core.gallery — concurrent five-composition generation."""

from __future__ import annotations

import asyncio
import json

import pytest
from conftest import (
    FakeGeminiClient,
    FakeResponse,
    FakeSession,
    composition_for,
    empty_response,
    image_response,
    text_response,
)

from lumiere.core.compositions import COMPOSITIONS
from lumiere.core.errors import (
    GeminiAPIError,
    MalformedResponseError,
    MissingAPIKeyError,
    NoImageDataError,
    TextInsteadOfImageError,
)
from lumiere.core.gallery import (
    FailurePolicy,
    GalleryGenerator,
    GalleryResult,
    SlotFailure,
    extract_image_uri,
)
from lumiere.core.gemini_client import GeminiClient

IMAGE = "data:image/png;base64,AAAA"


def _per_composition(responses: dict[str, dict], default: dict | None = None):
    """Responder that picks a response by composition id."""

    def respond(model, prompt):
        comp_id = composition_for(prompt)
        response = responses.get(comp_id, default or image_response(f"img-{comp_id}"))
        if isinstance(response, Exception):
            raise response
        return response

    return respond


async def _generate(config, client, policy=FailurePolicy.ALL_OR_NOTHING) -> GalleryResult:
    generator = GalleryGenerator(config, client)
    return await generator.generate_gallery(
        IMAGE, "Test Serum", "surrounded by roses", "Petals on marble.", "dew", policy=policy
    )


class TestExtractImageUri:
    """Test extract_image_uri."""

    def test_inline_image(self):
        assert extract_image_uri(image_response("QUJD")) == "data:image/png;base64,QUJD"

    def test_snake_case_inline_data(self):
        result = {"candidates": [{"content": {"parts": [{"inline_data": {"data": "QUJD"}}]}}]}
        assert extract_image_uri(result) == "data:image/png;base64,QUJD"

    def test_image_part_wins_over_earlier_text(self):
        result = {
            "candidates": [
                {
                    "content": {
                        "parts": [
                            {"text": "Here is your image"},
                            {"inlineData": {"mimeType": "image/png", "data": "QUJD"}},
                        ]
                    }
                }
            ]
        }
        assert extract_image_uri(result) == "data:image/png;base64,QUJD"

    def test_text_only_raises_with_text(self):
        with pytest.raises(TextInsteadOfImageError, match="I cannot do that") as exc_info:
            extract_image_uri(text_response("I cannot do that"))
        assert exc_info.value.text == "I cannot do that"

    def test_empty_raises_no_image(self):
        with pytest.raises(NoImageDataError, match="No image data found in response"):
            extract_image_uri(empty_response())

    def test_no_candidates_raises_no_image(self):
        with pytest.raises(NoImageDataError):
            extract_image_uri({})

    def test_non_object_inline_data_is_ignored(self):
        result = {"candidates": [{"content": {"parts": [{"inlineData": "QUJD"}]}}]}
        with pytest.raises(NoImageDataError):
            extract_image_uri(result)


class TestGenerateGallery:
    """Test GalleryGenerator.generate_gallery."""

    @pytest.mark.asyncio
    async def test_issues_five_requests_one_per_composition(self, test_config):
        client = FakeGeminiClient(_per_composition({}))

        await _generate(test_config, client)

        assert len(client.calls) == 5
        for composition in COMPOSITIONS:
            matching = [p for p in client.prompts if composition.directive in p]
            assert len(matching) == 1

    @pytest.mark.asyncio
    async def test_requests_use_image_model_and_payload(self, test_config):
        client = FakeGeminiClient(_per_composition({}))

        await _generate(test_config, client)

        for call in client.calls:
            assert call["model"] == "gemini-2.5-flash-image"
            assert call["parts"][1] == {"inlineData": {"mimeType": "image/png", "data": "AAAA"}}

    @pytest.mark.asyncio
    async def test_results_are_index_aligned(self, test_config):
        client = FakeGeminiClient(_per_composition({}))

        result = await _generate(test_config, client)

        assert result.images == [f"data:image/png;base64,img-{c.id}" for c in COMPOSITIONS]
        assert result.failures == []
        assert result.is_complete

    @pytest.mark.asyncio
    async def test_requests_are_concurrent(self, test_config):
        """All five requests are in flight before any of them completes."""
        in_flight = 0
        peak = 0

        class SlowClient:
            async def generate_content(self, model, parts, generation_config=None):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return image_response("QUJD")

        await _generate(test_config, SlowClient())

        assert peak == 5

    @pytest.mark.asyncio
    async def test_all_or_nothing_rejects_with_model_text(self, test_config):
        client = FakeGeminiClient(
            _per_composition({"macro": text_response("Please simplify the description")})
        )

        with pytest.raises(TextInsteadOfImageError, match="Please simplify the description"):
            await _generate(test_config, client)

    @pytest.mark.asyncio
    async def test_all_or_nothing_rejects_on_http_error(self, test_config):
        client = FakeGeminiClient(
            _per_composition({"hero": GeminiAPIError(429, "Too Many Requests", "quota")})
        )

        with pytest.raises(GeminiAPIError, match="429"):
            await _generate(test_config, client)

    @pytest.mark.asyncio
    async def test_partial_omits_failed_slot(self, test_config):
        client = FakeGeminiClient(
            _per_composition({"macro": text_response("Please simplify the description")})
        )

        result = await _generate(test_config, client, FailurePolicy.PARTIAL)

        assert len(result.images) == 4
        assert "data:image/png;base64,img-macro" not in result.images
        assert result.images[0] == "data:image/png;base64,img-hero"
        assert result.images[-1] == "data:image/png;base64,img-lifestyle"
        assert len(result.failures) == 1
        assert result.failures[0].composition == "macro"
        assert "Please simplify the description" in result.failures[0].error
        assert not result.is_complete

    @pytest.mark.asyncio
    async def test_partial_reports_every_failure_kind(self, test_config):
        client = FakeGeminiClient(
            _per_composition(
                {
                    "hero": empty_response(),
                    "flat_lay": GeminiAPIError(500, "Internal Server Error", "oops"),
                    "lifestyle": asyncio.TimeoutError(),
                }
            )
        )

        result = await _generate(test_config, client, FailurePolicy.PARTIAL)

        assert result.images == [
            "data:image/png;base64,img-three_quarter",
            "data:image/png;base64,img-macro",
        ]
        failures = {f.composition: f.error for f in result.failures}
        assert failures["hero"] == "No image data found in response"
        assert "500" in failures["flat_lay"]
        assert failures["lifestyle"] == "TimeoutError"

    @pytest.mark.asyncio
    async def test_partial_all_failed_returns_empty_gallery(self, test_config):
        client = FakeGeminiClient(lambda model, prompt: empty_response())

        result = await _generate(test_config, client, FailurePolicy.PARTIAL)

        assert result.images == []
        assert len(result.failures) == 5

    @pytest.mark.asyncio
    async def test_partial_propagates_programming_errors(self, test_config):
        client = FakeGeminiClient(_per_composition({"hero": RuntimeError("bug")}))

        with pytest.raises(RuntimeError, match="bug"):
            await _generate(test_config, client, FailurePolicy.PARTIAL)

    @pytest.mark.asyncio
    async def test_missing_key_raises_without_calls(self, no_key_config):
        client = FakeGeminiClient(_per_composition({}))

        with pytest.raises(MissingAPIKeyError, match="Missing API Key"):
            await _generate(no_key_config, client)

        assert client.calls == []

    def test_slot_failure_is_frozen(self):
        failure = SlotFailure(composition="hero", error="x")
        with pytest.raises(AttributeError):
            failure.error = "y"

    @pytest.mark.asyncio
    async def test_all_or_nothing_raises_first_failure_in_gallery_order(self, test_config):
        class MixedClient(FakeGeminiClient):
            async def generate_content(self, model, parts, generation_config=None):
                comp_id = composition_for(parts[0]["text"])
                if comp_id == "hero":
                    await asyncio.sleep(0.02)
                    raise GeminiAPIError(500, "Internal Server Error", "hero broke")
                if comp_id == "macro":
                    raise TextInsteadOfImageError("macro refused")
                return image_response("QUJD")

        with pytest.raises(GeminiAPIError, match="hero broke"):
            await _generate(test_config, MixedClient(lambda model, prompt: {}))

    @pytest.mark.asyncio
    async def test_all_or_nothing_waits_for_every_slot(self, test_config):
        finished = []

        class TrackingClient(FakeGeminiClient):
            async def generate_content(self, model, parts, generation_config=None):
                comp_id = composition_for(parts[0]["text"])
                if comp_id == "hero":
                    raise TextInsteadOfImageError("no")
                await asyncio.sleep(0.01)
                finished.append(comp_id)
                return image_response("QUJD")

        with pytest.raises(TextInsteadOfImageError):
            await _generate(test_config, TrackingClient(lambda model, prompt: {}))

        assert sorted(finished) == sorted(c.id for c in COMPOSITIONS[1:])


class TestGalleryOverHttp:
    """Gallery runs through a real GeminiClient over a fake aiohttp session."""

    @staticmethod
    def _session(bad_composition: str) -> FakeSession:
        def respond(body):
            prompt = body["contents"][0]["parts"][0]["text"]
            comp_id = composition_for(prompt)
            if comp_id == bad_composition:
                return FakeResponse(
                    200, json_error=json.JSONDecodeError("Expecting value", "<html>", 0)
                )
            return FakeResponse(200, payload=image_response(f"img-{comp_id}"))

        return FakeSession(respond)

    @pytest.mark.asyncio
    async def test_partial_drops_slot_with_non_json_body(self, test_config):
        client = GeminiClient(test_config)
        client._session = self._session("macro")

        result = await _generate(test_config, client, FailurePolicy.PARTIAL)

        assert result.images == [
            "data:image/png;base64,img-hero",
            "data:image/png;base64,img-flat_lay",
            "data:image/png;base64,img-three_quarter",
            "data:image/png;base64,img-lifestyle",
        ]
        assert [f.composition for f in result.failures] == ["macro"]
        assert "No image data found in response" in result.failures[0].error

    @pytest.mark.asyncio
    async def test_all_or_nothing_rejects_non_json_body(self, test_config):
        client = GeminiClient(test_config)
        client._session = self._session("hero")

        with pytest.raises(MalformedResponseError):
            await _generate(test_config, client)
