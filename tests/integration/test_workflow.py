"""End-to-end tests of the describe-then-generate workflow.

These run the real synthesizer, prompt builder, gallery generator and
response parsing against a FakeGeminiClient standing in for the network.
"""

from __future__ import annotations

import re

import pytest
from conftest import FakeGeminiClient, image_response, text_response

from lumiere.core.errors import MissingAPIKeyError
from lumiere.core.gallery import FailurePolicy, GalleryGenerator
from lumiere.core.synthesizer import DescriptionSynthesizer
from lumiere.core.themes import get_theme

IMAGE = "data:image/png;base64,AAAA"

_DESCRIPTION = (
    "A serene studio bathed in soft morning light, where blush pink roses and scattered "
    "petals frame a polished white marble plinth. Delicate dew glistens on the blooms, "
    "while a sheer silk backdrop diffuses the glow into a romantic haze."
)


def _respond(model, prompt):
    if "image" in model:
        return image_response("iVBORw0KGgo=")
    return text_response(_DESCRIPTION)


class TestWorkflow:
    """Test the two-step studio workflow."""

    @pytest.mark.asyncio
    async def test_floral_test_serum(self, test_config):
        client = FakeGeminiClient(_respond)
        theme = get_theme("floral")

        description = await DescriptionSynthesizer(test_config, client).synthesize(
            IMAGE, "Test Serum", theme.prompt
        )
        result = await GalleryGenerator(test_config, client).generate_gallery(
            IMAGE, "Test Serum", theme.prompt, description, "",
            policy=FailurePolicy.ALL_OR_NOTHING,
        )

        assert description
        assert len(description.split()) <= 70
        assert len(result.images) == 5
        assert all(re.match(r"^data:image/png;base64,.+", uri) for uri in result.images)
        # The synthesized description reaches every image prompt.
        assert all(_DESCRIPTION in prompt for prompt in client.prompts[1:])

    @pytest.mark.asyncio
    async def test_missing_key_rejects_both_operations(self, no_key_config):
        client = FakeGeminiClient(_respond)
        theme = get_theme("floral")

        with pytest.raises(MissingAPIKeyError, match="Missing API Key"):
            await DescriptionSynthesizer(no_key_config, client).synthesize(
                IMAGE, "Test Serum", theme.prompt
            )
        with pytest.raises(MissingAPIKeyError, match="Missing API Key"):
            await GalleryGenerator(no_key_config, client).generate_gallery(
                IMAGE, "Test Serum", theme.prompt, "", ""
            )

        assert client.calls == []
