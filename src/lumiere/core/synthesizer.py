"""Scene-description synthesis.

Given the product image and a theme, :class:`DescriptionSynthesizer` asks the
text model to act as a creative director and write one paragraph describing
the background scene.  The studio offers this as the optional "Auto-Write
with AI" step; the HTTP API runs it automatically when the caller does not
supply a description.
"""

from __future__ import annotations

import logging

from lumiere.core.config import LumiereConfig
from lumiere.core.errors import MissingAPIKeyError
from lumiere.core.gemini_client import GeminiClient, response_parts
from lumiere.core.image_payload import parse_image_payload
from lumiere.core.prompt_builder import build_description_prompt

logger = logging.getLogger(__name__)

FALLBACK_DESCRIPTION = "A luxury studio setting with soft lighting."


def extract_text(result: dict) -> str | None:
    """Return the trimmed first text part of the first candidate, if any."""
    for part in response_parts(result):
        text = part.get("text")
        if text and text.strip():
            return text.strip()
    return None


class DescriptionSynthesizer:
    """Writes a scene paragraph for a product image and theme.

    Args:
        config: Configuration supplying the key and text model
        client: Transport to use; a new :class:`GeminiClient` when omitted
    """

    def __init__(self, config: LumiereConfig, client: GeminiClient | None = None) -> None:
        self.config = config
        self.client = client if client is not None else GeminiClient(config)

    async def synthesize(self, image: str, product_name: str, theme: str) -> str:
        """Generate a scene description.

        Args:
            image: Product image as a data URI or raw base64
            product_name: Product name (may be empty)
            theme: Theme prompt text

        Returns:
            The model's paragraph, or :data:`FALLBACK_DESCRIPTION` when the
            response contains no text.

        Raises:
            MissingAPIKeyError: If no API key is configured
            GeminiAPIError: If the text model call fails
        """
        if not self.config.has_api_key:
            raise MissingAPIKeyError()

        payload = parse_image_payload(image)
        prompt = build_description_prompt(product_name, theme)

        logger.info(f"Requesting scene description from {self.config.text_model}")
        result = await self.client.generate_content(
            self.config.text_model,
            [{"text": prompt}, payload.to_inline_part()],
        )

        text = extract_text(result)
        if text is None:
            logger.warning("Description response contained no text, using fallback")
            return FALLBACK_DESCRIPTION
        return text
