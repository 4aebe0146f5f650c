"""Five-image gallery generation.

:class:`GalleryGenerator` issues one image request per entry of
:data:`~lumiere.core.compositions.COMPOSITIONS`.  The five requests are
independent and run concurrently on the event loop; results come back
index-aligned to the composition table.

Failure Policy
--------------
How a failing slot affects the gallery is chosen explicitly by the caller
through :class:`FailurePolicy`:

``ALL_OR_NOTHING``
    Any failing slot rejects the whole operation.  All five requests run
    to completion (none are cancelled), then the exception of the first
    failing slot in composition order propagates to the caller.  No
    partial gallery is returned.  The Gradio studio uses this policy.

``PARTIAL``
    Every slot runs to completion.  Failed slots are dropped from
    ``GalleryResult.images`` and reported in ``GalleryResult.failures``;
    the surviving images keep their relative order.  The HTTP API uses
    this policy.

Slot Response Handling
----------------------
For each response the first part carrying inline image data wins and is
wrapped as ``data:image/png;base64,...``.  A response with text but no image
raises :class:`~lumiere.core.errors.TextInsteadOfImageError`; a response with
neither raises :class:`~lumiere.core.errors.NoImageDataError`.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass, field

import aiohttp

from lumiere.core.compositions import COMPOSITIONS, Composition
from lumiere.core.config import LumiereConfig
from lumiere.core.errors import (
    LumiereError,
    MissingAPIKeyError,
    NoImageDataError,
    TextInsteadOfImageError,
)
from lumiere.core.gemini_client import GeminiClient, response_parts
from lumiere.core.image_payload import ImagePayload, parse_image_payload, png_data_uri
from lumiere.core.prompt_builder import build_gallery_prompt

logger = logging.getLogger(__name__)

# Errors that count as a failed slot under the PARTIAL policy.  Anything
# else is a programming error and propagates.
_SLOT_ERRORS = (LumiereError, aiohttp.ClientError, asyncio.TimeoutError)


class FailurePolicy(str, enum.Enum):
    """How a failing composition affects the gallery."""

    ALL_OR_NOTHING = "all_or_nothing"
    PARTIAL = "partial"


@dataclass(frozen=True)
class SlotFailure:
    """A composition that produced no image.

    Attributes:
        composition: Id of the failed composition
        error: Error message
    """

    composition: str
    error: str


@dataclass
class GalleryResult:
    """Outcome of one gallery run.

    Attributes:
        images: Image data URIs in composition order
        failures: Slots that failed (always empty under ALL_OR_NOTHING)
    """

    images: list[str] = field(default_factory=list)
    failures: list[SlotFailure] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True when every composition produced an image."""
        return not self.failures and len(self.images) == len(COMPOSITIONS)


def extract_image_uri(result: dict) -> str:
    """Turn one image-model response into a PNG data URI.

    Args:
        result: Decoded ``generateContent`` response

    Returns:
        ``data:image/png;base64,<data>`` built from the first inline image part.

    Raises:
        TextInsteadOfImageError: If the response has text but no image
        NoImageDataError: If the response has neither
    """
    parts = response_parts(result)

    for part in parts:
        inline = part.get("inlineData") or part.get("inline_data")
        if isinstance(inline, dict) and inline.get("data"):
            return png_data_uri(inline["data"])

    for part in parts:
        if isinstance(part.get("text"), str) and part["text"]:
            raise TextInsteadOfImageError(part["text"])

    raise NoImageDataError()


class GalleryGenerator:
    """Generates the five-composition product gallery.

    Args:
        config: Configuration supplying the key and image model
        client: Transport to use; a new :class:`GeminiClient` when omitted
        compositions: Composition table, in gallery order
    """

    def __init__(
        self,
        config: LumiereConfig,
        client: GeminiClient | None = None,
        compositions: tuple[Composition, ...] = COMPOSITIONS,
    ) -> None:
        self.config = config
        self.client = client if client is not None else GeminiClient(config)
        self.compositions = compositions

    async def _generate_single(
        self,
        payload: ImagePayload,
        composition: Composition,
        product_name: str,
        theme_prompt: str,
        description: str,
        extra_elements: str,
    ) -> str:
        prompt = build_gallery_prompt(
            product_name=product_name,
            theme_prompt=theme_prompt,
            description=description,
            composition=composition,
            extra_elements=extra_elements,
        )
        result = await self.client.generate_content(
            self.config.image_model,
            [{"text": prompt}, payload.to_inline_part()],
        )
        try:
            return extract_image_uri(result)
        except TextInsteadOfImageError as e:
            logger.warning(f"Composition '{composition.id}' returned text instead of image: {e.text}")
            raise

    async def generate_gallery(
        self,
        image: str,
        product_name: str,
        theme_prompt: str,
        description: str,
        extra_elements: str = "",
        policy: FailurePolicy = FailurePolicy.ALL_OR_NOTHING,
    ) -> GalleryResult:
        """Generate one image per composition, concurrently.

        Args:
            image: Product image as a data URI or raw base64
            product_name: Product name
            theme_prompt: Background environment text of the selected theme
            description: Scene description paragraph
            extra_elements: Free-text extra elements
            policy: How failing slots are handled (see module docs)

        Returns:
            The gallery, index-aligned to the composition table.

        Raises:
            MissingAPIKeyError: If no API key is configured (before any request)
            LumiereError: Under ALL_OR_NOTHING, the error of the first failing
                slot in composition order
        """
        if not self.config.has_api_key:
            raise MissingAPIKeyError()

        payload = parse_image_payload(image)
        logger.info(
            f"Generating {len(self.compositions)} gallery images with "
            f"{self.config.image_model} (policy={policy.value})"
        )

        tasks = [
            self._generate_single(
                payload, composition, product_name, theme_prompt, description, extra_elements
            )
            for composition in self.compositions
        ]

        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        if policy is FailurePolicy.ALL_OR_NOTHING:
            # Every outcome is retrieved; the first failure in gallery order wins.
            for outcome in outcomes:
                if isinstance(outcome, BaseException):
                    raise outcome
            return GalleryResult(images=list(outcomes))

        gallery = GalleryResult()
        for composition, outcome in zip(self.compositions, outcomes):
            if isinstance(outcome, _SLOT_ERRORS):
                message = str(outcome) or type(outcome).__name__
                logger.warning(f"Composition '{composition.id}' failed: {message}")
                gallery.failures.append(SlotFailure(composition=composition.id, error=message))
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                gallery.images.append(outcome)

        logger.info(
            f"Gallery finished with {len(gallery.images)} images and "
            f"{len(gallery.failures)} failures"
        )
        return gallery
