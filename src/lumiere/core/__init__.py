"""Core generation workflow for the Lumière product studio.

- **LumiereConfig**: Configuration management using Pydantic Settings
- **GeminiClient**: Async transport for the Gemini ``generateContent`` API
- **DescriptionSynthesizer**: Writes a scene paragraph for a product and theme
- **GalleryGenerator**: Generates the five-composition gallery concurrently
- **parse_image_payload**: Splits data URIs into mime type and payload
- **THEME_PRESETS** / **COMPOSITIONS**: Fixed lookup tables

Usage Example
-------------
    from lumiere.core import (
        DescriptionSynthesizer,
        FailurePolicy,
        GalleryGenerator,
        GeminiClient,
        LumiereConfig,
        get_theme,
    )

    settings = LumiereConfig()
    async with GeminiClient(settings) as client:
        theme = get_theme("floral")
        description = await DescriptionSynthesizer(settings, client).synthesize(
            image, "Test Serum", theme.prompt
        )
        gallery = await GalleryGenerator(settings, client).generate_gallery(
            image, "Test Serum", theme.prompt, description,
            policy=FailurePolicy.ALL_OR_NOTHING,
        )
"""

from lumiere.core.compositions import COMPOSITIONS, Composition
from lumiere.core.config import LumiereConfig, config
from lumiere.core.errors import (
    GeminiAPIError,
    LumiereError,
    MalformedResponseError,
    MissingAPIKeyError,
    NoImageDataError,
    TextInsteadOfImageError,
)
from lumiere.core.gallery import FailurePolicy, GalleryGenerator, GalleryResult, SlotFailure
from lumiere.core.gemini_client import GeminiClient
from lumiere.core.image_payload import ImagePayload, parse_image_payload
from lumiere.core.synthesizer import FALLBACK_DESCRIPTION, DescriptionSynthesizer
from lumiere.core.themes import THEME_PRESETS, ThemePreset, get_theme

__all__ = [
    "COMPOSITIONS",
    "Composition",
    "DescriptionSynthesizer",
    "FALLBACK_DESCRIPTION",
    "FailurePolicy",
    "GalleryGenerator",
    "GalleryResult",
    "GeminiAPIError",
    "GeminiClient",
    "ImagePayload",
    "LumiereConfig",
    "LumiereError",
    "MalformedResponseError",
    "MissingAPIKeyError",
    "NoImageDataError",
    "SlotFailure",
    "THEME_PRESETS",
    "TextInsteadOfImageError",
    "ThemePreset",
    "config",
    "get_theme",
    "parse_image_payload",
]
