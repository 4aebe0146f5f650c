"""Lumière - AI product-photo studio powered by Gemini."""

__version__ = "0.1.0"

from lumiere.core.config import LumiereConfig, config
from lumiere.core.gallery import FailurePolicy, GalleryGenerator
from lumiere.core.synthesizer import DescriptionSynthesizer

__all__ = [
    "DescriptionSynthesizer",
    "FailurePolicy",
    "GalleryGenerator",
    "LumiereConfig",
    "config",
]
