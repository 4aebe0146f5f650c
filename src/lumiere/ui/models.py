"""Data models for the Lumière studio UI state."""

import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from lumiere.core.themes import DEFAULT_THEME_ID, get_theme

logger = logging.getLogger(__name__)


class GenerationStatus(str, enum.Enum):
    """Lifecycle of the most recent gallery request."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class ProductConfig:
    """User-editable product settings for one studio session.

    Created with defaults when the session starts, mutated by UI events, and
    never persisted.  The theme is referenced by preset id; :attr:`theme`
    resolves the prompt text sent to the model.
    """

    name: str = ""
    theme_id: str = DEFAULT_THEME_ID
    description: str = ""
    elements: str = ""

    @property
    def theme(self) -> str:
        """Prompt text of the selected theme preset."""
        return get_theme(self.theme_id).prompt


@dataclass
class StudioState:
    """Session state for the Gradio studio.

    Each browser session gets its own StudioState instance.

    Attributes
    ----------
    product : ProductConfig
        Current product settings
    image : str | None
        Uploaded product image as a data URI
    gallery_images : list[str]
        Generated images (data URIs) in composition order
    active_index : int
        Index of the image shown in the main viewer
    status : GenerationStatus
        State of the last gallery request
    error : str | None
        Message of the last failure
    synthesizer : Any | None
        DescriptionSynthesizer instance
    gallery_generator : Any | None
        GalleryGenerator instance
    """

    product: ProductConfig = field(default_factory=ProductConfig)
    image: str | None = None

    gallery_images: list[str] = field(default_factory=list)
    active_index: int = 0
    status: GenerationStatus = GenerationStatus.IDLE
    error: str | None = None

    # Core components
    synthesizer: Any | None = None  # DescriptionSynthesizer instance
    gallery_generator: Any | None = None  # GalleryGenerator instance

    def is_initialized(self) -> bool:
        """Check if the generation components have been created."""
        return self.synthesizer is not None and self.gallery_generator is not None

    @property
    def has_image(self) -> bool:
        return self.image is not None

    @property
    def active_image(self) -> str | None:
        """The gallery image currently shown, if any."""
        if 0 <= self.active_index < len(self.gallery_images):
            return self.gallery_images[self.active_index]
        return None

    def reset_gallery(self) -> None:
        """Clear the gallery before a new run."""
        self.gallery_images = []
        self.active_index = 0
        self.error = None

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"StudioState(initialized={self.is_initialized()}, "
            f"theme={self.product.theme_id}, "
            f"images={len(self.gallery_images)}, status={self.status.value})"
        )


def download_filename(product_name: str, index: int) -> str:
    """Build the download name for a gallery image.

    Args:
        product_name: Product name; whitespace runs become dashes
        index: Zero-based gallery index

    Returns:
        ``lumiere-<slug>-<n>.png`` with a one-based ``n``.
    """
    slug = re.sub(r"\s+", "-", product_name.strip()).lower()
    # Path separators would escape the outputs directory.
    slug = slug.replace("/", "-").replace("\\", "-")
    return f"lumiere-{slug or 'product'}-{index + 1}.png"
