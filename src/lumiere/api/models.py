"""Pydantic request and response models for the Lumière API.

FastAPI uses these models for request validation, serialisation and the
OpenAPI schema.

Models
------
DescribeRequest
    Payload for ``POST /api/describe`` — writes a scene description.
GalleryRequest
    Payload for ``POST /api/gallery`` — runs the two-step workflow.
GalleryResponse
    Body returned by ``POST /api/gallery``.

``image`` and ``theme_id`` are optional at the schema level so that the
route handlers can answer missing values with the same 400 messages as
unknown ones.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class DescribeRequest(BaseModel):
    """Request body for the ``POST /api/describe`` endpoint.

    Attributes:
        image: Product image as a data URI or raw base64 string.
        theme_id: Identifier of one of the five theme presets.
        product_name: Optional product name included in the prompt.
    """

    image: str | None = Field(
        default=None,
        description="Product image as a data URI or raw base64 string.",
    )
    theme_id: str | None = Field(
        default=None,
        description="Theme preset id (floral, minimal, luxury, fresh, botanical).",
    )
    product_name: str = Field(
        default="",
        description="Optional product name.",
    )


class GalleryRequest(BaseModel):
    """Request body for the ``POST /api/gallery`` endpoint.

    Attributes:
        image: Product image as a data URI or raw base64 string.
        theme_id: Identifier of one of the five theme presets.
        product_name: Optional product name included in every prompt.
        description: Scene description.  When omitted, one is synthesized
            from the image and theme first.
        elements: Optional free-text extra elements.
    """

    image: str | None = Field(
        default=None,
        description="Product image as a data URI or raw base64 string.",
    )
    theme_id: str | None = Field(
        default=None,
        description="Theme preset id (floral, minimal, luxury, fresh, botanical).",
    )
    product_name: str = Field(
        default="",
        description="Optional product name.",
    )
    description: str | None = Field(
        default=None,
        description="Scene description; synthesized when omitted.",
    )
    elements: str = Field(
        default="",
        description="Optional extra elements (e.g. 'rose petals, water droplets').",
    )


class DescribeResponse(BaseModel):
    """Body returned by ``POST /api/describe``."""

    description: str


class GalleryMeta(BaseModel):
    """Metadata about a gallery run.

    Attributes:
        theme_used: Display name of the applied theme.
        description_generated: Scene description used for every image.
    """

    theme_used: str
    description_generated: str


class SlotFailureModel(BaseModel):
    """A gallery slot that produced no image."""

    composition: str
    error: str


class GalleryResponse(BaseModel):
    """Body returned by ``POST /api/gallery``.

    ``gallery`` holds the successful images in composition order; failed
    slots are omitted from it and listed in ``failures``.
    """

    success: bool = True
    meta: GalleryMeta
    gallery: list[str]
    failures: list[SlotFailureModel] = Field(default_factory=list)
