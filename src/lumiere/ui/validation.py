"""Validation utilities for studio UI inputs."""

import logging

from lumiere.core.themes import THEMES_BY_ID

from .models import StudioState

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """User-friendly validation error.

    The message is intended to be displayed directly to the user.
    """

    pass


def validate_can_describe(state: StudioState) -> None:
    """Check that a scene description can be requested.

    Raises:
        ValidationError: If no product image has been uploaded
    """
    if not state.has_image:
        raise ValidationError("Upload a product image first")


def validate_can_generate(state: StudioState) -> None:
    """Check that a gallery can be generated.

    Requires an uploaded image, a product name and a known theme.

    Raises:
        ValidationError: If any requirement is not met
    """
    if not state.has_image:
        raise ValidationError("Upload a product image first")

    if not state.product.name.strip():
        raise ValidationError("Enter a product name")

    if state.product.theme_id not in THEMES_BY_ID:
        logger.warning(f"Unknown theme id in state: {state.product.theme_id}")
        raise ValidationError(f"Unknown theme: {state.product.theme_id}")
