"""Event handlers for the Lumière studio UI.

Handlers receive component values plus the session :class:`StudioState` and
return component updates plus the (mutated) state, following Gradio's
input/output conventions.  Generation handlers are coroutines so Gradio
awaits them on its event loop, where the five gallery requests run
concurrently.
"""

import asyncio
import base64
import logging
from pathlib import Path

import aiohttp
import gradio as gr
from PIL import Image

from lumiere.core.config import LumiereConfig, config
from lumiere.core.errors import LumiereError
from lumiere.core.gallery import FailurePolicy
from lumiere.core.image_payload import decode_image, encode_image, parse_image_payload
from lumiere.core.themes import get_theme

from .models import GenerationStatus, StudioState, download_filename
from .state import initialize_studio_state
from .validation import ValidationError, validate_can_describe, validate_can_generate

logger = logging.getLogger(__name__)

# Failures of a model call that are reported in the status message.
_CALL_ERRORS = (LumiereError, aiohttp.ClientError, asyncio.TimeoutError)
# Gallery runs can also fail while decoding the returned images.
_GALLERY_ERRORS = _CALL_ERRORS + (ValueError, OSError)


def upload_image(image: Image.Image | None, state: StudioState) -> StudioState:
    """Store an uploaded product image as a PNG data URI.

    Args:
        image: Uploaded image, or None when the upload was cleared
        state: UI state

    Returns:
        Updated state
    """
    if image is None:
        state.image = None
        logger.info("Product image cleared")
        return state

    state.image = encode_image(image)
    logger.info(f"Product image uploaded ({image.width}x{image.height})")
    return state


def set_product_name(name: str, state: StudioState) -> StudioState:
    state.product.name = name or ""
    return state


def set_description(description: str, state: StudioState) -> StudioState:
    state.product.description = description or ""
    return state


def set_elements(elements: str, state: StudioState) -> StudioState:
    state.product.elements = elements or ""
    return state


def select_theme(theme_id: str, state: StudioState) -> tuple[str, StudioState]:
    """Select a theme preset by id.

    Args:
        theme_id: Preset id from the theme radio
        state: UI state

    Returns:
        Tuple of (theme_hint_markdown, updated_state)
    """
    theme = get_theme(theme_id)
    state.product.theme_id = theme.id
    return f"**{theme.name}** · {theme.description}", state


async def auto_describe(state: StudioState) -> tuple[dict, str, StudioState]:
    """Ask the text model to write the scene description.

    Args:
        state: UI state

    Returns:
        Tuple of (description_textbox_update, status_message, updated_state)
    """
    try:
        validate_can_describe(state)
    except ValidationError as e:
        return gr.update(), f"❌ {e}", state

    state = initialize_studio_state(state)

    try:
        description = await state.synthesizer.synthesize(
            state.image, state.product.name, state.product.theme
        )
    except _CALL_ERRORS as e:
        message = str(e) or type(e).__name__
        logger.error(f"Auto description failed: {message}")
        return gr.update(), f"❌ Auto description failed: {message}", state

    state.product.description = description
    return gr.update(value=description), "✅ Scene description written", state


def _active_preview(state: StudioState) -> Image.Image | None:
    active = state.active_image
    return decode_image(active) if active else None


def begin_generation(state: StudioState) -> tuple[str, StudioState]:
    """Show the loading status before the gallery request starts.

    Invalid input leaves the status alone; :func:`generate_gallery` reports it.

    Args:
        state: UI state

    Returns:
        Tuple of (status_message, updated_state)
    """
    try:
        validate_can_generate(state)
    except ValidationError:
        return "", state

    state.status = GenerationStatus.LOADING
    return "⏳ Generating 5 variations...", state


async def generate_gallery(
    state: StudioState,
) -> tuple[list[Image.Image], Image.Image | None, str, StudioState]:
    """Generate the five-image gallery for the current product settings.

    Uses the all-or-nothing policy: if any composition fails, no images are
    shown and the error message is displayed.  Clicking "Generate" again
    retries the whole gallery.

    Args:
        state: UI state

    Returns:
        Tuple of (gallery_images, active_image, status_message, updated_state)
    """
    try:
        validate_can_generate(state)
    except ValidationError as e:
        return [], None, f"❌ {e}", state

    state = initialize_studio_state(state)
    state.reset_gallery()
    state.status = GenerationStatus.LOADING

    try:
        result = await state.gallery_generator.generate_gallery(
            state.image,
            state.product.name,
            state.product.theme,
            state.product.description,
            state.product.elements,
            policy=FailurePolicy.ALL_OR_NOTHING,
        )
        thumbnails = [decode_image(uri) for uri in result.images]
    except _GALLERY_ERRORS as e:
        logger.error(f"Gallery generation failed: {e}")
        state.status = GenerationStatus.ERROR
        state.error = str(e) or "Something went wrong. Please check your API key and try again."
        return [], None, f"❌ **Generation Failed**\n\n{state.error}", state

    state.gallery_images = result.images
    state.status = GenerationStatus.SUCCESS
    logger.info(f"Gallery generated: {len(result.images)} images")

    return (
        thumbnails,
        thumbnails[0] if thumbnails else None,
        f"✅ Generated {len(result.images)} variations",
        state,
    )


def select_thumbnail(
    evt: gr.SelectData, state: StudioState
) -> tuple[Image.Image | None, StudioState]:
    """Make the clicked thumbnail the active image.

    Args:
        evt: Gradio select event carrying the thumbnail index
        state: UI state

    Returns:
        Tuple of (active_image, updated_state)
    """
    if 0 <= evt.index < len(state.gallery_images):
        state.active_index = evt.index
    return _active_preview(state), state


def download_active(state: StudioState, settings: LumiereConfig | None = None) -> str | None:
    """Write the active gallery image to the outputs directory.

    Args:
        state: UI state
        settings: Configuration supplying ``outputs_dir`` (default: global config)

    Returns:
        Path of the written PNG file, or None when there is no active image
    """
    active = state.active_image
    if active is None:
        return None

    settings = settings or config
    path = Path(settings.outputs_dir) / download_filename(state.product.name, state.active_index)
    path.write_bytes(base64.b64decode(parse_image_payload(active).data))
    logger.info(f"Saved gallery image to {path}")
    return str(path)
