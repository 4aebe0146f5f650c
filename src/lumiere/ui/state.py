"""State management utilities for the Lumière studio UI.

This module handles lazy creation of the generation components held in a
session's :class:`StudioState`.  Every session built from the global
configuration shares one :class:`GeminiClient`, so the studio holds a single
HTTP session that :func:`close_shared_client` closes on shutdown.
"""

import logging

from lumiere.core.config import LumiereConfig, config
from lumiere.core.gallery import GalleryGenerator
from lumiere.core.gemini_client import GeminiClient
from lumiere.core.synthesizer import DescriptionSynthesizer

from .models import StudioState

logger = logging.getLogger(__name__)

_shared_client: GeminiClient | None = None


def get_shared_client() -> GeminiClient:
    """Return the studio-wide client, creating it on first use."""
    global _shared_client
    if _shared_client is None:
        logger.info("Creating shared GeminiClient")
        _shared_client = GeminiClient(config)
    return _shared_client


async def close_shared_client() -> None:
    """Close the studio-wide client if one was created."""
    global _shared_client
    if _shared_client is not None:
        await _shared_client.close()
        logger.info("Shared GeminiClient closed")
        _shared_client = None


def initialize_studio_state(
    state: StudioState | None = None,
    settings: LumiereConfig | None = None,
    client: GeminiClient | None = None,
) -> StudioState:
    """Initialize or ensure studio state is ready.

    Both components use the same client so the five gallery requests and the
    description request reuse a single HTTP session.

    Args:
        state: Existing StudioState or None
        settings: Configuration to build components from (default: global config)
        client: Client to use (default: the shared client for the global
            config, or a new client for explicit settings)

    Returns:
        Initialized StudioState instance
    """
    if state is None:
        logger.info("Creating new StudioState")
        state = StudioState()

    if state.is_initialized():
        logger.debug("StudioState already initialized")
        return state

    if client is None:
        client = get_shared_client() if settings is None else GeminiClient(settings)
    settings = settings or config
    if not settings.has_api_key:
        logger.warning("No Gemini API key configured - generation will fail with 'Missing API Key'")

    state.synthesizer = DescriptionSynthesizer(settings, client)
    state.gallery_generator = GalleryGenerator(settings, client)

    logger.info(f"StudioState initialization complete: {state}")
    return state
