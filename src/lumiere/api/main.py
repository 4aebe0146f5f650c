"""Lumière Product Studio — FastAPI Application.

This module defines the FastAPI ``app`` instance, the REST routes that
expose the generation workflow, and the ``main()`` CLI function that
launches the uvicorn server.

Architecture
------------
The application is stateless apart from one shared
:class:`~lumiere.core.gemini_client.GeminiClient` created in the lifespan
handler and closed on shutdown.  Nothing is persisted: generated images are
returned inline as data URIs.

The gallery endpoint uses the **partial-success** failure policy: slots
that fail are omitted from ``gallery`` and reported in ``failures`` while
the response is still 200.  Errors outside the per-slot handling (missing
API key, failed description synthesis, transport errors, timeouts) become
a 500 with ``{"error": "Internal Server Error", "details": ...}``.  Input
problems are a 400 with ``{"error": ...}``.

Endpoints
---------
========  ==================  =========================================
Method    Path                Purpose
========  ==================  =========================================
GET       ``/api/config``     Version, theme presets, compositions
POST      ``/api/describe``   Write a scene description
POST      ``/api/gallery``    Description (if needed) + five images
========  ==================  =========================================

Usage
-----
CLI (installed entry point)::

    lumiere

Direct invocation::

    python -m lumiere.api.main
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiohttp
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lumiere import __version__
from lumiere.api.models import (
    DescribeRequest,
    DescribeResponse,
    GalleryMeta,
    GalleryRequest,
    GalleryResponse,
    SlotFailureModel,
)
from lumiere.core.compositions import COMPOSITIONS
from lumiere.core.config import LumiereConfig, config
from lumiere.core.errors import LumiereError
from lumiere.core.gallery import FailurePolicy, GalleryGenerator
from lumiere.core.gemini_client import GeminiClient
from lumiere.core.synthesizer import DescriptionSynthesizer
from lumiere.core.themes import THEME_PRESETS, THEMES_BY_ID, ThemePreset, theme_ids

logger = logging.getLogger(__name__)

MISSING_IMAGE_MESSAGE = "Missing 'image' (base64 string)"
INVALID_THEME_MESSAGE = (
    f"Invalid or missing 'theme_id'. Available: {', '.join(theme_ids())}"
)

# ---------------------------------------------------------------------------
# Application lifecycle: Gemini client setup and teardown.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the shared Gemini client on startup and close it on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    app.state.settings = config
    app.state.gemini_client = GeminiClient(config)
    if not config.has_api_key:
        logger.warning("No Gemini API key configured - generation requests will fail")
    logger.info("GeminiClient initialised.")

    yield

    await app.state.gemini_client.close()
    logger.info("GeminiClient closed on shutdown.")


app = FastAPI(
    title="Lumière Product Studio",
    description="Turns one product photo into a five-image marketing gallery.",
    version=__version__,
    lifespan=lifespan,
)

# The gallery endpoint is meant to be called from other sites.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)


# ---------------------------------------------------------------------------
# Dependencies.
# ---------------------------------------------------------------------------


def get_settings(request: Request) -> LumiereConfig:
    """Return the configuration attached to the running application."""
    return request.app.state.settings


def get_gemini_client(request: Request) -> GeminiClient:
    """Return the shared Gemini client attached to the running application."""
    return request.app.state.gemini_client


# ---------------------------------------------------------------------------
# Error handling.
# ---------------------------------------------------------------------------


class BadRequestError(Exception):
    """A request is missing its image or names an unknown theme."""


@app.exception_handler(BadRequestError)
async def bad_request_handler(request: Request, exc: BadRequestError) -> JSONResponse:
    """Turn input problems into a 400 with an ``error`` message."""
    logger.warning(f"{request.url.path} rejected: {exc}")
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(LumiereError)
@app.exception_handler(aiohttp.ClientError)
@app.exception_handler(asyncio.TimeoutError)
async def generation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Turn workflow, transport and timeout errors into a 500 JSON body."""
    details = str(exc) or type(exc).__name__
    logger.error(f"{request.url.path} failed: {details}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "details": details},
    )


def _require_inputs(image: str | None, theme_id: str | None) -> ThemePreset:
    """Validate the shared ``image`` / ``theme_id`` fields.

    Returns:
        The selected theme preset.

    Raises:
        BadRequestError: For a missing image or unknown theme.
    """
    if not image:
        raise BadRequestError(MISSING_IMAGE_MESSAGE)
    if not theme_id or theme_id not in THEMES_BY_ID:
        raise BadRequestError(INVALID_THEME_MESSAGE)
    return THEMES_BY_ID[theme_id]


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/config")
async def get_config() -> dict:
    """Return the theme presets and composition table for a frontend.

    Returns:
        Dictionary with keys ``version``, ``themes`` and ``compositions``.
    """
    return {
        "version": __version__,
        "themes": [
            {"id": t.id, "name": t.name, "description": t.description} for t in THEME_PRESETS
        ],
        "compositions": [{"id": c.id, "directive": c.directive} for c in COMPOSITIONS],
    }


@app.post("/api/describe", response_model=DescribeResponse)
async def describe(
    req: DescribeRequest,
    settings: LumiereConfig = Depends(get_settings),
    client: GeminiClient = Depends(get_gemini_client),
) -> DescribeResponse:
    """Write a scene description for a product image and theme.

    Raises:
        BadRequestError: 400 for a missing image or unknown theme.
    """
    theme = _require_inputs(req.image, req.theme_id)
    synthesizer = DescriptionSynthesizer(settings, client)
    description = await synthesizer.synthesize(req.image, req.product_name, theme.prompt)
    return DescribeResponse(description=description)


@app.post("/api/gallery", response_model=GalleryResponse)
async def generate_gallery(
    req: GalleryRequest,
    settings: LumiereConfig = Depends(get_settings),
    client: GeminiClient = Depends(get_gemini_client),
) -> GalleryResponse:
    """Run the two-step workflow and return whatever images succeeded.

    1. Validates ``image`` and ``theme_id``.
    2. Synthesizes a scene description unless the request supplies one.
    3. Generates the five compositions concurrently with the partial-success
       policy.

    Raises:
        BadRequestError: 400 for a missing image or unknown theme.
    """
    theme = _require_inputs(req.image, req.theme_id)

    description = (req.description or "").strip()
    if not description:
        synthesizer = DescriptionSynthesizer(settings, client)
        description = await synthesizer.synthesize(req.image, req.product_name, theme.prompt)

    generator = GalleryGenerator(settings, client)
    result = await generator.generate_gallery(
        req.image,
        req.product_name,
        theme.prompt,
        description,
        req.elements,
        policy=FailurePolicy.PARTIAL,
    )

    return GalleryResponse(
        success=True,
        meta=GalleryMeta(theme_used=theme.name, description_generated=description),
        gallery=result.images,
        failures=[
            SlotFailureModel(composition=f.composition, error=f.error) for f in result.failures
        ],
    )


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Host and port come from :data:`~lumiere.core.config.config`
    (``LUMIERE_SERVER_HOST`` / ``LUMIERE_SERVER_PORT``).
    """
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "lumiere.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
