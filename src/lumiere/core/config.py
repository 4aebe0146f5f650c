"""Configuration management for the Lumière product studio.

This module provides centralized configuration management using Pydantic
Settings.  Configuration is loaded from environment variables with the
``LUMIERE_`` prefix, allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Keyword arguments passed to :class:`LumiereConfig`
2. Environment variables (LUMIERE_* prefix)
3. .env file in the project root
4. Default values defined in LumiereConfig

The Gemini credential is the one exception to the prefix rule: it is also
read from ``GOOGLE_API_KEY`` or ``API_KEY`` so that keys exported for other
Google tooling work unchanged.

Example .env file:
    LUMIERE_API_KEY=AIza...
    LUMIERE_TEXT_MODEL=gemini-2.5-flash
    LUMIERE_IMAGE_MODEL=gemini-2.5-flash-image
    LUMIERE_REQUEST_TIMEOUT=120

Explicit Configuration
----------------------
A global ``config`` instance exists for the entry points (``lumiere`` and
``lumiere-studio``).  Library code never reads it implicitly: the
synthesizer, gallery generator and Gemini client all receive a
:class:`LumiereConfig` at construction time.

Usage Example
-------------
    from lumiere.core.config import LumiereConfig
    from lumiere.core.synthesizer import DescriptionSynthesizer

    settings = LumiereConfig(api_key="AIza...")
    synthesizer = DescriptionSynthesizer(settings)
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LumiereConfig(BaseSettings):
    """Main configuration for the Lumière product studio.

    Attributes
    ----------
    Gemini Settings:
        api_key : str | None
            Gemini API key, sent as the ``key`` query parameter.  ``None``
            makes every generation call fail with ``MissingAPIKeyError``.
        base_url : str
            Base URL of the ``models`` collection of the Generative Language API
        text_model : str
            Model used for scene-description synthesis
        image_model : str
            Model used for gallery image generation
        request_timeout : float
            Total aiohttp timeout per request, in seconds

    Paths:
        outputs_dir : Path
            Directory where downloaded gallery images are written

    Server Settings:
        server_host : str
            Bind address for the FastAPI server
        server_port : int
            Port for the FastAPI server
        gradio_server_name : str
            Bind address for the Gradio studio
        gradio_server_port : int
            Port for the Gradio studio
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)

    Examples
    --------
        >>> custom_config = LumiereConfig(
        ...     api_key="test-key",
        ...     image_model="gemini-2.5-flash-image",
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LUMIERE_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Gemini settings
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LUMIERE_API_KEY", "GOOGLE_API_KEY", "API_KEY"),
        description="Gemini API key (LUMIERE_API_KEY, GOOGLE_API_KEY or API_KEY)",
    )
    base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/models",
        description="Base URL of the Generative Language models collection",
    )
    text_model: str = Field(
        default="gemini-2.5-flash",
        description="Model used to write scene descriptions",
    )
    image_model: str = Field(
        default="gemini-2.5-flash-image",
        description="Model used to generate gallery images",
    )
    request_timeout: float = Field(
        default=120.0,
        description="Total transport timeout per request in seconds",
        gt=0,
    )

    # Paths
    outputs_dir: Path = Field(
        default=Path("outputs"),
        description="Directory to save downloaded gallery images",
    )

    # API server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="FastAPI bind address",
    )
    server_port: int = Field(
        default=8000,
        description="FastAPI port",
        ge=1024,
        le=65535,
    )

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the outputs directory.

        Args:
            **kwargs: Configuration overrides
        """
        super().__init__(**kwargs)

        self.outputs_dir.mkdir(parents=True, exist_ok=True)

    @property
    def has_api_key(self) -> bool:
        """Whether a non-blank API key is configured."""
        return bool(self.api_key and self.api_key.strip())


# Global configuration instance used by the entry points.
config = LumiereConfig()
