"""Aesthetic theme presets.

Five fixed presets drive the background of every gallery.  A preset is
identified by its ``id``; the ``prompt`` fragment is what actually reaches
the model.  UI selection state stores the id and resolves the prompt
through :func:`get_theme`, so editing a prompt fragment never breaks the
selection.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ThemePreset:
    """An immutable aesthetic preset.

    Attributes:
        id: Stable identifier (``"floral"``, ``"minimal"``, ...)
        name: Display name
        description: Short hint shown under the name in the UI
        prompt: Background-environment text inserted into model prompts
    """

    id: str
    name: str
    description: str
    prompt: str


THEME_PRESETS: tuple[ThemePreset, ...] = (
    ThemePreset(
        id="floral",
        name="Floral Elegance",
        description="Soft petals, roses, nature",
        prompt="surrounded by lush pink roses and soft petals, romantic atmosphere",
    ),
    ThemePreset(
        id="minimal",
        name="Ultra Minimalist",
        description="Clean lines, podiums, shadows",
        prompt="on a clean geometric podium, hard shadows, studio lighting, minimal aesthetic",
    ),
    ThemePreset(
        id="luxury",
        name="Dark Luxury",
        description="Gold, silk, moody lighting",
        prompt="on black silk texture with gold accents, dramatic moody lighting, luxury perfume ad",
    ),
    ThemePreset(
        id="fresh",
        name="Aqua Fresh",
        description="Water splashes, droplets, blue",
        prompt=(
            "surrounded by dynamic water splashes and droplets, fresh blue tones, "
            "high speed photography"
        ),
    ),
    ThemePreset(
        id="botanical",
        name="Green Botanical",
        description="Leaves, forest, organic",
        prompt=(
            "in a lush green rainforest setting with monstera leaves, dappled sunlight, "
            "organic vibe"
        ),
    ),
)

THEMES_BY_ID: dict[str, ThemePreset] = {theme.id: theme for theme in THEME_PRESETS}

DEFAULT_THEME_ID = THEME_PRESETS[0].id


def get_theme(theme_id: str) -> ThemePreset:
    """Look up a preset by id.

    Raises:
        KeyError: If ``theme_id`` is not one of the five presets
    """
    try:
        return THEMES_BY_ID[theme_id]
    except KeyError:
        raise KeyError(f"Unknown theme: {theme_id}") from None


def theme_ids() -> list[str]:
    """Return preset ids in display order."""
    return [theme.id for theme in THEME_PRESETS]
