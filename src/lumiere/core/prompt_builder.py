"""Prompt compilation for scene descriptions and gallery images.

Two prompts are sent to Gemini: the creative-director prompt that asks the
text model for a scene paragraph, and the per-composition prompt that asks
the image model for one gallery image.  Both are plain text; the product
image travels alongside as an ``inlineData`` part.

Gallery Prompt Structure::

    Generate a high-quality photorealistic product image.

    Input Object: The product in the provided image ([Product Name]).
    Background Environment: [Theme Prompt].
    Scene Description: [Description].
    [Composition Directive]
    Additional Details: [Extra Elements].

    [Fixed: style line]
    [Fixed: integration instruction]
    [Fixed: image-only instruction]

Sections whose value is empty are omitted, so a request without a product
name or extra elements produces no dangling labels.

Usage
-----
::

    prompt = build_gallery_prompt(
        product_name="Test Serum",
        theme_prompt=get_theme("floral").prompt,
        description="Rose petals drift across a marble plinth...",
        composition=COMPOSITIONS[0],
        extra_elements="water droplets",
    )
"""

from __future__ import annotations

from lumiere.core.compositions import Composition

# ---------------------------------------------------------------------------
# Fixed boilerplate sections.
# ---------------------------------------------------------------------------

_GALLERY_HEADER = "Generate a high-quality photorealistic product image."

_GALLERY_STYLE = "Style: 8k resolution, commercial advertising photography, cinematic lighting."

_GALLERY_INSTRUCTION = "Instruction: Seamlessly integrate the product into the generated background."

_IMAGE_ONLY = "IMPORTANT: Output ONLY the generated image. Do not provide a text response."

_DIRECTOR_ROLE = "You are an expert creative director for high-end cosmetic brands."

_DIRECTOR_TASK = (
    "Write a single, evocative, and visually descriptive paragraph (approx 50-70 words) "
    "describing a modern, premium background setting for this product."
)

_DIRECTOR_FOCUS = (
    "Focus on materials (e.g., silk, marble, water, glass), lighting (e.g., softbox, "
    "sunlight, neon), and mood.\n"
    "Do NOT describe the product itself in detail, focus on the SCENE around it.\n"
    "Output ONLY the paragraph."
)


def _sentence(value: str) -> str:
    """Strip a value and drop a trailing period so labels end with exactly one."""
    return value.strip().rstrip(".")


def build_description_prompt(product_name: str, theme: str) -> str:
    """Compile the creative-director prompt for scene synthesis.

    Args:
        product_name: Product name typed by the user (may be empty)
        theme: Theme prompt text describing the target aesthetic

    Returns:
        Prompt asking for one 50-70 word scene paragraph.
    """
    lines = [
        _DIRECTOR_ROLE,
        "Analyze the product in the image.",
        _DIRECTOR_TASK,
        "",
    ]

    name = product_name.strip()
    if name:
        lines.append(f"Product Name: {name}")
    lines.append(f"Target Aesthetic: {theme.strip()}")

    lines.append("")
    lines.append(_DIRECTOR_FOCUS)

    return "\n".join(lines)


def build_gallery_prompt(
    product_name: str,
    theme_prompt: str,
    description: str,
    composition: Composition,
    extra_elements: str = "",
) -> str:
    """Compile the image prompt for one gallery composition.

    Args:
        product_name: Product name (omitted from the reference line if empty)
        theme_prompt: Background environment text of the selected theme
        description: Scene description paragraph (omitted if empty)
        composition: Composition whose directive is inserted verbatim
        extra_elements: Free-text extra elements (omitted if empty)

    Returns:
        The compiled prompt, one section per line.
    """
    lines = [_GALLERY_HEADER, ""]

    name = product_name.strip()
    if name:
        lines.append(f"Input Object: The product in the provided image ({name}).")
    else:
        lines.append("Input Object: The product in the provided image.")

    lines.append(f"Background Environment: {_sentence(theme_prompt)}.")

    scene = _sentence(description)
    if scene:
        lines.append(f"Scene Description: {scene}.")

    # The directive is inserted unmodified so each slot is traceable in logs.
    lines.append(composition.directive)

    extras = _sentence(extra_elements)
    if extras:
        lines.append(f"Additional Details: {extras}.")

    lines.extend(["", _GALLERY_STYLE, _GALLERY_INSTRUCTION, _IMAGE_ONLY])

    return "\n".join(lines)
