"""The five fixed gallery compositions.

Each gallery slot is generated from the same product, theme and scene
description but a different camera directive.  The order of
:data:`COMPOSITIONS` is the order of the resulting gallery: slot 0 (the hero
shot) is the image the studio shows first.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Composition:
    """A camera/framing directive for one gallery slot.

    Attributes:
        id: Stable slot identifier used in logs and failure reports
        directive: Text inserted verbatim into the image prompt
    """

    id: str
    directive: str


COMPOSITIONS: tuple[Composition, ...] = (
    Composition(
        id="hero",
        directive=(
            "Composition: Hero shot, eye-level, perfectly centered, symmetric studio composition."
        ),
    ),
    Composition(
        id="flat_lay",
        directive=(
            "Composition: Top-down flat lay view, artistic arrangement with negative space."
        ),
    ),
    Composition(
        id="three_quarter",
        directive=(
            "Composition: 3/4 Angle, dynamic perspective, slightly looking up at the product "
            "(heroic)."
        ),
    ),
    Composition(
        id="macro",
        directive=(
            "Composition: Close-up macro shot, focusing on the product texture and integration "
            "with the background elements, shallow depth of field."
        ),
    ),
    Composition(
        id="lifestyle",
        directive=(
            "Composition: Wide environmental shot, showing the product in a broader lifestyle "
            "context or expansive abstract scene."
        ),
    ),
)

GALLERY_SIZE = len(COMPOSITIONS)
