"""Image payload parsing and encoding.

Images travel through the studio as data URIs
(``data:image/png;base64,iVBOR...``).  The Gemini API wants the mime type
and the base64 payload as separate fields, so every request starts by
splitting the URI with :func:`parse_image_payload`.

The payload is never decoded or validated here.  A malformed payload is
passed to the model as-is and surfaces later as a "no image" condition
from the generation call.

The Pillow helpers (:func:`encode_image`, :func:`decode_image`) are used by
the Gradio studio, which hands uploaded images over as ``PIL.Image`` objects
and displays the gallery the same way.
"""

from __future__ import annotations

import base64
import io
import re
from dataclasses import dataclass

from PIL import Image

DEFAULT_MIME_TYPE = "image/png"

_DATA_URI_RE = re.compile(r"^data:(image/[a-zA-Z+]+);base64,(.+)$", re.DOTALL)

# Prefixes stripped from inputs that did not match the full data-URI pattern
# (for example a prefix followed by an empty payload).
_LOOSE_PREFIX_RE = re.compile(r"^data:image/(png|jpeg|jpg|webp);base64,")


@dataclass(frozen=True)
class ImagePayload:
    """A base64 image split into its mime type and payload.

    Attributes:
        mime_type: Declared mime type, e.g. ``"image/jpeg"``
        data: Base64 payload, unvalidated
    """

    mime_type: str
    data: str

    def to_inline_part(self) -> dict:
        """Return the payload as a Gemini ``inlineData`` request part."""
        return {"inlineData": {"mimeType": self.mime_type, "data": self.data}}

    def to_data_uri(self) -> str:
        """Reassemble the payload into a data URI."""
        return f"data:{self.mime_type};base64,{self.data}"


def parse_image_payload(value: str) -> ImagePayload:
    """Split a data URI into mime type and base64 payload.

    Args:
        value: Either a ``data:image/<kind>;base64,<payload>`` URI or raw
            base64 data

    Returns:
        The declared mime type and the payload following the comma.  Raw
        base64 is assumed to be PNG and returned unchanged.
    """
    match = _DATA_URI_RE.match(value)
    if match:
        return ImagePayload(mime_type=match.group(1), data=match.group(2))

    return ImagePayload(mime_type=DEFAULT_MIME_TYPE, data=_LOOSE_PREFIX_RE.sub("", value))


def png_data_uri(data: str) -> str:
    """Wrap a base64 payload returned by the image model as a PNG data URI."""
    return f"data:{DEFAULT_MIME_TYPE};base64,{data}"


def encode_image(image: Image.Image, image_format: str = "PNG") -> str:
    """Encode a PIL image as a data URI.

    Args:
        image: Image to encode
        image_format: Pillow format name (``"PNG"``, ``"JPEG"``, ``"WEBP"``)

    Returns:
        ``data:image/<format>;base64,...`` string
    """
    if image_format.upper() == "JPEG" and image.mode not in ("RGB", "L"):
        image = image.convert("RGB")

    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/{image_format.lower()};base64,{encoded}"


def decode_image(value: str) -> Image.Image:
    """Decode a data URI (or raw base64) into a PIL image.

    Raises:
        ValueError: If the payload is not valid base64
        PIL.UnidentifiedImageError: If the bytes are not a readable image
    """
    payload = parse_image_payload(value)
    raw = base64.b64decode(payload.data, validate=True)
    image = Image.open(io.BytesIO(raw))
    image.load()
    return image
