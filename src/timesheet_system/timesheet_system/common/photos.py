"""Validation of photos captured at clock-in / clock-out.

Photos travel as data URIs (``data:image/jpeg;base64,...``) straight from the
browser camera and are stored inline on the work entry.
"""

from __future__ import annotations

import base64
import binascii
import io
import re
from typing import Optional

from PIL import Image, UnidentifiedImageError

from ..core.constants import MAX_PHOTO_BYTES
from ..core.exceptions import ValidationError

_DATA_URI = re.compile(r"^data:image/(?P<kind>[a-zA-Z0-9.+-]+);base64,(?P<payload>.+)$", re.DOTALL)


def decode_photo_data_uri(value: str) -> bytes:
    match = _DATA_URI.match(value.strip())
    if not match:
        raise ValidationError("Photo must be an image data URI")
    try:
        return base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Photo data is not valid base64")


def validate_photo_data_uri(value: Optional[str], *, max_bytes: int = MAX_PHOTO_BYTES) -> Optional[str]:
    """Return the data URI unchanged if it holds a readable image, None if absent."""
    if value is None or not value.strip():
        return None

    raw = decode_photo_data_uri(value)
    if len(raw) > max_bytes:
        raise ValidationError("Photo is too large")

    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise ValidationError("Photo is not a readable image")

    return value.strip()
