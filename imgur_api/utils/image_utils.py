"""Image utilities for the Imgur API client."""

import base64
import io
import logging
import os
from typing import BinaryIO, Union

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

ImageSource = Union[bytes, bytearray, BinaryIO]


def read_image_bytes(source: ImageSource) -> bytes:
    """Read raw image bytes from bytes or a binary file-like object."""
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    return source.read()


def encode_png(raw: bytes) -> bytes:
    """Decode an image in any format Pillow understands and re-encode it as PNG.

    Args:
        raw: Encoded image bytes

    Returns:
        PNG-encoded image bytes

    Raises:
        ValueError: If the bytes are not a readable image
    """
    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            output = io.BytesIO()
            img.save(output, format="PNG")
    except (UnidentifiedImageError, OSError) as e:
        logger.warning("Failed to decode image (%d bytes): %s", len(raw), str(e))
        raise ValueError(f"Unreadable image data: {e}") from e
    return output.getvalue()


def to_base64_png(source: ImageSource) -> str:
    """Normalize an image to PNG and return it base64 encoded."""
    png = encode_png(read_image_bytes(source))
    return base64.b64encode(png).decode("ascii")


def is_url(value: str) -> bool:
    """Check whether an upload source string is a URL rather than base64 data."""
    return value.startswith(("http://", "https://"))


def upload_name(path: str) -> str:
    """Return the file name sent with an upload read from ``path``."""
    return os.path.basename(path)
