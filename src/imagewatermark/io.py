"""Image decoding for watermark sources."""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import Union

from PIL import Image, ImageOps

from .errors import LoadFailure
from .logger import log

ImageSource = Union[Image.Image, str, "os.PathLike[str]", bytes]


def _require_pixels(image: Image.Image, name: str) -> Image.Image:
    if image.width == 0 or image.height == 0:
        reason = ValueError(f"image has no pixels ({image.width}x{image.height})")
        log.error(f"Failed to load image {name}: {reason}")
        raise LoadFailure(name, reason)
    return image


def load_image(source: ImageSource) -> Image.Image:
    """
    Decode an image source into a new RGBA image.

    Args:
        source: An already decoded image, a file path or encoded bytes.

    Returns:
        RGBA image with EXIF orientation applied. The caller owns it.

    Raises:
        LoadFailure: If the source cannot be read or decoded, or has a zero
            width or height.
    """
    if isinstance(source, Image.Image):
        _require_pixels(source, "<image>")
        return source.convert("RGBA") if source.mode != "RGBA" else source.copy()
    if isinstance(source, (bytes, bytearray)):
        return load_image_from_bytes(bytes(source))

    path = Path(source)
    try:
        with Image.open(path) as opened:
            image = ImageOps.exif_transpose(opened)
            image.load()
            image = image.convert("RGBA")
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        log.error(f"Failed to load image {path}: {e}")
        raise LoadFailure(path, e) from e

    log.debug(f"Loaded image: {path.name} ({image.size[0]}x{image.size[1]})")
    return _require_pixels(image, str(path))


def load_image_from_bytes(image_bytes: bytes) -> Image.Image:
    stream = io.BytesIO(image_bytes)
    try:
        image = Image.open(stream)
        image.load()
        image = ImageOps.exif_transpose(image)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        log.error(f"Failed to decode image bytes: {e}")
        raise LoadFailure("<bytes>", e) from e
    return _require_pixels(image.convert("RGBA"), "<bytes>")
