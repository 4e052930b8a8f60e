from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Callable, Generator, Tuple

import pytest
from PIL import Image

from imagewatermark.settings import get_settings

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def solid() -> Callable[..., Image.Image]:
    """Factory for single-colour RGBA images."""

    def _make(size: Tuple[int, int], color: Tuple[int, int, int, int] = RED) -> Image.Image:
        return Image.new("RGBA", size, color)

    return _make


@pytest.fixture
def red_base(solid) -> Image.Image:
    return solid((100, 100), RED)


@pytest.fixture
def blue_mark(solid) -> Image.Image:
    return solid((20, 20), BLUE)


@pytest.fixture
def image_file(tmp_path: Path) -> Callable[..., Path]:
    """Write an image to a PNG file under tmp_path and return its path."""

    def _write(image: Image.Image, name: str = "image.png") -> Path:
        path = tmp_path / name
        image.save(path, format="PNG")
        return path

    return _write


@pytest.fixture
def png_bytes() -> Callable[[Image.Image], bytes]:
    return _to_png_bytes


def _to_png_bytes(image: Image.Image) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
