"""Tests for image_utils."""

import numpy as np
import pytest
from PIL import Image

from zpl2image.errors import DecodeFailure, ResizeFailure
from zpl2image.image_utils import (
    decode_image,
    encode_image,
    flatten_background,
    is_opaque,
    resize_exact,
    to_jpeg,
    to_png,
)


def test_decode_image_invalid() -> None:
    with pytest.raises(DecodeFailure):
        decode_image(b"\x89PNG\r\n\x1a\nbroken")


def test_decode_image_mode() -> None:
    data = encode_image(Image.new("RGBA", (3, 2), (1, 2, 3, 4)))
    image = decode_image(data, mode="RGB")
    assert image.mode == "RGB"
    assert image.getpixel((0, 0)) == (1, 2, 3)


@pytest.mark.parametrize("size", [(100, 50), (7, 300), (1, 1)])
def test_resize_exact(size: tuple[int, int]) -> None:
    image = Image.new("RGBA", (40, 40), (0, 0, 0, 255))
    assert resize_exact(image, size).size == size


@pytest.mark.parametrize("size", [(0, 10), (10, 0), (-1, 5)])
def test_resize_exact_invalid(size: tuple[int, int]) -> None:
    with pytest.raises(ResizeFailure):
        resize_exact(Image.new("RGB", (4, 4)), size)


def test_flatten_background() -> None:
    """Test transparency is replaced by opaque white."""
    image = Image.new("RGBA", (2, 1), (0, 0, 0, 0))
    image.putpixel((1, 0), (0, 0, 0, 255))

    flattened = flatten_background(image)

    assert flattened.mode == "RGB"
    assert flattened.getpixel((0, 0)) == (255, 255, 255)
    assert flattened.getpixel((1, 0)) == (0, 0, 0)


def test_is_opaque() -> None:
    assert is_opaque(Image.new("RGB", (2, 2)))
    assert is_opaque(Image.new("RGBA", (2, 2), (0, 0, 0, 255)))
    assert not is_opaque(Image.new("RGBA", (2, 2), (0, 0, 0, 254)))


def test_to_png(tmp_path) -> None:
    path = tmp_path / "label.png"
    source = Image.new("RGBA", (8, 8), (10, 20, 30, 40))
    to_png(source, path, compress_level=1)

    with Image.open(path) as saved:
        assert saved.format == "PNG"
        assert np.array_equal(np.asarray(saved), np.asarray(source))


def test_to_jpeg_flattens_alpha(tmp_path) -> None:
    path = tmp_path / "label.jpg"
    to_jpeg(Image.new("RGBA", (8, 8), (0, 0, 0, 0)), path, quality=95)

    with Image.open(path) as saved:
        assert saved.format == "JPEG"
        assert saved.mode == "RGB"
        r, g, b = saved.getpixel((4, 4))
        assert min(r, g, b) >= 250


def test_to_jpeg_unwritable(tmp_path) -> None:
    with pytest.raises(OSError):
        to_jpeg(Image.new("RGB", (2, 2)), tmp_path / "missing" / "label.jpg")
