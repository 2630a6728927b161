import io
import logging
import os
from typing import Union

import numpy as np
from PIL import Image

from zpl2image.errors import DecodeFailure, ResizeFailure

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def encode_image(image: Image.Image, format: str = "PNG") -> bytes:
    """Encode a PIL image to bytes in the specified format."""
    with io.BytesIO() as output:
        image.save(output, format=format.upper())
        return output.getvalue()


def decode_image(data: bytes, mode: str | None = None) -> Image.Image:
    """Decode image data from bytes to a fully loaded PIL image.

    Raises:
        DecodeFailure: If the bytes are not a readable raster image.
    """
    try:
        with io.BytesIO(data) as input:
            image = Image.open(input)
            image.load()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeFailure(f"Failed to decode raster data: {e}") from e
    if mode is not None and image.mode != mode:
        converted = image.convert(mode)
        image.close()
        return converted
    return image


def resize_exact(image: Image.Image, size: tuple[int, int]) -> Image.Image:
    """Resample an image to exactly the given size with the Lanczos filter.

    Raises:
        ResizeFailure: If the target size is empty or resampling fails.
    """
    width, height = size
    if width < 1 or height < 1:
        raise ResizeFailure(f"Invalid target size: {width}x{height}")
    try:
        return image.resize((width, height), resample=Image.Resampling.LANCZOS)
    except (OSError, ValueError, MemoryError) as e:
        raise ResizeFailure(f"Failed to resize image to {width}x{height}: {e}") from e


def flatten_background(
    image: Image.Image, color: tuple[int, int, int] = (255, 255, 255)
) -> Image.Image:
    """Composite an image onto an opaque background and drop the alpha channel."""
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    background = Image.new("RGBA", size=rgba.size, color=color + (255,))
    background.alpha_composite(rgba)
    flattened = background.convert("RGB")
    background.close()
    if rgba is not image:
        rgba.close()
    return flattened


def is_opaque(image: Image.Image) -> bool:
    """Check whether every pixel of the image is fully opaque."""
    if "A" not in image.getbands():
        return True
    alpha = np.asarray(image.getchannel("A"))
    return bool(alpha.min() == 255)


def to_png(image: Image.Image, filepath: PathLike, compress_level: int = 9) -> None:
    """Save an image as PNG with the given zlib compression level (0-9)."""
    image.save(filepath, format="PNG", compress_level=compress_level)


def to_jpeg(image: Image.Image, filepath: PathLike, quality: int = 90) -> None:
    """Save an image as JPEG.

    Note:
        JPEG doesn't support alpha channel, so images with transparency are
        flattened onto a white background.
    """
    if image.mode == "RGB":
        image.save(filepath, format="JPEG", quality=quality)
        return
    rgb_image = flatten_background(image)
    try:
        rgb_image.save(filepath, format="JPEG", quality=quality)
    finally:
        rgb_image.close()
