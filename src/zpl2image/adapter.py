"""Lossless adaptation of backend rasters into caller-owned bitmaps."""

import logging

from PIL import Image

from zpl2image.image_utils import decode_image, encode_image, is_opaque

logger = logging.getLogger(__name__)


class RasterAdapter:
    """Converts a backend raster into a detached destination bitmap.

    The backend image is encoded to a lossless stream (PNG by default) and
    closed right after encoding. The stream is then decoded into a new, fully
    loaded image that the caller owns and must close.
    """

    def __init__(self, format: str = "PNG") -> None:
        self.format = format

    def adapt(self, native: Image.Image) -> Image.Image:
        """Consume a backend image and return the destination bitmap.

        Raises:
            DecodeFailure: If the intermediate stream cannot be decoded.
        """
        try:
            data = encode_image(native, self.format)
        finally:
            native.close()

        bitmap = decode_image(data)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Adapted {bitmap.mode} {bitmap.size[0]}x{bitmap.size[1]} raster "
                f"via {len(data)} byte {self.format} stream "
                f"(opaque={is_opaque(bitmap)})"
            )
        return bitmap
