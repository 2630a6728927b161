"""Render options for the rasterization pipeline.

This module provides the settings shared by the backend selector and the
rasterizer backends. There is no persisted configuration: options are built
in code and passed explicitly.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from PIL import Image

logger = logging.getLogger(__name__)

# Name of the external rasterizer executable looked up on PATH.
RSVG_CONVERT = "rsvg-convert"

# When the external tool is chosen and fails, the call fails. Flip only as a
# deliberate behavior change: a failed external render is then re-run once on
# the library backend.
FALLBACK_ON_EXTERNAL_FAILURE = False


@dataclass
class RenderOptions:
    """Options for SVG rasterization.

    Attributes:
        executable: External rasterizer executable name or path.
        timeout: Deadline in seconds for a single backend render. 0 disables
            the deadline, so the external process may block indefinitely.
        temp_dir: Directory for temporary files. None uses the system default.
        fallback_on_external_failure: Re-run on the library backend after an
            external tool failure. Off by default.
        max_image_dimension: Maximum width or height in pixels. 0 disables
            the check.

    Example:
        >>> options = RenderOptions.default()
        >>>
        >>> # Bound the external process to 30 seconds
        >>> options = RenderOptions(timeout=30)
    """

    executable: str = RSVG_CONVERT
    timeout: int = 0
    temp_dir: Optional[str] = None
    fallback_on_external_failure: bool = FALLBACK_ON_EXTERNAL_FAILURE
    max_image_dimension: int = 0

    def __post_init__(self) -> None:
        if self.timeout < 0:
            logger.warning(
                f"Negative timeout {self.timeout} treated as 0 (no deadline)."
            )
            self.timeout = 0
        if self.max_image_dimension < 0:
            logger.warning(
                f"Negative max_image_dimension {self.max_image_dimension} "
                "treated as 0 (disabled limit)."
            )
            self.max_image_dimension = 0

    @classmethod
    def default(cls) -> "RenderOptions":
        """Create RenderOptions with default values."""
        return cls()

    def is_timeout_enabled(self) -> bool:
        """Check if the render deadline is enabled."""
        return self.timeout > 0

    def is_image_dimension_limited(self) -> bool:
        """Check if the image dimension limit is enabled."""
        return self.max_image_dimension > 0

    def check_dimensions(self, width_px: int, height_px: int) -> None:
        """Reject sizes that cannot be rendered and decoded.

        Besides max_image_dimension, the pixel count is capped by Pillow's
        decompression bomb limit (twice ``PIL.Image.MAX_IMAGE_PIXELS``), above
        which backend output could not be decoded.

        Raises:
            ValueError: If either side exceeds max_image_dimension or the
                pixel count exceeds the decoder limit.
        """
        max_pixels = Image.MAX_IMAGE_PIXELS
        if max_pixels is not None and width_px * height_px > 2 * max_pixels:
            raise ValueError(
                f"Requested size {width_px}x{height_px} exceeds the decoder "
                f"limit of {2 * max_pixels} pixels (PIL.Image.MAX_IMAGE_PIXELS)."
            )
        if not self.is_image_dimension_limited():
            return
        if max(width_px, height_px) > self.max_image_dimension:
            raise ValueError(
                f"Requested size {width_px}x{height_px} exceeds the maximum "
                f"dimension of {self.max_image_dimension} pixels."
            )
