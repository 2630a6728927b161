"""Resvg-based rasterizer module.

This module provides in-process SVG rasterization using the resvg library via
resvg-py. It needs no external executable and no temporary files, and is the
backend used when rsvg-convert is unavailable.
"""

import logging
import re
from pathlib import Path
from typing import Union

import resvg_py
from PIL import Image

from zpl2image.errors import DecodeFailure, RenderTimeout
from zpl2image.image_utils import decode_image, flatten_background, resize_exact
from zpl2image.timeout_utils import with_timeout

from .base_rasterizer import BaseRasterizer

logger = logging.getLogger(__name__)


class ResvgRasterizer(BaseRasterizer):
    """In-process SVG rasterizer using resvg.

    ``render`` rasterizes at the requested DPI, resamples the result to the
    exact requested size with the Lanczos filter and flattens it onto opaque
    white, so the output is always an RGB image without alpha.

    Note:
        Resvg does not support CSS @font-face rules with embedded fonts (data URIs).
        Font file paths in @font-face src: url("file://...") declarations are
        extracted and passed to resvg's native font loading API instead.

    Example:
        >>> rasterizer = ResvgRasterizer()
        >>> image = rasterizer.render('<svg>...</svg>', 1200, 1800, 300)
        >>> image.mode, image.size
        ('RGB', (1200, 1800))
    """

    name = "resvg"

    def __init__(self, timeout: int = 0) -> None:
        """Initialize the resvg rasterizer.

        Args:
            timeout: Deadline in seconds for the engine call. 0 disables it.
        """
        self.timeout = timeout

    @staticmethod
    def _extract_font_file_paths(svg_content: str) -> list[str]:
        """Extract font file paths from @font-face CSS rules in SVG."""
        pattern = re.compile(r'src:\s*url\(["\']?(file://[^"\')]+)["\']?\)')
        return [match.replace("file://", "") for match in pattern.findall(svg_content)]

    def _rasterize(self, svg_content: str, dpi: int) -> Image.Image:
        """Run the resvg engine and decode its PNG output."""
        font_files = self._extract_font_file_paths(svg_content)
        if font_files:
            logger.debug(f"Extracted {len(font_files)} font file(s) from SVG")
        try:
            png_bytes = with_timeout(
                resvg_py.svg_to_bytes,
                self.timeout,
                svg_string=svg_content,
                dpi=int(dpi),
                font_files=font_files or None,
            )
        except TimeoutError as e:
            raise RenderTimeout(str(e)) from e
        except Exception as e:
            raise DecodeFailure(f"resvg failed to render SVG: {e}") from e
        return decode_image(bytes(png_bytes), mode="RGBA")

    def render(
        self, svg_content: str, width_px: int, height_px: int, dpi: int
    ) -> Image.Image:
        rendered = self._rasterize(svg_content, dpi)
        try:
            if rendered.size != (width_px, height_px):
                logger.debug(
                    f"Resampling {rendered.size[0]}x{rendered.size[1]} "
                    f"to {width_px}x{height_px}"
                )
            # Resampled even when the engine already produced the target size.
            resized = resize_exact(rendered, (width_px, height_px))
        finally:
            rendered.close()
        try:
            return flatten_background(resized)
        finally:
            resized.close()

    def from_string(self, svg_content: Union[str, bytes], dpi: int = 96) -> Image.Image:
        """Rasterize SVG content at its natural size.

        Returns:
            PIL Image object in RGBA mode with a transparent background.
        """
        svg_string = (
            svg_content.decode("utf-8")
            if isinstance(svg_content, bytes)
            else svg_content
        )
        return self._rasterize(svg_string, dpi)

    def from_file(self, filepath: Union[str, Path], dpi: int = 96) -> Image.Image:
        """Rasterize an SVG file at its natural size."""
        return self.from_string(Path(filepath).read_text(encoding="utf-8"), dpi)
