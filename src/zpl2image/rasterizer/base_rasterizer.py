import logging
from abc import ABC, abstractmethod

from PIL import Image

from zpl2image.request import RenderRequest

logger = logging.getLogger(__name__)


class BaseRasterizer(ABC):
    """Base class for SVG rasterizer backends.

    This abstract base class defines the interface for converting SVG text
    to a raster image (PIL Image object) of an exact pixel size. Subclasses
    must implement the `render` method to provide the actual rasterization
    logic.

    The returned image is fully loaded and owned by the caller; it holds no
    reference to files created during rendering.
    """

    name: str = "base"

    @abstractmethod
    def render(
        self, svg_content: str, width_px: int, height_px: int, dpi: int
    ) -> Image.Image:
        """Rasterize SVG content to a PIL Image.

        Args:
            svg_content: SVG document text.
            width_px: Output width in pixels.
            height_px: Output height in pixels.
            dpi: Resolution used for physical units in the SVG.

        Returns:
            PIL Image of exactly width_px x height_px pixels.
        """
        raise NotImplementedError

    def render_request(self, request: RenderRequest) -> Image.Image:
        """Rasterize a RenderRequest."""
        logger.debug(
            f"Rendering {request.width_px}x{request.height_px} "
            f"at {request.dpi} DPI with {self.name}"
        )
        return self.render(
            request.svg_content, request.width_px, request.height_px, request.dpi
        )
