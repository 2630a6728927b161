from logging import getLogger
from typing import Callable, Optional

from PIL import Image

from zpl2image.adapter import RasterAdapter
from zpl2image.errors import (
    DecodeFailure,
    ExternalToolFailure,
    ProbeInconclusive,
    RasterizeError,
    RenderTimeout,
    ResizeFailure,
    TempResourceFailure,
)
from zpl2image.image_utils import to_jpeg, to_png
from zpl2image.rasterizer import Backend, BackendSelector, CapabilityProber
from zpl2image.render_options import RenderOptions
from zpl2image.request import RenderRequest
from zpl2image.version import __version__ as __version__

logger = getLogger(__name__)

__all__ = [
    "Backend",
    "BackendSelector",
    "CapabilityProber",
    "DecodeFailure",
    "ExternalToolFailure",
    "ProbeInconclusive",
    "RasterAdapter",
    "RasterizeError",
    "RenderTimeout",
    "RenderOptions",
    "RenderRequest",
    "ResizeFailure",
    "TempResourceFailure",
    "convert",
    "rasterize",
    "render",
    "to_jpeg",
    "to_png",
]


def render(
    request: RenderRequest,
    options: Optional[RenderOptions] = None,
    selector: Optional[BackendSelector] = None,
) -> Image.Image:
    """Render a request and adapt the result into a caller-owned image.

    Options are taken from the selector when one is given, so passing both
    is rejected.

    Raises:
        ValueError: If both options and selector are given.
    """
    if selector is not None and options is not None:
        raise ValueError(
            "Pass either options or selector, not both; "
            "use BackendSelector(options=...) to combine them."
        )
    if selector is None:
        selector = BackendSelector(options=options)
    native = selector.render(request)
    return RasterAdapter().adapt(native)


def rasterize(
    svg_content: str,
    width_px: int,
    height_px: int,
    dpi: int,
    options: Optional[RenderOptions] = None,
    selector: Optional[BackendSelector] = None,
) -> Image.Image:
    """Rasterize SVG text into an image of exactly width_px x height_px.

    The caller owns the returned image and should close it when done.

    Example:
        >>> with rasterize(svg, 1200, 1800, 300) as image:
        ...     to_png(image, "label.png")
    """
    request = RenderRequest(svg_content, width_px, height_px, dpi)
    return render(request, options=options, selector=selector)


def convert(
    label: str,
    compose: Callable[[str], str],
    width_inches: float = 4.0,
    height_inches: float = 6.0,
    dpi: int = 300,
    options: Optional[RenderOptions] = None,
    selector: Optional[BackendSelector] = None,
) -> Image.Image:
    """Convert a label description to an image.

    Args:
        label: Label description text, e.g. ZPL.
        compose: Callable turning the label description into SVG text.
        width_inches: Label width in inches.
        height_inches: Label height in inches.
        dpi: Dots per inch.
    """
    svg_content = compose(label)
    request = RenderRequest.from_physical(svg_content, width_inches, height_inches, dpi)
    return render(request, options=options, selector=selector)
