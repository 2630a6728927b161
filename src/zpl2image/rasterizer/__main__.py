import logging
import sys

from zpl2image import RasterizeError, rasterize, to_png
from zpl2image.rasterizer.probe import CapabilityProber
from zpl2image.rasterizer.selector import BackendSelector
from zpl2image.render_options import RenderOptions

logger = logging.getLogger(__name__)


class _FixedProber(CapabilityProber):
    """Prober with a forced answer, for --backend external/library."""

    def __init__(self, available: bool) -> None:
        super().__init__()
        self._available = available


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Rasterize SVG file.")
    parser.add_argument("input", metavar="PATH", type=str, help="Input SVG file.")
    parser.add_argument(
        "--output",
        metavar="PATH",
        default="output.png",
        help="Output file. default output.png",
    )
    parser.add_argument("--width", metavar="PX", type=int, required=True)
    parser.add_argument("--height", metavar="PX", type=int, required=True)
    parser.add_argument(
        "--dpi", metavar="DPI", type=int, default=300, help="default 300"
    )
    parser.add_argument(
        "--backend",
        choices=["auto", "external", "library"],
        default="auto",
        help="Rasterizer backend. default auto",
    )
    parser.add_argument(
        "--timeout",
        metavar="SECONDS",
        type=int,
        default=0,
        help="Render deadline in seconds, 0 for none. default 0",
    )
    parser.add_argument(
        "--loglevel",
        metavar="LEVEL",
        default="INFO",
        help="Logging level, default INFO.",
    )

    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, args.loglevel.upper()))

    options = RenderOptions(timeout=args.timeout)
    prober = None
    if args.backend != "auto":
        prober = _FixedProber(args.backend == "external")
    selector = BackendSelector(prober=prober, options=options)

    with open(args.input, encoding="utf-8") as f:
        svg_content = f.read()
    try:
        image = rasterize(
            svg_content, args.width, args.height, args.dpi, selector=selector
        )
    except RasterizeError as e:
        logger.error(f"Rasterization failed: {e}")
        sys.exit(1)
    with image:
        to_png(image, args.output)
    logger.info(f"Saved {args.output}")


if __name__ == "__main__":
    main()
