"""Availability-based backend selection.

The selector picks exactly one backend per call: rsvg-convert when the prober
reports it invocable, resvg otherwise. The chosen backend's outcome is final.
An ExternalToolFailure is not retried on the library backend unless
``RenderOptions.fallback_on_external_failure`` is explicitly enabled.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from PIL import Image

from zpl2image.errors import ExternalToolFailure
from zpl2image.render_options import RSVG_CONVERT, RenderOptions
from zpl2image.request import RenderRequest

from .base_rasterizer import BaseRasterizer
from .probe import CapabilityProber, default_prober
from .resvg_rasterizer import ResvgRasterizer
from .rsvg_rasterizer import RsvgConvertRasterizer

logger = logging.getLogger(__name__)


class Backend(enum.Enum):
    EXTERNAL = "external"
    LIBRARY = "library"


@dataclass(frozen=True)
class BackendDescriptor:
    name: Backend
    is_available: bool


class BackendSelector:
    """Chooses and runs one rasterizer backend per request.

    Args:
        prober: Capability prober for the external tool. Defaults to the
            process-wide prober when options use the default executable.
        external: External-tool backend. Built from options if omitted.
        library: Library backend. Built from options if omitted.
        options: Render options.

    Example:
        >>> selector = BackendSelector()
        >>> image = selector.render(RenderRequest(svg, 1200, 1800, 300))
    """

    def __init__(
        self,
        prober: Optional[CapabilityProber] = None,
        external: Optional[BaseRasterizer] = None,
        library: Optional[BaseRasterizer] = None,
        options: Optional[RenderOptions] = None,
    ) -> None:
        self.options = options or RenderOptions.default()
        if prober is None:
            if self.options.executable == RSVG_CONVERT:
                prober = default_prober()
            else:
                prober = CapabilityProber(self.options.executable)
        self.prober = prober
        self.external = external or RsvgConvertRasterizer(
            executable=self.options.executable,
            timeout=self.options.timeout,
            temp_dir=self.options.temp_dir,
        )
        self.library = library or ResvgRasterizer(timeout=self.options.timeout)

    def describe(self) -> list[BackendDescriptor]:
        """Report the availability of each backend."""
        return [
            BackendDescriptor(Backend.EXTERNAL, self.prober.available()),
            BackendDescriptor(Backend.LIBRARY, True),
        ]

    def choose(self) -> Backend:
        """Pick the backend for one call based on external tool availability."""
        if self.prober.available():
            return Backend.EXTERNAL
        return Backend.LIBRARY

    def backend(self, choice: Backend) -> BaseRasterizer:
        if choice is Backend.EXTERNAL:
            return self.external
        return self.library

    def render(self, request: RenderRequest) -> Image.Image:
        """Render a request with the chosen backend.

        Raises:
            ExternalToolFailure: If rsvg-convert was chosen and failed.
            DecodeFailure: If backend output could not be decoded.
            ResizeFailure: If resampling to the requested size failed.
            RenderTimeout: If the library backend exceeded the deadline.
            TempResourceFailure: If temporary files could not be created.
            ValueError: If the requested size exceeds the configured or
                decoder pixel limits.
        """
        self.options.check_dimensions(request.width_px, request.height_px)
        choice = self.choose()
        logger.debug(f"Selected {choice.value} backend")
        try:
            return self.backend(choice).render_request(request)
        except ExternalToolFailure as e:
            if (
                choice is not Backend.EXTERNAL
                or not self.options.fallback_on_external_failure
            ):
                raise
            logger.warning(f"{e}; falling back to the library backend")
            return self.library.render_request(request)
