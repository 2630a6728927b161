"""Error types raised by the rasterization pipeline."""

from typing import Optional, Sequence


class RasterizeError(Exception):
    """Base class for all rasterization pipeline errors."""


class ProbeInconclusive(RasterizeError):
    """The external tool probe could not determine availability.

    The prober logs this and reports the tool as unavailable; it is never
    raised to callers of ``available()``.
    """


class ExternalToolFailure(RasterizeError):
    """The external rasterizer exited non-zero or produced no output.

    Attributes:
        diagnostics: Combined stdout and stderr captured from the process.
        returncode: Exit status, or None if the process never completed.
        command: Argument list that was executed.
    """

    def __init__(
        self,
        message: str,
        diagnostics: str = "",
        returncode: Optional[int] = None,
        command: Optional[Sequence[str]] = None,
    ) -> None:
        super().__init__(message)
        self.diagnostics = diagnostics
        self.returncode = returncode
        self.command = list(command) if command is not None else []

    def __str__(self) -> str:
        message = super().__str__()
        if self.diagnostics:
            return f"{message}: {self.diagnostics.strip()}"
        return message


class DecodeFailure(RasterizeError):
    """Raster bytes could not be parsed as a valid image."""


class ResizeFailure(RasterizeError):
    """Resampling to the target dimensions failed."""


class TempResourceFailure(RasterizeError):
    """A temporary file could not be created or written."""


class RenderTimeout(RasterizeError, TimeoutError):
    """In-process rendering exceeded the configured deadline."""
