"""Render request value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RenderRequest:
    """A single SVG rasterization request.

    Attributes:
        svg_content: SVG document text.
        width_px: Output width in pixels, at least 1.
        height_px: Output height in pixels, at least 1.
        dpi: Resolution used to interpret physical units in the SVG.
    """

    svg_content: str
    width_px: int
    height_px: int
    dpi: int

    def __post_init__(self) -> None:
        for name in ("width_px", "height_px", "dpi"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an integer, got {value!r}")
            if value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value}")

    @classmethod
    def from_physical(
        cls,
        svg_content: str,
        width_inches: float,
        height_inches: float,
        dpi: int,
    ) -> "RenderRequest":
        """Build a request from a physical label size in inches."""
        return cls(
            svg_content=svg_content,
            width_px=int(round(width_inches * dpi)),
            height_px=int(round(height_inches * dpi)),
            dpi=dpi,
        )

    @property
    def size(self) -> tuple[int, int]:
        return (self.width_px, self.height_px)
