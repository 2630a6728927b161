"""Rasterizer backends for converting SVG to raster images.

This module provides the RsvgConvertRasterizer, which runs the external
rsvg-convert tool, the ResvgRasterizer for in-process rendering with resvg,
and the BackendSelector that picks one of them per request.
"""

from .base_rasterizer import BaseRasterizer
from .probe import CapabilityProber, default_prober
from .resvg_rasterizer import ResvgRasterizer
from .rsvg_rasterizer import RsvgConvertRasterizer
from .selector import Backend, BackendDescriptor, BackendSelector

__all__ = [
    "Backend",
    "BackendDescriptor",
    "BackendSelector",
    "BaseRasterizer",
    "CapabilityProber",
    "ResvgRasterizer",
    "RsvgConvertRasterizer",
    "default_prober",
]
