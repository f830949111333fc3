"""Utility helpers for geometry and Qt interop."""

from .geometry import (
    aspect_ratio,
    clamp,
    contains,
    integral_rect,
    intersect,
    scale_rect,
)

__all__ = [
    "aspect_ratio",
    "clamp",
    "contains",
    "integral_rect",
    "intersect",
    "scale_rect",
]
