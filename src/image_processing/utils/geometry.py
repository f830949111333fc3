"""Rect and size arithmetic shared by the sizing policies and the renderers."""

import math

from ..models import Rect, Size

# Float noise tolerated before an edge is pushed to the next pixel.
_SNAP_EPS = 1e-6


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` to the inclusive range ``[lo, hi]``."""
    return max(lo, min(hi, value))


def aspect_ratio(size: Size) -> float:
    """Return ``width / height``, or ``1.0`` when the height is zero.

    Only the height is guarded: a zero width with a positive height yields
    ``0.0``.
    """
    if size.height == 0.0:
        return 1.0
    return size.width / size.height


def scale_rect(rect: Rect, factor: float) -> Rect:
    """Multiply origin and size of ``rect`` uniformly by ``factor``."""
    return Rect(
        rect.x * factor,
        rect.y * factor,
        rect.width * factor,
        rect.height * factor,
    )


def intersect(a: Rect, b: Rect) -> Rect:
    """Return the overlap of ``a`` and ``b``.

    Disjoint rectangles give a zero-area rect placed at the clamped origin.
    """
    x0 = max(a.x, b.x)
    y0 = max(a.y, b.y)
    x1 = min(a.max_x, b.max_x)
    y1 = min(a.max_y, b.max_y)
    return Rect(x0, y0, max(0.0, x1 - x0), max(0.0, y1 - y0))


def contains(outer: Rect, inner: Rect, tol: float = 1e-9) -> bool:
    """True when ``inner`` lies within ``outer`` (edges included)."""
    return (
        inner.x >= outer.x - tol
        and inner.y >= outer.y - tol
        and inner.max_x <= outer.max_x + tol
        and inner.max_y <= outer.max_y + tol
    )


def integral_rect(rect: Rect) -> Rect:
    """Smallest rect with integer edges that contains ``rect``."""
    x0 = math.floor(rect.x + _SNAP_EPS)
    y0 = math.floor(rect.y + _SNAP_EPS)
    x1 = math.ceil(rect.max_x - _SNAP_EPS)
    y1 = math.ceil(rect.max_y - _SNAP_EPS)
    return Rect(float(x0), float(y0), float(x1 - x0), float(y1 - y0))


__all__ = [
    "clamp",
    "aspect_ratio",
    "scale_rect",
    "intersect",
    "contains",
    "integral_rect",
]
