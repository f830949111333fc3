"""Resize, crop and corner-radius policies.

Every function here is pure: sizes in, sizes or rects out. Nothing touches
pixels, so the policies can be called from any thread.
"""

from __future__ import annotations

from ..models import (
    Anchor,
    FitMode,
    HeightFraction,
    PointRadius,
    RadiusSpec,
    Rect,
    Size,
    WidthFraction,
)
from ..utils import clamp, intersect


def resize_size(
    source: Size, desired: Size, mode: FitMode = FitMode.ASPECT_FIT
) -> Size:
    """Map ``source`` into ``desired`` according to ``mode``.

    ``ASPECT_FIT`` applies the smaller of the two axis scale factors so the
    result fits inside ``desired``; ``ASPECT_FILL`` applies the larger one so
    the result covers ``desired`` and may overflow it. A source with a zero
    dimension has no usable aspect ratio and maps to ``desired``.
    """

    if mode is FitMode.NONE:
        return desired
    if source.width <= 0 or source.height <= 0:
        return desired

    sx = desired.width / source.width
    sy = desired.height / source.height
    factor = min(sx, sy) if mode is FitMode.ASPECT_FIT else max(sx, sy)
    return Size(source.width * factor, source.height * factor)


def crop_rect(source: Size, desired: Size, anchor: Anchor = Anchor.CENTER) -> Rect:
    """Return the crop window of size ``desired`` aligned on ``anchor``.

    The window is clipped to the source bounds, so near the edges it can be
    smaller than ``desired``.
    """

    ax = clamp(anchor.x, 0.0, 1.0)
    ay = clamp(anchor.y, 0.0, 1.0)
    x = ax * source.width - ax * desired.width
    y = ay * source.height - ay * desired.height
    window = Rect(x, y, desired.width, desired.height)
    return intersect(Rect.from_size(source), window)


def resolve_radius(spec: RadiusSpec, reference: Size) -> float:
    """Resolve ``spec`` against ``reference``. No clamping is applied."""

    if isinstance(spec, PointRadius):
        return float(spec.value)
    if isinstance(spec, WidthFraction):
        return reference.width * spec.value
    if isinstance(spec, HeightFraction):
        return reference.height * spec.value
    raise TypeError(f"Unsupported radius specification: {spec!r}")


__all__ = ["resize_size", "crop_rect", "resolve_radius"]
