"""Layout of a rounded-corner render inside a container view."""

from __future__ import annotations

from typing import Optional

from ..models import FitMode, RadiusSpec, RoundedLayout, Size
from ..utils import aspect_ratio
from .policy import resolve_radius


def rounded_layout(
    image_size: Size,
    radius: RadiusSpec,
    container_size: Optional[Size] = None,
    mode: FitMode = FitMode.NONE,
) -> RoundedLayout:
    """Compute how an image is trimmed and rounded for a container.

    The radius is resolved against the image size and multiplied by the
    scaling factor between the image and the container. ``ASPECT_FILL``
    trims the overflow the view would clip anyway.
    """

    container = image_size if container_size is None else container_size
    iw, ih = image_size.width, image_size.height
    cw, ch = container.width, container.height
    container_ratio = aspect_ratio(container)

    x_offset = 0.0
    y_offset = 0.0
    scaling = 1.0

    if container_ratio > aspect_ratio(image_size):
        if mode is FitMode.ASPECT_FILL:
            y_offset = (ih - iw / container_ratio) / 2.0
            scaling = _ratio(iw, cw)
        elif mode is FitMode.ASPECT_FIT:
            scaling = _ratio(ih, ch)
    else:
        if mode is FitMode.ASPECT_FILL:
            x_offset = (iw - ih * container_ratio) / 2.0
            scaling = _ratio(ih, ch)
        elif mode is FitMode.ASPECT_FIT:
            scaling = _ratio(iw, cw)

    draw_size = Size(iw - 2.0 * x_offset, ih - 2.0 * y_offset)
    corner_radius = resolve_radius(radius, image_size) * scaling
    return RoundedLayout(
        x_offset=x_offset,
        y_offset=y_offset,
        scaling_factor=scaling,
        draw_size=draw_size,
        corner_radius=corner_radius,
    )


def _ratio(num: float, den: float) -> float:
    # a collapsed container keeps the image at its own scale
    return num / den if den > 0 else 1.0


__all__ = ["rounded_layout"]
