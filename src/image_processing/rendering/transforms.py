"""Pixel operations built on the sizing policies.

The functions here never touch Qt, so they run on worker threads and in
tests without a display. Expected failures come back as
:class:`RenderResult` values; malformed arguments raise :class:`RenderError`.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

import cv2  # opencv-python
import numpy as np

from ..models import Anchor, Corner, FitMode, RadiusSpec, Rect, Size
from ..sizing import crop_rect, resize_size, rounded_layout
from ..utils import clamp, integral_rect, intersect, scale_rect
from .image import RenderError, RenderFailure, RenderResult, ScaledImage

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]  # BGR


def _require_size(size: Size, name: str) -> None:
    if not (math.isfinite(size.width) and math.isfinite(size.height)):
        raise RenderError(f"{name} must be finite, got {size!r}.")
    if size.width < 0 or size.height < 0:
        raise RenderError(f"{name} must not be negative, got {size!r}.")


def rounded_rect_mask(
    width: int, height: int, radius: float, corners: Corner = Corner.ALL
) -> np.ndarray:
    """Anti-aliased coverage mask (``float32`` in ``[0, 1]``) of a rounded rect.

    ``radius`` is in pixels and is clamped to half of the shorter side.
    """

    mask = np.ones((height, width), dtype=np.float32)
    r = clamp(float(radius), 0.0, min(width, height) / 2.0)
    if r <= 0.0 or mask.size == 0:
        return mask

    n = int(math.ceil(r))
    xs = np.arange(width, dtype=np.float64) + 0.5
    ys = np.arange(height, dtype=np.float64) + 0.5

    for corner in (
        Corner.TOP_LEFT,
        Corner.TOP_RIGHT,
        Corner.BOTTOM_LEFT,
        Corner.BOTTOM_RIGHT,
    ):
        if not corners & corner:
            continue
        left = corner in (Corner.TOP_LEFT, Corner.BOTTOM_LEFT)
        top = corner in (Corner.TOP_LEFT, Corner.TOP_RIGHT)
        cx = r if left else width - r
        cy = r if top else height - r
        xsl = slice(0, n) if left else slice(width - n, width)
        ysl = slice(0, n) if top else slice(height - n, height)

        gx, gy = np.meshgrid(xs[xsl], ys[ysl])
        dx = np.maximum(cx - gx, 0.0) if left else np.maximum(gx - cx, 0.0)
        dy = np.maximum(cy - gy, 0.0) if top else np.maximum(gy - cy, 0.0)
        coverage = np.clip(r - np.hypot(dx, dy) + 0.5, 0.0, 1.0)
        mask[ysl, xsl] = np.minimum(mask[ysl, xsl], coverage.astype(np.float32))

    return mask


def rounded_image(
    image: ScaledImage,
    radius: RadiusSpec,
    corners: Corner = Corner.ALL,
    background: Optional[Color] = None,
    container_size: Optional[Size] = None,
    mode: FitMode = FitMode.NONE,
) -> RenderResult:
    """Clip ``image`` to a rounded rectangle sized for its container.

    Without ``background`` the result is BGRA with transparent corners;
    with one the corners are filled and the result is opaque BGR.
    """

    if image.is_empty:
        return RenderResult.failed(RenderFailure.EMPTY_IMAGE, "source has no pixels")
    if container_size is not None:
        _require_size(container_size, "container_size")

    layout = rounded_layout(image.size, radius, container_size, mode)
    s = image.scale
    pw, ph = image.pixel_size
    x0 = int(round(layout.x_offset * s))
    y0 = int(round(layout.y_offset * s))
    region = image.bgra()[y0 : ph - y0, x0 : pw - x0]
    if region.size == 0:
        return RenderResult.failed(
            RenderFailure.EMPTY_IMAGE, "rounded layout trims the whole image"
        )

    h, w = region.shape[:2]
    mask = rounded_rect_mask(w, h, layout.corner_radius * s, corners)
    alpha = region[..., 3].astype(np.float32) / 255.0 * mask

    if background is None:
        out = region.copy()
        out[..., 3] = np.round(alpha * 255.0).astype(np.uint8)
    else:
        fill = np.empty((h, w, 3), dtype=np.float32)
        fill[...] = np.asarray(background, dtype=np.float32)
        a = alpha[..., None]
        blended = region[..., :3].astype(np.float32) * a + fill * (1.0 - a)
        out = np.clip(np.round(blended), 0, 255).astype(np.uint8)

    logger.debug(
        "Rounded %dx%d px image, radius %.1f px, mode %s",
        w,
        h,
        layout.corner_radius * s,
        mode.value,
    )
    return RenderResult.success(ScaledImage(out, scale=s))


def resize_image(
    image: ScaledImage, desired: Size, mode: FitMode = FitMode.NONE
) -> RenderResult:
    """Resample ``image`` to the size chosen by :func:`resize_size`."""

    _require_size(desired, "desired")
    if image.is_empty:
        return RenderResult.failed(RenderFailure.EMPTY_IMAGE, "source has no pixels")

    target = resize_size(image.size, desired, mode)
    tw = int(round(target.width * image.scale))
    th = int(round(target.height * image.scale))
    if tw < 1 or th < 1:
        logger.warning("Resize target %s collapses to %dx%d px", target, tw, th)
        return RenderResult.failed(
            RenderFailure.INVALID_SIZE, f"target {tw}x{th} px is empty"
        )

    pw, ph = image.pixel_size
    shrinking = tw * th < pw * ph
    interpolation = cv2.INTER_AREA if shrinking else cv2.INTER_CUBIC
    resized = cv2.resize(image.pixels, (tw, th), interpolation=interpolation)
    return RenderResult.success(ScaledImage(resized, scale=image.scale))


def crop_image(
    image: ScaledImage, size: Size, anchor: Anchor = Anchor.CENTER
) -> RenderResult:
    """Cut a ``size`` window out of ``image`` aligned on ``anchor``.

    Near the edges the window is clipped, so the result can be smaller than
    ``size``.
    """

    _require_size(size, "size")
    rect = crop_rect(image.size, size, anchor)
    if rect.is_empty:
        return RenderResult.failed(RenderFailure.EMPTY_CROP, f"crop window {rect}")

    pw, ph = image.pixel_size
    bounds = Rect(0.0, 0.0, float(pw), float(ph))
    px = intersect(bounds, integral_rect(scale_rect(rect, image.scale)))
    if px.is_empty:
        return RenderResult.failed(RenderFailure.EMPTY_CROP, f"pixel window {px}")

    x0, y0 = int(px.x), int(px.y)
    x1, y1 = int(px.max_x), int(px.max_y)
    cropped = np.ascontiguousarray(image.pixels[y0:y1, x0:x1])
    return RenderResult.success(ScaledImage(cropped, scale=image.scale))


def decode_image(data: bytes, scale: float = 1.0) -> RenderResult:
    """Decode encoded image bytes (PNG, JPEG, ...) into pixels."""

    if not data:
        return RenderResult.failed(RenderFailure.DECODE_FAILED, "empty buffer")
    buf = np.frombuffer(data, dtype=np.uint8)
    try:
        pixels = cv2.imdecode(buf, cv2.IMREAD_UNCHANGED)
    except cv2.error as exc:
        logger.warning("OpenCV rejected image buffer: %s", exc)
        return RenderResult.failed(RenderFailure.DECODE_FAILED, str(exc))
    if pixels is None or pixels.size == 0:
        logger.warning("Could not decode %d bytes of image data", len(data))
        return RenderResult.failed(
            RenderFailure.DECODE_FAILED, "unrecognised image data"
        )
    return RenderResult.success(ScaledImage(pixels, scale=scale))


def decoded(image: ScaledImage) -> ScaledImage:
    """Return a private, contiguous copy of ``image`` ready for display."""

    return ScaledImage(np.ascontiguousarray(image.pixels).copy(), scale=image.scale)


__all__ = [
    "rounded_rect_mask",
    "rounded_image",
    "resize_image",
    "crop_image",
    "decode_image",
    "decoded",
]
