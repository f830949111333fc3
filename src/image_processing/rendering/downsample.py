"""Thumbnail decoding straight from encoded bytes or files.

Pillow reads the header lazily, so JPEG sources can be decoded at a reduced
DCT scale (``Image.draft``) instead of materialising every pixel first.
"""

from __future__ import annotations

import io
import logging
import math
from os import PathLike
from typing import BinaryIO, Union

from PIL import Image, ImageOps, UnidentifiedImageError
import cv2  # opencv-python
import numpy as np

from ..models import Size
from .image import RenderFailure, RenderResult, ScaledImage

logger = logging.getLogger(__name__)


def max_pixel_size(point_size: Size, display_scale: float) -> int:
    """Longest side, in pixels, a thumbnail for ``point_size`` may have."""

    return int(math.floor(max(point_size.width, point_size.height) * display_scale))


def pil_to_bgr(image: Image.Image) -> np.ndarray:
    """Convert a Pillow image to a BGR (or BGRA when it has alpha) array."""

    has_alpha = image.mode in ("RGBA", "LA", "PA") or (
        image.mode == "P" and "transparency" in image.info
    )
    if has_alpha:
        rgba = np.asarray(image.convert("RGBA"))
        return cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA)
    rgb = np.asarray(image.convert("RGB"))
    return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)


def _thumbnail(
    source: Union[BinaryIO, str, PathLike[str]], max_px: int, display_scale: float
) -> RenderResult:
    if max_px < 1:
        return RenderResult.failed(
            RenderFailure.INVALID_SIZE, f"maximum pixel size {max_px} is empty"
        )
    try:
        with Image.open(source) as img:
            img.draft("RGB", (max_px, max_px))
            oriented = ImageOps.exif_transpose(img)
            oriented.thumbnail((max_px, max_px), Image.Resampling.LANCZOS)
            pixels = pil_to_bgr(oriented)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        logger.warning("Downsampling failed: %s", exc)
        return RenderResult.failed(RenderFailure.DECODE_FAILED, str(exc))

    logger.debug(
        "Downsampled to %dx%d px (limit %d px)",
        pixels.shape[1],
        pixels.shape[0],
        max_px,
    )
    return RenderResult.success(ScaledImage(pixels, scale=display_scale))


def downsample_data(
    data: bytes, point_size: Size, display_scale: float = 1.0
) -> RenderResult:
    """Decode ``data`` into a thumbnail that fits ``point_size`` on screen.

    The longest side is at most ``max(point_size) * display_scale`` pixels;
    smaller sources are never upscaled. EXIF orientation is applied.
    """

    if not data:
        return RenderResult.failed(RenderFailure.DECODE_FAILED, "empty buffer")
    return _thumbnail(
        io.BytesIO(data), max_pixel_size(point_size, display_scale), display_scale
    )


def downsample_file(
    path: Union[str, PathLike[str]], point_size: Size, display_scale: float = 1.0
) -> RenderResult:
    """File based variant of :func:`downsample_data`."""

    return _thumbnail(path, max_pixel_size(point_size, display_scale), display_scale)


__all__ = ["downsample_data", "downsample_file", "max_pixel_size", "pil_to_bgr"]
