"""In-memory image type and the result type returned by the renderers."""

from __future__ import annotations

from dataclasses import dataclass
import enum
from typing import Optional, Tuple

import cv2  # opencv-python
import numpy as np

from ..models import Size


class RenderError(ValueError):
    """Raised for invalid renderer input or when unwrapping a failed result."""


def _coerce_bgr(pixels: np.ndarray) -> np.ndarray:
    """Return a ``uint8`` BGR or BGRA array regardless of the input layout."""

    arr = np.asarray(pixels)
    if arr.dtype == np.uint16:
        arr = (arr >> 8).astype(np.uint8)
    elif arr.dtype != np.uint8:
        arr = cv2.convertScaleAbs(arr)
    if arr.ndim == 2:
        if arr.size == 0:
            return np.zeros(arr.shape + (3,), dtype=np.uint8)
        return cv2.cvtColor(arr, cv2.COLOR_GRAY2BGR)
    if arr.ndim == 3 and arr.shape[2] in (3, 4):
        return arr
    if arr.ndim == 3 and arr.shape[2] == 1:
        return cv2.cvtColor(arr, cv2.COLOR_GRAY2BGR)
    raise RenderError("Expected a grayscale, BGR or BGRA pixel array.")


@dataclass(frozen=True)
class ScaledImage:
    """Pixels plus the pixel density they are meant to be shown at.

    ``scale`` is the number of pixels per point along each axis, so a
    200x100 pixel buffer at ``scale=2`` measures 100x50 points.
    """

    pixels: np.ndarray
    scale: float = 1.0

    def __post_init__(self) -> None:
        if not self.scale > 0:
            raise RenderError(f"Image scale must be positive, got {self.scale!r}.")
        object.__setattr__(self, "pixels", _coerce_bgr(self.pixels))

    @property
    def pixel_size(self) -> Tuple[int, int]:
        """``(width, height)`` in pixels."""
        h, w = self.pixels.shape[:2]
        return int(w), int(h)

    @property
    def size(self) -> Size:
        w, h = self.pixel_size
        return Size(w / self.scale, h / self.scale)

    @property
    def has_alpha(self) -> bool:
        return self.pixels.shape[2] == 4

    @property
    def is_empty(self) -> bool:
        return self.pixels.size == 0

    def bgra(self) -> np.ndarray:
        if self.has_alpha:
            return self.pixels
        return cv2.cvtColor(self.pixels, cv2.COLOR_BGR2BGRA)


class RenderFailure(str, enum.Enum):
    """Reasons a render or decode can fail on well-formed arguments."""

    DECODE_FAILED = "decode_failed"
    EMPTY_IMAGE = "empty_image"
    EMPTY_CROP = "empty_crop"
    INVALID_SIZE = "invalid_size"


@dataclass(frozen=True)
class RenderResult:
    """Either a rendered image or the reason rendering failed."""

    image: Optional[ScaledImage] = None
    failure: Optional[RenderFailure] = None
    detail: str = ""

    @classmethod
    def success(cls, image: ScaledImage) -> "RenderResult":
        return cls(image=image)

    @classmethod
    def failed(cls, failure: RenderFailure, detail: str = "") -> "RenderResult":
        return cls(failure=failure, detail=detail)

    @property
    def ok(self) -> bool:
        return self.failure is None and self.image is not None

    def unwrap(self) -> ScaledImage:
        if self.image is None or self.failure is not None:
            reason = self.failure.value if self.failure else "no image"
            raise RenderError(f"{reason}: {self.detail}" if self.detail else reason)
        return self.image


__all__ = [
    "RenderError",
    "RenderFailure",
    "RenderResult",
    "ScaledImage",
]
