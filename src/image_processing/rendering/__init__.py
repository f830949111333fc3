"""Pixel renderers driven by the sizing policies."""

from .downsample import downsample_data, downsample_file
from .image import RenderError, RenderFailure, RenderResult, ScaledImage
from .transforms import (
    crop_image,
    decode_image,
    decoded,
    resize_image,
    rounded_image,
    rounded_rect_mask,
)

__all__ = [
    "RenderError",
    "RenderFailure",
    "RenderResult",
    "ScaledImage",
    "crop_image",
    "decode_image",
    "decoded",
    "downsample_data",
    "downsample_file",
    "resize_image",
    "rounded_image",
    "rounded_rect_mask",
]
