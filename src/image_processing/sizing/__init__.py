"""Pure sizing policies used by the renderers and the demo window."""

from .corners import rounded_layout
from .policy import crop_rect, resize_size, resolve_radius

__all__ = ["resize_size", "crop_rect", "resolve_radius", "rounded_layout"]
