"""Value types, options and persisted configuration for image_processing."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import enum
import json
from typing import ClassVar, Dict, Tuple, Union


@dataclass(frozen=True)
class Size:
    """Width and height in points."""

    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    """An origin plus a size. Origins may be negative."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_size(cls, size: Size, x: float = 0.0, y: float = 0.0) -> "Rect":
        return cls(x, y, size.width, size.height)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def origin(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class Anchor:
    """Fractional position inside a rectangle; ``(0, 0)`` is the top-left."""

    x: float = 0.5
    y: float = 0.5

    TOP_LEFT: ClassVar["Anchor"]
    CENTER: ClassVar["Anchor"]
    BOTTOM_RIGHT: ClassVar["Anchor"]


Anchor.TOP_LEFT = Anchor(0.0, 0.0)
Anchor.CENTER = Anchor(0.5, 0.5)
Anchor.BOTTOM_RIGHT = Anchor(1.0, 1.0)


class FitMode(str, enum.Enum):
    """How a source size is mapped into a desired size."""

    NONE = "none"  # use the desired size as-is
    ASPECT_FIT = "aspectFit"  # whole content visible
    ASPECT_FILL = "aspectFill"  # container covered, overflow cropped


@dataclass(frozen=True)
class PointRadius:
    """Absolute corner radius in points."""

    value: float


@dataclass(frozen=True)
class WidthFraction:
    """Corner radius as a fraction of the reference width."""

    value: float


@dataclass(frozen=True)
class HeightFraction:
    """Corner radius as a fraction of the reference height."""

    value: float


RadiusSpec = Union[PointRadius, WidthFraction, HeightFraction]


class Corner(enum.IntFlag):
    """Corners of a rectangle that should be rounded."""

    TOP_LEFT = 1
    TOP_RIGHT = 2
    BOTTOM_LEFT = 4
    BOTTOM_RIGHT = 8
    ALL = TOP_LEFT | TOP_RIGHT | BOTTOM_LEFT | BOTTOM_RIGHT


class ProcessingOption(str, enum.Enum):
    """Demonstrations offered by the application window."""

    ROUNDED_IMAGE = "roundedImage"
    RESIZE = "resize"
    CROP = "crop"
    BACKGROUND_DECODE = "backgroundDecode"
    DOWNSAMPLE = "downsample"


@dataclass(frozen=True)
class RoundedLayout:
    """Where and how large a rounded-corner render of an image is drawn.

    Offsets are trimmed from both sides of the image (in image points),
    ``draw_size`` is the size of the resulting canvas and ``corner_radius``
    is expressed in the same image points.
    """

    x_offset: float
    y_offset: float
    scaling_factor: float
    draw_size: Size
    corner_radius: float


@dataclass
class DemoParams:
    """Inputs for the demonstrations run by the application window."""

    option: ProcessingOption = ProcessingOption.ROUNDED_IMAGE
    resize_target: Tuple[float, float] = (500.0, 500.0)
    crop_target: Tuple[float, float] = (1600.0, 800.0)
    crop_anchor: Tuple[float, float] = (0.0, 0.0)
    corner_fraction: float = 0.5


@dataclass
class UIState:
    """User-interface level preferences for the window."""

    view_size: int = 360
    last_image_path: str = ""


@dataclass
class AppConfig:
    """Persisted configuration for the application."""

    params: DemoParams = field(default_factory=DemoParams)
    ui: UIState = field(default_factory=UIState)

    def to_json(self) -> str:
        data = asdict(self)
        data["params"]["option"] = self.params.option.value
        return json.dumps(data, indent=2)

    @staticmethod
    def from_json(text: str) -> "AppConfig":
        data: Dict = json.loads(text)
        p = data.get("params", {})
        u = data.get("ui", {})
        defaults = DemoParams()
        return AppConfig(
            params=DemoParams(
                option=ProcessingOption(p.get("option", defaults.option.value)),
                resize_target=_pair(p.get("resize_target"), defaults.resize_target),
                crop_target=_pair(p.get("crop_target"), defaults.crop_target),
                crop_anchor=_pair(p.get("crop_anchor"), defaults.crop_anchor),
                corner_fraction=float(
                    p.get("corner_fraction", defaults.corner_fraction)
                ),
            ),
            ui=UIState(
                view_size=int(u.get("view_size", 360)),
                last_image_path=str(u.get("last_image_path", "")),
            ),
        )


def _pair(value: object, default: Tuple[float, float]) -> Tuple[float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return default
    return float(value[0]), float(value[1])


__all__ = [
    "Size",
    "Rect",
    "Anchor",
    "FitMode",
    "PointRadius",
    "WidthFraction",
    "HeightFraction",
    "RadiusSpec",
    "Corner",
    "ProcessingOption",
    "RoundedLayout",
    "DemoParams",
    "UIState",
    "AppConfig",
]
