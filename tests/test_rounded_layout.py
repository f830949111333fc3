import math

import pytest

from image_processing.models import (
    FitMode,
    HeightFraction,
    PointRadius,
    Size,
    WidthFraction,
)
from image_processing.sizing import rounded_layout


def test_no_container_keeps_image_geometry() -> None:
    layout = rounded_layout(Size(1600, 800), HeightFraction(0.5))
    assert layout.x_offset == 0.0
    assert layout.y_offset == 0.0
    assert layout.scaling_factor == 1.0
    assert layout.draw_size == Size(1600, 800)
    assert layout.corner_radius == 400.0


def test_aspect_fill_trims_sides_of_wide_image() -> None:
    layout = rounded_layout(
        Size(1600, 800), HeightFraction(0.5), Size(300, 300), FitMode.ASPECT_FILL
    )
    assert layout.x_offset == pytest.approx(400.0)
    assert layout.y_offset == 0.0
    assert layout.scaling_factor == pytest.approx(800 / 300)
    assert layout.draw_size == Size(800, 800)
    assert layout.corner_radius == pytest.approx(400.0 * 800 / 300)


def test_aspect_fill_trims_top_and_bottom_of_tall_image() -> None:
    layout = rounded_layout(
        Size(800, 1600), PointRadius(30), Size(300, 300), FitMode.ASPECT_FILL
    )
    assert layout.x_offset == 0.0
    assert layout.y_offset == pytest.approx(400.0)
    assert layout.draw_size == Size(800, 800)
    assert layout.corner_radius == pytest.approx(30 * 800 / 300)


def test_aspect_fit_scales_by_the_long_side() -> None:
    wide = rounded_layout(
        Size(1600, 800), PointRadius(10), Size(300, 300), FitMode.ASPECT_FIT
    )
    assert wide.draw_size == Size(1600, 800)
    assert wide.scaling_factor == pytest.approx(1600 / 300)

    tall = rounded_layout(
        Size(800, 1600), PointRadius(10), Size(300, 300), FitMode.ASPECT_FIT
    )
    assert tall.scaling_factor == pytest.approx(1600 / 300)
    assert tall.corner_radius == pytest.approx(10 * 1600 / 300)


def test_none_mode_with_container_resolves_against_image() -> None:
    layout = rounded_layout(Size(1600, 800), HeightFraction(0.5), Size(300, 200))
    assert layout.scaling_factor == 1.0
    assert layout.corner_radius == 400.0


def test_width_fraction_is_resolved_against_image_then_scaled() -> None:
    layout = rounded_layout(
        Size(1600, 800), WidthFraction(0.1), Size(300, 300), FitMode.ASPECT_FIT
    )
    assert layout.scaling_factor == pytest.approx(1600 / 300)
    assert layout.corner_radius == pytest.approx(160 * 1600 / 300)


def test_collapsed_container_keeps_unit_scale() -> None:
    layout = rounded_layout(
        Size(400, 200), PointRadius(12), Size(0, 0), FitMode.ASPECT_FIT
    )
    assert math.isfinite(layout.scaling_factor)
    assert layout.scaling_factor == 1.0
    assert layout.corner_radius == 12.0
