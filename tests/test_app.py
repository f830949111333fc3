"""Smoke tests for the demo window, run on the offscreen platform."""

from __future__ import annotations

import logging
from pathlib import Path
import time

from PySide6 import QtCore
import pytest

from image_processing import app as app_module
from image_processing.models import (
    AppConfig,
    FitMode,
    HeightFraction,
    ProcessingOption,
    Size,
)


@pytest.fixture
def controller(qapp, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    ctrl = app_module.MainController(qapp)
    yield ctrl
    ctrl.window.close()


def test_sample_image_is_landscape() -> None:
    image = app_module.sample_image()
    assert image.pixel_size == (1600, 800)


def test_window_lists_every_option(qapp) -> None:
    window = app_module.MainWindow(AppConfig(), "test")
    assert window.option_combo.count() == len(ProcessingOption)
    assert window.current_option() is ProcessingOption.ROUNDED_IMAGE
    window.close()


def test_image_view_letterboxes_in_aspect_fit(qapp) -> None:
    view = app_module.ImageView(300, content_mode=FitMode.ASPECT_FIT)
    view.set_image(app_module.sample_image())
    rect = view.image_rect()
    assert (rect.width(), rect.height()) == (300.0, 150.0)
    assert rect.y() == 75.0


def test_image_view_rounds_for_its_content_mode(qapp) -> None:
    view = app_module.ImageView(300, content_mode=FitMode.ASPECT_FILL)
    result = view.set_rounded_image(app_module.sample_image(), HeightFraction(0.5))
    assert result.ok
    assert view.image is not None
    assert view.image.pixel_size == (800, 800)
    assert view.image.pixels[0, 0, 3] == 0


def test_controller_runs_each_option(controller) -> None:
    view = controller.window.main_view

    controller.run_option(ProcessingOption.RESIZE)
    assert view.image.pixel_size == (500, 250)

    controller.run_option(ProcessingOption.CROP)
    assert view.image.pixel_size == (1600, 800)

    controller.run_option(ProcessingOption.DOWNSAMPLE)
    limit = int(360 * view.devicePixelRatioF())
    assert max(view.image.pixel_size) == limit


def test_controller_background_decode(controller) -> None:
    controller.run_option(ProcessingOption.BACKGROUND_DECODE)
    assert QtCore.QThreadPool.globalInstance().waitForDone(5000)

    deadline = time.monotonic() + 5.0
    view = controller.window.main_view
    while view.image is None and time.monotonic() < deadline:
        QtCore.QCoreApplication.processEvents()
        time.sleep(0.01)

    assert view.image is not None
    assert view.image.size == Size(1600, 800)
    assert view.content_mode is FitMode.ASPECT_FILL


def test_controller_saves_config(controller, tmp_path: Path) -> None:
    controller.run_option(ProcessingOption.CROP)
    controller._save_config()
    saved = AppConfig.from_json(
        (tmp_path / ".image_processing_config.json").read_text(encoding="utf-8")
    )
    assert saved.params.option is ProcessingOption.CROP


@pytest.mark.parametrize(
    "text",
    ("{not json", '{"params": {"option": "bogus"}}'),
    ids=("invalid-json", "unknown-option"),
)
def test_controller_falls_back_to_default_config(
    qapp,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
    text: str,
) -> None:
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    (tmp_path / ".image_processing_config.json").write_text(text, encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="image_processing.app"):
        ctrl = app_module.MainController(qapp)
    try:
        assert ctrl.cfg == AppConfig()
        assert any(
            "Ignoring unreadable config" in rec.getMessage() for rec in caplog.records
        )
    finally:
        ctrl.window.close()


def test_controller_without_config_uses_defaults(controller) -> None:
    assert controller.cfg == AppConfig()
