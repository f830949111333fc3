"""Shared fixtures; Qt runs headless for the whole session."""

from __future__ import annotations

import os

from PySide6 import QtWidgets
import numpy as np
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    """A ``QApplication`` for tests that need widgets or an event loop."""
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def gradient_bgr() -> np.ndarray:
    """1600x800 BGR image whose every pixel is distinguishable."""
    h, w = 800, 1600
    canvas = np.zeros((h, w, 3), dtype=np.uint8)
    canvas[..., 0] = (np.arange(w) % 256).astype(np.uint8)[None, :]
    canvas[..., 1] = (np.arange(h) % 256).astype(np.uint8)[:, None]
    canvas[..., 2] = ((np.arange(w) // 256) * 16).astype(np.uint8)[None, :]
    return canvas
