"""Background decoding through the Qt thread pool."""

from __future__ import annotations

import time
from typing import List

from PySide6 import QtCore
import cv2
import numpy as np

from image_processing.rendering import RenderFailure, RenderResult, ScaledImage
from image_processing.rendering.background import DecodeWorker, decode_in_background


def _png(width: int = 32, height: int = 16) -> bytes:
    pixels = np.full((height, width, 3), 90, dtype=np.uint8)
    ok, buf = cv2.imencode(".png", pixels)
    assert ok
    return buf.tobytes()


def _wait_for(results: List[RenderResult], timeout_s: float = 5.0) -> None:
    deadline = time.monotonic() + timeout_s
    while not results and time.monotonic() < deadline:
        QtCore.QCoreApplication.processEvents()
        time.sleep(0.01)


def test_worker_decodes_bytes() -> None:
    results: List[RenderResult] = []
    worker = DecodeWorker(_png(), scale=2.0)
    worker.signals.finished.connect(results.append)
    worker.run()

    assert len(results) == 1
    image = results[0].unwrap()
    assert image.pixel_size == (32, 16)
    assert image.scale == 2.0


def test_worker_copies_decoded_image() -> None:
    source = ScaledImage(np.zeros((4, 4, 3), dtype=np.uint8), scale=3.0)
    results: List[RenderResult] = []
    worker = DecodeWorker(source)
    worker.signals.finished.connect(results.append)
    worker.run()

    image = results[0].unwrap()
    assert image.scale == 3.0
    assert image.pixels is not source.pixels


def test_worker_reports_decode_failure() -> None:
    results: List[RenderResult] = []
    worker = DecodeWorker(b"garbage")
    worker.signals.finished.connect(results.append)
    worker.run()
    assert results[0].failure is RenderFailure.DECODE_FAILED


def test_decode_in_background_delivers_result(qapp) -> None:
    pool = QtCore.QThreadPool()
    results: List[RenderResult] = []
    worker = decode_in_background(_png(64, 8), results.append, pool=pool)

    assert pool.waitForDone(5000)
    _wait_for(results)

    assert worker is not None
    assert len(results) == 1
    assert results[0].unwrap().pixel_size == (64, 8)
