"""Decode images on the Qt thread pool and deliver them via signals."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Union

from PySide6 import QtCore

from .image import RenderResult, ScaledImage
from .transforms import decode_image, decoded

logger = logging.getLogger(__name__)

DecodeSource = Union[bytes, ScaledImage]


class DecodeSignals(QtCore.QObject):
    """Signal carrier; ``QRunnable`` itself cannot emit signals."""

    finished = QtCore.Signal(object)  # RenderResult


class DecodeWorker(QtCore.QRunnable):
    """Decode ``source`` off the GUI thread.

    Bytes are decoded; an already decoded image is copied into a private
    buffer. Receivers living on the GUI thread get ``finished`` through a
    queued connection, so the hand-off back to the UI is Qt's job.
    """

    def __init__(self, source: DecodeSource, scale: float = 1.0) -> None:
        super().__init__()
        self.source = source
        self.scale = scale
        self.signals = DecodeSignals()

    def run(self) -> None:
        logger.debug("Background decode started on %s", QtCore.QThread.currentThread())
        if isinstance(self.source, ScaledImage):
            result = RenderResult.success(decoded(self.source))
        else:
            result = decode_image(self.source, scale=self.scale)
        self.signals.finished.emit(result)


def decode_in_background(
    source: DecodeSource,
    callback: Callable[[RenderResult], None],
    pool: Optional[QtCore.QThreadPool] = None,
    scale: float = 1.0,
) -> DecodeWorker:
    """Start a :class:`DecodeWorker` and connect ``callback`` to its result."""

    worker = DecodeWorker(source, scale=scale)
    worker.signals.finished.connect(callback)
    (pool or QtCore.QThreadPool.globalInstance()).start(worker)
    return worker


__all__ = ["DecodeSignals", "DecodeWorker", "decode_in_background"]
