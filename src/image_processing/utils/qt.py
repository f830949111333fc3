"""Qt helper utilities."""

from PySide6 import QtGui
import numpy as np

from ..rendering import ScaledImage


def qimage_to_bgra(img: QtGui.QImage) -> np.ndarray:
    """Convert a :class:`~PySide6.QtGui.QImage` into a BGRA NumPy array."""
    img = img.convertToFormat(QtGui.QImage.Format.Format_RGBA8888)
    width = img.width()
    height = img.height()
    bytes_per_line = img.bytesPerLine()
    arr = np.frombuffer(img.constBits(), np.uint8)
    arr = arr.reshape((height, bytes_per_line))  # include stride
    arr = arr[:, : width * 4].reshape((height, width, 4))
    bgra = arr[..., [2, 1, 0, 3]]
    return np.ascontiguousarray(bgra)


def scaled_image_to_qimage(image: ScaledImage) -> QtGui.QImage:
    """Wrap ``image`` in a ``QImage`` carrying its pixel density.

    The returned image owns a copy of the pixels.
    """
    pixels = np.ascontiguousarray(image.pixels)
    h, w, channels = pixels.shape
    if channels == 4:
        fmt = QtGui.QImage.Format.Format_ARGB32  # BGRA byte order on little endian
    else:
        fmt = QtGui.QImage.Format.Format_BGR888
    qimg = QtGui.QImage(pixels.data, w, h, int(pixels.strides[0]), fmt).copy()
    qimg.setDevicePixelRatio(image.scale)
    return qimg


def qimage_to_scaled_image(img: QtGui.QImage) -> ScaledImage:
    """Inverse of :func:`scaled_image_to_qimage`."""
    return ScaledImage(qimage_to_bgra(img), scale=img.devicePixelRatio())


__all__ = ["qimage_to_bgra", "scaled_image_to_qimage", "qimage_to_scaled_image"]
