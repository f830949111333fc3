import numpy as np

from image_processing.rendering import ScaledImage
from image_processing.utils.qt import (
    qimage_to_bgra,
    qimage_to_scaled_image,
    scaled_image_to_qimage,
)


def test_bgr_image_round_trips_through_qimage(gradient_bgr: np.ndarray) -> None:
    source = ScaledImage(gradient_bgr[:37, :53], scale=2.0)
    qimg = scaled_image_to_qimage(source)

    assert (qimg.width(), qimg.height()) == (53, 37)
    assert qimg.devicePixelRatio() == 2.0

    back = qimage_to_scaled_image(qimg)
    assert back.scale == 2.0
    np.testing.assert_array_equal(back.pixels[..., :3], source.pixels)
    assert np.all(back.pixels[..., 3] == 255)


def test_bgra_image_keeps_alpha() -> None:
    pixels = np.zeros((5, 7, 4), dtype=np.uint8)
    pixels[..., 0] = 10
    pixels[..., 1] = 20
    pixels[..., 2] = 30
    pixels[..., 3] = 255
    pixels[2, 3, 3] = 0
    qimg = scaled_image_to_qimage(ScaledImage(pixels))

    bgra = qimage_to_bgra(qimg)
    assert bgra.shape == (5, 7, 4)
    assert tuple(bgra[0, 0]) == (10, 20, 30, 255)
    assert bgra[2, 3, 3] == 0
