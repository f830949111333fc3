"""Qt application entry point for the image_processing demo."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import sys
from typing import List, Optional

from PySide6 import QtCore, QtGui, QtWidgets
import cv2  # opencv-python
import numpy as np

APP_VERSION: str

if __package__ in (None, ""):
    PACKAGE_ROOT = Path(__file__).resolve().parents[1]
    if str(PACKAGE_ROOT) not in sys.path:
        sys.path.insert(0, str(PACKAGE_ROOT))

    import image_processing as _pkg
    from image_processing.models import (
        Anchor,
        AppConfig,
        Corner,
        FitMode,
        HeightFraction,
        ProcessingOption,
        RadiusSpec,
        Size,
    )
    from image_processing.rendering import (
        RenderResult,
        ScaledImage,
        crop_image,
        decode_image,
        downsample_data,
        resize_image,
        rounded_image,
    )
    from image_processing.rendering.background import DecodeWorker, decode_in_background
    from image_processing.sizing import resize_size
    from image_processing.utils.qt import scaled_image_to_qimage

    APP_VERSION = getattr(_pkg, "__version__", "0.0.0")
else:
    from . import __version__ as APP_VERSION
    from .models import (
        Anchor,
        AppConfig,
        Corner,
        FitMode,
        HeightFraction,
        ProcessingOption,
        RadiusSpec,
        Size,
    )
    from .rendering import (
        RenderResult,
        ScaledImage,
        crop_image,
        decode_image,
        downsample_data,
        resize_image,
        rounded_image,
    )
    from .rendering.background import DecodeWorker, decode_in_background
    from .sizing import resize_size
    from .utils.qt import scaled_image_to_qimage

logger = logging.getLogger(__name__)

PINK = QtGui.QColor(255, 45, 85)
OPTION_LABELS = {
    ProcessingOption.ROUNDED_IMAGE: "Rounded corners",
    ProcessingOption.RESIZE: "Resize",
    ProcessingOption.CROP: "Crop",
    ProcessingOption.BACKGROUND_DECODE: "Background decode",
    ProcessingOption.DOWNSAMPLE: "Downsample",
}


def sample_image(width: int = 1600, height: int = 800) -> ScaledImage:
    """Synthetic landscape test card used until the user opens a file."""

    xs = np.linspace(0.0, 1.0, width, dtype=np.float32)
    ys = np.linspace(0.0, 1.0, height, dtype=np.float32)
    gx, gy = np.meshgrid(xs, ys)
    canvas = np.empty((height, width, 3), dtype=np.uint8)
    canvas[..., 0] = (255 * gx).astype(np.uint8)
    canvas[..., 1] = (255 * gy).astype(np.uint8)
    canvas[..., 2] = (255 * (1.0 - gx)).astype(np.uint8)

    cell = max(8, min(width, height) // 8)
    for cx in range(cell // 2, width, cell):
        for cy in range(cell // 2, height, cell):
            cv2.circle(canvas, (cx, cy), cell // 4, (255, 255, 255), -1, cv2.LINE_AA)
    cv2.rectangle(canvas, (0, 0), (width - 1, height - 1), (0, 0, 0), 6)
    return ScaledImage(canvas, scale=1.0)


# -------------------------------- Image View ----------------------------------


class ImageView(QtWidgets.QWidget):
    """Paints a :class:`ScaledImage` the way an image view with a content mode would."""

    def __init__(
        self,
        size: int,
        content_mode: FitMode = FitMode.NONE,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setFixedSize(size, size)
        self.content_mode = content_mode
        self.background: Optional[QtGui.QColor] = None
        self._image: Optional[ScaledImage] = None
        self._qimage: Optional[QtGui.QImage] = None

    @property
    def image(self) -> Optional[ScaledImage]:
        return self._image

    def view_size(self) -> Size:
        return Size(float(self.width()), float(self.height()))

    def set_image(self, image: Optional[ScaledImage]) -> None:
        self._image = image
        self._qimage = scaled_image_to_qimage(image) if image is not None else None
        self.update()

    def set_rounded_image(
        self,
        image: ScaledImage,
        radius: RadiusSpec,
        corners: Corner = Corner.ALL,
        background: Optional[QtGui.QColor] = None,
    ) -> RenderResult:
        """Round ``image`` for this view's current size and content mode."""
        bg = None
        if background is not None:
            bg = (background.blue(), background.green(), background.red())
        result = rounded_image(
            image,
            radius,
            corners=corners,
            background=bg,
            container_size=self.view_size(),
            mode=self.content_mode,
        )
        self.set_image(result.image if result.ok else image)
        return result

    def image_rect(self) -> QtCore.QRectF:
        """Where the current image is drawn, in widget coordinates."""
        if self._image is None:
            return QtCore.QRectF()
        target = resize_size(self._image.size, self.view_size(), self.content_mode)
        x = (self.width() - target.width) / 2.0
        y = (self.height() - target.height) / 2.0
        return QtCore.QRectF(x, y, target.width, target.height)

    def paintEvent(self, e: QtGui.QPaintEvent) -> None:
        p = QtGui.QPainter(self)
        p.setRenderHint(QtGui.QPainter.RenderHint.SmoothPixmapTransform, True)
        if self.background is not None:
            p.fillRect(self.rect(), self.background)
        if self._qimage is not None:
            p.setClipRect(self.rect())
            p.drawImage(self.image_rect(), self._qimage)
        p.end()


# -------------------------------- Main Window ---------------------------------


class MainWindow(QtWidgets.QWidget):
    optionChosen = QtCore.Signal(object)  # ProcessingOption
    openRequested = QtCore.Signal()

    def __init__(self, cfg: AppConfig, app_version: str) -> None:
        super().__init__(None)
        self._app_version = app_version or "unknown"
        self.setWindowTitle(f"image_processing {self._app_version}")

        self.option_combo = QtWidgets.QComboBox()
        for option, label in OPTION_LABELS.items():
            self.option_combo.addItem(label, userData=option)
        self.option_combo.setCurrentIndex(list(OPTION_LABELS).index(cfg.params.option))
        self.option_combo.currentIndexChanged.connect(self._on_option_index)

        self.open_btn = QtWidgets.QPushButton("Open image…")
        self.open_btn.clicked.connect(self.openRequested)

        self.status_label = QtWidgets.QLabel("Pick a processing option.")
        self.status_label.setWordWrap(True)

        # --- single view page
        self.main_view = ImageView(cfg.ui.view_size)
        single_page = QtWidgets.QWidget(self)
        single_v = QtWidgets.QVBoxLayout(single_page)
        single_v.addWidget(
            self.main_view, alignment=QtCore.Qt.AlignmentFlag.AlignCenter
        )

        # --- rounded corners page: one view per content mode
        rounded_page = QtWidgets.QWidget(self)
        rounded_v = QtWidgets.QVBoxLayout(rounded_page)
        self.rounded_views: List[ImageView] = []
        for mode in (FitMode.ASPECT_FIT, FitMode.ASPECT_FILL):
            label = QtWidgets.QLabel(f"content mode = {mode.value}", rounded_page)
            label.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
            view = ImageView(300, content_mode=mode, parent=rounded_page)
            view.background = PINK
            rounded_v.addWidget(label)
            rounded_v.addWidget(view, alignment=QtCore.Qt.AlignmentFlag.AlignCenter)
            self.rounded_views.append(view)

        self.pages = QtWidgets.QStackedWidget(self)
        self.pages.addWidget(single_page)
        self.pages.addWidget(rounded_page)

        top = QtWidgets.QHBoxLayout()
        top.addWidget(QtWidgets.QLabel("Processing:"))
        top.addWidget(self.option_combo, stretch=1)
        top.addWidget(self.open_btn)

        v = QtWidgets.QVBoxLayout(self)
        v.addLayout(top)
        v.addWidget(self.pages, stretch=1)
        v.addWidget(self.status_label)

    def current_option(self) -> ProcessingOption:
        return ProcessingOption(self.option_combo.currentData())

    def show_rounded_page(self, rounded: bool) -> None:
        self.pages.setCurrentIndex(1 if rounded else 0)

    def set_status(self, text: str) -> None:
        self.status_label.setText(text)

    def _on_option_index(self, idx: int) -> None:
        if idx >= 0:
            self.optionChosen.emit(ProcessingOption(self.option_combo.itemData(idx)))


# ---------------------------- Main Controller ---------------------------------


class MainController(QtCore.QObject):
    def __init__(self, app: QtWidgets.QApplication) -> None:
        super().__init__(None)
        self.app = app
        self.cfg = self._load_config()
        self._decode_worker: Optional[DecodeWorker] = None

        self.source, self.source_bytes = self._load_source(self.cfg.ui.last_image_path)

        self._app_version = app.applicationVersion() or APP_VERSION
        self.window = MainWindow(self.cfg, self._app_version)
        self.window.optionChosen.connect(self.run_option)
        self.window.openRequested.connect(self.open_image)

        self.window.show()
        self.run_option(self.cfg.params.option)

    # ---------------------------- Config I/O ----------------------------------

    def _config_path(self) -> Path:
        return Path.home() / ".image_processing_config.json"

    def _load_config(self) -> AppConfig:
        p = self._config_path()
        if p.exists():
            try:
                return AppConfig.from_json(p.read_text(encoding="utf-8"))
            except (OSError, ValueError, TypeError) as exc:
                logger.warning("Ignoring unreadable config %s: %s", p, exc)
        return AppConfig()

    def _save_config(self) -> None:
        p = self._config_path()
        try:
            p.write_text(self.cfg.to_json(), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not save config %s: %s", p, exc)

    # ---------------------------- Image source --------------------------------

    def _load_source(self, path: str) -> tuple[ScaledImage, bytes]:
        if path:
            try:
                data = Path(path).read_bytes()
            except OSError as exc:
                logger.warning("Could not read %s: %s", path, exc)
            else:
                result = decode_image(data)
                if result.ok:
                    logger.info(
                        "Loaded %s (%dx%d px)", path, *result.unwrap().pixel_size
                    )
                    return result.unwrap(), data
        image = sample_image()
        ok, encoded = cv2.imencode(".png", image.pixels)
        return image, encoded.tobytes() if ok else b""

    def open_image(self) -> None:
        path, _ = QtWidgets.QFileDialog.getOpenFileName(
            self.window,
            "Open image",
            (
                str(Path(self.cfg.ui.last_image_path).parent)
                if self.cfg.ui.last_image_path
                else ""
            ),
            "Images (*.png *.jpg *.jpeg *.bmp *.tif *.tiff *.webp)",
        )
        if not path:
            return
        self.cfg.ui.last_image_path = path
        self.source, self.source_bytes = self._load_source(path)
        self.run_option(self.window.current_option())

    # ---------------------------- Demonstrations ------------------------------

    def run_option(self, option: ProcessingOption) -> None:
        self.cfg.params.option = option
        view = self.window.main_view
        view.set_image(None)
        view.background = PINK
        view.content_mode = FitMode.ASPECT_FIT
        self.window.show_rounded_page(option is ProcessingOption.ROUNDED_IMAGE)

        if option is ProcessingOption.ROUNDED_IMAGE:
            radius = HeightFraction(self.cfg.params.corner_fraction)
            for rounded_view in self.window.rounded_views:
                self._report(rounded_view.set_rounded_image(self.source, radius))
        elif option is ProcessingOption.RESIZE:
            desired = Size(*self.cfg.params.resize_target)
            self._show(resize_image(self.source, desired, FitMode.ASPECT_FIT))
        elif option is ProcessingOption.CROP:
            size = Size(*self.cfg.params.crop_target)
            anchor = Anchor(*self.cfg.params.crop_anchor)
            self._show(crop_image(self.source, size, anchor))
        elif option is ProcessingOption.BACKGROUND_DECODE:
            view.content_mode = FitMode.ASPECT_FILL
            view.background = None
            self.window.set_status("Decoding in the background…")
            self._decode_worker = decode_in_background(
                self.source_bytes, self._on_decoded
            )
        elif option is ProcessingOption.DOWNSAMPLE:
            self._show(
                downsample_data(
                    self.source_bytes, view.view_size(), view.devicePixelRatioF()
                )
            )

    @QtCore.Slot(object)
    def _on_decoded(self, result: RenderResult) -> None:
        self._decode_worker = None
        if self.cfg.params.option is not ProcessingOption.BACKGROUND_DECODE:
            return
        self._show(result)

    def _show(self, result: RenderResult) -> None:
        if result.ok:
            self.window.main_view.set_image(result.image)
        self._report(result)

    def _report(self, result: RenderResult) -> None:
        if result.ok:
            image = result.unwrap()
            size = image.size
            self.window.set_status(
                f"Result: {size.width:.0f}x{size.height:.0f} pt "
                f"@{image.scale:g}x ({image.pixel_size[0]}x{image.pixel_size[1]} px)."
            )
        else:
            failure = result.failure.value if result.failure else "unknown"
            self.window.set_status(f"Failed: {failure} {result.detail}".strip())


# ---------------------------------- Main --------------------------------------


def configure_logging() -> None:
    level = os.environ.get("IMAGE_PROCESSING_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    configure_logging()
    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("image_processing")
    app.setApplicationVersion(APP_VERSION)

    ctrl = MainController(app)
    ret = app.exec()

    ctrl._save_config()
    sys.exit(ret)


if __name__ == "__main__":
    main()
