from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from PIL import Image as pilimage
from PySide6.QtCore import QObject, QSize, Qt, QTimer, Signal
from PySide6.QtGui import QImage, QImageReader

from infinigrid.engine.errors import ResourceLoadFailure
from infinigrid.engine.preload import PreloadGate, preload_all
from infinigrid.utils.settings import DEFAULT_SETTINGS, settings


def pil_to_qimage(pil_image):
    """Convert PIL image to QImage properly"""
    pil_image = pil_image.convert("RGBA")
    data = pil_image.tobytes("raw", "RGBA")
    # copy() detaches the QImage from the Python bytes buffer.
    return QImage(data, pil_image.width, pil_image.height,
                  QImage.Format_RGBA8888).copy()


def load_image_data(image_path: Path, target_size: int = 0) -> QImage:
    """
    Load one image as a QImage (safe to call from a worker thread).

    Args:
        image_path: Path to the image file
        target_size: If positive, scale so the shorter side covers this many
            pixels (enough for aspect-fill drawing into a square cell)

    Raises:
        ResourceLoadFailure: if neither Qt nor Pillow can decode the file.
    """
    image_path = Path(image_path)
    qimage = None
    qt_error = ''
    if image_path.suffix.lower() != '.jxl':
        image_reader = QImageReader(str(image_path))
        # Rotate the image based on the orientation tag.
        image_reader.setAutoTransform(True)
        if target_size > 0:
            size = image_reader.size()
            if size.isValid() and min(size.width(), size.height()) > target_size:
                image_reader.setScaledSize(
                    size.scaled(QSize(target_size, target_size),
                                Qt.AspectRatioMode.KeepAspectRatioByExpanding))
        qimage = image_reader.read()
        if qimage.isNull():
            qt_error = image_reader.errorString()
            qimage = None

    if qimage is None:
        # Pillow handles formats Qt has no plugin for.
        try:
            with pilimage.open(image_path) as pil_image:
                qimage = pil_to_qimage(pil_image)
        except Exception as e:
            raise ResourceLoadFailure(image_path, qt_error or str(e)) from e
        if target_size > 0 and min(qimage.width(), qimage.height()) > target_size:
            qimage = qimage.scaled(
                target_size, target_size,
                Qt.AspectRatioMode.KeepAspectRatioByExpanding,
                Qt.TransformationMode.SmoothTransformation)
    return qimage


class ImagePreloader(QObject):
    """Loads the whole catalog in the background and gates the grid until done."""

    image_loaded = Signal(object, object, name='imageLoaded')  # (path, QImage or None)
    progress = Signal(int, int, name='preloadProgress')  # (loaded, total)
    ready = Signal(name='preloadReady')
    # Internal hop from the worker thread back to the GUI thread.
    _finished = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.gate: PreloadGate | None = None
        self._executor: ThreadPoolExecutor | None = None
        self._future = None
        self._finished.connect(self._on_all_done)

    @property
    def loaded_count(self) -> int:
        return self.gate.loaded_count if self.gate else 0

    @property
    def total_count(self) -> int:
        return self.gate.total_count if self.gate else 0

    def progress_percent(self) -> int:
        return int(self.gate.progress() * 100) if self.gate else 0

    def is_ready(self) -> bool:
        return self.gate is not None and self.gate.is_ready()

    def start(self, catalog: list[Path], target_size: int = 0):
        settle_ms = settings.value('preload_settle_ms',
                                   defaultValue=DEFAULT_SETTINGS['preload_settle_ms'],
                                   type=int)
        workers = settings.value('preload_workers',
                                 defaultValue=DEFAULT_SETTINGS['preload_workers'],
                                 type=int)
        self.gate = PreloadGate(len(catalog), settle_seconds=max(0, settle_ms) / 1000)
        self._executor = ThreadPoolExecutor(max_workers=max(1, workers),
                                            thread_name_prefix='preload')
        print(f'[PRELOAD] Loading {len(catalog)} images with {max(1, workers)} workers')
        self._future = preload_all(
            catalog,
            lambda path: load_image_data(path, target_size),
            gate=self.gate,
            executor=self._executor,
            on_loaded=self.image_loaded.emit,
            on_progress=self.progress.emit,
        )
        self._future.add_done_callback(lambda _future: self._finished.emit())

    def _on_all_done(self):
        failed = len(self.gate.failed) if self.gate else 0
        print(f'[PRELOAD] All images resolved ({failed} failed)')
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None
        delay_ms = int(self.gate.settle_seconds * 1000) if self.gate else 0
        QTimer.singleShot(delay_ms, self.ready.emit)

    def shutdown(self):
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
