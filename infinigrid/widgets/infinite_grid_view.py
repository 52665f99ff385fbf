from pathlib import Path

from PySide6.QtCore import QElapsedTimer, QPointF, QRectF, Qt, QTimer, Slot
from PySide6.QtGui import QColor, QFont, QPainter, QPixmap
from PySide6.QtWidgets import QWidget

from infinigrid.engine.config import GridEngineConfig
from infinigrid.engine.grid_engine import CellFrame, GridEngine
from infinigrid.utils.image_loading import ImagePreloader
from infinigrid.utils.settings import DEFAULT_SETTINGS, settings
from infinigrid.widgets.cell_renderer import CellRenderer, QPainterCellRenderer

HINT_TEXT = 'Drag anywhere to explore the infinite grid'


def event_seconds(event) -> float:
    """When the input event happened, in seconds (Qt stamps events in ms)."""
    return event.timestamp() / 1000


class InfiniteGridView(QWidget):
    """Wrapping image grid panned by dragging, with momentum and hover magnification."""

    def __init__(self, catalog: list[Path], parent=None,
                 renderer: CellRenderer | None = None):
        super().__init__(parent)
        self.catalog = list(catalog)
        self.engine = GridEngine(self.catalog, GridEngineConfig.from_settings())
        self.theme = settings.value('theme', defaultValue=DEFAULT_SETTINGS['theme'], type=str)
        self.renderer = renderer if renderer is not None else QPainterCellRenderer(self.theme)
        self.pixmaps: dict[Path, QPixmap | None] = {}
        self._frames: list[CellFrame] = []
        self._dirty = True
        self._ready = False
        self.engine.interactive = False

        self.setMouseTracking(True)
        self.setCursor(Qt.CursorShape.OpenHandCursor)
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent, True)
        settings.change.connect(self.setting_change)

        self.preloader = ImagePreloader(self)
        self.preloader.image_loaded.connect(self._on_image_loaded)
        self.preloader.progress.connect(self._on_preload_progress)
        self.preloader.ready.connect(self._on_preload_ready)

        # One timer drives momentum and the per-frame position/scale pass.
        self._frame_clock = QElapsedTimer()
        self._frame_timer = QTimer(self)
        self._frame_timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._frame_timer.setInterval(settings.value(
            'frame_interval_ms', defaultValue=DEFAULT_SETTINGS['frame_interval_ms'], type=int))
        self._frame_timer.timeout.connect(self._on_frame)

    def start(self):
        """Kick off preloading; the grid stays hidden until it is ready."""
        config = self.engine.config
        # Enough pixels for the magnified cell on high-DPI screens.
        target_size = int(config.cell_size * (1 + config.proximity_max_boost)
                          * self.devicePixelRatioF())
        self.preloader.start(self.catalog, target_size)
        self._frame_clock.start()
        self._frame_timer.start()

    def teardown(self):
        self._frame_timer.stop()
        self.engine.teardown()
        self.preloader.shutdown()

    @Slot(str, object)
    def setting_change(self, key, value):
        if key == 'theme':
            self.theme = str(value)
            if isinstance(self.renderer, QPainterCellRenderer):
                self.renderer.set_theme(self.theme)
            self.update()

    @Slot(object, object)
    def _on_image_loaded(self, path, qimage):
        # QPixmap must be created on the GUI thread.
        self.pixmaps[path] = QPixmap.fromImage(qimage) if qimage is not None else None
        self._dirty = True

    @Slot(int, int)
    def _on_preload_progress(self, loaded, total):
        if not self._ready:
            self.update()

    @Slot()
    def _on_preload_ready(self):
        self._ready = True
        self.engine.interactive = True
        self._dirty = True
        self.update()

    @property
    def ready(self) -> bool:
        return self._ready

    def _on_frame(self):
        elapsed = self._frame_clock.restart() / 1000
        if not (self._dirty or self.engine.animating):
            return
        self._frames = self.engine.advance_frame(elapsed)
        self._dirty = False
        self.update()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.engine.resize(self.width(), self.height())
        self._dirty = True

    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        if not self.ready:
            return
        position = event.position()
        self.engine.pointer_pressed(position.x(), position.y(), now=event_seconds(event))
        self.setCursor(Qt.CursorShape.ClosedHandCursor)
        self._dirty = True

    def mouseMoveEvent(self, event):
        position = event.position()
        self.engine.pointer_moved(position.x(), position.y(), now=event_seconds(event))
        self._dirty = True

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return
        position = event.position()
        self.engine.pointer_released(position.x(), position.y(), now=event_seconds(event))
        self.setCursor(Qt.CursorShape.OpenHandCursor)
        self._dirty = True

    def leaveEvent(self, event):
        self.engine.pointer_left()
        self._dirty = True
        super().leaveEvent(event)

    def _background_color(self) -> QColor:
        return QColor('#1e1e1e') if self.theme == 'dark' else QColor('#ffffff')

    def _foreground_color(self) -> QColor:
        return QColor(Qt.GlobalColor.white) if self.theme == 'dark' else QColor(Qt.GlobalColor.black)

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.fillRect(self.rect(), self._background_color())
            if not self._ready:
                self._paint_loading(painter)
                return
            layout = self.engine.layout
            if layout is None:
                return
            self.renderer.begin(painter, layout.cell_size)
            for frame in self._frames:
                self.renderer.draw_cell(painter, frame, self.pixmaps.get(frame.cell.image))
            self._paint_hint(painter)
        finally:
            painter.end()

    def _paint_loading(self, painter: QPainter):
        painter.setPen(self._foreground_color())
        painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter,
                         f'Loading {self.preloader.loaded_count} / {self.preloader.total_count} '
                         f'({self.preloader.progress_percent()}%)')

    def _paint_hint(self, painter: QPainter):
        font = QFont(painter.font())
        font.setPointSize(10)
        painter.setFont(font)
        metrics = painter.fontMetrics()
        text_width = metrics.horizontalAdvance(HINT_TEXT)
        pill = QRectF(0, 0, text_width + 48, metrics.height() + 24)
        pill.moveCenter(QPointF(self.rect().center()))
        pill.moveTop(32)
        pill_color = self._foreground_color()
        pill_color.setAlpha(26)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(pill_color)
        painter.drawRoundedRect(pill, pill.height() / 2, pill.height() / 2)
        painter.setPen(self._foreground_color())
        painter.drawText(pill, Qt.AlignmentFlag.AlignCenter, HINT_TEXT)
