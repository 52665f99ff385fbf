"""Rendering adapters that draw engine cell frames."""

from __future__ import annotations

from typing import Protocol

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QPainter, QPainterPath, QPixmap

from infinigrid.engine.grid_engine import CellFrame


class CellRenderer(Protocol):
    def begin(self, painter: QPainter, cell_size: int) -> None: ...
    def draw_cell(self, painter: QPainter, frame: CellFrame, pixmap: QPixmap | None) -> None: ...


def cover_source_rect(image_width: int, image_height: int) -> QRectF:
    """Centered square crop of the image (CSS object-fit: cover for square cells)."""
    side = min(image_width, image_height)
    return QRectF((image_width - side) / 2, (image_height - side) / 2, side, side)


class QPainterCellRenderer:
    """Draws each cell as a rounded, aspect-filled image scaled about its center."""

    def __init__(self, theme: str = 'dark', corner_radius: float = 8.0):
        self.corner_radius = corner_radius
        self.set_theme(theme)
        self._cell_size = 0
        self._clip_path = QPainterPath()

    def set_theme(self, theme: str):
        dark = theme == 'dark'
        self.placeholder_color = QColor(58, 58, 58) if dark else QColor(225, 225, 225)
        self.ring_color = QColor(255, 255, 255, 26) if dark else QColor(0, 0, 0, 26)

    def begin(self, painter: QPainter, cell_size: int):
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
        if cell_size != self._cell_size:
            self._cell_size = cell_size
            self._clip_path = QPainterPath()
            self._clip_path.addRoundedRect(QRectF(0, 0, cell_size, cell_size),
                                           self.corner_radius, self.corner_radius)

    def draw_cell(self, painter: QPainter, frame: CellFrame, pixmap: QPixmap | None):
        size = self._cell_size
        half = size / 2
        painter.save()
        painter.translate(QPointF(frame.x + half, frame.y + half))
        if frame.scale != 1.0:
            painter.scale(frame.scale, frame.scale)
        painter.translate(-half, -half)
        painter.setClipPath(self._clip_path)
        target = QRectF(0, 0, size, size)
        if pixmap is None or pixmap.isNull():
            painter.fillRect(target, self.placeholder_color)
        else:
            painter.drawPixmap(target, pixmap,
                               cover_source_rect(pixmap.width(), pixmap.height()))
        painter.setClipping(False)
        painter.setPen(self.ring_color)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPath(self._clip_path)
        painter.restore()
