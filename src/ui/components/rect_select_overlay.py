"""Rectangle selection overlay drawn on a PyQtGraph plot widget."""

from __future__ import annotations

import logging

import pyqtgraph as pg  # type: ignore[import-untyped]
from PyQt6.QtCore import QEvent, QObject, QPointF, QRectF, Qt
from PyQt6.QtGui import QMouseEvent
from PyQt6.QtWidgets import QGraphicsRectItem

from src.core.config import (
    MIN_SELECT_SIZE_PX,
    SELECT_COVER_FILL,
    SELECT_COVER_LINE_WIDTH,
    SELECT_COVER_STROKE,
)
from src.core.select_controller import SelectController

logger = logging.getLogger(__name__)


class RectSelectOverlay(SelectController):
    """Draws a selection cover while the left button is dragged.

    While enabled, mouse events on the plot viewport are consumed (so the
    view box does not pan) and a finished drag emits ``select_end`` with a
    single range in scene pixels: ``[[[x0, x1], [y0, y1]]]``.
    """

    def __init__(self, plot_widget: pg.PlotWidget, parent: QObject | None = None) -> None:
        """Initialize the overlay.

        Args:
            plot_widget: Plot widget to draw on and listen to.
            parent: Optional parent QObject.
        """
        super().__init__(parent)
        self._plot_widget = plot_widget
        self._start: QPointF | None = None
        self._cover: QGraphicsRectItem | None = None

    def enable(self) -> None:
        was_enabled = self.is_enabled
        super().enable()
        if self.is_enabled and not was_enabled:
            self._plot_widget.viewport().installEventFilter(self)

    def disable(self) -> None:
        if self.is_enabled:
            self._plot_widget.viewport().removeEventFilter(self)
        self._start = None
        super().disable()

    def update(self) -> None:
        """Remove the cover rectangle from the scene."""
        if self._cover is not None:
            scene = self._cover.scene()
            if scene is not None:
                scene.removeItem(self._cover)
            self._cover = None

    def eventFilter(self, obj: QObject | None, event: QEvent | None) -> bool:
        if not self.is_enabled or event is None:
            return False

        event_type = event.type()
        if event_type == QEvent.Type.MouseButtonPress:
            return self._on_press(event)
        if event_type == QEvent.Type.MouseMove:
            return self._on_move(event)
        if event_type == QEvent.Type.MouseButtonRelease:
            return self._on_release(event)
        return False

    def _scene_pos(self, event: QMouseEvent) -> QPointF:
        return self._plot_widget.mapToScene(event.position().toPoint())

    def _on_press(self, event: QMouseEvent) -> bool:
        if event.button() != Qt.MouseButton.LeftButton:
            return False
        self.update()
        self._start = self._scene_pos(event)

        self._cover = QGraphicsRectItem(QRectF(self._start, self._start))
        self._cover.setPen(pg.mkPen(color=SELECT_COVER_STROKE, width=SELECT_COVER_LINE_WIDTH))
        self._cover.setBrush(pg.mkBrush(*SELECT_COVER_FILL))
        self._cover.setZValue(1e6)
        self._plot_widget.scene().addItem(self._cover)
        return True

    def _on_move(self, event: QMouseEvent) -> bool:
        if self._start is None or self._cover is None:
            return False
        current = self._scene_pos(event)
        self._cover.setRect(QRectF(self._start, current).normalized())
        return True

    def _on_release(self, event: QMouseEvent) -> bool:
        if event.button() != Qt.MouseButton.LeftButton or self._start is None:
            return False
        start, end = self._start, self._scene_pos(event)
        self._start = None

        if (
            abs(end.x() - start.x()) < MIN_SELECT_SIZE_PX
            or abs(end.y() - start.y()) < MIN_SELECT_SIZE_PX
        ):
            logger.debug("Selection too small, ignored")
            self.update()
            return True

        ranges = [[[start.x(), end.x()], [start.y(), end.y()]]]
        self.finish_selection(ranges)
        return True
