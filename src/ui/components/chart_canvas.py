"""PyQtGraph chart host with toolbox zoom controls.

Renders the series of a chart option and hosts the toolbox zoom feature:
a checkable "Zoom" button toggles rectangle selection, a "Back" button
undoes the last selection. Zoom actions flow through an ActionBus to the
ZoomProcessor, which filters the series; the canvas then redraws.
"""

from __future__ import annotations

import logging

import numpy as np
import pyqtgraph as pg  # type: ignore[import-untyped]
from PyQt6.QtCore import QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QCursor, QResizeEvent
from PyQt6.QtWidgets import QHBoxLayout, QToolButton, QVBoxLayout, QWidget

from src.core.chart_model import ChartModel
from src.core.exceptions import ChartOptionError
from src.core.models import ChartOption, ZoomChangeAction
from src.core.option_preprocessor import add_toolbox_zooms
from src.core.select_controller import SelectController
from src.core.toolbox_zoom import ZoomHistoryController
from src.core.zoom_processor import ActionBus, ZoomProcessor
from src.ui.components.rect_select_overlay import RectSelectOverlay
from src.ui.constants import Colors, Fonts, SERIES_COLORS, Spacing

logger = logging.getLogger(__name__)

pg.setConfigOptions(antialias=False)


class ChartCanvas(QWidget):
    """Chart widget implementing the toolbox zoom chart api.

    Signals:
        render_failed: Emitted when rendering fails with error message.
        zoom_applied: Emitted with each zoom-change action once the series
            have been filtered and redrawn.

    Attributes:
        _plot_widget: The underlying PyQtGraph PlotWidget.
        _chart_model: Chart model built from the current option.
        _bus: Action bus the toolbox dispatches to.
        _processor: Applies zoom actions to the chart model.
        _toolbox_zoom: Toolbox zoom feature with its history.
    """

    render_failed = pyqtSignal(str)
    zoom_applied = pyqtSignal(object)

    def __init__(self, option: ChartOption | None = None, parent: QWidget | None = None) -> None:
        """Initialize the ChartCanvas.

        Args:
            option: Initial chart option. An empty chart if None.
            parent: Optional parent widget.
        """
        super().__init__(parent)
        self._chart_model: ChartModel | None = None
        self._processor: ZoomProcessor | None = None
        self._toolbox_zoom: ZoomHistoryController | None = None
        self._curves: list[pg.PlotDataItem] = []
        self._bus = ActionBus(self)
        self._setup_ui()
        self._setup_pyqtgraph()
        self.set_option(option or ChartOption())

    def _setup_ui(self) -> None:
        """Set up toolbar and layout."""
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(Spacing.XS)

        toolbar = QHBoxLayout()
        toolbar.setContentsMargins(Spacing.SM, Spacing.XS, Spacing.SM, 0)
        toolbar.addStretch()

        self._zoom_button = QToolButton()
        self._zoom_button.setText("Zoom")
        self._zoom_button.setToolTip("Area zoom")
        self._zoom_button.setCheckable(True)
        self._zoom_button.clicked.connect(lambda: self._on_toolbox_click("zoom"))
        toolbar.addWidget(self._zoom_button)

        self._back_button = QToolButton()
        self._back_button.setText("Back")
        self._back_button.setToolTip("Restore area zoom")
        self._back_button.setEnabled(False)
        self._back_button.clicked.connect(lambda: self._on_toolbox_click("back"))
        toolbar.addWidget(self._back_button)

        self._layout.addLayout(toolbar)

    def _setup_pyqtgraph(self) -> None:
        """Initialize the plot widget."""
        self._plot_widget = pg.PlotWidget()
        self._plot_widget.setBackground(Colors.BG_SURFACE)
        self._plot_widget.showGrid(x=False, y=False)
        self._plot_widget.addLegend()

        axis_pen = pg.mkPen(color=Colors.BG_BORDER)
        for axis_name in ("left", "bottom"):
            axis = self._plot_widget.getPlotItem().getAxis(axis_name)
            axis.setPen(axis_pen)
            axis.setTextPen(pg.mkPen(color=Colors.TEXT_SECONDARY))

        viewbox = self._plot_widget.getViewBox()
        viewbox.setMenuEnabled(False)
        viewbox.disableAutoRange()
        viewbox.sigRangeChanged.connect(self._on_view_range_changed)
        viewbox.sigResized.connect(self._sync_grid_geometry)

        self._layout.addWidget(self._plot_widget)

    @property
    def chart_model(self) -> ChartModel | None:
        return self._chart_model

    @property
    def toolbox_zoom(self) -> ZoomHistoryController | None:
        return self._toolbox_zoom

    @property
    def action_bus(self) -> ActionBus:
        return self._bus

    def set_option(self, option: ChartOption) -> None:
        """Replace the chart option and rebuild the model.

        Toolbox select zooms are added for every axis, the zoom history is
        discarded and all windows are recomputed. The new model is built
        before the current one is released, so a rejected option leaves
        the chart as it was.

        Raises:
            ChartOptionError: If the option is invalid or has more than one grid.
            ZoomError: If the chart model cannot be built from the option.
        """
        errors = option.validate()
        if len(option.grid) > 1:
            errors.append(f"{len(option.grid)} grids given, the canvas draws a single grid")
        if errors:
            logger.error("Chart option rejected: %s", errors)
            raise ChartOptionError("; ".join(errors))

        add_toolbox_zooms(option)
        chart_model = ChartModel(option)

        if self._toolbox_zoom is not None:
            self._toolbox_zoom.dispose()
            self._toolbox_zoom.deleteLater()
        if self._processor is not None:
            self._bus.action_dispatched.disconnect(self._processor.handle_action)
            self._processor.deleteLater()

        self._chart_model = chart_model
        self._processor = ZoomProcessor(self._chart_model, self._bus, self)
        self._processor.zoom_applied.connect(self._on_zoom_applied)
        self._toolbox_zoom = ZoomHistoryController(self._chart_model, self, parent=self)
        self._toolbox_zoom.selected_map_changed.connect(self._on_selected_map_changed)
        self._on_selected_map_changed(self._toolbox_zoom.get_selected_map())

        self._processor.process()
        self._render()

    # Chart api used by the toolbox zoom feature

    def set_cursor(self, cursor: Qt.CursorShape) -> None:
        self._plot_widget.setCursor(QCursor(cursor))

    def dispatch_action(self, action: ZoomChangeAction) -> None:
        self._bus.dispatch_action(action)

    def create_select_controller(self) -> SelectController:
        self._sync_grid_geometry()
        return RectSelectOverlay(self._plot_widget, self)

    def _on_toolbox_click(self, kind: str) -> None:
        if self._toolbox_zoom is not None:
            self._toolbox_zoom.on_click(kind)

    def _on_selected_map_changed(self, selected_map: dict) -> None:
        self._zoom_button.setChecked(selected_map["zoom"])
        self._back_button.setEnabled(selected_map["back"])

    def _on_zoom_applied(self, action: ZoomChangeAction) -> None:
        self._render()
        self.zoom_applied.emit(action)

    def _render(self) -> None:
        """Redraw every series from its current (filtered) data."""
        try:
            for curve in self._curves:
                self._plot_widget.removeItem(curve)
            self._curves = []

            if self._chart_model is None:
                return

            for series in self._chart_model.each_series():
                curve = self._make_curve(series)
                if curve is not None:
                    self._plot_widget.addItem(curve)
                    self._curves.append(curve)

            self._apply_axis_labels()
            self._apply_view_range()
            logger.debug("Chart rendered with %d series", len(self._curves))

        except Exception as e:
            error_msg = f"Failed to render chart: {e}"
            logger.error(error_msg)
            self.render_failed.emit(error_msg)

    def _make_curve(self, series) -> pg.PlotDataItem | None:
        x_columns = series.get_dimensions_on_axis("x")
        y_columns = series.get_dimensions_on_axis("y")
        if not x_columns or not y_columns:
            logger.warning("Series %r has no x/y dimensions, not drawn", series.name)
            return None

        data = series.get_data()
        x_data = data[x_columns[0]].to_numpy(dtype=float)
        y_data = data[y_columns[0]].to_numpy(dtype=float)
        color = SERIES_COLORS[series.index % len(SERIES_COLORS)]

        if series.option.type == "scatter":
            return pg.PlotDataItem(
                x_data, y_data, pen=None, symbol="o", symbolSize=4,
                symbolPen=None, symbolBrush=pg.mkBrush(color=color), name=series.name,
            )
        return pg.PlotDataItem(
            x_data, y_data, pen=pg.mkPen(color=color, width=1.5),
            connect="finite", name=series.name,
        )

    def _apply_axis_labels(self) -> None:
        plot_item = self._plot_widget.getPlotItem()
        for dim, side in (("x", "bottom"), ("y", "left")):
            axes = self._chart_model.each_component(f"{dim}Axis")
            if axes and axes[0].option.name:
                plot_item.setLabel(side, axes[0].option.name, **{
                    "font-family": Fonts.DATA,
                    "color": Colors.TEXT_SECONDARY,
                })

    def _first_grid(self):
        if self._chart_model is None:
            return None
        grids = self._chart_model.each_component("grid")
        return grids[0].coordinate_system if grids else None

    def _apply_view_range(self) -> None:
        """Show the axis extents computed by the last zoom pass."""
        grid = self._first_grid()
        if grid is None:
            return
        x_axis = grid.get_axis("x")
        y_axis = grid.get_axis("y")
        if x_axis is None or y_axis is None:
            return
        x_range = _non_degenerate(x_axis.scale.get_extent())
        y_range = _non_degenerate(y_axis.scale.get_extent())
        self._plot_widget.setRange(xRange=x_range, yRange=y_range, padding=0)

    def _on_view_range_changed(self, *_args) -> None:
        """Keep the grid's axis extents equal to what the view box shows."""
        grid = self._first_grid()
        if grid is None:
            return
        (x_min, x_max), (y_min, y_max) = self._plot_widget.viewRange()
        x_axis = grid.get_axis("x")
        y_axis = grid.get_axis("y")
        if x_axis is not None:
            x_axis.scale.set_extent(x_min, x_max)
        if y_axis is not None:
            y_axis.scale.set_extent(y_min, y_max)
        self._sync_grid_geometry()

    def _sync_grid_geometry(self, *_args) -> None:
        """Place the grid on the view box's scene rectangle."""
        grid = self._first_grid()
        if grid is None:
            return
        rect = self._plot_widget.getViewBox().sceneBoundingRect()
        if rect.width() > 0 and rect.height() > 0:
            grid.resize(QRectF(rect))

    def resizeEvent(self, event: QResizeEvent | None) -> None:
        super().resizeEvent(event)
        self._sync_grid_geometry()

    def clear(self) -> None:
        """Clear the chart."""
        self.set_option(ChartOption())


def _non_degenerate(extent: list[float]) -> tuple[float, float]:
    low, high = extent
    if not np.isfinite(low) or not np.isfinite(high):
        return (0.0, 1.0)
    if low == high:
        return (low - 0.5, high + 0.5)
    return (low, high)
