"""Toolbox zoom feature: rectangle selection to axis ranges with undo.

Clicking "zoom" toggles rectangle-selection mode. A finished selection is
converted into value ranges for every data zoom bound to the axes of the
grids it intersects; the resulting snapshot is pushed on the history and
dispatched as one zoom-change action. Clicking "back" pops the history
and dispatches the ranges to restore.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from PyQt6.QtCore import QObject, QRectF, Qt, pyqtSignal

from src.core.exceptions import ComponentNotFoundError
from src.core.models import RangeEntry, Snapshot, ZoomChangeAction
from src.core.number_utils import asc
from src.core.zoom_history import ZoomHistory

if TYPE_CHECKING:
    from src.core.chart_model import AxisModel, ChartModel, GridModel
    from src.core.coordinate import Grid
    from src.core.data_zoom_model import DataZoomModel
    from src.core.select_controller import SelectController

logger = logging.getLogger(__name__)

TOOLBOX_ZOOM_UID = "toolbox-dataZoom"


class ChartApi(Protocol):
    """Services the host chart provides to the toolbox feature."""

    def set_cursor(self, cursor: Qt.CursorShape) -> None: ...

    def dispatch_action(self, action: ZoomChangeAction) -> None: ...

    def create_select_controller(self) -> SelectController: ...


@dataclass
class AxisInfo:
    """One axis of a grid and the select data zoom bound to it, if any."""

    axis_model: AxisModel | None
    axis_index: int
    zoom_model: DataZoomModel | None = None


@dataclass
class CoordInfo:
    """Axes of one grid prepared for selection translation."""

    grid: Grid
    x_info: AxisInfo
    y_info: AxisInfo

    def axis_info(self, dim_idx: int) -> AxisInfo:
        return self.x_info if dim_idx == 0 else self.y_info


class ZoomHistoryController(QObject):
    """Toolbox data zoom feature.

    Signals:
        selected_map_changed: Emitted with a copy of the selected map
            ({'zoom': bool, 'back': bool}) whenever it changes.
    """

    selected_map_changed = pyqtSignal(dict)

    def __init__(
        self,
        chart_model: ChartModel,
        api: ChartApi,
        uid: str = TOOLBOX_ZOOM_UID,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._chart_model = chart_model
        self._api = api
        self.uid = uid
        self._controller: SelectController | None = None
        self._selected_map = {"zoom": False, "back": False}
        self._history = ZoomHistory()
        self._handlers = {
            "zoom": self._toggle_zoom,
            "back": self._back,
        }

    @property
    def history(self) -> ZoomHistory:
        return self._history

    def get_selected_map(self) -> dict[str, bool]:
        return dict(self._selected_map)

    def on_click(self, kind: str) -> None:
        """Handle a toolbar button click ('zoom' or 'back')."""
        handler = self._handlers.get(kind)
        if handler is None:
            logger.warning("Unknown toolbox zoom action %r", kind)
            return
        handler()

    def _toggle_zoom(self) -> None:
        is_zoom_active = self._selected_map["zoom"] = not self._selected_map["zoom"]

        if is_zoom_active:
            self._api.set_cursor(Qt.CursorShape.CrossCursor)
            # Only Cartesian grids; polar coordinate systems are not supported.
            coord_info_list = [
                prepare_coord_info(grid_model, self._chart_model)
                for grid_model in self._chart_model.each_component("grid")
            ]
            self._create_controller(coord_info_list)
        else:
            self._api.set_cursor(Qt.CursorShape.ArrowCursor)
            self._dispose_controller()

        self._emit_selected_map()

    def _back(self) -> None:
        self._dispatch_action(self.pop_history())

    def _emit_selected_map(self) -> None:
        self.selected_map_changed.emit(self.get_selected_map())

    def _create_controller(self, coord_info_list: list[CoordInfo]) -> None:
        self._dispose_controller()
        controller = self._controller = self._api.create_select_controller()
        controller.select_end.connect(
            lambda ranges: self._on_selected(controller, coord_info_list, ranges)
        )
        controller.enable()

    def _dispose_controller(self) -> None:
        if self._controller is not None:
            self._controller.dispose()
            self._controller = None

    def _on_selected(
        self,
        controller: SelectController,
        coord_info_list: list[CoordInfo],
        sel_ranges: list,
    ) -> None:
        if not sel_ranges:
            return
        sel_range = sel_ranges[0]

        # Remove the cover, selection mode stays active.
        controller.update()

        snapshot: Snapshot = {}
        for coord_info in coord_info_list:
            sel_data_range = point_to_data_in_cartesian(sel_range, coord_info)
            if sel_data_range is None:
                continue
            for dim_idx in (0, 1):
                entry = scale_cartesian_axis(sel_data_range, coord_info, dim_idx)
                if entry is not None:
                    snapshot[entry.zoom_id] = entry

        if not snapshot:
            logger.debug("Selection %s hit no zoomable grid", sel_range)
            return

        self.push_history(snapshot)
        self._dispatch_action(snapshot)

    def push_history(self, snapshot: Snapshot) -> None:
        """Push a gesture snapshot, capturing baselines of new controls."""
        self._history.push(snapshot, self._live_percent_range)
        self._selected_map["back"] = self._history.can_go_back
        self._emit_selected_map()

    def pop_history(self) -> Snapshot:
        """Pop the newest gesture and return the ranges to restore."""
        snapshot = self._history.pop()
        self._selected_map["back"] = self._history.can_go_back
        self._emit_selected_map()
        return snapshot

    def _live_percent_range(self, zoom_id: str) -> list[float] | None:
        zoom_model = self._chart_model.get_zoom_model(zoom_id)
        if zoom_model is None:
            return None
        return zoom_model.get_percent_range()

    def _dispatch_action(self, snapshot: Snapshot) -> None:
        batch = [entry.to_dict() for entry in snapshot.values()]
        if not batch:
            return
        self._api.dispatch_action(
            ZoomChangeAction(batch=copy.deepcopy(batch), from_=self.uid)
        )

    def remove(self) -> None:
        """Leave zoom mode state behind: dispose the overlay, drop history."""
        self._dispose_controller()
        self._history.clear()
        self._selected_map = {"zoom": False, "back": False}
        self._emit_selected_map()

    def dispose(self) -> None:
        self.remove()
        self._api.set_cursor(Qt.CursorShape.ArrowCursor)


def prepare_coord_info(grid_model: GridModel, chart_model: ChartModel) -> CoordInfo:
    """Resolve the first x and y axis of a grid and their select data zooms."""
    grid = grid_model.coordinate_system
    x_axis = grid.get_axis("x")
    y_axis = grid.get_axis("y")
    coord_info = CoordInfo(
        grid=grid,
        x_info=AxisInfo(
            axis_model=x_axis.model if x_axis else None,
            axis_index=x_axis.index if x_axis else 0,
        ),
        y_info=AxisInfo(
            axis_model=y_axis.model if y_axis else None,
            axis_index=y_axis.index if y_axis else 0,
        ),
    )

    for zoom_model in chart_model.query_components("dataZoom", sub_type="select"):
        if is_the_axis("x", coord_info.x_info.axis_model, zoom_model, chart_model):
            coord_info.x_info.zoom_model = zoom_model
        if is_the_axis("y", coord_info.y_info.axis_model, zoom_model, chart_model):
            coord_info.y_info.zoom_model = zoom_model

    return coord_info


def is_the_axis(
    dim: str,
    axis_model: AxisModel | None,
    zoom_model: DataZoomModel,
    chart_model: ChartModel,
) -> bool:
    if axis_model is None:
        return False
    try:
        return zoom_model.targets_axis(dim, axis_model, chart_model)
    except ComponentNotFoundError:
        logger.warning("Data zoom %r targets a missing %s axis", zoom_model.id, dim)
        return False


def point_to_data_in_cartesian(sel_range: list, coord_info: CoordInfo) -> list[list[float]] | None:
    """Convert a pixel selection range to ascending data ranges.

    Args:
        sel_range: [[x0, x1], [y0, y1]] in pixels.
        coord_info: Grid and axes to convert against.

    Returns:
        [[x_min, x_max], [y_min, y_max]] in data units, or None if the
        selection does not intersect the grid.
    """
    grid = coord_info.grid
    (x0, x1), (y0, y1) = sel_range
    sel_rect = QRectF(x0, y0, x1 - x0, y1 - y0).normalized()
    if not sel_rect.intersects(grid.get_rect()):
        return None

    cartesian = grid.get_cartesian(coord_info.x_info.axis_index, coord_info.y_info.axis_index)
    if cartesian is None:
        return None
    data_left_top = cartesian.point_to_data([x0, y0], True)
    data_right_bottom = cartesian.point_to_data([x1, y1], True)

    # asc handles inverted axes
    return [
        asc([data_left_top[0], data_right_bottom[0]]),
        asc([data_left_top[1], data_right_bottom[1]]),
    ]


def scale_cartesian_axis(
    sel_data_range: list[list[float]],
    coord_info: CoordInfo,
    dim_idx: int,
) -> RangeEntry | None:
    zoom_model = coord_info.axis_info(dim_idx).zoom_model
    if zoom_model is None:
        return None
    return RangeEntry.value(
        zoom_model.id,
        sel_data_range[dim_idx][0],
        sel_data_range[dim_idx][1],
    )
