"""Action bus and the processor applying zoom actions to the chart model."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, pyqtSignal

from src.core.config import ZOOM_CHANGE_ACTION
from src.core.models import RangeEntry, ZoomChangeAction

if TYPE_CHECKING:
    from src.core.chart_model import ChartModel
    from src.core.data_zoom_model import DataZoomModel

logger = logging.getLogger(__name__)


class ActionBus(QObject):
    """Broadcasts chart actions to every connected consumer.

    Signals:
        action_dispatched: Emitted with each dispatched action object.
    """

    action_dispatched = pyqtSignal(object)

    def dispatch_action(self, action: ZoomChangeAction) -> None:
        logger.debug("Dispatching %s from %r: %d items", action.type, action.from_, len(action.batch))
        self.action_dispatched.emit(action)


class ZoomProcessor(QObject):
    """Applies zoom-change actions and re-runs the window/filter pass.

    A pass restores every series to its raw data, resets every data zoom
    model's windows, then filters. All resets run before any filter, so
    every window is computed from unfiltered data.

    Signals:
        zoom_applied: Emitted with the action after its pass completed.
    """

    zoom_applied = pyqtSignal(object)

    def __init__(
        self,
        chart_model: ChartModel,
        bus: ActionBus | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._chart_model = chart_model
        if bus is not None:
            bus.action_dispatched.connect(self.handle_action)

    def handle_action(self, action: object) -> None:
        """Apply a zoom-change action; other actions are ignored."""
        if getattr(action, "type", None) != ZOOM_CHANGE_ACTION:
            return

        for item in action.batch:
            zoom_id = item.get("dataZoomId")
            zoom_model = self._chart_model.get_zoom_model(zoom_id)
            if zoom_model is None:
                logger.warning("Zoom action targets unknown data zoom %r", zoom_id)
                continue
            entry = RangeEntry.from_dict(item)
            zoom_model.set_raw_range(entry)
            self._sync_window_owners(zoom_model, entry)

        self.process()
        self.zoom_applied.emit(action)

    def _sync_window_owners(self, zoom_model: DataZoomModel, entry: RangeEntry) -> None:
        """Pass a range on to the owners of the windows a reader shares.

        A reader cannot reset a shared window, so the range is applied to
        the window's owner as well; the linked controls then agree.
        """
        for window in zoom_model.get_axis_windows():
            owner = window.owner
            if owner is zoom_model:
                continue
            owner.set_raw_range(entry)
            logger.debug(
                "Range of %r applied to window owner %r (%s%d)",
                zoom_model.id, owner.id, window.dimension, window.axis_index,
            )

    def process(self) -> None:
        """Run one full reset-then-filter pass over the chart model."""
        for series in self._chart_model.each_series():
            series.restore_data()

        zoom_models = self._chart_model.each_component("dataZoom")
        for zoom_model in zoom_models:
            zoom_model.reset_windows()
        for zoom_model in zoom_models:
            zoom_model.filter_windows()

        for grid_model in self._chart_model.each_component("grid"):
            grid_model.coordinate_system.update_axes(self._chart_model)

        logger.debug("Zoom pass complete for %d data zooms", len(zoom_models))
