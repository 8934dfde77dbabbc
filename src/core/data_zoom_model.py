"""Data zoom control model: option state plus the axis windows it targets."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from src.core.axis_window import AxisWindow
from src.core.config import PERCENT_EXTENT
from src.core.models import AXIS_DIMS, AxisDim, DataZoomOption, RangeEntry

if TYPE_CHECKING:
    from src.core.chart_model import AxisModel, ChartModel

logger = logging.getLogger(__name__)


class DataZoomModel:
    """State of one data zoom control.

    Attributes:
        option: Current declarative option; range fields are rewritten by
            zoom actions through ``set_raw_range``.
        index: Position of the control in the chart option.
        id: Unique control id.
        sub_type: 'select', 'slider' or 'inside'.
    """

    def __init__(self, option: DataZoomOption, index: int, zoom_id: str) -> None:
        self.option = option
        self.index = index
        self.id = zoom_id
        self.sub_type = option.type
        self._axis_windows: dict[tuple[AxisDim, int], AxisWindow] = {}

    def init_axis_windows(self, chart_model: ChartModel) -> None:
        """Create or share the axis windows of every target axis.

        The first control targeting an axis creates and owns its window;
        later controls share it as readers.
        """
        for dim, axis_index in self.each_target_axis():
            window = chart_model.get_axis_window(dim, axis_index)
            if window is None:
                window = AxisWindow(dim, axis_index, self, chart_model)
                chart_model.register_axis_window(window)
            elif not window.hosted_by(self):
                logger.debug(
                    "Data zoom %r shares axis window %s%d as reader",
                    self.id, dim, axis_index,
                )
            self._axis_windows[(dim, axis_index)] = window

            axis_model = chart_model.get_component(f"{dim}Axis", axis_index)
            window.backup_cross_zero(self, not axis_model.option.scale)

    def each_target_axis(self) -> Iterator[tuple[AxisDim, int]]:
        for dim in AXIS_DIMS:
            for axis_index in self.option.axis_indices(dim):
                yield dim, axis_index

    def get_axis_windows(self) -> list[AxisWindow]:
        return list(self._axis_windows.values())

    def get_axis_window(self, dim: AxisDim, axis_index: int) -> AxisWindow | None:
        return self._axis_windows.get((dim, axis_index))

    def targets_axis(self, dim: AxisDim, axis_model: AxisModel, chart_model: ChartModel) -> bool:
        """Whether the configured axis index of ``dim`` resolves to ``axis_model``."""
        indices = self.option.axis_indices(dim)
        if not indices:
            return False
        return chart_model.get_component(f"{dim}Axis", indices[0]) is axis_model

    def _first_window(self) -> AxisWindow | None:
        windows = self.get_axis_windows()
        return windows[0] if windows else None

    def get_percent_range(self) -> list[float]:
        """Return the current [start, end] percent range of the control."""
        window = self._first_window()
        if window is not None:
            return window.get_data_percent_window()
        start = self.option.start if self.option.start is not None else PERCENT_EXTENT[0]
        end = self.option.end if self.option.end is not None else PERCENT_EXTENT[1]
        return [start, end]

    def get_value_range(self) -> list[float] | None:
        window = self._first_window()
        return window.get_data_value_window() if window is not None else None

    def set_raw_range(self, entry: RangeEntry) -> None:
        """Replace the range in the option with a percent or value range."""
        if entry.is_percent:
            self.option.start = entry.start
            self.option.end = entry.end
            self.option.start_value = None
            self.option.end_value = None
        else:
            self.option.start_value = entry.start_value
            self.option.end_value = entry.end_value
            self.option.start = None
            self.option.end = None
        logger.debug("Data zoom %r range set: %s", self.id, entry.to_dict())

    def reset_windows(self) -> None:
        for window in self.get_axis_windows():
            window.reset(self)

    def filter_windows(self) -> None:
        for window in self.get_axis_windows():
            window.filter_data(self)

    def __repr__(self) -> str:
        return f"DataZoomModel({self.id!r}, type={self.sub_type!r})"
