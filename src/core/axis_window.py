"""Value/percent window of one axis and the series filtering it drives.

One axis can only be operated by one window. Several data zoom controls
may target the same axis (for example a slider and the toolbox select
zoom); they then share one AxisWindow. Only the control that created it
(the owner) may mutate it, every other control may read it.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

from src.core.config import FILTER_MODE_EMPTY, PERCENT_EXTENT
from src.core.number_utils import asc, is_invalid_number, linear_map

if TYPE_CHECKING:
    from src.core.chart_model import ChartRegistry, SeriesModel
    from src.core.data_zoom_model import DataZoomModel
    from src.core.models import AxisDim

logger = logging.getLogger(__name__)


class AxisWindow:
    """Window over the data domain of one axis.

    Attributes:
        dimension: 'x' or 'y'.
        axis_index: Index of the axis among axes of the same dimension.
    """

    def __init__(
        self,
        dim: AxisDim,
        axis_index: int,
        owner: DataZoomModel,
        registry: ChartRegistry,
    ) -> None:
        """Initialize the window.

        Args:
            dim: Axis dimension the window operates.
            axis_index: Index of the physical axis.
            owner: The data zoom model allowed to mutate the window.
            registry: Chart model used to resolve axes and series.
        """
        self._dim = dim
        self._axis_index = axis_index
        self._owner = owner
        self._registry = registry
        self._cross_zero: bool | None = None
        self._data_extent: list[float] = [0.0, 0.0]
        self._value_window: list[float] = [0.0, 0.0]
        self._percent_window: list[float] = list(PERCENT_EXTENT)

    @property
    def dimension(self) -> AxisDim:
        return self._dim

    @property
    def axis_index(self) -> int:
        return self._axis_index

    @property
    def owner(self) -> DataZoomModel:
        """The data zoom model allowed to mutate the window."""
        return self._owner

    def hosted_by(self, model: object) -> bool:
        """Whether the window is hosted (owned) by the given model."""
        return self._owner is model

    def backup_cross_zero(self, model: object, cross_zero: bool) -> None:
        if self.hosted_by(model):
            self._cross_zero = cross_zero

    def get_cross_zero(self) -> bool | None:
        return self._cross_zero

    def get_data_extent(self) -> list[float]:
        return list(self._data_extent)

    def get_data_value_window(self) -> list[float]:
        return list(self._value_window)

    def get_data_percent_window(self) -> list[float]:
        return list(self._percent_window)

    def get_target_series(self) -> list[SeriesModel]:
        """Return the series bound to this axis, in registry order.

        When the owner restricts its series through ``series_index`` only
        those series are returned.
        """
        series_index = self._owner.option.series_index
        targets = []
        for series in self._registry.each_series():
            if series.get_axis_index(self._dim) != self._axis_index:
                continue
            if series_index is not None and series.index not in series_index:
                continue
            targets.append(series)
        return targets

    def reset(self, model: DataZoomModel) -> None:
        """Recompute data extent and windows from the owner's option."""
        if not self.hosted_by(model):
            return

        axis_model = self._registry.get_component(f"{self._dim}Axis", self._axis_index)
        is_category_filter = axis_model.is_category
        series_models = self.get_target_series()

        data_extent = calculate_data_extent(self._dim, series_models)
        value_window, percent_window = calculate_data_window(
            model, data_extent, is_category_filter
        )

        self._data_extent = list(data_extent)
        self._value_window = list(value_window)
        self._percent_window = list(percent_window)

        logger.debug(
            "Axis window %s%d reset: extent=%s value=%s percent=%s",
            self._dim,
            self._axis_index,
            self._data_extent,
            self._value_window,
            self._percent_window,
        )

    def filter_data(self, model: DataZoomModel) -> None:
        """Filter or mask the data of every target series to the value window.

        Filtering reads the series' current data, which the zoom processor
        restores from the raw data at the start of every pass.
        """
        if not self.hosted_by(model):
            return

        filter_mode = model.option.filter_mode
        low, high = self._value_window

        for series in self.get_target_series():
            data = series.get_data()
            if data is None or data.empty:
                continue

            for column in series.get_dimensions_on_axis(self._dim):
                values = pd.to_numeric(data[column], errors="coerce")
                in_window = (values >= low) & (values <= high)
                if filter_mode == FILTER_MODE_EMPTY:
                    data = data.copy()
                    data[column] = values.where(in_window, np.nan)
                else:
                    data = data[in_window.to_numpy()]

            series.set_data(data)
            logger.debug(
                "Filtered series %r on %s%d (%s): %d rows",
                series.name,
                self._dim,
                self._axis_index,
                filter_mode,
                len(data),
            )


def calculate_data_extent(dim: AxisDim, series_models: list[SeriesModel]) -> list[float]:
    """Fold the raw data extents of all series dimensions on an axis.

    Returns:
        [min, max]; [0, 0] when no series holds valid data.
    """
    data_extent = [math.inf, -math.inf]

    for series in series_models:
        data = series.get_raw_data()
        if data is None or data.empty:
            continue
        for column in series.get_dimensions_on_axis(dim):
            series_extent = series.get_data_extent(column)
            if series_extent[0] < data_extent[0]:
                data_extent[0] = series_extent[0]
            if series_extent[1] > data_extent[1]:
                data_extent[1] = series_extent[1]

    if data_extent[0] > data_extent[1]:
        return [0.0, 0.0]
    return data_extent


def calculate_data_window(
    model: DataZoomModel,
    data_extent: list[float],
    is_category_filter: bool,
) -> tuple[list[float], list[float]]:
    """Derive the value and percent windows from a control's option.

    Each bound is derived independently: an explicit value wins, otherwise
    the percent bound (or the percent extremum) is mapped into the data
    extent. Categorical bounds are rounded outward to whole categories.

    Returns:
        (value_window, percent_window), both ascending.
    """
    option = model.option
    percent_extent = list(PERCENT_EXTENT)
    percent_window = [option.start, option.end]
    value_window = [option.start_value, option.end_value]
    round_fns = (math.floor, math.ceil)

    for idx in (0, 1):
        bound_value = value_window[idx]
        bound_percent = percent_window[idx]
        calc_percent = True

        if is_invalid_number(bound_value):
            if is_invalid_number(bound_percent):
                bound_percent = percent_extent[idx]
            bound_percent = min(max(float(bound_percent), percent_extent[0]), percent_extent[1])
            bound_value = linear_map(float(bound_percent), percent_extent, data_extent, True)
            calc_percent = False

        bound_value = float(bound_value)
        if is_category_filter:
            bound_value = float(round_fns[idx](bound_value))

        if calc_percent:
            bound_percent = linear_map(bound_value, data_extent, percent_extent, True)

        value_window[idx] = bound_value
        percent_window[idx] = float(bound_percent)

    return asc(value_window), asc(percent_window)
