"""Cartesian coordinate system used to map selections into data space.

A Grid occupies a pixel rectangle and holds the x and y axes declared on
it. Pixel space follows screen convention: x grows to the right and y
grows downward, so the y axis maps its data minimum to the bottom edge.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Sequence

from PyQt6.QtCore import QRectF

from src.core.number_utils import linear_map

if TYPE_CHECKING:
    from src.core.chart_model import AxisModel, ChartRegistry, GridModel

logger = logging.getLogger(__name__)


class LinearAxisScale:
    """Data extent of an axis."""

    def __init__(self, extent: Sequence[float] = (0.0, 1.0)) -> None:
        self._extent = [float(extent[0]), float(extent[1])]

    def get_extent(self) -> list[float]:
        return list(self._extent)

    def set_extent(self, start: float, end: float) -> None:
        self._extent = [float(start), float(end)]


class CartesianAxis:
    """One axis of a Cartesian grid, mapping data values to pixels."""

    def __init__(self, dim: str, model: AxisModel) -> None:
        self.dim = dim
        self.model = model
        self.scale = LinearAxisScale()
        self._pixel_extent = [0.0, 1.0]

    @property
    def index(self) -> int:
        return self.model.index

    def set_pixel_extent(self, start: float, end: float) -> None:
        self._pixel_extent = [float(start), float(end)]

    def get_pixel_extent(self) -> list[float]:
        return list(self._pixel_extent)

    def data_to_coord(self, value: float, clamp: bool = False) -> float:
        return linear_map(value, self.scale.get_extent(), self._pixel_extent, clamp)

    def coord_to_data(self, coord: float, clamp: bool = False) -> float:
        return linear_map(coord, self._pixel_extent, self.scale.get_extent(), clamp)


class Cartesian2D:
    """Pair of axes converting between pixel points and data points."""

    def __init__(self, x_axis: CartesianAxis, y_axis: CartesianAxis) -> None:
        self.x_axis = x_axis
        self.y_axis = y_axis

    def point_to_data(self, point: Sequence[float], clamp: bool = False) -> list[float]:
        """Convert a pixel point to data coordinates.

        Args:
            point: [x, y] in pixels.
            clamp: Clamp the result into each axis' data extent.

        Returns:
            [x, y] in data units.
        """
        return [
            self.x_axis.coord_to_data(point[0], clamp),
            self.y_axis.coord_to_data(point[1], clamp),
        ]

    def data_to_point(self, data: Sequence[float], clamp: bool = False) -> list[float]:
        return [
            self.x_axis.data_to_coord(data[0], clamp),
            self.y_axis.data_to_coord(data[1], clamp),
        ]


class Grid:
    """Cartesian coordinate system of one grid component."""

    def __init__(
        self,
        model: GridModel,
        x_axes: list[AxisModel],
        y_axes: list[AxisModel],
    ) -> None:
        self.model = model
        self._axes: dict[str, list[CartesianAxis]] = {
            "x": [CartesianAxis("x", m) for m in x_axes],
            "y": [CartesianAxis("y", m) for m in y_axes],
        }
        option = model.option
        self.resize(QRectF(option.left, option.top, option.width, option.height))

    def get_rect(self) -> QRectF:
        return QRectF(self._rect)

    def resize(self, rect: QRectF) -> None:
        """Move the grid to a new pixel rectangle."""
        self._rect = QRectF(rect)
        for axis in self._axes["x"]:
            axis.set_pixel_extent(rect.left(), rect.right())
        for axis in self._axes["y"]:
            axis.set_pixel_extent(rect.bottom(), rect.top())

    def get_axis(self, dim: str, axis_index: int | None = None) -> CartesianAxis | None:
        """Return an axis of the grid.

        Args:
            dim: 'x' or 'y'.
            axis_index: Global axis index. The first axis of the grid if None.
        """
        axes = self._axes.get(dim, [])
        if axis_index is None:
            return axes[0] if axes else None
        for axis in axes:
            if axis.index == axis_index:
                return axis
        return None

    def get_axes(self, dim: str) -> list[CartesianAxis]:
        return list(self._axes.get(dim, []))

    def get_cartesian(self, x_axis_index: int, y_axis_index: int) -> Cartesian2D | None:
        x_axis = self.get_axis("x", x_axis_index)
        y_axis = self.get_axis("y", y_axis_index)
        if x_axis is None or y_axis is None:
            return None
        return Cartesian2D(x_axis, y_axis)

    def update_axes(self, registry: ChartRegistry) -> None:
        """Fit every axis scale to its zoom window or to its series data.

        Axes with an axis window take its value window; other axes take the
        extent of the current data of the series bound to them.
        """
        for dim, axes in self._axes.items():
            for axis in axes:
                window = registry.get_axis_window(dim, axis.index)
                if window is not None:
                    extent = window.get_data_value_window()
                else:
                    extent = _series_extent(registry, dim, axis.index)
                start, end = extent
                if not (math.isfinite(start) and math.isfinite(end)):
                    start, end = 0.0, 1.0
                axis.scale.set_extent(start, end)
                logger.debug("Grid %d %s axis %d extent: [%s, %s]",
                             self.model.index, dim, axis.index, start, end)


def _series_extent(registry: ChartRegistry, dim: str, axis_index: int) -> list[float]:
    extent = [math.inf, -math.inf]
    for series in registry.each_series():
        if series.get_axis_index(dim) != axis_index:
            continue
        for column in series.get_dimensions_on_axis(dim):
            low, high = series.get_data_extent(column, raw=False)
            extent[0] = min(extent[0], low)
            extent[1] = max(extent[1], high)
    return extent
