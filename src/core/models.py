"""Data models for the chart zoom engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

import pandas as pd

from src.core.config import (
    AXIS_TYPE_CATEGORY,
    AXIS_TYPE_VALUE,
    COORDINATE_SYSTEM_CARTESIAN,
    DEFAULT_FILTER_MODE,
    DEFAULT_GRID_HEIGHT,
    DEFAULT_GRID_LEFT,
    DEFAULT_GRID_TOP,
    DEFAULT_GRID_WIDTH,
    FILTER_MODE_EMPTY,
    FILTER_MODE_FILTER,
    ZOOM_CHANGE_ACTION,
)

AxisDim = Literal["x", "y"]
AXIS_DIMS: tuple[AxisDim, AxisDim] = ("x", "y")


def _as_index_list(value: int | list[int] | None) -> list[int]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [int(v) for v in value]
    return [int(value)]


@dataclass
class AxisOption:
    """Declarative option of one Cartesian axis.

    Attributes:
        type: 'value' for continuous axes, 'category' for categorical ones.
        name: Optional axis title.
        scale: When True the axis is not forced to include zero.
        data: Category labels for categorical axes.
        grid_index: Index of the grid the axis belongs to.
    """

    type: Literal["value", "category"] = AXIS_TYPE_VALUE
    name: str | None = None
    scale: bool = False
    data: list[str] = field(default_factory=list)
    grid_index: int = 0

    def validate(self) -> list[str]:
        """Validate the axis option.

        Returns:
            List of validation error messages. Empty list if valid.
        """
        errors: list[str] = []
        if self.type not in (AXIS_TYPE_VALUE, AXIS_TYPE_CATEGORY):
            errors.append(f"Unknown axis type '{self.type}'")
        if self.grid_index < 0:
            errors.append("Axis grid index must not be negative")
        return errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "scale": self.scale,
            "data": list(self.data),
            "gridIndex": self.grid_index,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AxisOption:
        return cls(
            type=data.get("type", AXIS_TYPE_VALUE),
            name=data.get("name"),
            scale=bool(data.get("scale", False)),
            data=list(data.get("data") or []),
            grid_index=int(data.get("gridIndex", 0)),
        )


@dataclass
class SeriesOption:
    """Declarative option of one Cartesian series.

    Attributes:
        name: Series name.
        data: Series rows, one column per dimension.
        type: Chart type used by the host widget ('line' or 'scatter').
        x_axis_index: Index of the x axis the series is bound to.
        y_axis_index: Index of the y axis the series is bound to.
        encode: Mapping of axis dimension to the data columns on that axis.
        coordinate_system: Only 'cartesian2d' is supported.
    """

    name: str
    data: pd.DataFrame
    type: str = "line"
    x_axis_index: int = 0
    y_axis_index: int = 0
    encode: dict[str, list[str]] = field(default_factory=dict)
    coordinate_system: str = COORDINATE_SYSTEM_CARTESIAN

    def __post_init__(self) -> None:
        if not isinstance(self.data, pd.DataFrame):
            self.data = pd.DataFrame(self.data)
        if not self.encode:
            columns = list(self.data.columns)
            self.encode = {
                "x": columns[:1],
                "y": columns[1:2],
            }

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "xAxisIndex": self.x_axis_index,
            "yAxisIndex": self.y_axis_index,
            "dimensions": [str(c) for c in self.data.columns],
            "data": self.data.values.tolist(),
            "encode": {dim: list(cols) for dim, cols in self.encode.items()},
            "coordinateSystem": self.coordinate_system,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SeriesOption:
        dimensions = data.get("dimensions") or ["x", "y"]
        rows = data.get("data") or []
        frame = pd.DataFrame(rows, columns=dimensions, dtype=float)
        encode = data.get("encode") or {}
        return cls(
            name=data.get("name", ""),
            data=frame,
            type=data.get("type", "line"),
            x_axis_index=int(data.get("xAxisIndex", 0)),
            y_axis_index=int(data.get("yAxisIndex", 0)),
            encode={dim: _as_str_list(cols) for dim, cols in encode.items()},
            coordinate_system=data.get("coordinateSystem", COORDINATE_SYSTEM_CARTESIAN),
        )


def _as_str_list(value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


@dataclass
class DataZoomOption:
    """Declarative option of one data zoom control.

    Attributes:
        id: Unique id of the control. Generated by the chart model if None.
        type: 'select' (toolbox), 'slider' or 'inside'.
        x_axis_index: Index or indices of the x axes the control operates.
        y_axis_index: Index or indices of the y axes the control operates.
        start: Lower bound in percent (0-100).
        end: Upper bound in percent (0-100).
        start_value: Lower bound in data units; wins over ``start``.
        end_value: Upper bound in data units; wins over ``end``.
        filter_mode: 'filter' removes out-of-window points, 'empty' masks them.
        series_index: Restricts the series the control filters.
    """

    id: str | None = None
    type: Literal["select", "slider", "inside"] = "slider"
    x_axis_index: int | list[int] | None = None
    y_axis_index: int | list[int] | None = None
    start: float | None = None
    end: float | None = None
    start_value: float | None = None
    end_value: float | None = None
    filter_mode: str = DEFAULT_FILTER_MODE
    series_index: list[int] | None = None

    def axis_indices(self, dim: AxisDim) -> list[int]:
        """Return the axis indices this control targets for a dimension."""
        return _as_index_list(self.x_axis_index if dim == "x" else self.y_axis_index)

    def validate(self) -> list[str]:
        """Validate the option.

        Returns:
            List of validation error messages. Empty list if valid.
        """
        errors: list[str] = []
        if self.filter_mode not in (FILTER_MODE_FILTER, FILTER_MODE_EMPTY):
            errors.append(f"Unknown filter mode '{self.filter_mode}'")
        if not self.axis_indices("x") and not self.axis_indices("y"):
            errors.append("Data zoom must target at least one axis")
        return errors

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "filterMode": self.filter_mode,
        }
        optional = {
            "xAxisIndex": self.x_axis_index,
            "yAxisIndex": self.y_axis_index,
            "start": self.start,
            "end": self.end,
            "startValue": self.start_value,
            "endValue": self.end_value,
            "seriesIndex": self.series_index,
        }
        result.update({k: v for k, v in optional.items() if v is not None})
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DataZoomOption:
        series_index = data.get("seriesIndex")
        return cls(
            id=data.get("id"),
            type=data.get("type", "slider"),
            x_axis_index=data.get("xAxisIndex"),
            y_axis_index=data.get("yAxisIndex"),
            start=data.get("start"),
            end=data.get("end"),
            start_value=data.get("startValue"),
            end_value=data.get("endValue"),
            filter_mode=data.get("filterMode", DEFAULT_FILTER_MODE),
            series_index=_as_index_list(series_index) if series_index is not None else None,
        )


@dataclass
class GridOption:
    """Pixel geometry of one Cartesian grid."""

    left: float = DEFAULT_GRID_LEFT
    top: float = DEFAULT_GRID_TOP
    width: float = DEFAULT_GRID_WIDTH
    height: float = DEFAULT_GRID_HEIGHT

    def to_dict(self) -> dict[str, float]:
        return {"left": self.left, "top": self.top, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GridOption:
        return cls(
            left=float(data.get("left", DEFAULT_GRID_LEFT)),
            top=float(data.get("top", DEFAULT_GRID_TOP)),
            width=float(data.get("width", DEFAULT_GRID_WIDTH)),
            height=float(data.get("height", DEFAULT_GRID_HEIGHT)),
        )


@dataclass
class ChartOption:
    """Complete declarative chart option.

    Attributes:
        x_axis: x axis options, index order.
        y_axis: y axis options, index order.
        series: Series options, index order.
        data_zoom: Data zoom options, including generated toolbox zooms.
        grid: Grid geometries, index order.
    """

    x_axis: list[AxisOption] = field(default_factory=list)
    y_axis: list[AxisOption] = field(default_factory=list)
    series: list[SeriesOption] = field(default_factory=list)
    data_zoom: list[DataZoomOption] = field(default_factory=list)
    grid: list[GridOption] = field(default_factory=list)

    def axes(self, dim: AxisDim) -> list[AxisOption]:
        return self.x_axis if dim == "x" else self.y_axis

    def validate(self) -> list[str]:
        """Validate the option as a whole.

        Returns:
            List of validation error messages. Empty list if valid.
        """
        errors: list[str] = []
        for dim in AXIS_DIMS:
            for index, axis in enumerate(self.axes(dim)):
                errors.extend(f"{dim}Axis[{index}]: {e}" for e in axis.validate())
                if axis.grid_index >= max(len(self.grid), 1):
                    errors.append(f"{dim}Axis[{index}]: grid {axis.grid_index} not defined")
        for index, series in enumerate(self.series):
            if series.coordinate_system != COORDINATE_SYSTEM_CARTESIAN:
                errors.append(
                    f"series[{index}]: unsupported coordinate system '{series.coordinate_system}'"
                )
            if series.x_axis_index >= len(self.x_axis):
                errors.append(f"series[{index}]: xAxis {series.x_axis_index} not defined")
            if series.y_axis_index >= len(self.y_axis):
                errors.append(f"series[{index}]: yAxis {series.y_axis_index} not defined")
        for index, zoom in enumerate(self.data_zoom):
            errors.extend(f"dataZoom[{index}]: {e}" for e in zoom.validate())
            for dim in AXIS_DIMS:
                for axis_index in zoom.axis_indices(dim):
                    if not 0 <= axis_index < len(self.axes(dim)):
                        errors.append(f"dataZoom[{index}]: {dim}Axis {axis_index} not defined")
        return errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "xAxis": [a.to_dict() for a in self.x_axis],
            "yAxis": [a.to_dict() for a in self.y_axis],
            "series": [s.to_dict() for s in self.series],
            "dataZoom": [z.to_dict() for z in self.data_zoom],
            "grid": [g.to_dict() for g in self.grid],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChartOption:
        return cls(
            x_axis=[AxisOption.from_dict(a) for a in _as_list(data.get("xAxis"))],
            y_axis=[AxisOption.from_dict(a) for a in _as_list(data.get("yAxis"))],
            series=[SeriesOption.from_dict(s) for s in _as_list(data.get("series"))],
            data_zoom=[DataZoomOption.from_dict(z) for z in _as_list(data.get("dataZoom"))],
            grid=[GridOption.from_dict(g) for g in _as_list(data.get("grid"))],
        )


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


@dataclass(frozen=True)
class RangeEntry:
    """One control's range inside a history snapshot.

    Baseline entries carry a percent range (``start``/``end``), entries
    produced by selection gestures carry a value range
    (``start_value``/``end_value``).
    """

    zoom_id: str
    start: float | None = None
    end: float | None = None
    start_value: float | None = None
    end_value: float | None = None

    @classmethod
    def percent(cls, zoom_id: str, start: float, end: float) -> RangeEntry:
        return cls(zoom_id=zoom_id, start=start, end=end)

    @classmethod
    def value(cls, zoom_id: str, start_value: float, end_value: float) -> RangeEntry:
        return cls(zoom_id=zoom_id, start_value=start_value, end_value=end_value)

    @property
    def is_percent(self) -> bool:
        return self.start_value is None and self.end_value is None

    def to_dict(self) -> dict[str, Any]:
        if self.is_percent:
            return {"dataZoomId": self.zoom_id, "start": self.start, "end": self.end}
        return {
            "dataZoomId": self.zoom_id,
            "startValue": self.start_value,
            "endValue": self.end_value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RangeEntry:
        return cls(
            zoom_id=data["dataZoomId"],
            start=data.get("start"),
            end=data.get("end"),
            start_value=data.get("startValue"),
            end_value=data.get("endValue"),
        )


Snapshot = dict[str, RangeEntry]


@dataclass
class ZoomChangeAction:
    """Action broadcast when one or more data zoom ranges change.

    Attributes:
        batch: One plain dict per affected control (see RangeEntry.to_dict).
        from_: Id of the originator, so it can ignore its own updates.
        type: Always 'zoom-change'.
    """

    batch: list[dict[str, Any]]
    from_: str | None = None
    type: str = ZOOM_CHANGE_ACTION
