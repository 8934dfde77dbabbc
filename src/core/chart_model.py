"""Chart model registry: axes, series, grids and data zoom controls."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Iterator, Protocol

import numpy as np
import pandas as pd

from src.core.config import AXIS_TYPE_CATEGORY, COORDINATE_SYSTEM_CARTESIAN
from src.core.coordinate import Grid
from src.core.data_zoom_model import DataZoomModel
from src.core.exceptions import ComponentNotFoundError, UnsupportedCoordinateSystemError
from src.core.models import (
    AXIS_DIMS,
    AxisDim,
    AxisOption,
    ChartOption,
    GridOption,
    SeriesOption,
)

if TYPE_CHECKING:
    from src.core.axis_window import AxisWindow

logger = logging.getLogger(__name__)


class ChartRegistry(Protocol):
    """Read-only queries the zoom engine needs from a chart model."""

    def each_series(self) -> Iterator[SeriesModel]: ...

    def get_component(self, main_type: str, index: int = 0) -> object: ...

    def each_component(self, main_type: str) -> list: ...

    def query_components(
        self,
        main_type: str,
        sub_type: str | None = None,
        id: str | None = None,
    ) -> list: ...

    def get_axis_window(self, dim: AxisDim, axis_index: int) -> AxisWindow | None: ...


class AxisModel:
    """One Cartesian axis component."""

    def __init__(self, dim: AxisDim, index: int, option: AxisOption) -> None:
        self.dim = dim
        self.index = index
        self.option = option
        self.id = f"{dim}Axis{index}"

    @property
    def main_type(self) -> str:
        return f"{self.dim}Axis"

    @property
    def is_category(self) -> bool:
        return self.option.type == AXIS_TYPE_CATEGORY

    def __repr__(self) -> str:
        return f"AxisModel({self.id!r}, type={self.option.type!r})"


class SeriesModel:
    """One series component holding its raw and current data.

    The raw frame is never modified. The current frame starts as a copy of
    the raw frame and is replaced by zoom filtering; ``restore_data`` brings
    it back before every processing pass.
    """

    def __init__(self, index: int, option: SeriesOption) -> None:
        self.index = index
        self.option = option
        self.name = option.name
        self._raw_data: pd.DataFrame = option.data.copy()
        self._data: pd.DataFrame = self._raw_data.copy()

    def get_axis_index(self, dim: AxisDim) -> int:
        return self.option.x_axis_index if dim == "x" else self.option.y_axis_index

    def get_raw_data(self) -> pd.DataFrame:
        return self._raw_data

    def get_data(self) -> pd.DataFrame:
        return self._data

    def set_data(self, data: pd.DataFrame) -> None:
        self._data = data

    def restore_data(self) -> None:
        self._data = self._raw_data.copy()

    def get_dimensions_on_axis(self, dim: AxisDim) -> list[str]:
        """Return the data columns mapped onto an axis dimension."""
        columns = self.option.encode.get(dim, [])
        return [c for c in columns if c in self._raw_data.columns]

    def get_data_extent(self, column: str, raw: bool = True) -> list[float]:
        """Return [min, max] of a column, ignoring NaN.

        Args:
            column: Data column name.
            raw: Read the unfiltered data when True.

        Returns:
            [min, max], or [inf, -inf] if the column holds no valid values.
        """
        frame = self._raw_data if raw else self._data
        values = pd.to_numeric(frame[column], errors="coerce").to_numpy(dtype=float)
        values = values[~np.isnan(values)]
        if values.size == 0:
            return [math.inf, -math.inf]
        return [float(values.min()), float(values.max())]

    def __repr__(self) -> str:
        return f"SeriesModel({self.index}, {self.name!r}, rows={len(self._data)})"


class GridModel:
    """One grid component and its Cartesian coordinate system."""

    def __init__(self, index: int, option: GridOption) -> None:
        self.index = index
        self.option = option
        self.id = f"grid{index}"
        self.coordinate_system: Grid | None = None


class ChartModel:
    """Registry of every component of one chart.

    Built from a ChartOption; owns the AxisWindow instances shared by the
    data zoom controls that target the same axis.
    """

    def __init__(self, option: ChartOption) -> None:
        self.option = option
        self._axes: dict[AxisDim, list[AxisModel]] = {
            dim: [AxisModel(dim, i, o) for i, o in enumerate(option.axes(dim))]
            for dim in AXIS_DIMS
        }
        self._series: list[SeriesModel] = []
        for index, series_option in enumerate(option.series):
            if series_option.coordinate_system != COORDINATE_SYSTEM_CARTESIAN:
                raise UnsupportedCoordinateSystemError(
                    f"Series '{series_option.name}' uses unsupported coordinate system "
                    f"'{series_option.coordinate_system}'"
                )
            self._series.append(SeriesModel(index, series_option))

        grid_options = option.grid or [GridOption()]
        self._grids = [GridModel(i, o) for i, o in enumerate(grid_options)]
        for grid_model in self._grids:
            grid_model.coordinate_system = Grid(
                grid_model,
                x_axes=[a for a in self._axes["x"] if a.option.grid_index == grid_model.index],
                y_axes=[a for a in self._axes["y"] if a.option.grid_index == grid_model.index],
            )

        self._axis_windows: dict[tuple[str, int], AxisWindow] = {}
        self._data_zooms: list[DataZoomModel] = []
        for index, zoom_option in enumerate(option.data_zoom):
            zoom_id = zoom_option.id if zoom_option.id is not None else f"dataZoom{index}"
            self._data_zooms.append(DataZoomModel(zoom_option, index, zoom_id))
        for zoom_model in self._data_zooms:
            zoom_model.init_axis_windows(self)

        logger.debug(
            "Chart model built: %d x axes, %d y axes, %d series, %d grids, %d data zooms",
            len(self._axes["x"]),
            len(self._axes["y"]),
            len(self._series),
            len(self._grids),
            len(self._data_zooms),
        )

    def _components(self, main_type: str) -> list:
        if main_type == "xAxis":
            return self._axes["x"]
        if main_type == "yAxis":
            return self._axes["y"]
        if main_type == "series":
            return self._series
        if main_type == "grid":
            return self._grids
        if main_type == "dataZoom":
            return self._data_zooms
        raise ComponentNotFoundError(f"Unknown component type '{main_type}'")

    def each_series(self) -> Iterator[SeriesModel]:
        """Iterate series in declaration order."""
        return iter(list(self._series))

    def get_component(self, main_type: str, index: int = 0) -> object:
        """Resolve a component by type and index.

        Raises:
            ComponentNotFoundError: If the type or index does not exist.
        """
        components = self._components(main_type)
        if index < 0 or index >= len(components):
            raise ComponentNotFoundError(f"{main_type}[{index}] does not exist")
        return components[index]

    def each_component(self, main_type: str) -> list:
        return list(self._components(main_type))

    def query_components(
        self,
        main_type: str,
        sub_type: str | None = None,
        id: str | None = None,
    ) -> list:
        """Return components of a type matching an optional sub type and id."""
        result = []
        for component in self._components(main_type):
            if sub_type is not None and getattr(component, "sub_type", None) != sub_type:
                continue
            if id is not None and getattr(component, "id", None) != id:
                continue
            result.append(component)
        return result

    def get_zoom_model(self, zoom_id: str) -> DataZoomModel | None:
        found = self.query_components("dataZoom", id=zoom_id)
        return found[0] if found else None

    def get_axis_window(self, dim: AxisDim, axis_index: int) -> AxisWindow | None:
        return self._axis_windows.get((dim, axis_index))

    def register_axis_window(self, window: AxisWindow) -> None:
        key = (window.dimension, window.axis_index)
        if key in self._axis_windows:
            logger.warning("Axis window %s already registered, keeping existing", key)
            return
        self._axis_windows[key] = window

    def each_axis_window(self) -> list[AxisWindow]:
        return list(self._axis_windows.values())
