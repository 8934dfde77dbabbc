# tests/conftest.py
"""Shared pytest fixtures for zoom engine tests."""

from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from typing import TYPE_CHECKING, Callable

import numpy as np
import pandas as pd
import pytest

from src.core.models import (
    AxisOption,
    ChartOption,
    DataZoomOption,
    GridOption,
    SeriesOption,
)

if TYPE_CHECKING:
    from src.core.chart_model import ChartModel
    from src.core.models import ZoomChangeAction
    from src.core.select_controller import SelectController


def make_series(name: str, x: list[float], y: list[float] | None = None, **kwargs) -> SeriesOption:
    """Build a two-column series option."""
    if y is None:
        y = list(x)
    return SeriesOption(name=name, data=pd.DataFrame({"x": x, "y": y}), **kwargs)


@pytest.fixture
def build_chart() -> Callable[..., "ChartModel"]:
    """Factory building a ChartModel from series and data zoom options."""
    from src.core.chart_model import ChartModel

    def _build(
        series: list[SeriesOption],
        data_zoom: list[DataZoomOption] | None = None,
        x_axis: list[AxisOption] | None = None,
        y_axis: list[AxisOption] | None = None,
        grid: list[GridOption] | None = None,
    ) -> ChartModel:
        option = ChartOption(
            x_axis=x_axis if x_axis is not None else [AxisOption()],
            y_axis=y_axis if y_axis is not None else [AxisOption()],
            series=series,
            data_zoom=data_zoom or [],
            grid=grid or [],
        )
        return ChartModel(option)

    return _build


@pytest.fixture
def scenario_a_series() -> list[SeriesOption]:
    """Three series whose x values span [1, 5], [3, 9] and [0, 2]."""
    return [
        make_series("a", [1.0, 5.0]),
        make_series("b", [3.0, 9.0]),
        make_series("c", [0.0, 2.0]),
    ]


@pytest.fixture
def hundred_series() -> SeriesOption:
    """Series with x and y both at 0, 10, ..., 100."""
    values = [float(v) for v in range(0, 101, 10)]
    return make_series("hundred", values, values)


@pytest.fixture
def square_grid() -> GridOption:
    """100x100 pixel grid at the origin, so pixels map 1:1 onto 0-100 data."""
    return GridOption(left=0.0, top=0.0, width=100.0, height=100.0)


@pytest.fixture
def toolbox_chart(build_chart, hundred_series, square_grid) -> "ChartModel":
    """Chart with one 0-100 series, toolbox select zooms and a processed pass."""
    from src.core.option_preprocessor import add_toolbox_zooms
    from src.core.chart_model import ChartModel
    from src.core.zoom_processor import ZoomProcessor

    option = add_toolbox_zooms(
        ChartOption(
            x_axis=[AxisOption()],
            y_axis=[AxisOption()],
            series=[hundred_series],
            grid=[square_grid],
        )
    )
    model = ChartModel(option)
    ZoomProcessor(model).process()
    return model


class FakeChartApi:
    """Chart api recording cursors and wiring dispatches to a processor."""

    def __init__(self, chart_model: "ChartModel") -> None:
        from src.core.zoom_processor import ActionBus, ZoomProcessor

        self.cursors: list = []
        self.actions: list["ZoomChangeAction"] = []
        self.controllers: list["SelectController"] = []
        self.bus = ActionBus()
        self.processor = ZoomProcessor(chart_model, self.bus)

    def set_cursor(self, cursor) -> None:
        self.cursors.append(cursor)

    def dispatch_action(self, action: "ZoomChangeAction") -> None:
        self.actions.append(action)
        self.bus.dispatch_action(action)

    def create_select_controller(self) -> "SelectController":
        from src.core.select_controller import SelectController

        controller = SelectController()
        self.controllers.append(controller)
        return controller


@pytest.fixture
def fake_api(toolbox_chart) -> FakeChartApi:
    """FakeChartApi bound to the toolbox chart."""
    return FakeChartApi(toolbox_chart)


@pytest.fixture
def sine_frame() -> pd.DataFrame:
    """Dense sine wave sample for widget tests."""
    x = np.linspace(0, 100, 101)
    return pd.DataFrame({"x": x, "y": np.sin(x / 10) * 50 + 50})


@pytest.fixture
def series_factory() -> Callable[..., SeriesOption]:
    """Factory for two-column (x, y) series options."""
    return make_series


@pytest.fixture
def fake_api_factory() -> Callable[["ChartModel"], FakeChartApi]:
    """Factory for FakeChartApi instances bound to any chart model."""
    return FakeChartApi
