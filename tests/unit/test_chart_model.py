# tests/unit/test_chart_model.py
"""Unit tests for ChartModel and its component models."""

import math

import pandas as pd
import pytest

from src.core.chart_model import ChartModel, SeriesModel
from src.core.exceptions import ComponentNotFoundError, UnsupportedCoordinateSystemError
from src.core.models import AxisOption, ChartOption, DataZoomOption, GridOption, SeriesOption


class TestChartModelComponents:
    """Tests for component registration and lookup."""

    def test_axes_indexed_per_dimension(self, build_chart, series_factory) -> None:
        """Axes get ids like 'xAxis1' and resolve by type and index."""
        chart = build_chart(
            [series_factory("s", [1.0])],
            x_axis=[AxisOption(), AxisOption(type="category")],
        )

        axis = chart.get_component("xAxis", 1)

        assert axis.id == "xAxis1"
        assert axis.main_type == "xAxis"
        assert axis.is_category is True

    def test_missing_index_raises(self, build_chart, series_factory) -> None:
        """An out-of-range index raises ComponentNotFoundError."""
        chart = build_chart([series_factory("s", [1.0])])

        with pytest.raises(ComponentNotFoundError, match=r"yAxis\[4\]"):
            chart.get_component("yAxis", 4)

    def test_unknown_type_raises(self, build_chart, series_factory) -> None:
        """Unknown component types raise ComponentNotFoundError."""
        chart = build_chart([series_factory("s", [1.0])])

        with pytest.raises(ComponentNotFoundError):
            chart.each_component("radiusAxis")

    def test_default_grid_created(self, build_chart, series_factory) -> None:
        """A chart without grids gets one default grid."""
        chart = build_chart([series_factory("s", [1.0])])

        grids = chart.each_component("grid")

        assert len(grids) == 1
        assert grids[0].coordinate_system.get_axis("x") is not None

    def test_axes_assigned_to_their_grid(self, build_chart, series_factory) -> None:
        """Axes only join the grid named by their grid_index."""
        chart = build_chart(
            [series_factory("s", [1.0])],
            x_axis=[AxisOption(grid_index=0), AxisOption(grid_index=1)],
            y_axis=[AxisOption(grid_index=0), AxisOption(grid_index=1)],
            grid=[GridOption(), GridOption(top=400)],
        )

        second = chart.get_component("grid", 1).coordinate_system

        assert [a.index for a in second.get_axes("x")] == [1]
        assert [a.index for a in second.get_axes("y")] == [1]

    def test_polar_series_rejected(self) -> None:
        """Non-Cartesian series cannot be zoomed."""
        option = ChartOption(
            x_axis=[AxisOption()],
            y_axis=[AxisOption()],
            series=[
                SeriesOption(
                    name="radar",
                    data=pd.DataFrame({"r": [1.0], "a": [2.0]}),
                    coordinate_system="polar",
                )
            ],
        )

        with pytest.raises(UnsupportedCoordinateSystemError, match="polar"):
            ChartModel(option)


class TestDataZoomRegistration:
    """Tests for data zoom ids and window registration."""

    def test_generated_zoom_ids(self, build_chart, series_factory) -> None:
        """Zooms without an id are named after their position."""
        chart = build_chart(
            [series_factory("s", [1.0])],
            [DataZoomOption(x_axis_index=0), DataZoomOption(id="named", y_axis_index=0)],
        )

        assert [z.id for z in chart.each_component("dataZoom")] == ["dataZoom0", "named"]
        assert chart.get_zoom_model("named").index == 1
        assert chart.get_zoom_model("nope") is None

    def test_query_by_sub_type(self, build_chart, series_factory) -> None:
        """query_components filters by sub type."""
        chart = build_chart(
            [series_factory("s", [1.0])],
            [DataZoomOption(x_axis_index=0), DataZoomOption(type="select", y_axis_index=0)],
        )

        selects = chart.query_components("dataZoom", sub_type="select")

        assert [z.id for z in selects] == ["dataZoom1"]

    def test_one_window_per_axis(self, build_chart, series_factory) -> None:
        """Windows are keyed by dimension and axis index."""
        chart = build_chart(
            [series_factory("s", [1.0])],
            [DataZoomOption(x_axis_index=0, y_axis_index=0), DataZoomOption(x_axis_index=0)],
        )

        windows = chart.each_axis_window()

        assert len(windows) == 2
        assert {(w.dimension, w.axis_index) for w in windows} == {("x", 0), ("y", 0)}

    def test_first_zoom_owns_window(self, build_chart, series_factory) -> None:
        """The first zoom in option order owns a shared window."""
        chart = build_chart(
            [series_factory("s", [1.0])],
            [DataZoomOption(x_axis_index=0), DataZoomOption(x_axis_index=0)],
        )
        first, second = chart.each_component("dataZoom")

        assert chart.get_axis_window("x", 0).hosted_by(first) is True
        assert chart.get_axis_window("x", 0).hosted_by(second) is False

    def test_zoom_on_missing_axis_raises(self, build_chart, series_factory) -> None:
        """A zoom targeting an undeclared axis fails when windows are created."""
        with pytest.raises(ComponentNotFoundError):
            build_chart([series_factory("s", [1.0])], [DataZoomOption(x_axis_index=5)])


class TestSeriesModel:
    """Tests for SeriesModel data handling."""

    def test_set_and_restore_data(self) -> None:
        """restore_data brings back the raw frame."""
        series = SeriesModel(0, SeriesOption(name="s", data=pd.DataFrame({"x": [1.0, 2.0]})))
        series.set_data(series.get_data().iloc[:1])

        series.restore_data()

        assert series.get_data()["x"].tolist() == [1.0, 2.0]

    def test_raw_data_independent_of_option_frame(self) -> None:
        """Changing the option's frame later does not change the raw data."""
        frame = pd.DataFrame({"x": [1.0, 2.0], "y": [3.0, 4.0]})
        series = SeriesModel(0, SeriesOption(name="s", data=frame))

        frame.loc[0, "x"] = 99.0

        assert series.get_raw_data()["x"].tolist() == [1.0, 2.0]

    def test_dimensions_on_axis_skip_missing_columns(self) -> None:
        """Encoded columns missing from the data are ignored."""
        series = SeriesModel(
            0,
            SeriesOption(
                name="s",
                data=pd.DataFrame({"a": [1.0], "b": [2.0]}),
                encode={"x": ["a", "ghost"], "y": ["b"]},
            ),
        )

        assert series.get_dimensions_on_axis("x") == ["a"]
        assert series.get_dimensions_on_axis("y") == ["b"]

    def test_data_extent_empty_column(self) -> None:
        """A column with no valid values has an inverted infinite extent."""
        series = SeriesModel(0, SeriesOption(name="s", data=pd.DataFrame({"x": [float("nan")]})))

        low, high = series.get_data_extent("x")

        assert math.isinf(low) and low > 0
        assert math.isinf(high) and high < 0

    def test_data_extent_current_vs_raw(self) -> None:
        """raw=False reads the filtered frame."""
        series = SeriesModel(0, SeriesOption(name="s", data=pd.DataFrame({"x": [1.0, 5.0, 9.0]})))
        series.set_data(series.get_data().iloc[1:2])

        assert series.get_data_extent("x") == [1.0, 9.0]
        assert series.get_data_extent("x", raw=False) == [5.0, 5.0]
