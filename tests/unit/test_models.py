# tests/unit/test_models.py
"""Unit tests for chart option data models."""

import pandas as pd

from src.core.models import (
    AxisOption,
    ChartOption,
    DataZoomOption,
    GridOption,
    RangeEntry,
    SeriesOption,
    ZoomChangeAction,
)


class TestAxisOption:
    """Tests for AxisOption."""

    def test_defaults(self) -> None:
        """Default axis is a value axis on grid 0."""
        axis = AxisOption()

        assert axis.type == "value"
        assert axis.scale is False
        assert axis.grid_index == 0
        assert axis.validate() == []

    def test_unknown_type_invalid(self) -> None:
        """An unknown axis type is reported."""
        assert AxisOption(type="log").validate() == ["Unknown axis type 'log'"]

    def test_from_dict_camel_case(self) -> None:
        """JSON keys use camelCase."""
        axis = AxisOption.from_dict({"type": "category", "data": ["a", "b"], "gridIndex": 1})

        assert axis.type == "category"
        assert axis.data == ["a", "b"]
        assert axis.grid_index == 1


class TestSeriesOption:
    """Tests for SeriesOption."""

    def test_default_encode_uses_first_two_columns(self) -> None:
        """Without encode the first column is x and the second is y."""
        series = SeriesOption(name="s", data=pd.DataFrame({"t": [1], "v": [2], "w": [3]}))

        assert series.encode == {"x": ["t"], "y": ["v"]}

    def test_non_frame_data_converted(self) -> None:
        """Data given as a dict of columns becomes a DataFrame."""
        series = SeriesOption(name="s", data={"x": [1.0, 2.0], "y": [3.0, 4.0]})

        assert isinstance(series.data, pd.DataFrame)
        assert series.data["y"].tolist() == [3.0, 4.0]

    def test_from_dict_rows_and_dimensions(self) -> None:
        """Rows are read against the declared dimensions."""
        series = SeriesOption.from_dict(
            {
                "name": "price",
                "type": "scatter",
                "dimensions": ["time", "price"],
                "data": [[0, 10], [1, 12]],
                "encode": {"x": "time", "y": ["price"]},
                "yAxisIndex": 1,
            }
        )

        assert series.data["price"].tolist() == [10.0, 12.0]
        assert series.encode == {"x": ["time"], "y": ["price"]}
        assert series.y_axis_index == 1
        assert series.type == "scatter"

    def test_to_dict_round_trip(self) -> None:
        """to_dict output is accepted by from_dict."""
        series = SeriesOption(name="s", data=pd.DataFrame({"x": [1.0], "y": [2.0]}))

        restored = SeriesOption.from_dict(series.to_dict())

        pd.testing.assert_frame_equal(restored.data, series.data)
        assert restored.encode == series.encode


class TestDataZoomOption:
    """Tests for DataZoomOption."""

    def test_axis_indices_scalar_and_list(self) -> None:
        """Axis indices normalise to lists."""
        zoom = DataZoomOption(x_axis_index=1, y_axis_index=[0, 2])

        assert zoom.axis_indices("x") == [1]
        assert zoom.axis_indices("y") == [0, 2]

    def test_zoom_without_axis_invalid(self) -> None:
        """A zoom must target at least one axis."""
        assert DataZoomOption().validate() == ["Data zoom must target at least one axis"]

    def test_unknown_filter_mode_invalid(self) -> None:
        """Filter mode is either 'filter' or 'empty'."""
        errors = DataZoomOption(x_axis_index=0, filter_mode="weakFilter").validate()

        assert errors == ["Unknown filter mode 'weakFilter'"]

    def test_to_dict_omits_unset_bounds(self) -> None:
        """Unset range fields are left out of the JSON form."""
        data = DataZoomOption(id="z", x_axis_index=0, start=10).to_dict()

        assert data == {
            "id": "z",
            "type": "slider",
            "filterMode": "filter",
            "xAxisIndex": 0,
            "start": 10,
        }

    def test_from_dict(self) -> None:
        """camelCase keys map onto the option fields."""
        zoom = DataZoomOption.from_dict(
            {"type": "inside", "yAxisIndex": 0, "startValue": 5, "endValue": 9, "seriesIndex": 2}
        )

        assert zoom.type == "inside"
        assert zoom.axis_indices("y") == [0]
        assert (zoom.start_value, zoom.end_value) == (5, 9)
        assert zoom.series_index == [2]


class TestChartOption:
    """Tests for ChartOption."""

    def test_validate_reports_missing_axes(self) -> None:
        """Series bound to undeclared axes are reported."""
        option = ChartOption(
            x_axis=[AxisOption()],
            y_axis=[AxisOption()],
            series=[SeriesOption(name="s", data=pd.DataFrame({"x": [1]}), x_axis_index=3)],
        )

        assert option.validate() == ["series[0]: xAxis 3 not defined"]

    def test_validate_reports_missing_grid(self) -> None:
        """An axis on an undeclared grid is reported."""
        option = ChartOption(x_axis=[AxisOption(grid_index=1)], grid=[GridOption()])

        assert option.validate() == ["xAxis[0]: grid 1 not defined"]

    def test_validate_reports_zoom_on_missing_axis(self) -> None:
        """A data zoom targeting an undeclared axis is reported."""
        option = ChartOption(
            x_axis=[AxisOption()],
            y_axis=[AxisOption()],
            data_zoom=[DataZoomOption(x_axis_index=[0, 3]), DataZoomOption(y_axis_index=1)],
        )

        assert option.validate() == [
            "dataZoom[0]: xAxis 3 not defined",
            "dataZoom[1]: yAxis 1 not defined",
        ]

    def test_validate_reports_non_cartesian_series(self) -> None:
        """Only cartesian series can be zoomed."""
        option = ChartOption(
            x_axis=[AxisOption()],
            y_axis=[AxisOption()],
            series=[SeriesOption(name="p", data=pd.DataFrame({"x": [1]}), coordinate_system="polar")],
        )

        assert option.validate() == ["series[0]: unsupported coordinate system 'polar'"]

    def test_from_dict_accepts_single_objects(self) -> None:
        """A single axis object is treated like a one-element list."""
        option = ChartOption.from_dict({"xAxis": {"type": "value"}, "yAxis": [{}]})

        assert len(option.x_axis) == 1
        assert len(option.y_axis) == 1
        assert option.series == []


class TestRangeEntry:
    """Tests for RangeEntry."""

    def test_percent_entry_dict(self) -> None:
        """Percent entries serialise start/end only."""
        entry = RangeEntry.percent("z", 10.0, 20.0)

        assert entry.is_percent is True
        assert entry.to_dict() == {"dataZoomId": "z", "start": 10.0, "end": 20.0}

    def test_value_entry_dict(self) -> None:
        """Value entries serialise startValue/endValue only."""
        entry = RangeEntry.value("z", 1.5, 2.5)

        assert entry.is_percent is False
        assert entry.to_dict() == {"dataZoomId": "z", "startValue": 1.5, "endValue": 2.5}

    def test_from_dict(self) -> None:
        """Batch items parse back into entries."""
        entry = RangeEntry.from_dict({"dataZoomId": "z", "startValue": 3, "endValue": 4})

        assert entry == RangeEntry.value("z", 3, 4)


class TestZoomChangeAction:
    """Tests for ZoomChangeAction."""

    def test_type_defaults_to_zoom_change(self) -> None:
        """Actions are zoom-change actions unless stated otherwise."""
        action = ZoomChangeAction(batch=[], from_="toolbox-dataZoom")

        assert action.type == "zoom-change"
        assert action.from_ == "toolbox-dataZoom"
