# tests/unit/test_data_zoom_model.py
"""Unit tests for DataZoomModel."""

from src.core.models import DataZoomOption, RangeEntry


class TestDataZoomModel:
    """Tests for range state and window access."""

    def test_target_axes(self, build_chart, series_factory) -> None:
        """Every configured axis gets a window."""
        chart = build_chart(
            [series_factory("s", [1.0, 2.0])],
            [DataZoomOption(x_axis_index=0, y_axis_index=0)],
        )
        zoom = chart.get_component("dataZoom", 0)

        assert list(zoom.each_target_axis()) == [("x", 0), ("y", 0)]
        assert zoom.get_axis_window("x", 0) is chart.get_axis_window("x", 0)
        assert zoom.get_axis_window("x", 1) is None

    def test_percent_range_from_window(self, build_chart, hundred_series) -> None:
        """The live percent range is read from the first window."""
        chart = build_chart([hundred_series], [DataZoomOption(x_axis_index=0, start_value=30)])
        zoom = chart.get_component("dataZoom", 0)
        zoom.reset_windows()

        assert zoom.get_percent_range() == [30.0, 100.0]
        assert zoom.get_value_range() == [30.0, 100.0]

    def test_percent_range_without_window(self, build_chart, hundred_series) -> None:
        """A control with no target axis falls back to its option."""
        chart = build_chart([hundred_series], [DataZoomOption(start=15)])
        zoom = chart.get_component("dataZoom", 0)

        assert zoom.get_percent_range() == [15, 100.0]
        assert zoom.get_value_range() is None

    def test_set_value_range_clears_percent(self, build_chart, hundred_series) -> None:
        chart = build_chart([hundred_series], [DataZoomOption(x_axis_index=0, start=10, end=20)])
        zoom = chart.get_component("dataZoom", 0)

        zoom.set_raw_range(RangeEntry.value(zoom.id, 40, 60))

        assert (zoom.option.start, zoom.option.end) == (None, None)
        assert (zoom.option.start_value, zoom.option.end_value) == (40, 60)

    def test_set_percent_range_clears_values(self, build_chart, hundred_series) -> None:
        chart = build_chart(
            [hundred_series], [DataZoomOption(x_axis_index=0, start_value=1, end_value=2)]
        )
        zoom = chart.get_component("dataZoom", 0)

        zoom.set_raw_range(RangeEntry.percent(zoom.id, 0, 50))

        assert (zoom.option.start_value, zoom.option.end_value) == (None, None)
        assert (zoom.option.start, zoom.option.end) == (0, 50)

    def test_targets_axis_by_identity(self, build_chart, hundred_series) -> None:
        """targets_axis compares against the resolved axis model."""
        from src.core.models import AxisOption

        chart = build_chart(
            [hundred_series],
            [DataZoomOption(type="select", x_axis_index=1)],
            x_axis=[AxisOption(), AxisOption()],
        )
        zoom = chart.get_component("dataZoom", 0)

        assert zoom.targets_axis("x", chart.get_component("xAxis", 1), chart) is True
        assert zoom.targets_axis("x", chart.get_component("xAxis", 0), chart) is False
        assert zoom.targets_axis("y", chart.get_component("yAxis", 0), chart) is False

    def test_filter_windows_applies_range(self, build_chart, hundred_series) -> None:
        chart = build_chart([hundred_series], [DataZoomOption(x_axis_index=0, start=0, end=25)])
        zoom = chart.get_component("dataZoom", 0)

        zoom.reset_windows()
        zoom.filter_windows()

        assert next(chart.each_series()).get_data()["x"].tolist() == [0.0, 10.0, 20.0]
