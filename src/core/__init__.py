"""Core zoom engine modules."""

from .axis_window import AxisWindow
from .chart_model import AxisModel, ChartModel, GridModel, SeriesModel
from .chart_option_loader import ChartOptionLoader
from .data_zoom_model import DataZoomModel
from .models import (
    AxisOption,
    ChartOption,
    DataZoomOption,
    GridOption,
    RangeEntry,
    SeriesOption,
    ZoomChangeAction,
)
from .option_preprocessor import add_toolbox_zooms
from .toolbox_zoom import ZoomHistoryController
from .zoom_history import ZoomHistory
from .zoom_processor import ActionBus, ZoomProcessor

__all__ = [
    "AxisWindow",
    "AxisModel",
    "ChartModel",
    "GridModel",
    "SeriesModel",
    "ChartOptionLoader",
    "DataZoomModel",
    "AxisOption",
    "ChartOption",
    "DataZoomOption",
    "GridOption",
    "RangeEntry",
    "SeriesOption",
    "ZoomChangeAction",
    "add_toolbox_zooms",
    "ZoomHistoryController",
    "ZoomHistory",
    "ActionBus",
    "ZoomProcessor",
]
