"""Reusable UI components."""

from src.ui.components.chart_canvas import ChartCanvas
from src.ui.components.rect_select_overlay import RectSelectOverlay

__all__ = [
    "ChartCanvas",
    "RectSelectOverlay",
]
