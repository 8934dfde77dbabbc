"""Main application window for the zoom chart viewer.

Contains the MainWindow class hosting a ChartCanvas and its menus.
"""

import logging
from pathlib import Path

import numpy as np
import pandas as pd
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QFileDialog, QMainWindow, QMessageBox

from src.core.chart_option_loader import ChartOptionLoader
from src.core.exceptions import ZoomError
from src.core.models import AxisOption, ChartOption, SeriesOption
from src.ui.components.chart_canvas import ChartCanvas
from src.ui.constants import Colors, Fonts, Limits

logger = logging.getLogger(__name__)


def build_demo_option() -> ChartOption:
    """Chart option shown when no option file exists."""
    x = np.linspace(0, 100, 501)
    return ChartOption(
        x_axis=[AxisOption(name="t")],
        y_axis=[AxisOption(name="value", scale=True)],
        series=[
            SeriesOption(
                name="sine",
                data=pd.DataFrame({"t": x, "value": np.sin(x / 8) * 40 + 50}),
            ),
            SeriesOption(
                name="noise",
                type="scatter",
                data=pd.DataFrame({"t": x, "value": np.random.default_rng(7).normal(50, 15, x.size)}),
            ),
        ],
    )


class MainWindow(QMainWindow):
    """Main application window with one zoomable chart."""

    def __init__(self, option_path: Path | None = None) -> None:
        """Initialize the main window.

        Args:
            option_path: Chart option JSON file. Defaults to the loader's path.
        """
        super().__init__()
        self.setWindowTitle("Lumen Zoom")
        self.setMinimumSize(Limits.MIN_WINDOW_WIDTH, Limits.MIN_WINDOW_HEIGHT)

        self._loader = ChartOptionLoader(option_path)
        self._canvas = ChartCanvas(parent=self)
        self._show_initial_option()
        self.setCentralWidget(self._canvas)

        self._setup_menu_bar()
        self._apply_menu_styling()
        logger.debug("MainWindow initialized")

    @property
    def canvas(self) -> ChartCanvas:
        return self._canvas

    def _show_initial_option(self) -> None:
        """Show the configured chart, or the demo chart if it cannot be shown."""
        try:
            option = self._loader.load()
            if option.series:
                self._canvas.set_option(option)
                return
        except ZoomError as e:
            logger.error("Falling back to demo chart: %s", e)
        self._canvas.set_option(build_demo_option())

    def _setup_menu_bar(self) -> None:
        """Set up File and View menus."""
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        open_action = QAction("Open Chart Option...", self)
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self._on_open)
        file_menu.addAction(open_action)

        view_menu = menu_bar.addMenu("&View")
        zoom_action = QAction("Area Zoom", self)
        zoom_action.setShortcut("Z")
        zoom_action.triggered.connect(lambda: self._canvas.toolbox_zoom.on_click("zoom"))
        view_menu.addAction(zoom_action)

        back_action = QAction("Restore Area Zoom", self)
        back_action.setShortcut("Backspace")
        back_action.triggered.connect(lambda: self._canvas.toolbox_zoom.on_click("back"))
        view_menu.addAction(back_action)

        logger.debug("Menu bar configured")

    def _on_open(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Open Chart Option", str(self._loader.option_path.parent), "JSON (*.json)"
        )
        if not path:
            return
        loader = ChartOptionLoader(Path(path))
        try:
            self._canvas.set_option(loader.load())
        except ZoomError as e:
            logger.error("Cannot open chart option %s: %s", path, e)
            QMessageBox.warning(self, "Open Chart Option", str(e))
            return
        self._loader = loader

    def _apply_menu_styling(self) -> None:
        """Apply custom styling to the menu bar."""
        menu_stylesheet = f"""
            QMenuBar {{
                background-color: {Colors.BG_BASE};
                color: {Colors.TEXT_PRIMARY};
                font-family: "{Fonts.UI}";
                font-size: 13px;
                padding: 4px 0px;
                border-bottom: 1px solid {Colors.BG_BORDER};
            }}

            QMenu {{
                background-color: {Colors.BG_SURFACE};
                color: {Colors.TEXT_PRIMARY};
                font-family: "{Fonts.UI}";
                font-size: 13px;
                border: 1px solid {Colors.BG_BORDER};
            }}
        """
        self.menuBar().setStyleSheet(menu_stylesheet)
