"""Lumen Zoom - interactive axis zoom chart viewer."""

import logging
import sys
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from src.__version__ import __version__
from src.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> int:
    """Application entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting Lumen Zoom %s", __version__)

    app = QApplication(sys.argv)

    option_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    window = MainWindow(option_path)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
