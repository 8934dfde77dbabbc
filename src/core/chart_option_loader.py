"""Persistence for chart options."""

import json
import logging
from pathlib import Path
from typing import Optional

from src.core.config import DEFAULT_OPTION_DIR, DEFAULT_OPTION_FILE
from src.core.exceptions import ChartOptionError
from src.core.models import ChartOption

logger = logging.getLogger(__name__)


class ChartOptionLoader:
    """Loads and saves chart options as JSON."""

    def __init__(self, option_path: Optional[Path] = None):
        if option_path is None:
            option_path = Path.home() / DEFAULT_OPTION_DIR / DEFAULT_OPTION_FILE
        self._option_path = Path(option_path)

    @property
    def option_path(self) -> Path:
        return self._option_path

    def save(self, option: ChartOption) -> None:
        """Save a chart option to the JSON file."""
        self._option_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self._option_path, "w") as f:
            json.dump(option.to_dict(), f, indent=2)

        logger.info("Saved chart option to %s", self._option_path)

    def load(self) -> ChartOption:
        """Load the chart option from the JSON file.

        Returns:
            The loaded option, or an empty option if the file does not exist.

        Raises:
            ChartOptionError: If the file cannot be parsed or is invalid.
        """
        if not self._option_path.exists():
            logger.info("No chart option at %s, using empty option", self._option_path)
            return ChartOption()

        try:
            with open(self._option_path) as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ChartOptionError("Chart option root must be an object")
            option = ChartOption.from_dict(data)
        except ChartOptionError:
            logger.error("Invalid chart option in %s", self._option_path)
            raise
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("Failed to load chart option: %s", e)
            raise ChartOptionError(f"Cannot read chart option {self._option_path}: {e}") from e

        errors = option.validate()
        if errors:
            logger.error("Chart option %s has %d errors", self._option_path, len(errors))
            raise ChartOptionError("; ".join(errors))

        logger.info(
            "Loaded chart option from %s: %d series, %d data zooms",
            self._option_path,
            len(option.series),
            len(option.data_zoom),
        )
        return option
