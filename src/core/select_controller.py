"""Base rectangle-selection controller.

Concrete overlays (see ``src.ui.components.rect_select_overlay``) draw the
cover shape and call ``finish_selection`` with the selected ranges in
pixel space: ``[[[x0, x1], [y0, y1]], ...]``.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal

logger = logging.getLogger(__name__)


class SelectController(QObject):
    """Emits finished selections while enabled.

    Signals:
        select_end: Emitted with the list of selected pixel ranges.
    """

    select_end = pyqtSignal(list)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._enabled = False
        self._disposed = False

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def enable(self) -> None:
        if self._disposed:
            logger.warning("Cannot enable a disposed select controller")
            return
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False
        self.update()

    def update(self) -> None:
        """Remove the drawn cover shape. Selection mode stays as it is."""

    def finish_selection(self, ranges: list) -> None:
        if not self._enabled:
            return
        self.select_end.emit(ranges)

    def dispose(self) -> None:
        """Disable the controller and drop every select_end subscriber."""
        if self._disposed:
            return
        self.disable()
        try:
            self.select_end.disconnect()
        except TypeError:
            # No connections
            pass
        self._disposed = True
