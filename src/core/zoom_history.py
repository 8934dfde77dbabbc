"""Undo stack of zoom snapshots.

Frame 0 holds the original range of every control a gesture ever
touched; it is filled lazily, the first time a control appears in a
pushed snapshot. Each later frame is one gesture.
"""

from __future__ import annotations

import logging
from typing import Callable

from src.core.models import RangeEntry, Snapshot

logger = logging.getLogger(__name__)

PercentRangeLookup = Callable[[str], "list[float] | None"]


class ZoomHistory:
    """Ordered list of snapshots with a lazily captured baseline frame."""

    def __init__(self) -> None:
        self._frames: list[Snapshot] = [{}]

    def __len__(self) -> int:
        return len(self._frames)

    @property
    def can_go_back(self) -> bool:
        return len(self._frames) > 1

    def frames(self) -> list[Snapshot]:
        """Return a copy of the frames, oldest first."""
        return [dict(frame) for frame in self._frames]

    def baseline(self) -> Snapshot:
        return dict(self._frames[0])

    def push(self, snapshot: Snapshot, percent_range_of: PercentRangeLookup) -> None:
        """Append a snapshot, capturing the baseline of newly touched controls.

        Args:
            snapshot: Ranges of one gesture keyed by control id.
            percent_range_of: Returns the live [start, end] percent range of a
                control, or None if the control cannot be resolved.
        """
        for zoom_id in snapshot:
            if any(zoom_id in frame for frame in reversed(self._frames)):
                continue
            percent_range = percent_range_of(zoom_id)
            if percent_range is None:
                logger.warning("No baseline range for data zoom %r", zoom_id)
                continue
            baseline = dict(self._frames[0])
            baseline[zoom_id] = RangeEntry.percent(zoom_id, percent_range[0], percent_range[1])
            self._frames[0] = baseline

        self._frames.append(dict(snapshot))
        logger.debug("History pushed: depth=%d ids=%s", len(self._frames), list(snapshot))

    def pop(self) -> Snapshot:
        """Remove the newest frame and return the ranges to restore.

        For every control in the removed frame the newest remaining frame
        that mentions it supplies the range. Controls not in the removed
        frame are left out. Popping with only the baseline left returns an
        empty snapshot and keeps the baseline.
        """
        if len(self._frames) <= 1:
            return {}

        head = self._frames.pop()
        snapshot: Snapshot = {}
        for zoom_id in head:
            for frame in reversed(self._frames):
                entry = frame.get(zoom_id)
                if entry is not None:
                    snapshot[zoom_id] = entry
                    break

        logger.debug("History popped: depth=%d restore=%s", len(self._frames), list(snapshot))
        return snapshot

    def clear(self) -> None:
        self._frames = [{}]
