"""Option preprocessing for the toolbox zoom feature."""

from __future__ import annotations

import logging

from src.core.config import TOOLBOX_ZOOM_ID_BASE
from src.core.models import AXIS_DIMS, ChartOption, DataZoomOption

logger = logging.getLogger(__name__)


def toolbox_zoom_id(dim: str, axis_index: int) -> str:
    """Id of the select data zoom generated for one axis."""
    return f"{TOOLBOX_ZOOM_ID_BASE}{dim}Axis{axis_index}"


def add_toolbox_zooms(option: ChartOption) -> ChartOption:
    """Append one select data zoom per x and y axis.

    Each generated zoom targets a single axis. Zooms whose id is already
    present are not added twice, so preprocessing is safe to repeat.

    Args:
        option: Chart option, modified in place.

    Returns:
        The same option.
    """
    existing = {zoom.id for zoom in option.data_zoom}
    added = 0
    for dim in AXIS_DIMS:
        for axis_index in range(len(option.axes(dim))):
            zoom_id = toolbox_zoom_id(dim, axis_index)
            if zoom_id in existing:
                continue
            zoom = DataZoomOption(id=zoom_id, type="select")
            if dim == "x":
                zoom.x_axis_index = axis_index
            else:
                zoom.y_axis_index = axis_index
            option.data_zoom.append(zoom)
            added += 1

    logger.debug("Added %d toolbox select data zooms", added)
    return option
