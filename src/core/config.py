"""Configuration constants for the chart zoom engine."""

# Percent space every axis window is normalised against.
PERCENT_EXTENT: tuple[float, float] = (0.0, 100.0)

# Prefix of data zoom ids generated for the toolbox select feature.
TOOLBOX_ZOOM_ID_BASE = "\0_toolbox-dataZoom_"

# Filter modes
FILTER_MODE_FILTER = "filter"
FILTER_MODE_EMPTY = "empty"
DEFAULT_FILTER_MODE = FILTER_MODE_FILTER

# Axis types
AXIS_TYPE_VALUE = "value"
AXIS_TYPE_CATEGORY = "category"

# Action type emitted by zoom gestures
ZOOM_CHANGE_ACTION = "zoom-change"

# Default grid geometry in pixels (used when an option omits it)
DEFAULT_GRID_LEFT = 60.0
DEFAULT_GRID_TOP = 40.0
DEFAULT_GRID_WIDTH = 600.0
DEFAULT_GRID_HEIGHT = 360.0

# Selection cover style
SELECT_COVER_LINE_WIDTH = 3
SELECT_COVER_STROKE = "#333333"
SELECT_COVER_FILL = (0, 0, 0, 128)

# Minimum drag distance in pixels before a selection counts
MIN_SELECT_SIZE_PX = 2.0

# Option file location
DEFAULT_OPTION_DIR = ".lumen_zoom"
DEFAULT_OPTION_FILE = "chart_option.json"

# The only coordinate system zoom windows can drive
COORDINATE_SYSTEM_CARTESIAN = "cartesian2d"
