"""UI constants for the chart zoom widgets.

Contains theme colors, fonts and spacing values.
"""


class Colors:
    """Observatory Palette - semantic colors are inviolable."""

    # Backgrounds
    BG_BASE = "#0C0C12"  # Main window background (void-black)
    BG_SURFACE = "#141420"  # Chart areas (space-dark)
    BG_BORDER = "#2A2A3A"  # Borders and axis lines

    # Signal Colors
    SIGNAL_CYAN = "#00FFD4"
    SIGNAL_CORAL = "#FF4757"
    SIGNAL_AMBER = "#FFAA00"
    SIGNAL_BLUE = "#4A9EFF"

    # Text
    TEXT_PRIMARY = "#F4F4F8"
    TEXT_SECONDARY = "#9898A8"


class Fonts:
    """Font family definitions."""

    DATA = "Azeret Mono"  # For numbers and data display
    UI = "Geist"  # For UI text


class Spacing:
    """Spacing constants in pixels."""

    XS = 4
    SM = 8
    MD = 12
    LG = 16


class Limits:
    """Window limits."""

    MIN_WINDOW_WIDTH = 960
    MIN_WINDOW_HEIGHT = 600


# Series are colored in declaration order, cycling.
SERIES_COLORS = (
    Colors.SIGNAL_CYAN,
    Colors.SIGNAL_AMBER,
    Colors.SIGNAL_BLUE,
    Colors.SIGNAL_CORAL,
)
