"""Custom exceptions for the chart zoom engine."""


class ZoomError(Exception):
    """Base exception for the chart zoom engine.

    All custom exceptions in the package should inherit from this class
    to enable consistent exception handling.
    """


class ComponentNotFoundError(ZoomError):
    """Raised when a chart component cannot be resolved.

    This exception is raised by the chart model when an axis, grid, series
    or data zoom is requested by an index or id that does not exist.
    """


class ChartOptionError(ZoomError):
    """Raised when a chart option is malformed.

    This exception is raised when an option file cannot be read or parsed,
    or when its structure does not describe a valid chart.
    """


class UnsupportedCoordinateSystemError(ZoomError):
    """Raised when a series targets a coordinate system that cannot be zoomed.

    Only Cartesian grids are supported; polar coordinate systems are
    rejected when the chart model is built.
    """
