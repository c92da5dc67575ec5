# gridpath/core/errors.py
#!/usr/bin/env python3
"""Precondition failures raised by the grid engine. All are recoverable."""


class GridError(ValueError):
    """Base class; raised before any cell is written."""


class InvalidDimensions(GridError):
    pass


class OutOfBounds(GridError, IndexError):
    pass


class MissingEndpoints(GridError):
    pass


class StartEqualsEnd(GridError):
    pass


class MapFormatError(GridError):
    pass
