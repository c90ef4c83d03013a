"""
Exception types raised by markgeom.

Degenerate inputs (parallel lines, zero-length segments, open or
self-intersecting boolean operands) are not errors: the operations
return ``None``, an empty list or the geometry unchanged.  Exceptions
are reserved for unsupported geometry kinds and invalid parameters.

Copyright (c) 2024 markgeom contributors
All rights reserved (MIT License)
"""


class GeometryError(Exception):
    """Base class for markgeom errors."""


class UnsupportedGeometryError(GeometryError, TypeError):
    """An operation was asked to handle a geometry kind it does not know."""

    def __init__(self, operation, obj):
        self.operation = operation
        self.kind = type(obj).__name__
        super().__init__('{} does not support geometry of type {}'.format(
            operation, self.kind))


class GeometryValueError(GeometryError, ValueError):
    """A parameter failed validation."""
