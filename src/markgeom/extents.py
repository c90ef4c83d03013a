"""
Axis-aligned bounding boxes for markgeom primitives.

Copyright (c) 2024 markgeom contributors
All rights reserved (MIT License)
"""

from math import inf, sqrt

from markgeom.geom import xyz


class Extents:
    """axis-aligned bounding box with derived size, centre and diagonal.

    Primitives own their extents and recompute them whenever their
    defining points change; callers read them, they do not build them
    for live geometry.  ``Extents()`` with no arguments is the empty
    box (+inf minima, -inf maxima) that any ``combine()`` replaces.
    """

    __slots__ = ('min_x', 'min_y', 'min_z', 'max_x', 'max_y', 'max_z')

    def __init__(self, min_x=inf, min_y=inf, min_z=inf,
                 max_x=-inf, max_y=-inf, max_z=-inf):
        self.min_x = min_x
        self.min_y = min_y
        self.min_z = min_z
        self.max_x = max_x
        self.max_y = max_y
        self.max_z = max_z

    def __repr__(self):
        return "Extents(({},{},{}),({},{},{}))".format(
            self.min_x, self.min_y, self.min_z,
            self.max_x, self.max_y, self.max_z)

    @classmethod
    def from_points(cls, points):
        e = cls()
        for p in points:
            e.include(p)
        return e

    @property
    def is_empty(self):
        return self.min_x > self.max_x or self.min_y > self.max_y

    def include(self, p):
        """grow the box to include point-like ``p``"""
        x, y, z = xyz(p)
        self.min_x = min(self.min_x, x)
        self.min_y = min(self.min_y, y)
        self.min_z = min(self.min_z, z)
        self.max_x = max(self.max_x, x)
        self.max_y = max(self.max_y, y)
        self.max_z = max(self.max_z, z)

    def combine(self, other):
        """return a new box covering both ``self`` and ``other``"""
        return Extents(min(self.min_x, other.min_x),
                       min(self.min_y, other.min_y),
                       min(self.min_z, other.min_z),
                       max(self.max_x, other.max_x),
                       max(self.max_y, other.max_y),
                       max(self.max_z, other.max_z))

    def copy(self):
        return Extents(self.min_x, self.min_y, self.min_z,
                       self.max_x, self.max_y, self.max_z)

    def grow(self, dx, dy=None):
        """return a copy enlarged by ``dx`` (and ``dy``) on every side"""
        if dy is None:
            dy = dx
        return Extents(self.min_x - dx, self.min_y - dy, self.min_z,
                       self.max_x + dx, self.max_y + dy, self.max_z)

    @property
    def min_point(self):
        return (self.min_x, self.min_y, self.min_z)

    @property
    def max_point(self):
        return (self.max_x, self.max_y, self.max_z)

    @property
    def width(self):
        return self.max_x - self.min_x

    @property
    def height(self):
        return self.max_y - self.min_y

    @property
    def depth(self):
        return self.max_z - self.min_z

    @property
    def centre(self):
        """centroid of the box as an (x, y, z) tuple"""
        return (self.min_x + 0.5*self.width,
                self.min_y + 0.5*self.height,
                self.min_z + 0.5*self.depth)

    @property
    def hypotenuse(self):
        """length of the XY diagonal"""
        return sqrt(self.width**2 + self.height**2)

    @property
    def area(self):
        return self.width*self.height

    @property
    def perimeter(self):
        return 2.0*(self.width + self.height)

    @property
    def boundary(self):
        """the box outline as a ``markgeom.poly.Rectangle``"""
        from markgeom.poly import Rectangle
        return Rectangle(self.centre, self.width, self.height)

    def contains_point(self, p):
        """inclusive 2D test"""
        x, y, _ = xyz(p)
        return (self.min_x <= x <= self.max_x and
                self.min_y <= y <= self.max_y)

    def contains(self, other):
        """inclusive 2D test: both corners of ``other`` lie inside"""
        return (self.contains_point(other.min_point) and
                self.contains_point(other.max_point))
