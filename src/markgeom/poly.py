## growable polyline paths and rectangles for markgeom

## Copyright (c) 2024 markgeom contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
==========================================
Polyline paths for **markgeom**
==========================================

A ``Path`` is an ordered list of points.  It is closed when it has at
least four points and its last point coincides with its first within
the path's closure tolerance, so a closed triangle is stored as four
points.  Points are only ever added through ``add()``, ``append()``,
``prepend()`` or ``merge()``, each of which drops a new point that
coincides with the endpoint it would be joined to; the cached extents
and perimeter are refreshed before any of these return.

The ``points`` property returns copies: move points with
``transform()``.

"""

from math import *

from markgeom.entity import EntityRecord
from markgeom.errors import GeometryValueError
from markgeom.extents import Extents
from markgeom.geom import compare, distance, polygon_area, signed_area, xyz
from markgeom.geometry import Geometry, Line, Point
from markgeom.tolerance import CLOSURE_TOLERANCE, EPSILON


class Path(Geometry):
    """ordered point list, possibly closed"""

    def __repr__(self):
        return f"Path({self._points})"

    def __init__(self, points=(), closure_tolerance=CLOSURE_TOLERANCE,
                 dedupe=True):
        super().__init__()
        self.closure_tolerance = closure_tolerance
        self._points = []
        for p in points:
            if dedupe:
                self._push_back(p)
            else:
                self._points.append(Point.of(p))
        self.update()

    def __len__(self):
        return len(self._points)

    def _same(self, p, q):
        return compare(p, q, self.closure_tolerance) == 0

    def _push_back(self, p):
        if self._points and self._same(self._points[-1], p):
            return
        self._points.append(Point.of(p))

    def _push_front(self, p):
        if self._points and self._same(self._points[0], p):
            return
        self._points.insert(0, Point.of(p))

    def update(self):
        self.__extents = Extents.from_points(self._points)
        self.__perimeter = sum(distance(self._points[i-1], self._points[i])
                               for i in range(1, len(self._points)))
        return self

    ## growing the path

    def add(self, p):
        """append a single point-like to the end"""
        self._push_back(p)
        self.update()
        return self

    def append(self, points):
        """append points (or another path's points) to the end"""
        if isinstance(points, Path):
            points = points._points
        for p in points:
            self._push_back(p)
        self.update()
        return self

    def prepend(self, points):
        """insert points (or another path's points) before the start,
        keeping their order"""
        if isinstance(points, Path):
            points = points._points
        for p in reversed(list(points)):
            self._push_front(p)
        self.update()
        return self

    def merge(self, other):
        """join ``other`` onto the end of this path; a gap between the
        two becomes a connecting segment"""
        return self.append(other)

    def close(self):
        """repeat the first point at the end, if the path is not
        closed already and has enough points to enclose anything"""
        if not self.is_closed and len(self._points) >= 3:
            self._points.append(Point.of(self._points[0]))
            self.update()
        return self

    def reverse(self):
        self._points.reverse()
        return self

    ## properties

    @property
    def points(self):
        return [Point.of(p) for p in self._points]

    @property
    def start_point(self):
        if not self._points:
            raise GeometryValueError('empty path has no start point')
        return Point.of(self._points[0])

    @property
    def end_point(self):
        if not self._points:
            raise GeometryValueError('empty path has no end point')
        return Point.of(self._points[-1])

    @property
    def is_closed(self):
        return (len(self._points) >= 4 and
                self._same(self._points[0], self._points[-1]))

    @property
    def extents(self):
        return self.__extents.copy()

    @property
    def perimeter(self):
        return self.__perimeter

    @property
    def signed_area(self):
        """shoelace area, positive for counter-clockwise winding"""
        return signed_area(self._points)

    @property
    def area(self):
        if self.is_closed:
            return polygon_area(self._points)
        if not self._points:
            return 0.0
        return self.__extents.hypotenuse*EPSILON

    def segments(self):
        """the path as a list of ``Line`` instances"""
        return [Line(self._points[i-1], self._points[i])
                for i in range(1, len(self._points))]

    def transform(self, matrix):
        for p in self._points:
            p.transform(matrix)
        self.update()
        return self

    def to_points(self):
        return self.points

    def to_entity(self, layer=None):
        closed = self.is_closed
        pts = self._points[:-1] if closed else self._points
        return EntityRecord('polyline', [tuple(p) for p in pts],
                            self._layer(layer), closed=closed)


class FixedPath(Path):
    """A path whose points are derived from other defining data.

    Editing the point list would break that link, so ``add()``,
    ``append()``, ``prepend()``, ``merge()`` and ``reverse()`` raise
    ``GeometryValueError``; move the shape with ``transform()`` or take
    an editable copy with ``markgeom.geom_util.to_path()``.
    """

    def _fixed(self, *args):
        raise GeometryValueError(
            'the points of a {} cannot be edited directly'.format(self.name))

    add = append = prepend = merge = reverse = _fixed

    def close(self):
        if not self.is_closed:
            self._fixed()
        return self


class Rectangle(FixedPath):
    """closed four-corner path built from a centre, width and height.

    Points run top-left, top-right, bottom-right, bottom-left and back
    to top-left.  Shearing leaves a parallelogram whose ``width`` and
    ``height`` are side lengths; ``area`` is always the enclosed area.
    """

    def __repr__(self):
        return f"Rectangle({tuple(self.centre)},{self.width},{self.height})"

    def __init__(self, centre=(0.0, 0.0, 0.0), width=1.0, height=1.0,
                 closure_tolerance=CLOSURE_TOLERANCE):
        cx, cy, cz = xyz(centre)
        hw = 0.5*width
        hh = 0.5*height
        tl = (cx - hw, cy + hh, cz)
        corners = [tl,
                   (cx + hw, cy + hh, cz),
                   (cx + hw, cy - hh, cz),
                   (cx - hw, cy - hh, cz),
                   tl]
        super().__init__(corners, closure_tolerance, dedupe=False)

    @property
    def top_left(self):
        return Point.of(self._points[0])

    @property
    def top_right(self):
        return Point.of(self._points[1])

    @property
    def bottom_right(self):
        return Point.of(self._points[2])

    @property
    def bottom_left(self):
        return Point.of(self._points[3])

    @property
    def width(self):
        return distance(self._points[0], self._points[1])

    @property
    def height(self):
        return distance(self._points[1], self._points[2])

    @property
    def centre(self):
        tl = self._points[0]
        br = self._points[2]
        return Point(0.5*(tl.x + br.x), 0.5*(tl.y + br.y), 0.5*(tl.z + br.z))
