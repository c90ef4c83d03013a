## primitive figure classes for markgeom: points, lines, arcs and
## circles

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

"""object-oriented figure classes for **markgeom**

===============
Overview
===============

Every shape the kernel handles is an instance of a ``Geometry``
subclass.  Each subclass implements the same small set of
capabilities:

* ``extents``: the tight axis-aligned bounding box
  (``markgeom.extents.Extents``)
* ``area`` and ``perimeter``
* ``clone()``: a fully independent deep copy
* ``transform(matrix)``: apply a ``markgeom.xform.Matrix`` in place
  and return ``self``
* ``to_points()``: an ordered sequence of ``Point`` instances,
  polygonal for curved figures
* ``to_entity()``: a ``markgeom.entity.EntityRecord`` for codecs

Degenerate figures never report a zero area or perimeter: a point is
given the area and circumference of a circle of radius
``sys.float_info.epsilon`` so callers can divide by these values.

Rendering intent
================

``fill`` and ``stroke`` are RGBA tuples (or ``None``),
``transparency`` is clamped to [0, 1] with negative values meaning
fully opaque, and ``layer_name`` defaults to ``"0"`` as in DXF.

Transforming curves
===================

A circle is transformed by moving its centre and one boundary point
and measuring the new radius, so a non-uniform scale yields a circle,
not an ellipse.  Arcs move their centre and both end points; a
mirroring transform swaps the end angles so the arc still runs
counter-clockwise.

"""

from copy import deepcopy
from math import *

from markgeom.entity import EntityRecord
from markgeom.errors import GeometryValueError, UnsupportedGeometryError
from markgeom.extents import Extents
from markgeom.geom import (
    constrain, distance, distance2d, positive_angle, pi2, xyz,
)
from markgeom.tolerance import DEFAULT_VERTEX_COUNT, EPSILON, MIN_VERTEX_COUNT


class Geometry:
    """base class for every markgeom figure"""

    def __init__(self):
        self.fill = None
        self.stroke = None
        self.__transparency = 1.0
        self.layer_name = '0'

    @property
    def transparency(self):
        return self.__transparency

    @transparency.setter
    def transparency(self, value):
        if value < 0:
            self.__transparency = 1.0
        else:
            self.__transparency = constrain(value, 0.0, 1.0)

    @property
    def name(self):
        return type(self).__name__

    def copy_style(self, other):
        """take fill, stroke, transparency and layer from ``other``"""
        self.fill = other.fill
        self.stroke = other.stroke
        self.transparency = other.transparency
        self.layer_name = other.layer_name
        return self

    def clone(self):
        return deepcopy(self)

    def update(self):
        """recompute any cached derived state; figures whose derived
        values are computed on demand have nothing to do"""
        return self

    @property
    def extents(self):
        raise UnsupportedGeometryError('extents', self)

    @property
    def area(self):
        raise UnsupportedGeometryError('area', self)

    @property
    def perimeter(self):
        raise UnsupportedGeometryError('perimeter', self)

    def transform(self, matrix):
        raise UnsupportedGeometryError('transform', self)

    def to_points(self):
        raise UnsupportedGeometryError('to_points', self)

    def to_entity(self, layer=None):
        raise UnsupportedGeometryError('to_entity', self)

    def to_entities(self, layer=None):
        return [self.to_entity(layer)]

    def _layer(self, layer):
        return self.layer_name if layer is None else layer


class Point(Geometry):
    """a single location in space"""

    def __repr__(self):
        return f"Point({self.x},{self.y},{self.z})"

    def __init__(self, x=0.0, y=0.0, z=0.0):
        super().__init__()
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def of(cls, p):
        """a new ``Point`` at the location of point-like ``p``"""
        return cls(*xyz(p))

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    @property
    def extents(self):
        return Extents(self.x, self.y, self.z, self.x, self.y, self.z)

    @property
    def area(self):
        return pi*EPSILON*EPSILON

    @property
    def perimeter(self):
        return pi2*EPSILON

    def transform(self, matrix):
        self.x, self.y, self.z = matrix.apply(self)
        return self

    def to_points(self):
        return [Point(self.x, self.y, self.z)]

    def to_entity(self, layer=None):
        return EntityRecord('point', [(self.x, self.y, self.z)], self._layer(layer))


class Line(Geometry):
    """a straight segment between two points"""

    def __repr__(self):
        return f"Line({self.start},{self.end})"

    def __init__(self, start, end):
        super().__init__()
        self.start = Point.of(start)
        self.end = Point.of(end)

    @property
    def length(self):
        return distance(self.start, self.end)

    @property
    def perimeter(self):
        return self.length

    @property
    def area(self):
        return self.length*EPSILON

    @property
    def midpoint(self):
        return Point(0.5*(self.start.x + self.end.x),
                     0.5*(self.start.y + self.end.y),
                     0.5*(self.start.z + self.end.z))

    @property
    def angle(self):
        """direction of the line in the XY plane, in radians"""
        return atan2(self.end.y - self.start.y, self.end.x - self.start.x)

    @property
    def extents(self):
        return Extents.from_points((self.start, self.end))

    def reverse(self):
        self.start, self.end = self.end, self.start
        return self

    def transform(self, matrix):
        self.start.transform(matrix)
        self.end.transform(matrix)
        return self

    def to_points(self):
        return [Point.of(self.start), Point.of(self.end)]

    def to_entity(self, layer=None):
        return EntityRecord('line', [tuple(self.start), tuple(self.end)],
                            self._layer(layer))


def _check_vertex_count(n):
    if n < MIN_VERTEX_COUNT:
        raise GeometryValueError('vertex count must be at least {}, got {}'.format(
            MIN_VERTEX_COUNT, n))
    return int(n)


class Arc(Geometry):
    """counter-clockwise circular arc from ``start_angle`` to
    ``end_angle`` (radians) about ``centre``"""

    def __repr__(self):
        return f"Arc({self.centre},{self.radius},{self.start_angle},{self.end_angle})"

    def __init__(self, centre, radius, start_angle, end_angle,
                 vertex_count=DEFAULT_VERTEX_COUNT):
        super().__init__()
        self.centre = Point.of(centre)
        self.radius = float(radius)
        self.start_angle = float(start_angle)
        self.end_angle = float(end_angle)
        self.vertex_count = _check_vertex_count(vertex_count)

    @classmethod
    def from_bulge(cls, start, end, bulge, vertex_count=DEFAULT_VERTEX_COUNT):
        """Arc for a polyline segment with a DXF bulge factor, the
        tangent of a quarter of the included angle; positive bulges
        run counter-clockwise from ``start`` to ``end``."""
        if bulge == 0:
            raise GeometryValueError('zero bulge describes a straight segment')
        sx, sy, sz = xyz(start)
        ex, ey, _ = xyz(end)
        chord = distance2d(start, end)
        if chord < EPSILON:
            raise GeometryValueError('bulge arc needs distinct end points')
        nx = -(ey - sy)/chord
        ny = (ex - sx)/chord
        offset = 0.5*chord*(1.0 - bulge*bulge)/(2.0*bulge)
        cx = 0.5*(sx + ex) + nx*offset
        cy = 0.5*(sy + ey) + ny*offset
        radius = abs(chord*(1.0 + bulge*bulge)/(4.0*bulge))
        a_start = atan2(sy - cy, sx - cx)
        a_end = atan2(ey - cy, ex - cx)
        if bulge < 0:
            a_start, a_end = a_end, a_start
        return cls((cx, cy, sz), radius, a_start, a_end, vertex_count)

    @classmethod
    def from_three_points(cls, p1, p2, p3, vertex_count=DEFAULT_VERTEX_COUNT):
        """arc from ``p1`` through ``p2`` to ``p3``"""
        x1, y1, z1 = xyz(p1)
        x2, y2, _ = xyz(p2)
        x3, y3, _ = xyz(p3)
        d = 2.0*(x1*(y2 - y3) + x2*(y3 - y1) + x3*(y1 - y2))
        if abs(d) < EPSILON:
            raise GeometryValueError('collinear points do not define an arc')
        s1 = x1*x1 + y1*y1
        s2 = x2*x2 + y2*y2
        s3 = x3*x3 + y3*y3
        cx = (s1*(y2 - y3) + s2*(y3 - y1) + s3*(y1 - y2))/d
        cy = (s1*(x3 - x2) + s2*(x1 - x3) + s3*(x2 - x1))/d
        radius = sqrt((x1 - cx)**2 + (y1 - cy)**2)
        a1 = atan2(y1 - cy, x1 - cx)
        a3 = atan2(y3 - cy, x3 - cx)
        # d > 0 when the points wind counter-clockwise
        if d > 0:
            return cls((cx, cy, z1), radius, a1, a3, vertex_count)
        return cls((cx, cy, z1), radius, a3, a1, vertex_count)

    @property
    def sweep(self):
        """included angle in [0, 2pi)"""
        s = self.end_angle - self.start_angle
        if self.end_angle < self.start_angle:
            s += pi2
        return positive_angle(s)

    def point_at_angle(self, angle):
        return Point(self.centre.x + self.radius*cos(angle),
                     self.centre.y + self.radius*sin(angle),
                     self.centre.z)

    @property
    def start_point(self):
        return self.point_at_angle(self.start_angle)

    @property
    def end_point(self):
        return self.point_at_angle(self.end_angle)

    @property
    def area(self):
        return 0.5*self.sweep*self.radius*self.radius

    @property
    def perimeter(self):
        return self.sweep*self.radius

    @property
    def extents(self):
        e = Extents.from_points((self.start_point, self.end_point))
        start = positive_angle(self.start_angle)
        sweep = self.sweep
        for k in range(4):
            a = k*pi/2.0
            if positive_angle(a - start) <= sweep:
                e.include(self.point_at_angle(a))
        return e

    def transform(self, matrix):
        c = matrix.apply(self.centre)
        s = matrix.apply(self.start_point)
        e = matrix.apply(self.end_point)
        self.centre = Point(*c)
        self.radius = distance2d(c, s)
        a_start = atan2(s[1] - c[1], s[0] - c[0])
        a_end = atan2(e[1] - c[1], e[0] - c[0])
        if matrix.determinant2d() < 0:
            a_start, a_end = a_end, a_start
        self.start_angle = a_start
        self.end_angle = a_end
        return self

    def to_points(self):
        sweep = self.sweep
        n = self.vertex_count
        return [self.point_at_angle(self.start_angle + sweep*i/n)
                for i in range(n + 1)]

    def to_entity(self, layer=None):
        return EntityRecord('arc', [tuple(self.centre)], self._layer(layer),
                            radius=self.radius,
                            start_angle=self.start_angle,
                            end_angle=self.end_angle)


class Circle(Geometry):
    """full circle about ``centre``"""

    def __repr__(self):
        return f"Circle({self.centre},{self.radius})"

    def __init__(self, centre, radius, vertex_count=DEFAULT_VERTEX_COUNT):
        super().__init__()
        self.centre = Point.of(centre)
        self.radius = float(radius)
        self.vertex_count = _check_vertex_count(vertex_count)

    @property
    def area(self):
        return pi*self.radius*self.radius

    @property
    def perimeter(self):
        return pi2*self.radius

    @property
    def extents(self):
        c = self.centre
        r = self.radius
        return Extents(c.x - r, c.y - r, c.z, c.x + r, c.y + r, c.z)

    def transform(self, matrix):
        boundary = (self.centre.x + self.radius, self.centre.y, self.centre.z)
        c = matrix.apply(self.centre)
        b = matrix.apply(boundary)
        self.centre = Point(*c)
        self.radius = distance2d(c, b)
        return self

    def to_points(self):
        """closed polygon: the first point is repeated at the end"""
        n = self.vertex_count
        c = self.centre
        pts = [Point(c.x + self.radius*cos(pi2*i/n),
                     c.y + self.radius*sin(pi2*i/n), c.z)
               for i in range(n)]
        pts.append(Point.of(pts[0]))
        return pts

    def to_entity(self, layer=None):
        return EntityRecord('circle', [tuple(self.centre)], self._layer(layer),
                            radius=self.radius)
