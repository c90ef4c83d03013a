## markgeom boolean operations on closed 2D paths: union,
## intersection and subtraction by splitting, classifying and
## restitching path fragments

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
Boolean path algebra
====================

``union()``, ``intersection()`` and ``subtraction()`` combine two
closed, simple, coplanar paths (circles and rectangles are accepted
and treated as their polygons):

1. both operands are oriented counter-clockwise;
2. every segment of each path is cut where the other path crosses or
   touches it, and the cut path is broken into fragments;
3. each fragment is classified by its arc-length midpoint as lying on
   the other path's boundary (running the same or the opposite way),
   inside it or outside it;
4. the fragments each operation keeps are chained back together by
   matching end points.

By default "inside" means inside the other path's bounding box, which
is exact for the axis-aligned shapes typical of marking layouts.  Pass
``containment='polygon'`` for an even-odd ray-cast test instead.

Open or self-intersecting operands are not rejected; the result for
them is best effort.  An empty result is an empty ``Path``.

"""

import logging

from markgeom.errors import GeometryValueError, UnsupportedGeometryError
from markgeom.geom import (
    distance2d, intersect_segments2d, point_in_polygon,
    segment_point_distance2d, xyz,
)
from markgeom.geom_util import to_path, trace_connected
from markgeom.geometry import Circle, Geometry, Point
from markgeom.poly import Path
from markgeom.tolerance import BOOLEAN_TOLERANCE, LINE_RESOLUTION

logger = logging.getLogger(__name__)

INSIDE = 'inside'
OUTSIDE = 'outside'
ON_SAME = 'same'
ON_OPPOSITE = 'opposite'

CONTAINMENT_MODES = ('box', 'polygon')


def _operand(geometry, tolerance):
    if isinstance(geometry, (Path, Circle)):
        p = to_path(geometry, tolerance)
    else:
        raise UnsupportedGeometryError('boolean operation', geometry)
    if p.signed_area < 0:
        p.reverse()
    return p


def _segments(points):
    return [(points[i-1], points[i]) for i in range(1, len(points))]


def _on_other(p, other_segments, tolerance):
    return any(segment_point_distance2d(p, a, b) <= tolerance
               for a, b in other_segments)


def _cuts(s, e, other_segments, tolerance, resolution):
    """points where the other path crosses or touches segment s-e,
    ordered by distance from s"""
    hits = []
    for a, b in other_segments:
        hit = intersect_segments2d(s, e, a, b, resolution)
        if hit is not None:
            hits.append(hit)
        # vertices of the other path lying on this segment, which
        # also covers collinear overlaps
        for v in (a, b):
            if segment_point_distance2d(v, s, e) <= tolerance:
                hits.append(xyz(v))
    hits.sort(key=lambda h: distance2d(s, h))
    ordered = []
    for h in hits:
        if not ordered or distance2d(ordered[-1], h) > tolerance:
            ordered.append(h)
    return ordered


def split_by_intersections(path, other, tolerance=BOOLEAN_TOLERANCE,
                           resolution=LINE_RESOLUTION):
    """Break ``path`` into fragments (lists of ``Point``) wherever
    ``other`` crosses or touches it.  For a closed path the fragment
    running through the start point is joined up, unless the start
    point is itself a cut."""
    pts = path._points
    if len(pts) < 2:
        return [[Point.of(p) for p in pts]] if pts else []
    others = _segments(other._points)

    fragments = []
    current = [Point.of(pts[0])]
    cut_at_start = False
    for i in range(1, len(pts)):
        s = pts[i-1]
        e = pts[i]
        if _on_other(s, others, tolerance):
            if i == 1:
                cut_at_start = True
            if len(current) > 1:
                fragments.append(current)
                current = [Point.of(s)]
        for c in _cuts(s, e, others, tolerance, resolution):
            # cuts at either end of the segment are handled at vertices
            if distance2d(s, c) <= tolerance or distance2d(c, e) <= tolerance:
                continue
            current.append(Point(*c))
            fragments.append(current)
            current = [Point(*c)]
        current.append(Point.of(e))
    if len(current) > 1:
        fragments.append(current)

    if path.is_closed and not cut_at_start and len(fragments) > 1:
        first = fragments.pop(0)
        fragments[-1].extend(first[1:])
    return fragments


def _midpoint(fragment):
    """arc-length midpoint of a fragment and the index of the segment
    it falls on"""
    lengths = [distance2d(fragment[i-1], fragment[i])
               for i in range(1, len(fragment))]
    target = 0.5*sum(lengths)
    for i, l in enumerate(lengths):
        if target <= l or i == len(lengths) - 1:
            f = 0.0 if l == 0 else min(1.0, target/l)
            a = fragment[i]
            b = fragment[i+1]
            return (a.x + f*(b.x - a.x), a.y + f*(b.y - a.y), a.z), i
        target -= l


def classify(fragment, other, tolerance=BOOLEAN_TOLERANCE, containment='box'):
    """classify a fragment against ``other``: ``ON_SAME``,
    ``ON_OPPOSITE``, ``INSIDE`` or ``OUTSIDE``"""
    if len(fragment) < 2:
        return OUTSIDE
    mid, i = _midpoint(fragment)
    for a, b in _segments(other._points):
        if segment_point_distance2d(mid, a, b) <= tolerance:
            s = fragment[i]
            e = fragment[i+1]
            dot = (e.x - s.x)*(b.x - a.x) + (e.y - s.y)*(b.y - a.y)
            return ON_SAME if dot > 0 else ON_OPPOSITE
    if containment == 'polygon':
        inside = point_in_polygon(mid, other._points)
    else:
        inside = other.extents.contains_point(mid)
    return INSIDE if inside else OUTSIDE


# fragment classes kept from the first and second operand
_KEEP = {
    'union': ((OUTSIDE, ON_SAME), (OUTSIDE,)),
    'intersection': ((INSIDE, ON_SAME), (INSIDE,)),
    'subtraction': ((OUTSIDE, ON_OPPOSITE), (INSIDE,)),
}


def _combine(a, b, operation, tolerance, containment):
    if containment not in CONTAINMENT_MODES:
        raise GeometryValueError('bad containment mode: {}'.format(containment))
    pa = _operand(a, tolerance)
    pb = _operand(b, tolerance)
    keep_a, keep_b = _KEEP[operation]

    kept = []
    for frag in split_by_intersections(pa, pb, tolerance):
        if classify(frag, pb, tolerance, containment) in keep_a:
            kept.append(frag)
    for frag in split_by_intersections(pb, pa, tolerance):
        if classify(frag, pa, tolerance, containment) in keep_b:
            kept.append(frag)

    chains = trace_connected(kept, tolerance)
    logger.debug('%s: %d fragments kept, %d loops', operation, len(kept),
                 len(chains))
    result = Path(closure_tolerance=tolerance)
    for chain in chains:
        result.merge(chain)
    return result.copy_style(a)


def union(a, b, tolerance=BOOLEAN_TOLERANCE, containment='box'):
    return _combine(a, b, 'union', tolerance, containment)


def intersection(a, b, tolerance=BOOLEAN_TOLERANCE, containment='box'):
    return _combine(a, b, 'intersection', tolerance, containment)


def subtraction(a, b, tolerance=BOOLEAN_TOLERANCE, containment='box'):
    """``a`` with ``b`` cut away"""
    return _combine(a, b, 'subtraction', tolerance, containment)


class Boolean(Geometry):
    """Lazily evaluated boolean combination of two or more operands,
    folded left to right.  The combined path is computed on first
    use and recomputed after a transform."""

    types = ('union', 'intersection', 'difference')

    def __repr__(self):
        return f"Boolean({self.type},{self.elem})"

    def __init__(self, type='union', polys=(), tolerance=BOOLEAN_TOLERANCE,
                 containment='box'):
        super().__init__()
        if type not in self.types:
            raise GeometryValueError('invalid type passed to Boolean(): {}'.format(type))
        if len(polys) < 2:
            raise GeometryValueError('Boolean requires at least two operands')
        for p in polys:
            if not isinstance(p, (Path, Circle)):
                raise UnsupportedGeometryError('Boolean', p)
        self.elem = [p.clone() for p in polys]
        self.__type = type
        self.tolerance = tolerance
        self.containment = containment
        self.__result = None

    @property
    def type(self):
        return self.__type

    @property
    def geom(self):
        if self.__result is None:
            op = {'union': union,
                  'intersection': intersection,
                  'difference': subtraction}[self.type]
            result = self.elem[0]
            for operand in self.elem[1:]:
                result = op(result, operand, self.tolerance, self.containment)
            self.__result = result
        return self.__result.clone()

    @property
    def extents(self):
        return self.geom.extents

    @property
    def area(self):
        return self.geom.area

    @property
    def perimeter(self):
        return self.geom.perimeter

    def transform(self, matrix):
        for p in self.elem:
            p.transform(matrix)
        self.__result = None
        return self

    def update(self):
        self.__result = None
        return self

    def to_points(self):
        return self.geom.to_points()

    def to_entity(self, layer=None):
        return self.geom.to_entity(self._layer(layer))
