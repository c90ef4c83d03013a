## metric, intersection and decomposition utilities operating on
## markgeom primitives

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
Utility functions on markgeom primitives: collection extents and
metrics, line/path intersection, bounding-box containment, and the
decomposition of figures into lines and back into paths.

Containment
===========

``is_within2d()`` compares bounding boxes only.  That is exact for the
axis-aligned, non-overlapping rings typical of marking layouts and
approximate otherwise; ``is_point_in_path()`` provides a true
even-odd test for callers that need one.

"""

from math import *

from markgeom.errors import GeometryValueError, UnsupportedGeometryError
from markgeom.extents import Extents
from markgeom.geom import (
    compare, constrain, distance, intersect_segments2d, point_in_polygon, xyz,
)
from markgeom.geometry import Arc, Circle, Line, Point
from markgeom.poly import Path
from markgeom.tolerance import (
    ANGLE_TOLERANCE, BOOLEAN_TOLERANCE, CLOSURE_TOLERANCE, LINE_RESOLUTION,
)


## collection metrics
## -------------------

def calculate_extents(geometries):
    """combined extents of ``geometries``; the centroid is
    ``calculate_extents(...).centre``.  An empty input gives the empty
    ``Extents()``."""
    e = Extents()
    for g in geometries:
        e = e.combine(g.extents)
    return e


def calculate_area(geometries):
    return sum(g.area for g in geometries)


def calculate_perimeter(geometries):
    return sum(g.perimeter for g in geometries)


## intersection
## -------------

def intersect_lines(a, b, resolution=LINE_RESOLUTION):
    """intersection ``Point`` of lines ``a`` and ``b`` or None when they
    are parallel, degenerate or do not cross within both segments"""
    hit = intersect_segments2d(a.start, a.end, b.start, b.end, resolution)
    if hit is None:
        return None
    return Point(*hit)


def _dedupe(points, tolerance):
    result = []
    for p in points:
        if not any(compare(p, q, tolerance) == 0 for q in result):
            result.append(p)
    return result


def intersect_path_line(path, line, tolerance=BOOLEAN_TOLERANCE,
                        resolution=LINE_RESOLUTION):
    hits = []
    for seg in path.segments():
        p = intersect_lines(seg, line, resolution)
        if p is not None:
            hits.append(p)
    return _dedupe(hits, tolerance)


def intersect_paths(a, b, tolerance=BOOLEAN_TOLERANCE,
                    resolution=LINE_RESOLUTION):
    hits = []
    segs_b = b.segments()
    for sa in a.segments():
        for sb in segs_b:
            p = intersect_lines(sa, sb, resolution)
            if p is not None:
                hits.append(p)
    return _dedupe(hits, tolerance)


## containment
## ------------

def is_point_within2d(p, region):
    """inclusive bounding-box test of point-like ``p`` against a
    geometry or an ``Extents``"""
    e = region if isinstance(region, Extents) else region.extents
    return e.contains_point(p)


def is_within2d(inner, outer):
    """True when the bounding box of ``inner`` lies inside the bounding
    box of ``outer``, edges included"""
    return outer.extents.contains(inner.extents)


def is_point_in_path(p, path):
    """even-odd ray-cast test against the polygon formed by ``path``"""
    return point_in_polygon(p, path._points)


## sampling
## ---------

def get_point_at_position(geometry, t):
    """point at fraction ``t`` (clamped to [0, 1]) of the arc length of
    a line, arc, circle or path"""
    pts = to_path(geometry)._points
    if not pts:
        raise GeometryValueError('empty path has no point at position {}'.format(t))
    if len(pts) == 1:
        return Point.of(pts[0])
    lengths = [distance(pts[i-1], pts[i]) for i in range(1, len(pts))]
    target = constrain(t, 0.0, 1.0)*sum(lengths)
    for i, l in enumerate(lengths):
        if target <= l or i == len(lengths) - 1:
            f = 0.0 if l == 0 else constrain(target/l, 0.0, 1.0)
            a = pts[i]
            b = pts[i+1]
            return Point(a.x + f*(b.x - a.x), a.y + f*(b.y - a.y),
                         a.z + f*(b.z - a.z))
        target -= l


## decomposition
## --------------

def to_path(geometry, closure_tolerance=CLOSURE_TOLERANCE):
    """a new ``Path`` following ``geometry``, carrying its style"""
    if isinstance(geometry, Path):
        result = Path(geometry._points, closure_tolerance)
    elif isinstance(geometry, (Line, Arc, Circle, Point)):
        result = Path(geometry.to_points(), closure_tolerance)
    else:
        raise UnsupportedGeometryError('to_path', geometry)
    return result.copy_style(geometry)


def split_geometry(geometry):
    """break a single figure into ``Line`` segments; points yield none"""
    from markgeom.tree import RegionTree
    from markgeom.wrapper import GeometryWrapper

    if isinstance(geometry, Point):
        return []
    if isinstance(geometry, Line):
        return [geometry.clone()]
    if isinstance(geometry, (Arc, Circle, Path)):
        lines = to_path(geometry).segments()
        for l in lines:
            l.copy_style(geometry)
        return lines
    if isinstance(geometry, (GeometryWrapper, RegionTree)):
        return explode(geometry.flatten())
    raise UnsupportedGeometryError('split_geometry', geometry)


def explode(geometries):
    """all figures in ``geometries`` as one flat list of lines"""
    lines = []
    for g in geometries:
        lines.extend(split_geometry(g))
    return lines


def extend_line(line, amount):
    """copy of ``line`` lengthened by ``amount`` at both ends"""
    length = line.length
    result = line.clone()
    if length == 0:
        return result
    dx = (line.end.x - line.start.x)/length*amount
    dy = (line.end.y - line.start.y)/length*amount
    dz = (line.end.z - line.start.z)/length*amount
    result.start = Point(line.start.x - dx, line.start.y - dy, line.start.z - dz)
    result.end = Point(line.end.x + dx, line.end.y + dy, line.end.z + dz)
    return result


def simplify_lines(lines, angle_tolerance=ANGLE_TOLERANCE,
                   tolerance=CLOSURE_TOLERANCE):
    """merge runs of connected lines whose directions agree within
    ``angle_tolerance`` degrees"""
    result = []
    for line in lines:
        if result:
            last = result[-1]
            turn = abs(degrees(line.angle - last.angle)) % 360.0
            turn = min(turn, 360.0 - turn)
            if (compare(last.end, line.start, tolerance) == 0 and
                    turn <= angle_tolerance):
                last.end = Point.of(line.end)
                continue
        result.append(line.clone())
    return result


def trace_connected(sequences, tolerance=CLOSURE_TOLERANCE):
    """Join point sequences (line end point pairs or longer polyline
    fragments) into point lists by matching endpoints, reversing a
    sequence where that makes it connect.  A chain is grown at its
    tail, then at its head, until it closes on itself or no remaining
    sequence touches either end."""
    remaining = [list(s) for s in sequences if len(s) > 0]
    chains = []

    def same(p, q):
        return compare(p, q, tolerance) == 0

    while remaining:
        chain = remaining.pop(0)
        grown = True
        while grown and remaining:
            if len(chain) > 2 and same(chain[0], chain[-1]):
                break
            grown = False
            for i, item in enumerate(remaining):
                if same(item[0], chain[-1]):
                    chain.extend(item[1:])
                elif same(item[-1], chain[-1]):
                    chain.extend(reversed(item[:-1]))
                elif same(item[-1], chain[0]):
                    chain[:0] = item[:-1]
                elif same(item[0], chain[0]):
                    chain[:0] = reversed(item[1:])
                else:
                    continue
                del remaining[i]
                grown = True
                break
        chains.append(chain)
    return chains


def generate_paths_from_lines(lines, tolerance=CLOSURE_TOLERANCE):
    """join lines into as few paths as endpoint matching allows"""
    chains = trace_connected([(l.start, l.end) for l in lines], tolerance)
    # lone lines come back as two-point paths
    return [Path(chain, tolerance) for chain in chains]
