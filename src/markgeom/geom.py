## point-level computational geometry for markgeom: distances, the
## signed measure used for closure and seam tests, segment tests and
## the 2D line solve used by every intersection routine

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

"""low-level point functions for **markgeom**

The functions in this module work on anything "point-like": an
object with ``x``, ``y`` and ``z`` attributes (such as
``markgeom.geometry.Point``) or a 2- or 3-element tuple/list.  They
never mutate their arguments and return plain floats or tuples.

Higher level operations on primitives (``Line``, ``Path``, ...) live
in ``markgeom.geom_util``.

"""

from math import *
import mpmath as mpm

from markgeom.tolerance import EPSILON, LINE_RESOLUTION

## constants
pi2 = 2.0*pi
epsilon = 0.000001  # default for close()/vclose()


## operations on scalars
## -----------------------

def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n, bool)) and isinstance(n, (int, float))


def close(a, b, tolerance=epsilon):
    """ are two scalars the same within tolerance
    """
    return abs(a-b) < tolerance


def constrain(value, lower, upper):
    """clamp ``value`` to the closed interval [lower, upper]"""
    return max(lower, min(upper, value))


def map_range(value, in_min, in_max, out_min, out_max):
    """linearly map ``value`` from [in_min, in_max] to [out_min, out_max]"""
    if in_max == in_min:
        return out_min
    return out_min + (value - in_min)*(out_max - out_min)/(in_max - in_min)


def to_radians(degrees):
    return degrees*pi/180.0


def to_degrees(radians):
    return radians*180.0/pi


def positive_angle(angle):
    """normalise an angle in radians into [0, 2pi)"""
    a = fmod(angle, pi2)
    if a < 0:
        a += pi2
    # fmod of a value a hair below a multiple of 2pi can land on 2pi
    if a >= pi2:
        a = 0.0
    return a


## point coordinates
## ------------------

def xyz(p):
    """Return a tuple of (x, y, z) from a point-like object."""
    if isinstance(p, (list, tuple)):
        n = len(p)
        if n < 2:
            raise ValueError('bad point-like passed to xyz: {}'.format(p))
        return (float(p[0]), float(p[1]), float(p[2]) if n > 2 else 0.0)
    return (p.x, p.y, p.z)


def vclose(a, b, tolerance=epsilon):
    """are two point-likes the same within tolerance"""
    return distance(a, b) < tolerance


## distances and measures
## -----------------------

def distance(p1, p2):
    """Euclidean distance in 3D"""
    x1, y1, z1 = xyz(p1)
    x2, y2, z2 = xyz(p2)
    return sqrt((x2-x1)**2 + (y2-y1)**2 + (z2-z1)**2)


def distance2d(p1, p2):
    """Euclidean distance in the XY plane, ignoring z"""
    x1, y1, _ = xyz(p1)
    x2, y2, _ = xyz(p2)
    return sqrt((x2-x1)**2 + (y2-y1)**2)


def _norm(p):
    x, y, z = xyz(p)
    return sqrt(x*x + y*y + z*z)


def _norm2d(p):
    x, y, _ = xyz(p)
    return sqrt(x*x + y*y)


def signed_measure(p1, p2):
    """Distance between ``p1`` and ``p2`` signed by which point lies
    farther from the origin: positive when ``p2`` is farther than
    ``p1``, negative otherwise.

    This is an ordering heuristic used only to compare points against
    a tolerance band (see ``compare()``); it is not a signed
    projection along any axis.
    """
    sign = 1.0 if _norm(p2) > _norm(p1) else -1.0
    return sign*distance(p1, p2)


def signed_measure2d(p1, p2):
    """2D form of ``signed_measure()``, ignoring z"""
    sign = 1.0 if _norm2d(p2) > _norm2d(p1) else -1.0
    return sign*distance2d(p1, p2)


def _classify(measure, tolerance):
    if measure > tolerance:
        return 1
    elif measure < -tolerance:
        return -1
    return 0


def compare(p1, p2, tolerance):
    """return 0 if the points coincide within ``tolerance``, otherwise
    1 or -1 according to the sign of ``signed_measure(p1, p2)``"""
    return _classify(signed_measure(p1, p2), tolerance)


def compare2d(p1, p2, tolerance):
    """2D form of ``compare()``"""
    return _classify(signed_measure2d(p1, p2), tolerance)


## segments
## ---------

def is_on_line2d(p, start, end, resolution=LINE_RESOLUTION):
    """True if ``p`` lies on the finite segment ``start``-``end``: the
    two sub-distances add up to the segment length within
    ``resolution``."""
    ab = distance2d(start, end)
    ac = distance2d(start, p)
    cb = distance2d(p, end)
    return abs(ac + cb - ab) <= resolution


def segment_point_distance2d(p, start, end):
    """shortest XY distance from ``p`` to the segment ``start``-``end``"""
    px, py, _ = xyz(p)
    ax, ay, _ = xyz(start)
    bx, by, _ = xyz(end)
    dx = bx - ax
    dy = by - ay
    l2 = dx*dx + dy*dy
    if l2 < EPSILON:
        return distance2d(p, start)
    t = constrain(((px-ax)*dx + (py-ay)*dy)/l2, 0.0, 1.0)
    return sqrt((px - (ax + t*dx))**2 + (py - (ay + t*dy))**2)


def solve_lines2d(s1, e1, s2, e2):
    """Intersection of the two infinite lines through ``s1``-``e1`` and
    ``s2``-``e2``, computed with a determinant solve at extended
    precision.  Returns an (x, y) tuple, or None when the lines are
    parallel or either is degenerate."""
    x1, y1, _ = xyz(s1)
    x2, y2, _ = xyz(e1)
    x3, y3, _ = xyz(s2)
    x4, y4, _ = xyz(e2)

    a1 = mpm.mpf(y2) - mpm.mpf(y1)
    b1 = mpm.mpf(x1) - mpm.mpf(x2)
    c1 = a1*x1 + b1*y1

    a2 = mpm.mpf(y4) - mpm.mpf(y3)
    b2 = mpm.mpf(x3) - mpm.mpf(x4)
    c2 = a2*x3 + b2*y3

    det = a1*b2 - a2*b1
    if mpm.fabs(det) < mpm.mpf(EPSILON):
        return None

    x = (b2*c1 - b1*c2)/det
    y = (a1*c2 - a2*c1)/det
    return (float(x), float(y))


def intersect_segments2d(s1, e1, s2, e2, resolution=LINE_RESOLUTION):
    """Intersection point of two finite segments as an (x, y, z) tuple
    (z taken from ``s1``), or None if they do not cross."""
    hit = solve_lines2d(s1, e1, s2, e2)
    if hit is None:
        return None
    if not (is_on_line2d(hit, s1, e1, resolution) and
            is_on_line2d(hit, s2, e2, resolution)):
        return None
    return (hit[0], hit[1], xyz(s1)[2])


## polygons
## ---------

def signed_area(points):
    """shoelace sum over an ordered point sequence, closing the polygon
    implicitly.  Positive for counter-clockwise winding."""
    pts = [xyz(p) for p in points]
    n = len(pts)
    if n < 3:
        return 0.0
    s = 0.0
    for i in range(n):
        x1, y1, _ = pts[i]
        x2, y2, _ = pts[(i+1) % n]
        s += x1*y2 - x2*y1
    return 0.5*s


def polygon_area(points):
    """sign-agnostic shoelace area"""
    return abs(signed_area(points))


def point_in_polygon(p, points):
    """even-odd ray-cast test of ``p`` against a polygon given as an
    ordered point sequence (closed implicitly)"""
    px, py, _ = xyz(p)
    pts = [xyz(q) for q in points]
    n = len(pts)
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi, _ = pts[i]
        xj, yj, _ = pts[j]
        if (yi > py) != (yj > py):
            xcross = (xj - xi)*(py - yi)/(yj - yi) + xi
            if px < xcross:
                inside = not inside
        j = i
    return inside
