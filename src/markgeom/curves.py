"""
Sampled curves: ellipses, Bezier curves and B-splines.

Each curve is a ``FixedPath`` whose points are a polygonal sampling of
the exact curve, regenerated from the defining data whenever it
changes.  Everything that works on paths (containment, booleans,
clipping, tiling) therefore works on curves unchanged.  Transforms
move the defining points and resample; ``vertex_count`` sets the
number of segments.

Bezier and B-spline evaluation is done by ``ezdxf.math``.

Copyright (c) 2024 markgeom contributors
All rights reserved (MIT License)
"""

from math import *

from ezdxf.math import BSpline, Bezier3P, Bezier4P, fit_points_to_cad_cv

from markgeom.entity import EntityRecord
from markgeom.errors import GeometryValueError
from markgeom.geom import constrain, distance2d, pi2, positive_angle
from markgeom.geometry import Point, _check_vertex_count
from markgeom.poly import FixedPath
from markgeom.tolerance import CLOSURE_TOLERANCE, DEFAULT_VERTEX_COUNT


class SampledCurve(FixedPath):
    """base for paths sampled from a parametric curve"""

    def __init__(self, vertex_count=DEFAULT_VERTEX_COUNT,
                 closure_tolerance=CLOSURE_TOLERANCE):
        self.vertex_count = _check_vertex_count(vertex_count)
        # Path.__init__ calls update(), which samples the curve
        super().__init__((), closure_tolerance)

    def defining_points(self):
        """the points a transform has to move"""
        raise NotImplementedError

    def point_at(self, t):
        """curve point at parameter fraction ``t`` in [0, 1]"""
        raise NotImplementedError

    def sample(self):
        n = self.vertex_count
        return [self.point_at(i/n) for i in range(n + 1)]

    def update(self):
        self._points = []
        for p in self.sample():
            self._push_back(p)
        return super().update()

    def transform(self, matrix):
        for p in self.defining_points():
            p.transform(matrix)
        return self.update()


class Ellipse(SampledCurve):
    """Elliptical arc about ``centre``.

    ``major_radius`` is measured along the direction ``rotation``
    (radians from +X), ``minor_radius`` at right angles to it.  The
    arc runs counter-clockwise in the ellipse parameter from
    ``start_angle`` to ``end_angle``; the defaults give a full, closed
    ellipse.
    """

    def __repr__(self):
        return f"Ellipse({self.centre},{self.major_radius},{self.minor_radius})"

    def __init__(self, centre, major_radius, minor_radius, start_angle=0.0,
                 end_angle=pi2, rotation=0.0, vertex_count=DEFAULT_VERTEX_COUNT):
        if major_radius <= 0 or minor_radius <= 0:
            raise GeometryValueError('bad ellipse radii: {}, {}'.format(
                major_radius, minor_radius))
        self.centre = Point.of(centre)
        self.major_radius = float(major_radius)
        self.minor_radius = float(minor_radius)
        self.start_angle = float(start_angle)
        self.end_angle = float(end_angle)
        self.rotation = float(rotation)
        super().__init__(vertex_count)

    @property
    def sweep(self):
        s = self.end_angle - self.start_angle
        if abs(s) >= pi2:
            return pi2
        return positive_angle(s)

    @property
    def is_full(self):
        return self.sweep == pi2

    def point_at_angle(self, angle):
        c = self.centre
        a = self.major_radius*cos(angle)
        b = self.minor_radius*sin(angle)
        cr = cos(self.rotation)
        sr = sin(self.rotation)
        return Point(c.x + a*cr - b*sr, c.y + a*sr + b*cr, c.z)

    def point_at(self, t):
        return self.point_at_angle(self.start_angle + constrain(t, 0.0, 1.0)*self.sweep)

    def sample(self):
        pts = super().sample()
        if self.is_full:
            pts[-1] = Point.of(pts[0])
        return pts

    def _axis_points(self):
        cr = cos(self.rotation)
        sr = sin(self.rotation)
        c = self.centre
        major = (c.x + self.major_radius*cr, c.y + self.major_radius*sr, c.z)
        minor = (c.x - self.minor_radius*sr, c.y + self.minor_radius*cr, c.z)
        return major, minor

    def defining_points(self):
        return [self.centre]

    def transform(self, matrix):
        # the axes are re-measured from their transformed end points
        major, minor = self._axis_points()
        c = matrix.apply(self.centre)
        m = matrix.apply(major)
        n = matrix.apply(minor)
        self.centre = Point(*c)
        self.major_radius = distance2d(c, m)
        self.minor_radius = distance2d(c, n)
        self.rotation = atan2(m[1] - c[1], m[0] - c[0])
        if matrix.determinant2d() < 0:
            self.start_angle, self.end_angle = -self.end_angle, -self.start_angle
        return self.update()

    @property
    def area(self):
        if self.is_full:
            return pi*self.major_radius*self.minor_radius
        return super().area

    def to_entity(self, layer=None):
        return EntityRecord('ellipse', [tuple(self.centre)], self._layer(layer),
                            radius=self.major_radius,
                            minor_radius=self.minor_radius,
                            start_angle=self.start_angle,
                            end_angle=self.end_angle,
                            rotation=self.rotation)


def _bezier_record(curve, control_points, layer):
    degree = len(control_points) - 1
    return EntityRecord('spline', [tuple(p) for p in control_points],
                        curve._layer(layer), degree=degree,
                        knots=[0.0]*(degree + 1) + [1.0]*(degree + 1))


class QuadraticBezier(SampledCurve):
    """Bezier curve from ``start`` to ``end`` pulled towards one
    control point"""

    def __repr__(self):
        return f"QuadraticBezier({self.start},{self.control},{self.end})"

    def __init__(self, start, control, end, vertex_count=DEFAULT_VERTEX_COUNT):
        self.start = Point.of(start)
        self.control = Point.of(control)
        self.end = Point.of(end)
        super().__init__(vertex_count)

    def defining_points(self):
        return [self.start, self.control, self.end]

    def point_at(self, t):
        curve = Bezier3P([tuple(p) for p in self.defining_points()])
        return Point.of(tuple(curve.point(constrain(t, 0.0, 1.0))))

    def sample(self):
        curve = Bezier3P([tuple(p) for p in self.defining_points()])
        return [Point.of(tuple(v)) for v in curve.approximate(self.vertex_count)]

    def to_entity(self, layer=None):
        return _bezier_record(self, self.defining_points(), layer)


class CubicBezier(SampledCurve):
    """Bezier curve from ``start`` to ``end`` with two control points"""

    def __repr__(self):
        return f"CubicBezier({self.start},{self.control1},{self.control2},{self.end})"

    def __init__(self, start, control1, control2, end,
                 vertex_count=DEFAULT_VERTEX_COUNT):
        self.start = Point.of(start)
        self.control1 = Point.of(control1)
        self.control2 = Point.of(control2)
        self.end = Point.of(end)
        super().__init__(vertex_count)

    def defining_points(self):
        return [self.start, self.control1, self.control2, self.end]

    def point_at(self, t):
        curve = Bezier4P([tuple(p) for p in self.defining_points()])
        return Point.of(tuple(curve.point(constrain(t, 0.0, 1.0))))

    def sample(self):
        curve = Bezier4P([tuple(p) for p in self.defining_points()])
        return [Point.of(tuple(v)) for v in curve.approximate(self.vertex_count)]

    def to_entity(self, layer=None):
        return _bezier_record(self, self.defining_points(), layer)


class Spline(SampledCurve):
    """Non-uniform rational B-spline.

    Give either ``control_points`` (with optional ``knots`` and
    ``weights``; an open uniform knot vector is used by default) or
    ``fit_points``, through which a cubic curve is interpolated.  The
    degree is lowered when there are too few control points for it.
    A ``closed`` spline whose ends do not meet is closed with a
    straight segment.
    """

    def __repr__(self):
        return f"Spline({self.degree},{self.control_points})"

    def __init__(self, control_points=(), degree=3, knots=(), weights=(),
                 fit_points=(), closed=False, vertex_count=DEFAULT_VERTEX_COUNT):
        control_points = [Point.of(p) for p in control_points]
        self.fit_points = [Point.of(p) for p in fit_points]
        knots = [float(k) for k in knots]
        weights = [float(w) for w in weights]
        if not control_points:
            if len(self.fit_points) > 2:
                curve = fit_points_to_cad_cv([tuple(p) for p in self.fit_points])
                control_points = [Point.of(tuple(v)) for v in curve.control_points]
                degree = curve.degree
                knots = [float(k) for k in curve.knots()]
            else:
                # two fit points interpolate to their chord
                control_points = [Point.of(p) for p in self.fit_points]
        if len(control_points) < 2:
            raise GeometryValueError(
                'spline needs at least 2 control or fit points, got {}'.format(
                    len(control_points)))
        if degree < 1:
            raise GeometryValueError('bad spline degree: {}'.format(degree))
        degree = min(int(degree), len(control_points) - 1)
        if knots and len(knots) != len(control_points) + degree + 1:
            raise GeometryValueError('spline of degree {} with {} control points needs {} knots, got {}'.format(
                degree, len(control_points), len(control_points) + degree + 1,
                len(knots)))
        if weights and len(weights) != len(control_points):
            raise GeometryValueError('spline has {} weights for {} control points'.format(
                len(weights), len(control_points)))
        self.control_points = control_points
        self.degree = degree
        self.knots = knots
        self.weights = weights
        self.closed = closed
        super().__init__(vertex_count)

    def bspline(self):
        """the curve as an ``ezdxf.math.BSpline``"""
        return BSpline([tuple(p) for p in self.control_points],
                       order=self.degree + 1,
                       knots=self.knots or None,
                       weights=self.weights or None)

    def defining_points(self):
        return self.control_points + self.fit_points

    def point_at(self, t):
        curve = self.bspline()
        return Point.of(tuple(curve.point(constrain(t, 0.0, 1.0)*curve.max_t)))

    def sample(self):
        pts = [Point.of(tuple(v))
               for v in self.bspline().approximate(self.vertex_count)]
        if self.closed and distance2d(pts[0], pts[-1]) > self.closure_tolerance:
            pts.append(Point.of(pts[0]))
        return pts

    def to_entity(self, layer=None):
        return EntityRecord('spline', [tuple(p) for p in self.control_points],
                            self._layer(layer), closed=self.closed,
                            degree=self.degree,
                            knots=list(self.bspline().knots()),
                            weights=list(self.weights),
                            fit_points=[tuple(p) for p in self.fit_points])
