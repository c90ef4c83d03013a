import pytest
from markgeom.geom import close, vclose, pi
from markgeom.geometry import *
from markgeom.entity import from_entity
from markgeom.errors import UnsupportedGeometryError
from markgeom.tolerance import EPSILON
from markgeom.xform import scaling, translation, rotation
## unit tests for markgeom geometry.py

class TestGeometry:

    def test_transparency_clamped(self):
        p = Point()
        assert p.transparency == 1.0
        p.transparency = 0.3
        assert p.transparency == 0.3
        p.transparency = 2.0
        assert p.transparency == 1.0
        p.transparency = -0.5
        assert p.transparency == 1.0

    def test_defaults(self):
        p = Point()
        assert p.layer_name == '0'
        assert p.fill is None and p.stroke is None
        assert p.name == 'Point'

    def test_unsupported(self):
        g = Geometry()
        with pytest.raises(UnsupportedGeometryError) as err:
            g.area
        assert 'area' in str(err.value)
        assert 'Geometry' in str(err.value)
        with pytest.raises(TypeError):
            g.transform(translation(1, 0, 0))


class TestPoint:

    def test_create(self):
        p = Point(1, 2)
        assert (p.x, p.y, p.z) == (1.0, 2.0, 0.0)
        assert tuple(Point.of((3, 4, 5))) == (3.0, 4.0, 5.0)

    def test_degenerate_metrics(self):
        p = Point(1, 1)
        assert 0 < p.area < 1e-20
        assert 0 < p.perimeter < 1e-10

    def test_extents(self):
        e = Point(1, 2, 3).extents
        assert e.min_point == (1, 2, 3) and e.max_point == (1, 2, 3)
        assert e.width == 0

    def test_transform(self):
        p = Point(1, 0).transform(translation(1, 1, 0))
        assert vclose(p, (2, 1, 0))

    def test_clone(self):
        p = Point(1, 1)
        c = p.clone()
        c.x = 10
        assert p.x == 1


class TestLine:

    def test_metrics(self):
        l = Line((0, 0), (3, 4))
        assert close(l.length, 5)
        assert close(l.perimeter, 5)
        assert close(l.area, 5*EPSILON)
        assert l.area > 0

    def test_derived(self):
        l = Line((0, 0), (2, 2))
        assert vclose(l.midpoint, (1, 1, 0))
        assert close(l.angle, pi/4)
        e = l.extents
        assert (e.min_x, e.max_x) == (0, 2)

    def test_does_not_share_points(self):
        a = Point(0, 0)
        l = Line(a, (1, 0))
        a.x = 5
        assert l.start.x == 0

    def test_clone(self):
        l = Line((0, 0), (1, 0))
        c = l.clone()
        c.start.x = -100
        assert l.extents.min_x == 0

    def test_reverse(self):
        l = Line((0, 0), (1, 0)).reverse()
        assert vclose(l.start, (1, 0))


class TestArc:

    def test_sweep(self):
        assert close(Arc((0, 0), 1, 0, pi/2).sweep, pi/2)
        assert close(Arc((0, 0), 1, 3*pi/2, pi/2).sweep, pi)
        assert close(Arc((0, 0), 1, -pi/2, pi/2).sweep, pi)
        assert Arc((0, 0), 1, 1.0, 1.0).sweep == 0

    def test_metrics(self):
        a = Arc((0, 0), 2, 0, pi/2)
        assert close(a.area, 0.5*(pi/2)*4)
        assert close(a.perimeter, pi)

    def test_extents(self):
        e = Arc((0, 0), 2, 0, pi/2).extents
        assert close(e.min_x, 0) and close(e.min_y, 0)
        assert close(e.max_x, 2) and close(e.max_y, 2)
        # half circle over the top reaches y = r at pi/2
        e = Arc((0, 0), 1, 0, pi).extents
        assert close(e.max_y, 1) and close(e.min_x, -1)

    def test_points(self):
        a = Arc((0, 0), 1, 0, pi/2)
        pts = a.to_points()
        assert len(pts) == 33
        assert vclose(pts[0], (1, 0))
        assert vclose(pts[-1], (0, 1))
        assert len(Arc((0, 0), 1, 0, pi, vertex_count=8).to_points()) == 9

    def test_vertex_count(self):
        with pytest.raises(ValueError):
            Arc((0, 0), 1, 0, pi, vertex_count=4)

    def test_transform(self):
        a = Arc((0, 0), 1, 0, pi/2).transform(translation(2, 3, 0))
        assert vclose(a.centre, (2, 3))
        assert close(a.radius, 1)
        assert close(a.start_angle, 0) and close(a.end_angle, pi/2)

        a = Arc((0, 0), 1, 0, pi/2).transform(rotation(rz=pi/2))
        assert vclose(a.start_point, (0, 1))
        assert close(a.sweep, pi/2)

    def test_mirror(self):
        a = Arc((0, 0), 1, 0, pi/2).transform(scaling(-1, 1))
        assert close(a.sweep, pi/2)
        e = a.extents
        assert close(e.min_x, -1) and close(e.max_x, 0)
        assert close(e.max_y, 1)

    def test_from_bulge(self):
        a = Arc.from_bulge((0, 0), (2, 0), 1)
        assert vclose(a.centre, (1, 0))
        assert close(a.radius, 1)
        assert close(a.sweep, pi)
        assert vclose(a.point_at_angle(a.start_angle + a.sweep/2), (1, -1))

        a = Arc.from_bulge((0, 0), (2, 0), -1)
        assert vclose(a.point_at_angle(a.start_angle + a.sweep/2), (1, 1))
        with pytest.raises(ValueError):
            Arc.from_bulge((0, 0), (2, 0), 0)

    def test_from_three_points(self):
        a = Arc.from_three_points((1, 0), (0, 1), (-1, 0))
        assert vclose(a.centre, (0, 0))
        assert close(a.radius, 1)
        assert close(a.sweep, pi)
        a = Arc.from_three_points((-1, 0), (0, 1), (1, 0))
        assert vclose(a.start_point, (1, 0))
        with pytest.raises(ValueError):
            Arc.from_three_points((0, 0), (1, 1), (2, 2))


class TestCircle:

    def test_metrics(self):
        c = Circle((1, 1), 2)
        assert close(c.area, 4*pi)
        assert close(c.perimeter, 4*pi)
        e = c.extents
        assert (e.min_x, e.min_y, e.max_x, e.max_y) == (-1, -1, 3, 3)

    def test_points(self):
        pts = Circle((0, 0), 1).to_points()
        assert len(pts) == 33
        assert vclose(pts[0], pts[-1])
        assert vclose(pts[8], (0, 1))

    def test_non_uniform_scale(self):
        # the boundary point on the x axis decides the new radius
        c = Circle((0, 0), 1).transform(scaling(2, 3))
        assert close(c.radius, 2)

    def test_clone(self):
        c = Circle((0, 0), 1)
        d = c.clone().transform(translation(5, 0, 0))
        assert vclose(c.centre, (0, 0))
        assert vclose(d.centre, (5, 0))


class TestEntities:

    @pytest.mark.parametrize('geometry', [
        Point(1, 2, 3),
        Line((0, 0), (1, 1)),
        Arc((1, 1), 2, 0.5, 2.0),
        Circle((4, 5), 6),
    ])
    def test_round_trip(self, geometry):
        geometry.layer_name = 'MARK'
        record = geometry.to_entity()
        assert record.layer == 'MARK'
        back = from_entity(record)
        assert type(back) is type(geometry)
        assert back.layer_name == 'MARK'
        a = geometry.extents
        b = back.extents
        assert vclose(a.min_point, b.min_point)
        assert vclose(a.max_point, b.max_point)

    def test_layer_override(self):
        assert Line((0, 0), (1, 1)).to_entity('CUT').layer == 'CUT'
        assert Point().to_entities()[0].kind == 'point'
