import pytest
from markgeom.ezdxf_entities import (
    new_document, add_to_layout, record_from_dxf, to_document, from_layout,
)
from markgeom.entity import EntityRecord
from markgeom.geometry import Point, Line, Arc, Circle
from markgeom.poly import Path, Rectangle
from markgeom.curves import Ellipse, CubicBezier, Spline
from markgeom.geom import close, vclose, pi
## unit tests for markgeom ezdxf_entities.py


@pytest.fixture
def msp():
    return new_document().modelspace()


class TestWrite:

    def test_layers(self):
        doc = new_document(['cut', 'engrave'])
        assert 'cut' in doc.layers
        assert 'engrave' in doc.layers

    def test_line(self, msp):
        e = add_to_layout(EntityRecord('line', [(0, 0), (1, 2)], 'cut'), msp)
        assert e.dxftype() == 'LINE'
        assert e.dxf.layer == 'cut'
        assert 'cut' in msp.doc.layers
        assert vclose(e.dxf.end, (1, 2))

    def test_arc_in_degrees(self, msp):
        e = add_to_layout(Arc((0, 0), 2, 0, pi/2).to_entity(), msp)
        assert e.dxftype() == 'ARC'
        assert close(e.dxf.end_angle, 90.0)
        r = record_from_dxf(e)
        assert close(r.end_angle, pi/2)
        assert r.radius == 2.0

    def test_closed_polyline(self, msp):
        e = add_to_layout(Rectangle((0, 0), 10, 10).to_entity(), msp)
        assert e.dxftype() == 'LWPOLYLINE'
        assert e.closed
        assert len(e) == 4

    def test_to_document(self):
        doc = to_document([Line((0, 0), (1, 1)), Circle((0, 0), 2),
                           Point(3, 3), Path([(0, 0), (1, 0), (1, 1)])])
        types = sorted(e.dxftype() for e in doc.modelspace())
        assert types == ['CIRCLE', 'LINE', 'LWPOLYLINE', 'POINT']


class TestRead:

    def test_round_trip(self):
        shapes = [Line((0, 0), (1, 1)), Circle((5, 5), 2),
                  Rectangle((0, 0), 10, 10), Point(3, 4)]
        back = from_layout(to_document(shapes).modelspace())
        assert [type(g) for g in back] == [Line, Circle, Path, Point]
        assert close(back[1].radius, 2.0)
        assert back[2].is_closed
        assert close(back[2].area, 100.0)
        assert vclose(back[3], (3, 4))

    def test_bulge(self, msp):
        msp.add_lwpolyline([(0, 0, 1.0), (2, 0, 0.0)], format='xyb')
        path, = from_layout(msp)
        assert len(path) == 33
        assert vclose(path.start_point, (0, 0))
        assert vclose(path.end_point, (2, 0))
        e = path.extents
        assert close(e.min_y, -1.0)
        assert e.max_y <= 1e-9

    def test_fit_point_spline(self, msp):
        msp.add_spline(fit_points=[(0, 0), (1, 1), (2, 0), (3, 1)])
        r = record_from_dxf(next(iter(msp)))
        assert r.kind == 'spline'
        assert len(r.fit_points) == 4
        curve, = from_layout(msp)
        assert isinstance(curve, Spline)
        assert vclose(curve.start_point, (0, 0))
        assert vclose(curve.end_point, (3, 1))

    def test_spline_round_trip(self):
        s = Spline([(0, 0), (1, 2), (3, 2), (4, 0)], degree=3)
        doc = to_document([s])
        e = next(iter(doc.modelspace()))
        assert e.dxftype() == 'SPLINE'
        assert e.dxf.degree == 3
        back, = from_layout(doc.modelspace())
        assert isinstance(back, Spline)
        assert len(back.control_points) == 4
        assert vclose(back.point_at(0.5), s.point_at(0.5))

    def test_bezier_as_spline(self):
        b = CubicBezier((0, 0), (0, 2), (4, 2), (4, 0))
        back, = from_layout(to_document([b]).modelspace())
        assert isinstance(back, Spline)
        assert vclose(back.point_at(0.5), b.point_at(0.5))

    def test_ellipse_round_trip(self):
        el = Ellipse((1, 1), 4, 2, rotation=pi/6)
        doc = to_document([el])
        e = next(iter(doc.modelspace()))
        assert e.dxftype() == 'ELLIPSE'
        assert close(e.dxf.ratio, 0.5)
        back, = from_layout(doc.modelspace())
        assert isinstance(back, Ellipse)
        assert close(back.major_radius, 4)
        assert close(back.minor_radius, 2)
        assert close(back.rotation, pi/6)
        assert close(back.area, el.area)

    def test_tall_ellipse(self):
        el = Ellipse((0, 0), 1, 3, 0.0, pi)
        back, = from_layout(to_document([el]).modelspace())
        assert close(back.major_radius, 3)
        assert vclose(back.start_point, el.start_point)
        assert vclose(back.end_point, el.end_point)
        assert vclose(back.point_at(0.5), (0, 3))

    def test_unsupported(self, msp):
        msp.add_text('hello')
        msp.add_line((0, 0), (1, 0))
        with pytest.raises(TypeError):
            from_layout(msp)
        shapes = from_layout(msp, skip_unsupported=True)
        assert len(shapes) == 1
        assert isinstance(shapes[0], Line)
