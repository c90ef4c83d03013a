import pytest
from markgeom.entity import EntityRecord, from_entity, KINDS
from markgeom.geometry import Point, Line, Arc, Circle
from markgeom.poly import Path
from markgeom.curves import Ellipse, Spline
from markgeom.geom import close, vclose, pi
## unit tests for markgeom entity.py


class TestEntityRecord:

    def test_kinds(self):
        for k in KINDS:
            assert EntityRecord(k).kind == k
        with pytest.raises(ValueError):
            EntityRecord('hatch')

    def test_coordinates_normalised(self):
        r = EntityRecord('line', [(1, 2), [3, 4, 5]])
        assert r.coordinates == [(1, 2, 0), (3, 4, 5)]
        assert r.layer == '0'

    def test_primitives(self):
        g = from_entity(EntityRecord('point', [(1, 2, 3)], 'dots'))
        assert isinstance(g, Point)
        assert vclose(g, (1, 2, 3))
        assert g.layer_name == 'dots'

        g = from_entity(EntityRecord('line', [(0, 0), (3, 4)]))
        assert isinstance(g, Line)
        assert close(g.length, 5.0)

        g = from_entity(EntityRecord('arc', [(0, 0)], radius=2.0,
                                     start_angle=0.0, end_angle=pi/2))
        assert isinstance(g, Arc)
        assert close(g.sweep, pi/2)

        g = from_entity(EntityRecord('circle', [(1, 1)], 'holes', radius=3.0))
        assert isinstance(g, Circle)
        assert g.radius == 3.0
        assert g.layer_name == 'holes'

    def test_paths(self):
        pts = [(0, 0), (4, 0), (4, 4), (0, 4)]
        g = from_entity(EntityRecord('polyline', pts, closed=True))
        assert isinstance(g, Path)
        assert g.is_closed
        assert close(g.area, 16.0)

        g = from_entity(EntityRecord('spline', pts))
        assert isinstance(g, Spline)
        assert g.degree == 3
        assert not g.is_closed
        assert vclose(g.start_point, (0, 0))
        assert vclose(g.end_point, (0, 4))

    def test_curves(self):
        g = from_entity(EntityRecord('ellipse', [(1, 2)], radius=3.0,
                                     minor_radius=1.0))
        assert isinstance(g, Ellipse)
        assert g.is_closed
        assert close(g.area, 3*pi)

        g = from_entity(EntityRecord('spline', fit_points=[(0, 0), (1, 1), (2, 0)]))
        assert isinstance(g, Spline)
        assert vclose(g.start_point, (0, 0))
        assert vclose(g.end_point, (2, 0))

    def test_incomplete(self):
        with pytest.raises(ValueError):
            from_entity(EntityRecord('line', [(0, 0)]))
        with pytest.raises(ValueError):
            from_entity(EntityRecord('circle', [(0, 0)]))
        with pytest.raises(ValueError):
            from_entity(EntityRecord('polyline'))
        with pytest.raises(ValueError):
            from_entity(EntityRecord('spline'))
        with pytest.raises(ValueError):
            from_entity(EntityRecord('ellipse', [(0, 0)], radius=1.0))

    def test_round_trip_layer(self):
        c = Circle((2, 3), 1.5)
        c.layer_name = 'engrave'
        r = c.to_entity()
        assert r.layer == 'engrave'
        back = from_entity(r)
        assert back.layer_name == 'engrave'
        assert vclose(back.centre, (2, 3))
