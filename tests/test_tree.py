import threading

import pytest
from markgeom.tree import RegionTree, shape_is_region
from markgeom.geometry import Point, Line, Arc, Circle
from markgeom.poly import Path, Rectangle
from markgeom.errors import UnsupportedGeometryError
from markgeom.geom import close, vclose, pi
from markgeom.xform import translation
## unit tests for markgeom tree.py

BG = (0, 0, 0, 255)
FG = (255, 255, 255, 255)


class TestRegions:

    def test_shape_is_region(self):
        assert shape_is_region(Circle((0, 0), 1))
        assert shape_is_region(Rectangle((0, 0), 1, 1))
        assert shape_is_region(Path([(0, 0), (1, 0), (1, 1), (0, 0)]))
        assert not shape_is_region(Line((0, 0), (1, 1)))
        assert not shape_is_region(Arc((0, 0), 1, 0, pi))
        assert not shape_is_region(Point())


class TestRegionTree:

    def test_ring(self):
        outer = Circle((0, 0), 10)
        inner = Circle((0, 0), 4)
        roots = RegionTree.from_geometries([outer, inner], BG, FG)
        assert len(roots) == 1
        root = roots[0]
        assert root.geometry is outer
        assert len(root.children) == 1
        child = root.children[0]
        assert isinstance(child, RegionTree)
        assert child.geometry is inner
        assert outer.fill == FG
        assert inner.fill == BG

    def test_input_order_irrelevant(self):
        outer = Circle((0, 0), 10)
        inner = Circle((0, 0), 4)
        roots = RegionTree.from_geometries([inner, outer], BG, FG)
        assert len(roots) == 1
        assert roots[0].geometry is outer

    def test_colours_alternate(self):
        rings = [Circle((0, 0), r) for r in (2, 10, 6)]
        roots = RegionTree.from_geometries(rings, BG, FG)
        assert len(roots) == 1
        assert roots[0].depth == 3
        assert [c.fill for c in roots[0].flatten()] == [FG, BG, FG]
        assert [c.radius for c in roots[0].flatten()] == [10, 6, 2]

    def test_leaves(self):
        outer = Circle((0, 0), 10)
        inner = Circle((0, 0), 4)
        dot = Point(8, 0)
        tick = Line((-1, 0), (1, 0))
        root, = RegionTree.from_geometries([dot, tick, inner, outer], BG, FG)
        # the dot sits in the outer ring, the tick inside the hole
        assert dot in root.children
        assert dot.fill == BG
        hole = root.children[0]
        assert hole.children == [tick]
        assert tick.fill == FG

    def test_flatten_depth_first(self):
        outer = Circle((0, 0), 10)
        inner = Circle((0, 0), 4)
        dot = Point(8, 0)
        tick = Line((-1, 0), (1, 0))
        root, = RegionTree.from_geometries([dot, tick, inner, outer], BG, FG)
        assert root.flatten() == [outer, inner, tick, dot]

    def test_separate_roots(self):
        a = Circle((0, 0), 1)
        b = Circle((10, 0), 1)
        stray = Line((50, 50), (51, 51))
        roots = RegionTree.from_geometries([a, b, stray], BG, FG)
        assert len(roots) == 3
        assert sum(isinstance(r, RegionTree) for r in roots) == 2
        assert stray in roots

    def test_boundary_touching_counts_as_inside(self):
        a = Rectangle((0, 0), 10, 10)
        b = Rectangle((2.5, 0), 5, 10)
        roots = RegionTree.from_geometries([b, a], BG, FG)
        assert len(roots) == 1
        assert roots[0].geometry is a

    def test_equal_area_keeps_input_order(self):
        a = Rectangle((0, 0), 10, 10)
        b = Rectangle((0, 0), 10, 10)
        root, = RegionTree.from_geometries([a, b], BG, FG)
        assert root.geometry is a
        assert root.children[0].geometry is b

    def test_empty_node(self):
        t = RegionTree(background=BG, foreground=FG)
        assert not t.add_child(Point())
        assert t.add_child(Circle((0, 0), 1))
        assert t.geometry.fill == FG
        assert not t.add_child(Circle((5, 5), 1))


class TestTreeGeometry:

    def build(self):
        return RegionTree.from_geometries(
            [Circle((0, 0), 10), Circle((0, 0), 4), Point(8, 0)], BG, FG)[0]

    def test_metrics(self):
        t = self.build()
        assert close(t.area, pi*100)
        assert close(t.perimeter, 2*pi*10)
        e = t.extents
        assert (e.min_x, e.max_x) == (-10, 10)

    def test_transform_and_clone(self):
        t = self.build()
        c = t.clone().transform(translation(5, 0, 0))
        assert vclose(t.geometry.centre, (0, 0))
        assert vclose(c.geometry.centre, (5, 0))
        assert vclose(c.children[0].geometry.centre, (5, 0))

    def test_entities(self):
        t = self.build()
        with pytest.raises(UnsupportedGeometryError):
            t.to_entity()
        assert [r.kind for r in t.to_entities()] == ['circle', 'circle', 'point']

    def test_begin_get_all(self):
        t = self.build()
        seen = []
        lock = threading.Lock()

        def visit(g):
            with lock:
                seen.append(g)

        t.begin_get_all(visit)
        assert len(seen) == 3

    def test_map_func(self):
        t = self.build()
        t.map_func(lambda g: g.clone().transform(translation(0, 1, 0)))
        assert vclose(t.geometry.centre, (0, 1))
        assert vclose(t.children[1], (8, 1))

    def test_stroke(self):
        t = self.build().set_stroke((1, 1, 1, 255))
        assert all(g.stroke == (1, 1, 1, 255) for g in t.flatten())
