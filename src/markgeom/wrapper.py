"""
Composite container holding heterogeneous markgeom primitives.

Copyright (c) 2024 markgeom contributors
All rights reserved (MIT License)
"""

from concurrent.futures import ThreadPoolExecutor

from markgeom.errors import UnsupportedGeometryError
from markgeom.extents import Extents
from markgeom.geometry import Arc, Circle, Geometry, Line, Point
from markgeom.poly import Path


class GeometryWrapper(Geometry):
    """Parallel lists of points, lines, arcs, circles and paths.

    ``flatten()`` always yields arcs, then circles, lines, points and
    finally paths (rectangles are kept with the paths).  The wrapper
    holds the geometries it is given; ``clone()`` copies them all.
    """

    def __repr__(self):
        return "GeometryWrapper({} arcs, {} circles, {} lines, {} points, {} paths)".format(
            len(self.arcs), len(self.circles), len(self.lines),
            len(self.points), len(self.paths))

    def __init__(self, geometries=()):
        super().__init__()
        self.points = []
        self.lines = []
        self.arcs = []
        self.circles = []
        self.paths = []
        self.extend(geometries)

    def _bucket(self, geometry):
        if isinstance(geometry, Point):
            return self.points
        if isinstance(geometry, Line):
            return self.lines
        if isinstance(geometry, Arc):
            return self.arcs
        if isinstance(geometry, Circle):
            return self.circles
        if isinstance(geometry, Path):
            return self.paths
        return None

    def add(self, geometry):
        from markgeom.tree import RegionTree

        if isinstance(geometry, (GeometryWrapper, RegionTree)):
            return self.extend(geometry.flatten())
        bucket = self._bucket(geometry)
        if bucket is None:
            raise UnsupportedGeometryError('GeometryWrapper.add', geometry)
        bucket.append(geometry)
        return self

    def extend(self, geometries):
        for g in geometries:
            self.add(g)
        return self

    def remove(self, geometry):
        bucket = self._bucket(geometry)
        if bucket is None:
            raise UnsupportedGeometryError('GeometryWrapper.remove', geometry)
        bucket.remove(geometry)
        return self

    def clear(self):
        for bucket in (self.points, self.lines, self.arcs, self.circles, self.paths):
            bucket.clear()
        return self

    def flatten(self):
        return self.arcs + self.circles + self.lines + self.points + self.paths

    def __len__(self):
        return (len(self.points) + len(self.lines) + len(self.arcs) +
                len(self.circles) + len(self.paths))

    def __iter__(self):
        return iter(self.flatten())

    @property
    def extents(self):
        e = Extents()
        for g in self.flatten():
            e = e.combine(g.extents)
        return e

    @property
    def area(self):
        return sum(g.area for g in self.flatten())

    @property
    def perimeter(self):
        return sum(g.perimeter for g in self.flatten())

    def set_fill(self, colour):
        self.fill = colour
        for g in self.flatten():
            g.fill = colour
        return self

    def set_stroke(self, colour):
        self.stroke = colour
        for g in self.flatten():
            g.stroke = colour
        return self

    def transform(self, matrix):
        for g in self.flatten():
            g.transform(matrix)
        return self

    def update(self):
        for g in self.flatten():
            g.update()
        return self

    def to_points(self):
        pts = []
        for g in self.flatten():
            pts.extend(g.to_points())
        return pts

    def to_entities(self, layer=None):
        return [g.to_entity(layer) for g in self.flatten()]

    def map_func(self, func, max_workers=None):
        """Replace every held geometry ``g`` by ``func(g)``.  Calls run
        on a thread pool; each result is written back to the slot it
        came from, so bucket order is preserved.  ``func`` must return
        a geometry of the same kind."""
        for bucket in (self.arcs, self.circles, self.lines, self.points, self.paths):
            if not bucket:
                continue
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                results = list(executor.map(func, bucket))
            for i, g in enumerate(results):
                bucket[i] = g
        return self

    def begin_get_all(self, callback, max_workers=None):
        """Call ``callback(g)`` for every held geometry on a thread pool.
        Calls may run in any order; exceptions raised by ``callback``
        propagate once all calls have been submitted."""
        items = self.flatten()
        if not items:
            return
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            for _ in executor.map(callback, items):
                pass
