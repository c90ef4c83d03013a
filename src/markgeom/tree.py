"""
Region containment tree: nests shapes by bounding box so that fill and
hole colours alternate with depth.

Copyright (c) 2024 markgeom contributors
All rights reserved (MIT License)
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from markgeom.errors import UnsupportedGeometryError
from markgeom.extents import Extents
from markgeom.geom_util import is_within2d
from markgeom.geometry import Circle, Geometry
from markgeom.poly import Path

logger = logging.getLogger(__name__)


def shape_is_region(geometry):
    """paths (rectangles, ellipses and other sampled curves included) and
    circles can enclose other shapes"""
    return isinstance(geometry, (Path, Circle))


class RegionTree(Geometry):
    """A boundary geometry and the shapes nested inside it.

    Children are either leaf geometries or nested ``RegionTree``
    nodes.  A node owns its children; there are no parent links, so
    walking the tree always starts from a root.  The boundary is
    painted with the node's ``foreground`` colour; leaves directly
    inside it, and the boundaries of nested regions, get its
    ``background`` colour, which nested regions in turn use as their
    foreground.

    Containment is decided by ``is_within2d()`` (bounding boxes,
    inclusive), which is exact for the axis-aligned, non-overlapping
    rings found in marking layouts.
    """

    def __repr__(self):
        return f"RegionTree({self.geometry},{len(self.children)} children)"

    def __init__(self, geometry=None, background=None, foreground=None):
        super().__init__()
        self.geometry = geometry
        self.children = []
        self.background = background
        self.foreground = foreground
        self.fill = foreground
        if geometry is not None:
            geometry.fill = foreground

    @classmethod
    def from_geometries(cls, geometries, background, foreground):
        """Nest ``geometries`` largest-first.  Returns the top-level
        items: ``RegionTree`` roots, plus any non-region shape that no
        region contains, left as is."""
        # stable sort: equal areas keep their input order
        ordered = sorted(geometries, key=lambda g: g.area, reverse=True)

        roots = []
        for g in ordered:
            placed = False
            for item in roots:
                if isinstance(item, RegionTree) and item.add_child(g):
                    placed = True
                    break
            if not placed:
                if shape_is_region(g):
                    roots.append(cls(g, background, foreground))
                else:
                    roots.append(g)
        logger.debug('containment tree: %d shapes, %d top-level items',
                     len(ordered), len(roots))
        return roots

    def add_child(self, geometry):
        """Place ``geometry`` in the deepest node containing it.  Returns
        False if it does not fit inside this node at all."""
        if self.geometry is None:
            if not shape_is_region(geometry):
                return False
            self.geometry = geometry
            geometry.fill = self.foreground
            return True

        if not is_within2d(geometry, self.geometry):
            return False

        for child in self.children:
            if isinstance(child, RegionTree) and is_within2d(geometry, child):
                if not child.add_child(geometry):
                    geometry.fill = self.background
                    self.children.append(geometry)
                return True

        if shape_is_region(geometry):
            self.children.append(RegionTree(geometry, self.foreground,
                                            self.background))
        else:
            geometry.fill = self.background
            self.children.append(geometry)
        return True

    def flatten(self):
        """depth first, each node's boundary before its children"""
        items = [] if self.geometry is None else [self.geometry]
        for child in self.children:
            if isinstance(child, RegionTree):
                items.extend(child.flatten())
            else:
                items.append(child)
        return items

    @property
    def depth(self):
        sub = [c.depth for c in self.children if isinstance(c, RegionTree)]
        return 1 + max(sub, default=0)

    @property
    def extents(self):
        e = Extents()
        for g in self.flatten():
            e = e.combine(g.extents)
        return e

    @property
    def area(self):
        return 0.0 if self.geometry is None else self.geometry.area

    @property
    def perimeter(self):
        return 0.0 if self.geometry is None else self.geometry.perimeter

    def transform(self, matrix):
        for g in self.flatten():
            g.transform(matrix)
        return self

    def update(self):
        for g in self.flatten():
            g.update()
        return self

    def set_stroke(self, colour):
        self.stroke = colour
        for g in self.flatten():
            g.stroke = colour
        return self

    def to_points(self):
        pts = []
        for g in self.flatten():
            pts.extend(g.to_points())
        return pts

    def to_entity(self, layer=None):
        raise UnsupportedGeometryError('to_entity', self)

    def to_entities(self, layer=None):
        return [g.to_entity(layer) for g in self.flatten()]

    def map_func(self, func):
        """replace the boundary and every leaf ``g`` by ``func(g)``"""
        if self.geometry is not None:
            self.geometry = func(self.geometry)
        for i, child in enumerate(self.children):
            if isinstance(child, RegionTree):
                child.map_func(func)
            else:
                self.children[i] = func(child)
        return self

    def begin_get_all(self, callback, max_workers=None):
        """Call ``callback(g)`` for every geometry in the tree on a
        thread pool, in no particular order."""
        items = self.flatten()
        if not items:
            return
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            for _ in executor.map(callback, items):
                pass
