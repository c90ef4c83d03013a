"""
Clipping against rectangular work cells, tiling of oversized patterns
into machine field-of-view sized jobs, and stitching of loose line
lists into paths.

Copyright (c) 2024 markgeom contributors
All rights reserved (MIT License)
"""

import logging
from math import ceil

from markgeom.combine import split_by_intersections
from markgeom.errors import GeometryValueError, UnsupportedGeometryError
from markgeom.geom import compare, distance, distance2d
from markgeom.geom_util import calculate_extents, intersect_path_line, to_path
from markgeom.geometry import Arc, Circle, Line, Point
from markgeom.poly import Path, Rectangle
from markgeom.tolerance import (
    BOOLEAN_TOLERANCE, CLIP_MARGIN, CLOSURE_TOLERANCE, MIN_TILE_SIZE,
)
from markgeom.tree import RegionTree
from markgeom.wrapper import GeometryWrapper

logger = logging.getLogger(__name__)


def _clip_line(line, rectangle, region, tolerance):
    hits = intersect_path_line(rectangle, line, tolerance)
    hits.sort(key=lambda p: distance(line.start, p))
    if not hits:
        return []
    if len(hits) == 1:
        # a single hit with neither end inside only grazes the cell
        if region.contains_point(line.start):
            result = Line(line.start, hits[0])
        elif region.contains_point(line.end):
            result = Line(hits[0], line.end)
        else:
            return []
    else:
        result = Line(hits[0], hits[-1])
    if result.length <= tolerance:
        return []
    return [result.copy_style(line)]


def _clip_path(path, rectangle, region, tolerance):
    keep = region.grow(CLIP_MARGIN)
    border = to_path(rectangle)
    result = []
    for frag in split_by_intersections(path, border, tolerance):
        if len(frag) > 1 and all(keep.contains_point(p) for p in frag):
            result.append(Path(frag, path.closure_tolerance).copy_style(path))
    return result


def clip_geometry(geometry, rectangle, tolerance=BOOLEAN_TOLERANCE):
    """Clip ``geometry`` against ``rectangle`` (a ``Rectangle`` or any
    closed axis-aligned ``Path``).  Returns a list of fragments: empty
    when nothing is inside, ``[geometry]`` itself when all of it is."""
    if isinstance(geometry, (GeometryWrapper, RegionTree)):
        result = []
        for g in geometry.flatten():
            result.extend(clip_geometry(g, rectangle, tolerance))
        return result
    if not isinstance(geometry, (Point, Line, Arc, Circle, Path)):
        raise UnsupportedGeometryError('clip_geometry', geometry)

    region = rectangle.extents
    ge = geometry.extents

    # bounding circles do not touch
    reach = 0.5*(ge.hypotenuse + region.hypotenuse)
    if distance2d(ge.centre, region.centre) > reach + tolerance:
        return []
    if region.contains(ge):
        return [geometry]

    if isinstance(geometry, Point):
        return []
    if isinstance(geometry, Line):
        return _clip_line(geometry, rectangle, region, tolerance)
    if isinstance(geometry, Path):
        return _clip_path(geometry, rectangle, region, tolerance)
    return _clip_path(to_path(geometry), rectangle, region, tolerance)


def generate_tiles(geometries, tile_width, tile_height, padding=0.0,
                   tolerance=BOOLEAN_TOLERANCE):
    """Partition ``geometries`` into a grid of ``tile_width`` by
    ``tile_height`` cells covering their combined extents (grown by
    ``padding``) and centred on their centroid.

    Returns a dict mapping each tile ``Rectangle`` that received at
    least one fragment to the list of clipped fragments.  Fragments
    are independent of the input geometries.
    """
    if tile_width < MIN_TILE_SIZE or tile_height < MIN_TILE_SIZE:
        raise GeometryValueError('bad tile size: {} x {} (minimum {})'.format(
            tile_width, tile_height, MIN_TILE_SIZE))

    geometries = list(geometries)
    extents = calculate_extents(geometries)
    if extents.is_empty:
        return {}

    cols = max(1, int(ceil((extents.width + padding)/tile_width)))
    rows = max(1, int(ceil((extents.height + padding)/tile_height)))
    cx, cy, cz = extents.centre
    ox = cx - 0.5*cols*tile_width
    oy = cy - 0.5*rows*tile_height

    tiles = {}
    for row in range(rows):
        for col in range(cols):
            tile = Rectangle((ox + col*tile_width + 0.5*tile_width,
                              oy + row*tile_height + 0.5*tile_height,
                              cz),
                             tile_width, tile_height)
            contents = []
            for g in geometries:
                for frag in clip_geometry(g, tile, tolerance):
                    contents.append(frag.clone() if frag is g else frag)
            if contents:
                tiles[tile] = contents
    logger.debug('generated %d of %d tiles (%d x %d)', len(tiles),
                 rows*cols, cols, rows)
    return tiles


def stitch_line_sequence(lines, tolerance=CLOSURE_TOLERANCE):
    """Join an arbitrarily ordered list of lines into paths.

    A line is joined onto a running chain when its start meets the
    chain's end (or its end meets the chain's start); when nothing
    more connects, the chain is finished.  Returns ``(paths, unused)``
    where ``unused`` holds the lines that joined nothing.
    """
    remaining = list(lines)
    paths = []
    unused = []

    def same(p, q):
        return compare(p, q, tolerance) == 0

    while remaining:
        chain = [remaining.pop(0)]
        grown = True
        while grown and remaining:
            if len(chain) > 2 and same(chain[-1].end, chain[0].start):
                break
            grown = False
            for i, line in enumerate(remaining):
                if same(line.start, chain[-1].end):
                    chain.append(line)
                elif same(line.end, chain[0].start):
                    chain.insert(0, line)
                else:
                    continue
                del remaining[i]
                grown = True
                break
        if len(chain) < 2:
            unused.append(chain[0])
            continue
        path = Path([chain[0].start] + [l.end for l in chain], tolerance)
        paths.append(path.copy_style(chain[0]))
    return paths, unused
