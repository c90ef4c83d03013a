"""
Generic entity records exchanged with format codecs.

A codec (DXF, STL slicer, ...) hands the kernel a kind tag, raw
coordinates and a layer label; ``from_entity()`` turns that into a
primitive, and every primitive's ``to_entity()`` produces the same
shape of record going the other way.  Arc and ellipse angles are in
radians; ellipse angles are the ellipse parameter, not polar angles.

Copyright (c) 2024 markgeom contributors
All rights reserved (MIT License)
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from markgeom.errors import GeometryValueError
from markgeom.geom import pi2, xyz

KINDS = ('point', 'line', 'arc', 'circle', 'ellipse', 'polyline', 'spline')

Coordinate = Tuple[float, float, float]


@dataclass
class EntityRecord:
    kind: str
    coordinates: List[Coordinate] = field(default_factory=list)
    layer: str = '0'
    radius: Optional[float] = None
    start_angle: Optional[float] = None
    end_angle: Optional[float] = None
    closed: bool = False
    # ellipses
    minor_radius: Optional[float] = None
    rotation: float = 0.0
    # splines: coordinates hold the control points
    degree: Optional[int] = None
    knots: List[float] = field(default_factory=list)
    weights: List[float] = field(default_factory=list)
    fit_points: List[Coordinate] = field(default_factory=list)

    def __post_init__(self):
        if self.kind not in KINDS:
            raise GeometryValueError('unknown entity kind: {}'.format(self.kind))
        self.coordinates = [xyz(c) for c in self.coordinates]
        self.fit_points = [xyz(c) for c in self.fit_points]
        self.knots = [float(k) for k in self.knots]
        self.weights = [float(w) for w in self.weights]


def _require(record, count):
    if len(record.coordinates) < count:
        raise GeometryValueError('{} record needs {} coordinate(s), got {}'.format(
            record.kind, count, len(record.coordinates)))


def from_entity(record):
    """build the primitive described by ``record``"""
    from markgeom.geometry import Point, Line, Arc, Circle
    from markgeom.curves import Ellipse, Spline
    from markgeom.poly import Path

    kind = record.kind
    if kind == 'point':
        _require(record, 1)
        g = Point(*record.coordinates[0])
    elif kind == 'line':
        _require(record, 2)
        g = Line(record.coordinates[0], record.coordinates[1])
    elif kind in ('arc', 'circle'):
        _require(record, 1)
        if record.radius is None:
            raise GeometryValueError('{} record has no radius'.format(kind))
        if kind == 'circle':
            g = Circle(record.coordinates[0], record.radius)
        else:
            g = Arc(record.coordinates[0], record.radius,
                    record.start_angle or 0.0, record.end_angle or 0.0)
    elif kind == 'ellipse':
        _require(record, 1)
        if record.radius is None or record.minor_radius is None:
            raise GeometryValueError('ellipse record needs both radii')
        start = 0.0 if record.start_angle is None else record.start_angle
        end = pi2 if record.end_angle is None else record.end_angle
        g = Ellipse(record.coordinates[0], record.radius, record.minor_radius,
                    start, end, record.rotation)
    elif kind == 'spline':
        if not record.coordinates and not record.fit_points:
            raise GeometryValueError('spline record has no control or fit points')
        g = Spline(record.coordinates, record.degree or 3, record.knots,
                   record.weights, record.fit_points, record.closed)
    else:
        _require(record, 1)
        g = Path(record.coordinates)
        if record.closed:
            g.close()
    g.layer_name = record.layer
    return g
