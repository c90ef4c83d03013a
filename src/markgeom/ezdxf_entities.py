"""
Bridge between markgeom entity records and ezdxf entities.

Documents are only ever built in memory here; reading and writing DXF
files is left to the codec that owns the document.

Copyright (c) 2024 markgeom contributors
All rights reserved (MIT License)
"""

from math import atan2, cos, degrees, pi, radians, sin

import ezdxf
from ezdxf.math import BSpline

from markgeom.entity import EntityRecord, from_entity
from markgeom.errors import UnsupportedGeometryError
from markgeom.geom import pi2
from markgeom.geometry import Arc


def new_document(layers=()):
    """in-memory R2010 document with the named layers defined"""
    doc = ezdxf.new(dxfversion='R2010', setup=False)
    for name in layers:
        if name not in doc.layers:
            doc.layers.new(name)
    return doc


def add_to_layout(record, msp):
    """Write ``record`` into an ezdxf layout (e.g. a modelspace) as
    the matching native entity and return that entity."""
    doc = msp.doc
    if doc is not None and record.layer not in doc.layers:
        doc.layers.new(record.layer)
    attribs = {'layer': record.layer}
    coords = record.coordinates
    kind = record.kind

    if kind == 'point':
        return msp.add_point(coords[0], dxfattribs=attribs)
    elif kind == 'line':
        return msp.add_line(coords[0], coords[1], dxfattribs=attribs)
    elif kind == 'circle':
        return msp.add_circle(coords[0], record.radius, dxfattribs=attribs)
    elif kind == 'arc':
        return msp.add_arc(coords[0], record.radius,
                           degrees(record.start_angle),
                           degrees(record.end_angle),
                           dxfattribs=attribs)
    elif kind == 'polyline':
        attribs['elevation'] = coords[0][2] if coords else 0.0
        return msp.add_lwpolyline([(x, y) for x, y, _ in coords],
                                  format='xy', close=record.closed,
                                  dxfattribs=attribs)
    elif kind == 'ellipse':
        return msp.add_ellipse(coords[0], **_ellipse_axes(record),
                               dxfattribs=attribs)
    else:
        if not coords:
            e = msp.add_spline(fit_points=record.fit_points, dxfattribs=attribs)
        else:
            degree = min(record.degree or 3, len(coords) - 1)
            e = msp.add_spline(dxfattribs=attribs)
            e.apply_construction_tool(BSpline(
                coords, order=degree + 1, knots=record.knots or None,
                weights=record.weights or None))
            if record.fit_points:
                e.fit_points = record.fit_points
        e.closed = record.closed
        return e


def _ellipse_axes(record):
    """DXF ellipse definition: the major axis must be the longer one,
    so a taller-than-wide record is turned a quarter turn, which shifts
    its parameters back by pi/2"""
    a = record.radius
    b = record.minor_radius
    rot = record.rotation
    start = 0.0 if record.start_angle is None else record.start_angle
    end = pi2 if record.end_angle is None else record.end_angle
    if b > a:
        a, b = b, a
        rot += 0.5*pi
        start -= 0.5*pi
        end -= 0.5*pi
    return {'major_axis': (a*cos(rot), a*sin(rot), 0.0),
            'ratio': b/a,
            'start_param': start,
            'end_param': end}


def _lwpolyline_points(entity):
    """vertices of an LWPOLYLINE, with bulged segments expanded into
    their arc approximation"""
    z = entity.dxf.elevation
    pts = list(entity.get_points(format='xyb'))
    if entity.closed and pts:
        pts.append(pts[0])
    result = []
    for i, (x, y, b) in enumerate(pts):
        result.append((x, y, z))
        # a bulge on vertex i curves the segment to vertex i+1
        if b and i + 1 < len(pts):
            nx, ny, _ = pts[i+1]
            arc = Arc.from_bulge((x, y, z), (nx, ny, z), b)
            inner = [tuple(p) for p in arc.to_points()[1:-1]]
            if b < 0:
                inner.reverse()
            result.extend(inner)
    if entity.closed and len(result) > 1:
        result.pop()
    return result


def record_from_dxf(entity):
    """``EntityRecord`` for a POINT, LINE, CIRCLE, ARC, ELLIPSE,
    LWPOLYLINE or SPLINE entity"""
    t = entity.dxftype()
    layer = entity.dxf.layer
    if t == 'POINT':
        return EntityRecord('point', [entity.dxf.location], layer)
    elif t == 'LINE':
        return EntityRecord('line', [entity.dxf.start, entity.dxf.end], layer)
    elif t == 'CIRCLE':
        return EntityRecord('circle', [entity.dxf.center], layer,
                            radius=entity.dxf.radius)
    elif t == 'ARC':
        return EntityRecord('arc', [entity.dxf.center], layer,
                            radius=entity.dxf.radius,
                            start_angle=radians(entity.dxf.start_angle),
                            end_angle=radians(entity.dxf.end_angle))
    elif t == 'LWPOLYLINE':
        return EntityRecord('polyline', _lwpolyline_points(entity), layer,
                            closed=entity.closed)
    elif t == 'ELLIPSE':
        major = entity.dxf.major_axis
        a = major.magnitude
        return EntityRecord('ellipse', [entity.dxf.center], layer, radius=a,
                            minor_radius=a*entity.dxf.ratio,
                            start_angle=entity.dxf.start_param,
                            end_angle=entity.dxf.end_param,
                            rotation=atan2(major.y, major.x))
    elif t == 'SPLINE':
        return EntityRecord('spline', [tuple(p) for p in entity.control_points],
                            layer, closed=entity.closed,
                            degree=entity.dxf.degree,
                            knots=list(entity.knots),
                            weights=list(entity.weights),
                            fit_points=[tuple(p) for p in entity.fit_points])
    raise UnsupportedGeometryError('record_from_dxf', entity)


def to_document(geometries, doc=None):
    """add every geometry to the modelspace of ``doc`` (a new
    in-memory document by default) and return the document"""
    if doc is None:
        doc = new_document()
    msp = doc.modelspace()
    for g in geometries:
        for record in g.to_entities():
            add_to_layout(record, msp)
    return doc


def from_layout(layout, skip_unsupported=False):
    """markgeom primitives for the entities of an ezdxf layout"""
    result = []
    for entity in layout:
        try:
            record = record_from_dxf(entity)
        except UnsupportedGeometryError:
            if skip_unsupported:
                continue
            raise
        result.append(from_entity(record))
    return result
