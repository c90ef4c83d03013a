## affine transformation matrices for markgeom primitives, in 3D
## homogeneous coordinates

## Copyright (c) 2024 markgeom contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

import logging
from math import *

import numpy as np

from markgeom.errors import GeometryValueError
from markgeom.geom import isgoodnum, xyz

logger = logging.getLogger(__name__)

## A matrix is a list of four rows of four numbers.  Points are
## treated as column vectors, so applying M to p computes M*p, and the
## product A*B applies B first, then A.
##
## combine() hides that detail: the matrices passed to it are applied
## in the order they are listed.  Every caller in markgeom composes
## through combine(), so there is only one application order to
## remember.


class Matrix:
    """4x4 transformation matrix for homogeneous 3D coordinates"""

    def __init__(self, a=None, trans=False):
        self.m = [[1.0, 0.0, 0.0, 0.0],
                  [0.0, 1.0, 0.0, 0.0],
                  [0.0, 0.0, 1.0, 0.0],
                  [0.0, 0.0, 0.0, 1.0]]
        self.trans = False

        if isinstance(a, Matrix):
            for i in range(4):
                self.setrow(i, list(a.getrow(i)))
        elif isinstance(a, (tuple, list)):
            if len(a) == 4 and all(isinstance(r, (tuple, list)) and len(r) == 4
                                   for r in a):
                flat = [x for r in a for x in r]
            elif len(a) == 16:
                flat = list(a)
            else:
                raise GeometryValueError(
                    'bad shape for matrix initialization: {}'.format(a))
            for ind, x in enumerate(flat):
                if not isgoodnum(x):
                    raise GeometryValueError(
                        'bad element in matrix initialization: {}'.format(x))
                self.m[ind // 4][ind % 4] = float(x)
        elif a is not None:
            raise GeometryValueError(
                'bad thing used in attempt to initialize matrix: {}'.format(a))
        self.trans = trans

    def __repr__(self):
        return "Matrix({},{},{},{},{})".format(self.m[0], self.m[1],
                                               self.m[2], self.m[3], self.trans)

    def get(self, i, j):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise GeometryValueError('bad index passed to get: {},{}'.format(i, j))
        if self.trans:
            return self.m[j][i]
        return self.m[i][j]

    def set(self, i, j, x):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise GeometryValueError('bad index passed to set: {},{}'.format(i, j))
        if not isgoodnum(x):
            raise GeometryValueError('bad value passed to set: {}'.format(x))
        if self.trans:
            self.m[j][i] = x
        else:
            self.m[i][j] = x

    def getrow(self, i):
        if i < 0 or i > 3:
            raise GeometryValueError('bad row passed to getrow: {}'.format(i))
        if self.trans:
            return [self.m[0][i], self.m[1][i], self.m[2][i], self.m[3][i]]
        return list(self.m[i])

    def getcol(self, j):
        if j < 0 or j > 3:
            raise GeometryValueError('bad column passed to getcol: {}'.format(j))
        if self.trans:
            return list(self.m[j])
        return [self.m[0][j], self.m[1][j], self.m[2][j], self.m[3][j]]

    def setrow(self, i, x):
        if i < 0 or i > 3:
            raise GeometryValueError('bad row index passed to setrow: {}'.format(i))
        if len(x) != 4:
            raise GeometryValueError('bad non-vector passed to setrow: {}'.format(x))
        for j in range(4):
            self.set(i, j, x[j])

    # matrix multiply.  If x is a matrix, compute MX.  If x is a
    # 4-vector, compute Mx.  If x is a scalar, compute xM.
    def mul(self, x):
        if isinstance(x, Matrix):
            result = Matrix()
            for i in range(4):
                row = self.getrow(i)
                for j in range(4):
                    col = x.getcol(j)
                    result.m[i][j] = sum(row[k]*col[k] for k in range(4))
            return result
        elif isinstance(x, (list, tuple)) and len(x) == 4:
            return [sum(r*v for r, v in zip(self.getrow(i), x)) for i in range(4)]
        elif isgoodnum(x):
            result = Matrix()
            for i in range(4):
                result.m[i] = [v*x for v in self.getrow(i)]
            return result

        raise GeometryValueError('bad thing passed to mul(): {}'.format(x))

    def apply(self, p):
        """transform point-like ``p``; return an (x, y, z) tuple"""
        x, y, z = xyz(p)
        r = self.mul([x, y, z, 1.0])
        w = r[3]
        if w != 0.0 and w != 1.0:
            return (r[0]/w, r[1]/w, r[2]/w)
        return (r[0], r[1], r[2])

    def determinant2d(self):
        """determinant of the upper-left XY block; negative for
        mirroring transforms"""
        return self.get(0, 0)*self.get(1, 1) - self.get(0, 1)*self.get(1, 0)

    def inverse(self):
        try:
            inv = np.linalg.inv(np.array([self.getrow(i) for i in range(4)]))
        except np.linalg.LinAlgError:
            raise GeometryValueError('matrix is singular: {}'.format(self))
        return Matrix([[float(v) for v in row] for row in inv])


## builders
## ---------

def identity():
    return Matrix()


def translation(tx=0.0, ty=0.0, tz=0.0):
    return Matrix([[1, 0, 0, tx],
                   [0, 1, 0, ty],
                   [0, 0, 1, tz],
                   [0, 0, 0, 1]])


def scaling(sx, sy=None, sz=None):
    """scale about the origin; a single argument scales uniformly"""
    if sy is None and sz is None:
        sy = sz = sx
    elif sz is None:
        sz = 1.0
    return Matrix([[sx, 0, 0, 0],
                   [0, sy, 0, 0],
                   [0, 0, sz, 0],
                   [0, 0, 0, 1]])


def _rx(a):
    c, s = cos(a), sin(a)
    return Matrix([[1, 0, 0, 0], [0, c, -s, 0], [0, s, c, 0], [0, 0, 0, 1]])


def _ry(a):
    c, s = cos(a), sin(a)
    return Matrix([[c, 0, s, 0], [0, 1, 0, 0], [-s, 0, c, 0], [0, 0, 0, 1]])


def _rz(a):
    c, s = cos(a), sin(a)
    return Matrix([[c, -s, 0, 0], [s, c, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]])


def rotation(rx=0.0, ry=0.0, rz=0.0):
    """rotation about the coordinate axes, angles in radians, composed
    as the product Rx*Ry*Rz (so the z rotation acts on a point first)"""
    return _rx(rx).mul(_ry(ry)).mul(_rz(rz))


def shear(xy=0.0, xz=0.0, yx=0.0, yz=0.0, zx=0.0, zy=0.0):
    """shear matrix; ``xy`` is the amount of y added to x, and so on"""
    return Matrix([[1, xy, xz, 0],
                   [yx, 1, yz, 0],
                   [zx, zy, 1, 0],
                   [0, 0, 0, 1]])


def combine(*matrices):
    """compose transforms, applying them in the order listed"""
    if len(matrices) == 1 and isinstance(matrices[0], (list, tuple)):
        matrices = matrices[0]
    result = Matrix()
    for m in matrices:
        result = m.mul(result)
    return result


def rotation_about(pivot, rx=0.0, ry=0.0, rz=0.0):
    x, y, z = xyz(pivot)
    return combine(translation(-x, -y, -z),
                   rotation(rx, ry, rz),
                   translation(x, y, z))


def scaling_about(pivot, sx, sy=None, sz=None):
    x, y, z = xyz(pivot)
    return combine(translation(-x, -y, -z),
                   scaling(sx, sy, sz),
                   translation(x, y, z))


## applying transforms to geometry
## --------------------------------
##
## Each helper transforms the geometry in place and returns it, so
## calls can be chained.

def translate(geometry, tx=0.0, ty=0.0, tz=0.0):
    return geometry.transform(translation(tx, ty, tz))


def scale(geometry, sx, sy=None, sz=None, pivot=None):
    if pivot is None:
        return geometry.transform(scaling(sx, sy, sz))
    return geometry.transform(scaling_about(pivot, sx, sy, sz))


def rotate(geometry, rx=0.0, ry=0.0, rz=0.0, pivot=None):
    if pivot is None:
        return geometry.transform(rotation(rx, ry, rz))
    return geometry.transform(rotation_about(pivot, rx, ry, rz))


def rotate_about_centroid(geometry, rx=0.0, ry=0.0, rz=0.0):
    return rotate(geometry, rx, ry, rz, pivot=geometry.extents.centre)


def scale_about_centroid(geometry, sx, sy=None, sz=None):
    return scale(geometry, sx, sy, sz, pivot=geometry.extents.centre)


def align_centre_to_point(geometry, point):
    cx, cy, cz = geometry.extents.centre
    x, y, z = xyz(point)
    return translate(geometry, x - cx, y - cy, z - cz)


def align_centre_to_origin(geometry):
    return align_centre_to_point(geometry, (0.0, 0.0, 0.0))


def align_centre_to_extents(geometry, extents):
    return align_centre_to_point(geometry, extents.centre)


def align_top_left_to_origin(geometry):
    """move the geometry so its upper-left box corner sits on the origin"""
    e = geometry.extents
    return translate(geometry, -e.min_x, -e.max_y, 0.0)


## fitted transforms
## ------------------

def estimate_transform(source, target):
    """Least-squares 2D affine transform mapping the ``source`` points
    onto the ``target`` points (e.g. measured fiducials).  Needs at
    least three point pairs; z passes through unchanged."""
    if len(source) != len(target):
        raise GeometryValueError('point lists differ in length: {} != {}'.format(
            len(source), len(target)))
    if len(source) < 3:
        raise GeometryValueError(
            'at least 3 point pairs required, got {}'.format(len(source)))

    S = np.array([[xyz(p)[0] for p in source],
                  [xyz(p)[1] for p in source],
                  [1.0]*len(source)])
    T = np.array([[xyz(p)[0] for p in target],
                  [xyz(p)[1] for p in target],
                  [1.0]*len(target)])
    A = T @ np.linalg.pinv(S)
    logger.debug('estimated transform residual %g',
                 float(np.linalg.norm(A @ S - T)))
    return Matrix([[float(A[0, 0]), float(A[0, 1]), 0.0, float(A[0, 2])],
                   [float(A[1, 0]), float(A[1, 1]), 0.0, float(A[1, 2])],
                   [0.0, 0.0, 1.0, 0.0],
                   [0.0, 0.0, 0.0, 1.0]])
