## homogeneous vector helpers for meshtrim
## Copyright (c) 2026 meshtrim contributors

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

"""vector helpers used by the trimming geometry

Points and vectors are lists of four numbers, ``[x, y, z, w]``.
Points live in the ``w=1`` hyperplane, direction vectors in the
``w=0`` hyperplane.  All of the R^3 operations below ignore the ``w``
coordinate of their arguments, which means a point and a direction
can be mixed freely (``add(point, direction)`` is a point).

The tolerance ``epsilon`` is shared by every predicate in the
package.  Redefine it at your peril; pass ``tol=`` to the individual
predicates instead.
"""

import numbers
from math import sqrt

## constants
epsilon = 0.000005

## scalars
## -------

def isgoodnum(n):
    """is ``n`` a real number, and not a boolean?"""
    return (not isinstance(n, bool)) and isinstance(n, numbers.Real)

def close(a, b, tol=epsilon):
    """are two scalars the same within ``tol``"""
    return abs(a - b) < tol

## construction
## ------------

def _components(a):
    """coordinates of a non-string sequence, which includes numpy
    arrays"""
    if isinstance(a, (str, bytes)):
        raise ValueError('expected numbers or a coordinate sequence, got {!r}'.format(a))
    try:
        return [a[i] for i in range(min(4, len(a)))]
    except TypeError:
        raise ValueError('expected numbers or a coordinate sequence, got {!r}'.format(a)) from None

def vect(a=None, b=None, c=None, d=None):
    """make a homogeneous 4 vector from scalars or a sequence.
    Unspecified components default to ``[0, 0, 0, 1]``.
    """
    r = [0, 0, 0, 1]
    if a is None:
        return r
    if isgoodnum(a):
        comps = []
        for x in (a, b, c, d):
            if x is None:
                break
            comps.append(x)
    else:
        comps = _components(a)
    for i, x in enumerate(comps):
        if not isgoodnum(x):
            raise ValueError('bad vector component: {!r}'.format(x))
        r[i] = x
    return r

def isvect(x):
    """is ``x`` a list of four real numbers?"""
    return isinstance(x, list) and len(x) == 4 and all(isgoodnum(c) for c in x)

def point(x=None, y=None, z=None):
    """make a point in the ``w=1`` hyperplane from scalars or an
    ``(x, y[, z])`` sequence such as a list, tuple or numpy array."""
    if x is not None and not isgoodnum(x):
        comps = _components(x)
        if len(comps) < 2:
            raise ValueError('point needs at least two coordinates: {!r}'.format(x))
        r = vect(comps[:3])
    else:
        r = vect(x, y, z)
    return [float(r[0]), float(r[1]), float(r[2]), 1.0]

def ispoint(x):
    """is it a point?"""
    return isvect(x) and x[3] > 0.0

def direction(x=None, y=None, z=None):
    """make a direction vector in the ``w=0`` hyperplane"""
    r = point(x, y, z)
    r[3] = 0.0
    return r

## R^3 -> R^3 functions, ignoring w
## --------------------------------

def add(a, b):
    """3 vector ``a + b``"""
    return [a[0]+b[0], a[1]+b[1], a[2]+b[2], 1.0]

def sub(a, b):
    """3 vector ``a - b``"""
    return [a[0]-b[0], a[1]-b[1], a[2]-b[2], 1.0]

def scale3(a, c):
    """3 vector ``a * c``"""
    return [a[0]*c, a[1]*c, a[2]*c, 1.0]

def cross(a, b):
    """cross product of ``a x b``, ignoring w"""
    return [a[1]*b[2] - a[2]*b[1],
            a[2]*b[0] - a[0]*b[2],
            a[0]*b[1] - a[1]*b[0],
            1.0]

def midpoint(a, b):
    """point halfway between ``a`` and ``b``"""
    return [(a[0]+b[0])*0.5, (a[1]+b[1])*0.5, (a[2]+b[2])*0.5, 1.0]

## R^3 -> R functions
## ------------------

def dot(a, b):
    """3 vector ``a . b``"""
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]

def mag(a):
    """magnitude of 3 vector ``a``"""
    return sqrt(a[0]*a[0] + a[1]*a[1] + a[2]*a[2])

def dist(a, b):
    """euclidean distance between points ``a`` and ``b``"""
    return mag(sub(a, b))

def vclose(a, b, tol=epsilon):
    """are two 3 vectors the same within ``tol``"""
    return dist(a, b) < tol

## normalization
## -------------

def unit(a, tol=epsilon):
    """return ``a`` scaled to unit length as a ``w=0`` direction
    vector, or ``None`` if ``a`` is shorter than ``tol``.
    """
    m = mag(a)
    if m < tol:
        return None
    return [a[0]/m, a[1]/m, a[2]/m, 0.0]

def vstr(a):
    """compact string formatting for points and vectors, falling back
    to ``str()`` for anything else"""
    if not isvect(a):
        return str(a)
    if abs(a[3] - 1.0) > epsilon:
        return "[{}, {}, {}, {}]".format(a[0], a[1], a[2], a[3])
    return "[{}, {}, {}]".format(a[0], a[1], a[2])
