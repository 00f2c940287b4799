## plane and ray primitives for meshtrim
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

"""Planes and rays with epsilon-tolerant predicates.

A plane is stored in Hessian normal form, a point ``p0`` on the plane
and a unit normal ``n``.  A ray is an origin and a unit direction,
parameterized as ``origin + t * direction`` for ``t >= 0``.  Both are
immutable once built.
"""

from __future__ import annotations

from typing import Optional, Sequence

from meshtrim.geom import add, cross, dist, dot, epsilon, point, scale3, sub, unit


class Plane:
    """Infinite plane through ``p0`` with normal ``n``.

    The normal is normalized at construction; a normal shorter than
    ``epsilon`` raises ``ValueError``.
    """

    __slots__ = ('_point', '_normal')

    def __init__(self, p0: Sequence[float], n: Sequence[float]):
        normal = unit(n)
        if normal is None:
            raise ValueError('degenerate normal passed to Plane: {}'.format(list(n)))
        self._point = point(p0)
        self._normal = normal

    @property
    def point(self):
        return list(self._point)

    @property
    def normal(self):
        return list(self._normal)

    def signed_distance(self, p) -> float:
        """signed distance of ``p`` from the plane, positive on the
        side the normal points to"""
        return dot(sub(p, self._point), self._normal)

    def on_plane(self, p, tol: float = epsilon) -> bool:
        return abs(self.signed_distance(p)) < tol

    def side(self, p, tol: float = epsilon) -> int:
        """``1`` in front of the plane, ``-1`` behind it, ``0`` on it"""
        d = self.signed_distance(p)
        if abs(d) < tol:
            return 0
        return 1 if d > 0 else -1

    def __eq__(self, other):
        if not isinstance(other, Plane):
            return NotImplemented
        return self._point == other._point and self._normal == other._normal

    def __hash__(self):
        return hash((tuple(self._point), tuple(self._normal)))

    def __repr__(self):
        return 'Plane({}, {})'.format(self._point[:3], self._normal[:3])


class Ray:
    """Half-infinite ray starting at ``origin``.

    The direction is normalized at construction; a direction shorter
    than ``epsilon`` raises ``ValueError``.
    """

    __slots__ = ('_origin', '_direction')

    def __init__(self, origin: Sequence[float], direction: Sequence[float]):
        d = unit(direction)
        if d is None:
            raise ValueError('degenerate direction passed to Ray: {}'.format(list(direction)))
        self._origin = point(origin)
        self._direction = d

    @property
    def origin(self):
        return list(self._origin)

    @property
    def direction(self):
        return list(self._direction)

    def point_at(self, t: float):
        return add(self._origin, scale3(self._direction, t))

    def is_valid(self, t: float) -> bool:
        """is ``t`` inside the ray's parameter domain?"""
        return t >= 0.0

    def project(self, p) -> float:
        """parameter of the foot of the perpendicular from ``p``"""
        return dot(sub(p, self._origin), self._direction)

    def on_ray(self, p, tol: float = epsilon) -> bool:
        """does ``p`` lie on the ray within ``tol``?  Points behind the
        origin are only accepted within ``tol`` of the origin itself."""
        t = self.project(p)
        if t < 0.0:
            return dist(p, self._origin) < tol
        return dist(p, self.point_at(t)) < tol

    def __eq__(self, other):
        if not isinstance(other, Ray):
            return NotImplemented
        return self._origin == other._origin and self._direction == other._direction

    def __hash__(self):
        return hash((tuple(self._origin), tuple(self._direction)))

    def __repr__(self):
        return 'Ray({}, {})'.format(self._origin[:3], self._direction[:3])


def ray_plane_intersection(ray: Ray, plane: Plane, tol: float = epsilon) -> Optional[float]:
    """Intersect ``ray`` with ``plane``.

    Returns the ray parameter ``t`` of the hit, or ``None`` when the
    ray runs parallel to the plane or the hit lies behind the ray
    origin.
    """
    n = plane.normal
    denom = dot(ray.direction, n)
    if abs(denom) < tol:
        return None
    t = dot(sub(plane.point, ray.origin), n) / denom
    if not ray.is_valid(t):
        return None
    return t


def plane_from_rays(r1: Ray, r2: Ray) -> Plane:
    """plane through the origin of ``r1`` spanned by both directions,
    with normal ``r2.direction x r1.direction``"""
    return Plane(r1.origin, cross(r2.direction, r1.direction))


__all__ = [
    'Plane',
    'Ray',
    'ray_plane_intersection',
    'plane_from_rays',
]
