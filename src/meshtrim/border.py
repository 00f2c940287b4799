## trimming border construction and containment queries for meshtrim
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

"""trimming volumes swept from screen-space gestures

====================
OVERVIEW
====================

A user drags an open polyline across the viewport.  Every screen
point of that polyline, unprojected through the camera, is a ray
leaving the eye; two consecutive rays span a planar wedge.  The chain
of those wedges is the *border* of the trimming volume, and this
module answers two questions about it:

* is a mesh point (or triangle) inside the volume, *i.e.* should it be
  trimmed away?
* which border segment does a newly created boundary vertex lie on,
  so that the cut can later be closed with per-segment polylines?

segments
========

A ``BorderSegment`` is a plane optionally clipped by one or two
bounding rays, its *edges*.  Three shapes occur:

* *unbounded*, no edges, the single segment of a two-point gesture
* *one-sided*, the first and last segment of a longer gesture, open
  at the end where the gesture starts or stops
* *two-sided*, a wedge between two consecutive gesture rays

Consecutive segments share an edge ray.  Each segment keeps its own
copy of that ray, built from the same inputs, so the copies are
numerically identical and there is no seam between the wedges.

The region of a segment is the set of plane points ``p`` for which
``n . ((p - o1) x d1) > 0`` (edge 1) and ``n . (d2 x (p - o2)) > 0``
(edge 2).  The inequalities are strict: a point exactly on a shared
edge belongs to the interior of neither neighbour, and is instead
reported as an *edge point* by both.

containment
===========

A point that lies on the border is never trimmed.  Any other point
casts a ray along the negated sum of the segment normals; it is
inside the volume when that ray crosses an odd number of segments.

bookkeeping
===========

While the remeshing code walks the mesh it opens a polyline on every
segment with ``Border.add_polyline()`` for each run of boundary
vertices, records the vertices with ``Border.add_vertex()``, renumbers
them with ``Border.set_new_indices()`` once the final vertex array is
known, and prunes unused slots with
``Border.delete_empty_polylines()``.  Mutation is not thread safe.
"""

from __future__ import annotations

import logging
import operator
from typing import Iterator, List, Optional, Sequence, Tuple

from meshtrim.camera import Camera
from meshtrim.errors import ImpossibleStateError, PreconditionError
from meshtrim.geom import add, cross, dot, epsilon, midpoint, scale3, sub, unit, vstr
from meshtrim.primitives import Plane, Ray, plane_from_rays, ray_plane_intersection

logger = logging.getLogger(__name__)

Polyline = List[int]


class BorderSegment:
    """One planar piece of a trimming border.

    ``plane`` is required; ``edge1`` (leading) and ``edge2`` (trailing)
    are optional bounding rays.  Use ``BorderSegment.between()`` for a
    wedge spanned by two rays.
    """

    def __init__(self, plane: Plane, edge1: Optional[Ray] = None,
                 edge2: Optional[Ray] = None, tol: float = epsilon):
        if not isinstance(plane, Plane):
            raise ValueError('BorderSegment needs a Plane, got {!r}'.format(plane))
        for e in (edge1, edge2):
            if e is not None and not isinstance(e, Ray):
                raise ValueError('BorderSegment edges must be Rays, got {!r}'.format(e))
        self._plane = plane
        self._edge1 = edge1
        self._edge2 = edge2
        self._tol = tol
        self._polylines: List[Polyline] = []

    @classmethod
    def between(cls, e1: Ray, e2: Ray, tol: float = epsilon) -> 'BorderSegment':
        """wedge between leading ray ``e1`` and trailing ray ``e2``"""
        return cls(plane_from_rays(e1, e2), edge1=e1, edge2=e2, tol=tol)

    @property
    def plane(self) -> Plane:
        return self._plane

    @property
    def edge1(self) -> Optional[Ray]:
        return self._edge1

    @property
    def edge2(self) -> Optional[Ray]:
        return self._edge2

    @property
    def arity(self) -> int:
        """number of bounding edges, 0, 1 or 2"""
        return (self._edge1 is not None) + (self._edge2 is not None)

    @property
    def polylines(self) -> Tuple[Tuple[int, ...], ...]:
        return tuple(tuple(p) for p in self._polylines)

    def edge(self) -> Ray:
        """the trailing edge shared with the next segment"""
        if self._edge2 is None:
            raise PreconditionError('segment has no trailing edge')
        return self._edge2

    ## geometric predicates

    def is_valid_projection(self, p) -> bool:
        """Does ``p``, assumed to lie on the plane, fall inside the
        half-plane or wedge cut out by the edges?"""
        n = self._plane.normal
        if self._edge1 is not None:
            e = self._edge1
            if not dot(n, cross(sub(p, e.origin), e.direction)) > 0.0:
                return False
        if self._edge2 is not None:
            e = self._edge2
            if not dot(n, cross(e.direction, sub(p, e.origin))) > 0.0:
                return False
        return True

    def on_border(self, p) -> Tuple[bool, bool]:
        """Return ``(on_border, on_edge)`` for point ``p``.

        Edge rays are tested first, so a point on a bounding ray is an
        edge point even when it would also pass the plane test.
        """
        if self._edge1 is not None and self._edge1.on_ray(p, self._tol):
            return True, True
        if self._edge2 is not None and self._edge2.on_ray(p, self._tol):
            return True, True
        if self._plane.on_plane(p, self._tol):
            return self.is_valid_projection(p), False
        return False, False

    def intersects(self, ray: Ray) -> Tuple[bool, Optional[float]]:
        """Return ``(hit, t)`` for ``ray`` against this segment.

        ``t`` is the ray parameter of the plane hit, or ``None`` if the
        ray misses the plane altogether.  Hits exactly on an edge go
        through the projection test like any other plane hit.
        """
        t = ray_plane_intersection(ray, self._plane, self._tol)
        if t is None:
            return False, None
        return self.is_valid_projection(ray.point_at(t)), t

    ## polyline bookkeeping

    def add_polyline(self) -> None:
        self._polylines.append([])

    def add_vertex(self, index: int, p) -> None:
        """append ``index`` to the most recently opened polyline"""
        if not self._polylines:
            raise PreconditionError('add_vertex called before add_polyline')
        if not self.on_border(p)[0]:
            raise PreconditionError('vertex {} at {} is not on this segment'.format(index, vstr(p)))
        self._polylines[-1].append(_as_index(index))

    def renumbered(self, mapping) -> List[Polyline]:
        """Return the polylines with every index mapped through
        ``mapping``, leaving the segment itself untouched."""
        result = []
        for polyline in self._polylines:
            renumbered = []
            for i in polyline:
                try:
                    j = mapping[i]
                except (IndexError, KeyError):
                    raise PreconditionError('index {} missing from renumbering map'.format(i)) from None
                if j is None:
                    raise PreconditionError('index {} maps to an invalid index'.format(i))
                renumbered.append(_as_index(j))
            result.append(renumbered)
        return result

    def set_new_indices(self, mapping) -> None:
        """Replace every stored index ``i`` with ``mapping[i]``.

        ``mapping`` may be a sequence or a dict.  The segment is left
        untouched if any lookup fails.
        """
        self.replace_polylines(self.renumbered(mapping))

    def replace_polylines(self, polylines) -> None:
        """install polylines computed by ``renumbered()``"""
        self._polylines = [[_as_index(i) for i in p] for p in polylines]

    def delete_empty_polylines(self) -> None:
        self._polylines = [p for p in self._polylines if p]

    def has_vertices(self) -> bool:
        return any(self._polylines)

    def __repr__(self):
        return 'BorderSegment({!r}, edge1={!r}, edge2={!r})'.format(
            self._plane, self._edge1, self._edge2)


def _as_index(i) -> int:
    try:
        idx = operator.index(i)
    except TypeError:
        raise PreconditionError('vertex index must be an integer, got {!r}'.format(i)) from None
    if idx < 0:
        raise PreconditionError('vertex index must be non-negative, got {}'.format(idx))
    return idx


class Border:
    """Chain of border segments swept from a screen-space polyline.

    ``points`` holds at least two integer screen positions.  ``offset``
    moves the whole border along its base normal, and ``reverse`` walks
    the gesture backwards, which flips the winding of the chain and
    therefore the side that gets trimmed.
    """

    def __init__(self, camera: Camera, points: Sequence[Sequence[int]],
                 offset: float = 0.0, reverse: bool = False, tol: float = epsilon):
        pts = [(p[0], p[1]) for p in points]
        n = len(pts)
        if n < 2:
            raise PreconditionError('a border needs at least two screen points, got {}'.format(n))

        self._offset = float(offset)
        self._reverse = bool(reverse)
        self._tol = tol

        r_first = camera.ray(pts[n - 1 if reverse else 0])
        r_last = camera.ray(pts[0 if reverse else n - 1])
        self._base_normal = unit(cross(r_last.direction, r_first.direction), tol)

        if self._base_normal is None:
            if self._offset != 0.0:
                raise ValueError('cannot offset a border whose first and last rays are parallel')
            shift = [0.0, 0.0, 0.0, 0.0]
        else:
            shift = scale3(self._base_normal, self._offset)

        def make_plane(i1, i2):
            r1 = camera.ray(pts[i1])
            r2 = camera.ray(pts[i2])
            return Plane(add(camera.position(), shift), cross(r2.direction, r1.direction))

        def make_ray(i):
            r = camera.ray(pts[i])
            return Ray(add(r.origin, shift), r.direction)

        segments = []
        if n == 2:
            if reverse:
                segments.append(BorderSegment(make_plane(1, 0), tol=tol))
            else:
                segments.append(BorderSegment(make_plane(0, 1), tol=tol))
        elif not reverse:
            segments.append(BorderSegment(make_plane(0, 1), edge2=make_ray(1), tol=tol))
            for i in range(1, n - 2):
                segments.append(BorderSegment.between(make_ray(i), make_ray(i + 1), tol=tol))
            segments.append(BorderSegment(make_plane(n - 2, n - 1), edge1=make_ray(n - 2), tol=tol))
        else:
            segments.append(BorderSegment(make_plane(n - 1, n - 2), edge2=make_ray(n - 2), tol=tol))
            for i in range(n - 2, 1, -1):
                segments.append(BorderSegment.between(make_ray(i), make_ray(i - 1), tol=tol))
            segments.append(BorderSegment(make_plane(1, 0), edge1=make_ray(1), tol=tol))
        self._segments = segments

        self._cast_direction = self._make_cast_direction()

        logger.debug('built border with %d segments from %d screen points (offset=%g, reverse=%s)',
                     len(segments), n, self._offset, self._reverse)

    def _make_cast_direction(self):
        total = [0.0, 0.0, 0.0, 0.0]
        for s in self._segments:
            total = sub(total, s.plane.normal)
        d = unit(total, self._tol)
        if d is not None:
            return d
        if self._base_normal is None:
            raise ValueError('border segment normals cancel and the base normal is degenerate')
        logger.warning('border segment normals cancel, casting along the base normal instead')
        return scale3(self._base_normal, -1.0)

    ## accessors

    @property
    def offset(self) -> float:
        return self._offset

    @property
    def reverse(self) -> bool:
        return self._reverse

    @property
    def base_normal(self):
        """unit normal spanned by the first and last gesture rays, or
        ``None`` when those rays are parallel"""
        return None if self._base_normal is None else list(self._base_normal)

    @property
    def cast_direction(self):
        return list(self._cast_direction)

    @property
    def segments(self) -> Tuple[BorderSegment, ...]:
        return tuple(self._segments)

    def num_segments(self) -> int:
        return len(self._segments)

    def __len__(self):
        return len(self._segments)

    def __iter__(self) -> Iterator[BorderSegment]:
        return iter(self._segments)

    def segment(self, i: int) -> BorderSegment:
        if not 0 <= i < len(self._segments):
            raise PreconditionError('segment index {} out of range [0, {})'.format(i, len(self._segments)))
        return self._segments[i]

    def get_segment(self, v1, v2) -> BorderSegment:
        """Return the segment owning the border edge ``v1``-``v2``.

        Both points must lie on the segment and at least one of them
        must be off its edges; this picks the right one of two
        neighbours that share an edge ray.
        """
        for s in self._segments:
            on1, edge1 = s.on_border(v1)
            if not on1:
                continue
            on2, edge2 = s.on_border(v2)
            if on2 and not (edge1 and edge2):
                return s
        raise ImpossibleStateError('no border segment holds both {} and {}'.format(vstr(v1), vstr(v2)))

    ## bookkeeping, broadcast to every segment

    def add_vertex(self, index: int, p) -> None:
        """Record ``index`` on every segment ``p`` lies on.  A point on
        a shared edge is recorded by both neighbours."""
        added = False
        for s in self._segments:
            if s.on_border(p)[0]:
                s.add_vertex(index, p)
                added = True
        if not added:
            raise PreconditionError('vertex {} at {} is not on the border'.format(index, vstr(p)))

    def add_polyline(self) -> None:
        for s in self._segments:
            s.add_polyline()

    def set_new_indices(self, mapping) -> None:
        """Renumber all stored indices through ``mapping``; nothing is
        changed if any lookup fails."""
        renumbered = [s.renumbered(mapping) for s in self._segments]
        for s, polylines in zip(self._segments, renumbered):
            s.replace_polylines(polylines)

    def delete_empty_polylines(self) -> None:
        for s in self._segments:
            s.delete_empty_polylines()

    def has_vertices(self) -> bool:
        return any(s.has_vertices() for s in self._segments)

    ## containment

    def on_border(self, p) -> bool:
        return any(s.on_border(p)[0] for s in self._segments)

    def trim_vertex(self, p) -> bool:
        """is ``p`` strictly inside the trimming volume?"""
        if self.on_border(p):
            return False
        ray = Ray(p, self._cast_direction)
        hits = 0
        for s in self._segments:
            if s.intersects(ray)[0]:
                hits += 1
        return hits % 2 == 1

    def trim_face(self, p1, p2, p3) -> bool:
        """Should the triangle ``p1, p2, p3`` be trimmed?

        A face goes if any corner is inside.  A face with every corner
        on the border also goes when one of its edge midpoints is
        inside, which catches faces spanning the volume.
        """
        if self.trim_vertex(p1) or self.trim_vertex(p2) or self.trim_vertex(p3):
            return True
        if self.on_border(p1) and self.on_border(p2) and self.on_border(p3):
            return (self.trim_vertex(midpoint(p1, p2)) or
                    self.trim_vertex(midpoint(p1, p3)) or
                    self.trim_vertex(midpoint(p2, p3)))
        return False

    def only_obtuse_angles(self) -> bool:
        """False when two consecutive segments fold back on each other
        (negative dot product of their normals)."""
        if len(self._segments) > 2:
            for s, next_s in zip(self._segments, self._segments[1:]):
                if dot(s.plane.normal, next_s.plane.normal) < 0.0:
                    return False
        return True

    def __repr__(self):
        return 'Border({} segments, offset={}, reverse={})'.format(
            len(self._segments), self._offset, self._reverse)


__all__ = ['Border', 'BorderSegment', 'Polyline']
