import itertools
import logging
import math
import random

import numpy as np
import pytest

from meshtrim.border import Border
from meshtrim.errors import ImpossibleStateError, PreconditionError
from meshtrim.geom import add, dot, point, scale3, vclose

R2 = math.sqrt(0.5)


class TestConstruction:
    """segment chains built from screen polylines"""

    def test_needs_two_points(self, camera):
        with pytest.raises(PreconditionError):
            Border(camera, [(0, 0)])
        with pytest.raises(PreconditionError):
            Border(camera, [])

    def test_two_points_single_plane(self, camera, line_points):
        border = Border(camera, line_points)
        assert border.num_segments() == 1
        s = border.segment(0)
        assert s.arity == 0
        assert vclose(s.plane.normal, [0, 1, 0])
        assert vclose(border.base_normal, [0, 1, 0])
        assert vclose(border.cast_direction, [0, -1, 0])

    def test_segment_count_and_arity(self, camera):
        for n in range(3, 8):
            pts = [(-10 + 3 * i, (-1) ** i * 4) for i in range(n)]
            border = Border(camera, pts)
            assert len(border) == n - 1
            arities = [s.arity for s in border]
            assert arities == [1] + [2] * (n - 3) + [1]
            assert border.segment(0).edge1 is None
            assert border.segment(n - 2).edge2 is None

    def test_u_normals(self, camera, u_points):
        border = Border(camera, u_points)
        assert vclose(border.segment(0).plane.normal, [R2, 0, -R2])
        assert vclose(border.segment(1).plane.normal, [0, R2, -R2])
        assert vclose(border.segment(2).plane.normal, [-R2, 0, -R2])

    def test_seams_are_identical_copies(self, camera):
        pts = [(-10, 10), (-8, -4), (-2, -9), (3, -10), (9, -2), (10, 8)]
        for reverse in (False, True):
            border = Border(camera, pts, offset=0.75, reverse=reverse)
            for s, next_s in zip(border.segments, border.segments[1:]):
                assert s.edge2 == next_s.edge1
                assert s.edge2 is not next_s.edge1

    def test_segment_bounds(self, camera, u_points):
        border = Border(camera, u_points)
        assert border.segment(2) is border.segments[2]
        with pytest.raises(PreconditionError):
            border.segment(3)
        with pytest.raises(PreconditionError):
            border.segment(-1)

    def test_duplicate_points_are_degenerate(self, camera):
        with pytest.raises(ValueError):
            Border(camera, [(0, 0), (5, 5), (5, 5), (10, 0)])

    def test_offset(self, camera, u_points):
        border = Border(camera, u_points, offset=2.0)
        anchor = add(point(0, 0, 0), scale3(border.base_normal, 2.0))
        assert vclose(border.base_normal, [0, R2, R2])
        for s in border:
            assert s.plane.on_plane(anchor)
            for e in (s.edge1, s.edge2):
                if e is not None:
                    assert vclose(e.origin, anchor)

    def test_cancelling_normals_fall_back(self, camera, caplog):
        # the second wedge folds flat onto the first
        with caplog.at_level(logging.WARNING, logger='meshtrim.border'):
            border = Border(camera, [(-10, 0), (10, 0), (-5, 0)])
        assert 'cancel' in caplog.text
        assert vclose(border.base_normal, [0, 1, 0])
        assert vclose(border.cast_direction, [0, -1, 0])

    def test_fully_degenerate(self, camera):
        with pytest.raises(ValueError):
            Border(camera, [(-10, 0), (10, 0), (-10, 0)])

    def test_offset_needs_base_normal(self, camera):
        closed = [(0, 0), (10, 0), (10, 10), (0, 0)]
        with pytest.raises(ValueError):
            Border(camera, closed, offset=1.0)
        assert Border(camera, closed).base_normal is None


class TestTwoPointBorder:
    """a single unbounded plane through the camera"""

    def test_parity_single_hit(self, camera, line_points):
        border = Border(camera, line_points)
        assert border.trim_vertex(point(0, 5, -3))
        assert not border.trim_vertex(point(0, -5, -3))

    def test_plane_points_are_kept(self, camera, line_points):
        border = Border(camera, line_points)
        assert border.on_border(point(3, 0, -7))
        assert not border.trim_vertex(point(3, 0, -7))

    def test_reverse_flips_side(self, camera, line_points):
        border = Border(camera, line_points, reverse=True)
        assert vclose(border.segment(0).plane.normal, [0, -1, 0])
        assert border.trim_vertex(point(0, -5, -3))
        assert not border.trim_vertex(point(0, 5, -3))

    def test_offset_moves_plane(self, camera, line_points):
        border = Border(camera, line_points, offset=1.0)
        assert border.on_border(point(0, 1, -5))
        assert not border.on_border(point(0, 0, -5))
        assert not border.trim_vertex(point(0, 0.5, -5))
        assert border.trim_vertex(point(0, 2, -5))


class TestUBorder:
    """three segments: plane+ray, ray+ray, ray+plane"""

    def test_inside(self, camera, u_points):
        border = Border(camera, u_points)
        assert border.trim_vertex(point(0, 0, -10))
        assert border.trim_vertex(point(0, -5, -10))

    def test_outside(self, camera, u_points):
        border = Border(camera, u_points)
        assert not border.trim_vertex(point(0, -20, -10))
        assert not border.trim_vertex(point(1, -20, -10))

    def test_numpy_points(self, camera, u_points):
        border = Border(camera, u_points)
        assert border.trim_vertex(np.array([0.0, 0.0, -10.0]))
        assert not border.trim_vertex(np.array([0.0, -20.0, -10.0]))
        assert border.on_border(np.array([-5.0, -5.0, -5.0]))
        spanning = [np.array(p) for p in ((-10.0, -5.0, -10.0), (0.0, -10.0, -10.0), (10.0, -5.0, -10.0))]
        assert border.trim_face(*spanning)

    def test_camera_position_is_kept(self, camera, u_points):
        border = Border(camera, u_points)
        eye = camera.position()
        for s in border:
            assert s.plane.on_plane(eye)
        assert border.on_border(eye)
        assert not border.trim_vertex(eye)

    def test_behind_camera_is_kept(self, camera, u_points):
        border = Border(camera, u_points)
        assert not border.on_border(point(0, 0, 10))
        assert not border.trim_vertex(point(0, 0, 10))

    def test_get_segment(self, camera, u_points):
        border = Border(camera, u_points)
        bottom = border.segment(1)
        assert border.get_segment(point(0, -10, -10), point(1, -10, -10)) is bottom
        # one point on the shared edge, the other inside the bottom wedge
        assert border.get_segment(point(-5, -5, -5), point(0, -10, -10)) is bottom
        assert border.get_segment(point(-10, 10, -10), point(-5, -5, -5)) is border.segment(0)

    def test_get_segment_both_on_edge(self, camera, u_points):
        border = Border(camera, u_points)
        with pytest.raises(ImpossibleStateError):
            border.get_segment(point(-5, -5, -5), point(-10, -10, -10))

    def test_get_segment_off_border(self, camera, u_points):
        border = Border(camera, u_points)
        with pytest.raises(ImpossibleStateError):
            border.get_segment(point(0, 0, -10), point(0, -10, -10))


class TestWinding:
    """reversal walks the gesture backwards"""

    points = [(0, 0), (10, 0), (10, 10)]

    def test_reversed_point_order(self, camera):
        forward = Border(camera, self.points)
        backward = Border(camera, self.points[::-1], reverse=True)
        assert forward.num_segments() == backward.num_segments() == 2
        for a, b in zip(forward, backward):
            assert a.plane == b.plane
            assert a.edge1 == b.edge1
            assert a.edge2 == b.edge2

        samples = [point(2, 3, -10), point(2, -3, -10), point(-4, 1, -6),
                  point(12, 5, -9), point(0, 0, 4), point(8, 8, -20)]
        for p in samples:
            assert forward.trim_vertex(p) == backward.trim_vertex(p)

        assert forward.trim_vertex(point(2, 3, -10))
        assert not forward.trim_vertex(point(2, -3, -10))

    def test_reverse_is_opposite_winding(self, camera):
        forward = Border(camera, self.points)
        backward = Border(camera, self.points, reverse=True)
        m = forward.num_segments()
        for i in range(m):
            n_fwd = forward.segment(m - 1 - i).plane.normal
            n_bwd = backward.segment(i).plane.normal
            assert vclose(n_bwd, scale3(n_fwd, -1.0))


class TestObtuseAngles:
    def test_convex_chain(self, camera, u_points):
        assert Border(camera, u_points).only_obtuse_angles()

    def test_reflex_chain(self, camera, zigzag_points):
        border = Border(camera, zigzag_points)
        n0 = border.segment(0).plane.normal
        n1 = border.segment(1).plane.normal
        assert dot(n0, n1) < 0.0
        assert not border.only_obtuse_angles()

    def test_two_segments_are_not_checked(self, camera, zigzag_points, line_points):
        assert Border(camera, zigzag_points[:3]).only_obtuse_angles()
        assert Border(camera, line_points).only_obtuse_angles()


class TestTrimFace:
    # corners on the left wall, the bottom wedge and the right wall
    spanning = (point(-10, -5, -10), point(0, -10, -10), point(10, -5, -10))
    flat = (point(0, -10, -10), point(1, -10, -10), point(0, -12, -12))
    outside = (point(0, -20, -10), point(1, -20, -10), point(0, -21, -10))
    inside = (point(0, 0, -10), point(0, -20, -10), point(1, -20, -10))

    def test_corner_inside(self, camera, u_points):
        border = Border(camera, u_points)
        assert border.trim_face(*self.inside)

    def test_outside(self, camera, u_points):
        border = Border(camera, u_points)
        assert not border.trim_face(*self.outside)

    def test_spanning_face(self, camera, u_points):
        border = Border(camera, u_points)
        for p in self.spanning:
            assert border.on_border(p)
            assert not border.trim_vertex(p)
        assert border.trim_face(*self.spanning)

    def test_face_lying_on_border(self, camera, u_points):
        border = Border(camera, u_points)
        assert all(border.on_border(p) for p in self.flat)
        assert not border.trim_face(*self.flat)

    def test_symmetric(self, camera, u_points):
        border = Border(camera, u_points)
        for tri in (self.spanning, self.flat, self.outside, self.inside):
            expected = border.trim_face(*tri)
            for perm in itertools.permutations(tri):
                assert border.trim_face(*perm) == expected


class TestProperties:
    def test_border_points_never_trimmed(self, camera, u_points):
        border = Border(camera, u_points)
        eye = camera.position()
        samples = [eye]
        for sp in u_points:
            r = camera.ray(sp)
            samples.extend(r.point_at(t) for t in (0.5, 3.0, 17.0))
        samples.extend([point(-10, 10, -10), point(0, -10, -10), point(10, -5, -10)])
        for p in samples:
            assert border.on_border(p)
            assert not border.trim_vertex(p)

    def test_random_points(self, camera):
        rng = random.Random(7)
        border = Border(camera, [(-10, 8), (-6, -7), (5, -9), (10, 6)])
        for _ in range(300):
            p = point(rng.uniform(-20, 20), rng.uniform(-20, 20), rng.uniform(-30, 5))
            if border.on_border(p):
                assert not border.trim_vertex(p)

    def test_translated_camera(self, u_points, make_camera):
        cam = make_camera(eye=(5.0, -2.0, 3.0))
        border = Border(cam, u_points)
        assert border.trim_vertex(point(5, -2, -7))
        assert not border.trim_vertex(point(5, -22, -7))
        assert not border.trim_vertex(cam.position())


class TestPolylines:
    """bookkeeping broadcast over segments"""

    def test_shared_edge_vertex_goes_to_both(self, camera, u_points):
        border = Border(camera, u_points)
        assert not border.has_vertices()
        border.add_polyline()
        border.add_vertex(3, point(-5, -5, -5))
        border.add_vertex(4, point(0, -10, -10))
        assert border.segment(0).polylines == ((3,),)
        assert border.segment(1).polylines == ((3, 4),)
        assert border.segment(2).polylines == ((),)
        assert border.has_vertices()

    def test_add_vertex_off_border(self, camera, u_points):
        border = Border(camera, u_points)
        border.add_polyline()
        with pytest.raises(PreconditionError):
            border.add_vertex(0, point(0, 0, -10))

    def test_add_vertex_without_polyline(self, camera, u_points):
        border = Border(camera, u_points)
        with pytest.raises(PreconditionError):
            border.add_vertex(0, point(0, -10, -10))

    @pytest.fixture
    def filled(self, camera, u_points):
        border = Border(camera, u_points)
        border.add_polyline()
        border.add_vertex(0, point(-10, 10, -10))
        border.add_vertex(1, point(-5, -5, -5))
        border.add_vertex(2, point(0, -10, -10))
        border.add_polyline()
        border.add_polyline()
        border.add_vertex(3, point(10, -5, -10))
        return border

    def test_identity_mapping(self, filled):
        border = filled
        before = [s.polylines for s in border]
        border.set_new_indices(list(range(4)))
        assert [s.polylines for s in border] == before

    def test_set_new_indices(self, filled):
        border = filled
        border.set_new_indices([7, 6, 5, 4])
        assert border.segment(0).polylines == ((7, 6), (), ())
        assert border.segment(1).polylines == ((6, 5), (), ())
        assert border.segment(2).polylines == ((), (), (4,))

    def test_set_new_indices_is_all_or_nothing(self, filled):
        border = filled
        before = [s.polylines for s in border]
        with pytest.raises(PreconditionError):
            border.set_new_indices({0: 10, 1: 11, 2: 12})
        assert [s.polylines for s in border] == before

    def test_delete_empty_polylines(self, filled):
        border = filled
        border.delete_empty_polylines()
        once = [s.polylines for s in border]
        assert once == [((0, 1),), ((1, 2),), ((3,),)]
        border.delete_empty_polylines()
        assert [s.polylines for s in border] == once
        assert border.has_vertices()
