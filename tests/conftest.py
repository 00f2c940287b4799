import pytest

from meshtrim.camera import Camera
from meshtrim.geom import point
from meshtrim.primitives import Ray


class PinholeStub(Camera):
    """Eye at ``eye`` looking down -z.  Screen point ``(x, y)`` maps to
    the direction ``(x, y, -depth)``, with y pointing up."""

    def __init__(self, eye=(0.0, 0.0, 0.0), depth=10.0):
        self._eye = point(eye)
        self._depth = depth

    def ray(self, screen_point):
        return Ray(self._eye, (screen_point[0], screen_point[1], -self._depth))

    def position(self):
        return list(self._eye)


@pytest.fixture
def make_camera():
    """factory for pinhole stubs at an arbitrary eye position"""
    return PinholeStub


@pytest.fixture
def camera():
    return PinholeStub()


@pytest.fixture
def u_points():
    # open "U" drawn down the left side, across the bottom and up the right
    return [(-10, 10), (-10, -10), (10, -10), (10, 10)]


@pytest.fixture
def zigzag_points():
    # folds back on itself
    return [(-10, 0), (10, 0), (-10, 1), (10, 1)]


@pytest.fixture
def line_points():
    return [(-10, 0), (10, 0)]
