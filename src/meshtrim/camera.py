"""Camera contract consumed by the trimming border.

The border only needs two things from a camera: a ray from the eye
through a screen-space pixel, and the eye position.  ``Camera`` spells
that contract out; ``PerspectiveCamera`` is a pinhole implementation
good enough for tools and tests that have no viewer of their own.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Sequence, Tuple

from meshtrim.geom import add, cross, point, scale3, sub, unit
from meshtrim.primitives import Ray

ScreenPoint = Tuple[int, int]


class Camera(ABC):
    """Source of view rays for screen-space gestures."""

    @abstractmethod
    def ray(self, screen_point: Sequence[int]) -> Ray:
        """Return the ray from the eye through ``screen_point``."""

    @abstractmethod
    def position(self):
        """Return the eye position as a point."""


class PerspectiveCamera(Camera):
    """Pinhole camera looking from ``eye`` towards ``target``.

    Screen coordinates have their origin at the top-left pixel corner
    with ``y`` growing downwards, as window systems report mouse
    positions.  ``fov`` is the vertical field of view in degrees and
    ``resolution`` the viewport size in pixels.
    """

    def __init__(self, eye, target, up=(0.0, 1.0, 0.0), fov: float = 45.0,
                 resolution: Sequence[int] = (800, 600)):
        if len(resolution) != 2 or resolution[0] <= 0 or resolution[1] <= 0:
            raise ValueError('bad camera resolution: {}'.format(resolution))
        if not 0.0 < fov < 180.0:
            raise ValueError('camera field of view must lie in (0, 180): {}'.format(fov))

        self._eye = point(eye)
        forward = unit(sub(point(target), self._eye))
        if forward is None:
            raise ValueError('camera eye and target coincide')
        right = unit(cross(forward, point(up)))
        if right is None:
            raise ValueError('camera up vector is parallel to the view direction')

        self._forward = forward
        self._right = right
        self._up = cross(right, forward)
        self._up[3] = 0.0
        self._fov = float(fov)
        self._width = int(resolution[0])
        self._height = int(resolution[1])

    @property
    def resolution(self) -> Tuple[int, int]:
        return self._width, self._height

    @property
    def fov(self) -> float:
        return self._fov

    @property
    def forward(self):
        return list(self._forward)

    def position(self):
        return list(self._eye)

    def ray(self, screen_point: Sequence[int]) -> Ray:
        x, y = screen_point[0], screen_point[1]
        half = math.tan(math.radians(self._fov) / 2.0)
        aspect = self._width / self._height
        ndc_x = (2.0 * x / self._width) - 1.0
        ndc_y = 1.0 - (2.0 * y / self._height)
        d = add(self._forward, scale3(self._right, ndc_x * half * aspect))
        d = add(d, scale3(self._up, ndc_y * half))
        return Ray(self._eye, d)

    def __repr__(self):
        return 'PerspectiveCamera(eye={}, forward={}, fov={}, resolution={})'.format(
            self._eye[:3], self._forward[:3], self._fov, self.resolution)


__all__ = ['Camera', 'PerspectiveCamera', 'ScreenPoint']
