"""Trim gesture configuration.

A gesture file describes everything needed to rebuild a border
outside of an interactive viewer: the camera, the screen-space
polyline, and the border options.  Files are YAML::

    camera:
      eye: [0, 0, 10]
      target: [0, 0, 0]
      up: [0, 1, 0]
      fov: 45
      resolution: [800, 600]
    points: [[100, 100], [400, 120], [700, 500]]
    offset: 0.0
    reverse: false
    tolerance: 5.0e-6

Only ``camera.eye``, ``camera.target`` and ``points`` are required.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from meshtrim.border import Border
from meshtrim.camera import Camera, PerspectiveCamera
from meshtrim.geom import epsilon, isgoodnum

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]


def _vec3(value: Any, key: str) -> Vec3:
    if not isinstance(value, (list, tuple)) or len(value) != 3 or not all(isgoodnum(c) for c in value):
        raise ValueError(f'{key} must be a list of three numbers, got {value!r}')
    return float(value[0]), float(value[1]), float(value[2])


def _number(value: Any, key: str) -> float:
    if not isgoodnum(value):
        raise ValueError(f'{key} must be a number, got {value!r}')
    return float(value)


@dataclass
class CameraSettings:
    eye: Vec3
    target: Vec3
    up: Vec3 = (0.0, 1.0, 0.0)
    fov: float = 45.0
    resolution: Tuple[int, int] = (800, 600)

    @classmethod
    def from_dict(cls, data: Any) -> 'CameraSettings':
        if not isinstance(data, dict):
            raise ValueError('camera must be a mapping')
        for key in ('eye', 'target'):
            if key not in data:
                raise ValueError(f'camera.{key} is required')
        settings = cls(eye=_vec3(data['eye'], 'camera.eye'),
                       target=_vec3(data['target'], 'camera.target'))
        if 'up' in data:
            settings.up = _vec3(data['up'], 'camera.up')
        if 'fov' in data:
            settings.fov = _number(data['fov'], 'camera.fov')
        if 'resolution' in data:
            res = data['resolution']
            if (not isinstance(res, (list, tuple)) or len(res) != 2
                    or not all(isinstance(c, int) and not isinstance(c, bool) for c in res)):
                raise ValueError(f'camera.resolution must be two integers, got {res!r}')
            settings.resolution = (res[0], res[1])
        return settings

    def build(self) -> PerspectiveCamera:
        return PerspectiveCamera(self.eye, self.target, up=self.up,
                                 fov=self.fov, resolution=self.resolution)


@dataclass
class GestureConfig:
    camera: CameraSettings
    points: List[Tuple[int, int]] = field(default_factory=list)
    offset: float = 0.0
    reverse: bool = False
    tolerance: float = epsilon

    @classmethod
    def from_dict(cls, data: Any) -> 'GestureConfig':
        if not isinstance(data, dict):
            raise ValueError('gesture document must be a mapping')
        if 'camera' not in data:
            raise ValueError('camera is required')
        if 'points' not in data:
            raise ValueError('points is required')

        raw_points = data['points']
        if not isinstance(raw_points, list) or len(raw_points) < 2:
            raise ValueError('points must be a list of at least two screen points')
        points = []
        for idx, p in enumerate(raw_points):
            if (not isinstance(p, (list, tuple)) or len(p) != 2
                    or not all(isinstance(c, int) and not isinstance(c, bool) for c in p)):
                raise ValueError(f'points[{idx}] must be two integers, got {p!r}')
            points.append((p[0], p[1]))

        config = cls(camera=CameraSettings.from_dict(data['camera']), points=points)
        if 'offset' in data:
            config.offset = _number(data['offset'], 'offset')
        if 'reverse' in data:
            if not isinstance(data['reverse'], bool):
                raise ValueError(f"reverse must be a boolean, got {data['reverse']!r}")
            config.reverse = data['reverse']
        if 'tolerance' in data:
            config.tolerance = _number(data['tolerance'], 'tolerance')
            if config.tolerance <= 0.0:
                raise ValueError('tolerance must be positive')
        return config

    def to_dict(self) -> Dict[str, Any]:
        return {
            'camera': {
                'eye': list(self.camera.eye),
                'target': list(self.camera.target),
                'up': list(self.camera.up),
                'fov': self.camera.fov,
                'resolution': list(self.camera.resolution),
            },
            'points': [list(p) for p in self.points],
            'offset': self.offset,
            'reverse': self.reverse,
            'tolerance': self.tolerance,
        }


def load_gesture(path: Path | str) -> GestureConfig:
    """Read and validate a YAML gesture file."""
    import yaml

    path = Path(path)
    with path.open('r', encoding='utf-8') as fp:
        try:
            data = yaml.safe_load(fp) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f'{path}: malformed gesture file: {exc}') from exc
    config = GestureConfig.from_dict(data)
    logger.debug('loaded gesture with %d points from %s', len(config.points), path)
    return config


def save_gesture(config: GestureConfig, path: Path | str) -> Path:
    import yaml

    path = Path(path)
    with path.open('w', encoding='utf-8') as fp:
        yaml.safe_dump(config.to_dict(), fp, sort_keys=False)
    return path


def border_from_config(config: GestureConfig, camera: Optional[Camera] = None) -> Border:
    """Build the border described by ``config``.  ``camera`` overrides
    the configured one."""
    if camera is None:
        camera = config.camera.build()
    return Border(camera, config.points, offset=config.offset,
                  reverse=config.reverse, tol=config.tolerance)


__all__ = [
    'CameraSettings',
    'GestureConfig',
    'load_gesture',
    'save_gesture',
    'border_from_config',
]
