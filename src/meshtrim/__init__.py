# -*- coding: utf-8 -*-
"""meshtrim: screen-space trimming volumes for triangle meshes"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("meshtrim")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

from meshtrim.border import Border, BorderSegment
from meshtrim.camera import Camera, PerspectiveCamera
from meshtrim.errors import ImpossibleStateError, PreconditionError, TrimError
from meshtrim.primitives import Plane, Ray

__all__ = [
    'Border',
    'BorderSegment',
    'Camera',
    'PerspectiveCamera',
    'Plane',
    'Ray',
    'TrimError',
    'PreconditionError',
    'ImpossibleStateError',
]
