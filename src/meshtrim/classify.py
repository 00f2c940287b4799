"""Bulk trim classification of indexed triangle meshes.

These helpers run the read-only half of a trim: every vertex and face
of a mesh is tested against a border, and the results come back as
``numpy`` boolean masks the remeshing code can index with.  Nothing
here mutates the border.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

import numpy as np

from meshtrim.border import Border
from meshtrim.geom import point


def _as_points(vertices: Sequence[Sequence[float]]):
    pts = []
    for idx, v in enumerate(vertices):
        if isinstance(v, (str, bytes)) or not hasattr(v, '__len__'):
            raise ValueError(f'vertex {idx} must be a coordinate sequence, got {v!r}')
        if len(v) < 3:
            raise ValueError(f'vertex {idx} needs three coordinates, got {v!r}')
        try:
            pts.append(point(v))
        except ValueError as exc:
            raise ValueError(f'vertex {idx}: {exc}') from None
    return pts


def _as_faces(faces: Sequence[Sequence[int]], nverts: int) -> np.ndarray:
    arr = np.asarray(faces)
    if arr.size == 0:
        return np.zeros((0, 3), dtype=np.int64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError('faces must be index triples')
    if not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f'face indices must be integers, got {arr.dtype}')
    if arr.min() < 0 or arr.max() >= nverts:
        raise ValueError('face index out of range')
    return arr.astype(np.int64)


def classify_vertices(border: Border, vertices: Sequence[Sequence[float]]) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(trimmed, on_border)`` masks for ``vertices``."""
    pts = _as_points(vertices)
    trimmed = np.zeros(len(pts), dtype=bool)
    boundary = np.zeros(len(pts), dtype=bool)
    for i, p in enumerate(pts):
        if border.on_border(p):
            boundary[i] = True
        else:
            trimmed[i] = border.trim_vertex(p)
    return trimmed, boundary


def classify_faces(border: Border, vertices: Sequence[Sequence[float]],
                   faces: Sequence[Sequence[int]]) -> np.ndarray:
    """Return a mask of the faces ``border`` trims."""
    pts = _as_points(vertices)
    tris = _as_faces(faces, len(pts))
    trimmed = np.zeros(len(tris), dtype=bool)
    for i, (a, b, c) in enumerate(tris):
        trimmed[i] = border.trim_face(pts[a], pts[b], pts[c])
    return trimmed


@dataclass
class TrimResult:
    vertex_trimmed: np.ndarray
    vertex_on_border: np.ndarray
    face_trimmed: np.ndarray

    def kept_faces(self) -> np.ndarray:
        """indices of the faces that survive the trim"""
        return np.flatnonzero(~self.face_trimmed)

    def summary(self) -> Dict[str, int]:
        return {
            'vertices': int(self.vertex_trimmed.size),
            'vertices_trimmed': int(self.vertex_trimmed.sum()),
            'vertices_on_border': int(self.vertex_on_border.sum()),
            'faces': int(self.face_trimmed.size),
            'faces_trimmed': int(self.face_trimmed.sum()),
        }


def classify_mesh(border: Border, vertices: Sequence[Sequence[float]],
                  faces: Sequence[Sequence[int]]) -> TrimResult:
    trimmed, boundary = classify_vertices(border, vertices)
    return TrimResult(vertex_trimmed=trimmed,
                      vertex_on_border=boundary,
                      face_trimmed=classify_faces(border, vertices, faces))


__all__ = [
    'TrimResult',
    'classify_vertices',
    'classify_faces',
    'classify_mesh',
]
