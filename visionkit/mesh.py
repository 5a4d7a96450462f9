"""Triangle meshes for simple shapes, ready to upload as vertex buffers."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

_CUBE_VERTICES = np.array(
    [
        # bottom
        (-1.0, -1.0, -1.0), (-1.0, -1.0, 1.0), (1.0, -1.0, 1.0), (1.0, -1.0, -1.0),
        # top
        (-1.0, 1.0, -1.0), (-1.0, 1.0, 1.0), (1.0, 1.0, 1.0), (1.0, 1.0, -1.0),
        # back
        (-1.0, -1.0, -1.0), (-1.0, 1.0, -1.0), (1.0, 1.0, -1.0), (1.0, -1.0, -1.0),
        # front
        (-1.0, -1.0, 1.0), (-1.0, 1.0, 1.0), (1.0, 1.0, 1.0), (1.0, -1.0, 1.0),
        # left
        (-1.0, -1.0, -1.0), (-1.0, -1.0, 1.0), (-1.0, 1.0, 1.0), (-1.0, 1.0, -1.0),
        # right
        (1.0, -1.0, -1.0), (1.0, -1.0, 1.0), (1.0, 1.0, 1.0), (1.0, 1.0, -1.0),
    ],
    dtype=np.float32,
)

_CUBE_INDICES = np.array(
    [
        0, 2, 1, 0, 3, 2,
        4, 5, 6, 4, 6, 7,
        8, 9, 10, 8, 10, 11,
        12, 15, 14, 12, 14, 13,
        16, 17, 18, 16, 18, 19,
        20, 23, 22, 20, 22, 21,
    ],
    dtype=np.uint16,
)

_CUBE_NORMALS = np.repeat(
    np.array(
        [
            (0.0, -1.0, 0.0),
            (0.0, 1.0, 0.0),
            (0.0, 0.0, -1.0),
            (0.0, 0.0, 1.0),
            (-1.0, 0.0, 0.0),
            (1.0, 0.0, 0.0),
        ],
        dtype=np.float32,
    ),
    4,
    axis=0,
)

_CUBE_UVS = np.array(
    [
        (0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0),
        (0.0, 1.0), (0.0, 0.0), (1.0, 0.0), (1.0, 1.0),
        (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.0, 0.0),
        (0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0),
        (0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0),
        (1.0, 0.0), (0.0, 0.0), (0.0, 1.0), (1.0, 1.0),
    ],
    dtype=np.float32,
)

_PLANE_VERTICES = np.array(
    [
        (-1.0, 1.0, 0.0), (-1.0, -1.0, 0.0), (1.0, -1.0, 0.0),
        (-1.0, 1.0, 0.0), (1.0, -1.0, 0.0), (1.0, 1.0, 0.0),
    ],
    dtype=np.float32,
)

_PLANE_UVS = np.array(
    [
        (0.0, 1.0), (0.0, 0.0), (1.0, 0.0),
        (0.0, 1.0), (1.0, 0.0), (1.0, 1.0),
    ],
    dtype=np.float32,
)


@dataclass
class Mesh:
    """Per-vertex attributes of a triangle mesh.

    When ``indices`` is given, every three indices form a triangle; otherwise
    every three consecutive vertices do.
    """

    vertices: np.ndarray
    normals: np.ndarray
    uvs: np.ndarray
    indices: np.ndarray | None = None
    tangents: np.ndarray | None = None
    bitangents: np.ndarray | None = None

    @property
    def element_count(self) -> int:
        """Number of vertices drawn: the index count, or the vertex count if unindexed."""
        if self.indices is not None:
            return len(self.indices)
        return len(self.vertices)

    def triangles(self) -> np.ndarray:
        """Return the vertex indices of each triangle as a ``(n, 3)`` array."""
        if self.indices is not None:
            order = np.asarray(self.indices, dtype=np.int64)
        else:
            order = np.arange(len(self.vertices), dtype=np.int64)
        return order.reshape(-1, 3)


def _check_size(size: float) -> float:
    if size <= 0.0:
        raise ValueError(f"size must be positive, got {size}")
    return float(size)


def cube(size: float = 1.0) -> Mesh:
    """Return an indexed cube centred on the origin, reaching ``size`` along each axis."""
    size = _check_size(size)
    return Mesh(
        vertices=_CUBE_VERTICES * np.float32(size),
        normals=_CUBE_NORMALS.copy(),
        uvs=_CUBE_UVS.copy(),
        indices=_CUBE_INDICES.copy(),
    )


def plane(size: float = 1.0) -> Mesh:
    """Return a square of two triangles in the z = 0 plane, facing +z, with tangent basis."""
    size = _check_size(size)
    vertices = _PLANE_VERTICES * np.float32(size)
    normals = np.tile(np.array([0.0, 0.0, 1.0], dtype=np.float32), (len(vertices), 1))
    uvs = _PLANE_UVS.copy()
    tangents, bitangents = compute_tangent_basis(vertices, uvs, normals)
    return Mesh(
        vertices=vertices,
        normals=normals,
        uvs=uvs,
        tangents=tangents.astype(np.float32),
        bitangents=bitangents.astype(np.float32),
    )


def compute_tangent_basis(vertices, uvs, normals) -> tuple[np.ndarray, np.ndarray]:
    """Compute per-vertex tangents and bitangents for an unindexed triangle list.

    Tangents are made orthogonal to the normal, normalised, and flipped where
    ``cross(normal, tangent)`` points away from the bitangent.
    """
    verts = np.asarray(vertices, dtype=np.float64)
    coords = np.asarray(uvs, dtype=np.float64)
    norms = np.asarray(normals, dtype=np.float64)

    if verts.ndim != 2 or verts.shape[1] != 3:
        raise ValueError(f"vertices must have shape (n, 3), got {verts.shape}")
    if coords.shape != (len(verts), 2):
        raise ValueError(f"uvs must have shape ({len(verts)}, 2), got {coords.shape}")
    if norms.shape != verts.shape:
        raise ValueError(f"normals must have shape {verts.shape}, got {norms.shape}")
    if len(verts) % 3:
        raise ValueError(f"vertex count must be a multiple of 3, got {len(verts)}")

    v0, v1, v2 = verts[0::3], verts[1::3], verts[2::3]
    uv0, uv1, uv2 = coords[0::3], coords[1::3], coords[2::3]

    dp1, dp2 = v1 - v0, v2 - v0
    duv1, duv2 = uv1 - uv0, uv2 - uv0

    det = duv1[:, 0] * duv2[:, 1] - duv1[:, 1] * duv2[:, 0]
    if np.any(det == 0):
        raise ValueError("a triangle has degenerate texture coordinates")
    r = (1.0 / det)[:, np.newaxis]

    tangent = (dp1 * duv2[:, 1:2] - dp2 * duv1[:, 1:2]) * r
    bitangent = (dp2 * duv2[:, 0:1] - dp1 * duv1[:, 0:1]) * r

    tangents = np.repeat(tangent, 3, axis=0)
    bitangents = np.repeat(bitangent, 3, axis=0)

    projected = tangents - norms * np.sum(norms * tangents, axis=1, keepdims=True)
    lengths = np.linalg.norm(projected, axis=1, keepdims=True)
    if np.any(lengths == 0):
        raise ValueError("a tangent is parallel to its normal")
    tangents = projected / lengths

    handedness = np.sum(np.cross(norms, tangents) * bitangents, axis=1)
    tangents[handedness < 0.0] *= -1.0

    return tangents, bitangents