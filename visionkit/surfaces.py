"""Triangle meshes for curved surfaces: spheres and tori."""

from __future__ import annotations

import math

import numpy as np

from .mesh import Mesh

_MAX_INDEXED_VERTICES = int(np.iinfo(np.uint16).max) + 1


def _grid_indices(rows: int, cols: int) -> np.ndarray:
    """Two triangles per cell of a ``rows`` x ``cols`` grid of ``(rows+1) x (cols+1)`` vertices."""
    if (rows + 1) * (cols + 1) > _MAX_INDEXED_VERTICES:
        raise ValueError(
            f"{(rows + 1) * (cols + 1)} vertices do not fit 16-bit indices"
        )
    i = np.arange(rows)[:, np.newaxis]
    j = np.arange(cols)[np.newaxis, :]
    v0 = i * (cols + 1) + j
    v1 = (i + 1) * (cols + 1) + j
    v2 = (i + 1) * (cols + 1) + (j + 1)
    v3 = i * (cols + 1) + (j + 1)
    quads = np.stack([v0, v1, v2, v0, v2, v3], axis=-1)
    return quads.reshape(-1).astype(np.uint16)


def _check_divisions(**counts: int) -> None:
    for name, value in counts.items():
        if value < 1:
            raise ValueError(f"{name} must be at least 1, got {value}")


def sphere(size: float = 1.0, slices: int = 30, parallels: int = 15) -> Mesh:
    """Return an indexed sphere of radius ``size`` centred on the origin.

    Both the longitude and the latitude advance by ``2 * pi / slices`` per
    step, so ``parallels`` should be half of ``slices`` for a closed sphere.
    """
    if size <= 0.0:
        raise ValueError(f"size must be positive, got {size}")
    _check_divisions(slices=slices, parallels=parallels)

    step = (math.pi * 2.0) / slices
    i = np.arange(parallels + 1, dtype=np.float64)[:, np.newaxis]
    j = np.arange(slices + 1, dtype=np.float64)[np.newaxis, :]
    polar = step * i
    azimuth = step * j

    x = np.sin(polar) * np.sin(azimuth)
    y = np.cos(polar) * np.ones_like(azimuth)
    z = np.sin(polar) * np.cos(azimuth)
    unit = np.stack([x, y, z], axis=-1).reshape(-1, 3)

    lengths = np.linalg.norm(unit, axis=1, keepdims=True)
    normals = unit / lengths

    u = np.broadcast_to(j / slices, (parallels + 1, slices + 1))
    v = np.broadcast_to(1.0 - i / parallels, (parallels + 1, slices + 1))
    uvs = np.stack([u, v], axis=-1).reshape(-1, 2)

    return Mesh(
        vertices=(unit * size).astype(np.float32),
        normals=normals.astype(np.float32),
        uvs=uvs.astype(np.float32),
        indices=_grid_indices(parallels, slices),
    )


def torus(inner_radius: float, outer_radius: float, slices: int = 30, stacks: int = 15) -> Mesh:
    """Return an indexed torus lying around the z axis.

    The tube is centred ``outer_radius - inner_radius`` from the axis and its
    radius is half that distance.
    """
    if inner_radius <= 0.0 or outer_radius <= 0.0:
        raise ValueError(f"radii must be positive, got {(inner_radius, outer_radius)}")
    if inner_radius >= outer_radius:
        raise ValueError(
            f"inner radius {inner_radius} must be smaller than outer radius {outer_radius}"
        )
    _check_divisions(slices=slices, stacks=stacks)

    center_radius = outer_radius - inner_radius
    tube_radius = center_radius / 2.0

    s = (np.arange(slices + 1, dtype=np.float64) / slices)[:, np.newaxis]
    t = (np.arange(stacks + 1, dtype=np.float64) / stacks)[np.newaxis, :]
    cos_s, sin_s = np.cos(2.0 * math.pi * s), np.sin(2.0 * math.pi * s)
    cos_t, sin_t = np.cos(2.0 * math.pi * t), np.sin(2.0 * math.pi * t)

    ring = center_radius + tube_radius * cos_t
    vertices = np.stack(
        [ring * cos_s, ring * sin_s, np.broadcast_to(tube_radius * sin_t, ring.shape)],
        axis=-1,
    ).reshape(-1, 3)
    normals = np.stack(
        [cos_t * cos_s, cos_t * sin_s, np.broadcast_to(sin_t, ring.shape)],
        axis=-1,
    ).reshape(-1, 3)
    uvs = np.stack(
        np.broadcast_arrays(s, t),
        axis=-1,
    ).reshape(-1, 2)

    return Mesh(
        vertices=vertices.astype(np.float32),
        normals=normals.astype(np.float32),
        uvs=uvs.astype(np.float32),
        indices=_grid_indices(slices, stacks),
    )