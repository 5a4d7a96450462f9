"""Square fiducial marker checks and orientation-independent marker codes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np


@dataclass
class Marker:
    """A detected marker: its code, corner polygon and binarised cell matrix."""

    code: int = 0
    poly: list[tuple[float, float]] = field(default_factory=list)
    matrix: np.ndarray | None = None


def _as_points(points) -> list[tuple[float, float]]:
    return [(float(p[0]), float(p[1])) for p in points]


def is_convex(points) -> bool:
    """Return whether the closed polygon through ``points`` is strictly convex.

    Every turn must go the same way; a straight or reversed turn fails.
    """
    pts = _as_points(points)
    if len(pts) < 3:
        return False
    orientation = 0
    for prev, curr, nxt in zip(pts[-1:] + pts[:-1], pts, pts[1:] + pts[:1]):
        cross = (curr[0] - prev[0]) * (nxt[1] - curr[1]) - (curr[1] - prev[1]) * (nxt[0] - curr[0])
        if cross > 0:
            orientation |= 1
        elif cross < 0:
            orientation |= 2
        else:
            orientation |= 3
        if orientation == 3:
            return False
    return True


def check_points(points, min_contour_size: float) -> bool:
    """Return whether ``points`` could be a marker outline.

    The outline must have four corners, be convex, and have no side whose
    squared length falls below ``min_contour_size``.
    """
    pts = _as_points(points)
    if len(pts) != 4 or not is_convex(pts):
        return False
    shortest = min(
        (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2
        for a, b in zip(pts, pts[1:] + pts[:1])
    )
    return shortest >= min_contour_size


def _matrix(matrix) -> np.ndarray:
    data = np.asarray(matrix)
    if data.ndim != 2:
        raise ValueError(f"expected a 2-D marker matrix, got shape {data.shape}")
    return data


def marker_code(matrix) -> int:
    """Return the code read from the inner cells of a marker matrix.

    Each inner row gives a number in which a black cell in inner column ``j``
    adds ``2 ** (width - 3) >> j``; the rows' hexadecimal digits are joined
    and read as one hexadecimal number.
    """
    data = _matrix(matrix)
    height, width = data.shape
    if height <= 2 or width <= 2:
        return 0
    power = 1 << (width - 3)
    digits = []
    for row in data[1:-1]:
        code = sum(power >> j for j, value in enumerate(row[1:-1].tolist(), start=1) if value == 0)
        digits.append(format(code, "x"))
    return int("".join(digits), 16)


def rotate_marker(matrix) -> np.ndarray:
    """Return the matrix turned a quarter turn: mirrored left to right, then transposed."""
    data = _matrix(matrix)
    return np.ascontiguousarray(data[:, ::-1].T)


def _orient(poly: Sequence, matrix) -> Marker:
    """Turn a candidate marker to the rotation whose code is smallest."""
    corners = _as_points(poly)
    if len(corners) != 4:
        raise ValueError(f"a marker outline needs 4 corners, got {len(corners)}")
    current = _matrix(matrix)

    best_code, best_rotation = None, 0
    for rotation in range(4):
        code = marker_code(current)
        if best_code is None or code < best_code:
            best_code, best_rotation = code, rotation
        current = rotate_marker(current)

    shift = (best_rotation + 2) % 4
    corners = corners[shift:] + corners[:shift]
    for _ in range(best_rotation):
        current = rotate_marker(current)
    return Marker(code=best_code, poly=corners, matrix=current)