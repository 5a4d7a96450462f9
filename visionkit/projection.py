"""Matrices that carry a calibrated camera's view into an OpenGL scene.

All matrices are 4x4 numpy arrays in the usual row-major mathematical
layout: a point ``p`` is transformed as ``M @ p``.
"""

from __future__ import annotations

import math

import numpy as np


def projection_matrix(
    camera_matrix,
    window_width: float,
    window_height: float,
    near: float = 0.1,
    far: float = 1000.0,
) -> np.ndarray:
    """Build an OpenGL perspective matrix from pinhole intrinsics.

    Focal lengths and principal point come from ``camera_matrix`` and are
    expressed in pixels of a window of the given size.
    """
    cam = np.asarray(camera_matrix, dtype=np.float64)
    if cam.shape != (3, 3):
        raise ValueError(f"camera matrix must be 3x3, got shape {cam.shape}")
    if window_width <= 0 or window_height <= 0:
        raise ValueError(f"window size must be positive, got {(window_width, window_height)}")
    if near <= 0 or far <= near:
        raise ValueError(f"need 0 < near < far, got near={near}, far={far}")

    alpha, beta = cam[0, 0], cam[1, 1]
    cx, cy = cam[0, 2], cam[1, 2]

    result = np.zeros((4, 4))
    result[0, 0] = 2.0 * alpha / window_width
    result[1, 1] = 2.0 * beta / window_height
    result[0, 2] = 2.0 * cx / window_width - 1.0
    result[1, 2] = 2.0 * cy / window_height - 1.0
    result[2, 2] = -(far + near) / (far - near)
    result[3, 2] = -1.0
    result[2, 3] = -(2.0 * far * near) / (far - near)
    return result


def _rodrigues(vector: np.ndarray) -> np.ndarray:
    theta = float(np.linalg.norm(vector))
    if theta == 0.0:
        return np.eye(3)
    k = vector / theta
    skew = np.array([[0.0, -k[2], k[1]], [k[2], 0.0, -k[0]], [-k[1], k[0], 0.0]])
    return math.cos(theta) * np.eye(3) + math.sin(theta) * skew + (1.0 - math.cos(theta)) * np.outer(k, k)


def pose_matrix(rotation, translation) -> np.ndarray:
    """Combine a rotation and a translation into one 4x4 rigid transform.

    ``rotation`` is either a 3x3 matrix or a Rodrigues rotation vector of
    three elements.
    """
    rot = np.asarray(rotation, dtype=np.float64)
    if rot.size == 3:
        rot = _rodrigues(rot.ravel())
    elif rot.shape != (3, 3):
        raise ValueError(f"rotation must be a 3x3 matrix or 3-vector, got shape {rot.shape}")
    trans = np.asarray(translation, dtype=np.float64).ravel()
    if trans.size != 3:
        raise ValueError(f"translation must have 3 elements, got {trans.size}")

    result = np.eye(4)
    result[:3, :3] = rot
    result[:3, 3] = trans
    return result


def cv_to_gl_matrix() -> np.ndarray:
    """Flip the y and z axes, turning camera coordinates into OpenGL eye coordinates."""
    return np.diag([1.0, -1.0, -1.0, 1.0])


def orthographic(left: float, right: float, bottom: float, top: float) -> np.ndarray:
    """Build a 2-D orthographic projection onto the given rectangle, with depth negated."""
    if right == left or top == bottom:
        raise ValueError("orthographic bounds must span a non-empty rectangle")
    result = np.eye(4)
    result[0, 0] = 2.0 / (right - left)
    result[1, 1] = 2.0 / (top - bottom)
    result[2, 2] = -1.0
    result[0, 3] = -(right + left) / (right - left)
    result[1, 3] = -(top + bottom) / (top - bottom)
    return result