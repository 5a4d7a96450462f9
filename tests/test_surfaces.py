import math

import numpy as np
import pytest

from visionkit.surfaces import sphere, torus


def test_sphere_default_counts():
    mesh = sphere()
    assert len(mesh.vertices) == (30 + 1) * (15 + 1)
    assert mesh.element_count == 30 * 15 * 6
    assert len(mesh.normals) == len(mesh.vertices)
    assert len(mesh.uvs) == len(mesh.vertices)


def test_sphere_vertices_lie_on_radius():
    mesh = sphere(2.5, 12, 6)
    radii = np.linalg.norm(mesh.vertices.astype(np.float64), axis=1)
    assert np.allclose(radii, 2.5, atol=1e-5)


def test_sphere_first_vertex_is_north_pole():
    mesh = sphere(3.0, 8, 4)
    assert np.allclose(mesh.vertices[0], [0.0, 3.0, 0.0], atol=1e-6)


def test_sphere_normals_are_unit_and_radial():
    mesh = sphere(4.0, 10, 5)
    assert np.allclose(np.linalg.norm(mesh.normals, axis=1), 1.0, atol=1e-5)
    assert np.allclose(mesh.normals * 4.0, mesh.vertices, atol=1e-4)


def test_sphere_indices_in_range_and_uvs_bounded():
    mesh = sphere(1.0, 9, 7)
    assert mesh.indices.dtype == np.uint16
    assert int(mesh.indices.max()) < len(mesh.vertices)
    assert mesh.triangles().shape == (9 * 7 * 2, 3)
    assert mesh.uvs.min() >= 0.0
    assert mesh.uvs.max() <= 1.0


@pytest.mark.parametrize("size", [0.0, -1.0])
def test_sphere_rejects_non_positive_size(size):
    with pytest.raises(ValueError):
        sphere(size)


def test_sphere_rejects_zero_divisions():
    with pytest.raises(ValueError):
        sphere(1.0, 0, 5)


def test_sphere_rejects_too_many_vertices_for_16_bit_indices():
    with pytest.raises(ValueError):
        sphere(1.0, 300, 300)


def test_torus_counts():
    mesh = torus(0.5, 1.0, 20, 10)
    assert len(mesh.vertices) == 21 * 11
    assert mesh.element_count == 20 * 10 * 6
    assert int(mesh.indices.max()) < len(mesh.vertices)


def test_torus_vertices_on_tube():
    inner, outer = 1.0, 3.0
    mesh = torus(inner, outer, 16, 8)
    center = outer - inner
    tube = center / 2.0
    v = mesh.vertices.astype(np.float64)
    ring_distance = np.hypot(v[:, 0], v[:, 1]) - center
    distance = np.hypot(ring_distance, v[:, 2])
    assert np.allclose(distance, tube, atol=1e-5)


def test_torus_normals_are_unit():
    mesh = torus(0.5, 1.0)
    assert np.allclose(np.linalg.norm(mesh.normals, axis=1), 1.0, atol=1e-5)


def test_torus_uvs_span_unit_square():
    mesh = torus(0.5, 1.0, 6, 4)
    assert math.isclose(float(mesh.uvs.min()), 0.0)
    assert math.isclose(float(mesh.uvs.max()), 1.0)


@pytest.mark.parametrize(
    "inner, outer",
    [(1.0, 1.0), (2.0, 1.0), (0.0, 1.0), (-1.0, 1.0), (0.5, -1.0)],
)
def test_torus_rejects_bad_radii(inner, outer):
    with pytest.raises(ValueError):
        torus(inner, outer)