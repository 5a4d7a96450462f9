import numpy as np
import pytest

from visionkit.markers import (
    Marker,
    _orient,
    check_points,
    is_convex,
    marker_code,
    rotate_marker,
)

SQUARE = [(0, 0), (20, 0), (20, 20), (0, 20)]


def test_square_is_convex_both_windings():
    assert is_convex(SQUARE) is True
    assert is_convex(list(reversed(SQUARE))) is True


def test_concave_polygon_is_not_convex():
    dart = [(0, 0), (10, 4), (20, 0), (10, 20)]
    assert is_convex(dart) is False


def test_collinear_vertex_is_not_convex():
    assert is_convex([(0, 0), (10, 0), (20, 0), (10, 10)]) is False


def test_too_few_points_is_not_convex():
    assert is_convex([(0, 0), (1, 1)]) is False


def test_check_points_accepts_large_square():
    assert check_points(SQUARE, 100.0) is True


def test_check_points_boundary_side_length_passes():
    assert check_points(SQUARE, 400.0) is True
    assert check_points(SQUARE, 400.5) is False


def test_check_points_rejects_triangle_and_concave():
    assert check_points([(0, 0), (20, 0), (0, 20)], 1.0) is False
    assert check_points([(0, 0), (10, 4), (20, 0), (10, 20)], 1.0) is False


def test_rotate_marker_four_times_is_identity():
    matrix = np.arange(36, dtype=np.uint8).reshape(6, 6)
    turned = matrix
    for _ in range(4):
        turned = rotate_marker(turned)
    assert np.array_equal(turned, matrix)


def test_rotate_marker_is_quarter_turn():
    matrix = np.arange(12).reshape(3, 4)
    assert np.array_equal(rotate_marker(matrix), np.rot90(matrix))


def test_marker_code_white_interior_is_zero():
    matrix = np.full((6, 6), 255, dtype=np.uint8)
    assert marker_code(matrix) == 0


def test_marker_code_all_black():
    matrix = np.zeros((6, 6), dtype=np.uint8)
    assert marker_code(matrix) == 0x7777


def test_marker_code_single_black_cell():
    matrix = np.full((6, 6), 255, dtype=np.uint8)
    matrix[1, 1] = 0
    assert marker_code(matrix) == 0x4000


def test_marker_code_ignores_last_inner_column():
    matrix = np.full((6, 6), 255, dtype=np.uint8)
    matrix[1:5, 4] = 0
    assert marker_code(matrix) == 0


def test_marker_code_rejects_non_2d():
    with pytest.raises(ValueError):
        marker_code(np.zeros((6, 6, 3)))


def test_orient_picks_smallest_code():
    matrix = np.full((6, 6), 255, dtype=np.uint8)
    matrix[1, 1] = 0
    matrix[2, 1] = 0
    matrix[1, 3] = 0
    poly = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]

    marker = _orient(poly, matrix)

    codes = []
    turned = matrix
    for _ in range(4):
        codes.append(marker_code(turned))
        turned = rotate_marker(turned)
    assert isinstance(marker, Marker)
    assert marker.code == min(codes)
    assert marker_code(marker.matrix) == marker.code
    assert sorted(marker.poly) == sorted(poly)
    start = marker.poly.index(poly[0])
    assert marker.poly[start:] + marker.poly[:start] == poly


def test_orient_unrotated_shifts_corners_by_two():
    matrix = np.full((6, 6), 255, dtype=np.uint8)
    poly = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]
    marker = _orient(poly, matrix)
    assert marker.poly == poly[2:] + poly[:2]
    assert np.array_equal(marker.matrix, matrix)


def test_orient_rejects_wrong_corner_count():
    with pytest.raises(ValueError):
        _orient([(0, 0), (1, 0), (1, 1)], np.zeros((6, 6)))