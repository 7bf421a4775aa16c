"""core.normals（辺法線・頂点法線）のテスト群。"""

from __future__ import annotations

import numpy as np
import pytest

from polyoffset.core.errors import DegenerateGeometryError
from polyoffset.core.normals import edge_normals, vertex_normals


def _irregular_polygon() -> np.ndarray:
    return np.array(
        [
            (0.0, 0.0, 0.0),
            (7.0, -1.0, 0.0),
            (9.5, 4.0, 0.0),
            (4.0, 3.0, 0.0),
            (2.0, 8.0, 0.0),
            (-1.0, 5.5, 0.0),
        ],
        dtype=np.float64,
    )


@pytest.mark.parametrize("closed", [True, False])
def test_edge_normals_are_unit_and_perpendicular(closed: bool) -> None:
    pts = _irregular_polygon()
    n = edge_normals(pts, closed=closed)

    if closed:
        d = np.roll(pts[:, :2], -1, axis=0) - pts[:, :2]
    else:
        d = pts[1:, :2] - pts[:-1, :2]

    assert n.shape == (d.shape[0], 2)
    np.testing.assert_allclose(np.hypot(n[:, 0], n[:, 1]), 1.0, rtol=0.0, atol=1e-9)
    np.testing.assert_allclose(np.einsum("ij,ij->i", n, d), 0.0, rtol=0.0, atol=1e-9)


def test_edge_normal_rotates_direction_to_the_left() -> None:
    pts = np.array([(0.0, 0.0, 0.0), (10.0, 0.0, 0.0), (10.0, 10.0, 0.0)])
    n = edge_normals(pts, closed=False)
    np.testing.assert_allclose(n, [[0.0, 1.0], [-1.0, 0.0]], rtol=0.0, atol=1e-12)


def test_closed_vertex_normals_bisect_adjacent_edges() -> None:
    square = np.array([(0.0, 0.0, 0.0), (10.0, 0.0, 0.0), (10.0, 10.0, 0.0), (0.0, 10.0, 0.0)])
    v = vertex_normals(edge_normals(square, closed=True), closed=True)

    k = 1.0 / np.sqrt(2.0)
    expected = [[k, k], [-k, k], [-k, -k], [k, -k]]
    assert v.shape == (4, 2)
    np.testing.assert_allclose(v, expected, rtol=0.0, atol=1e-12)


def test_open_vertex_normals_use_single_edge_at_endpoints() -> None:
    pts = np.array([(0.0, 0.0, 0.0), (10.0, 0.0, 0.0), (10.0, 10.0, 0.0), (0.0, 10.0, 0.0)])
    e = edge_normals(pts, closed=False)
    v = vertex_normals(e, closed=False)

    assert e.shape == (3, 2)
    assert v.shape == (4, 2)
    np.testing.assert_allclose(v[0], e[0], rtol=0.0, atol=0.0)
    np.testing.assert_allclose(v[-1], e[-1], rtol=0.0, atol=0.0)
    np.testing.assert_allclose(np.hypot(v[:, 0], v[:, 1]), 1.0, rtol=0.0, atol=1e-9)


def test_z_does_not_affect_normals() -> None:
    flat = _irregular_polygon()
    lifted = flat.copy()
    lifted[:, 2] = np.linspace(-3.0, 3.0, lifted.shape[0])
    np.testing.assert_array_equal(
        edge_normals(flat, closed=True), edge_normals(lifted, closed=True)
    )


def test_zero_length_edge_raises_when_strict() -> None:
    pts = np.array([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)])
    with pytest.raises(DegenerateGeometryError):
        edge_normals(pts, closed=True, strict=True)


def test_zero_length_wrap_edge_raises_when_strict() -> None:
    pts = np.array([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 0.0, 0.0)])
    with pytest.raises(DegenerateGeometryError):
        edge_normals(pts, closed=True, strict=True)
    # open では末尾→先頭の辺が無いので問題ない。
    assert np.all(np.isfinite(edge_normals(pts, closed=False, strict=True)))


def test_zero_length_edge_yields_nan_when_not_strict() -> None:
    pts = np.array([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)])
    n = edge_normals(pts, closed=True, strict=False)
    assert np.isnan(n[1]).all()
    assert np.isfinite(n[0]).all()


def test_reversing_open_path_raises_when_strict() -> None:
    pts = np.array([(0.0, 0.0, 0.0), (5.0, 0.0, 0.0), (1.0, 0.0, 0.0)])
    with pytest.raises(DegenerateGeometryError):
        vertex_normals(edge_normals(pts, closed=False), closed=False, strict=True)
