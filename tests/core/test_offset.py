"""core.offset.extend（閉じた点列のオフセットと自己交差修復）のテスト群。"""

from __future__ import annotations

import math

import numpy as np
import pytest

from polyoffset.core.errors import DegenerateGeometryError
from polyoffset.core.intersect import segment_intersection
from polyoffset.core.normals import edge_normals, vertex_normals
from polyoffset.core.offset import extend

K = 1.0 / math.sqrt(2.0)
S = math.sqrt(2.0)


def _square(size: float = 10.0) -> np.ndarray:
    return np.array(
        [(0.0, 0.0, 0.0), (size, 0.0, 0.0), (size, size, 0.0), (0.0, size, 0.0)],
        dtype=np.float64,
    )


def _notched(z: float = 0.0) -> np.ndarray:
    """上辺に幅 2 の切り欠きを持つ反時計回りの多角形（左右の上端の高さが異なる）。"""
    return np.array(
        [
            (0.0, 0.0, z),
            (10.0, 0.0, z),
            (10.0, 8.0, z),
            (6.0, 8.0, z),
            (6.0, 2.0, z),
            (4.0, 2.0, z),
            (4.0, 10.0, z),
            (0.0, 10.0, z),
        ],
        dtype=np.float64,
    )


def _naive_offset(path: np.ndarray, amount: float) -> np.ndarray:
    v = vertex_normals(edge_normals(path, closed=True), closed=True)
    out = path.copy()
    out[:, :2] += v * amount
    return out


def _crossing_edge_pairs(ring: np.ndarray) -> list[tuple[int, int]]:
    """閉じた点列の非隣接辺のうち、交差と判定される組を返す。"""
    m = int(ring.shape[0])
    hits: list[tuple[int, int]] = []
    for i in range(m):
        for j in range(i + 2, m):
            if i == 0 and j == m - 1:
                continue
            hit, _p = segment_intersection(
                ring[i], ring[(i + 1) % m], ring[j], ring[(j + 1) % m]
            )
            if hit:
                hits.append((i, j))
    return hits


def test_square_ccw_negative_amount_moves_corners_out_along_bisector() -> None:
    out = extend(_square(), -1.0)
    expected = [
        (-K, -K, 0.0),
        (10.0 + K, -K, 0.0),
        (10.0 + K, 10.0 + K, 0.0),
        (-K, 10.0 + K, 0.0),
    ]
    assert out.shape == (4, 3)
    np.testing.assert_allclose(out, expected, rtol=0.0, atol=1e-12)


def test_square_clockwise_positive_amount_grows() -> None:
    cw = _square()[::-1]
    out = extend(cw, 1.0)
    np.testing.assert_allclose(out[:, :2].min(axis=0), [-K, -K], rtol=0.0, atol=1e-12)
    np.testing.assert_allclose(out[:, :2].max(axis=0), [10.0 + K, 10.0 + K], rtol=0.0, atol=1e-12)


def test_unit_square_corner_moves_by_amount_along_bisector() -> None:
    out = extend(_square(1.0), -0.1)
    disp = out[:, :2] - _square(1.0)[:, :2]
    np.testing.assert_allclose(np.hypot(disp[:, 0], disp[:, 1]), 0.1, rtol=0.0, atol=1e-12)
    np.testing.assert_allclose(disp[0], [-0.1 * K, -0.1 * K], rtol=0.0, atol=1e-12)


def test_convex_polygon_outward_offset_increases_distance_from_centroid() -> None:
    theta = np.linspace(0.0, 2.0 * np.pi, 9, endpoint=False)
    ring = np.stack([5.0 * np.cos(theta), 3.0 * np.sin(theta), np.zeros_like(theta)], axis=1)
    centroid = ring[:, :2].mean(axis=0)

    out = extend(ring, -0.5)

    assert out.shape == ring.shape
    before = np.linalg.norm(ring[:, :2] - centroid, axis=1)
    after = np.linalg.norm(out[:, :2] - centroid, axis=1)
    assert np.all(after > before)


def test_zero_amount_returns_input_vertices() -> None:
    for path in (_square(), _notched()):
        out = extend(path, 0.0)
        np.testing.assert_allclose(out, path, rtol=0.0, atol=1e-12)


def test_outward_offset_of_notch_trims_the_crossing_loop() -> None:
    path = _notched()
    out = extend(path, -2.0)

    expected = [
        (-S, -S, 0.0),
        (10.0 + S, -S, 0.0),
        (10.0 + S, 8.0 + S, 0.0),
        (4.0 + S, 8.0 + S, 0.0),  # 修復で挿入された交点
        (4.0 + S, 10.0 + S, 0.0),
        (-S, 10.0 + S, 0.0),
    ]
    assert out.shape == (6, 3)
    np.testing.assert_allclose(out, expected, rtol=0.0, atol=1e-9)


def test_repaired_offset_has_no_crossing_non_adjacent_edges() -> None:
    path = _notched()
    naive = _naive_offset(path, -2.0)
    out = extend(path, -2.0)

    # ナイーブなオフセットでは切り欠きの壁が入れ替わってループができる。
    assert _crossing_edge_pairs(naive)
    assert _crossing_edge_pairs(out) == []
    assert out.shape[0] <= naive.shape[0]


def test_repair_point_keeps_source_z() -> None:
    out = extend(_notched(z=5.0), -2.0)
    np.testing.assert_allclose(out[:, 2], 5.0, rtol=0.0, atol=1e-12)


def test_z_is_carried_through_unchanged() -> None:
    path = _square()
    path[:, 2] = [1.0, 2.0, 3.0, 4.0]
    out = extend(path, 0.5)
    np.testing.assert_array_equal(out[:, 2], [1.0, 2.0, 3.0, 4.0])


def test_no_consecutive_duplicate_points() -> None:
    out = extend(_notched(), -2.0)
    steps = np.diff(out[:, :2], axis=0)
    assert np.all(np.hypot(steps[:, 0], steps[:, 1]) > 0.0)


def test_input_is_not_mutated_and_2d_input_is_accepted() -> None:
    path2d = np.array([(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)])
    before = path2d.copy()
    out = extend(path2d, -1.0)
    np.testing.assert_array_equal(path2d, before)
    assert out.shape == (4, 3)
    np.testing.assert_array_equal(out[:, 2], 0.0)


def test_duplicate_consecutive_points_raise() -> None:
    path = np.array([(0.0, 0.0), (10.0, 0.0), (10.0, 0.0), (0.0, 10.0)])
    with pytest.raises(DegenerateGeometryError):
        extend(path, 1.0)


def test_duplicate_consecutive_points_propagate_nan_when_not_strict() -> None:
    path = np.array([(0.0, 0.0), (10.0, 0.0), (10.0, 0.0), (0.0, 10.0)])
    out = extend(path, 1.0, strict=False)
    assert np.isnan(out).any()


@pytest.mark.parametrize("amount", [float("nan"), float("inf"), "abc"])
def test_non_finite_amount_raises(amount: object) -> None:
    with pytest.raises(ValueError):
        extend(_square(), amount)  # type: ignore[arg-type]


def test_single_point_raises() -> None:
    with pytest.raises(ValueError):
        extend([(0.0, 0.0, 0.0)], 1.0)
