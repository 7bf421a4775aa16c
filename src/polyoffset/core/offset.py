"""
どこで: `src/polyoffset/core/offset.py`。
何を: 閉じた点列のオフセット（自己交差修復つき）と、開いた点列の太線輪郭化を提供する。
なぜ: 押し出し前の輪郭を、ナイーブなオフセットで生じるループなしに得るため。
"""

from __future__ import annotations

import logging

import numpy as np
from numba import njit  # type: ignore[import-untyped]

from polyoffset.core.intersect import (
    HIT_POINT,
    NO_HIT,
    _segment_intersection_nb,
    resolve_eps,
)
from polyoffset.core.normals import edge_normals, vertex_normals
from polyoffset.core.path import as_finite_float, as_path

logger = logging.getLogger(__name__)


@njit(cache=True)  # type: ignore[misc]
def _extend_closed_nb(
    points: np.ndarray,
    normals: np.ndarray,
    amount: float,
    eps: float,
    out: np.ndarray,
) -> tuple[int, int]:
    """頂点を法線方向へ押し出しつつ、確定済みの辺との交差を刈り込む。

    `out` は追記専用バッファで、戻り値の count までが有効な結果になる。
    刈り込みは count を巻き戻すだけで行う。

    Returns
    -------
    tuple[int, int]
        `(count, n_repairs)`。
    """
    n = points.shape[0]
    count = 0
    n_repairs = 0
    for i in range(n):
        px = points[i, 0] + normals[i, 0] * amount
        py = points[i, 1] + normals[i, 1] * amount
        pz = points[i, 2]

        if count > 3:
            j = 0
            # count は刈り込みで縮むため、毎回評価し直す。
            while j < count - 2:
                last = count - 1
                code, x, y, u = _segment_intersection_nb(
                    out[j, 0],
                    out[j, 1],
                    out[j + 1, 0],
                    out[j + 1, 1],
                    out[last, 0],
                    out[last, 1],
                    px,
                    py,
                    eps,
                )
                if code != NO_HIT:
                    cz = out[last, 2]
                    count = j + 1
                    n_repairs += 1
                    if code == HIT_POINT:
                        if not (out[count - 1, 0] == x and out[count - 1, 1] == y):
                            out[count, 0] = x
                            out[count, 1] = y
                            out[count, 2] = cz + u * (pz - cz)
                            count += 1
                j += 1

        if count == 0 or not (out[count - 1, 0] == px and out[count - 1, 1] == py):
            out[count, 0] = px
            out[count, 1] = py
            out[count, 2] = pz
            count += 1
    return count, n_repairs


def extend(
    path: object,
    amount: float,
    *,
    eps: float | None = None,
    strict: bool | None = None,
) -> np.ndarray:
    """閉じた点列を頂点法線方向へ amount だけオフセットする。

    Parameters
    ----------
    path : array-like
        shape `(N,2)` または `(N,3)` の閉じた点列。末尾→先頭の辺は暗黙に存在する
        （先頭点を末尾に重ねない）。
    amount : float
        オフセット量。正で法線 `(-dy, dx)` 側（反時計回りの多角形では内側）へ動く。
        0 は変位なし。
    eps : float | None, default None
        交差判定の閾値。None の場合は `offset.intersection_eps`。
    strict : bool | None, default None
        退化入力で例外を送出するか。None の場合は `offset.degenerate`。

    Returns
    -------
    np.ndarray
        shape `(M,3)` の float64 配列（M <= N）。z は入力点の値を引き継ぐ。

    Raises
    ------
    DegenerateGeometryError
        strict で、長さ 0 の辺または逆向きの隣接辺がある場合。

    Notes
    -----
    - 各頂点の変位は単位二等分ベクトル * amount（角の開きによる倍率補正はしない）。
    - 新しい辺が確定済みの辺 j と交差したら、j+1 以降を捨てて交点を挿入する。
      共線の重なりでは交点を挿入せずに刈り込むだけ。
    - 修復点の z は、新しい辺に沿って線形補間する。
    """
    pts = as_path(path, context="extend")
    amt = as_finite_float(amount, key="amount", context="extend")

    normals = vertex_normals(
        edge_normals(pts, closed=True, strict=strict),
        closed=True,
        strict=strict,
    )
    out = np.empty_like(pts)
    count, n_repairs = _extend_closed_nb(
        pts,
        np.ascontiguousarray(normals),
        amt,
        resolve_eps(eps),
        out,
    )
    if n_repairs:
        logger.debug(
            "extend: %d 回の自己交差を修復しました (n_in=%d, n_out=%d)",
            n_repairs,
            pts.shape[0],
            count,
        )
    return out[:count].copy()


def thick_path(
    path: object,
    width: float,
    *,
    strict: bool | None = None,
) -> np.ndarray:
    """開いた点列を両側へ width/2 ずつ広げ、1 本の閉じた輪郭にする。

    Parameters
    ----------
    path : array-like
        shape `(N,2)` または `(N,3)` の開いた点列。
    width : float
        輪郭の幅。0 は両側とも変位なし。
    strict : bool | None, default None
        退化入力で例外を送出するか。None の場合は `offset.degenerate`。

    Returns
    -------
    np.ndarray
        shape `(2(N-1),3)` の float64 配列。
        順方向側（末尾点を除く各頂点 + 法線 * width/2）に、
        逆側（同じ頂点 - 法線 * width/2）を逆順にして連結したもの。

    Notes
    -----
    自己交差の修復は行わない。鋭い折れでは輪郭が交差し得る。
    """
    pts = as_path(path, context="thick_path")
    w = as_finite_float(width, key="width", context="thick_path")

    normals = vertex_normals(
        edge_normals(pts, closed=False, strict=strict),
        closed=False,
        strict=strict,
    )
    half = 0.5 * w
    base = pts[:-1]
    disp = np.zeros_like(base)
    disp[:, :2] = normals[:-1] * half

    forward = base + disp
    reverse = (base - disp)[::-1]
    return np.concatenate([forward, reverse], axis=0)


__all__ = ["extend", "thick_path"]
