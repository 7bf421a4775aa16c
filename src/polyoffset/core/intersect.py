"""
どこで: `src/polyoffset/core/intersect.py`。
何を: 2 線分 AB / CD の交差判定と交点計算（XY のみ、z は無視）。
なぜ: extend の自己交差修復で、確定済みの辺と新しい辺の交差を調べるため。
"""

from __future__ import annotations

import numpy as np
from numba import njit  # type: ignore[import-untyped]

from polyoffset.core.runtime_config import runtime_config

# `_segment_intersection_nb` の戻り値コード。
NO_HIT = 0
HIT_POINT = 1
HIT_COLLINEAR = 2


# fastmath は使わない（ゼロ比較と NaN の扱いを IEEE どおりに保つ）。
@njit(cache=True)  # type: ignore[misc]
def _segment_intersection_nb(
    ax: float,
    ay: float,
    bx: float,
    by: float,
    cx: float,
    cy: float,
    dx: float,
    dy: float,
    eps: float,
) -> tuple[int, float, float, float]:
    """線分 AB と CD の交差を判定する。

    Returns
    -------
    tuple[int, float, float, float]
        `(code, x, y, u)`。code は NO_HIT / HIT_POINT / HIT_COLLINEAR。
        HIT_POINT のときのみ (x, y) が AB・CD を延長した直線の交点、
        u が CD 上のパラメータになる。それ以外は NaN。
    """
    nan = np.nan
    cmp_x = cx - ax
    cmp_y = cy - ay
    r_x = bx - ax
    r_y = by - ay
    s_x = dx - cx
    s_y = dy - cy

    cmp_x_r = cmp_x * r_y - cmp_y * r_x
    cmp_x_s = cmp_x * s_y - cmp_y * s_x
    r_x_s = r_x * s_y - r_y * s_x

    if abs(cmp_x_r) <= eps:
        # C が AB の直線上: どちらかの軸で C が A と B の間にあれば重なりとみなす。
        overlap = ((cx - ax < 0.0) != (cx - bx < 0.0)) or (
            (cy - ay < 0.0) != (cy - by < 0.0)
        )
        if overlap:
            return HIT_COLLINEAR, nan, nan, nan
        return NO_HIT, nan, nan, nan

    if abs(r_x_s) <= eps:
        return NO_HIT, nan, nan, nan

    inv = 1.0 / r_x_s
    t = cmp_x_s * inv
    u = cmp_x_r * inv
    if t >= 0.0 and t <= 1.0 and u >= 0.0 and u <= 1.0:
        return HIT_POINT, ax + t * r_x, ay + t * r_y, u
    return NO_HIT, nan, nan, nan


def resolve_eps(eps: float | None) -> float:
    """eps 引数を解決する（None なら `offset.intersection_eps`）。"""
    if eps is None:
        return float(runtime_config().offset.intersection_eps)
    e = float(eps)
    if not np.isfinite(e) or e < 0.0:
        raise ValueError(f"eps は 0 以上の有限値である必要があります: got={eps!r}")
    return e


def segment_intersection(
    a: object,
    b: object,
    c: object,
    d: object,
    *,
    eps: float | None = None,
) -> tuple[bool, np.ndarray | None]:
    """線分 AB と CD が交差するかを判定し、交点を返す。

    Parameters
    ----------
    a, b, c, d : array-like
        端点。先頭 2 成分（x, y）のみを使う。
    eps : float | None, default None
        外積をゼロとみなす閾値。None の場合は `offset.intersection_eps`。

    Returns
    -------
    tuple[bool, np.ndarray | None]
        `(交差するか, 交点)`。交点は shape `(2,)` の配列。

    Notes
    -----
    - C が AB の直線上にある場合（共線）は、軸ごとの符号比較だけで重なりを判定し、
      交点は None を返す。重なり区間の厳密な端点は求めない。
    - 交点は t/u でクランプせず、2 直線の交点として計算する。
    """
    pa = np.asarray(a, dtype=np.float64)
    pb = np.asarray(b, dtype=np.float64)
    pc = np.asarray(c, dtype=np.float64)
    pd = np.asarray(d, dtype=np.float64)
    code, x, y, _u = _segment_intersection_nb(
        float(pa[0]),
        float(pa[1]),
        float(pb[0]),
        float(pb[1]),
        float(pc[0]),
        float(pc[1]),
        float(pd[0]),
        float(pd[1]),
        resolve_eps(eps),
    )
    if code == HIT_POINT:
        return True, np.array([x, y], dtype=np.float64)
    if code == HIT_COLLINEAR:
        return True, None
    return False, None


__all__ = ["resolve_eps", "segment_intersection"]
