"""
どこで: `src/polyoffset/core/normals.py`。
何を: 点列の辺法線・頂点法線（XY 平面内の単位ベクトル）を計算する。
なぜ: extend / thick_path が頂点を押し出す方向を、入力座標だけから決めるため。
"""

from __future__ import annotations

import numpy as np

from polyoffset.core.errors import DegenerateGeometryError
from polyoffset.core.runtime_config import runtime_config


def _resolve_strict(strict: bool | None) -> bool:
    if strict is None:
        return runtime_config().offset.strict
    return bool(strict)


def _normalize_rows(v: np.ndarray, *, strict: bool, what: str) -> np.ndarray:
    """各行を単位長に正規化する。長さ 0 の行は strict なら例外、それ以外は NaN。"""
    length = np.hypot(v[:, 0], v[:, 1])
    zero = np.flatnonzero(length == 0.0)
    if zero.size and strict:
        raise DegenerateGeometryError(
            f"{what} の長さが 0 です（重複した連続点など）: index={int(zero[0])}"
        )
    with np.errstate(invalid="ignore", divide="ignore"):
        return v / length[:, None]


def edge_normals(
    path: np.ndarray,
    *,
    closed: bool,
    strict: bool | None = None,
) -> np.ndarray:
    """辺ごとの単位法線を返す。

    Parameters
    ----------
    path : np.ndarray
        shape `(N,3)` の点列（x, y のみ使用）。
    closed : bool
        True なら末尾→先頭の辺を含める。
    strict : bool | None, default None
        長さ 0 の辺で `DegenerateGeometryError` を送出するか。
        None の場合は `offset.degenerate` 設定に従う。

    Returns
    -------
    np.ndarray
        shape `(E,2)` の float64 配列。E は closed なら N、open なら N-1。
        辺 i は頂点 i → i+1 を結び、法線は `(dx, dy) → (-dy, dx)` の回転で得る。
    """
    xy = np.asarray(path, dtype=np.float64)[:, :2]
    if closed:
        d = np.roll(xy, -1, axis=0) - xy
    else:
        d = xy[1:] - xy[:-1]
    n = np.stack([-d[:, 1], d[:, 0]], axis=1)
    return _normalize_rows(n, strict=_resolve_strict(strict), what="辺")


def vertex_normals(
    normals: np.ndarray,
    *,
    closed: bool,
    strict: bool | None = None,
) -> np.ndarray:
    """辺法線から頂点ごとの単位法線（二等分方向）を返す。

    Parameters
    ----------
    normals : np.ndarray
        `edge_normals()` の戻り値。
    closed : bool
        `edge_normals()` に渡したものと同じ値。
    strict : bool | None, default None
        隣接辺法線が逆向きで平均が 0 になる頂点で例外を送出するか。

    Returns
    -------
    np.ndarray
        shape `(N,2)` の float64 配列。

    Notes
    -----
    - closed: 頂点 i は辺 i-1（先頭は末尾辺）と辺 i の平均を正規化する。
    - open: 端点は隣接する 1 辺の法線をそのまま使い、内部頂点のみ平均する。
    """
    e = np.asarray(normals, dtype=np.float64)
    strict_b = _resolve_strict(strict)
    if closed:
        mid = 0.5 * (np.roll(e, 1, axis=0) + e)
        return _normalize_rows(mid, strict=strict_b, what="頂点法線")

    n_edges = int(e.shape[0])
    out = np.empty((n_edges + 1, 2), dtype=np.float64)
    out[0] = e[0]
    out[-1] = e[-1]
    if n_edges > 1:
        mid = 0.5 * (e[1:] + e[:-1])
        inner = _normalize_rows(mid, strict=False, what="頂点法線")
        bad = np.flatnonzero(~np.isfinite(inner[:, 0]))
        if bad.size and strict_b:
            raise DegenerateGeometryError(
                f"頂点法線の長さが 0 です（折り返す辺）: index={int(bad[0]) + 1}"
            )
        out[1:-1] = inner
    return out


__all__ = ["edge_normals", "vertex_normals"]
