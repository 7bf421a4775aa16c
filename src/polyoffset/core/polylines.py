# どこで: `src/polyoffset/core/polylines.py`。
# 何を: `(coords, offsets)` 形式のポリライン集合へ extend / thick_path を一括適用する。
# なぜ: 複数の輪郭をまとめて扱う呼び出し側が、境界配列を自前で組み直さずに済むようにするため。

from __future__ import annotations

import numpy as np

from polyoffset.core.offset import extend, thick_path

GeomTuple = tuple[np.ndarray, np.ndarray]
"""`(coords, offsets)` で表すポリライン集合。

- `coords`: shape `(N,3)` の座標配列
- `offsets`: shape `(M+1,)` の境界配列。ポリライン i は `coords[offsets[i]:offsets[i+1]]`
"""


def _empty_geometry() -> GeomTuple:
    coords = np.zeros((0, 3), dtype=np.float64)
    offsets = np.zeros((1,), dtype=np.int32)
    return coords, offsets


def validate_geometry(g: GeomTuple, *, context: str) -> GeomTuple:
    """`(coords, offsets)` の形状と整合性を検証し、正規化した配列を返す。

    Notes
    -----
    - `coords` は `(N,3)`、`(N,2)` は z=0 を補完する。
    - `offsets` は先頭 0 / 末尾 N / 単調非減少である必要がある。
    """
    if not isinstance(g, tuple) or len(g) != 2:
        raise TypeError(f"{context}: (coords, offsets) タプルが必要です: {type(g)!r}")

    coords = np.asarray(g[0], dtype=np.float64)
    offsets = np.asarray(g[1])

    if coords.ndim == 2 and coords.shape[1] == 2:
        z = np.zeros((coords.shape[0], 1), dtype=np.float64)
        coords = np.concatenate([coords, z], axis=1)
    if coords.ndim != 2 or coords.shape[1] != 3:
        raise ValueError(f"{context}: coords は shape (N,3) である必要があります: shape={coords.shape}")
    if offsets.ndim != 1 or offsets.size == 0:
        raise ValueError(f"{context}: offsets は 1 要素以上の 1 次元配列である必要があります")
    if int(offsets[0]) != 0:
        raise ValueError(f"{context}: offsets[0] は 0 である必要があります")
    if int(offsets[-1]) != coords.shape[0]:
        raise ValueError(f"{context}: offsets[-1] は coords 行数と一致する必要があります")
    if np.any(np.diff(offsets) < 0):
        raise ValueError(f"{context}: offsets は単調非減少である必要があります")

    return coords, offsets.astype(np.int32, copy=False)


def _concat(parts: list[np.ndarray]) -> GeomTuple:
    if not parts:
        return _empty_geometry()
    offsets = np.zeros((len(parts) + 1,), dtype=np.int32)
    offsets[1:] = np.cumsum([p.shape[0] for p in parts])
    coords = np.concatenate(parts, axis=0)
    return coords, offsets


def extend_polylines(
    g: GeomTuple,
    amount: float,
    *,
    eps: float | None = None,
    strict: bool | None = None,
) -> GeomTuple:
    """各ポリラインを閉じた点列として extend する。

    Parameters
    ----------
    g : tuple[np.ndarray, np.ndarray]
        入力ポリライン集合（coords, offsets）。
    amount : float
        オフセット量（各ポリラインに同じ符号で適用する）。

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        オフセット後のポリライン集合。2 点未満のポリラインは出力から除く。

    Notes
    -----
    先頭点を末尾に重ねて閉じたポリラインは、重複点を外してから処理し、
    出力でも同様に先頭点を末尾へ複製する。
    """
    coords, offsets = validate_geometry(g, context="extend_polylines")
    parts: list[np.ndarray] = []
    for i in range(int(offsets.size) - 1):
        line = coords[int(offsets[i]) : int(offsets[i + 1])]
        repeated = line.shape[0] >= 2 and bool(np.all(line[0, :2] == line[-1, :2]))
        if repeated:
            line = line[:-1]
        if line.shape[0] < 2:
            continue
        out = extend(line, amount, eps=eps, strict=strict)
        if repeated:
            out = np.concatenate([out, out[:1]], axis=0)
        parts.append(out)
    return _concat(parts)


def thick_polylines(
    g: GeomTuple,
    width: float,
    *,
    strict: bool | None = None,
) -> GeomTuple:
    """各ポリラインを開いた点列として thick_path し、閉じた輪郭の集合を返す。

    出力の各輪郭は先頭点を末尾に重ねない。2 点未満のポリラインは出力から除く。
    """
    coords, offsets = validate_geometry(g, context="thick_polylines")
    parts: list[np.ndarray] = []
    for i in range(int(offsets.size) - 1):
        line = coords[int(offsets[i]) : int(offsets[i + 1])]
        if line.shape[0] < 2:
            continue
        parts.append(thick_path(line, width, strict=strict))
    return _concat(parts)


__all__ = ["GeomTuple", "extend_polylines", "thick_polylines", "validate_geometry"]
