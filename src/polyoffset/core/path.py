"""点列（Path）入力の正規化。"""

from __future__ import annotations

import numpy as np


def as_path(points: object, *, context: str) -> np.ndarray:
    """点列を shape `(N,3)` の float64 配列に正規化する。

    Parameters
    ----------
    points : object
        shape `(N,2)` または `(N,3)` に変換できる点列。
    context : str
        例外メッセージに含める文脈情報（関数名など）。

    Returns
    -------
    np.ndarray
        新しく確保した float64 配列。入力配列とはメモリを共有しない。

    Notes
    -----
    `(N,2)` 入力は z=0 を補完して `(N,3)` に揃える。
    """
    try:
        arr = np.array(points, dtype=np.float64)
    except Exception as exc:
        raise ValueError(f"{context}: 点列を数値配列に変換できません") from exc

    if arr.ndim == 2 and arr.shape[1] == 2:
        z = np.zeros((arr.shape[0], 1), dtype=np.float64)
        arr = np.concatenate([arr, z], axis=1)

    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(
            f"{context}: 点列は shape (N,2) または (N,3) である必要があります: shape={arr.shape}"
        )
    if arr.shape[0] < 2:
        raise ValueError(f"{context}: 点列は 2 点以上である必要があります: n={arr.shape[0]}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{context}: 点列に有限でない値が含まれています")
    return np.ascontiguousarray(arr)


def as_finite_float(value: object, *, key: str, context: str) -> float:
    """スカラー引数を有限の float に変換する。"""
    try:
        f = float(value)  # type: ignore[arg-type]
    except Exception as exc:
        raise ValueError(f"{context}: {key} は数値である必要があります: got={value!r}") from exc
    if not np.isfinite(f):
        raise ValueError(f"{context}: {key} は有限の数値である必要があります: got={value!r}")
    return f


__all__ = ["as_finite_float", "as_path"]
