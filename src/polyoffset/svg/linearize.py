"""
どこで: `src/polyoffset/svg/linearize.py`。
何を: SVG パスデータ（`d` 属性）を折れ線の点列へ線形化する。
なぜ: 曲線を含むパスを、extend / thick_path が受け付ける点列に変換するため。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from svgelements import Close, Line, Move, Path  # type: ignore[import-untyped]

from polyoffset.core.runtime_config import runtime_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LinearizedPath:
    """線形化結果。

    Parameters
    ----------
    points : np.ndarray
        float64 shape `(N,3)` の点列（z=0）。連続する重複点を含まない。
        閉じたパスでは先頭点を末尾に重ねない。
    closed : bool
        パスが `Z` で閉じていれば True。
    """

    points: np.ndarray
    closed: bool


def _dedupe(xy: list[tuple[float, float]], *, closed: bool) -> list[tuple[float, float]]:
    out: list[tuple[float, float]] = []
    for p in xy:
        if out and out[-1] == p:
            continue
        out.append(p)
    while closed and len(out) >= 2 and out[-1] == out[0]:
        out.pop()
    if len(out) != len(xy):
        logger.debug("linearize: 重複点を %d 個除去しました", len(xy) - len(out))
    return out


def linearize_path(d: str, step_size: float | None = None) -> LinearizedPath:
    """SVG パスデータを線形化する。

    Parameters
    ----------
    d : str
        SVG パスデータ（例: `"m 0,0 4,0 0,4 -4,0 z"`）。
    step_size : float | None, default None
        曲線のサンプリング間隔。None の場合は `svg.step_size`。

    Returns
    -------
    LinearizedPath
        線形化した点列と閉じているかどうか。

    Notes
    -----
    - 直線セグメントは終点のみを追加する。
    - 曲線（ベジェ・円弧）は長さ / step_size を切り上げた数でパラメータを等分して評価する。
    - 最初のサブパスのみを扱い、2 つ目以降は警告して無視する。
    """
    step = float(runtime_config().svg.step_size if step_size is None else step_size)
    if not math.isfinite(step) or step <= 0.0:
        raise ValueError(f"step_size は正の有限値である必要があります: got={step_size!r}")

    try:
        path = Path(str(d))
    except Exception as exc:
        raise ValueError(f"SVG パスデータを解釈できません: d={d!r}") from exc

    xy: list[tuple[float, float]] = []
    closed = False
    started = False
    n_ignored = 0
    for seg in path:
        if isinstance(seg, Move):
            if started:
                n_ignored += 1
                continue
            started = True
            xy.append((float(seg.end.x), float(seg.end.y)))
            continue
        if not started or closed:
            n_ignored += 1
            continue
        if isinstance(seg, Close):
            closed = True
        elif isinstance(seg, Line):
            xy.append((float(seg.end.x), float(seg.end.y)))
        else:
            n = max(1, int(math.ceil(float(seg.length()) / step)))
            for k in range(1, n + 1):
                p = seg.point(k / n)
                xy.append((float(p.x), float(p.y)))

    if n_ignored:
        logger.warning(
            "linearize: 2 つ目以降のサブパスは無視します（%d セグメント）", n_ignored
        )

    xy = _dedupe(xy, closed=closed)
    if len(xy) < 2:
        raise ValueError(f"線形化後の点が 2 点未満です: d={d!r}")

    points = np.zeros((len(xy), 3), dtype=np.float64)
    points[:, :2] = np.asarray(xy, dtype=np.float64)
    return LinearizedPath(points=points, closed=closed)


__all__ = ["LinearizedPath", "linearize_path"]
