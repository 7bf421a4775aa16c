"""
どこで: `src/polyoffset/svg/outline.py`。
何を: SVG パスから押し出し用の輪郭点列を作る（閉パスは extend、開パスは thick_path）。
なぜ: 呼び出し側が向き判定やオフセット符号の選択を意識せずに済むようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from polyoffset.core.errors import OutlineConfigError
from polyoffset.core.offset import extend, thick_path
from polyoffset.core.orientation import is_ccw
from polyoffset.core.path import as_finite_float, as_path
from polyoffset.core.runtime_config import runtime_config
from polyoffset.svg.linearize import linearize_path


@dataclass(frozen=True, slots=True)
class Outline:
    """輪郭の生成結果。

    Parameters
    ----------
    points : np.ndarray
        float64 shape `(N,3)` の点列。
    closed : bool
        元のパスが閉じていれば True。開パスの太線輪郭は points 自体が閉じた輪郭になる。
    """

    points: np.ndarray
    closed: bool


def outline_points(
    points: object,
    *,
    closed: bool,
    extension: float,
    eps: float | None = None,
) -> np.ndarray:
    """線形化済みの点列から輪郭点列を作る。

    Parameters
    ----------
    points : array-like
        shape `(N,2)` または `(N,3)` の点列。
    closed : bool
        閉じた点列なら True。
    extension : float
        閉パスでは外側への拡張量、開パスでは輪郭の幅。

    Returns
    -------
    np.ndarray
        輪郭点列。

    Raises
    ------
    OutlineConfigError
        開いた点列に extension=0 を指定した場合。

    Notes
    -----
    閉パスは巻き方向に関わらず外側へ広がるよう、反時計回りなら符号を反転して extend する。
    """
    ext = as_finite_float(extension, key="extension", context="outline_points")
    pts = as_path(points, context="outline_points")

    if not closed:
        if ext == 0.0:
            raise OutlineConfigError("幅 0 では開いたパスから太線輪郭を作れません")
        return thick_path(pts, ext)

    if ext == 0.0:
        return pts
    sign = -1.0 if is_ccw(pts) else 1.0
    return extend(pts, sign * ext, eps=eps)


def path_outline(
    d: str,
    *,
    extension: float,
    step_size: float | None = None,
    scale: float | None = None,
) -> Outline:
    """SVG パスデータを線形化し、輪郭点列を作る。

    Parameters
    ----------
    d : str
        SVG パスデータ。
    extension : float
        閉パスの拡張量 / 開パスの幅。
    step_size : float | None, default None
        線形化のステップ幅。None の場合は `svg.step_size`。
    scale : float | None, default None
        線形化後に掛ける等方スケール。None の場合は `svg.scale`。
        スケールは extension 適用前に掛ける。
    """
    s = float(runtime_config().svg.scale if scale is None else scale)
    linear = linearize_path(d, step_size)
    pts = linear.points
    if s != 1.0:
        pts = pts * s
    return Outline(
        points=outline_points(pts, closed=linear.closed, extension=extension),
        closed=linear.closed,
    )


__all__ = ["Outline", "outline_points", "path_outline"]
