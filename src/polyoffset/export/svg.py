"""
どこで: `src/polyoffset/export/svg.py`。
何を: 輪郭点列を 1 要素の SVG ファイルとして保存する。
なぜ: 押し出し前の輪郭を、ソリッド生成なしで目視確認できるようにするため。
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

_DEFAULT_MARGIN = 1.0


def _fmt_float(x: float, decimals: int) -> str:
    s = f"{float(x):.{int(decimals)}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s in {"-0", ""}:
        s = "0"
    return s


def outline_svg_text(
    points: np.ndarray,
    *,
    closed: bool = True,
    margin: float = _DEFAULT_MARGIN,
    stroke_width: float = 0.1,
    decimals: int = 4,
) -> str:
    """点列を SVG 文書の文字列にする。

    Parameters
    ----------
    points : np.ndarray
        shape `(N,2)` または `(N,3)` の点列（x, y のみ出力する）。
    closed : bool, default True
        True なら `<polygon>`、False なら `<polyline>` を出力する。
    margin : float, default 1.0
        viewBox を点列の bbox から外側へ広げる量。
    """
    xy = np.asarray(points, dtype=np.float64)
    if xy.ndim != 2 or xy.shape[0] == 0 or xy.shape[1] < 2:
        raise ValueError(f"points は shape (N,2|3) の非空配列である必要があります: shape={xy.shape}")
    xy = xy[:, :2]

    lo = xy.min(axis=0) - float(margin)
    hi = xy.max(axis=0) + float(margin)
    w, h = hi - lo

    coords = " ".join(
        f"{_fmt_float(x, decimals)},{_fmt_float(y, decimals)}" for x, y in xy
    )
    tag = "polygon" if closed else "polyline"
    view_box = " ".join(_fmt_float(v, decimals) for v in (lo[0], lo[1], w, h))
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" '
        f'viewBox="{view_box}">\n'
        f'  <{tag} points="{coords}" fill="none" stroke="black" '
        f'stroke-width="{_fmt_float(stroke_width, decimals)}"/>\n'
        "</svg>\n"
    )


def export_svg(points: np.ndarray, path: str | Path, *, closed: bool = True) -> Path:
    """点列を SVG として保存し、保存先パスを返す。親ディレクトリは作成する。"""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(outline_svg_text(points, closed=closed), encoding="utf-8")
    return out


__all__ = ["export_svg", "outline_svg_text"]
