"""polyoffset が送出する例外型。"""

from __future__ import annotations


class DegenerateGeometryError(ValueError):
    """長さ 0 の辺などで法線が定義できない入力を表す。

    Notes
    -----
    `offset.degenerate: nan` の場合は送出せず、NaN を含む法線をそのまま返す。
    """


class OutlineConfigError(ValueError):
    """輪郭生成の設定が不正（開いたパスに幅 0 を指定した等）であることを表す。"""


__all__ = ["DegenerateGeometryError", "OutlineConfigError"]
