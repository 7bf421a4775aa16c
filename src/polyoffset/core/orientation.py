"""閉じた点列の向き（時計回り / 反時計回り）判定。"""

from __future__ import annotations

import numpy as np


def signed_area(points: object) -> float:
    """XY 平面での符号付き面積（shoelace）を返す。反時計回りで正。"""
    xy = np.asarray(points, dtype=np.float64)[:, :2]
    if xy.shape[0] < 3:
        return 0.0
    x = xy[:, 0]
    y = xy[:, 1]
    return float(0.5 * (np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)))


def is_ccw(points: object) -> bool:
    """点列が反時計回りなら True。"""
    return signed_area(points) > 0.0


def is_clockwise(points: object) -> bool:
    """点列が時計回りなら True。面積 0 はどちらでもない。"""
    return signed_area(points) < 0.0


__all__ = ["is_ccw", "is_clockwise", "signed_area"]
