"""2D 点列のオフセット（自己交差修復つき）と太線輪郭化。"""

from __future__ import annotations

from polyoffset.core.errors import DegenerateGeometryError, OutlineConfigError
from polyoffset.core.intersect import segment_intersection
from polyoffset.core.normals import edge_normals, vertex_normals
from polyoffset.core.offset import extend, thick_path
from polyoffset.core.orientation import is_ccw, is_clockwise, signed_area
from polyoffset.core.polylines import extend_polylines, thick_polylines

__all__ = [
    "DegenerateGeometryError",
    "OutlineConfigError",
    "edge_normals",
    "extend",
    "extend_polylines",
    "is_ccw",
    "is_clockwise",
    "segment_intersection",
    "signed_area",
    "thick_path",
    "thick_polylines",
    "vertex_normals",
]
