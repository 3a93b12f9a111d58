"""
geometry/point.py - Plane point.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Point:
    """A location in the shared 2-D drawing plane (model units)."""

    x: float = 0.0
    y: float = 0.0

    def offset(self, dx: float, dy: float) -> Point:
        return Point(self.x + dx, self.y + dy)

    def to_dict(self) -> Dict[str, Any]:
        return {"x": round(self.x, 3), "y": round(self.y, 3)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Point:
        return cls(x=float(data["x"]), y=float(data["y"]))
