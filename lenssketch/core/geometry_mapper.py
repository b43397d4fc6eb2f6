"""Geometry mapper — millimeter to canvas pixel conversion.

The sensor plane sits at mm-x = 0 in the middle of the canvas. Positive
mm-x runs right, positive mm-y runs up (pixel Y is flipped).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from lenssketch.constants import MAX_PX_PER_MM, MIN_PX_PER_MM


def clamp_scale(scale: float) -> float:
    """Clamp a pixels-per-mm scale into [MIN_PX_PER_MM, MAX_PX_PER_MM].

    Zero, negative and non-finite scales collapse or invert the drawing,
    so they map to the minimum.
    """
    if not math.isfinite(scale) or scale <= 0:
        return MIN_PX_PER_MM
    return min(max(scale, MIN_PX_PER_MM), MAX_PX_PER_MM)


@dataclass(frozen=True)
class GeometryMapper:
    """Maps mm coordinates onto a width x height pixel canvas."""

    width: int
    height: int
    scale: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "scale", clamp_scale(self.scale))

    @property
    def center_x(self) -> float:
        return self.width / 2

    @property
    def center_y(self) -> float:
        return self.height / 2

    def to_pixel_x(self, mm: float) -> int:
        return round(self.center_x + mm * self.scale)

    def to_pixel_y(self, mm: float) -> int:
        return round(self.center_y - mm * self.scale)

    def to_mm_x(self, px: float) -> float:
        return (px - self.center_x) / self.scale

    def to_mm_y(self, px: float) -> float:
        return (self.center_y - px) / self.scale
