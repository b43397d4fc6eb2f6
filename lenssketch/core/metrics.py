"""Metrics estimator — placeholder EFL / BFL / vignetting badges.

These are fixed display formulas over aggregate thickness, not optics:

    efl = clamp(sum(t) * 0.85 * (1.0 if stop_aware else 0.9) + 25, 10, 300)
    bfl = clamp(flange - 19 + sum(t) * 0.03, -200, 200)
    vignetting = any(ap < 5)

Pure Python (no Qt dependency).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from lenssketch.constants import (
    BFL_FLANGE_OFFSET_MM,
    BFL_MAX_MM,
    BFL_MIN_MM,
    BFL_THICKNESS_FACTOR,
    EFL_MAX_MM,
    EFL_MIN_MM,
    EFL_NOT_STOP_AWARE_FACTOR,
    EFL_OFFSET_MM,
    EFL_THICKNESS_FACTOR,
    VIGNETTING_APERTURE_MM,
)
from lenssketch.models.lens import Surface


def _clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


@dataclass(frozen=True)
class LensMetrics:
    """Display-only summary values [mm]."""
    efl: float
    bfl: float
    vignetted: bool

    @property
    def vignetting(self) -> str:
        return "yes" if self.vignetted else "no"


def estimate_efl(total_thickness: float, stop_aware: bool) -> float:
    factor = 1.0 if stop_aware else EFL_NOT_STOP_AWARE_FACTOR
    return _clamp(
        total_thickness * EFL_THICKNESS_FACTOR * factor + EFL_OFFSET_MM,
        EFL_MIN_MM, EFL_MAX_MM,
    )


def estimate_bfl(total_thickness: float, flange: float) -> float:
    return _clamp(
        flange - BFL_FLANGE_OFFSET_MM + total_thickness * BFL_THICKNESS_FACTOR,
        BFL_MIN_MM, BFL_MAX_MM,
    )


def is_vignetted(surfaces: Sequence[Surface]) -> bool:
    return any(s.semi_aperture < VIGNETTING_APERTURE_MM for s in surfaces)


def compute_metrics(
    surfaces: Sequence[Surface], flange: float, stop_aware: bool,
) -> LensMetrics:
    total = sum(s.thickness for s in surfaces)
    return LensMetrics(
        efl=estimate_efl(total, stop_aware),
        bfl=estimate_bfl(total, flange),
        vignetted=is_vignetted(surfaces),
    )


class MetricsEstimator:
    """Memoizing wrapper around compute_metrics.

    The cache key covers every input the formulas read (thicknesses,
    apertures, flange, stop-aware flag), so edits that only touch radius,
    glass or labels reuse the last result.
    """

    def __init__(self) -> None:
        self._key: tuple | None = None
        self._result: LensMetrics | None = None
        self.compute_count = 0

    def estimate(
        self, surfaces: Sequence[Surface], flange: float, stop_aware: bool,
    ) -> LensMetrics:
        key = (
            tuple((s.thickness, s.semi_aperture) for s in surfaces),
            flange,
            bool(stop_aware),
        )
        if self._result is None or key != self._key:
            self._result = compute_metrics(surfaces, flange, stop_aware)
            self._key = key
            self.compute_count += 1
        return self._result

    def invalidate(self) -> None:
        self._key = None
        self._result = None
