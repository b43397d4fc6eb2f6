"""Schematic builder — lens cross-section as a list of drawing primitives.

Produces back-to-front primitives in canvas pixel coordinates:

    background -> axis -> sensor + ruler -> mount -> per-surface glass

The curvature "bulge" is a cosmetic quadratic curve, not sphere geometry.
Painting is done by ui.canvas.schematic_painter; this module has no Qt
dependency so the layout is testable headless.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence, Union

import numpy as np

from lenssketch.constants import (
    AXIS_EXTENT_MM,
    BULGE_MAX_FACTOR,
    BULGE_MIN_FACTOR,
    BULGE_PX,
    BULGE_RADIUS_DIVISOR,
    CURVE_SAMPLES,
    MOUNT_CLEARANCE_MM,
    MOUNT_DEPTH_MM,
    MOUNT_HALF_HEIGHT_MM,
    MOUNT_INSET_MM,
    RULER_BASELINE_MM,
    RULER_LENGTH_MM,
    RULER_MAJOR_STEP_MM,
    RULER_MAJOR_TICK_PX,
    RULER_MINOR_STEP_MM,
    RULER_MINOR_TICK_PX,
)
from lenssketch.core.geometry_mapper import GeometryMapper
from lenssketch.models.lens import Surface, ViewParameters

_LABEL_GAP_PX = 6.0
_RULER_TEXT_GAP_PX = 12.0


# =====================================================================
# Primitives
# =====================================================================


@dataclass(frozen=True)
class Background:
    width: int
    height: int
    role: str = "background"


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    role: str
    dashed: bool = False


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    role: str


@dataclass(frozen=True)
class Label:
    x: float
    y: float
    text: str
    role: str


@dataclass(frozen=True)
class Polygon:
    """Sampled outline. ``glass`` set means a translucent filled body."""
    points: list[tuple[float, float]] = field(default_factory=list)
    role: str = "outline"
    closed: bool = False
    glass: str | None = None


Primitive = Union[Background, Line, Rect, Label, Polygon]


# =====================================================================
# Geometry helpers
# =====================================================================


def bulge_px(radius: float) -> float:
    """Horizontal curve offset [px] suggesting curvature.

    0 for flat surfaces, else sign(R) * clamp(|R| / 80, 0.6, 2.6) * 18.
    """
    if radius == 0 or not math.isfinite(radius):
        return 0.0
    factor = min(max(abs(radius) / BULGE_RADIUS_DIVISOR, BULGE_MIN_FACTOR), BULGE_MAX_FACTOR)
    return math.copysign(factor * BULGE_PX, radius)


def quad_curve(
    start: tuple[float, float],
    control: tuple[float, float],
    end: tuple[float, float],
    samples: int = CURVE_SAMPLES,
) -> list[tuple[float, float]]:
    """Sample a quadratic Bezier curve into ``samples + 1`` points."""
    t = np.linspace(0.0, 1.0, samples + 1)
    p0, p1, p2 = (np.asarray(p, dtype=float) for p in (start, control, end))
    pts = (
        np.outer((1 - t) ** 2, p0)
        + np.outer(2 * (1 - t) * t, p1)
        + np.outer(t ** 2, p2)
    )
    return [(float(x), float(y)) for x, y in pts]


def surface_curve(
    mapper: GeometryMapper, x_mm: float, semi_aperture: float, bulge: float,
) -> list[tuple[float, float]]:
    """Top-to-bottom curve at ``x_mm`` whose midpoint is pulled by ``-bulge`` px."""
    px = mapper.to_pixel_x(x_mm)
    top = mapper.to_pixel_y(semi_aperture)
    bottom = mapper.to_pixel_y(-semi_aperture)
    mid = mapper.to_pixel_y(0.0)
    return quad_curve((px, top), (px - bulge, mid), (px, bottom))


def surface_positions(surfaces: Sequence[Surface], flange: float) -> list[float]:
    """Vertex x [mm] of each surface; the first sits 10 mm left of the mount."""
    x = -flange - MOUNT_CLEARANCE_MM
    positions = []
    for s in surfaces:
        positions.append(x)
        x += s.thickness
    return positions


# =====================================================================
# Layers
# =====================================================================


def _axis_layer(mapper: GeometryMapper) -> list[Primitive]:
    y = mapper.to_pixel_y(0.0)
    extent = max(AXIS_EXTENT_MM, mapper.width / mapper.scale)
    return [Line(
        mapper.to_pixel_x(-extent), y, mapper.to_pixel_x(extent), y,
        "axis", dashed=True,
    )]


def _sensor_layer(mapper: GeometryMapper, view: ViewParameters) -> list[Primitive]:
    x = mapper.to_pixel_x(0.0)
    half_h = view.sensor_height / 2
    prims: list[Primitive] = [
        Line(x, mapper.to_pixel_y(half_h), x, mapper.to_pixel_y(-half_h), "sensor"),
    ]

    # Ruler runs left from the sensor plane: 0..60 mm
    base = mapper.to_pixel_y(RULER_BASELINE_MM)
    prims.append(Line(
        mapper.to_pixel_x(-RULER_LENGTH_MM), base, x, base, "ruler",
    ))
    for mm in range(0, RULER_LENGTH_MM + 1, RULER_MINOR_STEP_MM):
        tx = mapper.to_pixel_x(-mm)
        major = mm % RULER_MAJOR_STEP_MM == 0
        tick = RULER_MAJOR_TICK_PX if major else RULER_MINOR_TICK_PX
        prims.append(Line(tx, base, tx, base - tick, "ruler"))
        if major:
            prims.append(Label(tx, base + _RULER_TEXT_GAP_PX, str(mm), "ruler_text"))
    return prims


def _mount_layer(mapper: GeometryMapper, view: ViewParameters) -> list[Primitive]:
    flange_x = -view.flange_distance
    outer_left = mapper.to_pixel_x(flange_x - MOUNT_DEPTH_MM)
    outer_right = mapper.to_pixel_x(flange_x)
    outer_top = mapper.to_pixel_y(MOUNT_HALF_HEIGHT_MM)
    outer_bottom = mapper.to_pixel_y(-MOUNT_HALF_HEIGHT_MM)

    inner_half = MOUNT_HALF_HEIGHT_MM - MOUNT_INSET_MM
    inner_left = mapper.to_pixel_x(flange_x - MOUNT_DEPTH_MM + MOUNT_INSET_MM)
    inner_right = mapper.to_pixel_x(flange_x - MOUNT_INSET_MM)
    inner_top = mapper.to_pixel_y(inner_half)
    inner_bottom = mapper.to_pixel_y(-inner_half)

    return [
        Rect(outer_left, outer_top, outer_right - outer_left, outer_bottom - outer_top, "mount"),
        Rect(inner_left, inner_top, inner_right - inner_left, inner_bottom - inner_top, "mount"),
        Label(outer_right, outer_top - _LABEL_GAP_PX, "PL", "mount_text"),
    ]


def _surface_layer(
    mapper: GeometryMapper, surfaces: Sequence[Surface], view: ViewParameters,
) -> list[Primitive]:
    prims: list[Primitive] = []
    positions = surface_positions(surfaces, view.flange_distance)

    for i, s in enumerate(surfaces):
        x_mm = positions[i]
        px = mapper.to_pixel_x(x_mm)
        bulge = bulge_px(s.radius)

        if view.show_apertures:
            prims.append(Line(
                px, mapper.to_pixel_y(s.semi_aperture),
                px, mapper.to_pixel_y(-s.semi_aperture),
                "aperture", dashed=True,
            ))

        front = surface_curve(mapper, x_mm, s.semi_aperture, bulge)
        if i + 1 < len(surfaces):
            nxt = surfaces[i + 1]
            # Mirrored back curve: opposite bulge, bottom-to-top
            back = surface_curve(mapper, x_mm + s.thickness, nxt.semi_aperture, -bulge)
            back.reverse()
            prims.append(Polygon(front + back, "body", closed=True, glass=s.glass_after))
        else:
            prims.append(Polygon(front, "outline"))

        top = min(y for _, y in front)
        prims.append(Label(px, top - _LABEL_GAP_PX, str(i + 1), "label"))

    return prims


def build_schematic(
    surfaces: Sequence[Surface],
    view: ViewParameters,
    width: int,
    height: int,
) -> list[Primitive]:
    """Build the full schematic for a canvas of ``width`` x ``height`` px.

    Returns:
        Primitives in paint order (back to front).
    """
    mapper = GeometryMapper(width, height, view.px_per_mm)
    prims: list[Primitive] = [Background(width, height)]
    if view.show_axis:
        prims.extend(_axis_layer(mapper))
    prims.extend(_sensor_layer(mapper, view))
    if view.show_mount:
        prims.extend(_mount_layer(mapper, view))
    prims.extend(_surface_layer(mapper, surfaces, view))
    return prims
