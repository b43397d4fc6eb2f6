"""Lens data models — surfaces, view parameters and the editing session.

All UI-facing dimensions are in mm, angles in degrees.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from lenssketch.constants import (
    DEFAULT_FIELD_ANGLE_DEG,
    DEFAULT_FLANGE_MM,
    DEFAULT_GLASS,
    DEFAULT_PX_PER_MM,
    DEFAULT_RAY_COUNT,
    DEFAULT_SENSOR_HEIGHT_MM,
    DEFAULT_SENSOR_WIDTH_MM,
    NEW_SURFACE_APERTURE,
    NEW_SURFACE_RADIUS,
    NEW_SURFACE_THICKNESS,
)


class WavelengthPreset(Enum):
    """Display wavelength used for the glass index tooltip.

    D: helium d-line (587.6 nm), catalog nd.
    G: mercury g-line (435.8 nm), blue side.
    C: hydrogen C-line (656.3 nm), red side.
    """
    D = "d"
    G = "g"
    C = "c"


@dataclass
class Surface:
    """One optical interface of the prescription.

    Attributes:
        radius: Signed radius of curvature [mm]. 0 means flat.
        thickness: Axial distance to the next surface vertex [mm].
        semi_aperture: Clear semi-diameter [mm].
        glass_after: Glass table key of the medium after this surface.
        is_stop: True for the aperture stop (at most one per lens).
        label: Free-text row tag (e.g. "OBJ", "AST", "IMS").
    """
    radius: float = NEW_SURFACE_RADIUS
    thickness: float = NEW_SURFACE_THICKNESS
    semi_aperture: float = NEW_SURFACE_APERTURE
    glass_after: str = DEFAULT_GLASS
    is_stop: bool = False
    label: str = ""

    def copy(self) -> Surface:
        return replace(self)


@dataclass
class ViewParameters:
    """Session-scoped view and estimate settings.

    Attributes:
        sensor_width: Sensor width [mm].
        sensor_height: Sensor height [mm].
        flange_distance: Mount reference plane to sensor [mm].
        field_angle: Field angle [degree]. Display only.
        ray_count: Ray count. Display only.
        px_per_mm: Canvas scale [px/mm].
        stop_aware: Use the stop-aware focal estimate.
        show_apertures: Draw aperture indicators.
        show_axis: Draw the optical axis.
        show_mount: Draw the lens mount indicator.
        wavelength: Wavelength preset for index display.
    """
    sensor_width: float = DEFAULT_SENSOR_WIDTH_MM
    sensor_height: float = DEFAULT_SENSOR_HEIGHT_MM
    flange_distance: float = DEFAULT_FLANGE_MM
    field_angle: float = DEFAULT_FIELD_ANGLE_DEG
    ray_count: int = DEFAULT_RAY_COUNT
    px_per_mm: float = DEFAULT_PX_PER_MM
    stop_aware: bool = True
    show_apertures: bool = True
    show_axis: bool = True
    show_mount: bool = True
    wavelength: WavelengthPreset = WavelengthPreset.D


@dataclass
class LensSession:
    """The editing session: one named prescription plus its view settings.

    ``surfaces`` is the single source of truth for both the table and the
    schematic. It is mutated in place by row edits and replaced wholesale
    (by content) on new / preset / import.
    """
    name: str = "No name"
    surfaces: list[Surface] = field(default_factory=list)
    view: ViewParameters = field(default_factory=ViewParameters)

    @property
    def stop_index(self) -> int:
        """Index of the stop surface, or -1 when none is flagged."""
        for i, s in enumerate(self.surfaces):
            if s.is_stop:
                return i
        return -1
