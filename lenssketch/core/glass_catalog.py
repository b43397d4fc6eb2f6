"""Glass catalog — fixed optical glass reference table.

Read-only name -> (nd, Vd) mapping. Only the glass name is persisted in
lens documents; indices are looked up here for display.

Reference: Schott / Ohara catalog nd and Abbe numbers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lenssketch.constants import DEFAULT_GLASS
from lenssketch.models.lens import WavelengthPreset

logger = logging.getLogger(__name__)

# Index offsets for the g / C presets, scaled by dispersion 1/Vd
_G_LINE_SPREAD = 35.0
_C_LINE_SPREAD = 20.0
_MIN_ABBE_FOR_SPREAD = 10.0


@dataclass(frozen=True)
class Glass:
    """Catalog glass.

    Attributes:
        name: Catalog key ("BK7", "AIR", ...).
        nd: Refractive index at the d-line (>= 1).
        vd: Abbe number (> 0).
    """
    name: str
    nd: float
    vd: float

    @property
    def is_air(self) -> bool:
        return self.name == DEFAULT_GLASS

    def index_at(self, preset: WavelengthPreset = WavelengthPreset.D) -> float:
        """Approximate index for a wavelength preset.

        Linear dispersion estimate from Vd; air is always 1.0.
        """
        if self.is_air:
            return 1.0
        strength = 1.0 / max(_MIN_ABBE_FOR_SPREAD, self.vd)
        match preset:
            case WavelengthPreset.G:
                return self.nd + _G_LINE_SPREAD * strength
            case WavelengthPreset.C:
                return self.nd - _C_LINE_SPREAD * strength
            case _:
                return self.nd


GLASSES: dict[str, Glass] = {
    g.name: g
    for g in (
        Glass("AIR", 1.0, 999.0),
        Glass("BK7", 1.5168, 64.17),
        Glass("F2", 1.6200, 36.37),
        Glass("SF10", 1.7283, 28.41),
        Glass("LASF35", 1.8061, 25.4),
        Glass("LASFN31", 1.8052, 25.3),
        Glass("LF5", 1.5800, 40.0),
    )
}

GLASS_NAMES: list[str] = list(GLASSES)


def is_known_glass(name: str) -> bool:
    return name in GLASSES


def get_glass(name: str) -> Glass:
    """Look up a glass by name.

    Raises:
        KeyError: If the name is not in the catalog.
    """
    return GLASSES[name]


def resolve_glass_name(name: object) -> str:
    """Return ``name`` if it is a catalog glass, otherwise AIR."""
    text = str(name).strip() if name is not None else ""
    if text in GLASSES:
        return text
    logger.warning("Unknown glass %r, using %s", name, DEFAULT_GLASS)
    return DEFAULT_GLASS
