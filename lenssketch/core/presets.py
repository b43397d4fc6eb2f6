"""Preset lens factories.

Each factory returns a fresh LensSession with default view parameters.
Dimensions in mm.
"""

from __future__ import annotations

from typing import Callable

from lenssketch.models.lens import LensSession, Surface


def create_demo_lens() -> LensSession:
    """Eleven-surface double-Gauss-like demo prescription.

    Layout (R / t / ap / glass after)::

        OBJ    0      10   22   AIR
        1     42      10   22   LASF35
        2   -140      10   21   AIR
        3    -30      10   19   LASFN31
        4     65      10   14   AIR       <- stop
        5     12.42   10    8.5 AIR
        AST    0       6.4  8.5 AIR
        7    -18.93   10   11   LF5
        8     59.6    10   13   LASFN31
        9    -40.49   10   13   AIR
        IMS    0       0   12   AIR
    """
    rows = [
        ("OBJ", 0.0, 10.0, 22.0, "AIR", False),
        ("1", 42.0, 10.0, 22.0, "LASF35", False),
        ("2", -140.0, 10.0, 21.0, "AIR", False),
        ("3", -30.0, 10.0, 19.0, "LASFN31", False),
        ("4", 65.0, 10.0, 14.0, "AIR", True),
        ("5", 12.42, 10.0, 8.5, "AIR", False),
        ("AST", 0.0, 6.4, 8.5, "AIR", False),
        ("7", -18.93, 10.0, 11.0, "LF5", False),
        ("8", 59.6, 10.0, 13.0, "LASFN31", False),
        ("9", -40.49, 10.0, 13.0, "AIR", False),
        ("IMS", 0.0, 0.0, 12.0, "AIR", False),
    ]
    return LensSession(
        name="No name",
        surfaces=[
            Surface(
                radius=r, thickness=t, semi_aperture=ap,
                glass_after=glass, is_stop=stop, label=label,
            )
            for label, r, t, ap, glass, stop in rows
        ],
    )


def create_singlet_lens() -> LensSession:
    """Symmetric BK7 biconvex singlet, stop on the front surface."""
    return LensSession(
        name="BK7 singlet",
        surfaces=[
            Surface(50.0, 6.0, 15.0, "BK7", True, "1"),
            Surface(-50.0, 40.0, 15.0, "AIR", False, "2"),
            Surface(0.0, 0.0, 12.0, "AIR", False, "IMS"),
        ],
    )


def create_blank_lens() -> LensSession:
    """Single flat AIR surface (File > New)."""
    return LensSession(name="No name", surfaces=[Surface()])


PRESETS: dict[str, Callable[[], LensSession]] = {
    "demo": create_demo_lens,
    "singlet": create_singlet_lens,
    "blank": create_blank_lens,
}

PRESET_TITLES: dict[str, str] = {
    "demo": "Demo lens",
    "singlet": "BK7 singlet",
    "blank": "Blank",
}


def create_preset(name: str) -> LensSession:
    """Factory: create a preset lens by key.

    Raises:
        KeyError: If the preset name is unknown.
    """
    return PRESETS[name]()
