"""Surface list store — ordered, in-memory prescription rows.

Source of truth for both the table editor and the schematic. All
operations are synchronous; out-of-range indices are no-ops that
return False so callers can skip the repaint.

Pure Python class (no Qt dependency).
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from lenssketch.constants import (
    APERTURE_FALLBACK,
    RADIUS_FALLBACK,
    THICKNESS_FALLBACK,
)
from lenssketch.core.parsing import parse_number
from lenssketch.models.lens import Surface

# Editable numeric field -> fallback used when input does not parse
NUMERIC_FIELDS: dict[str, float] = {
    "radius": RADIUS_FALLBACK,
    "thickness": THICKNESS_FALLBACK,
    "semi_aperture": APERTURE_FALLBACK,
}


class SurfaceStore:
    """Ordered list of Surface records with single-stop enforcement.

    The store wraps a list it does not copy, so a LensSession and its
    store always see the same rows::

        store = SurfaceStore(session.surfaces)
        store.append()
        store.set_field(0, "radius", "12,5")
    """

    def __init__(self, surfaces: list[Surface] | None = None) -> None:
        self._surfaces: list[Surface] = surfaces if surfaces is not None else []

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def surfaces(self) -> list[Surface]:
        return self._surfaces

    def __len__(self) -> int:
        return len(self._surfaces)

    def __iter__(self) -> Iterator[Surface]:
        return iter(self._surfaces)

    def __getitem__(self, index: int) -> Surface:
        return self._surfaces[index]

    def valid_index(self, index: int) -> bool:
        return 0 <= index < len(self._surfaces)

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def append(self, surface: Surface | None = None) -> int:
        """Append a surface (defaults: flat, t=3, ap=14, AIR). Returns its index."""
        self._surfaces.append(surface if surface is not None else Surface())
        if surface is not None and surface.is_stop:
            self.enforce_single_stop(keep=len(self._surfaces) - 1)
        return len(self._surfaces) - 1

    def remove_at(self, index: int) -> bool:
        if not self.valid_index(index):
            return False
        del self._surfaces[index]
        return True

    def swap(self, i: int, j: int) -> bool:
        if i == j or not (self.valid_index(i) and self.valid_index(j)):
            return False
        self._surfaces[i], self._surfaces[j] = self._surfaces[j], self._surfaces[i]
        return True

    def move_up(self, index: int) -> bool:
        """Swap with the previous row. No-op on the first row."""
        return self.swap(index, index - 1) if index > 0 else False

    def move_down(self, index: int) -> bool:
        """Swap with the next row. No-op on the last row."""
        return self.swap(index, index + 1)

    def replace_all(self, surfaces: Iterable[Surface]) -> None:
        """Replace the contents in place, keeping the list identity."""
        self._surfaces[:] = [s.copy() for s in surfaces]
        self.enforce_single_stop()

    # ------------------------------------------------------------------
    # Field updates
    # ------------------------------------------------------------------

    def set_field(self, index: int, field: str, value: Any) -> bool:
        """Update a numeric field from free-form text.

        Unparsable input is replaced by the field's fallback
        (0 for radius and thickness, 10 for aperture).

        Raises:
            KeyError: If ``field`` is not a numeric surface field.
        """
        fallback = NUMERIC_FIELDS[field]
        if not self.valid_index(index):
            return False
        setattr(self._surfaces[index], field, parse_number(value, fallback))
        return True

    def set_glass(self, index: int, glass: str) -> bool:
        if not self.valid_index(index):
            return False
        self._surfaces[index].glass_after = glass
        return True

    def set_label(self, index: int, label: str) -> bool:
        if not self.valid_index(index):
            return False
        self._surfaces[index].label = str(label)
        return True

    def set_stop(self, index: int, checked: bool) -> bool:
        """Set or clear the stop flag.

        Setting it clears the flag on every other surface; clearing only
        touches this row.
        """
        if not self.valid_index(index):
            return False
        if checked:
            for i, s in enumerate(self._surfaces):
                s.is_stop = i == index
        else:
            self._surfaces[index].is_stop = False
        return True

    def enforce_single_stop(self, keep: int | None = None) -> int:
        """Leave at most one stop flag set.

        Args:
            keep: Index whose flag wins. None keeps the first flagged row.

        Returns:
            Index of the remaining stop, or -1.
        """
        if keep is None or not self.valid_index(keep) or not self._surfaces[keep].is_stop:
            keep = next(
                (i for i, s in enumerate(self._surfaces) if s.is_stop), -1,
            )
        for i, s in enumerate(self._surfaces):
            if i != keep:
                s.is_stop = False
        return keep
