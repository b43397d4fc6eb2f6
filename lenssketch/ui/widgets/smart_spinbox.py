"""Smart double spin box — dual decimal separator support.

Used for the view parameter form (sensor size, flange, field angle).
Typing either '.' or ',' works on any keyboard layout; text that does
not parse falls back to the spin box minimum.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QKeyEvent, QValidator
from PyQt6.QtWidgets import QDoubleSpinBox, QWidget

from lenssketch.core.parsing import parse_number


class SmartDoubleSpinBox(QDoubleSpinBox):
    """QDoubleSpinBox that accepts both '.' and ',' as decimal separator."""

    def __init__(self, parent: QWidget | None = None,
                 minimum: float = 0.0, maximum: float = 1000.0,
                 decimals: int = 2, suffix: str = ""):
        super().__init__(parent)
        self.setRange(minimum, maximum)
        self.setDecimals(decimals)
        if suffix:
            self.setSuffix(suffix)
        self.setKeyboardTracking(False)

    def _alt_separator(self) -> tuple[str, str]:
        sep = self.locale().decimalPoint()
        return sep, "." if sep == "," else ","

    def _strip_affixes(self, text: str) -> str:
        clean = text.strip()
        sfx = self.suffix()
        if sfx and clean.endswith(sfx):
            clean = clean[: -len(sfx)]
        pfx = self.prefix()
        if pfx and clean.startswith(pfx):
            clean = clean[len(pfx):]
        return clean

    def textFromValue(self, value: float) -> str:
        sep, _ = self._alt_separator()
        return f"{value:.{self.decimals()}f}".replace(".", sep)

    def valueFromText(self, text: str) -> float:
        return parse_number(self._strip_affixes(text), self.minimum())

    def validate(self, text: str, pos: int) -> tuple[QValidator.State, str, int]:
        sep, alt = self._alt_separator()
        return super().validate(text.replace(alt, sep), pos)

    def fixup(self, text: str) -> str:
        sep, alt = self._alt_separator()
        return super().fixup(text.replace(alt, sep))

    def keyPressEvent(self, event: QKeyEvent) -> None:
        """Convert the non-locale separator key to the locale separator."""
        sep, alt = self._alt_separator()
        if event.text() == alt:
            key = Qt.Key.Key_Comma if sep == "," else Qt.Key.Key_Period
            super().keyPressEvent(QKeyEvent(event.type(), key, event.modifiers(), sep))
            return
        super().keyPressEvent(event)
