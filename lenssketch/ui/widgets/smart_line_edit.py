"""Smart line edit — lenient numeric text field for table cells.

Accepts both '.' and ',' as decimal separator and never rejects input:
the raw text is forwarded and the store substitutes a fallback when it
does not parse. On focus-out the field is reformatted from the value
that was actually stored.
"""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QFocusEvent
from PyQt6.QtWidgets import QLineEdit, QWidget

from lenssketch.core.parsing import parse_number


def format_number(value: float) -> str:
    """Compact display: up to 4 decimals, trailing zeros dropped."""
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


class SmartLineEdit(QLineEdit):
    """QLineEdit that reports free-form numeric text on every edit.

    Signals:
        value_edited(str): Raw text, emitted on each keystroke.
    """

    value_edited = pyqtSignal(str)

    def __init__(self, value: float = 0.0, fallback: float = 0.0,
                 parent: QWidget | None = None):
        super().__init__(parent)
        self._fallback = fallback
        self._value = value
        self.setText(format_number(value))
        self.textEdited.connect(self._on_text_edited)

    def value(self) -> float:
        return parse_number(self.text(), self._fallback)

    def set_value(self, value: float) -> None:
        """Update display without emitting value_edited."""
        self._value = value
        if not self.hasFocus():
            self.setText(format_number(value))

    def _on_text_edited(self, text: str) -> None:
        self.value_edited.emit(text)

    def focusOutEvent(self, event: QFocusEvent) -> None:
        self._value = self.value()
        self.setText(format_number(self._value))
        super().focusOutEvent(event)
