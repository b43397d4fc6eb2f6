"""Metrics panel — EFL / BFL / vignetting badges.

The values are placeholder estimates over total thickness, so the
badges are labelled as approximate.
"""

from __future__ import annotations

from PyQt6.QtWidgets import QHBoxLayout, QLabel, QWidget

from lenssketch.core.metrics import LensMetrics
from lenssketch.ui.canvas.lens_controller import LensController
from lenssketch.ui.styles.colors import SUCCESS, TEXT_PRIMARY, WARNING

_BADGE_STYLE = (
    "background: #1E293B; border: 1px solid #334155; border-radius: 9px;"
    " padding: 2px 8px; font-size: 8pt; color: {color};"
)


class MetricsPanel(QWidget):
    """Three badges: EFL ≈, BFL ≈, Vignetting."""

    def __init__(self, controller: LensController, parent: QWidget | None = None):
        super().__init__(parent)
        self._controller = controller

        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 2, 4, 2)
        layout.setSpacing(6)
        self._efl_label = QLabel()
        self._bfl_label = QLabel()
        self._vig_label = QLabel()
        for lbl in (self._efl_label, self._bfl_label, self._vig_label):
            layout.addWidget(lbl)
        layout.addStretch()

        controller.metrics_changed.connect(self.update_metrics)
        self.update_metrics(controller.metrics)

    @property
    def texts(self) -> tuple[str, str, str]:
        return self._efl_label.text(), self._bfl_label.text(), self._vig_label.text()

    def update_metrics(self, metrics: LensMetrics) -> None:
        self._efl_label.setText(f"EFL ≈ {metrics.efl:.1f} mm")
        self._bfl_label.setText(f"BFL ≈ {metrics.bfl:.1f} mm")
        self._vig_label.setText(f"Vignetting: {metrics.vignetting}")
        self._efl_label.setStyleSheet(_BADGE_STYLE.format(color=TEXT_PRIMARY))
        self._bfl_label.setStyleSheet(_BADGE_STYLE.format(color=TEXT_PRIMARY))
        self._vig_label.setStyleSheet(
            _BADGE_STYLE.format(color=WARNING if metrics.vignetted else SUCCESS),
        )
