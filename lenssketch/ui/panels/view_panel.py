"""View panel — sensor, mount and display parameters.

Left dock form. Values are pushed to the controller as they change and
refreshed from the session on wholesale replacement (import, undo).
"""

from __future__ import annotations

from PyQt6.QtCore import QSignalBlocker
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFormLayout,
    QGroupBox,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from lenssketch.constants import (
    MAX_PX_PER_MM,
    MAX_RAY_COUNT,
    MIN_PX_PER_MM,
    MIN_RAY_COUNT,
    VIEW_PARAMETER_LIMITS,
)
from lenssketch.models.lens import WavelengthPreset
from lenssketch.ui.canvas.lens_controller import LensController
from lenssketch.ui.widgets.smart_spinbox import SmartDoubleSpinBox

_WAVELENGTH_TITLES = {
    WavelengthPreset.D: "d (587.6 nm)",
    WavelengthPreset.G: "g (435.8 nm)",
    WavelengthPreset.C: "C (656.3 nm)",
}


def _limited_spin(name: str, suffix: str, decimals: int = 2) -> SmartDoubleSpinBox:
    lo, hi = VIEW_PARAMETER_LIMITS[name]
    return SmartDoubleSpinBox(minimum=lo, maximum=hi, decimals=decimals, suffix=suffix)


class ViewPanel(QWidget):
    """Sensor / mount / display settings form."""

    def __init__(self, controller: LensController, parent: QWidget | None = None):
        super().__init__(parent)
        self._controller = controller
        self._build_ui()
        self._connect_signals()
        self._refresh()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        # --- Camera ---
        camera = QGroupBox("Camera")
        form = QFormLayout(camera)
        self._spin_sensor_w = _limited_spin("sensor_width", " mm")
        self._spin_sensor_h = _limited_spin("sensor_height", " mm")
        self._spin_flange = _limited_spin("flange_distance", " mm")
        form.addRow("Sensor width", self._spin_sensor_w)
        form.addRow("Sensor height", self._spin_sensor_h)
        form.addRow("Flange distance", self._spin_flange)
        layout.addWidget(camera)

        # --- Estimate ---
        estimate = QGroupBox("Estimate")
        form = QFormLayout(estimate)
        self._spin_field = _limited_spin("field_angle", " °", decimals=1)
        self._spin_rays = QSpinBox()
        self._spin_rays.setRange(MIN_RAY_COUNT, MAX_RAY_COUNT)
        self._combo_wavelength = QComboBox()
        for preset, title in _WAVELENGTH_TITLES.items():
            self._combo_wavelength.addItem(title, preset)
        self._check_stop_aware = QCheckBox("Stop-aware estimate")
        form.addRow("Field angle", self._spin_field)
        form.addRow("Ray count", self._spin_rays)
        form.addRow("Wavelength", self._combo_wavelength)
        form.addRow(self._check_stop_aware)
        layout.addWidget(estimate)

        # --- Display ---
        display = QGroupBox("Display")
        form = QFormLayout(display)
        self._spin_scale = SmartDoubleSpinBox(
            minimum=MIN_PX_PER_MM, maximum=MAX_PX_PER_MM, suffix=" px/mm",
        )
        self._check_apertures = QCheckBox("Show apertures")
        self._check_axis = QCheckBox("Show axis")
        self._check_mount = QCheckBox("Show PL mount")
        form.addRow("Scale", self._spin_scale)
        form.addRow(self._check_apertures)
        form.addRow(self._check_axis)
        form.addRow(self._check_mount)
        layout.addWidget(display)

        layout.addStretch()

    def _connect_signals(self) -> None:
        ctrl = self._controller
        ctrl.view_changed.connect(self._refresh)
        ctrl.lens_changed.connect(self._refresh)

        set_param = ctrl.set_view_parameter
        self._spin_sensor_w.valueChanged.connect(lambda v: set_param("sensor_width", v))
        self._spin_sensor_h.valueChanged.connect(lambda v: set_param("sensor_height", v))
        self._spin_flange.valueChanged.connect(lambda v: set_param("flange_distance", v))
        self._spin_field.valueChanged.connect(lambda v: set_param("field_angle", v))
        self._spin_rays.valueChanged.connect(lambda v: set_param("ray_count", v))
        self._spin_scale.valueChanged.connect(lambda v: set_param("px_per_mm", v))
        self._combo_wavelength.currentIndexChanged.connect(
            lambda i: set_param("wavelength", self._combo_wavelength.itemData(i)),
        )
        self._check_stop_aware.toggled.connect(lambda c: set_param("stop_aware", c))
        self._check_apertures.toggled.connect(lambda c: set_param("show_apertures", c))
        self._check_axis.toggled.connect(lambda c: set_param("show_axis", c))
        self._check_mount.toggled.connect(lambda c: set_param("show_mount", c))

    def _refresh(self) -> None:
        view = self._controller.view
        for spin, value in (
            (self._spin_sensor_w, view.sensor_width),
            (self._spin_sensor_h, view.sensor_height),
            (self._spin_flange, view.flange_distance),
            (self._spin_field, view.field_angle),
            (self._spin_scale, view.px_per_mm),
        ):
            with QSignalBlocker(spin):
                spin.setValue(value)
        with QSignalBlocker(self._spin_rays):
            self._spin_rays.setValue(view.ray_count)
        with QSignalBlocker(self._combo_wavelength):
            self._combo_wavelength.setCurrentIndex(
                self._combo_wavelength.findData(view.wavelength),
            )
        for check, value in (
            (self._check_stop_aware, view.stop_aware),
            (self._check_apertures, view.show_apertures),
            (self._check_axis, view.show_axis),
            (self._check_mount, view.show_mount),
        ):
            with QSignalBlocker(check):
                check.setChecked(value)
