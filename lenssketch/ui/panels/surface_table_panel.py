"""Surface table panel — one editable row per surface.

Columns: #, type, R, t, ap, glass, stop, move up / move down / delete.
Every edit is forwarded to the LensController immediately; the table is
rebuilt only when row structure or another row's stop box changes.
"""

from __future__ import annotations

from PyQt6.QtCore import QSignalBlocker, Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from lenssketch.constants import APERTURE_FALLBACK, RADIUS_FALLBACK, THICKNESS_FALLBACK
from lenssketch.core.glass_catalog import GLASS_NAMES, get_glass, is_known_glass
from lenssketch.models.lens import Surface, WavelengthPreset
from lenssketch.ui.canvas.lens_controller import LensController
from lenssketch.ui.styles.colors import GLASS_COLORS
from lenssketch.ui.widgets.smart_line_edit import SmartLineEdit

_COLUMN_WIDTHS = {
    "index": 22,
    "type": 44,
    "number": 60,
    "glass": 84,
    "stop": 36,
    "button": 22,
}


def glass_tooltip(name: str, preset: WavelengthPreset) -> str:
    if not is_known_glass(name):
        return name
    glass = get_glass(name)
    return (
        f"{name}: n{preset.value} = {glass.index_at(preset):.4f}, "
        f"Vd = {glass.vd:g}"
    )


class SurfaceRowWidget(QFrame):
    """Single surface row."""

    label_edited = pyqtSignal(int, str)
    field_edited = pyqtSignal(int, str, str)  # index, field, raw text
    glass_changed = pyqtSignal(int, str)
    stop_toggled = pyqtSignal(int, bool)
    move_up_clicked = pyqtSignal(int)
    move_down_clicked = pyqtSignal(int)
    delete_clicked = pyqtSignal(int)

    def __init__(
        self, index: int, surface: Surface, count: int,
        wavelength: WavelengthPreset = WavelengthPreset.D,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self._index = index
        self._wavelength = wavelength
        self.setStyleSheet("""
            SurfaceRowWidget {
                background: #1E293B;
                border: 1px solid #334155;
                border-radius: 3px;
            }
            SurfaceRowWidget:hover {
                border: 1px solid #3B82F6;
            }
        """)

        row = QHBoxLayout(self)
        row.setContentsMargins(4, 2, 4, 2)
        row.setSpacing(4)

        order = QLabel(str(index + 1))
        order.setFixedWidth(_COLUMN_WIDTHS["index"])
        order.setStyleSheet("color: #64748B; font-size: 8pt;")
        row.addWidget(order)

        self._edit_label = QLineEdit(surface.label)
        self._edit_label.setFixedWidth(_COLUMN_WIDTHS["type"])
        self._edit_label.textEdited.connect(
            lambda text: self.label_edited.emit(self._index, text),
        )
        row.addWidget(self._edit_label)

        self._edits: dict[str, SmartLineEdit] = {}
        for field, value, fallback in (
            ("radius", surface.radius, RADIUS_FALLBACK),
            ("thickness", surface.thickness, THICKNESS_FALLBACK),
            ("semi_aperture", surface.semi_aperture, APERTURE_FALLBACK),
        ):
            edit = SmartLineEdit(value, fallback)
            edit.setFixedWidth(_COLUMN_WIDTHS["number"])
            edit.value_edited.connect(
                lambda text, f=field: self.field_edited.emit(self._index, f, text),
            )
            row.addWidget(edit)
            self._edits[field] = edit

        self._glass_combo = QComboBox()
        self._glass_combo.setFixedWidth(_COLUMN_WIDTHS["glass"])
        for name in GLASS_NAMES:
            self._glass_combo.addItem(name, name)
        if surface.glass_after in GLASS_NAMES:
            self._glass_combo.setCurrentIndex(GLASS_NAMES.index(surface.glass_after))
        self._update_glass_style(surface.glass_after)
        self._glass_combo.currentIndexChanged.connect(self._on_glass_changed)
        row.addWidget(self._glass_combo)

        self._stop_check = QCheckBox()
        self._stop_check.setFixedWidth(_COLUMN_WIDTHS["stop"])
        self._stop_check.setChecked(surface.is_stop)
        self._stop_check.toggled.connect(
            lambda checked: self.stop_toggled.emit(self._index, checked),
        )
        row.addWidget(self._stop_check)

        for text, tip, signal, enabled in (
            ("↑", "Move up", self.move_up_clicked, index > 0),
            ("↓", "Move down", self.move_down_clicked, index < count - 1),
            ("✕", "Delete surface", self.delete_clicked, True),
        ):
            btn = QPushButton(text)
            btn.setFixedSize(_COLUMN_WIDTHS["button"], _COLUMN_WIDTHS["button"])
            btn.setToolTip(tip)
            btn.setEnabled(enabled)
            btn.clicked.connect(lambda _=False, s=signal: s.emit(self._index))
            row.addWidget(btn)

        row.addStretch()

    @property
    def index(self) -> int:
        return self._index

    def field_edit(self, field: str) -> SmartLineEdit:
        return self._edits[field]

    @property
    def glass_combo(self) -> QComboBox:
        return self._glass_combo

    @property
    def stop_check(self) -> QCheckBox:
        return self._stop_check

    @property
    def label_edit(self) -> QLineEdit:
        return self._edit_label

    def set_surface(self, surface: Surface) -> None:
        """Refresh widgets from a surface without emitting edits."""
        with QSignalBlocker(self._edit_label):
            if not self._edit_label.hasFocus():
                self._edit_label.setText(surface.label)
        self._edits["radius"].set_value(surface.radius)
        self._edits["thickness"].set_value(surface.thickness)
        self._edits["semi_aperture"].set_value(surface.semi_aperture)
        with QSignalBlocker(self._glass_combo):
            if surface.glass_after in GLASS_NAMES:
                self._glass_combo.setCurrentIndex(GLASS_NAMES.index(surface.glass_after))
        self._update_glass_style(surface.glass_after)
        with QSignalBlocker(self._stop_check):
            self._stop_check.setChecked(surface.is_stop)

    def _update_glass_style(self, name: str) -> None:
        color = GLASS_COLORS.get(name, GLASS_COLORS["AIR"])
        self._glass_combo.setStyleSheet(f"border-left: 4px solid {color};")
        self._glass_combo.setToolTip(glass_tooltip(name, self._wavelength))

    def _on_glass_changed(self, idx: int) -> None:
        name = self._glass_combo.itemData(idx)
        self._update_glass_style(name)
        self.glass_changed.emit(self._index, name)


class SurfaceTablePanel(QWidget):
    """Surface prescription table."""

    def __init__(self, controller: LensController, parent: QWidget | None = None):
        super().__init__(parent)
        self._controller = controller
        self._rows: list[SurfaceRowWidget] = []
        self._build_ui()
        self._connect_signals()
        self._rebuild_rows()

    @property
    def rows(self) -> list[SurfaceRowWidget]:
        return self._rows

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        header = QHBoxLayout()
        header.setContentsMargins(5, 0, 5, 0)
        header.setSpacing(4)
        for text, key in (
            ("#", "index"), ("Type", "type"), ("R", "number"), ("t", "number"),
            ("ap", "number"), ("Glass", "glass"), ("Stop", "stop"),
        ):
            lbl = QLabel(text)
            lbl.setFixedWidth(_COLUMN_WIDTHS[key])
            lbl.setStyleSheet("color: #F8FAFC; font-weight: bold; font-size: 8pt;")
            header.addWidget(lbl)
        header.addStretch()
        layout.addLayout(header)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.Shape.NoFrame)
        container = QWidget()
        self._row_layout = QVBoxLayout(container)
        self._row_layout.setContentsMargins(0, 0, 0, 0)
        self._row_layout.setSpacing(2)
        self._row_layout.addStretch()
        scroll.setWidget(container)
        layout.addWidget(scroll, 1)

        self._btn_add = QPushButton("+ Add surface")
        self._btn_add.setToolTip("Append a flat AIR surface (t = 3, ap = 14)")
        layout.addWidget(self._btn_add, alignment=Qt.AlignmentFlag.AlignLeft)

    def _connect_signals(self) -> None:
        ctrl = self._controller
        ctrl.lens_changed.connect(self._rebuild_rows)
        ctrl.surfaces_rebuilt.connect(self._rebuild_rows)
        ctrl.surface_changed.connect(self._on_surface_changed)
        self._btn_add.clicked.connect(lambda: ctrl.add_surface())

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    def _rebuild_rows(self) -> None:
        """Recreate row widgets from the surface list."""
        for row in self._rows:
            row.setParent(None)
            row.deleteLater()
        self._rows.clear()

        ctrl = self._controller
        surfaces = ctrl.surfaces
        for i, surface in enumerate(surfaces):
            row = SurfaceRowWidget(i, surface, len(surfaces), ctrl.view.wavelength)
            row.label_edited.connect(ctrl.set_label)
            row.field_edited.connect(ctrl.set_field)
            row.glass_changed.connect(ctrl.set_glass)
            row.stop_toggled.connect(ctrl.set_stop)
            row.move_up_clicked.connect(ctrl.move_surface_up)
            row.move_down_clicked.connect(ctrl.move_surface_down)
            row.delete_clicked.connect(ctrl.remove_surface)
            self._row_layout.insertWidget(self._row_layout.count() - 1, row)
            self._rows.append(row)

    def _on_surface_changed(self, index: int) -> None:
        if 0 <= index < len(self._rows):
            self._rows[index].set_surface(self._controller.surfaces[index])

