"""Main toolbar — file actions, presets, undo/redo, chart loading."""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QMenu, QToolBar, QToolButton

from lenssketch.core.presets import PRESET_TITLES


class MainToolBar(QToolBar):
    """Application toolbar. Emits requests; the main window handles them."""

    new_requested = pyqtSignal()
    import_requested = pyqtSignal()
    export_requested = pyqtSignal()
    export_png_requested = pyqtSignal()
    preset_requested = pyqtSignal(str)
    add_surface_requested = pyqtSignal()
    undo_requested = pyqtSignal()
    redo_requested = pyqtSignal()
    load_chart_requested = pyqtSignal()
    clear_chart_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__("Main Toolbar", parent)
        self.setObjectName("main_toolbar")
        self.setMovable(False)
        self._build_ui()

    def _build_ui(self) -> None:
        # File button with menu
        self._btn_file = QToolButton()
        self._btn_file.setText("File")
        self._file_menu = QMenu(self)
        self._action_new = self._file_menu.addAction("New", self.new_requested.emit)
        self._action_import = self._file_menu.addAction("Import JSON…", self.import_requested.emit)
        self._file_menu.addSeparator()
        self._action_export = self._file_menu.addAction("Export JSON…", self.export_requested.emit)
        self._action_export_png = self._file_menu.addAction(
            "Export schematic PNG…", self.export_png_requested.emit,
        )
        self._btn_file.setMenu(self._file_menu)
        self._btn_file.setPopupMode(QToolButton.ToolButtonPopupMode.InstantPopup)
        self.addWidget(self._btn_file)

        # Presets
        self._btn_presets = QToolButton()
        self._btn_presets.setText("Presets")
        preset_menu = QMenu(self)
        for key, title in PRESET_TITLES.items():
            action = preset_menu.addAction(title)
            action.triggered.connect(lambda checked, k=key: self.preset_requested.emit(k))
        self._btn_presets.setMenu(preset_menu)
        self._btn_presets.setPopupMode(QToolButton.ToolButtonPopupMode.InstantPopup)
        self.addWidget(self._btn_presets)

        self.addSeparator()

        self._action_add = self.addAction("+ Surface", self.add_surface_requested.emit)
        self._action_undo = self.addAction("Undo", self.undo_requested.emit)
        self._action_undo.setShortcut("Ctrl+Z")
        self._action_redo = self.addAction("Redo", self.redo_requested.emit)
        self._action_redo.setShortcut("Ctrl+Y")

        self.addSeparator()

        # Chart
        self._btn_chart = QToolButton()
        self._btn_chart.setText("Chart")
        chart_menu = QMenu(self)
        chart_menu.addAction("Load chart image…", self.load_chart_requested.emit)
        chart_menu.addAction("Clear chart", self.clear_chart_requested.emit)
        self._btn_chart.setMenu(chart_menu)
        self._btn_chart.setPopupMode(QToolButton.ToolButtonPopupMode.InstantPopup)
        self.addWidget(self._btn_chart)

    def set_undo_state(self, can_undo: bool, can_redo: bool,
                       undo_text: str = "", redo_text: str = "") -> None:
        """Enable/disable undo/redo and show what they would revert."""
        self._action_undo.setEnabled(can_undo)
        self._action_redo.setEnabled(can_redo)
        self._action_undo.setToolTip(f"Undo {undo_text}".strip())
        self._action_redo.setToolTip(f"Redo {redo_text}".strip())
