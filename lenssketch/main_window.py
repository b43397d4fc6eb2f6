"""Main window — dock layout, toolbar wiring, file handlers.

Layout:
    Center: schematic canvas with metrics badges above it
    Left dock: view parameters
    Right dock: surface table
    Bottom-right dock: chart preview
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QSettings, Qt
from PyQt6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QDockWidget,
    QFileDialog,
    QMainWindow,
    QVBoxLayout,
    QWidget,
)

from lenssketch.constants import (
    APP_NAME,
    APP_VERSION,
    MIN_WINDOW_HEIGHT,
    MIN_WINDOW_WIDTH,
)
from lenssketch.core.serializers import DocumentError
from lenssketch.export import ImageExporter, JsonExporter
from lenssketch.ui.canvas.lens_controller import LensController
from lenssketch.ui.canvas.schematic_view import SchematicView
from lenssketch.ui.panels.chart_panel import ChartPanel
from lenssketch.ui.panels.metrics_panel import MetricsPanel
from lenssketch.ui.panels.surface_table_panel import SurfaceTablePanel
from lenssketch.ui.panels.view_panel import ViewPanel
from lenssketch.ui.toolbar import MainToolBar

logger = logging.getLogger(__name__)

_JSON_FILTER = "Lens JSON (*.json);;All Files (*)"
_IMAGE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif);;All Files (*)"


class MainWindow(QMainWindow):
    """Application main window."""

    def __init__(self, controller: LensController | None = None):
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(MIN_WINDOW_WIDTH, MIN_WINDOW_HEIGHT)

        self._controller = controller if controller is not None else LensController(parent=self)
        self._json_exporter = JsonExporter()
        self._image_exporter = ImageExporter()

        self._build_ui()
        self._connect_signals()
        self._restore_state()
        self._update_title()
        self._on_undo_state_changed()

    @property
    def controller(self) -> LensController:
        return self._controller

    def _build_ui(self) -> None:
        self._toolbar = MainToolBar(self)
        self.addToolBar(self._toolbar)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        self._metrics_panel = MetricsPanel(self._controller)
        self._view = SchematicView(self._controller)
        layout.addWidget(self._metrics_panel)
        layout.addWidget(self._view, 1)
        self.setCentralWidget(central)

        self._view_panel = ViewPanel(self._controller)
        self._table_panel = SurfaceTablePanel(self._controller)
        self._chart_panel = ChartPanel()
        self._create_dock("View", Qt.DockWidgetArea.LeftDockWidgetArea, self._view_panel)
        self._create_dock("Surfaces", Qt.DockWidgetArea.RightDockWidgetArea, self._table_panel)
        self._create_dock("Chart", Qt.DockWidgetArea.RightDockWidgetArea, self._chart_panel)

        self.statusBar().showMessage("Ready")

    def _create_dock(self, title: str, area, widget: QWidget) -> QDockWidget:
        dock = QDockWidget(title, self)
        dock.setObjectName(title)
        dock.setWidget(widget)
        dock.setFeatures(
            QDockWidget.DockWidgetFeature.DockWidgetMovable
            | QDockWidget.DockWidgetFeature.DockWidgetClosable
        )
        self.addDockWidget(area, dock)
        return dock

    def _connect_signals(self) -> None:
        ctrl = self._controller
        tb = self._toolbar

        tb.new_requested.connect(self._on_new)
        tb.import_requested.connect(self._on_import)
        tb.export_requested.connect(self._on_export)
        tb.export_png_requested.connect(self._on_export_png)
        tb.preset_requested.connect(self._on_preset)
        tb.add_surface_requested.connect(lambda: ctrl.add_surface())
        tb.undo_requested.connect(ctrl.undo)
        tb.redo_requested.connect(ctrl.redo)
        tb.load_chart_requested.connect(self._on_load_chart)
        tb.clear_chart_requested.connect(self._chart_panel.clear_chart)

        ctrl.status_message.connect(self.statusBar().showMessage)
        ctrl.undo_state_changed.connect(self._on_undo_state_changed)
        ctrl.lens_changed.connect(self._update_title)
        self._chart_panel.status_message.connect(self.statusBar().showMessage)
        self._view.cursor_moved.connect(
            lambda x, y: self.statusBar().showMessage(f"x = {x:.1f} mm, y = {y:.1f} mm"),
        )

        QShortcut(QKeySequence("Ctrl+N"), self).activated.connect(self._on_new)
        QShortcut(QKeySequence("Ctrl+O"), self).activated.connect(self._on_import)
        QShortcut(QKeySequence("Ctrl+S"), self).activated.connect(self._on_export)

    # ------------------------------------------------------------------
    # File handlers
    # ------------------------------------------------------------------

    def _on_new(self) -> None:
        self._controller.new_lens()
        self._view.reset_pan()

    def _on_preset(self, name: str) -> None:
        self._controller.load_preset(name)
        self._view.reset_pan()

    def _on_import(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Import Lens", "", _JSON_FILTER)
        if path:
            self.import_file(path)

    def import_file(self, path: str) -> bool:
        """Import a lens JSON file; failures go to the status bar."""
        try:
            document = self._json_exporter.read_document(path)
        except (OSError, DocumentError) as e:
            logger.warning("Import failed for %s: %s", path, e)
            self.statusBar().showMessage(f"Load failed: {e}")
            return False
        return self._controller.import_document(document)

    def _on_export(self) -> None:
        default = self._json_exporter.default_filename(self._controller.session)
        path, _ = QFileDialog.getSaveFileName(self, "Export Lens", default, _JSON_FILTER)
        if path:
            self.export_file(path)

    def export_file(self, path: str) -> bool:
        try:
            self._json_exporter.export_document(self._controller.export_document(), path)
        except OSError as e:
            logger.warning("Export failed for %s: %s", path, e)
            self.statusBar().showMessage(f"Export error: {e}")
            return False
        self.statusBar().showMessage(f"Exported: {path}")
        return True

    def _on_export_png(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Schematic", "schematic.png", "PNG (*.png)",
        )
        if not path:
            return
        try:
            self._image_exporter.export_schematic_png(
                self._controller.session, path,
                max(self._view.width(), 800), max(self._view.height(), 450),
            )
        except OSError as e:
            logger.warning("PNG export failed for %s: %s", path, e)
            self.statusBar().showMessage(f"Export error: {e}")
            return
        self.statusBar().showMessage(f"Exported: {path}")

    def _on_load_chart(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Load Chart", "", _IMAGE_FILTER)
        if path:
            self._chart_panel.load_chart(path)
            self.statusBar().showMessage("Loading chart…")

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def _update_title(self) -> None:
        self.setWindowTitle(f"{self._controller.session.name} — {APP_NAME} v{APP_VERSION}")

    def _on_undo_state_changed(self) -> None:
        ctrl = self._controller
        self._toolbar.set_undo_state(
            ctrl.can_undo, ctrl.can_redo, ctrl.undo_description, ctrl.redo_description,
        )

    def closeEvent(self, event: QCloseEvent) -> None:
        self._save_state()
        self._chart_panel.wait_for_workers()
        super().closeEvent(event)

    def _save_state(self) -> None:
        settings = QSettings()
        settings.setValue("mainwindow/geometry", self.saveGeometry())
        settings.setValue("mainwindow/state", self.saveState())

    def _restore_state(self) -> None:
        settings = QSettings()
        geometry = settings.value("mainwindow/geometry")
        if geometry:
            self.restoreGeometry(geometry)
        state = settings.value("mainwindow/state")
        if state:
            self.restoreState(state)
