"""Schematic view — canvas widget for the lens cross-section.

Repaints fully from the controller's session on every change. Wheel and
+/- keys change the shared px/mm scale; drag pans the drawing.
"""

from __future__ import annotations

from PyQt6.QtCore import QPointF, Qt, pyqtSignal
from PyQt6.QtGui import QKeyEvent, QMouseEvent, QPainter, QPaintEvent, QWheelEvent
from PyQt6.QtWidgets import QSizePolicy, QWidget

from lenssketch.constants import ZOOM_STEP
from lenssketch.core.geometry_mapper import GeometryMapper
from lenssketch.core.schematic import Primitive, build_schematic
from lenssketch.ui.canvas.lens_controller import LensController
from lenssketch.ui.canvas.schematic_painter import paint_schematic


class SchematicView(QWidget):
    """Canvas painting the controller's lens.

    Signals:
        cursor_moved(float, float): Pointer position in mm (x, y).
    """

    cursor_moved = pyqtSignal(float, float)

    def __init__(self, controller: LensController, parent: QWidget | None = None):
        super().__init__(parent)
        self._controller = controller
        self._pan = QPointF(0.0, 0.0)
        self._panning = False
        self._pan_start = QPointF()

        self.setMinimumSize(400, 300)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        controller.lens_changed.connect(self.update)
        controller.surfaces_rebuilt.connect(self.update)
        controller.surface_changed.connect(self.update)
        controller.view_changed.connect(self.update)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def primitives(self) -> list[Primitive]:
        session = self._controller.session
        return build_schematic(session.surfaces, session.view, self.width(), self.height())

    def mapper(self) -> GeometryMapper:
        return GeometryMapper(self.width(), self.height(), self._controller.view.px_per_mm)

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            painter.translate(self._pan)
            paint_schematic(painter, self.primitives())
        finally:
            painter.end()

    # ------------------------------------------------------------------
    # Zoom
    # ------------------------------------------------------------------

    def wheelEvent(self, event: QWheelEvent) -> None:
        delta = event.angleDelta().y()
        if delta == 0:
            return
        self._apply_zoom(ZOOM_STEP if delta > 0 else 1.0 / ZOOM_STEP)

    def _apply_zoom(self, factor: float) -> None:
        self._controller.set_view_parameter(
            "px_per_mm", self._controller.view.px_per_mm * factor,
        )

    def reset_pan(self) -> None:
        self._pan = QPointF(0.0, 0.0)
        self.update()

    # ------------------------------------------------------------------
    # Pan
    # ------------------------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() in (Qt.MouseButton.LeftButton, Qt.MouseButton.MiddleButton):
            self._panning = True
            self._pan_start = event.position()
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        if self._panning:
            self._pan += pos - self._pan_start
            self._pan_start = pos
            self.update()
        mapper = self.mapper()
        self.cursor_moved.emit(
            mapper.to_mm_x(pos.x() - self._pan.x()),
            mapper.to_mm_y(pos.y() - self._pan.y()),
        )
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if self._panning:
            self._panning = False
            self.setCursor(Qt.CursorShape.ArrowCursor)
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        self.reset_pan()
        event.accept()

    # ------------------------------------------------------------------
    # Keyboard shortcuts
    # ------------------------------------------------------------------

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.key() in (Qt.Key.Key_Plus, Qt.Key.Key_Equal):
            self._apply_zoom(ZOOM_STEP)
        elif event.key() == Qt.Key.Key_Minus:
            self._apply_zoom(1.0 / ZOOM_STEP)
        elif event.key() == Qt.Key.Key_0:
            self.reset_pan()
        else:
            super().keyPressEvent(event)
