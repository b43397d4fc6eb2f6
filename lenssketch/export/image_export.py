"""Image export — schematic PNG rendering.

Builds the same primitives as the on-screen canvas and paints them
into a QImage, so exports match the view at the current scale.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QImage, QPainter

from lenssketch.core.schematic import build_schematic
from lenssketch.models.lens import LensSession
from lenssketch.ui.canvas.schematic_painter import paint_schematic


class ImageExporter:
    """Schematic image export operations."""

    def render_schematic(
        self,
        session: LensSession,
        width: int = 1600,
        height: int = 900,
    ) -> QImage:
        """Render the session schematic to a QImage."""
        image = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
        image.fill(Qt.GlobalColor.black)

        painter = QPainter(image)
        try:
            paint_schematic(
                painter, build_schematic(session.surfaces, session.view, width, height),
            )
        finally:
            painter.end()
        return image

    def export_schematic_png(
        self,
        session: LensSession,
        output_path: str,
        width: int = 1600,
        height: int = 900,
    ) -> None:
        """Render the schematic to a PNG file.

        Raises:
            OSError: If Qt fails to write the file.
        """
        image = self.render_schematic(session, width, height)
        if not image.save(output_path, "PNG"):
            raise OSError(f"Could not write image: {output_path}")
