"""Schematic painter — draws schematic primitives with QPainter.

Works on any QPaintDevice, so the on-screen canvas and the PNG exporter
share one code path.
"""

from __future__ import annotations

from typing import Iterable

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QPainter, QPainterPath, QPen, QPolygonF

from lenssketch.core.schematic import Background, Label, Line, Polygon, Primitive, Rect
from lenssketch.ui.styles.colors import (
    AIR_FILL_ALPHA,
    GLASS_COLORS,
    GLASS_FILL_ALPHA,
    SCHEMATIC_COLORS,
)

_LABEL_FONT_PT = 8
_LINE_WIDTHS = {"sensor": 2.0, "body": 1.5, "outline": 1.5}


def role_color(role: str) -> QColor:
    return QColor(SCHEMATIC_COLORS.get(role, "#FFFFFF"))


def glass_fill(glass: str) -> QColor:
    color = QColor(GLASS_COLORS.get(glass, GLASS_COLORS["AIR"]))
    color.setAlpha(AIR_FILL_ALPHA if glass == "AIR" else GLASS_FILL_ALPHA)
    return color


def _pen(role: str, dashed: bool = False) -> QPen:
    pen = QPen(role_color(role), _LINE_WIDTHS.get(role, 1.0))
    if dashed:
        pen.setStyle(Qt.PenStyle.DashLine)
    pen.setCosmetic(True)
    return pen


def paint_schematic(painter: QPainter, primitives: Iterable[Primitive]) -> None:
    """Paint primitives in order (back to front)."""
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    font = QFont(painter.font())
    font.setPointSize(_LABEL_FONT_PT)
    painter.setFont(font)

    for prim in primitives:
        match prim:
            case Background(width=w, height=h):
                painter.fillRect(QRectF(0, 0, w, h), role_color(prim.role))
            case Line():
                painter.setPen(_pen(prim.role, prim.dashed))
                painter.drawLine(QPointF(prim.x1, prim.y1), QPointF(prim.x2, prim.y2))
            case Rect():
                painter.setPen(_pen(prim.role))
                painter.setBrush(Qt.BrushStyle.NoBrush)
                painter.drawRect(QRectF(prim.x, prim.y, prim.width, prim.height))
            case Label():
                painter.setPen(role_color(prim.role))
                metrics = painter.fontMetrics()
                w = metrics.horizontalAdvance(prim.text)
                painter.drawText(QPointF(prim.x - w / 2, prim.y), prim.text)
            case Polygon():
                _paint_polygon(painter, prim)


def _paint_polygon(painter: QPainter, prim: Polygon) -> None:
    if len(prim.points) < 2:
        return
    points = [QPointF(x, y) for x, y in prim.points]
    painter.setPen(_pen(prim.role))
    if prim.closed:
        painter.setBrush(
            QBrush(glass_fill(prim.glass)) if prim.glass else Qt.BrushStyle.NoBrush,
        )
        painter.drawPolygon(QPolygonF(points))
    else:
        path = QPainterPath(points[0])
        for p in points[1:]:
            path.lineTo(p)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPath(path)
