"""Application factory — QApplication creation, theme and font setup."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QtMsgType, qInstallMessageHandler
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QApplication

from lenssketch.constants import APP_NAME, APP_ORGANIZATION, APP_VERSION
from lenssketch.ui.styles import colors

logger = logging.getLogger(__name__)

_STYLESHEET = f"""
QMainWindow, QDockWidget, QWidget {{
    background: {colors.BACKGROUND};
    color: {colors.TEXT_PRIMARY};
}}
QGroupBox {{
    border: 1px solid {colors.BORDER};
    border-radius: 4px;
    margin-top: 8px;
    padding-top: 6px;
}}
QLineEdit, QComboBox, QDoubleSpinBox, QSpinBox {{
    background: {colors.PANEL_BG};
    border: 1px solid {colors.SURFACE};
    border-radius: 3px;
    padding: 1px 3px;
}}
QPushButton, QToolButton {{
    background: {colors.SURFACE};
    border: 1px solid {colors.BORDER};
    border-radius: 3px;
    padding: 2px 6px;
}}
QPushButton:hover, QToolButton:hover {{
    border-color: {colors.ACCENT_HOVER};
}}
QStatusBar {{
    color: {colors.TEXT_SECONDARY};
}}
"""


def _qt_message_handler(msg_type, context, message):
    """Route Qt messages into logging, dropping QPainter startup noise."""
    if "QPainter" in message:
        return
    if msg_type in (QtMsgType.QtCriticalMsg, QtMsgType.QtFatalMsg):
        logger.error(message)
    elif msg_type == QtMsgType.QtWarningMsg:
        logger.warning(message)


def create_application(argv: list[str]) -> QApplication:
    """Create and configure the QApplication instance."""
    qInstallMessageHandler(_qt_message_handler)

    app = QApplication(argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    app.setOrganizationName(APP_ORGANIZATION)

    font = QFont("Segoe UI", 10)
    font.setStyleHint(QFont.StyleHint.SansSerif)
    app.setFont(font)
    app.setStyleSheet(_STYLESHEET)
    return app
