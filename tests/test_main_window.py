"""Smoke tests for MainWindow wiring and file handlers."""

import json
import sys

import pytest
from PyQt6.QtCore import QCoreApplication
from PyQt6.QtWidgets import QApplication

from lenssketch.core.presets import create_demo_lens
from lenssketch.main_window import MainWindow
from lenssketch.ui.canvas.lens_controller import LensController

_app = QApplication.instance() or QApplication(sys.argv)


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path):
    from PyQt6.QtCore import QSettings
    QCoreApplication.setOrganizationName("LensSketchTests")
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)
    QSettings.setPath(
        QSettings.Format.IniFormat, QSettings.Scope.UserScope, str(tmp_path),
    )


class TestMainWindow:

    def setup_method(self):
        self.ctrl = LensController(create_demo_lens())
        self.window = MainWindow(self.ctrl)

    def teardown_method(self):
        self.window.close()

    def test_title_has_lens_name(self):
        assert self.window.windowTitle().startswith("No name")

    def test_export_then_import(self, tmp_path):
        path = tmp_path / "lens.json"
        assert self.window.export_file(str(path))
        self.ctrl.new_lens()
        assert len(self.ctrl.surfaces) == 1
        assert self.window.import_file(str(path))
        assert len(self.ctrl.surfaces) == 11

    def test_import_invalid_keeps_state(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"foo": 1}), encoding="utf-8")
        assert not self.window.import_file(str(path))
        assert len(self.ctrl.surfaces) == 11
        assert self.window.statusBar().currentMessage().startswith("Load failed")

    def test_import_non_utf8_file_rejected(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes('{"name": "Objektiv \xe9", "surfaces": []}'.encode("latin-1"))
        assert not self.window.import_file(str(path))
        assert len(self.ctrl.surfaces) == 11
        assert self.window.statusBar().currentMessage().startswith("Load failed")

    def test_import_binary_file_rejected(self, tmp_path):
        path = tmp_path / "chart.png"
        path.write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe\x00")
        assert not self.window.import_file(str(path))
        assert len(self.ctrl.surfaces) == 11

    def test_import_missing_file(self, tmp_path):
        assert not self.window.import_file(str(tmp_path / "missing.json"))

    def test_status_follows_controller(self):
        self.ctrl.add_surface()
        assert self.window.statusBar().currentMessage() == "Added surface 12"

    def test_title_updates_on_preset(self):
        self.ctrl.load_preset("singlet")
        assert self.window.windowTitle().startswith("BK7 singlet")
