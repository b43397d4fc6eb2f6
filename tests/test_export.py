"""Tests for export modules — JSON document files and schematic PNG."""

import json
import sys

import pytest
from PyQt6.QtGui import QImage
from PyQt6.QtWidgets import QApplication

from lenssketch.core.presets import create_demo_lens
from lenssketch.core.serializers import DocumentError, dict_to_session, session_to_dict
from lenssketch.export import ImageExporter, JsonExporter
from lenssketch.models.lens import LensSession

_app = QApplication.instance() or QApplication(sys.argv)


class TestJsonExport:

    def setup_method(self):
        self.exporter = JsonExporter()
        self.session = create_demo_lens()

    def test_export_creates_file(self, tmp_path):
        path = tmp_path / "lens.json"
        self.exporter.export_document(session_to_dict(self.session), str(path))
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["meta"]["tool"] == "lens-sketch"
        assert len(data["surfaces"]) == 11

    def test_export_is_indented(self, tmp_path):
        path = tmp_path / "lens.json"
        self.exporter.export_document(session_to_dict(self.session), str(path))
        assert '\n  "meta"' in path.read_text(encoding="utf-8")

    def test_non_ascii_name_kept(self, tmp_path):
        self.session.name = "Objektiv 50 mm f/1,4 — Ø"
        path = tmp_path / "lens.json"
        self.exporter.export_document(session_to_dict(self.session), str(path))
        assert "Ø" in path.read_text(encoding="utf-8")

    def test_round_trip_file(self, tmp_path):
        path = tmp_path / "lens.json"
        self.exporter.export_document(session_to_dict(self.session), str(path))
        restored = dict_to_session(self.exporter.read_document(str(path)))
        assert restored.surfaces == self.session.surfaces

    def test_read_invalid_raises(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"foo": 1}', encoding="utf-8")
        with pytest.raises(DocumentError):
            self.exporter.read_document(str(path))

    def test_read_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            self.exporter.read_document(str(tmp_path / "nope.json"))

    def test_default_filename(self):
        assert self.exporter.default_filename(LensSession(name="Tessar")) == "Tessar.json"
        assert self.exporter.default_filename(LensSession(name="")) == "lens.json"

    def test_export_document_dict(self, tmp_path):
        path = tmp_path / "doc.json"
        doc = session_to_dict(self.session)
        self.exporter.export_document(doc, str(path))
        assert json.loads(path.read_text(encoding="utf-8")) == doc


class TestImageExport:

    def test_render_size(self):
        image = ImageExporter().render_schematic(create_demo_lens(), 320, 200)
        assert isinstance(image, QImage)
        assert (image.width(), image.height()) == (320, 200)

    def test_background_painted(self):
        image = ImageExporter().render_schematic(LensSession(), 100, 80)
        # top-left corner is canvas background, not the black fill
        assert image.pixelColor(0, 0).name() == "#0b1220"

    def test_png_written(self, tmp_path):
        path = tmp_path / "schematic.png"
        ImageExporter().export_schematic_png(create_demo_lens(), str(path), 400, 300)
        assert path.exists()
        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
