"""Tests for lens document serialization — export, lenient import."""

import json

import pytest

from lenssketch.constants import DOCUMENT_TOOL, DOCUMENT_VERSION, MIN_PX_PER_MM
from lenssketch.core.presets import create_demo_lens
from lenssketch.core.serializers import (
    DocumentError,
    dict_to_session,
    dict_to_surface,
    parse_document,
    session_to_dict,
    surface_to_dict,
)
from lenssketch.models.lens import LensSession, Surface, ViewParameters


class TestExport:

    def setup_method(self):
        self.session = create_demo_lens()
        self.data = session_to_dict(self.session)

    def test_meta(self):
        assert self.data["meta"] == {"tool": DOCUMENT_TOOL, "v": DOCUMENT_VERSION}

    def test_sensor_and_flange(self):
        assert self.data["sensor"] == {"w": 36.0, "h": 24.0}
        assert self.data["flange"] == 52.0

    def test_params(self):
        assert self.data["params"] == {
            "fieldAngle": 10.0, "rayCount": 31, "pxPerMm": 4.0, "stopAware": True,
        }

    def test_surface_keys(self):
        first = self.data["surfaces"][0]
        assert first == {
            "R": 0.0, "t": 10.0, "ap": 22.0, "glassAfter": "AIR",
            "isStop": False, "type": "OBJ",
        }

    def test_empty_label_omitted(self):
        assert "type" not in surface_to_dict(Surface())

    def test_json_serializable(self):
        text = json.dumps(self.data)
        assert json.loads(text) == self.data


class TestRoundTrip:

    def test_surfaces_field_for_field(self):
        session = create_demo_lens()
        restored = dict_to_session(session_to_dict(session))
        assert restored.surfaces == session.surfaces

    def test_name_and_view(self):
        session = create_demo_lens()
        session.name = "Test 50mm"
        session.view.flange_distance = 44.0
        session.view.stop_aware = False
        restored = dict_to_session(json.loads(json.dumps(session_to_dict(session))))
        assert restored.name == "Test 50mm"
        assert restored.view.flange_distance == 44.0
        assert restored.view.stop_aware is False


class TestLenientImport:

    def test_missing_fields_use_fallbacks(self):
        s = dict_to_surface({})
        assert s == Surface(radius=0.0, thickness=0.0, semi_aperture=10.0,
                            glass_after="AIR", is_stop=False, label="")

    def test_non_dict_entry(self):
        assert dict_to_surface("junk").semi_aperture == 10.0

    def test_string_numbers_coerced(self):
        s = dict_to_surface({"R": "42,5", "t": "3", "ap": "bad"})
        assert (s.radius, s.thickness, s.semi_aperture) == (42.5, 3.0, 10.0)

    def test_unknown_glass_falls_back(self):
        assert dict_to_surface({"glassAfter": "N-SK16"}).glass_after == "AIR"

    def test_label_coerced_to_string(self):
        assert dict_to_surface({"type": 7}).label == "7"

    def test_only_first_stop_kept(self):
        data = {"surfaces": [
            {"isStop": False}, {"isStop": True}, {"isStop": True},
        ]}
        session = dict_to_session(data)
        assert [s.is_stop for s in session.surfaces] == [False, True, False]

    def test_absent_view_entries_keep_current(self):
        current = ViewParameters(sensor_width=23.5, flange_distance=44.0)
        session = dict_to_session({"surfaces": []}, current)
        assert session.view.sensor_width == 23.5
        assert session.view.flange_distance == 44.0
        assert current is not session.view

    def test_present_view_entries_overwrite(self):
        data = {
            "surfaces": [],
            "sensor": {"w": 24.9, "h": 18.7},
            "flange": 35.0,
            "params": {"fieldAngle": 20, "rayCount": 500, "pxPerMm": 0, "stopAware": False},
        }
        view = dict_to_session(data).view
        assert (view.sensor_width, view.sensor_height) == (24.9, 18.7)
        assert view.flange_distance == 35.0
        assert view.field_angle == 20.0
        assert view.ray_count == 101  # clamped
        assert view.px_per_mm == MIN_PX_PER_MM
        assert view.stop_aware is False

    def test_huge_integer_falls_back(self):
        session = dict_to_session({"surfaces": [{"R": 10**400, "ap": 10**400}]})
        assert session.surfaces[0].radius == 0.0
        assert session.surfaces[0].semi_aperture == 10.0

    def test_view_entries_clamped_to_limits(self):
        data = {
            "surfaces": [],
            "sensor": {"w": 0.5, "h": 1000},
            "flange": 500,
            "params": {"fieldAngle": -5},
        }
        view = dict_to_session(data).view
        assert (view.sensor_width, view.sensor_height) == (1.0, 200.0)
        assert view.flange_distance == 300.0
        assert view.field_angle == 0.0

    def test_missing_name_defaults(self):
        assert dict_to_session({"surfaces": []}).name == "No name"

    def test_missing_surfaces_rejected(self):
        with pytest.raises(DocumentError):
            dict_to_session({"foo": 1})

    def test_surfaces_not_list_rejected(self):
        with pytest.raises(DocumentError):
            dict_to_session({"surfaces": {"R": 1}})

    def test_non_object_rejected(self):
        with pytest.raises(DocumentError):
            dict_to_session([1, 2])


class TestParseDocument:

    def test_valid(self):
        assert parse_document('{"surfaces": []}') == {"surfaces": []}

    def test_unparsable(self):
        with pytest.raises(DocumentError, match="Invalid JSON"):
            parse_document("{not json")

    def test_missing_surfaces(self):
        with pytest.raises(DocumentError):
            parse_document('{"foo": 1}')

    def test_deep_nesting_rejected(self):
        with pytest.raises(DocumentError, match="Invalid JSON"):
            parse_document("[" * 200000 + "]" * 200000)

    def test_oversized_integer_never_escapes(self):
        text = '{"surfaces": [{"R": 1' + "0" * 5000 + "}]}"
        try:
            data = parse_document(text)
        except DocumentError:
            return
        assert dict_to_session(data).surfaces[0].radius == 0.0

    def test_document_error_is_value_error(self):
        assert issubclass(DocumentError, ValueError)
