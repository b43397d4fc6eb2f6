"""Tests for CommandDispatcher — each user action as a command."""

import json

import pytest

from lenssketch.core.commands import (
    AddSurface,
    CommandDispatcher,
    ExportDocument,
    ImportDocument,
    LoadPreset,
    MoveSurface,
    NewLens,
    RemoveSurface,
    SetField,
    SetGlass,
    SetLabel,
    SetViewParameter,
    ToggleStop,
)
from lenssketch.core.presets import create_demo_lens
from lenssketch.core.serializers import session_to_dict
from lenssketch.models.lens import LensSession, Surface, WavelengthPreset


class TestRowCommands:

    def setup_method(self):
        self.session = create_demo_lens()
        self.d = CommandDispatcher(self.session)

    def test_add_surface(self):
        r = self.d.apply(AddSurface())
        assert r.changed and r.rebuild_table
        assert r.message == "Added surface 12"
        assert self.session.surfaces[-1] == Surface()

    def test_add_given_surface_is_copied(self):
        template = Surface(radius=5.0)
        self.d.apply(AddSurface(template))
        assert self.session.surfaces[-1] == template
        assert self.session.surfaces[-1] is not template

    def test_remove(self):
        r = self.d.apply(RemoveSurface(0))
        assert r.changed and r.rebuild_table
        assert len(self.session.surfaces) == 10
        assert self.session.surfaces[0].label == "1"

    def test_remove_out_of_range(self):
        r = self.d.apply(RemoveSurface(42))
        assert not r.changed
        assert len(self.session.surfaces) == 11

    def test_set_field_no_rebuild(self):
        r = self.d.apply(SetField(1, "thickness", "12,5"))
        assert r.changed and not r.rebuild_table
        assert self.session.surfaces[1].thickness == 12.5

    def test_set_glass_unknown_falls_back(self):
        self.d.apply(SetGlass(1, "MYSTERY"))
        assert self.session.surfaces[1].glass_after == "AIR"

    def test_set_glass(self):
        self.d.apply(SetGlass(0, "BK7"))
        assert self.session.surfaces[0].glass_after == "BK7"

    def test_set_label(self):
        r = self.d.apply(SetLabel(0, "OBJ2"))
        assert r.changed
        assert self.session.surfaces[0].label == "OBJ2"

    def test_toggle_stop_on_rebuilds(self):
        r = self.d.apply(ToggleStop(7, True))
        assert r.changed and r.rebuild_table
        assert self.session.stop_index == 7
        assert sum(s.is_stop for s in self.session.surfaces) == 1

    def test_toggle_stop_off_no_rebuild(self):
        r = self.d.apply(ToggleStop(4, False))
        assert r.changed and not r.rebuild_table
        assert self.session.stop_index == -1

    def test_move_up_first_is_noop(self):
        before = session_to_dict(self.session)
        r = self.d.apply(MoveSurface(0, -1))
        assert not r.changed
        assert session_to_dict(self.session) == before

    def test_move_down_last_is_noop(self):
        r = self.d.apply(MoveSurface(10, +1))
        assert not r.changed

    def test_move_down(self):
        r = self.d.apply(MoveSurface(0, +1))
        assert r.changed and r.rebuild_table
        assert [s.label for s in self.session.surfaces[:2]] == ["1", "OBJ"]

    def test_delete_all_then_add(self):
        while self.session.surfaces:
            self.d.apply(RemoveSurface(0))
        self.d.apply(AddSurface())
        assert self.session.surfaces == [
            Surface(radius=0.0, thickness=3.0, semi_aperture=14.0,
                    glass_after="AIR", is_stop=False),
        ]


class TestViewCommands:

    def setup_method(self):
        self.session = create_demo_lens()
        self.d = CommandDispatcher(self.session)

    def test_set_flange(self):
        r = self.d.apply(SetViewParameter("flange_distance", "44,5"))
        assert r.changed
        assert self.session.view.flange_distance == 44.5

    def test_flange_clamped_to_limit(self):
        self.d.apply(SetViewParameter("flange_distance", 500))
        assert self.session.view.flange_distance == 300.0

    def test_sensor_clamped_to_limit(self):
        self.d.apply(SetViewParameter("sensor_height", "0,2"))
        assert self.session.view.sensor_height == 1.0

    def test_same_value_is_noop(self):
        r = self.d.apply(SetViewParameter("flange_distance", 52.0))
        assert not r.changed

    def test_bad_number_keeps_current(self):
        r = self.d.apply(SetViewParameter("sensor_width", "wide"))
        assert not r.changed
        assert self.session.view.sensor_width == 36.0

    def test_scale_clamped(self):
        self.d.apply(SetViewParameter("px_per_mm", -1))
        assert self.session.view.px_per_mm == 0.5

    def test_ray_count_clamped(self):
        self.d.apply(SetViewParameter("ray_count", 1))
        assert self.session.view.ray_count == 3

    def test_toggle(self):
        self.d.apply(SetViewParameter("stop_aware", False))
        assert self.session.view.stop_aware is False

    def test_wavelength_rebuilds_table(self):
        r = self.d.apply(SetViewParameter("wavelength", "g"))
        assert r.rebuild_table
        assert self.session.view.wavelength is WavelengthPreset.G

    def test_unknown_parameter(self):
        with pytest.raises(ValueError):
            self.d.apply(SetViewParameter("colour", 1))

    def test_undoable_split(self):
        assert SetViewParameter("flange_distance", 1).undoable
        assert not SetViewParameter("px_per_mm", 1).undoable
        assert not SetViewParameter("show_axis", False).undoable


class TestWholesale:

    def setup_method(self):
        self.session = create_demo_lens()
        self.rows = self.session.surfaces
        self.d = CommandDispatcher(self.session)

    def test_new_lens(self):
        r = self.d.apply(NewLens())
        assert r.changed and r.rebuild_table
        assert self.session.surfaces == [Surface()]
        assert self.session.surfaces is self.rows

    def test_new_keeps_view(self):
        self.session.view.flange_distance = 44.0
        self.d.apply(NewLens())
        assert self.session.view.flange_distance == 44.0

    def test_load_preset(self):
        r = self.d.apply(LoadPreset("singlet"))
        assert r.changed
        assert self.session.name == "BK7 singlet"
        assert len(self.session.surfaces) == 3

    def test_unknown_preset(self):
        r = self.d.apply(LoadPreset("zoom"))
        assert not r.ok and not r.changed
        assert len(self.session.surfaces) == 11

    def test_export(self):
        r = self.d.apply(ExportDocument())
        assert not r.changed
        assert r.document == session_to_dict(self.session)

    def test_import_text(self):
        doc = {"name": "Imported", "flange": 40,
               "surfaces": [{"R": 10, "t": 2, "ap": 6, "glassAfter": "F2", "isStop": True}]}
        r = self.d.apply(ImportDocument(json.dumps(doc)))
        assert r.ok and r.changed and r.rebuild_table
        assert self.session.name == "Imported"
        assert self.session.view.flange_distance == 40.0
        assert self.session.surfaces == [Surface(10.0, 2.0, 6.0, "F2", True)]
        assert self.session.surfaces is self.rows

    def test_import_keeps_absent_view(self):
        self.session.view.sensor_width = 23.5
        self.d.apply(ImportDocument({"surfaces": []}))
        assert self.session.view.sensor_width == 23.5
        assert self.session.surfaces == []

    def test_import_missing_surfaces_rejected(self):
        before = session_to_dict(self.session)
        r = self.d.apply(ImportDocument('{"foo": 1}'))
        assert not r.ok and not r.changed
        assert r.message.startswith("Load failed")
        assert session_to_dict(self.session) == before

    def test_import_unparsable_rejected(self):
        r = self.d.apply(ImportDocument("{{{"))
        assert not r.ok
        assert len(self.session.surfaces) == 11

    def test_import_huge_integer_uses_fallback(self):
        r = self.d.apply(ImportDocument({"surfaces": [{"R": 10**400, "t": 2}]}))
        assert r.ok
        assert self.session.surfaces[0].radius == 0.0
        assert self.session.surfaces[0].thickness == 2.0

    def test_import_deeply_nested_rejected(self):
        r = self.d.apply(ImportDocument("[" * 200000))
        assert not r.ok
        assert len(self.session.surfaces) == 11

    def test_import_dict_without_surfaces_rejected(self):
        r = self.d.apply(ImportDocument({"foo": 1}))
        assert not r.ok

    def test_export_import_round_trip(self):
        exported = self.d.apply(ExportDocument()).document
        original = [s.copy() for s in self.session.surfaces]
        other = LensSession()
        CommandDispatcher(other).apply(ImportDocument(json.dumps(exported)))
        assert other.surfaces == original


class TestUnknownCommand:

    def test_raises_type_error(self):
        d = CommandDispatcher(LensSession())
        with pytest.raises(TypeError):
            d.apply("AddSurface")
