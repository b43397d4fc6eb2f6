"""Command dispatcher — discrete user actions applied to a LensSession.

Every UI gesture (table edit, toolbar button, file import) becomes one
command object. CommandDispatcher.apply() mutates the session and
reports what the view layer has to refresh; it never touches Qt.

Usage::

    dispatcher = CommandDispatcher(session)
    result = dispatcher.apply(SetField(0, "radius", "42,5"))
    if result.rebuild_table:
        ...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, ClassVar

from lenssketch.constants import MAX_RAY_COUNT, MIN_RAY_COUNT
from lenssketch.core.geometry_mapper import clamp_scale
from lenssketch.core.glass_catalog import resolve_glass_name
from lenssketch.core.parsing import parse_bool, parse_int, parse_number
from lenssketch.core.presets import PRESET_TITLES, create_preset
from lenssketch.core.serializers import (
    DocumentError,
    clamp_view_value,
    dict_to_session,
    parse_document,
    session_to_dict,
)
from lenssketch.core.surface_store import SurfaceStore
from lenssketch.models.lens import LensSession, Surface, ViewParameters, WavelengthPreset

logger = logging.getLogger(__name__)

# View parameters that only affect presentation (no undo checkpoint)
DISPLAY_ONLY_PARAMETERS = frozenset({
    "px_per_mm", "show_apertures", "show_axis", "show_mount", "wavelength",
})

_VIEW_PARAMETER_NAMES = frozenset(f.name for f in fields(ViewParameters))

_FIELD_TITLES = {
    "radius": "radius",
    "thickness": "thickness",
    "semi_aperture": "aperture",
}


# =====================================================================
# Result
# =====================================================================


@dataclass
class CommandResult:
    """Outcome of one command.

    Attributes:
        changed: The session was modified (repaint + metrics needed).
        rebuild_table: Row widgets are stale (structure or other rows changed).
        message: Status bar text, empty for silent edits.
        document: Exported document (ExportDocument only).
        ok: False when the command was rejected (e.g. bad import).
    """
    changed: bool = False
    rebuild_table: bool = False
    message: str = ""
    document: dict[str, Any] | None = None
    ok: bool = True


# =====================================================================
# Commands
# =====================================================================


@dataclass(frozen=True)
class AddSurface:
    surface: Surface | None = None
    undoable: ClassVar[bool] = True

    @property
    def description(self) -> str:
        return "Add surface"


@dataclass(frozen=True)
class RemoveSurface:
    index: int
    undoable: ClassVar[bool] = True

    @property
    def description(self) -> str:
        return f"Delete surface {self.index + 1}"


@dataclass(frozen=True)
class SetField:
    index: int
    field: str  # "radius" | "thickness" | "semi_aperture"
    value: Any
    undoable: ClassVar[bool] = True

    @property
    def description(self) -> str:
        return f"Set {_FIELD_TITLES.get(self.field, self.field)}"


@dataclass(frozen=True)
class SetGlass:
    index: int
    glass: str
    undoable: ClassVar[bool] = True

    @property
    def description(self) -> str:
        return "Set glass"


@dataclass(frozen=True)
class SetLabel:
    index: int
    label: str
    undoable: ClassVar[bool] = True

    @property
    def description(self) -> str:
        return "Set type"


@dataclass(frozen=True)
class ToggleStop:
    index: int
    checked: bool
    undoable: ClassVar[bool] = True

    @property
    def description(self) -> str:
        return "Set stop" if self.checked else "Clear stop"


@dataclass(frozen=True)
class MoveSurface:
    index: int
    direction: int  # -1 = up, +1 = down
    undoable: ClassVar[bool] = True

    @property
    def description(self) -> str:
        return "Move surface up" if self.direction < 0 else "Move surface down"


@dataclass(frozen=True)
class SetViewParameter:
    name: str
    value: Any

    @property
    def undoable(self) -> bool:
        return self.name not in DISPLAY_ONLY_PARAMETERS

    @property
    def description(self) -> str:
        return f"Set {self.name.replace('_', ' ')}"


@dataclass(frozen=True)
class NewLens:
    undoable: ClassVar[bool] = True

    @property
    def description(self) -> str:
        return "New lens"


@dataclass(frozen=True)
class LoadPreset:
    name: str
    undoable: ClassVar[bool] = True

    @property
    def description(self) -> str:
        return f"Load {PRESET_TITLES.get(self.name, self.name)}"


@dataclass(frozen=True)
class ImportDocument:
    source: str | dict[str, Any]  # JSON text or parsed document
    undoable: ClassVar[bool] = True

    @property
    def description(self) -> str:
        return "Import"


@dataclass(frozen=True)
class ExportDocument:
    undoable: ClassVar[bool] = False

    @property
    def description(self) -> str:
        return "Export"


# =====================================================================
# Dispatcher
# =====================================================================


class CommandDispatcher:
    """Applies commands to one LensSession.

    The session object and its surface list keep their identity; wholesale
    replacement (new / preset / import) swaps contents in place.
    """

    def __init__(self, session: LensSession) -> None:
        self._session = session
        self._store = SurfaceStore(session.surfaces)

    @property
    def session(self) -> LensSession:
        return self._session

    @property
    def store(self) -> SurfaceStore:
        return self._store

    def apply(self, command: Any) -> CommandResult:
        """Apply a command.

        Raises:
            TypeError: If ``command`` is not a known command type.
        """
        match command:
            case AddSurface(surface=surface):
                index = self._store.append(surface.copy() if surface else None)
                return CommandResult(True, True, f"Added surface {index + 1}")
            case RemoveSurface(index=index):
                if not self._store.remove_at(index):
                    return CommandResult()
                return CommandResult(True, True, f"Deleted surface {index + 1}")
            case SetField(index=index, field=field, value=value):
                return CommandResult(self._store.set_field(index, field, value))
            case SetGlass(index=index, glass=glass):
                return CommandResult(
                    self._store.set_glass(index, resolve_glass_name(glass)),
                )
            case SetLabel(index=index, label=label):
                return CommandResult(self._store.set_label(index, label))
            case ToggleStop(index=index, checked=checked):
                changed = self._store.set_stop(index, bool(checked))
                # Other rows' checkboxes only change when a stop is set
                return CommandResult(changed, changed and bool(checked))
            case MoveSurface(index=index, direction=direction):
                if direction < 0:
                    moved = self._store.move_up(index)
                else:
                    moved = self._store.move_down(index)
                return CommandResult(moved, moved)
            case SetViewParameter(name=name, value=value):
                return self._set_view_parameter(name, value)
            case NewLens():
                self._replace(create_preset("blank"), keep_view=True)
                return CommandResult(True, True, "New lens")
            case LoadPreset(name=name):
                try:
                    preset = create_preset(name)
                except KeyError:
                    return CommandResult(
                        message=f"Unknown preset: {name}", ok=False,
                    )
                self._replace(preset, keep_view=True)
                return CommandResult(
                    True, True, f"Loaded {PRESET_TITLES.get(name, name)}",
                )
            case ImportDocument(source=source):
                return self._import(source)
            case ExportDocument():
                document = session_to_dict(self._session)
                return CommandResult(
                    document=document,
                    message=f"Exported {len(self._session.surfaces)} surfaces",
                )
            case _:
                raise TypeError(f"Unknown command: {command!r}")

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _replace(self, other: LensSession, keep_view: bool) -> None:
        self._session.name = other.name
        self._store.replace_all(other.surfaces)
        if not keep_view:
            self._session.view = other.view

    def _import(self, source: str | dict[str, Any]) -> CommandResult:
        try:
            data = parse_document(source) if isinstance(source, str) else source
            imported = dict_to_session(data, self._session.view)
        except DocumentError as exc:
            logger.warning("Import rejected: %s", exc)
            return CommandResult(message=f"Load failed: {exc}", ok=False)
        self._replace(imported, keep_view=False)
        return CommandResult(
            True, True, f"Imported {len(imported.surfaces)} surfaces",
        )

    def _set_view_parameter(self, name: str, value: Any) -> CommandResult:
        if name not in _VIEW_PARAMETER_NAMES:
            raise ValueError(f"Unknown view parameter: {name}")
        view = self._session.view
        current = getattr(view, name)

        match name:
            case "wavelength":
                new = value if isinstance(value, WavelengthPreset) else WavelengthPreset(value)
            case "ray_count":
                new = min(max(parse_int(value, current), MIN_RAY_COUNT), MAX_RAY_COUNT)
            case "px_per_mm":
                new = clamp_scale(parse_number(value, current))
            case "sensor_width" | "sensor_height" | "flange_distance" | "field_angle":
                new = clamp_view_value(name, parse_number(value, current))
            case _ if isinstance(current, bool):
                new = parse_bool(value, current)
            case _:
                new = parse_number(value, current)

        if new == current:
            return CommandResult()
        self._session.view = replace(view, **{name: new})
        return CommandResult(True, name == "wavelength")
