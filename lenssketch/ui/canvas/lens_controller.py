"""Lens controller — central mediator between the lens session and UI.

Owns the single LensSession. Every mutation is a command routed through
CommandDispatcher; the controller adds undo checkpoints, recomputes the
metrics badges and emits Qt signals so the table and canvas repaint.
"""

from __future__ import annotations

from typing import Any

from PyQt6.QtCore import QObject, pyqtSignal

from lenssketch.core.commands import (
    AddSurface,
    CommandDispatcher,
    CommandResult,
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
from lenssketch.core.metrics import LensMetrics, MetricsEstimator
from lenssketch.core.presets import create_preset
from lenssketch.core.serializers import dict_to_session, session_to_dict
from lenssketch.core.undo_manager import UndoManager
from lenssketch.models.lens import LensSession, Surface, ViewParameters

# Commands that replace the whole surface list
_WHOLESALE = (NewLens, LoadPreset, ImportDocument)


class LensController(QObject):
    """Central mediator between LensSession and UI views.

    Signals use int row indices.
    """

    # Surface list replaced wholesale (new / preset / import / undo)
    lens_changed = pyqtSignal()
    # Row widgets stale: add, delete, move, stop set
    surfaces_rebuilt = pyqtSignal()
    # Single row field edited (index)
    surface_changed = pyqtSignal(int)
    view_changed = pyqtSignal()
    metrics_changed = pyqtSignal(object)  # LensMetrics
    status_message = pyqtSignal(str)
    # Undo/redo state changed (for menu enable/disable)
    undo_state_changed = pyqtSignal()

    def __init__(self, session: LensSession | None = None,
                 parent: QObject | None = None):
        super().__init__(parent)
        self._session = session if session is not None else create_preset("demo")
        self._dispatcher = CommandDispatcher(self._session)
        self._metrics = MetricsEstimator()
        self._undo_manager = UndoManager()
        self._updating: bool = False
        # Consecutive keystrokes in one cell share a checkpoint
        self._last_edit_key: tuple | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def session(self) -> LensSession:
        return self._session

    @property
    def surfaces(self) -> list[Surface]:
        return self._session.surfaces

    @property
    def view(self) -> ViewParameters:
        return self._session.view

    @property
    def metrics(self) -> LensMetrics:
        view = self._session.view
        return self._metrics.estimate(
            self._session.surfaces, view.flange_distance, view.stop_aware,
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def execute(self, command: Any) -> CommandResult:
        """Apply a command, record undo history and notify views."""
        if self._updating:
            return CommandResult()

        edit_key = self._edit_key(command)
        snapshot = session_to_dict(self._session) if command.undoable else None

        self._updating = True
        try:
            result = self._dispatcher.apply(command)
        finally:
            self._updating = False

        if result.changed and snapshot is not None:
            if edit_key is None or edit_key != self._last_edit_key:
                self._undo_manager.push(snapshot, command.description)
                self.undo_state_changed.emit()
            self._last_edit_key = edit_key
        elif result.changed:
            self._last_edit_key = None

        if result.changed:
            self._notify(command, result)
        if result.message:
            self.status_message.emit(result.message)
        return result

    def _edit_key(self, command: Any) -> tuple | None:
        match command:
            case SetField(index=i, field=f):
                return ("field", i, f)
            case SetLabel(index=i):
                return ("label", i)
        return None

    def _notify(self, command: Any, result: CommandResult) -> None:
        if isinstance(command, _WHOLESALE):
            self.lens_changed.emit()
            self.view_changed.emit()
        if result.rebuild_table:
            self.surfaces_rebuilt.emit()
        elif isinstance(command, SetViewParameter):
            self.view_changed.emit()
        elif hasattr(command, "index"):
            self.surface_changed.emit(command.index)
        self.metrics_changed.emit(self.metrics)

    # ------------------------------------------------------------------
    # Row operations
    # ------------------------------------------------------------------

    def add_surface(self, surface: Surface | None = None) -> None:
        self.execute(AddSurface(surface))

    def remove_surface(self, index: int) -> None:
        self.execute(RemoveSurface(index))

    def move_surface_up(self, index: int) -> None:
        self.execute(MoveSurface(index, -1))

    def move_surface_down(self, index: int) -> None:
        self.execute(MoveSurface(index, +1))

    def set_field(self, index: int, field: str, value: Any) -> None:
        self.execute(SetField(index, field, value))

    def set_glass(self, index: int, glass: str) -> None:
        self.execute(SetGlass(index, glass))

    def set_label(self, index: int, label: str) -> None:
        self.execute(SetLabel(index, label))

    def set_stop(self, index: int, checked: bool) -> None:
        self.execute(ToggleStop(index, checked))

    def set_view_parameter(self, name: str, value: Any) -> None:
        self.execute(SetViewParameter(name, value))

    # ------------------------------------------------------------------
    # Whole lens
    # ------------------------------------------------------------------

    def new_lens(self) -> None:
        self.execute(NewLens())

    def load_preset(self, name: str) -> None:
        self.execute(LoadPreset(name))

    def import_document(self, source: str | dict[str, Any]) -> bool:
        """Import JSON text or a parsed document. Returns False on rejection."""
        return self.execute(ImportDocument(source)).ok

    def export_document(self) -> dict[str, Any]:
        return self.execute(ExportDocument()).document

    # ------------------------------------------------------------------
    # Undo / Redo
    # ------------------------------------------------------------------

    @property
    def can_undo(self) -> bool:
        return self._undo_manager.can_undo

    @property
    def can_redo(self) -> bool:
        return self._undo_manager.can_redo

    @property
    def undo_description(self) -> str:
        return self._undo_manager.undo_description

    @property
    def redo_description(self) -> str:
        return self._undo_manager.redo_description

    def undo(self) -> None:
        """Revert to the previous lens state."""
        snapshot = self._undo_manager.undo(session_to_dict(self._session))
        if snapshot is not None:
            self._restore(snapshot)

    def redo(self) -> None:
        """Re-apply a previously undone lens state."""
        snapshot = self._undo_manager.redo(session_to_dict(self._session))
        if snapshot is not None:
            self._restore(snapshot)

    def clear_undo(self) -> None:
        self._undo_manager.clear()
        self._last_edit_key = None
        self.undo_state_changed.emit()

    def _restore(self, snapshot: dict[str, Any]) -> None:
        current = self._session.view
        restored = dict_to_session(snapshot, current)
        # Zoom is not part of the edit history
        restored.view.px_per_mm = current.px_per_mm

        self._session.name = restored.name
        self._dispatcher.store.replace_all(restored.surfaces)
        self._session.view = restored.view
        self._last_edit_key = None

        self.lens_changed.emit()
        self.surfaces_rebuilt.emit()
        self.view_changed.emit()
        self.metrics_changed.emit(self.metrics)
        self.undo_state_changed.emit()
