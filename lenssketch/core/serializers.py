"""Serialization utilities — LensSession <-> exchange document dict.

Document layout (JSON)::

    {
      "meta": {"tool": "lens-sketch", "v": 1},
      "name": "...",
      "sensor": {"w": 36, "h": 24},
      "flange": 52,
      "params": {"fieldAngle": 10, "rayCount": 31, "pxPerMm": 4, "stopAware": true},
      "surfaces": [{"R": 0, "t": 3, "ap": 14, "glassAfter": "AIR",
                    "isStop": false, "type": ""}, ...]
    }

Import is lenient: only ``surfaces`` is required, every field is coerced
with a fallback, and view entries that are absent keep their current
values. Used by the command layer, undo snapshots and the JSON exporter.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any

from lenssketch.constants import (
    APERTURE_FALLBACK,
    DEFAULT_GLASS,
    DOCUMENT_TOOL,
    DOCUMENT_VERSION,
    MAX_RAY_COUNT,
    MIN_RAY_COUNT,
    RADIUS_FALLBACK,
    THICKNESS_FALLBACK,
    VIEW_PARAMETER_LIMITS,
)
from lenssketch.core.geometry_mapper import clamp_scale
from lenssketch.core.glass_catalog import resolve_glass_name
from lenssketch.core.parsing import parse_bool, parse_int, parse_number
from lenssketch.core.surface_store import SurfaceStore
from lenssketch.models.lens import LensSession, Surface, ViewParameters

logger = logging.getLogger(__name__)


class DocumentError(ValueError):
    """Malformed or incomplete lens document."""


# =====================================================================
# Surfaces
# =====================================================================


def surface_to_dict(surface: Surface) -> dict[str, Any]:
    d: dict[str, Any] = {
        "R": surface.radius,
        "t": surface.thickness,
        "ap": surface.semi_aperture,
        "glassAfter": surface.glass_after,
        "isStop": surface.is_stop,
    }
    if surface.label:
        d["type"] = surface.label
    return d


def dict_to_surface(d: Any) -> Surface:
    """Build a Surface from a document entry, substituting fallbacks.

    Non-dict entries yield a surface made entirely of fallbacks.
    """
    if not isinstance(d, dict):
        d = {}
    label = d.get("type")
    glass = d.get("glassAfter", DEFAULT_GLASS)
    return Surface(
        radius=parse_number(d.get("R"), RADIUS_FALLBACK),
        thickness=parse_number(d.get("t"), THICKNESS_FALLBACK),
        semi_aperture=parse_number(d.get("ap"), APERTURE_FALLBACK),
        glass_after=DEFAULT_GLASS if glass is None else resolve_glass_name(glass),
        is_stop=parse_bool(d.get("isStop"), False),
        label="" if label is None else str(label),
    )


# =====================================================================
# Session
# =====================================================================


def session_to_dict(session: LensSession) -> dict[str, Any]:
    """Serialize a session into the exchange document layout."""
    view = session.view
    return {
        "meta": {"tool": DOCUMENT_TOOL, "v": DOCUMENT_VERSION},
        "name": session.name,
        "sensor": {"w": view.sensor_width, "h": view.sensor_height},
        "flange": view.flange_distance,
        "params": {
            "fieldAngle": view.field_angle,
            "rayCount": view.ray_count,
            "pxPerMm": view.px_per_mm,
            "stopAware": view.stop_aware,
        },
        "surfaces": [surface_to_dict(s) for s in session.surfaces],
    }


def clamp_view_value(name: str, value: float) -> float:
    """Clamp a numeric view parameter to its editable range."""
    lo, hi = VIEW_PARAMETER_LIMITS[name]
    return min(max(value, lo), hi)


def _merge_view(data: dict[str, Any], current: ViewParameters) -> ViewParameters:
    view = replace(current)

    sensor = data.get("sensor")
    if isinstance(sensor, dict):
        view.sensor_width = clamp_view_value(
            "sensor_width", parse_number(sensor.get("w"), view.sensor_width),
        )
        view.sensor_height = clamp_view_value(
            "sensor_height", parse_number(sensor.get("h"), view.sensor_height),
        )

    if "flange" in data:
        view.flange_distance = clamp_view_value(
            "flange_distance", parse_number(data.get("flange"), view.flange_distance),
        )

    params = data.get("params")
    if isinstance(params, dict):
        view.field_angle = clamp_view_value(
            "field_angle", parse_number(params.get("fieldAngle"), view.field_angle),
        )
        ray_count = parse_int(params.get("rayCount"), view.ray_count)
        view.ray_count = min(max(ray_count, MIN_RAY_COUNT), MAX_RAY_COUNT)
        if "pxPerMm" in params:
            view.px_per_mm = clamp_scale(
                parse_number(params.get("pxPerMm"), view.px_per_mm),
            )
        view.stop_aware = parse_bool(params.get("stopAware"), view.stop_aware)

    return view


def dict_to_session(
    data: Any, current_view: ViewParameters | None = None,
) -> LensSession:
    """Deserialize a document dict into a new LensSession.

    Args:
        data: Parsed document.
        current_view: View parameters to start from; entries present in
            the document overwrite them. Defaults to ViewParameters().

    Raises:
        DocumentError: If ``data`` is not an object or has no ``surfaces`` list.
    """
    if not isinstance(data, dict):
        raise DocumentError("Invalid lens document: expected a JSON object.")
    surfaces = data.get("surfaces")
    if not isinstance(surfaces, list):
        raise DocumentError("Invalid lens document: 'surfaces' list is missing.")

    meta = data.get("meta")
    if isinstance(meta, dict) and meta.get("tool") not in (None, DOCUMENT_TOOL):
        logger.info("Importing document written by %r", meta.get("tool"))

    store = SurfaceStore([dict_to_surface(s) for s in surfaces])
    store.enforce_single_stop()

    name = data.get("name")
    return LensSession(
        name=str(name) if name else "No name",
        surfaces=store.surfaces,
        view=_merge_view(data, current_view or ViewParameters()),
    )


def parse_document(text: str) -> dict[str, Any]:
    """Parse JSON text and check the document shape.

    Raises:
        DocumentError: On unparsable JSON or a missing ``surfaces`` list.
    """
    try:
        data = json.loads(text)
    except (ValueError, RecursionError, TypeError) as exc:
        raise DocumentError(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict) or not isinstance(data.get("surfaces"), list):
        raise DocumentError("Invalid lens document: 'surfaces' list is missing.")
    return data
