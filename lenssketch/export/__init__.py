"""Export — lens document JSON and schematic PNG."""

from lenssketch.export.image_export import ImageExporter
from lenssketch.export.json_export import JsonExporter

__all__ = [
    "ImageExporter",
    "JsonExporter",
]
