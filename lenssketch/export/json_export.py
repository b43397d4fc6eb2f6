"""JSON lens export/import.

Writes the exchange document as formatted UTF-8 JSON; reading returns
the parsed document, validated for shape only. Applying it to a session
is the ImportDocument command's job.
"""

from __future__ import annotations

import json
from typing import Any

from lenssketch.core.serializers import DocumentError, parse_document
from lenssketch.models.lens import LensSession


class JsonExporter:
    """JSON lens file operations."""

    def export_document(self, document: dict[str, Any], output_path: str) -> None:
        """Write an already-built document as formatted JSON.

        Args:
            document: Exchange document (from session_to_dict).
            output_path: Destination file path (.json).
        """
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2, ensure_ascii=False)

    def read_document(self, input_path: str) -> dict[str, Any]:
        """Read and shape-check a lens document.

        Raises:
            OSError: If the file cannot be read.
            DocumentError: If the text is not a lens document.
        """
        try:
            with open(input_path, "r", encoding="utf-8") as f:
                text = f.read()
        except UnicodeDecodeError as exc:
            raise DocumentError(f"Not a UTF-8 text file: {exc}") from exc
        return parse_document(text)

    @staticmethod
    def default_filename(session: LensSession) -> str:
        return f"{session.name or 'lens'}.json"
