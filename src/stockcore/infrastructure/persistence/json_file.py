"""Shared file helpers for the JSON-backed repositories."""

from __future__ import annotations

import json
from pathlib import Path


class JsonFile:
    """A JSON array of records stored in one UTF-8 file."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def load(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        # Write-then-rename so a reader never sees a half-written file.
        tmp = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        tmp.replace(self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
