"""
JSON File Storage Implementation

DESIGN DECISION: All persisted state lives in ONE JSON document on disk,
a flat object of {key: string}. This mirrors browser local storage:
- No database setup required
- The file can be inspected or deleted by hand
- Deleting the file brings back the demo dataset

TRADEOFFS:
- Every write rewrites the whole document (fine for a personal ledger)
- No concurrent writers; the app is single-user
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog

from balance_book.services.storage.interface import KeyValueBackend, StorageError


logger = structlog.get_logger(__name__)


class JsonFileKeyValueBackend(KeyValueBackend):
    """
    Key-value backend persisted to a single JSON file.

    The document is read once on first access and kept in memory;
    every set/delete writes it back atomically (temp file + rename).
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._data: Optional[dict[str, str]] = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if self._data is not None:
            return self._data

        if not self._path.exists():
            self._data = {}
            return self._data

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read state file {self._path}: {e}") from e

        if not isinstance(raw, dict):
            raise StorageError(f"State file {self._path} is not a JSON object")

        self._data = {str(k): str(v) for k, v in raw.items()}
        logger.debug("state_file_loaded", path=str(self._path), keys=len(self._data))
        return self._data

    def _flush(self) -> None:
        data = self._load()
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except OSError as e:
            raise StorageError(f"Could not write state file {self._path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        self._load()[key] = value
        self._flush()

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._flush()
