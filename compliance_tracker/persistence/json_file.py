"""JSON file store for a single local installation."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from compliance_tracker.exceptions import StoreError

logger = logging.getLogger(__name__)


class JsonFileStore:
    """Key-value store persisted as one JSON document on disk.

    Every ``set``/``remove`` rewrites the whole document before returning,
    via a temporary file and an atomic rename.
    """

    def __init__(self, path: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file store.

        Parameters
        ----------
        path : str | Path
            Location of the JSON document; parent directories are created.
        pretty : bool
            Pretty-print the document.
        """
        self.path = Path(path)
        self.pretty = pretty
        self._data: dict[str, str] = self._read()

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StoreError(f"Store values must be strings, got {type(value).__name__} for {key}")
        data = dict(self._data)
        data[key] = value
        self._write(data)
        self._data = data

    def remove(self, key: str) -> None:
        if key not in self._data:
            return
        data = dict(self._data)
        del data[key]
        self._write(data)
        self._data = data

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.warning("Store file %s is unreadable, starting empty: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store file %s does not hold an object, starting empty", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    if self.pretty:
                        json.dump(data, f, indent=2, ensure_ascii=False)
                    else:
                        json.dump(data, f, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StoreError(f"Cannot write store file {self.path}: {exc}") from exc
        logger.debug("Wrote %d keys to %s", len(data), self.path)
