# storage.py
"""
Persisted key-value settings backed by a single JSON file.

Profile fields, goal lists and the accent colour all live here. Values must
be JSON-serialisable. Each write rewrites the whole file through a
temporary file and an atomic rename, so a crash mid-write leaves the
previous contents intact.
"""
import json
import logging
import os
import tempfile
from typing import Any, Dict

# --- Data Contracts ---
#
# class SettingsStore:
#   - __init__(self, path: str):
#     - Side Effects: Reads `path` if it exists. A missing file is an empty
#       store.
#     - Raises: json.JSONDecodeError or ValueError if the file is corrupt
#       or not a JSON object (after logging it).
#
#   - get(key, default=None) / set(key, value) / remove(key)
#     - set/remove persist immediately. If the write fails with OSError
#       the key goes back to its previous value before the error is
#       re-raised, so memory never runs ahead of the file.

_MISSING = object()


class SettingsStore:
    def __init__(self, path: str):
        self.path = path
        self._data: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            logging.info(f"No settings file at {self.path}; starting with empty settings.")
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError:
            logging.error(f"Error decoding settings JSON from {self.path}.")
            raise
        if not isinstance(data, dict):
            msg = f"Settings file {self.path} must contain a JSON object, got {type(data).__name__}."
            logging.error(msg)
            raise ValueError(msg)
        logging.info(f"Loaded {len(data)} settings from {self.path}.")
        return data

    def _save(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".settings-", suffix=".json")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(self._data, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except OSError:
            logging.error(f"Could not write settings to {self.path}.")
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        previous = self._data.get(key, _MISSING)
        self._data[key] = value
        try:
            self._save()
        except OSError:
            self._restore(key, previous)
            raise
        logging.debug(f"Setting '{key}' saved.")

    def remove(self, key: str) -> None:
        previous = self._data.pop(key, _MISSING)
        if previous is _MISSING:
            return
        try:
            self._save()
        except OSError:
            self._restore(key, previous)
            raise
        logging.debug(f"Setting '{key}' removed.")

    def _restore(self, key: str, previous: Any) -> None:
        # Keep memory in line with what is still on disk.
        if previous is _MISSING:
            self._data.pop(key, None)
        else:
            self._data[key] = previous
