# foodregistry/client/view_preferences.py
# JSON-file key/value store playing the role of browser local storage.

import json
import os
import threading
from typing import Dict, Optional

from foodregistry.utils.logger import logger


class ViewPreferenceStore:
    """
    String key/value pairs persisted to a JSON file, read back by any later
    instance pointing at the same path.
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    def set_item(self, key: str, value: str):
        with self._lock:
            data = self._read()
            data[key] = str(value)
            self._write(data)

    def remove_item(self, key: str):
        with self._lock:
            data = self._read()
            if data.pop(key, None) is not None:
                self._write(data)

    def clear(self):
        with self._lock:
            self._write({})

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            logger.warning(f"Preference file {self.path} unreadable, starting empty: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Preference file {self.path} does not hold an object, ignoring it.")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: Dict[str, str]):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, 'w', encoding='utf-8') as fh:
            json.dump(data, fh, indent=2, sort_keys=True)
        os.replace(tmp_path, self.path)
