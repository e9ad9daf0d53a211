"""
Client-side key-value storage.

Stand-in for the browser's localStorage / sessionStorage: string keys, JSON
values, no expiry. With a file path the whole map is rewritten to disk on
every change; without one it lives in memory for the session only.
"""

import json
import logging
import os
import threading

logger = logging.getLogger(__name__)

# Fixed storage keys
LANGUAGE_KEY = 'webfirm_language'
THEME_KEY = 'webfirm_theme'
MESSAGES_BACKUP_KEY = 'webfirm_messages_backup'
DETECTED_LANGUAGE_KEY = 'webfirm_detected_language'


class ClientStorage:
    """JSON-valued key-value store that never raises on I/O problems."""

    def __init__(self, path=None):
        self.path = path
        self._lock = threading.Lock()
        self._data = self._read()

    def _read(self):
        if not self.path:
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable client storage {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self):
        if not self.path:
            return
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(self._data, f, ensure_ascii=False, indent=2)
        except (OSError, TypeError) as e:
            logger.warning(f"Failed to write client storage {self.path}: {e}")

    def get(self, key, default=None):
        with self._lock:
            return self._data.get(key, default)

    def set(self, key, value):
        with self._lock:
            self._data[key] = value
            self._write()

    def remove(self, key):
        with self._lock:
            if self._data.pop(key, None) is not None:
                self._write()

    def clear(self):
        with self._lock:
            self._data = {}
            self._write()

    def keys(self):
        with self._lock:
            return list(self._data)

    def __contains__(self, key):
        with self._lock:
            return key in self._data
