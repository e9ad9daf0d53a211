"""
Flat-file message store for FastAPI.

All messages live in one JSON array. Every mutation loads the whole file and
writes it back; there is no locking, so concurrent writers race and the last
full write wins. Blocking file I/O runs in the default executor.
"""

import asyncio
import json
import logging
import os
import time
from datetime import datetime, timezone
from functools import partial

logger = logging.getLogger(__name__)


class MessageStoreError(Exception):
    """The messages file could not be written."""


def now_iso():
    """UTC timestamp in the JavaScript ``toISOString`` format."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class MessageStore:
    """Contact messages persisted as a JSON array in ``path``."""

    def __init__(self, path, clock=time.time):
        self.path = path
        self.clock = clock

    def ensure_file(self):
        """Create the data directory and an empty messages file if missing."""
        try:
            if not os.path.exists(self.path):
                self._write([])
        except OSError as e:
            raise MessageStoreError(f"Cannot initialise {self.path}: {e}") from e

    def load(self):
        """Return every stored message, oldest first. Unreadable file -> []."""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                messages = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading messages from {self.path}: {e}")
            return []
        return messages if isinstance(messages, list) else []

    def _write(self, messages):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(messages, f, ensure_ascii=False, indent=2)

    def save(self, messages):
        try:
            self._write(messages)
        except (OSError, TypeError) as e:
            logger.error(f"Error saving messages to {self.path}: {e}")
            raise MessageStoreError(f"Failed to write {self.path}: {e}") from e

    def add(self, name, email, message, ip=None, user_agent=None):
        """Append a new message and return it."""
        messages = self.load()
        # Millisecond timestamp id, bumped on collision
        taken = {m.get('id') for m in messages}
        stamp = int(self.clock() * 1000)
        while str(stamp) in taken:
            stamp += 1
        record = {
            'id': str(stamp),
            'name': name,
            'email': email,
            'message': message,
            'timestamp': now_iso(),
            'ip': ip,
            'userAgent': user_agent,
            'status': 'new',
        }
        messages.append(record)
        self.save(messages)
        return record

    def list_newest_first(self):
        return list(reversed(self.load()))

    def mark_as_read(self, message_id):
        """Mark one message read. Returns the updated message or None if unknown."""
        messages = self.load()
        for record in messages:
            if record.get('id') == message_id:
                record['status'] = 'read'
                record['readAt'] = now_iso()
                self.save(messages)
                return record
        return None

    def clear(self):
        """Delete every message. Returns how many were removed."""
        count = len(self.load())
        self.save([])
        return count


async def run_sync(fn, *args, **kwargs):
    """Run a synchronous function in the default executor."""
    loop = asyncio.get_running_loop()
    if kwargs:
        return await loop.run_in_executor(None, partial(fn, *args, **kwargs))
    return await loop.run_in_executor(None, partial(fn, *args))
