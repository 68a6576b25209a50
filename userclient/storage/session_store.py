"""
userclient/storage/session_store.py

Purpose: Durable key-value storage for the active user

- Small synchronous get/set/remove interface
- In-memory implementation for tests and short-lived processes
- JSON file implementation that survives process restarts
"""

import json
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from userclient.core.logging import get_logger

logger = get_logger(__name__)

# Key holding the id of the logged-in user
ACTIVE_USER_ID_KEY = "userId"


class SessionStorage(Protocol):
    """Interface the user service needs from its storage."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class InMemorySessionStorage:
    """Process-local storage, lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()


class FileSessionStorage:
    """
    Storage persisted as a flat JSON object in a single file.

    The file is re-read on every access so separate processes pointed at the
    same path see each other's writes. Writes go through a temporary file and
    a rename so a crash never leaves half-written JSON behind.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}

        try:
            data = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError:
            logger.warning(f"Session store {self.path} is not valid JSON, starting empty")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Session store {self.path} does not hold an object, starting empty")
            return {}

        return data

    def _dump(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Unique temp name per write; concurrent writers never share it
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.path.parent,
            prefix=self.path.name + ".",
            suffix=".tmp",
            delete=False
        ) as tmp_file:
            json.dump(data, tmp_file)
        Path(tmp_file.name).replace(self.path)

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = str(value)
        self._dump(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)
