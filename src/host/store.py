"""Key-value stores holding the persisted theme state.

A store maps string keys to string values, like browser local storage.
Edits made by *another* context sharing the same data are reported to
subscribers as StorageNotification records; a context never hears about
its own writes.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageNotification:
    """A key changed in another context."""

    key: str
    old_value: str | None
    new_value: str | None


NotificationCallback = Callable[[StorageNotification], None]


class KeyValueStore(Protocol):
    """What the storage owner needs from a host store."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def subscribe(self, callback: NotificationCallback) -> None: ...


class StorageHub:
    """Shared data behind several MemoryStore contexts."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.contexts: list[MemoryStore] = []

    def context(self) -> MemoryStore:
        """Create a new context attached to this hub."""
        return MemoryStore(hub=self)

    def broadcast(self, origin: MemoryStore, notification: StorageNotification) -> None:
        for context in list(self.contexts):
            if context is not origin:
                context.notify(notification)


class MemoryStore:
    """In-process store. Contexts created from the same hub share their data."""

    def __init__(self, hub: StorageHub | None = None) -> None:
        self.hub = hub if hub is not None else StorageHub()
        self.hub.contexts.append(self)
        self._subscribers: list[NotificationCallback] = []

    def get_item(self, key: str) -> str | None:
        return self.hub.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        old_value = self.hub.data.get(key)
        if old_value == value:
            return
        self.hub.data[key] = value
        self.hub.broadcast(self, StorageNotification(key, old_value, value))

    def remove_item(self, key: str) -> None:
        if key not in self.hub.data:
            return
        old_value = self.hub.data.pop(key)
        self.hub.broadcast(self, StorageNotification(key, old_value, None))

    def subscribe(self, callback: NotificationCallback) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def notify(self, notification: StorageNotification) -> None:
        """Deliver a notification originating from another context."""
        for callback in list(self._subscribers):
            callback(notification)


def _get_state_dir() -> Path:
    """Get the default store directory using XDG Base Directory spec.

    Entries get their own subdirectory, apart from the app log file.
    """
    xdg_state = os.environ.get("XDG_STATE_HOME", str(Path.home() / ".local" / "state"))
    return Path(xdg_state) / "themesync" / "store"


def _read_text(path: Path) -> str | None:
    """Read an entry, treating undecodable content as absent."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        log.debug(f"Ignoring undecodable store entry {path}")
        return None


class FileStore:
    """Store keeping one text file per key in a directory.

    Other processes may edit the files. Call poll() from the host loop to
    pick up those edits; writes made through this store are never reported
    back to it.
    """

    def __init__(self, directory: Path | None = None) -> None:
        self.directory = directory if directory is not None else _get_state_dir()
        self._subscribers: list[NotificationCallback] = []
        self._snapshot: dict[str, str] = self._scan()

    def _path(self, key: str) -> Path:
        if not key or "/" in key or key.startswith("."):
            raise ValueError(f"Invalid store key: {key!r}")
        return self.directory / key

    def _scan(self) -> dict[str, str]:
        if not self.directory.is_dir():
            return {}
        entries = {}
        for path in self.directory.iterdir():
            if not path.is_file() or path.name.startswith("."):
                continue
            text = _read_text(path)
            if text is not None:
                entries[path.name] = text
        return entries

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.is_file():
            return None
        return _read_text(path)

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        # Write to a temp file and rename so readers never see partial text
        tmp = path.with_name(f".{key}.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)
        self._snapshot[key] = value

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
        self._snapshot.pop(key, None)

    def subscribe(self, callback: NotificationCallback) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def poll(self) -> list[StorageNotification]:
        """Detect edits made by other processes and notify subscribers.

        Returns:
            The notifications that were delivered
        """
        current = self._scan()
        notifications = [
            StorageNotification(key, self._snapshot.get(key), current.get(key))
            for key in sorted(set(self._snapshot) | set(current))
            if self._snapshot.get(key) != current.get(key)
        ]
        self._snapshot = current
        for notification in notifications:
            log.debug(f"External edit of '{notification.key}' in {self.directory}")
            for callback in list(self._subscribers):
                callback(notification)
        return notifications
