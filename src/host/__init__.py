"""Host collaborators: key-value stores, presentation targets, preference oracles."""

from host.store import FileStore, KeyValueStore, MemoryStore, StorageHub, StorageNotification
from host.target import (
    ElementTarget,
    Mutation,
    PreferenceOracle,
    PresentationTarget,
    static_preference,
    terminal_preference,
)

__all__ = [
    "FileStore",
    "KeyValueStore",
    "MemoryStore",
    "StorageHub",
    "StorageNotification",
    "ElementTarget",
    "Mutation",
    "PreferenceOracle",
    "PresentationTarget",
    "static_preference",
    "terminal_preference",
]
