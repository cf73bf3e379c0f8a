"""Synchronous event bus coupling the owners and the sync manager."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from model import State

log = logging.getLogger(__name__)

Callback = Callable[[State], None]


class EventKind(Enum):
    """Events published on the bus."""

    PRESENTATION_CHANGED = "presentation-changed"  # External edit of the target
    STORAGE_CHANGED = "storage-changed"  # Edit from another storage context
    STATE_CHANGED = "state-changed"  # Published state actually changed


class EventBus:
    """Typed publish/subscribe register.

    Subscribing the same callback twice has no effect. Emission is
    synchronous; a handler may emit again while being called.
    """

    def __init__(self) -> None:
        # dict preserves subscription order and gives set semantics
        self._handlers: dict[EventKind, dict[Callback, None]] = {kind: {} for kind in EventKind}

    def on(self, kind: EventKind, callback: Callback) -> None:
        """Register callback for kind."""
        self._handlers[kind][callback] = None

    def off(self, kind: EventKind, callback: Callback) -> None:
        """Unregister callback for kind (no-op if not registered)."""
        self._handlers[kind].pop(callback, None)

    def emit(self, kind: EventKind, state: State) -> None:
        """Call every handler of kind with a copy of state."""
        handlers = list(self._handlers[kind])
        log.debug(f"Emitting {kind.value} to {len(handlers)} handler(s): {state}")
        for handler in handlers:
            handler(dict(state))
