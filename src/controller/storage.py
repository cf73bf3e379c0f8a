"""StorageOwner: the persisted representation of the theme state."""

from __future__ import annotations

import logging

from constants import OBSERVE_STORAGE
from controller.events import EventBus, EventKind
from controller.validators import validate
from host.store import KeyValueStore, StorageNotification
from model import CompiledConfig, State, SyncOptions, merge_states, state_from_json, state_to_json

log = logging.getLogger(__name__)


class StorageOwner:
    """Owns the persisted theme state.

    The state is loaded lazily on first access, validated, and written back
    if the stored text was not already the canonical form of a valid state,
    so storage heals itself. When the mode property is persisted on its own,
    its raw value is mirrored under the dedicated key.

    With the "storage" observer enabled, edits of the state key made in
    another context are validated (the previous text acting as fallback)
    and published as STORAGE_CHANGED when they change the state.
    """

    def __init__(
        self,
        compiled: CompiledConfig,
        store: KeyValueStore,
        bus: EventBus,
        options: SyncOptions,
    ) -> None:
        self.compiled = compiled
        self.store = store
        self.bus = bus
        self.storage_key = options.storage_key
        self.observe = OBSERVE_STORAGE in options.observers
        self._state: State | None = None

    def _init(self) -> State:
        raw = self.store.get_item(self.storage_key)
        result = validate(self.compiled.constraints, state_from_json(raw))
        if not result.passed:
            log.debug(f"Stored state under '{self.storage_key}' was not valid, healing it")
        self._state = result.values
        self._persist(result.values)

        if self.observe:
            self.store.subscribe(self._on_notification)
        return self._state

    def _store(self, key: str, value: str) -> None:
        if self.store.get_item(key) == value:
            return
        log.debug(f"Storing '{key}' = {value}")
        self.store.set_item(key, value)

    def _persist(self, state: State) -> None:
        self._store(self.storage_key, state_to_json(state))

        mode_handling = self.compiled.mode_handling
        if mode_handling is None or not mode_handling.persist:
            return
        mode = state.get(mode_handling.prop)
        if mode:
            self._store(mode_handling.storage_key, mode)

    def read(self) -> State:
        """Return a copy of the validated persisted state."""
        if self._state is None:
            self._init()
        return dict(self._state)

    def write(self, values: State) -> None:
        """Merge values over the current state and persist the result."""
        current = self.read()
        merged = merge_states(current, values)
        if merged != current:
            self._state = merged
        self._persist(merged)

    def _on_notification(self, notification: StorageNotification) -> None:
        if notification.key != self.storage_key:
            return

        result = validate(
            self.compiled.constraints,
            state_from_json(notification.new_value),
            fallback=state_from_json(notification.old_value),
        )
        previous = self.read()
        self.write(result.values)
        if result.values != previous:
            log.debug(f"State changed in another context: {result.values}")
            self.bus.emit(EventKind.STORAGE_CHANGED, result.values)
