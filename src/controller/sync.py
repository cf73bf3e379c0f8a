"""ThemeSyncManager: the authoritative in-memory theme state.

Keeps three representations of the theme state converged:

1. **Storage** (StorageOwner): the persisted key-value entry.
2. **Presentation** (PresentationOwner): attributes and appearance mirrors
   on the presentation target.
3. **State** (this class): the published mapping application code reads
   and subscribes to.

Every change, whatever its origin, goes through one merge step: validate
against the current state as fallback, merge, and only if the merge made a
difference write through to both owners and emit STATE_CHANGED. Owners only
write (and so only notify) on real differences, which is what keeps
changes from bouncing between the representations forever.

Example usage:
    sync = ThemeSyncManager(config, store=MemoryStore(), target=ElementTarget())
    sync.subscribe(lambda state: print(state))
    sync.update("mode", "dark")
"""

from __future__ import annotations

import logging
from typing import Callable

from controller.events import EventBus, EventKind
from controller.presentation import PresentationOwner
from controller.storage import StorageOwner
from controller.validators import validate
from errors import NotInitializedError
from host.store import KeyValueStore
from host.target import PreferenceOracle, PresentationTarget
from model import State, ThemeConfig, compile_config, merge_states

log = logging.getLogger(__name__)


class ThemeSyncManager:
    """Owns the published theme state and couples storage and presentation.

    Construct exactly one per store/target pair and pass it to whatever
    needs the state.
    """

    def __init__(
        self,
        config: ThemeConfig,
        store: KeyValueStore,
        target: PresentationTarget,
        preference: PreferenceOracle | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self.config = config
        self.compiled = compile_config(config)
        self.bus = bus if bus is not None else EventBus()
        self.storage = StorageOwner(self.compiled, store, self.bus, config.options)
        self.presentation = PresentationOwner(
            self.compiled, target, self.bus, config.options, preference=preference
        )
        self._state: State | None = None

        self._state = self.storage.read()
        self.presentation.write(self._state)
        log.debug(f"Initialized theme state: {self._state}")

        self.bus.on(EventKind.PRESENTATION_CHANGED, self._merge)
        self.bus.on(EventKind.STORAGE_CHANGED, self._merge)

    @property
    def state(self) -> State:
        """A copy of the current state."""
        if self._state is None:
            raise NotInitializedError("ThemeSyncManager state read before initialization")
        return dict(self._state)

    @property
    def resolved_mode(self) -> str | None:
        """Appearance the mode property currently resolves to."""
        return self.presentation.resolved_mode

    def _merge(self, incoming: State) -> None:
        current = self.state
        result = validate(self.compiled.constraints, incoming, fallback=current)
        merged = merge_states(current, result.values)
        if merged == current:
            log.debug(f"No net change from {incoming}")
            return

        self._state = merged
        self.storage.write(merged)
        self.presentation.write(merged)
        log.debug(f"State changed: {current} -> {merged}")
        self.bus.emit(EventKind.STATE_CHANGED, merged)

    def update(self, prop: str, value: str) -> None:
        """Set one property. Invalid values keep the current value."""
        self._merge({prop: value})

    def set_state(self, values: State) -> None:
        """Set several properties in one merge step."""
        self._merge(dict(values))

    def subscribe(self, callback: Callable[[State], None]) -> Callable[[], None]:
        """Call callback with the new state whenever it changes.

        Returns:
            A callable that removes the subscription
        """
        self.bus.on(EventKind.STATE_CHANGED, callback)
        return lambda: self.bus.off(EventKind.STATE_CHANGED, callback)

    def refresh(self) -> None:
        """Re-resolve the appearance after the host preference changed."""
        self.presentation.refresh()

    def close(self) -> None:
        """Stop reacting to external edits."""
        self.bus.off(EventKind.PRESENTATION_CHANGED, self._merge)
        self.bus.off(EventKind.STORAGE_CHANGED, self._merge)
        self.presentation.close()
