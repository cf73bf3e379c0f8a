"""PresentationOwner: attributes and appearance mirrors on the presentation target."""

from __future__ import annotations

import logging

from constants import (
    APPEARANCES,
    CLASS_ATTRIBUTE,
    DARK,
    LIGHT,
    OBSERVE_PRESENTATION,
    SELECTOR_CLASS,
    SELECTOR_COLOR_SCHEME,
    STYLE_ATTRIBUTE,
)
from controller.events import EventBus, EventKind
from controller.validators import validate
from errors import NotInitializedError
from host.target import Mutation, PreferenceOracle, PresentationTarget
from model import CompiledConfig, State, SyncOptions, merge_states

log = logging.getLogger(__name__)


class PresentationOwner:
    """Owns the presentation side effects of the theme state.

    Each property is written to one attribute (prefix + property name). The
    mode property is additionally resolved to an appearance ("light" or
    "dark") and mirrored on the configured selectors:

        color-scheme  inline style ``color-scheme: <appearance>``
        class         a ``light`` or ``dark`` class token

    Nothing is written when the target already holds the value, so external
    observers of the target only see real changes.

    With the "presentation" observer enabled, external edits of the owned
    attributes are validated (the previous attribute value acting as
    fallback), healed on the target, and published as PRESENTATION_CHANGED
    when they change the state. External edits of the mirrors are reverted:
    the mode value is the source of truth for the appearance.
    """

    def __init__(
        self,
        compiled: CompiledConfig,
        target: PresentationTarget,
        bus: EventBus,
        options: SyncOptions,
        preference: PreferenceOracle | None = None,
    ) -> None:
        self.compiled = compiled
        self.target = target
        self.bus = bus
        self.prefix = options.attribute_prefix
        self.observe = OBSERVE_PRESENTATION in options.observers
        self.preference = preference
        self._state: State | None = None
        self._resolved_mode: str | None = None
        self._disconnect = None

    def attribute_name(self, prop: str) -> str:
        return f"{self.prefix}{prop}"

    @property
    def selectors(self) -> frozenset[str]:
        mode_handling = self.compiled.mode_handling
        return mode_handling.selectors if mode_handling else frozenset()

    @property
    def resolved_mode(self) -> str | None:
        """Appearance currently mirrored on the target (None without a mode property)."""
        if self._state is None:
            raise NotInitializedError("PresentationOwner has not been written yet")
        return self._resolved_mode

    def read(self) -> State:
        """Return a copy of the presentation state."""
        if self._state is None:
            raise NotInitializedError("PresentationOwner has not been written yet")
        return dict(self._state)

    def write(self, values: State) -> None:
        """Merge values over the current state and apply the result to the target."""
        first_write = self._state is None
        self._state = merge_states(self._state, values)
        self._resolved_mode = self.resolve_mode(self._state)

        for prop, value in self._state.items():
            name = self.attribute_name(prop)
            if self.target.get_attribute(name) != value:
                log.debug(f"Setting {name}={value}")
                self.target.set_attribute(name, value)
        self._apply_resolved_mode()

        if first_write and self.observe:
            self._start_observing()

    def refresh(self) -> None:
        """Re-resolve the appearance, e.g. after the host preference changed."""
        if self._state is None:
            return
        self._resolved_mode = self.resolve_mode(self._state)
        self._apply_resolved_mode()

    def close(self) -> None:
        """Stop observing the target."""
        if self._disconnect is not None:
            self._disconnect()
            self._disconnect = None

    # =========================================================================
    # Mode resolution
    # =========================================================================

    def _system_preference(self) -> str | None:
        if self.preference is None:
            return None
        preference = self.preference()
        return preference if preference in APPEARANCES else None

    def resolve_mode(self, state: State) -> str | None:
        """Resolve the mode value in state to an appearance."""
        mode_handling = self.compiled.mode_handling
        if mode_handling is None:
            return None
        mode = state.get(mode_handling.prop)
        if not mode:
            return None

        system = mode_handling.system
        if system is not None and mode == system.value:
            preference = self._system_preference()
            if preference is not None:
                return preference
            return mode_handling.resolved_modes.get(system.fallback)

        return mode_handling.resolved_modes.get(mode)

    def _apply_resolved_mode(self) -> None:
        resolved = self._resolved_mode
        if resolved is None:
            return

        if SELECTOR_COLOR_SCHEME in self.selectors:
            if self.target.get_style(SELECTOR_COLOR_SCHEME) != resolved:
                self.target.set_style(SELECTOR_COLOR_SCHEME, resolved)

        if SELECTOR_CLASS in self.selectors:
            other = DARK if resolved == LIGHT else LIGHT
            has_resolved = self.target.has_class(resolved)
            has_other = self.target.has_class(other)
            if has_other and has_resolved:
                self.target.remove_class(other)
            elif has_other:
                self.target.replace_class(other, resolved)
            elif not has_resolved:
                self.target.add_class(resolved)

    # =========================================================================
    # Observation of external edits
    # =========================================================================

    def _start_observing(self) -> None:
        attribute_filter = {self.attribute_name(prop) for prop in self.compiled.constraints}
        if SELECTOR_COLOR_SCHEME in self.selectors:
            attribute_filter.add(STYLE_ATTRIBUTE)
        if SELECTOR_CLASS in self.selectors:
            attribute_filter.add(CLASS_ATTRIBUTE)
        self._disconnect = self.target.observe(self._on_mutation, attribute_filter)

    def _on_mutation(self, mutation: Mutation) -> None:
        name = mutation.attribute_name
        if name in (STYLE_ATTRIBUTE, CLASS_ATTRIBUTE):
            log.debug(f"Reconciling external edit of '{name}'")
            self._apply_resolved_mode()
            return

        if not name.startswith(self.prefix):
            return
        prop = name[len(self.prefix):]
        if prop not in self.compiled.constraints:
            return

        candidate = {}
        new_value = self.target.get_attribute(name)
        if new_value is not None:
            candidate[prop] = new_value
        fallback = {prop: mutation.old_value} if mutation.old_value is not None else None
        value = validate(self.compiled.constraints, candidate, fallback).values[prop]

        previous = self._state.get(prop)
        self.write({prop: value})
        if value != previous:
            log.debug(f"External edit of {name}: {previous!r} -> {value!r}")
            self.bus.emit(EventKind.PRESENTATION_CHANGED, {prop: value})
