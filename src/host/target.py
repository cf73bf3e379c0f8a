"""Presentation targets and host preference oracles.

A presentation target is the root node whose attributes, class tokens and
inline style mirror the theme state. Effective mutations (the value really
changed) are reported to observers as Mutation records, one callback at a
time: a mutation made while observers are running is queued and delivered
after the current callback returns.
"""

from __future__ import annotations

import logging
import os
from collections import deque
from dataclasses import dataclass
from typing import Callable, Iterable, Protocol

from constants import CLASS_ATTRIBUTE, DARK, LIGHT, STYLE_ATTRIBUTE

log = logging.getLogger(__name__)

PreferenceOracle = Callable[[], str | None]


@dataclass(frozen=True)
class Mutation:
    """One effective attribute change on a presentation target."""

    attribute_name: str
    old_value: str | None


MutationCallback = Callable[[Mutation], None]


class PresentationTarget(Protocol):
    """What the presentation owner needs from a host node."""

    def get_attribute(self, name: str) -> str | None: ...

    def set_attribute(self, name: str, value: str) -> None: ...

    def has_class(self, token: str) -> bool: ...

    def add_class(self, token: str) -> None: ...

    def remove_class(self, token: str) -> None: ...

    def replace_class(self, old: str, new: str) -> bool: ...

    def get_style(self, name: str) -> str | None: ...

    def set_style(self, name: str, value: str) -> None: ...

    def observe(
        self, callback: MutationCallback, attribute_filter: Iterable[str]
    ) -> Callable[[], None]: ...


class ObservableTarget:
    """Observer bookkeeping and queued delivery shared by concrete targets."""

    def __init__(self) -> None:
        self._observers: list[tuple[MutationCallback, frozenset[str]]] = []
        self._pending: deque[Mutation] = deque()
        self._delivering = False

    def observe(
        self, callback: MutationCallback, attribute_filter: Iterable[str]
    ) -> Callable[[], None]:
        """Report mutations of the named attributes to callback.

        Returns:
            A callable that stops the observation
        """
        entry = (callback, frozenset(attribute_filter))
        self._observers.append(entry)

        def disconnect() -> None:
            if entry in self._observers:
                self._observers.remove(entry)

        return disconnect

    def _record(self, attribute_name: str, old_value: str | None) -> None:
        if not self._observers:
            return
        self._pending.append(Mutation(attribute_name, old_value))
        if self._delivering:
            return
        self._delivering = True
        try:
            while self._pending:
                mutation = self._pending.popleft()
                for callback, attribute_filter in list(self._observers):
                    if mutation.attribute_name in attribute_filter:
                        callback(mutation)
        finally:
            self._delivering = False
            self._pending.clear()


class ElementTarget(ObservableTarget):
    """In-memory root node: attributes, ordered class tokens and inline style."""

    def __init__(self) -> None:
        super().__init__()
        self.attributes: dict[str, str] = {}
        self.classes: list[str] = []
        self.style: dict[str, str] = {}

    def __repr__(self) -> str:
        return f"ElementTarget(attributes={self.attributes}, classes={self.classes}, style={self.style})"

    # Attributes

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        old_value = self.attributes.get(name)
        if old_value == value:
            return
        self.attributes[name] = value
        self._record(name, old_value)

    def remove_attribute(self, name: str) -> None:
        if name not in self.attributes:
            return
        old_value = self.attributes.pop(name)
        self._record(name, old_value)

    # Class tokens

    def class_text(self) -> str:
        return " ".join(self.classes)

    def has_class(self, token: str) -> bool:
        return token in self.classes

    def add_class(self, token: str) -> None:
        if token in self.classes:
            return
        old_value = self.class_text()
        self.classes.append(token)
        self._record(CLASS_ATTRIBUTE, old_value)

    def remove_class(self, token: str) -> None:
        if token not in self.classes:
            return
        old_value = self.class_text()
        self.classes.remove(token)
        self._record(CLASS_ATTRIBUTE, old_value)

    def replace_class(self, old: str, new: str) -> bool:
        """Replace old with new in place. Returns False if old is absent."""
        if old not in self.classes:
            return False
        old_value = self.class_text()
        index = self.classes.index(old)
        if new in self.classes:
            self.classes.remove(old)
        else:
            self.classes[index] = new
        self._record(CLASS_ATTRIBUTE, old_value)
        return True

    # Inline style

    def style_text(self) -> str:
        return "; ".join(f"{name}: {value}" for name, value in self.style.items())

    def get_style(self, name: str) -> str | None:
        return self.style.get(name)

    def set_style(self, name: str, value: str) -> None:
        if self.style.get(name) == value:
            return
        old_value = self.style_text()
        self.style[name] = value
        self._record(STYLE_ATTRIBUTE, old_value)


# =============================================================================
# Preference oracles
# =============================================================================

def static_preference(value: str | None) -> PreferenceOracle:
    """Oracle that always reports value ("light", "dark" or None)."""
    return lambda: value


def terminal_preference() -> str | None:
    """Guess the terminal appearance from COLORFGBG.

    Terminals such as rxvt and Konsole export "fg;bg" (sometimes
    "fg;default;bg") with ANSI color indices. A background of 7 or 9-15
    is a light terminal; 0-6 and 8 are dark.

    Returns:
        "light", "dark", or None if the variable is missing or unreadable
    """
    raw = os.environ.get("COLORFGBG")
    if not raw:
        return None
    background = raw.split(";")[-1].strip()
    if not background.isdigit():
        log.debug(f"Unreadable COLORFGBG: {raw!r}")
        return None
    index = int(background)
    if index == 7 or 9 <= index <= 15:
        return LIGHT
    if 0 <= index <= 8:
        return DARK
    return None
