"""Validation strategies attached to theme properties.

A strategy decides which values a property accepts and, for the property
carrying the mode role, which appearance ("light" or "dark") each value
resolves to.

    mono        one fixed value, which is also the base
    multi       an explicit list of values plus a base
    light_dark  a light key, a dark key and optional custom keys
    system      light_dark plus a pseudo-value resolved from the host
                preference, with a fallback when the host can't tell
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from constants import DARK, LIGHT, SYSTEM
from errors import ConfigError


class StrategyKind(Enum):
    """Name of a property strategy as used in configuration data."""

    MONO = "mono"
    MULTI = "multi"
    LIGHT_DARK = "light_dark"
    SYSTEM = "system"


@dataclass(frozen=True)
class MonoStrategy:
    """A property with exactly one allowed value."""

    kind: ClassVar[StrategyKind] = StrategyKind.MONO

    key: str
    appearance: str = LIGHT  # Only read when the property has the mode role


@dataclass(frozen=True)
class MultiStrategy:
    """A property with an explicit set of allowed values."""

    kind: ClassVar[StrategyKind] = StrategyKind.MULTI

    keys: tuple[str, ...]
    base: str
    # Appearance per key, only read when the property has the mode role
    appearances: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.base not in self.keys:
            raise ConfigError(f"base {self.base!r} is not one of the keys")


@dataclass(frozen=True)
class LightDarkStrategy:
    """A property with a light key, a dark key and optional custom keys."""

    kind: ClassVar[StrategyKind] = StrategyKind.LIGHT_DARK

    base: str
    light: str = LIGHT
    dark: str = DARK
    custom: dict[str, str] = field(default_factory=dict)  # key -> appearance

    def __post_init__(self) -> None:
        if self.base not in self.keys():
            raise ConfigError(f"base {self.base!r} is not one of the keys")

    def keys(self) -> list[str]:
        return [self.light, self.dark, *self.custom]


@dataclass(frozen=True)
class SystemStrategy(LightDarkStrategy):
    """light_dark plus a pseudo-value that follows the host preference.

    When the host can't report a preference, ``fallback`` (one of the light,
    dark or custom keys) decides the appearance. It defaults to the light key.
    """

    kind: ClassVar[StrategyKind] = StrategyKind.SYSTEM

    system: str = SYSTEM
    fallback: str | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.fallback_key not in (self.light, self.dark, *self.custom):
            raise ConfigError(f"fallback {self.fallback_key!r} must be a light, dark or custom key")

    @property
    def fallback_key(self) -> str:
        return self.fallback if self.fallback is not None else self.light

    def keys(self) -> list[str]:
        return [self.light, self.dark, self.system, *self.custom]


Strategy = MonoStrategy | MultiStrategy | LightDarkStrategy | SystemStrategy
