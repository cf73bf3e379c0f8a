"""ThemeConfig: the declarative description of the synchronized properties."""

from __future__ import annotations

from dataclasses import dataclass, field

from constants import (
    ATTRIBUTE_PREFIX,
    DEFAULT_MODE_STORAGE_KEY,
    DEFAULT_STORAGE_KEY,
)
from errors import ConfigError
from model.strategies import Strategy


@dataclass(frozen=True)
class ModeOptions:
    """Extra settings for the property that carries the mode role."""

    selectors: frozenset[str] = frozenset()  # "color-scheme" and/or "class"
    persist: bool = False  # Also store the raw mode value under storage_key
    storage_key: str = DEFAULT_MODE_STORAGE_KEY


@dataclass(frozen=True)
class PropertyConfig:
    """One synchronized property: its strategy and, optionally, the mode role."""

    strategy: Strategy
    mode: ModeOptions | None = None

    @property
    def is_mode(self) -> bool:
        return self.mode is not None


@dataclass(frozen=True)
class SyncOptions:
    """Options for the storage and presentation owners."""

    storage_key: str = DEFAULT_STORAGE_KEY
    observers: frozenset[str] = frozenset()  # "storage" and/or "presentation"
    attribute_prefix: str = ATTRIBUTE_PREFIX


@dataclass(frozen=True)
class ThemeConfig:
    """Mapping from property name to its configuration.

    At most one property may carry the mode role. A configuration without
    properties is valid and simply synchronizes nothing.
    """

    properties: dict[str, PropertyConfig] = field(default_factory=dict)
    options: SyncOptions = field(default_factory=SyncOptions)

    def __post_init__(self) -> None:
        modes = [name for name, prop in self.properties.items() if prop.is_mode]
        if len(modes) > 1:
            raise ConfigError(
                f"only one property may carry the mode role, got {', '.join(modes)}"
            )

    @property
    def mode_property(self) -> str | None:
        """Name of the property with the mode role, if any."""
        for name, prop in self.properties.items():
            if prop.is_mode:
                return name
        return None
