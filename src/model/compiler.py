"""Compile a ThemeConfig into validation constraints and mode metadata.

Compilation runs once per ThemeSync; the result is immutable and shared by
the validator and every owner.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from constants import DARK, LIGHT
from model.config import PropertyConfig, ThemeConfig
from model.strategies import (
    MonoStrategy,
    MultiStrategy,
    StrategyKind,
    SystemStrategy,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Constraint:
    """Allowed values of one property and the value used when nothing valid is known."""

    base: str
    allowed: frozenset[str]


@dataclass(frozen=True)
class SystemHandling:
    """The pseudo-value that follows the host preference, and its fallback."""

    value: str
    fallback: str


@dataclass(frozen=True)
class ModeHandling:
    """Resolution metadata for the property carrying the mode role."""

    prop: str
    strategy: StrategyKind
    resolved_modes: Mapping[str, str]  # value -> "light" | "dark"
    system: SystemHandling | None
    selectors: frozenset[str]
    persist: bool
    storage_key: str


@dataclass(frozen=True)
class CompiledConfig:
    """Derived, read-only view of a ThemeConfig."""

    constraints: Mapping[str, Constraint]
    mode_handling: ModeHandling | None


def compile_constraint(prop: PropertyConfig) -> Constraint:
    """Compute the allowed set and base value of one property."""
    strategy = prop.strategy
    if isinstance(strategy, MonoStrategy):
        return Constraint(base=strategy.key, allowed=frozenset([strategy.key]))
    if isinstance(strategy, MultiStrategy):
        return Constraint(base=strategy.base, allowed=frozenset(strategy.keys))
    # LightDarkStrategy and SystemStrategy both list their own keys
    return Constraint(base=strategy.base, allowed=frozenset(strategy.keys()))


def compile_resolved_modes(prop: PropertyConfig) -> dict[str, str]:
    """Map every declared key of the mode property to its appearance.

    The system pseudo-value is absent: it has no fixed
    appearance and is resolved against the host preference instead.
    """
    strategy = prop.strategy
    if isinstance(strategy, MonoStrategy):
        return {strategy.key: strategy.appearance}
    if isinstance(strategy, MultiStrategy):
        return {key: strategy.appearances[key] for key in strategy.keys if key in strategy.appearances}

    resolved = {strategy.light: LIGHT, strategy.dark: DARK}
    resolved.update(strategy.custom)
    return resolved


def compile_mode_handling(name: str, prop: PropertyConfig) -> ModeHandling:
    """Build the ModeHandling of the property carrying the mode role."""
    strategy = prop.strategy
    system = None
    if isinstance(strategy, SystemStrategy):
        system = SystemHandling(value=strategy.system, fallback=strategy.fallback_key)

    return ModeHandling(
        prop=name,
        strategy=strategy.kind,
        resolved_modes=MappingProxyType(compile_resolved_modes(prop)),
        system=system,
        selectors=frozenset(prop.mode.selectors),
        persist=prop.mode.persist,
        storage_key=prop.mode.storage_key,
    )


def compile_config(config: ThemeConfig) -> CompiledConfig:
    """Derive constraints and mode handling from a ThemeConfig."""
    constraints = {}
    mode_handling = None

    for name, prop in config.properties.items():
        constraints[name] = compile_constraint(prop)
        if prop.is_mode:
            mode_handling = compile_mode_handling(name, prop)

    log.debug(
        f"Compiled {len(constraints)} properties"
        + (f", mode property '{mode_handling.prop}'" if mode_handling else "")
    )
    return CompiledConfig(
        constraints=MappingProxyType(constraints),
        mode_handling=mode_handling,
    )
