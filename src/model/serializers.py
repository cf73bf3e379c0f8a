"""Build a ThemeConfig from parsed JSON data.

Expected shape:

    {
        "storage_key": "themesync",
        "observers": ["storage", "presentation"],
        "properties": {
            "mode": {
                "type": "mode",
                "strategy": "system",
                "base": "system",
                "fallback": "light",
                "custom": {"dim": "dark"},
                "selectors": ["color-scheme", "class"],
                "persist": true,
                "storage_key": "theme"
            },
            "radius": {"strategy": "multi", "keys": ["sm", "md", "lg"], "base": "md"},
            "brand": {"strategy": "mono", "key": "acme"}
        }
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from constants import (
    APPEARANCES,
    ATTRIBUTE_PREFIX,
    DARK,
    DEFAULT_MODE_STORAGE_KEY,
    DEFAULT_STORAGE_KEY,
    LIGHT,
    OBSERVERS,
    SELECTORS,
    SYSTEM,
)
from errors import ConfigError
from model.config import ModeOptions, PropertyConfig, SyncOptions, ThemeConfig
from model.strategies import (
    LightDarkStrategy,
    MonoStrategy,
    MultiStrategy,
    Strategy,
    StrategyKind,
    SystemStrategy,
)

log = logging.getLogger(__name__)

MODE_TYPE = "mode"


def _require(data: dict, key: str, prop: str) -> Any:
    if key not in data:
        raise ConfigError(f"missing '{key}'", prop)
    return data[key]


def _check_appearance(value: Any, prop: str) -> str:
    if value not in APPEARANCES:
        raise ConfigError(f"appearance must be one of {', '.join(APPEARANCES)}, got {value!r}", prop)
    return value


def _custom_keys(data: dict, prop: str) -> dict[str, str]:
    custom = data.get("custom") or {}
    if not isinstance(custom, dict):
        raise ConfigError("'custom' must map keys to appearances", prop)
    return {key: _check_appearance(value, prop) for key, value in custom.items()}


def _build(cls: type, prop: str, **kwargs: Any) -> Strategy:
    """Construct a strategy, naming the property in any ConfigError."""
    try:
        return cls(**kwargs)
    except ConfigError as e:
        raise ConfigError(str(e), prop) from None


def _strategy_from_dict(data: dict, prop: str, is_mode: bool) -> Strategy:
    """Build the strategy object described by one property entry."""
    raw_kind = _require(data, "strategy", prop)
    try:
        kind = StrategyKind(raw_kind)
    except ValueError:
        raise ConfigError(f"unknown strategy {raw_kind!r}", prop) from None

    if kind is StrategyKind.MONO:
        appearance = _check_appearance(data.get("appearance", LIGHT), prop)
        return MonoStrategy(key=_require(data, "key", prop), appearance=appearance)

    if kind is StrategyKind.MULTI:
        keys = _require(data, "keys", prop)
        appearances = {}
        if isinstance(keys, dict):
            appearances = {key: _check_appearance(value, prop) for key, value in keys.items()}
        elif is_mode:
            raise ConfigError("a multi mode property must map each key to an appearance", prop)
        return _build(
            MultiStrategy, prop,
            keys=tuple(keys), base=_require(data, "base", prop), appearances=appearances,
        )

    common = {
        "base": _require(data, "base", prop),
        "light": data.get("light", LIGHT),
        "dark": data.get("dark", DARK),
        "custom": _custom_keys(data, prop),
    }
    if kind is StrategyKind.LIGHT_DARK:
        return _build(LightDarkStrategy, prop, **common)
    return _build(
        SystemStrategy, prop, **common, system=data.get("system", SYSTEM), fallback=data.get("fallback")
    )


def _mode_options_from_dict(data: dict, prop: str) -> ModeOptions:
    selectors = frozenset(data.get("selectors", ()))
    unknown = selectors - set(SELECTORS)
    if unknown:
        raise ConfigError(f"unknown selectors: {', '.join(sorted(unknown))}", prop)
    return ModeOptions(
        selectors=selectors,
        persist=bool(data.get("persist", False)),
        storage_key=data.get("storage_key", DEFAULT_MODE_STORAGE_KEY),
    )


def property_from_dict(prop: str, data: dict) -> PropertyConfig:
    """Build one PropertyConfig from its parsed entry."""
    if not isinstance(data, dict):
        raise ConfigError("entry must be an object", prop)
    is_mode = data.get("type") == MODE_TYPE
    strategy = _strategy_from_dict(data, prop, is_mode)
    mode = _mode_options_from_dict(data, prop) if is_mode else None
    return PropertyConfig(strategy=strategy, mode=mode)


def config_from_dict(data: dict) -> ThemeConfig:
    """Build a ThemeConfig from parsed JSON data.

    Raises:
        ConfigError: If the data doesn't describe a valid configuration
    """
    if not isinstance(data, dict):
        raise ConfigError("configuration must be an object")

    observers = frozenset(data.get("observers", ()))
    unknown = observers - set(OBSERVERS)
    if unknown:
        raise ConfigError(f"unknown observers: {', '.join(sorted(unknown))}")

    options = SyncOptions(
        storage_key=data.get("storage_key", DEFAULT_STORAGE_KEY),
        observers=observers,
        attribute_prefix=data.get("attribute_prefix", ATTRIBUTE_PREFIX),
    )
    properties = {
        name: property_from_dict(name, entry)
        for name, entry in (data.get("properties") or {}).items()
    }
    return ThemeConfig(properties=properties, options=options)


def load_config(path: Path) -> ThemeConfig:
    """Load a ThemeConfig from a JSON file."""
    try:
        data = json.loads(path.read_text())
    except ValueError as e:
        raise ConfigError(f"{path}: invalid JSON ({e})") from e
    config = config_from_dict(data)
    log.debug(f"Loaded theme config from {path} ({len(config.properties)} properties)")
    return config
