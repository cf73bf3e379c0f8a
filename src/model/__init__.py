"""Model classes for themesync."""

from model.strategies import (
    LightDarkStrategy,
    MonoStrategy,
    MultiStrategy,
    Strategy,
    StrategyKind,
    SystemStrategy,
)
from model.config import ModeOptions, PropertyConfig, SyncOptions, ThemeConfig
from model.compiler import (
    CompiledConfig,
    Constraint,
    ModeHandling,
    SystemHandling,
    compile_config,
)
from model.state import State, merge_states, state_from_json, state_to_json
from model.serializers import config_from_dict, load_config

__all__ = [
    "LightDarkStrategy",
    "MonoStrategy",
    "MultiStrategy",
    "Strategy",
    "StrategyKind",
    "SystemStrategy",
    "ModeOptions",
    "PropertyConfig",
    "SyncOptions",
    "ThemeConfig",
    "CompiledConfig",
    "Constraint",
    "ModeHandling",
    "SystemHandling",
    "compile_config",
    "State",
    "merge_states",
    "state_from_json",
    "state_to_json",
    "config_from_dict",
    "load_config",
]
