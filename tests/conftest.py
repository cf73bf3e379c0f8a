"""Shared fixtures for themesync tests."""

import pytest

from host import ElementTarget, StorageHub
from model import (
    ModeOptions,
    MonoStrategy,
    MultiStrategy,
    PropertyConfig,
    SyncOptions,
    SystemStrategy,
    ThemeConfig,
    compile_config,
)

BOTH_SELECTORS = frozenset({"color-scheme", "class"})
ALL_OBSERVERS = frozenset({"storage", "presentation"})


@pytest.fixture
def mode_config():
    """Mode-only config: system strategy, both mirrors, persisted, all observers on."""
    return ThemeConfig(
        properties={
            "mode": PropertyConfig(
                strategy=SystemStrategy(base="system", fallback="light"),
                mode=ModeOptions(selectors=BOTH_SELECTORS, persist=True),
            ),
        },
        options=SyncOptions(observers=ALL_OBSERVERS),
    )


@pytest.fixture
def full_config():
    """Mode with a custom key, a multi density and a mono brand."""
    return ThemeConfig(
        properties={
            "mode": PropertyConfig(
                strategy=SystemStrategy(base="system", fallback="light", custom={"dim": "dark"}),
                mode=ModeOptions(selectors=BOTH_SELECTORS, persist=True),
            ),
            "density": PropertyConfig(
                strategy=MultiStrategy(keys=("compact", "cozy", "roomy"), base="cozy"),
            ),
            "brand": PropertyConfig(strategy=MonoStrategy(key="acme")),
        },
        options=SyncOptions(observers=ALL_OBSERVERS),
    )


@pytest.fixture
def density_config():
    """Config without a mode property."""
    return ThemeConfig(
        properties={
            "density": PropertyConfig(
                strategy=MultiStrategy(keys=("compact", "cozy", "roomy"), base="cozy"),
            ),
        },
        options=SyncOptions(observers=ALL_OBSERVERS),
    )


@pytest.fixture
def compiled(full_config):
    """Compiled form of full_config."""
    return compile_config(full_config)


@pytest.fixture
def hub():
    """Shared storage data behind several contexts."""
    return StorageHub()


@pytest.fixture
def target():
    """Fresh in-memory presentation target."""
    return ElementTarget()


class NotificationRecorder:
    """Subscribes to a store context and records what it hears."""

    def __init__(self, store):
        self.notifications = []
        store.subscribe(self.notifications.append)


@pytest.fixture
def recorder():
    """Factory attaching a NotificationRecorder to a store context."""
    return NotificationRecorder
