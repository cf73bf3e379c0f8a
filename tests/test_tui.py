"""UI tests for the demo app driving a TextualTarget."""

import pytest

from app import ThemeDemoApp
from host import MemoryStore, static_preference
from model import state_from_json


def make_app(preference="dark", store=None):
    return ThemeDemoApp(store=store or MemoryStore(), preference=static_preference(preference))


class TestThemeDemoApp:
    """Tests for the demo app bindings."""

    @pytest.mark.asyncio
    async def test_initial_state_applied(self):
        """On mount, the system value resolves to the terminal preference."""
        app = make_app("dark")
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.theme_sync.state == {"mode": "system", "density": "cozy"}
            assert app.has_class("dark")
            assert not app.has_class("light")
            assert app.theme == "textual-dark"

    @pytest.mark.asyncio
    async def test_light_preference_switches_theme(self):
        """A light terminal gets the light Textual theme."""
        app = make_app("light")
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.theme == "textual-light"
            assert app.has_class("light")

    @pytest.mark.asyncio
    async def test_cycle_mode(self):
        """Pressing m steps through the allowed mode values."""
        store = MemoryStore()
        app = make_app("dark", store=store)
        async with app.run_test() as pilot:
            await pilot.press("m")
            await pilot.pause()
            assert app.theme_sync.state["mode"] == "dark"

            await pilot.press("m")
            await pilot.pause()
            assert app.theme_sync.state["mode"] == "dim"
            assert app.has_class("dark")

            await pilot.press("m")
            await pilot.pause()
            assert app.theme_sync.state["mode"] == "light"
            assert app.has_class("light")
            assert not app.has_class("dark")
            assert app.theme == "textual-light"

            assert state_from_json(store.get_item("themesync"))["mode"] == "light"
            assert store.get_item("theme") == "light"

    @pytest.mark.asyncio
    async def test_cycle_density(self):
        """Pressing d updates the density attribute on the target."""
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.press("d")
            await pilot.pause()
            assert app.theme_sync.state["density"] == "roomy"
            assert app.theme_target.get_attribute("data-density") == "roomy"

    @pytest.mark.asyncio
    async def test_external_edit_folds_into_state(self):
        """Editing the target attribute directly updates the synchronized state."""
        app = make_app("dark")
        async with app.run_test() as pilot:
            await pilot.press("e")
            await pilot.pause()
            assert app.theme_target.get_attribute("data-mode") == "dark"
            assert app.theme_sync.state["mode"] == "dark"

    @pytest.mark.asyncio
    async def test_storage_edit_from_another_context(self):
        """A write from another context sharing the store reaches the app."""
        store = MemoryStore()
        app = make_app("dark", store=store)
        async with app.run_test() as pilot:
            store.hub.context().set_item("themesync", '{"mode":"light","density":"compact"}')
            await pilot.pause()
            assert app.theme_sync.state == {"mode": "light", "density": "compact"}
            assert app.theme == "textual-light"
