"""Demo TUI showing a ThemeSyncManager driving a Textual app."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from controller import ThemeSyncManager
from host import FileStore, KeyValueStore, MemoryStore, PreferenceOracle, terminal_preference
from host.tui import TextualTarget
from model import (
    ModeOptions,
    MultiStrategy,
    PropertyConfig,
    State,
    SyncOptions,
    SystemStrategy,
    ThemeConfig,
    load_config,
)

log = logging.getLogger(__name__)

STATE_VIEW = "state-view"


def _get_log_path() -> Path:
    """Get the log file path using XDG Base Directory spec."""
    xdg_state = os.environ.get("XDG_STATE_HOME", str(Path.home() / ".local" / "state"))
    log_dir = Path(xdg_state) / "themesync"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "themesync.log"


def setup_logging() -> None:
    """Send debug logging to the XDG state directory."""
    logging.basicConfig(
        filename=str(_get_log_path()),
        level=logging.DEBUG,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


# Used when no --config is given
DEMO_CONFIG = ThemeConfig(
    properties={
        "mode": PropertyConfig(
            strategy=SystemStrategy(base="system", fallback="light", custom={"dim": "dark"}),
            mode=ModeOptions(selectors=frozenset({"color-scheme", "class"}), persist=True),
        ),
        "density": PropertyConfig(
            strategy=MultiStrategy(keys=("compact", "cozy", "roomy"), base="cozy"),
        ),
    },
    options=SyncOptions(observers=frozenset({"storage", "presentation"})),
)


class ThemeDemoApp(App):
    """Shows the synchronized state and lets you change it from both ends."""

    TITLE = "themesync"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("m", "cycle('mode')", "Cycle mode", show=True),
        Binding("d", "cycle('density')", "Cycle density", show=True),
        Binding("e", "external_edit('mode')", "Edit target", show=True),
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        config: ThemeConfig = DEMO_CONFIG,
        store: KeyValueStore | None = None,
        preference: PreferenceOracle | None = terminal_preference,
    ) -> None:
        super().__init__()
        self.theme_config = config
        self.theme_store = store if store is not None else MemoryStore()
        self.theme_preference = preference
        self.theme_target: TextualTarget | None = None
        self.theme_sync: ThemeSyncManager | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id=STATE_VIEW)
        yield Footer()

    def on_mount(self) -> None:
        self.theme_target = TextualTarget(self)
        self.theme_sync = ThemeSyncManager(
            self.theme_config,
            store=self.theme_store,
            target=self.theme_target,
            preference=self.theme_preference,
        )
        self.theme_sync.subscribe(self._on_state_changed)
        if isinstance(self.theme_store, FileStore):
            self.set_interval(1.0, self.theme_store.poll)
        self._show_state(self.theme_sync.state)

    def _on_state_changed(self, state: State) -> None:
        self._show_state(state)

    def _show_state(self, state: State) -> None:
        lines = [f"{prop}: {value}" for prop, value in sorted(state.items())]
        lines.append(f"appearance: {self.theme_sync.resolved_mode or '-'}")
        self.query_one(f"#{STATE_VIEW}", Static).update("\n".join(lines))

    def _next_value(self, prop: str, current: str | None) -> str | None:
        constraint = self.theme_sync.compiled.constraints.get(prop)
        if constraint is None:
            return None
        values = sorted(constraint.allowed)
        if current not in values:
            return values[0]
        return values[(values.index(current) + 1) % len(values)]

    def action_cycle(self, prop: str) -> None:
        """Programmatic update through the sync manager."""
        value = self._next_value(prop, self.theme_sync.state.get(prop))
        if value is not None:
            self.theme_sync.update(prop, value)

    def action_external_edit(self, prop: str) -> None:
        """Edit the target attribute directly, as an outside script would."""
        name = self.theme_sync.presentation.attribute_name(prop)
        value = self._next_value(prop, self.theme_target.get_attribute(name))
        if value is not None:
            self.theme_target.set_attribute(name, value)
            self._show_state(self.theme_sync.state)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="themesync-demo", description=__doc__)
    parser.add_argument("--config", type=Path, help="Theme config JSON file")
    parser.add_argument("--store", type=Path, help="Directory for persisted state")
    args = parser.parse_args(argv)

    setup_logging()
    config = load_config(args.config) if args.config else DEMO_CONFIG
    store = FileStore(args.store) if args.store else FileStore()
    ThemeDemoApp(config=config, store=store).run()


if __name__ == "__main__":
    main()
