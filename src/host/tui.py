"""Presentation target backed by a running Textual app.

Mapping of the presentation channels:

    data attributes          kept on the adapter (Textual nodes have none)
    class channel            DOM classes of the node (the app by default)
    color-scheme style       the app theme: one Textual theme per appearance

Textual doesn't report class or theme changes to outsiders, so mutations are
recorded when they go through this adapter, the same way ElementTarget does.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from constants import CLASS_ATTRIBUTE, DARK, LIGHT, SELECTOR_COLOR_SCHEME, STYLE_ATTRIBUTE
from host.target import ObservableTarget

if TYPE_CHECKING:
    from textual.app import App
    from textual.dom import DOMNode

log = logging.getLogger(__name__)

DEFAULT_LIGHT_THEME = "textual-light"
DEFAULT_DARK_THEME = "textual-dark"


class TextualTarget(ObservableTarget):
    """Presentation target over a Textual App (or one of its nodes)."""

    def __init__(
        self,
        app: App,
        node: DOMNode | None = None,
        light_theme: str = DEFAULT_LIGHT_THEME,
        dark_theme: str = DEFAULT_DARK_THEME,
    ) -> None:
        super().__init__()
        self.app = app
        self.node = node if node is not None else app
        self.themes = {LIGHT: light_theme, DARK: dark_theme}
        self.attributes: dict[str, str] = {}

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        old_value = self.attributes.get(name)
        if old_value == value:
            return
        self.attributes[name] = value
        self._record(name, old_value)

    def class_text(self) -> str:
        return " ".join(sorted(self.node.classes))

    def has_class(self, token: str) -> bool:
        return self.node.has_class(token)

    def add_class(self, token: str) -> None:
        if self.node.has_class(token):
            return
        old_value = self.class_text()
        self.node.add_class(token)
        self._record(CLASS_ATTRIBUTE, old_value)

    def remove_class(self, token: str) -> None:
        if not self.node.has_class(token):
            return
        old_value = self.class_text()
        self.node.remove_class(token)
        self._record(CLASS_ATTRIBUTE, old_value)

    def replace_class(self, old: str, new: str) -> bool:
        if not self.node.has_class(old):
            return False
        old_value = self.class_text()
        self.node.remove_class(old)
        self.node.add_class(new)
        self._record(CLASS_ATTRIBUTE, old_value)
        return True

    def get_style(self, name: str) -> str | None:
        if name != SELECTOR_COLOR_SCHEME:
            return None
        return DARK if self.app.current_theme.dark else LIGHT

    def set_style(self, name: str, value: str) -> None:
        if name != SELECTOR_COLOR_SCHEME or value not in self.themes:
            log.debug(f"Ignoring unsupported style {name}: {value}")
            return
        theme = self.themes[value]
        if self.app.theme == theme:
            return
        old_value = f"{SELECTOR_COLOR_SCHEME}: {self.get_style(name)}"
        self.app.theme = theme
        self._record(STYLE_ATTRIBUTE, old_value)
