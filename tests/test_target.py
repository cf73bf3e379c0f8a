"""Tests for ElementTarget and the preference oracles."""

import pytest

from host import ElementTarget, Mutation, static_preference, terminal_preference


class TestElementTarget:
    """Tests for ElementTarget mutation reporting."""

    def test_effective_changes_only(self, target):
        """Setting an attribute to its current value reports nothing."""
        mutations = []
        target.observe(mutations.append, ["data-mode"])

        target.set_attribute("data-mode", "dark")
        target.set_attribute("data-mode", "dark")

        assert mutations == [Mutation("data-mode", None)]

    def test_attribute_filter(self, target):
        """Only filtered attributes are reported."""
        mutations = []
        target.observe(mutations.append, ["class"])

        target.set_attribute("data-mode", "dark")
        target.add_class("dark")
        target.set_style("color-scheme", "dark")

        assert mutations == [Mutation("class", "")]

    def test_style_mutation_carries_old_text(self, target):
        """Style mutations report the previous inline style text."""
        target.set_style("color-scheme", "light")
        mutations = []
        target.observe(mutations.append, ["style"])

        target.set_style("color-scheme", "dark")

        assert mutations == [Mutation("style", "color-scheme: light")]
        assert target.style_text() == "color-scheme: dark"

    def test_nested_mutations_are_queued(self, target):
        """Mutations made inside a callback are delivered after it returns."""
        order = []

        def callback(mutation):
            order.append(f"start {mutation.attribute_name}")
            if mutation.attribute_name == "data-a":
                target.set_attribute("data-b", "1")
            order.append(f"end {mutation.attribute_name}")

        target.observe(callback, ["data-a", "data-b"])
        target.set_attribute("data-a", "1")

        assert order == ["start data-a", "end data-a", "start data-b", "end data-b"]

    def test_disconnect(self, target):
        """The callable returned by observe() stops delivery."""
        mutations = []
        disconnect = target.observe(mutations.append, ["data-mode"])
        disconnect()
        disconnect()

        target.set_attribute("data-mode", "dark")

        assert mutations == []

    def test_replace_class_in_place(self, target):
        """replace_class keeps the token position and reports once."""
        target.classes = ["app", "light", "wide"]
        mutations = []
        target.observe(mutations.append, ["class"])

        assert target.replace_class("light", "dark") is True
        assert target.replace_class("missing", "x") is False

        assert target.classes == ["app", "dark", "wide"]
        assert mutations == [Mutation("class", "app light wide")]

    def test_replace_class_with_existing_token(self, target):
        """Replacing with a token already present just drops the old one."""
        target.classes = ["dark", "light"]
        target.replace_class("light", "dark")
        assert target.classes == ["dark"]

    def test_remove_attribute(self, target):
        """Removing reports the old value; removing a missing attribute doesn't."""
        target.set_attribute("data-mode", "dark")
        mutations = []
        target.observe(mutations.append, ["data-mode"])

        target.remove_attribute("data-mode")
        target.remove_attribute("data-mode")

        assert mutations == [Mutation("data-mode", "dark")]
        assert target.get_attribute("data-mode") is None


class TestPreferenceOracles:
    """Tests for static_preference and terminal_preference."""

    @pytest.mark.parametrize("value", ["light", "dark", None])
    def test_static_preference(self, value):
        """A static oracle always answers the same."""
        assert static_preference(value)() == value

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("15;0", "dark"),
            ("0;15", "light"),
            ("0;7", "light"),
            ("7;8", "dark"),
            ("0;default;15", "light"),
            ("15;default", None),
            ("15;42", None),
            ("", None),
        ],
    )
    def test_terminal_preference(self, monkeypatch, raw, expected):
        """COLORFGBG background decides the appearance."""
        monkeypatch.setenv("COLORFGBG", raw)
        assert terminal_preference() == expected

    def test_terminal_preference_unset(self, monkeypatch):
        """Without COLORFGBG the host can't tell."""
        monkeypatch.delenv("COLORFGBG", raising=False)
        assert terminal_preference() is None
