"""Tests for key bindings and scoped listener registration."""

import pytest

from customer_inquiry.lib.keys import KeyBindings, KeyListener, normalize_key


class TestNormalizeKey:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("F3", "F3"),
            ("f12", "F12"),
            ("esc", "Escape"),
            ("Escape", "Escape"),
            ("return", "Enter"),
            (" Enter ", "Enter"),
            ("a", "a"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_key(raw) == expected


class TestKeyBindings:

    def test_lookup_is_normalized(self):
        handler = object
        bindings = KeyBindings({"esc": handler})
        assert bindings.get("Escape") is handler
        assert "ESC" in bindings
        assert bindings.keys() == ["Escape"]
        assert len(bindings) == 1

    def test_missing_key(self):
        assert KeyBindings().get("F3") is None


class TestKeyListener:

    def test_dispatch_calls_handler(self):
        pressed = []
        listener = KeyListener()
        listener.acquire(KeyBindings({"F3": lambda: pressed.append("F3")}))
        assert listener.dispatch("F3") is True
        assert pressed == ["F3"]

    def test_dispatch_unbound_key(self):
        listener = KeyListener()
        assert listener.dispatch("F3") is False

    def test_latest_registration_wins(self):
        pressed = []
        listener = KeyListener()
        listener.acquire(KeyBindings({"Escape": lambda: pressed.append("outer")}))
        inner = listener.acquire(
            KeyBindings({"Escape": lambda: pressed.append("inner")})
        )
        listener.dispatch("Escape")
        inner.release()
        listener.dispatch("Escape")
        assert pressed == ["inner", "outer"]

    def test_release_is_idempotent(self):
        listener = KeyListener()
        registration = listener.acquire(KeyBindings({"F3": lambda: None}))
        registration.release()
        registration.release()
        assert registration.released
        assert listener.active == 0

    def test_context_manager_releases_on_error(self):
        listener = KeyListener()
        with pytest.raises(ValueError):
            with listener.acquire(KeyBindings({"F3": lambda: None})):
                assert listener.active == 1
                raise ValueError("boom")
        assert listener.active == 0
        assert listener.dispatch("F3") is False

    def test_release_all(self):
        listener = KeyListener()
        first = listener.acquire(KeyBindings({"F3": lambda: None}))
        listener.acquire(KeyBindings({"F12": lambda: None}))
        listener.release_all()
        assert listener.active == 0
        assert first.released

    def test_active_keys_are_unique(self):
        listener = KeyListener()
        listener.acquire(KeyBindings({"F3": lambda: None}))
        listener.acquire(KeyBindings({"F3": lambda: None, "F12": lambda: None}))
        assert sorted(listener.active_keys()) == ["F12", "F3"]
