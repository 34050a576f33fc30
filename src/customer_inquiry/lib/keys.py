"""
Keyboard shortcut bindings with scoped registration.

A KeyListener owns the set of currently active bindings. Screens acquire
their bindings when they become visible and release them when they are
left; the returned Registration is also a context manager so a release is
guaranteed on every exit path:

    with listener.acquire(bindings):
        ...  # keys dispatch to bindings here
    # bindings released, even if the block raised
"""

from __future__ import annotations

from typing import Callable, Iterator, Mapping

KeyHandler = Callable[[], object]

_ALIASES = {
    "esc": "Escape",
    "escape": "Escape",
    "enter": "Enter",
    "return": "Enter",
}


def normalize_key(key: str | None) -> str:
    """Return the canonical name of a key as reported by a browser event."""
    if not key:
        return ""
    key = key.strip()
    lowered = key.lower()
    if lowered in _ALIASES:
        return _ALIASES[lowered]
    # Function keys: f3 -> F3
    if lowered.startswith("f") and lowered[1:].isdigit():
        return f"F{lowered[1:]}"
    return key


class KeyBindings:
    """Immutable mapping of normalized key names to zero-argument handlers."""

    def __init__(self, handlers: Mapping[str, KeyHandler] | None = None) -> None:
        self._handlers: dict[str, KeyHandler] = {
            normalize_key(key): handler for key, handler in (handlers or {}).items()
        }

    def get(self, key: str) -> KeyHandler | None:
        return self._handlers.get(normalize_key(key))

    def keys(self) -> list[str]:
        return sorted(self._handlers)

    def __contains__(self, key: str) -> bool:
        return normalize_key(key) in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)


class Registration:
    """Handle for one acquired set of bindings."""

    def __init__(self, listener: "KeyListener", bindings: KeyBindings) -> None:
        self._listener = listener
        self.bindings = bindings
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Detach the bindings from the listener. Safe to call more than once."""
        if self._released:
            return
        self._released = True
        self._listener._detach(self)

    def __enter__(self) -> "Registration":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()


class KeyListener:
    """
    Dispatches key presses to the most recently acquired bindings.

    Bindings acquired later take precedence over earlier ones for the same
    key, so a screen can override a key bound by an enclosing scope.
    """

    def __init__(self) -> None:
        self._registrations: list[Registration] = []

    def acquire(self, bindings: KeyBindings) -> Registration:
        registration = Registration(self, bindings)
        self._registrations.append(registration)
        return registration

    def dispatch(self, key: str) -> bool:
        """
        Invoke the handler bound to the key, if any.

        Returns:
            True if a handler was found and called.
        """
        for registration in reversed(self._registrations):
            handler = registration.bindings.get(key)
            if handler is not None:
                handler()
                return True
        return False

    def release_all(self) -> None:
        for registration in list(self._registrations):
            registration.release()

    @property
    def active(self) -> int:
        """Number of registrations currently attached."""
        return len(self._registrations)

    def active_keys(self) -> Iterator[str]:
        seen: set[str] = set()
        for registration in reversed(self._registrations):
            for key in registration.bindings.keys():
                if key not in seen:
                    seen.add(key)
                    yield key

    def _detach(self, registration: Registration) -> None:
        if registration in self._registrations:
            self._registrations.remove(registration)
