"""
Local library modules shared across the Customer Inquiry UI.

Modules:
    logs: Logging utilities
    keys: Keyboard shortcut bindings with scoped registration
    loop: Background asyncio event loop for controller commands
    sessions: Bounded per-session registry
"""

from customer_inquiry.lib import keys, logs, loop, sessions

__all__ = ["keys", "logs", "loop", "sessions"]
