"""
Layout helpers for the Customer Inquiry Dash application.

This module defines the root layout structure including:
- URL location and navigation store used for exit navigation
- Per page load session id (dcc.Store) that keys the server-side controller
- Keyboard capture for the F3 / F12 / Escape shortcuts
- Screen container holding the entry and detail screens

The layout is built per page load so every browser tab gets its own
session id and a fresh entry screen.
"""

from uuid import uuid4

from dash import dcc, html
from dash_extensions import Keyboard

from customer_inquiry.components.customer_detail import build_detail_screen
from customer_inquiry.components.customer_search import build_entry_screen
from customer_inquiry.config import Settings
from customer_inquiry.models.common import SearchState

APP_TITLE = "Customer Inquiry"
APP_SUBTITLE = "Look up a customer by number."

URL_ID = "url"
SESSION_ID = "session-id"
NAVIGATION_ID = "navigation"
KEYBOARD_ID = "keyboard"
SCREEN_CONTAINER_ID = "screen-container"

# Keys whose browser default (e.g. F3 find, F12 devtools) is suppressed
CAPTURE_KEYS = ["F3", "F12", "Escape"]


def build_layout(settings: Settings, session_id: str | None = None) -> html.Div:
    """
    Build the root layout for the Customer Inquiry application.

    Args:
        settings: Application settings.
        session_id: Session id to embed; a new one is generated when omitted.

    Returns:
        Root html.Div containing the complete application layout.
    """
    return html.Div(
        className="app-shell",
        children=[
            dcc.Location(id=URL_ID, refresh=True),
            dcc.Store(id=SESSION_ID, data=session_id or uuid4().hex),
            dcc.Store(id=NAVIGATION_ID),
            Keyboard(id=KEYBOARD_ID, captureKeys=CAPTURE_KEYS),
            html.Div(
                className="app-container",
                children=[
                    _build_page_header(),
                    html.Div(
                        id=SCREEN_CONTAINER_ID,
                        children=build_screens(SearchState(), settings.zip_fixed_width),
                    ),
                ],
            ),
        ],
    )


def build_screens(state: SearchState, zip_fixed_width: bool = False) -> list:
    """Render both screens for a state; only the active one is visible."""
    return [
        build_entry_screen(state),
        build_detail_screen(state, zip_fixed_width=zip_fixed_width),
    ]


def _build_page_header() -> html.Div:
    """Return the hero text area at the top of the page."""
    return html.Div(
        className="page-header",
        children=[
            html.H1(APP_TITLE),
            html.P(APP_SUBTITLE),
        ],
    )
