"""
Customer number entry screen.

Provides the lookup form with:
- Customer number field, submitted with Enter or the Search button
- Clear button
- Inline error message
- Loading indicator; input and buttons are disabled while a lookup runs
"""

from dash import dcc, html
from dash_iconify import DashIconify

from customer_inquiry.models.common import Screen, SearchState

ENTRY_SCREEN_ID = "entry-screen"
INPUT_ID = "customer-number"
SEARCH_BUTTON_ID = "search-button"
CLEAR_BUTTON_ID = "clear-button"
ERROR_ID = "entry-error"
LOADING_ID = "entry-loading"

# Longer than 5 digits so out of range numbers still reach validation
INPUT_MAX_LENGTH = 10


def build_entry_screen(state: SearchState) -> html.Div:
    """
    Build the entry screen for the given state.

    The screen is always rendered so its inputs stay registered with Dash;
    it is hidden while the detail screen is showing.

    Args:
        state: Current search state.

    Returns:
        Card-styled div containing the lookup form.
    """
    hidden = state.screen is not Screen.ENTRY
    return html.Div(
        id=ENTRY_SCREEN_ID,
        className="card entry-screen" + (" hidden" if hidden else ""),
        children=[
            html.H2("Customer Inquiry"),
            html.Div(
                className="form-group",
                children=[
                    html.Label("Customer Number:", htmlFor=INPUT_ID),
                    html.Div(
                        className="input-with-icon",
                        children=[
                            DashIconify(icon="lucide:search", className="input-icon"),
                            dcc.Input(
                                id=INPUT_ID,
                                type="text",
                                inputMode="numeric",
                                maxLength=INPUT_MAX_LENGTH,
                                value=state.input_value,
                                placeholder="Enter customer number",
                                className="search-input",
                                autoFocus=not hidden,
                                disabled=state.loading,
                            ),
                        ],
                    ),
                ],
            ),
            build_error_message(state.error),
            _build_loading(state.loading),
            html.Div(
                className="button-group",
                children=[
                    html.Button(
                        "Searching..." if state.loading else "Search",
                        id=SEARCH_BUTTON_ID,
                        className="button primary",
                        disabled=state.loading,
                    ),
                    html.Button(
                        "Clear",
                        id=CLEAR_BUTTON_ID,
                        className="button secondary",
                        disabled=state.loading,
                    ),
                ],
            ),
            html.P("Press Enter to search  F3=Exit", className="function-keys muted"),
        ],
    )


def build_error_message(error: str | None) -> html.Div:
    """Return the inline error area, empty and hidden when there is no error."""
    if not error:
        return html.Div(id=ERROR_ID, className="error-message hidden")
    return html.Div(
        id=ERROR_ID,
        className="error-message",
        role="alert",
        children=[html.Strong("Error: "), error],
    )


def _build_loading(loading: bool) -> html.Div:
    return html.Div(
        id=LOADING_ID,
        className="loading-indicator" + ("" if loading else " hidden"),
        children=[
            html.Span(className="spinner"),
            html.Span("Loading customer...", className="loading-text"),
        ],
    )

