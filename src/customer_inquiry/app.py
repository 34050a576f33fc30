"""
Dash application entry point for the Customer Inquiry UI.

create_app() composes the application from explicit settings: it validates
the configuration, builds the customer service, and wires the browser
events to a per-session CustomerInquiryController. Every controller command
runs on one background event loop, so state is only mutated from a single
thread.

Run the development server with `customer-inquiry`, or serve with a WSGI
server via the factory, e.g. `gunicorn "customer_inquiry.app:create_server()"`.
"""

import atexit
from pathlib import Path
from typing import Any, Callable
from uuid import uuid4

from dash import Dash, Input, Output, State, ctx, no_update
from dash.exceptions import PreventUpdate

from customer_inquiry.components.customer_detail import EXIT_BUTTON_ID, RETURN_BUTTON_ID
from customer_inquiry.components.customer_search import (
    CLEAR_BUTTON_ID,
    INPUT_ID,
    LOADING_ID,
    SEARCH_BUTTON_ID,
)
from customer_inquiry.config import Settings
from customer_inquiry.lib import logs
from customer_inquiry.lib.loop import EventLoopThread
from customer_inquiry.lib.sessions import SessionRegistry
from customer_inquiry.layout import (
    APP_TITLE,
    KEYBOARD_ID,
    NAVIGATION_ID,
    SCREEN_CONTAINER_ID,
    SESSION_ID,
    URL_ID,
    build_layout,
    build_screens,
)
from customer_inquiry.models.common import SearchState
from customer_inquiry.services import CustomerService, get_customer_service
from customer_inquiry.state import NAVIGATE_BACK, CustomerInquiryController

LOG = logs.logger(__file__)

MAX_SESSIONS = 500

_ASSETS_PATH = Path(__file__).resolve().parent / "assets"


class InquiryApp:
    """
    Glue between Dash callbacks and the per-session controllers.

    Attributes:
        settings: Validated application settings.
        service: Customer service shared by all sessions.
        runner: Event loop thread that runs every controller command.
        sessions: Session id to controller registry.
    """

    def __init__(
        self,
        settings: Settings,
        service: CustomerService,
        runner: EventLoopThread | None = None,
        max_sessions: int = MAX_SESSIONS,
    ) -> None:
        self.settings = settings
        self.service = service
        self.runner = runner or EventLoopThread()
        self.sessions: SessionRegistry[CustomerInquiryController] = SessionRegistry(
            self._new_controller,
            max_sessions=max_sessions,
            on_evict=self._close_controller,
        )

    def dispatch(
        self,
        trigger: str | None,
        session_id: str,
        value: Any = None,
        keydown: dict | None = None,
    ) -> tuple[SearchState, str | None]:
        """
        Route one browser event to the session's controller.

        Args:
            trigger: Id of the component that fired.
            session_id: Browser session id from the layout store.
            value: Current customer number field value.
            keydown: Last keydown event from the keyboard listener.

        Returns:
            Snapshot of the state after the command, and the navigation
            target if the command asked to leave the screen.
        """
        controller = self.sessions.get(session_id)
        LOG.info("Action %s for session %s", trigger, session_id)
        return self.runner.run(self._perform(controller, trigger, value, keydown))

    def shutdown(self) -> None:
        """Close every session and the shared service, then stop the loop."""
        if not self.runner.running:
            return
        self.sessions.clear()
        self.runner.run(self.service.close())
        self.runner.stop()

    def _new_controller(self) -> CustomerInquiryController:
        controller = CustomerInquiryController(self.service, self.settings)
        controller.mount()
        return controller

    def _close_controller(self, controller: CustomerInquiryController) -> None:
        self.runner.run(_call(controller.close))

    @staticmethod
    async def _perform(
        controller: CustomerInquiryController,
        trigger: str | None,
        value: Any,
        keydown: dict | None,
    ) -> tuple[SearchState, str | None]:
        if trigger in (SEARCH_BUTTON_ID, INPUT_ID):
            await controller.submit(value)
        elif trigger == CLEAR_BUTTON_ID:
            controller.clear()
        elif trigger == RETURN_BUTTON_ID:
            controller.return_to_entry()
        elif trigger == EXIT_BUTTON_ID:
            controller.exit()
        elif trigger == KEYBOARD_ID:
            controller.handle_key((keydown or {}).get("key", ""))
        else:
            LOG.warning("Ignoring unknown trigger: %s", trigger)
        return controller.state.snapshot(), controller.take_navigation()


async def _call(func, *args):
    return func(*args)


# Runs in the browser: history back for NAVIGATE_BACK, otherwise hand the
# target to dcc.Location
_NAVIGATE_JS = """
function(navigation) {
    if (!navigation || !navigation.target) {
        return window.dash_clientside.no_update;
    }
    if (navigation.target === "%s") {
        window.history.back();
        return window.dash_clientside.no_update;
    }
    return navigation.target;
}
""" % NAVIGATE_BACK


def register_callbacks(app: Dash, inquiry: InquiryApp) -> Callable:
    """
    Wire the layout's components to the inquiry controller.

    Returns:
        The server-side action callback, undecorated.
    """

    @app.callback(
        Output(SCREEN_CONTAINER_ID, "children"),
        Output(NAVIGATION_ID, "data"),
        Input(SEARCH_BUTTON_ID, "n_clicks"),
        Input(INPUT_ID, "n_submit"),
        Input(CLEAR_BUTTON_ID, "n_clicks"),
        Input(RETURN_BUTTON_ID, "n_clicks"),
        Input(EXIT_BUTTON_ID, "n_clicks"),
        Input(KEYBOARD_ID, "n_keydowns"),
        State(INPUT_ID, "value"),
        State(KEYBOARD_ID, "keydown"),
        State(SESSION_ID, "data"),
        prevent_initial_call=True,
        running=[
            (Output(SEARCH_BUTTON_ID, "disabled"), True, False),
            (Output(INPUT_ID, "disabled"), True, False),
            (
                Output(LOADING_ID, "className"),
                "loading-indicator",
                "loading-indicator hidden",
            ),
        ],
    )
    def handle_action(
        _search, _submit, _clear, _return, _exit, _keys, value, keydown, session_id
    ):
        # Freshly rendered components report n_clicks=None; ignore those
        if not ctx.triggered or not ctx.triggered[0].get("value"):
            raise PreventUpdate
        state, navigation = inquiry.dispatch(
            ctx.triggered_id, session_id, value=value, keydown=keydown
        )
        children = build_screens(state, inquiry.settings.zip_fixed_width)
        if navigation is None:
            return children, no_update
        # A fresh id so repeated exits to the same target still fire
        return children, {"target": navigation, "id": uuid4().hex}

    app.clientside_callback(
        _NAVIGATE_JS,
        Output(URL_ID, "href"),
        Input(NAVIGATION_ID, "data"),
        prevent_initial_call=True,
    )
    return handle_action


def create_app(
    settings: Settings | None = None,
    service: CustomerService | None = None,
) -> Dash:
    """
    Build the Dash application.

    Args:
        settings: Application settings; read from the environment when omitted.
        service: Customer service override (tests, embedding).

    Raises:
        ConfigurationError: If the settings are invalid.
    """
    settings = (settings or Settings.from_env()).validate()
    logs.set_level(settings.log_level)
    LOG.info(
        "Starting %s - service:%s base_url:%s",
        APP_TITLE,
        settings.service_kind,
        settings.api_base_url,
    )
    service = service or get_customer_service(settings=settings)
    inquiry = InquiryApp(settings, service)

    app = Dash(
        __name__,
        title=APP_TITLE,
        assets_folder=str(_ASSETS_PATH),
        suppress_callback_exceptions=True,
    )
    app.layout = lambda: build_layout(settings)
    register_callbacks(app, inquiry)
    atexit.register(inquiry.shutdown)
    return app


def create_server():
    """Return the Flask server for WSGI deployment."""
    return create_app().server


def main() -> None:
    """Entrypoint used by `customer-inquiry`."""
    settings = Settings.from_env()
    app = create_app(settings)
    app.run(debug=False, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
