"""
View-state controller for the customer inquiry flow.

The controller owns the SearchState of one browser session and is the only
place that mutates it. The presentation layer reads controller.state and
invokes commands:

    submit(raw_input)   validate, fetch, show detail or error
    clear()             back to an empty entry screen
    return_to_entry()   alias of clear(), bound to F12 on the detail screen
    exit()              leave the screen via the navigation callback
    handle_key(key)     dispatch a keyboard shortcut

State machine:

    ENTRY --submit ok--> DETAIL --clear/return--> ENTRY
    ENTRY --submit fail--> ENTRY (error set)
    any   --exit--> external navigation

All commands are expected to run on one event loop. submit() suspends on
the fetch; every newer command takes a new request token, and a fetch whose
token is no longer current when it resolves is discarded.
"""

from contextlib import contextmanager
from typing import Callable, Iterator

from customer_inquiry.config import Settings
from customer_inquiry.errors import CustomerLookupError, NetworkError, ValidationError
from customer_inquiry.lib import logs
from customer_inquiry.lib.keys import KeyBindings, KeyListener, Registration
from customer_inquiry.models.common import Screen, SearchState
from customer_inquiry.models.customer import Customer
from customer_inquiry.services.customer_service import CustomerService
from customer_inquiry.utils import parse_customer_number

LOG = logs.logger(__file__)

EXIT_KEY = "F3"
# Navigation target meaning "go back in browser history"
NAVIGATE_BACK = "history:back"
RETURN_KEYS = ("F12", "Escape")

ExitHandler = Callable[[], str | None]


class CustomerInquiryController:
    """
    Owns SearchState and exposes the inquiry commands.

    Attributes:
        settings: Application settings (retry count, exit url).
    """

    def __init__(
        self,
        service: CustomerService,
        settings: Settings | None = None,
        on_exit: ExitHandler | None = None,
    ) -> None:
        """
        Initialize the controller.

        Args:
            service: Customer lookup service. Not closed by the controller.
            settings: Application settings; defaults are used when omitted.
            on_exit: Navigation callback for exit(). Its return value is the
                navigation target. Falls back to settings.exit_url, or to
                NAVIGATE_BACK (browser history back) when that is unset.
        """
        self.settings = settings or Settings()
        self._service = service
        self._on_exit = on_exit
        self._state = SearchState()
        self._request_seq = 0
        self._navigation: str | None = None

        self._keys = KeyListener()
        self._global_keys = KeyBindings({EXIT_KEY: self.exit})
        self._detail_keys = KeyBindings({key: self.clear for key in RETURN_KEYS})
        self._global_registration: Registration | None = None
        self._screen_registration: Registration | None = None

    @property
    def state(self) -> SearchState:
        """Current state. Read-only for callers."""
        return self._state

    @property
    def keys(self) -> KeyListener:
        return self._keys

    @property
    def is_mounted(self) -> bool:
        return self._global_registration is not None

    # Commands

    async def submit(self, raw_input: object) -> SearchState:
        """
        Validate raw input and look the customer up.

        Invalid input sets a validation error without calling the service.
        Lookup failures set the error message and keep the entry screen.

        Args:
            raw_input: Text from the customer number field.

        Returns:
            The state after this submit has been applied (or discarded).
        """
        state = self._state
        state.input_value = "" if raw_input is None else str(raw_input)
        token = self._next_token()

        try:
            customer_number = parse_customer_number(raw_input)
        except ValidationError as exc:
            LOG.info("Rejected customer number %r: %s", raw_input, exc.message)
            state.loading = False
            state.error = exc.message
            return state

        LOG.info("Submit customer %s (request %s)", customer_number, token)
        state.loading = True
        state.error = None

        try:
            customer = await self._fetch(customer_number, token)
        except CustomerLookupError as exc:
            self._apply_failure(token, exc.message)
        except Exception:
            LOG.error("Lookup failed for customer %s", customer_number, exc_info=True)
            self._apply_failure(token, NetworkError.default_message)
        else:
            self._apply_success(token, customer)
        return self._state

    def clear(self) -> SearchState:
        """Reset to an empty entry screen. Idempotent."""
        self._next_token()
        state = self._state
        state.input_value = ""
        state.customer = None
        state.error = None
        state.loading = False
        self._set_screen(Screen.ENTRY)
        return state

    def return_to_entry(self) -> SearchState:
        """Leave the detail screen. Same effect as clear()."""
        return self.clear()

    def exit(self) -> str | None:
        """
        Ask the navigation collaborator to leave the screen.

        Does not change SearchState.

        Returns:
            The navigation target reported by the exit handler.
        """
        handler = self._on_exit or self._navigate_back
        target = handler()
        LOG.info("Exit requested, navigating to %s", target)
        self._navigation = target
        return target

    def handle_key(self, key: str) -> bool:
        """
        Dispatch a keyboard shortcut through the active bindings.

        Returns:
            True if a binding handled the key.
        """
        if not self.is_mounted:
            return False
        return self._keys.dispatch(key)

    def take_navigation(self) -> str | None:
        """Return and forget the pending navigation target set by exit()."""
        target, self._navigation = self._navigation, None
        return target

    # Lifecycle

    def mount(self) -> None:
        """Acquire the global key bindings and those of the current screen."""
        if self._global_registration is not None:
            return
        self._global_registration = self._keys.acquire(self._global_keys)
        self._bind_screen_keys()

    def unmount(self) -> None:
        """Release every key binding held by this controller."""
        self._keys.release_all()
        self._screen_registration = None
        self._global_registration = None

    @contextmanager
    def mounted(self) -> Iterator["CustomerInquiryController"]:
        """Keep key bindings acquired for the duration of the block."""
        self.mount()
        try:
            yield self
        finally:
            self.unmount()

    def close(self) -> None:
        """Release key bindings and discard any in-flight lookup."""
        self._next_token()
        self.unmount()

    # Internals

    def _next_token(self) -> int:
        self._request_seq += 1
        return self._request_seq

    def _is_current(self, token: int) -> bool:
        return token == self._request_seq

    async def _fetch(self, customer_number: int, token: int) -> Customer:
        attempts = 1 + max(self.settings.network_retries, 0)
        for attempt in range(1, attempts + 1):
            try:
                return await self._service.fetch_customer(customer_number)
            except NetworkError:
                if attempt >= attempts or not self._is_current(token):
                    raise
                LOG.warning(
                    "Network error for customer %s, retrying (%s/%s)",
                    customer_number,
                    attempt,
                    attempts - 1,
                )
        raise NetworkError()

    def _apply_success(self, token: int, customer: Customer) -> None:
        if not self._is_current(token):
            LOG.info("Discarding stale result for request %s", token)
            return
        state = self._state
        state.customer = customer
        state.error = None
        state.loading = False
        self._set_screen(Screen.DETAIL)

    def _apply_failure(self, token: int, message: str) -> None:
        if not self._is_current(token):
            LOG.info("Discarding stale error for request %s", token)
            return
        state = self._state
        state.customer = None
        state.error = message
        state.loading = False
        self._set_screen(Screen.ENTRY)

    def _set_screen(self, screen: Screen) -> None:
        if self._state.screen is screen:
            return
        LOG.info("Screen %s -> %s", self._state.screen.value, screen.value)
        self._state.screen = screen
        LOG.debug("State %s", self._state.to_dict())
        if self._global_registration is not None:
            self._bind_screen_keys()

    def _bind_screen_keys(self) -> None:
        if self._screen_registration is not None:
            self._screen_registration.release()
            self._screen_registration = None
        if self._state.screen is Screen.DETAIL:
            self._screen_registration = self._keys.acquire(self._detail_keys)

    def _navigate_back(self) -> str:
        return self.settings.exit_url or NAVIGATE_BACK
