"""Tests for the CustomerInquiryController view-state machine.

Uses FakeCustomerService; races are scripted with gates instead of sleeps.
"""

import asyncio
import logging
from decimal import Decimal

import pytest

from customer_inquiry.config import Settings
from customer_inquiry.errors import NetworkError, NotFoundError, ValidationError
from customer_inquiry.models import Customer, Screen
from customer_inquiry.state import NAVIGATE_BACK, CustomerInquiryController
from customer_inquiry.utils import NUMERIC_MESSAGE, RANGE_MESSAGE, REQUIRED_MESSAGE
from tests.fakes import FakeCustomerService

ACME = Customer(
    customer_number=1001,
    customer_name="ACME Corporation",
    state="IL",
    zip_code=62701,
    account_balance=Decimal("1500.50"),
)
GLOBEX = Customer(customer_number=1002, customer_name="Globex Industries")


def _setup(
    customers: list[Customer] | None = None,
    settings: Settings | None = None,
    on_exit=None,
) -> tuple[CustomerInquiryController, FakeCustomerService]:
    """Build a controller over a fake service pre-loaded with customers."""
    service = FakeCustomerService([ACME, GLOBEX] if customers is None else customers)
    controller = CustomerInquiryController(service, settings, on_exit=on_exit)
    return controller, service


def _run(coro):
    return asyncio.run(coro)


class TestSubmitHappyPath:

    def test_found_customer_shows_detail(self):
        controller, service = _setup()
        state = _run(controller.submit("1001"))
        assert state.screen is Screen.DETAIL
        assert state.customer == ACME
        assert state.error is None
        assert state.loading is False
        assert service.calls == [1001]

    def test_keeps_raw_input(self):
        controller, _ = _setup()
        _run(controller.submit(" 1001 "))
        assert controller.state.input_value == " 1001 "

    def test_loading_only_while_fetch_is_outstanding(self):
        async def scenario():
            controller, service = _setup()
            gate = service.gate(1001)
            task = asyncio.create_task(controller.submit("1001"))
            await asyncio.sleep(0)
            during = controller.state.loading
            gate.set()
            await task
            return during, controller.state.loading

        assert _run(scenario()) == (True, False)


class TestSubmitValidation:

    @pytest.mark.parametrize(
        "raw, message",
        [
            ("", REQUIRED_MESSAGE),
            (None, REQUIRED_MESSAGE),
            ("abc", NUMERIC_MESSAGE),
            ("0", RANGE_MESSAGE),
            ("100000", RANGE_MESSAGE),
        ],
    )
    def test_invalid_input_never_calls_the_service(self, raw, message):
        controller, service = _setup()
        state = _run(controller.submit(raw))
        assert service.calls == []
        assert state.screen is Screen.ENTRY
        assert state.error == message
        assert state.loading is False

    def test_next_submit_clears_previous_error(self):
        controller, _ = _setup()
        _run(controller.submit("abc"))
        _run(controller.submit("1001"))
        assert controller.state.error is None
        assert controller.state.screen is Screen.DETAIL


class TestSubmitFailures:

    def test_not_found_keeps_entry_with_message(self):
        controller, _ = _setup()
        state = _run(controller.submit("4242"))
        assert state.screen is Screen.ENTRY
        assert state.error == "Customer not found"
        assert state.customer is None
        assert state.loading is False

    def test_backend_validation_message_is_shown(self):
        controller, service = _setup()
        service.fail(1001, ValidationError("Customer number is reserved"))
        state = _run(controller.submit("1001"))
        assert state.error == "Customer number is reserved"

    def test_network_error_message(self):
        controller, service = _setup()
        service.fail(1001, NetworkError())
        state = _run(controller.submit("1001"))
        assert state.error == NetworkError.default_message
        assert state.screen is Screen.ENTRY

    def test_unexpected_exception_is_reported_as_network_error(self):
        controller, service = _setup()
        service.fail(1001, RuntimeError("boom"))
        state = _run(controller.submit("1001"))
        assert state.error == NetworkError.default_message
        assert state.loading is False

    def test_failed_lookup_from_detail_returns_to_entry(self):
        controller, _ = _setup()
        _run(controller.submit("1001"))
        state = _run(controller.submit("4242"))
        assert state.screen is Screen.ENTRY
        assert state.customer is None


class TestRetries:

    def test_network_error_is_retried(self):
        controller, service = _setup(settings=Settings(network_retries=1))
        service.fail(1001, NetworkError())
        state = _run(controller.submit("1001"))
        assert state.customer == ACME
        assert service.calls == [1001, 1001]

    def test_retries_are_bounded(self):
        controller, service = _setup(settings=Settings(network_retries=2))
        service.fail(1001, NetworkError(), NetworkError(), NetworkError(), NetworkError())
        state = _run(controller.submit("1001"))
        assert state.error == NetworkError.default_message
        assert len(service.calls) == 3

    def test_not_found_is_not_retried(self):
        controller, service = _setup(settings=Settings(network_retries=3))
        service.fail(1001, NotFoundError())
        _run(controller.submit("1001"))
        assert service.calls == [1001]

    def test_validation_error_is_not_retried(self):
        controller, service = _setup(settings=Settings(network_retries=3))
        service.fail(1001, ValidationError())
        _run(controller.submit("1001"))
        assert service.calls == [1001]

    def test_no_retry_by_default(self):
        controller, service = _setup()
        service.fail(1001, NetworkError())
        _run(controller.submit("1001"))
        assert service.calls == [1001]


class TestStaleResults:

    def test_later_submit_wins_over_slow_earlier_one(self):
        async def scenario():
            controller, service = _setup()
            slow = service.gate(1001)
            first = asyncio.create_task(controller.submit("1001"))
            await asyncio.sleep(0)
            await controller.submit("1002")
            slow.set()
            await first
            return controller.state

        state = _run(scenario())
        assert state.customer == GLOBEX
        assert state.screen is Screen.DETAIL
        assert state.loading is False

    def test_stale_error_is_discarded(self):
        async def scenario():
            controller, service = _setup()
            slow = service.gate(1001)
            service.fail(1001, NetworkError())
            first = asyncio.create_task(controller.submit("1001"))
            await asyncio.sleep(0)
            await controller.submit("1002")
            slow.set()
            await first
            return controller.state

        state = _run(scenario())
        assert state.error is None
        assert state.customer == GLOBEX

    def test_clear_during_fetch_discards_the_result(self):
        async def scenario():
            controller, service = _setup()
            gate = service.gate(1001)
            task = asyncio.create_task(controller.submit("1001"))
            await asyncio.sleep(0)
            controller.clear()
            gate.set()
            await task
            return controller.state

        state = _run(scenario())
        assert state.screen is Screen.ENTRY
        assert state.customer is None
        assert state.loading is False
        assert state.input_value == ""

    def test_invalid_submit_during_fetch_discards_the_result(self):
        async def scenario():
            controller, service = _setup()
            gate = service.gate(1001)
            task = asyncio.create_task(controller.submit("1001"))
            await asyncio.sleep(0)
            await controller.submit("abc")
            gate.set()
            await task
            return controller.state

        state = _run(scenario())
        assert state.screen is Screen.ENTRY
        assert state.error == NUMERIC_MESSAGE
        assert state.loading is False

    def test_close_during_fetch_discards_the_result(self):
        async def scenario():
            controller, service = _setup()
            gate = service.gate(1001)
            task = asyncio.create_task(controller.submit("1001"))
            await asyncio.sleep(0)
            controller.close()
            gate.set()
            await task
            return controller.state

        assert _run(scenario()).customer is None


class TestClear:

    def test_clear_resets_detail(self):
        controller, _ = _setup()
        _run(controller.submit("1001"))
        state = controller.clear()
        assert state.screen is Screen.ENTRY
        assert state.input_value == ""
        assert state.customer is None
        assert state.error is None

    def test_clear_removes_error(self):
        controller, _ = _setup()
        _run(controller.submit("abc"))
        assert controller.clear().error is None

    def test_clear_is_idempotent(self):
        controller, _ = _setup()
        _run(controller.submit("1001"))
        first = controller.clear().snapshot()
        second = controller.clear().snapshot()
        assert first == second

    def test_return_to_entry_matches_clear(self):
        controller, _ = _setup()
        _run(controller.submit("1001"))
        assert controller.return_to_entry().screen is Screen.ENTRY
        assert controller.return_to_entry().customer is None


class TestExit:

    def test_default_exit_goes_back_in_history(self):
        controller, _ = _setup()
        assert controller.exit() == NAVIGATE_BACK
        assert controller.take_navigation() == NAVIGATE_BACK

    def test_default_exit_navigates_to_exit_url(self):
        controller, _ = _setup(settings=Settings(exit_url="/menu"))
        assert controller.exit() == "/menu"
        assert controller.take_navigation() == "/menu"
        assert controller.take_navigation() is None

    def test_exit_handler_is_called(self):
        calls = []

        def on_exit():
            calls.append("exit")
            return "/home"

        controller, _ = _setup(on_exit=on_exit)
        assert controller.exit() == "/home"
        assert calls == ["exit"]

    def test_exit_does_not_change_state(self):
        controller, _ = _setup()
        _run(controller.submit("1001"))
        before = controller.state.snapshot()
        controller.exit()
        assert controller.state == before


class TestKeyboard:

    def test_keys_ignored_until_mounted(self):
        controller, _ = _setup()
        assert controller.handle_key("F3") is False
        assert controller.take_navigation() is None

    def test_exit_key_works_on_both_screens(self):
        controller, _ = _setup()
        with controller.mounted():
            assert controller.handle_key("F3") is True
            assert controller.take_navigation() == NAVIGATE_BACK
            _run(controller.submit("1001"))
            assert controller.handle_key("F3") is True
            assert controller.take_navigation() == NAVIGATE_BACK
            assert controller.state.screen is Screen.DETAIL

    @pytest.mark.parametrize("key", ["F12", "Escape", "esc"])
    def test_return_keys_leave_detail(self, key):
        controller, _ = _setup()
        with controller.mounted():
            _run(controller.submit("1001"))
            assert controller.handle_key(key) is True
            assert controller.state.screen is Screen.ENTRY
            assert controller.state.customer is None

    def test_return_keys_unbound_on_entry(self):
        controller, _ = _setup()
        with controller.mounted():
            _run(controller.submit("abc"))
            assert controller.handle_key("F12") is False
            assert controller.state.error == NUMERIC_MESSAGE

    def test_unknown_key(self):
        controller, _ = _setup()
        with controller.mounted():
            assert controller.handle_key("F5") is False

    def test_bindings_follow_screen_changes(self):
        controller, _ = _setup()
        controller.mount()
        assert set(controller.keys.active_keys()) == {"F3"}
        _run(controller.submit("1001"))
        assert set(controller.keys.active_keys()) == {"F3", "F12", "Escape"}
        controller.clear()
        assert set(controller.keys.active_keys()) == {"F3"}
        controller.unmount()

    def test_listeners_released_on_error(self):
        controller, _ = _setup()
        with pytest.raises(RuntimeError):
            with controller.mounted():
                _run(controller.submit("1001"))
                raise RuntimeError("render failed")
        assert controller.keys.active == 0
        assert not controller.is_mounted

    def test_mount_is_idempotent(self):
        controller, _ = _setup()
        controller.mount()
        controller.mount()
        assert controller.keys.active == 1
        controller.close()
        assert controller.keys.active == 0


class TestLogging:

    def test_screen_transitions_log_the_state(self, caplog):
        caplog.set_level(logging.DEBUG, logger="customer_inquiry.state")
        controller, _ = _setup()
        _run(controller.submit("1001"))
        dumps = [r for r in caplog.records if r.getMessage().startswith("State ")]
        assert len(dumps) == 1
        assert "'screen': 'detail'" in dumps[0].getMessage()
