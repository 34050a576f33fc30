"""In-memory fakes for testing.

FakeCustomerService implements the same abstract interface as the HTTP
service but answers from a dict. Lookups can be held open with a gate
or made to fail with queued errors, so races and retries are scripted
deterministically. No network, no sleeps.
"""

from __future__ import annotations

import asyncio

from customer_inquiry.errors import NotFoundError
from customer_inquiry.models.customer import Customer
from customer_inquiry.services.customer_service import CustomerService


class FakeCustomerService(CustomerService):

    def __init__(self, customers: list[Customer] | None = None) -> None:
        self._store: dict[int, Customer] = {}
        for c in customers or []:
            self._store[c.customer_number] = c
        self._gates: dict[int, asyncio.Event] = {}
        self._failures: dict[int, list[Exception]] = {}
        self.calls: list[int] = []
        self.closed = False

    def gate(self, customer_number: int) -> asyncio.Event:
        """Hold lookups of this number open until the returned event is set."""
        event = asyncio.Event()
        self._gates[customer_number] = event
        return event

    def fail(self, customer_number: int, *errors: Exception) -> None:
        """Raise these errors, one per call, before answering normally."""
        self._failures.setdefault(customer_number, []).extend(errors)

    async def fetch_customer(self, customer_number: int) -> Customer:
        self.calls.append(customer_number)
        gate = self._gates.get(customer_number)
        if gate is not None:
            await gate.wait()
        queued = self._failures.get(customer_number)
        if queued:
            raise queued.pop(0)
        try:
            return self._store[customer_number]
        except KeyError:
            raise NotFoundError() from None

    async def close(self) -> None:
        self.closed = True
