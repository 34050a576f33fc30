"""
Demo implementation of CustomerService using static in-memory data.

This service is useful for:
- Local development without a running customer backend
- Testing UI components with realistic data
- Demonstrating the lookup flow, including not-found errors
"""

import asyncio
from typing import Iterable

from customer_inquiry.data.demo_customers import DEMO_CUSTOMERS
from customer_inquiry.errors import NotFoundError
from customer_inquiry.lib import logs
from customer_inquiry.models.customer import Customer
from customer_inquiry.services.customer_service import CustomerService

LOG = logs.logger(__file__)


class DemoCustomerService(CustomerService):
    """
    In-memory customer service backed by static demo data.

    Attributes:
        latency: Seconds to wait before answering, to make the loading
            state visible in the UI.
        calls: Number of fetch_customer calls served.
    """

    def __init__(
        self,
        customers: Iterable[Customer] | None = None,
        latency: float = 0.0,
    ) -> None:
        """
        Initialize with customer data.

        Args:
            customers: Custom customer list, or None to use DEMO_CUSTOMERS.
            latency: Simulated response delay in seconds.
        """
        source = DEMO_CUSTOMERS if customers is None else customers
        self._customers = {c.customer_number: c for c in source}
        self.latency = latency
        self.calls = 0

    async def fetch_customer(self, customer_number: int) -> Customer:
        """Return the fixture customer or raise NotFoundError."""
        self.calls += 1
        if self.latency:
            await asyncio.sleep(self.latency)
        try:
            return self._customers[customer_number]
        except KeyError:
            LOG.info("Demo customer not found: %s", customer_number)
            raise NotFoundError() from None
