"""
Abstract base class defining the customer data access contract.

All customer service implementations must extend CustomerService and
provide fetch_customer(). Failures are raised as CustomerLookupError
subclasses so callers never see a transport library's error types.

Implementations:
- DemoCustomerService: Static in-memory data for development/testing
- HttpCustomerService: REST backend via aiohttp
"""

from abc import ABC, abstractmethod

from customer_inquiry.models.customer import Customer


class CustomerService(ABC):
    """
    Abstract base class for customer data access.

    Subclasses must implement fetch_customer(). Each call makes at most one
    backend request; retry policy belongs to the caller.
    """

    @abstractmethod
    async def fetch_customer(self, customer_number: int) -> Customer:
        """
        Return the customer with the given number.

        Args:
            customer_number: Validated number in [1, 99999].

        Raises:
            NotFoundError: The backend has no such customer.
            ValidationError: The backend rejected the number.
            NetworkError: The backend was unreachable or the response
                could not be decoded.
        """

    async def close(self) -> None:
        """Release any held resources. Default implementation does nothing."""
        return None
