"""
Service factory for the Customer Inquiry UI.

This module provides the get_customer_service() factory function that
returns the appropriate CustomerService implementation for the settings.

Available Implementations:
- demo: In-memory service with static customer data (no backend required)
- http: REST backend via aiohttp

Configure via the CUSTOMER_UI_SERVICE environment variable (read into
Settings.service_kind).
"""

from typing import Callable, Dict

from customer_inquiry.config import Settings
from customer_inquiry.lib import logs
from customer_inquiry.services.customer_service import CustomerService
from customer_inquiry.services.customer_service_demo import DemoCustomerService
from customer_inquiry.services.customer_service_http import HttpCustomerService

LOG = logs.logger(__file__)

_SERVICE_REGISTRY: Dict[str, Callable[[Settings], CustomerService]] = {
    "demo": lambda settings: DemoCustomerService(latency=0.3),
    "http": lambda settings: HttpCustomerService(
        settings.api_base_url, timeout=settings.request_timeout
    ),
}


def get_customer_service(
    kind: str | None = None, settings: Settings | None = None
) -> CustomerService:
    """Return a new customer service implementation for the settings."""
    settings = settings or Settings()
    resolved_kind = (kind or settings.service_kind).lower()
    LOG.info("get_customer_service - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _SERVICE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown customer service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory(settings)


__all__ = [
    "CustomerService",
    "DemoCustomerService",
    "HttpCustomerService",
    "get_customer_service",
]
