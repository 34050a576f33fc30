"""
Data models and serialization helpers for the Customer Inquiry UI.

This package provides:
- Customer domain model and wire parsing
- View state (SearchState, Screen)

All models use Python dataclasses for type safety and IDE support.
"""

from customer_inquiry.models.common import Screen, SearchState
from customer_inquiry.models.customer import (
    Customer,
    parse_customer,
    serialize_customer,
)

__all__ = [
    "Customer",
    "Screen",
    "SearchState",
    "parse_customer",
    "serialize_customer",
]
