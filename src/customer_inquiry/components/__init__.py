"""
Reusable Dash UI components for the Customer Inquiry application.

This package provides the two screens of the lookup flow:
- customer_search: Customer number entry form with error and loading states
- customer_detail: Read-only customer detail card

All components are pure functions of SearchState that return Dash
html/dcc elements, making them easy to test and compose.
"""

from customer_inquiry.components.customer_detail import (
    build_detail_screen,
    customer_fields,
)
from customer_inquiry.components.customer_search import (
    build_entry_screen,
    build_error_message,
)

__all__ = [
    "build_detail_screen",
    "build_entry_screen",
    "build_error_message",
    "customer_fields",
]
