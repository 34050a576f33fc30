"""
Customer domain model and serialization helpers.

The backend returns one customer record as camelCase JSON, either bare or
wrapped in a {"data": ..., "meta": ...} envelope:

    {
        "customerNumber": 1001,
        "customerName": "ACME Corporation",
        "addressLine1": "123 Main Street",
        "city": "Springfield",
        "state": "IL",
        "zipCode": 62701,
        "phoneNumber": "217-555-0100",
        "accountBalance": 1500.50,
        "creditLimit": 5000.00,
        "lastOrderDate": "2024-01-15"
    }

Only customerNumber is required. Every other field may be null or missing.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Mapping

from benedict import benedict

from customer_inquiry.errors import CustomerPayloadError
from customer_inquiry.utils import (
    MAX_CUSTOMER_NUMBER,
    MIN_CUSTOMER_NUMBER,
    parse_date,
    to_decimal,
)

_ENVELOPE_KEY = "data"


@dataclass(frozen=True, slots=True)
class Customer:
    """A read-only customer record. Only customer_number is guaranteed."""

    customer_number: int
    customer_name: str | None = None
    address_line1: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: int | None = None
    phone_number: str | None = None
    account_balance: Decimal | None = None
    credit_limit: Decimal | None = None
    last_order_date: date | None = None

    def __post_init__(self) -> None:
        number = self.customer_number
        if isinstance(number, bool) or not isinstance(number, int):
            raise CustomerPayloadError(f"Invalid customer number: {number!r}")
        if not MIN_CUSTOMER_NUMBER <= number <= MAX_CUSTOMER_NUMBER:
            raise CustomerPayloadError(f"Customer number out of range: {number}")
        if self.state is not None and len(self.state) != 2:
            raise CustomerPayloadError(f"State must be 2 characters: {self.state!r}")
        if self.zip_code is not None and self.zip_code <= 0:
            raise CustomerPayloadError(f"Zip code must be positive: {self.zip_code}")


def parse_customer(payload: Any) -> Customer:
    """
    Parse a backend JSON body into a Customer.

    Uses benedict for safe key access so missing keys and explicit nulls
    are handled the same way.

    Args:
        payload: Decoded JSON body, bare or wrapped in a data envelope.

    Returns:
        Customer dataclass.

    Raises:
        CustomerPayloadError: If the body does not describe a valid customer.
    """
    if not isinstance(payload, Mapping):
        raise CustomerPayloadError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )
    b = benedict(dict(payload), keypath_separator=None)
    if isinstance(b.get(_ENVELOPE_KEY), Mapping):
        b = benedict(dict(b[_ENVELOPE_KEY]), keypath_separator=None)

    number = b.get("customerNumber")
    if number is None:
        number = b.get("customerId")

    return Customer(
        customer_number=_int_field(number, "customerNumber", required=True),
        customer_name=_str_field(b.get("customerName"), "customerName"),
        address_line1=_str_field(b.get("addressLine1"), "addressLine1"),
        city=_str_field(b.get("city"), "city"),
        state=_str_field(b.get("state"), "state"),
        zip_code=_int_field(b.get("zipCode"), "zipCode"),
        phone_number=_str_field(b.get("phoneNumber"), "phoneNumber"),
        account_balance=_decimal_field(b.get("accountBalance"), "accountBalance"),
        credit_limit=_decimal_field(b.get("creditLimit"), "creditLimit"),
        last_order_date=_date_field(b.get("lastOrderDate"), "lastOrderDate"),
    )


def serialize_customer(customer: Customer) -> dict:
    """Convert a Customer into a JSON serializable dictionary."""
    return {
        "customer_number": customer.customer_number,
        "customer_name": customer.customer_name,
        "address_line1": customer.address_line1,
        "city": customer.city,
        "state": customer.state,
        "zip_code": customer.zip_code,
        "phone_number": customer.phone_number,
        "account_balance": _decimal_str(customer.account_balance),
        "credit_limit": _decimal_str(customer.credit_limit),
        "last_order_date": (
            customer.last_order_date.isoformat() if customer.last_order_date else None
        ),
    }



def _decimal_str(value: Decimal | None) -> str | None:
    return str(value) if value is not None else None


def _str_field(value: Any, name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise CustomerPayloadError(f"{name} must be a string, got {value!r}")
    # Fixed-width legacy fields arrive space padded
    value = value.strip()
    return value or None


def _int_field(value: Any, name: str, required: bool = False) -> int | None:
    if value is None:
        if required:
            raise CustomerPayloadError(f"{name} is required")
        return None
    if isinstance(value, bool):
        raise CustomerPayloadError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise CustomerPayloadError(f"{name} must be an integer, got {value!r}")


def _decimal_field(value: Any, name: str) -> Decimal | None:
    if value is None:
        return None
    result = to_decimal(value)
    if result is None:
        raise CustomerPayloadError(f"{name} must be a number, got {value!r}")
    return result


def _date_field(value: Any, name: str) -> date | None:
    # Legacy files store "no date" as 0
    if value is None or value == 0 or value == "":
        return None
    result = parse_date(value)
    if result is None:
        raise CustomerPayloadError(f"{name} is not a valid date: {value!r}")
    return result
