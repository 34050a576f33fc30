"""Error taxonomy for customer lookups.

Every failure a lookup can produce is a CustomerLookupError with one of
three kinds, so the UI has a single rendering path for all of them.
"""

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION_ERROR"
    NETWORK = "NETWORK_ERROR"


class CustomerLookupError(Exception):
    """Base class for lookup failures. Carries a kind and a user-facing message."""

    kind: ErrorKind = ErrorKind.NETWORK
    default_message = "Unable to retrieve customer"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}


class NotFoundError(CustomerLookupError):
    """The backend has no record for the requested number."""

    kind = ErrorKind.NOT_FOUND
    default_message = "Customer not found"


class ValidationError(CustomerLookupError):
    """The customer number is malformed, detected locally or by the backend."""

    kind = ErrorKind.VALIDATION
    default_message = "Invalid customer number"


class NetworkError(CustomerLookupError):
    """The backend could not be reached or its response could not be decoded."""

    kind = ErrorKind.NETWORK
    default_message = "Unable to connect to the customer service. Please try again."


class CustomerPayloadError(ValueError):
    """A response body does not describe a valid customer."""


class ConfigurationError(RuntimeError):
    """Required configuration is missing or invalid."""
