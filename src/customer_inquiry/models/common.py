"""
View state models for the Customer Inquiry UI.

SearchState holds everything the two screens render from. It is owned by
the controller (see customer_inquiry.state) and only mutated there.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from customer_inquiry.models.customer import Customer, serialize_customer


class Screen(str, Enum):
    """The two screens of the inquiry flow."""

    ENTRY = "entry"
    DETAIL = "detail"


@dataclass
class SearchState:
    """
    Ephemeral state for one browser session.

    Attributes:
        screen: Which screen is showing.
        input_value: Raw text from the customer number field, unvalidated.
        loading: True exactly while a fetch is outstanding.
        error: Message shown on the entry screen, if any.
        customer: Last successfully fetched customer.
    """

    screen: Screen = Screen.ENTRY
    input_value: str = ""
    loading: bool = False
    error: str | None = None
    customer: Customer | None = field(default=None)

    @property
    def on_detail(self) -> bool:
        return self.screen is Screen.DETAIL

    def snapshot(self) -> "SearchState":
        """Return a shallow copy safe to hand to renderers."""
        return replace(self)

    def to_dict(self) -> dict:
        """Serialize state to a JSON-compatible dictionary."""
        return {
            "screen": self.screen.value,
            "input_value": self.input_value,
            "loading": self.loading,
            "error": self.error,
            "customer": serialize_customer(self.customer) if self.customer else None,
        }
