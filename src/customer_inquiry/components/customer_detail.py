"""Read-only customer detail screen."""

from typing import Sequence

from dash import html
from dash_iconify import DashIconify

from customer_inquiry.models.common import SearchState
from customer_inquiry.models.customer import Customer
from customer_inquiry.utils import (
    display_text,
    format_currency,
    format_date,
    format_phone,
    format_zip,
)

DETAIL_SCREEN_ID = "detail-screen"
RETURN_BUTTON_ID = "return-button"
EXIT_BUTTON_ID = "exit-button"


def customer_fields(
    customer: Customer, zip_fixed_width: bool = False
) -> list[tuple[str, str]]:
    """
    Return the (label, display value) pairs shown for a customer.

    Absent fields render as empty strings. Credit limit and last order
    date are only listed when present.
    """
    fields = [
        ("Customer Number", str(customer.customer_number)),
        ("Name", display_text(customer.customer_name)),
        ("Address", display_text(customer.address_line1)),
        ("City", display_text(customer.city)),
        ("State", display_text(customer.state)),
        ("Zip", format_zip(customer.zip_code, fixed_width=zip_fixed_width)),
        ("Phone", format_phone(customer.phone_number)),
        ("Balance", format_currency(customer.account_balance)),
    ]
    if customer.credit_limit is not None:
        fields.append(("Credit Limit", format_currency(customer.credit_limit)))
    if customer.last_order_date is not None:
        fields.append(("Last Order Date", format_date(customer.last_order_date)))
    return fields


def build_detail_screen(state: SearchState, zip_fixed_width: bool = False) -> html.Div:
    """Return the detail card, hidden unless the state is on the detail screen."""
    visible = state.on_detail and state.customer is not None
    children = []
    if state.customer is not None:
        children.append(_build_header(state.customer))
        children.append(_build_fields(customer_fields(state.customer, zip_fixed_width)))
    children.append(_build_actions())
    children.append(
        html.P("F3=Exit  F12=Return", className="function-keys muted"),
    )
    return html.Div(
        id=DETAIL_SCREEN_ID,
        className="card detail-screen" + ("" if visible else " hidden"),
        children=children,
    )


def _build_header(customer: Customer) -> html.Div:
    return html.Div(
        className="card-header",
        children=[
            DashIconify(icon="lucide:user-round", className="title-icon"),
            html.H2("Customer Detail"),
            html.Span(f"#{customer.customer_number}", className="badge secondary"),
        ],
    )


def _build_fields(fields: Sequence[tuple[str, str]]) -> html.Dl:
    rows = []
    for label, value in fields:
        rows.append(html.Dt(f"{label}:", className="info-label"))
        rows.append(
            html.Dd(
                value,
                className="info-value" + (" balance" if label == "Balance" else ""),
            )
        )
    return html.Dl(className="info-grid surface", children=rows)


def _build_actions() -> html.Div:
    return html.Div(
        className="button-group",
        children=[
            html.Button(
                id=RETURN_BUTTON_ID,
                className="button primary",
                children=[
                    DashIconify(icon="lucide:arrow-left", className="button-icon"),
                    "Return to Search",
                ],
            ),
            html.Button(
                id=EXIT_BUTTON_ID,
                className="button secondary ghost",
                children=[
                    DashIconify(icon="lucide:log-out", className="button-icon"),
                    "Exit",
                ],
            ),
        ],
    )
