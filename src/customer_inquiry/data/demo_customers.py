"""Demo customer fixtures used by DemoCustomerService."""

from datetime import date
from decimal import Decimal

from customer_inquiry.models.customer import Customer

DEMO_CUSTOMERS: tuple[Customer, ...] = (
    Customer(
        customer_number=1001,
        customer_name="ACME Corporation",
        address_line1="123 Main Street",
        city="Springfield",
        state="IL",
        zip_code=62701,
        phone_number="2175550100",
        account_balance=Decimal("1500.50"),
        credit_limit=Decimal("5000.00"),
        last_order_date=date(2024, 1, 15),
    ),
    Customer(
        customer_number=1002,
        customer_name="Globex Industries",
        address_line1="742 Evergreen Terrace",
        city="Shelbyville",
        state="IL",
        zip_code=62565,
        phone_number="217-555-0199",
        account_balance=Decimal("-250.00"),
        credit_limit=Decimal("10000.00"),
        last_order_date=date(2023, 11, 2),
    ),
    Customer(
        customer_number=1003,
        customer_name="Initech LLC",
        address_line1="4120 Freidrich Lane",
        city="Austin",
        state="TX",
        zip_code=78744,
        phone_number="5125550142",
        account_balance=Decimal("0.00"),
    ),
    Customer(
        customer_number=2001,
        customer_name="Boston Widget Co",
        address_line1="1 Harbor Way",
        city="Boston",
        state="MA",
        zip_code=2110,
        phone_number=None,
        account_balance=Decimal("98765.43"),
    ),
    # Sparse record: everything but the number is missing
    Customer(customer_number=99999),
)
