"""
Static and demo data for the Customer Inquiry UI.

This package contains fixture data used by DemoCustomerService for
development, testing, and demonstrations without a running backend.

Modules:
- demo_customers: Pre-populated Customer objects with realistic test data
"""
