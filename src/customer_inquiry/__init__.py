"""
Customer Inquiry UI: A Dash application for looking up customers by number.

This package provides a two-screen web interface: an entry screen that
validates a customer number and a read-only detail screen for the
customer returned by the backend REST API.

Subpackages:
- components: Reusable Dash UI components
- models: Data models and serialization
- services: Data access layer (demo and HTTP implementations)
- data: Static demo fixtures
- lib: Logging, key bindings, event loop and session helpers

Main entry points:
- app.main(): Start the development server
- app.create_app(): Build the Dash application (app.create_server() for WSGI)
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
