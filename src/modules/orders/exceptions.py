"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.  The status policy itself never raises.
"""

from __future__ import annotations


class OrderNotFound(Exception):
    """The requested order does not exist or has been soft-deleted."""


class InvalidOrderStatus(Exception):
    """The status policy does not allow the requested transition (RN-PED-001)."""


class InvalidInitialStatus(Exception):
    """An order cannot be created with the requested status."""


class InvalidPaymentStatus(Exception):
    """The payment status is unknown or cannot be changed on this order."""
