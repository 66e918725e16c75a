"""Order status lifecycle policy.

Pure functions that decide which statuses an order may move to next.
They never raise and never touch the database: every status or payment
method outside the tables falls through to the table's default branch
(no options for the standard flow, cancellation only for the payroll flow).

The service layer is the only writer of ``Order.status`` and must call
``can_transition_to_status`` before persisting a change (RN-PED-001).

Two notions of "next status" exist on purpose:

- ``get_next_status_options``: payment-aware, every legal next status,
  default action first and cancellation last.
- ``get_next_natural_status``: a single fixed forward path for simple
  "advance" affordances.  It knows nothing about payroll orders.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Optional

from modules.orders.constants import (
    NATURAL_STATUS_SEQUENCE,
    PAYROLL_DEFAULT_TRANSITIONS,
    PAYROLL_TRANSITIONS,
    STANDARD_DEFAULT_TRANSITIONS,
    STANDARD_TRANSITIONS,
    TERMINAL_STATES,
    PaymentMethod,
    PaymentStatus,
)


def get_next_status_options(
    current_status: str,
    has_received_payment: bool = False,
    payment_method: Optional[str] = None,
) -> List[str]:
    """Return the legal next statuses for an order, in display order.

    ``has_received_payment`` is accepted for interface stability but does
    not change the result in either flow.
    """
    if current_status in TERMINAL_STATES:
        return []

    if payment_method == PaymentMethod.PAYROLL_DISCOUNT:
        table, default = PAYROLL_TRANSITIONS, PAYROLL_DEFAULT_TRANSITIONS
    else:
        table, default = STANDARD_TRANSITIONS, STANDARD_DEFAULT_TRANSITIONS

    return list(table.get(current_status, default))


def can_transition_to_status(
    current_status: str,
    target_status: str,
    has_received_payment: bool = False,
    payment_method: Optional[str] = None,
) -> bool:
    """Check whether *target_status* is a legal next status."""
    allowed = get_next_status_options(
        current_status, has_received_payment, payment_method
    )
    return target_status in allowed


def get_next_natural_status(current_status: str) -> Optional[str]:
    """Return the status following *current_status* on the default path.

    ``None`` when the status is not on the path (``received``,
    ``to_deduct``, ``paid``, ``completed``, ``cancelled``) or is its last
    element (``delivered``).
    """
    if current_status not in NATURAL_STATUS_SEQUENCE:
        return None
    index = NATURAL_STATUS_SEQUENCE.index(current_status)
    if index == len(NATURAL_STATUS_SEQUENCE) - 1:
        return None
    return NATURAL_STATUS_SEQUENCE[index + 1]


def has_received_payment(order: Any) -> bool:
    """Return ``True`` if the order's payment counts as received.

    Card payments are settled at checkout, so they always count.  Accepts
    model instances and plain mappings (e.g. an order document).
    """
    if isinstance(order, Mapping):
        payment_status = order.get("payment_status")
        payment_method = order.get("payment_method")
    else:
        payment_status = getattr(order, "payment_status", None)
        payment_method = getattr(order, "payment_method", None)
    return (
        payment_status == PaymentStatus.RECEBIDO
        or payment_method == PaymentMethod.CARD
    )
