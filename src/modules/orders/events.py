"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """Raised when an order is created."""

    status: str = ""
    payment_method: str = ""


@dataclass(frozen=True)
class OrderStatusChanged(DomainEvent):
    """Raised after a status transition accepted by the status policy."""

    old_status: str = ""
    new_status: str = ""


@dataclass(frozen=True)
class OrderDelivered(DomainEvent):
    """Raised when an order reaches ``delivered``.

    Carries the customer phone so the loyalty program can credit the order.
    """

    customer_phone: str = ""


@dataclass(frozen=True)
class OrderCancelled(DomainEvent):
    """Raised when an order is cancelled."""

    reason: str = ""


@dataclass(frozen=True)
class OrderPaymentStatusChanged(DomainEvent):
    """Raised when the payment status of an order changes."""

    old_payment_status: str = ""
    new_payment_status: str = ""
