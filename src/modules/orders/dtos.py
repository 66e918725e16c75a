"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single order line item.
- ``CreateOrderDTO``: input for order creation (nested items).
- ``StatusOptionsDTO``: what the status policy allows for an order.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.orders.constants import PaymentMethod, PaymentStatus

if TYPE_CHECKING:
    from modules.orders.models import Order

ZERO = Decimal("0.00")


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single order item.

    ``name`` and ``unit_price`` are the catalogue values shown at checkout;
    the menu itself lives in an external store.
    """

    model_config = ConfigDict(frozen=True)

    menu_item_id: str
    name: str
    unit_price: Decimal
    quantity: int = 1
    notes: str = ""

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v

    @field_validator("unit_price")
    @classmethod
    def unit_price_must_not_be_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Unit price cannot be negative.")
        return v

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates:
    - ``items`` must contain at least one item.
    - ``payment_method`` / ``payment_status`` are known choices.
    - fees, discount and an explicit total are non-negative.
    """

    model_config = ConfigDict(frozen=True)

    customer_name: str
    customer_phone: str
    address: str = ""
    payment_method: PaymentMethod
    payment_status: Optional[PaymentStatus] = None
    status: Optional[str] = None
    observations: str = ""
    items: List[CreateOrderItemDTO]
    frete: Decimal = ZERO
    discount: Decimal = ZERO
    total: Optional[Decimal] = None
    coupon_code: Optional[str] = None
    idempotency_key: Optional[str] = None

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v

    @field_validator("customer_name", "customer_phone")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field cannot be blank.")
        return v.strip()

    @field_validator("frete", "discount", "total")
    @classmethod
    def must_not_be_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v < 0:
            raise ValueError("Value cannot be negative.")
        return v

    @property
    def subtotal(self) -> Decimal:
        return sum((item.subtotal for item in self.items), ZERO)

    @property
    def computed_total(self) -> Decimal:
        """``total`` if supplied, else subtotal + frete - discount (floor 0)."""
        if self.total is not None:
            return self.total
        return max(self.subtotal + self.frete - self.discount, ZERO)


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class StatusOptionsDTO(BaseModel):
    """Immutable snapshot of what the status policy allows for an order."""

    model_config = ConfigDict(frozen=True)

    order_id: UUID
    current_status: str
    payment_method: str
    payment_received: bool
    is_terminal: bool
    next_status_options: List[str]
    next_natural_status: Optional[str]

    @classmethod
    def from_entity(cls, order: Order) -> StatusOptionsDTO:
        return cls(
            order_id=order.id,
            current_status=order.status,
            payment_method=order.payment_method,
            payment_received=order.is_payment_received,
            is_terminal=order.is_terminal,
            next_status_options=order.next_status_options,
            next_natural_status=order.next_natural_status,
        )

