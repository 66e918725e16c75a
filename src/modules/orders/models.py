"""Order, OrderItem, and OrderStatusHistory models.

Business rules implemented:
- RN-PED-001: Status transitions follow ``modules.orders.status_policy``
  (enforced at service layer; the model only exposes read helpers).
- RN-PED-002: Each status change generates a history record.
- RN-PED-003: History contains old/new status, timestamp, user, and notes.
- RN-PAG-001: ``payment_method`` is fixed once the order exists.
- Idempotency via ``idempotency_key`` unique constraint.
- Order number auto-generated as human-readable identifier.
- OrderItem snapshots the menu item name and price at creation time.
- OrderItem subtotal is always ``quantity * unit_price`` (calculated on save).
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel).
"""

from __future__ import annotations

import secrets
from decimal import Decimal
from typing import Any, List, Optional

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel, SoftDeleteModel
from modules.orders import status_policy
from modules.orders.constants import (
    ORDER_NUMBER_MAX_RETRIES,
    ORDER_NUMBER_PREFIX,
    TERMINAL_STATES,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from shared.domain.events import DomainEventMixin

logger = structlog.get_logger(__name__)

MONEY = {"max_digits": 10, "decimal_places": 2}


class Order(DomainEventMixin, SoftDeleteModel):
    """Order aggregate root.

    ``order_number`` is a human-readable identifier auto-generated on first
    save (format: ``PED-YYYYMMDD-XXXXXX``).  The UUIDv7 ``id`` is used for
    all internal references and API lookups.

    Customer data is a snapshot taken at checkout; the storefront has no
    customer registry of its own.  ``frete`` (delivery fee) and
    ``discount`` are computed upstream and stored as given.
    """

    order_number: models.CharField = models.CharField(
        max_length=20, unique=True, editable=False
    )
    customer_name: models.CharField = models.CharField(max_length=255)
    customer_phone: models.CharField = models.CharField(max_length=20, db_index=True)
    address: models.TextField = models.TextField(blank=True, default="")
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    payment_method: models.CharField = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
    )
    payment_status: models.CharField = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=PaymentStatus.choices,
        null=True,
        blank=True,
    )
    observations: models.TextField = models.TextField(blank=True, default="")
    subtotal: models.DecimalField = models.DecimalField(
        **MONEY, default=Decimal("0.00")
    )
    frete: models.DecimalField = models.DecimalField(**MONEY, default=Decimal("0.00"))
    discount: models.DecimalField = models.DecimalField(
        **MONEY, default=Decimal("0.00")
    )
    total: models.DecimalField = models.DecimalField(**MONEY, default=Decimal("0.00"))
    coupon_code: models.CharField = models.CharField(  # noqa: DJ01
        max_length=50, null=True, blank=True
    )
    cancellation_reason: models.TextField = models.TextField(blank=True, default="")
    idempotency_key: models.CharField = models.CharField(
        max_length=255,
        unique=True,
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    # ------------------------------------------------------------------
    # Status policy helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if the order is in a terminal state."""
        return self.status in TERMINAL_STATES

    @property
    def is_payment_received(self) -> bool:
        return status_policy.has_received_payment(self)

    @property
    def next_status_options(self) -> List[str]:
        """Legal next statuses for this order, default action first."""
        return status_policy.get_next_status_options(
            self.status, self.is_payment_received, self.payment_method
        )

    @property
    def next_natural_status(self) -> Optional[str]:
        return status_policy.get_next_natural_status(self.status)

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        return status_policy.can_transition_to_status(
            self.status,
            new_status,
            self.is_payment_received,
            self.payment_method,
        )

    # ------------------------------------------------------------------
    # Order number generation
    # ------------------------------------------------------------------

    @staticmethod
    def generate_order_number() -> str:
        """Generate a human-readable order number: ``PED-YYYYMMDD-XXXXXX``."""
        now = timezone.now()
        suffix = secrets.token_hex(3).upper()
        return f"{ORDER_NUMBER_PREFIX}-{now:%Y%m%d}-{suffix}"

    # ------------------------------------------------------------------
    # Validation / Persistence
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.total is not None and self.total < 0:
            raise ValidationError({"total": "Total cannot be negative."})

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.order_number:
            for attempt in range(ORDER_NUMBER_MAX_RETRIES):
                candidate = self.generate_order_number()
                if not Order.objects.filter(order_number=candidate).exists():
                    self.order_number = candidate
                    break
                logger.warning("order.number_collision", attempt=attempt + 1)
            else:
                raise RuntimeError(
                    f"Failed to generate unique order_number after "
                    f"{ORDER_NUMBER_MAX_RETRIES} attempts"
                )
        super().save(*args, **kwargs)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.order_number} ({self.status})"


class OrderItem(SoftDeleteModel):
    """Line item of an Order.

    ``menu_item_id`` references the storefront catalogue, which lives in an
    external store, so ``name`` and ``unit_price`` are **snapshots** taken
    at checkout.  ``subtotal`` is always ``quantity * unit_price``,
    recalculated on every save.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    menu_item_id: models.CharField = models.CharField(max_length=100)
    name: models.CharField = models.CharField(max_length=255)
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    unit_price: models.DecimalField = models.DecimalField(**MONEY)
    subtotal: models.DecimalField = models.DecimalField(**MONEY, editable=False)
    notes: models.CharField = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "order_items"
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1."})

    def save(self, *args: Any, **kwargs: Any) -> None:
        if self.unit_price is None:
            raise ValidationError({"unit_price": "Unit price is required."})
        self.subtotal = self.quantity * self.unit_price
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.name} x{self.quantity} (R$ {self.subtotal})"


class OrderStatusHistory(BaseModel):
    """Append-only audit trail for order status transitions.

    Inherits ``BaseModel`` (not ``SoftDeleteModel``): audit records are
    never edited or soft-deleted.  ``user`` is nullable; ``None`` means the
    change was performed by the system or by the checkout itself.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="status_history",
    )
    old_status: models.CharField = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=OrderStatus.choices,
        null=True,
        blank=True,
    )
    new_status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
    )
    user: models.ForeignKey = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )
    notes: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "order_status_history"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["order", "-created_at"],
                name="osh_order_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order} : {self.old_status} -> {self.new_status}"
