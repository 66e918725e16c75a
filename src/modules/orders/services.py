"""Order service layer (Use Cases).

Orchestrates order creation, status management, payment status
updates and cancellation.  All write operations are atomic; the
service defines the unit-of-work boundary.

Business rules enforced:
- RN-PED-001: Every status change is validated by
  ``status_policy.can_transition_to_status`` before it is written.
- RN-PED-002/003: History recorded on every status change.
- RN-PED-004: Orders start at ``pending``; only point-of-sale orders
  may start at ``received`` or ``completed``.
- RN-PAG-002: Card orders are created with payment already received.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.db import transaction

from modules.orders import status_policy
from modules.orders.constants import (
    INITIAL_STATUSES,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from modules.orders.dtos import StatusOptionsDTO
from modules.orders.events import (
    OrderCancelled,
    OrderCreated,
    OrderDelivered,
    OrderPaymentStatusChanged,
    OrderStatusChanged,
)
from modules.orders.exceptions import (
    InvalidInitialStatus,
    InvalidOrderStatus,
    InvalidPaymentStatus,
    OrderNotFound,
)

if TYPE_CHECKING:
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives the repository via constructor injection (DIP).
    """

    def __init__(self, order_repository: IOrderRepository) -> None:
        self._order_repo = order_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create a new order with its items.

        Replays return the order already stored under the same
        ``idempotency_key``.

        Raises:
            InvalidInitialStatus: requested status is not a creation status.
        """
        log = logger.bind(payment_method=str(dto.payment_method))
        log.info("order.creation_started")

        if dto.idempotency_key:
            existing = self._order_repo.get_by_idempotency_key(dto.idempotency_key)
            if existing:
                log.info(
                    "order.idempotency_hit",
                    order_id=str(existing.id),
                    key=dto.idempotency_key,
                )
                return existing

        initial_status = dto.status or OrderStatus.PENDING
        if initial_status not in INITIAL_STATUSES:
            log.warning("order.invalid_initial_status", status=initial_status)
            raise InvalidInitialStatus(
                f"Orders cannot be created with status {initial_status}."
            )

        payment_status = dto.payment_status
        if payment_status is None:
            payment_status = (
                PaymentStatus.RECEBIDO
                if dto.payment_method == PaymentMethod.CARD
                else PaymentStatus.A_RECEBER
            )

        order = self._order_repo.create(
            {
                "customer_name": dto.customer_name,
                "customer_phone": dto.customer_phone,
                "address": dto.address,
                "payment_method": dto.payment_method,
                "payment_status": payment_status,
                "status": initial_status,
                "observations": dto.observations,
                "subtotal": dto.subtotal,
                "frete": dto.frete,
                "discount": dto.discount,
                "total": dto.computed_total,
                "coupon_code": dto.coupon_code,
                "idempotency_key": dto.idempotency_key,
                "items": [item.model_dump() for item in dto.items],
            }
        )

        order.add_domain_event(
            OrderCreated(
                aggregate_id=order.id,
                status=order.status,
                payment_method=order.payment_method,
            )
        )
        self._order_repo.save(order)
        self._order_repo.add_history(
            order_id=order.id,
            status=initial_status,
            notes="Order created",
        )

        log.info("order.created", order_id=str(order.id), status=initial_status)
        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def update_status(
        self,
        order_id: UUID,
        new_status: str,
        notes: str = "",
        user: Any = None,
    ) -> Order:
        """Transition an order to a new status.

        Locks the order row before asking the status policy, so the
        check and the write see the same committed status.

        Raises:
            OrderNotFound: order does not exist.
            InvalidOrderStatus: the status policy rejects the transition.
        """
        order = self._get_locked(order_id)
        log = logger.bind(
            order_id=str(order_id),
            current_status=order.status,
            new_status=new_status,
            payment_method=order.payment_method,
        )

        if not status_policy.can_transition_to_status(
            order.status,
            new_status,
            status_policy.has_received_payment(order),
            order.payment_method,
        ):
            log.warning("order.invalid_transition")
            raise InvalidOrderStatus(
                f"Cannot transition from {order.status} to {new_status}."
            )

        old_status = order.status
        order.status = new_status
        if new_status == OrderStatus.CANCELLED and notes:
            order.cancellation_reason = notes
        self._record_transition(order, old_status, new_status, notes, user)

        log.info("order.status_updated")
        return self._order_repo.get_by_id(str(order_id)) or order

    def advance_status(
        self, order_id: UUID, notes: str = "", user: Any = None
    ) -> Order:
        """Apply the default forward action for the order.

        The default action is the first option the status policy offers;
        cancellation is never applied implicitly.

        Raises:
            OrderNotFound: order does not exist.
            InvalidOrderStatus: the order has no forward transition.
        """
        order = self.get_order(str(order_id))
        options = order.next_status_options
        if not options or options[0] == OrderStatus.CANCELLED:
            logger.warning(
                "order.no_forward_transition",
                order_id=str(order_id),
                current_status=order.status,
            )
            raise InvalidOrderStatus(
                f"Order in status {order.status} has no next status."
            )
        return self.update_status(order_id, options[0], notes=notes, user=user)

    @transaction.atomic
    def cancel_order(
        self, order_id: UUID, reason: str = "", user: Any = None
    ) -> Order:
        """Cancel an order, keeping the cancellation reason.

        Raises:
            OrderNotFound: order does not exist.
            InvalidOrderStatus: cancellation not allowed from current status.
        """
        order = self._get_locked(order_id)
        log = logger.bind(order_id=str(order_id), current_status=order.status)

        if not order.can_transition_to(OrderStatus.CANCELLED):
            log.warning("order.cancel_not_allowed")
            raise InvalidOrderStatus(f"Cannot cancel order in status {order.status}.")

        old_status = order.status
        order.status = OrderStatus.CANCELLED
        order.cancellation_reason = reason
        self._record_transition(
            order, old_status, OrderStatus.CANCELLED, reason or "Order cancelled", user
        )

        log.info("order.cancelled")
        return self._order_repo.get_by_id(str(order_id)) or order

    @transaction.atomic
    def update_payment_status(self, order_id: UUID, payment_status: str) -> Order:
        """Set the payment status of an order.

        Raises:
            OrderNotFound: order does not exist.
            InvalidPaymentStatus: unknown value, or the order is cancelled.
        """
        if payment_status not in PaymentStatus.values:
            raise InvalidPaymentStatus(f"Unknown payment status {payment_status}.")

        order = self._get_locked(order_id)
        log = logger.bind(
            order_id=str(order_id),
            old_payment_status=order.payment_status,
            new_payment_status=payment_status,
        )

        if order.status == OrderStatus.CANCELLED:
            log.warning("order.payment_update_on_cancelled")
            raise InvalidPaymentStatus("Cannot change payment of a cancelled order.")

        if order.payment_status == payment_status:
            log.info("order.payment_status_unchanged")
            return self._order_repo.get_by_id(str(order_id)) or order

        old_payment_status = order.payment_status
        order.payment_status = payment_status
        order.add_domain_event(
            OrderPaymentStatusChanged(
                aggregate_id=order.id,
                old_payment_status=old_payment_status or "",
                new_payment_status=payment_status,
            )
        )
        self._order_repo.save(order)

        log.info("order.payment_status_updated")
        return self._order_repo.get_by_id(str(order_id)) or order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        return self._order_repo.list(filters)

    def get_status_options(self, order_id: str) -> StatusOptionsDTO:
        """What the status policy allows for the order right now."""
        return StatusOptionsDTO.from_entity(self.get_order(order_id))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get_locked(self, order_id: UUID) -> Order:
        order = self._order_repo.get_for_update(str(order_id))
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def _record_transition(
        self,
        order: Order,
        old_status: str,
        new_status: str,
        notes: str,
        user: Any,
    ) -> None:
        if new_status == OrderStatus.CANCELLED:
            order.add_domain_event(
                OrderCancelled(aggregate_id=order.id, reason=order.cancellation_reason)
            )
        else:
            order.add_domain_event(
                OrderStatusChanged(
                    aggregate_id=order.id,
                    old_status=old_status,
                    new_status=new_status,
                )
            )
        if new_status == OrderStatus.DELIVERED:
            order.add_domain_event(
                OrderDelivered(
                    aggregate_id=order.id, customer_phone=order.customer_phone
                )
            )
        self._order_repo.save(order)
        self._order_repo.add_history(
            order_id=order.id,
            status=new_status,
            notes=notes,
            old_status=old_status,
            user=user,
        )
