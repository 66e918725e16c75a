"""Event handlers for Orders domain events."""

from __future__ import annotations

import structlog

from modules.orders.events import (
    OrderCancelled,
    OrderCreated,
    OrderDelivered,
    OrderPaymentStatusChanged,
    OrderStatusChanged,
)
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderCreatedHandler(IEventHandler[OrderCreated]):
    def handle(self, event: OrderCreated) -> None:
        logger.info(
            f"Novo pedido {event.aggregate_id} recebido",
            order_id=str(event.aggregate_id),
            status=event.status,
            payment_method=event.payment_method,
        )


class OrderStatusChangedHandler(IEventHandler[OrderStatusChanged]):
    def handle(self, event: OrderStatusChanged) -> None:
        logger.info(
            f"Pedido {event.aggregate_id}: {event.old_status} -> {event.new_status}",
            order_id=str(event.aggregate_id),
            old_status=event.old_status,
            new_status=event.new_status,
        )


class OrderDeliveredHandler(IEventHandler[OrderDelivered]):
    """Logs delivered orders with the customer contact (masked in output)."""

    def handle(self, event: OrderDelivered) -> None:
        logger.info(
            f"Pedido {event.aggregate_id} entregue",
            order_id=str(event.aggregate_id),
            customer_phone=event.customer_phone,
        )


class OrderCancelledHandler(IEventHandler[OrderCancelled]):
    def handle(self, event: OrderCancelled) -> None:
        logger.info(
            f"Processando cancelamento do pedido {event.aggregate_id}",
            order_id=str(event.aggregate_id),
            reason=event.reason,
        )


class OrderPaymentStatusChangedHandler(IEventHandler[OrderPaymentStatusChanged]):
    def handle(self, event: OrderPaymentStatusChanged) -> None:
        logger.info(
            f"Pagamento do pedido {event.aggregate_id}: {event.new_payment_status}",
            order_id=str(event.aggregate_id),
            old_payment_status=event.old_payment_status,
            new_payment_status=event.new_payment_status,
        )


order_created_handler = OrderCreatedHandler()
order_status_changed_handler = OrderStatusChangedHandler()
order_delivered_handler = OrderDeliveredHandler()
order_cancelled_handler = OrderCancelledHandler()
order_payment_status_changed_handler = OrderPaymentStatusChangedHandler()
