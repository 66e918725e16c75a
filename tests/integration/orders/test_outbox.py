"""Integration tests for OutboxEvent creation from OrderService."""

from __future__ import annotations

import pytest

from modules.core.models import EventStatus, OutboxEvent
from modules.orders.constants import OrderStatus, PaymentStatus

pytestmark = pytest.mark.integration


def _events(order, event_type):
    return OutboxEvent.objects.filter(event_type=event_type, aggregate_id=str(order.id))


def test_create_order_writes_outbox_event(make_order):
    order = make_order()

    event = _events(order, "OrderCreated").get()
    assert event.topic == "orders"
    assert event.status == EventStatus.PENDING
    assert event.payload["status"] == "pending"
    assert event.payload["payment_method"] == "cash"


def test_status_change_writes_outbox_event(order_service, make_order):
    order = make_order()
    order_service.update_status(order.id, OrderStatus.CONFIRMED)

    event = _events(order, "OrderStatusChanged").get()
    assert event.payload["old_status"] == "pending"
    assert event.payload["new_status"] == "confirmed"


def test_delivery_writes_delivered_event(order_service, make_order):
    order = make_order(status=OrderStatus.RECEIVED)
    order_service.update_status(order.id, OrderStatus.DELIVERED)

    assert _events(order, "OrderStatusChanged").count() == 1
    delivered = _events(order, "OrderDelivered").get()
    assert delivered.payload["customer_phone"] == order.customer_phone


def test_cancel_order_writes_outbox_event(order_service, make_order):
    order = make_order()
    order_service.cancel_order(order.id, reason="Sem estoque")

    event = _events(order, "OrderCancelled").get()
    assert event.payload["reason"] == "Sem estoque"
    assert not _events(order, "OrderStatusChanged").exists()


def test_payment_update_writes_outbox_event(order_service, make_order):
    order = make_order()
    order_service.update_payment_status(order.id, PaymentStatus.RECEBIDO)
    order_service.update_payment_status(order.id, PaymentStatus.RECEBIDO)

    event = _events(order, "OrderPaymentStatusChanged").get()
    assert event.payload["old_payment_status"] == "a_receber"
    assert event.payload["new_payment_status"] == "recebido"


def test_rejected_transition_writes_nothing(order_service, make_order):
    from modules.orders.exceptions import InvalidOrderStatus

    order = make_order()
    with pytest.raises(InvalidOrderStatus):
        order_service.update_status(order.id, OrderStatus.DELIVERED)

    assert OutboxEvent.objects.filter(aggregate_id=str(order.id)).count() == 1
