"""Unit tests for Orders event handlers and in-memory bus."""

from __future__ import annotations

import logging
from uuid import UUID

import pytest

from modules.orders.events import (
    OrderCancelled,
    OrderCreated,
    OrderDelivered,
    OrderPaymentStatusChanged,
    OrderStatusChanged,
)
from modules.orders.handlers import (
    OrderCancelledHandler,
    OrderCreatedHandler,
    OrderDeliveredHandler,
    OrderPaymentStatusChangedHandler,
    OrderStatusChangedHandler,
)
from shared.infrastructure.bus import InMemoryEventBus, event_bus

pytestmark = pytest.mark.unit

ORDER_ID = UUID("0190abcd-efab-7cde-8fab-cdefabcdefab")


@pytest.mark.parametrize(
    "handler,event,expected",
    [
        (
            OrderCreatedHandler(),
            OrderCreated(aggregate_id=ORDER_ID, status="pending"),
            "Novo pedido",
        ),
        (
            OrderStatusChangedHandler(),
            OrderStatusChanged(
                aggregate_id=ORDER_ID, old_status="ready", new_status="delivering"
            ),
            "ready -> delivering",
        ),
        (
            OrderDeliveredHandler(),
            OrderDelivered(aggregate_id=ORDER_ID, customer_phone="11987654321"),
            "entregue",
        ),
        (
            OrderCancelledHandler(),
            OrderCancelled(aggregate_id=ORDER_ID, reason="Cliente desistiu"),
            "Processando cancelamento do pedido",
        ),
        (
            OrderPaymentStatusChangedHandler(),
            OrderPaymentStatusChanged(
                aggregate_id=ORDER_ID,
                old_payment_status="a_receber",
                new_payment_status="recebido",
            ),
            "recebido",
        ),
    ],
)
def test_handler_logs(caplog, handler, event, expected):
    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        handler.handle(event)

    assert any(expected in record.getMessage() for record in caplog.records)


def test_delivered_handler_masks_phone(caplog):
    event = OrderDelivered(aggregate_id=ORDER_ID, customer_phone="11987654321")

    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        OrderDeliveredHandler().handle(event)

    assert all("11987654321" not in record.getMessage() for record in caplog.records)


def test_in_memory_event_bus_routes_events():
    bus = InMemoryEventBus()
    handled = []

    class CapturingHandler:
        def handle(self, event) -> None:
            handled.append(event)

    handler = CapturingHandler()
    event = OrderCreated(aggregate_id=ORDER_ID)

    bus.subscribe(OrderCreated, handler)
    bus.subscribe(OrderCreated, handler)
    bus.publish(event)
    bus.publish(OrderCancelled(aggregate_id=ORDER_ID))

    assert handled == [event]


def test_event_class_lookup_by_name():
    bus = InMemoryEventBus()
    bus.subscribe(OrderDelivered, OrderDeliveredHandler())

    assert bus.event_class_for("OrderDelivered") is OrderDelivered
    assert bus.event_class_for("OrderCreated") is None


@pytest.mark.parametrize(
    "event_class",
    [
        OrderCreated,
        OrderStatusChanged,
        OrderDelivered,
        OrderCancelled,
        OrderPaymentStatusChanged,
    ],
)
def test_app_subscribes_every_order_event(event_class):
    assert event_bus.event_class_for(event_class.__name__) is event_class
