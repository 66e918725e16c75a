"""Integration tests for idempotent order creation (``Idempotency-Key``)."""

from __future__ import annotations

import pytest

from modules.core.models import OutboxEvent
from modules.orders.models import Order

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


def test_replay_returns_same_order_with_200(auth_client, order_payload):
    first = auth_client.post(
        URL, order_payload, format="json", HTTP_IDEMPOTENCY_KEY="checkout-abc"
    )
    second = auth_client.post(
        URL, order_payload, format="json", HTTP_IDEMPOTENCY_KEY="checkout-abc"
    )

    assert first.status_code == 201
    assert second.status_code == 200
    assert first.data["id"] == second.data["id"]
    assert Order.objects.count() == 1
    assert OutboxEvent.objects.filter(event_type="OrderCreated").count() == 1


def test_different_keys_create_different_orders(auth_client, order_payload):
    auth_client.post(URL, order_payload, format="json", HTTP_IDEMPOTENCY_KEY="k1")
    auth_client.post(URL, order_payload, format="json", HTTP_IDEMPOTENCY_KEY="k2")
    assert Order.objects.count() == 2


def test_without_key_every_request_creates(auth_client, order_payload):
    auth_client.post(URL, order_payload, format="json")
    auth_client.post(URL, order_payload, format="json")
    assert Order.objects.count() == 2
