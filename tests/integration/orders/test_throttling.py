"""Testes de integração para throttling na API de pedidos."""

from __future__ import annotations

import pytest
from rest_framework.throttling import ScopedRateThrottle

pytestmark = pytest.mark.integration


@pytest.fixture()
def tight_rates(monkeypatch):
    monkeypatch.setattr(
        ScopedRateThrottle,
        "THROTTLE_RATES",
        {"order_creation": "3/minute", "order_listing": "100/minute"},
    )


def test_order_creation_is_throttled(tight_rates, auth_client, order_payload):
    for _ in range(3):
        response = auth_client.post("/api/v1/orders/", order_payload, format="json")
        assert response.status_code == 201

    response = auth_client.post("/api/v1/orders/", order_payload, format="json")
    assert response.status_code == 429
    assert response.data["type"] == "client_error"
    assert response.data["errors"][0]["code"] == "throttled"


def test_order_listing_has_higher_limit(tight_rates, auth_client):
    for _ in range(5):
        response = auth_client.get("/api/v1/orders/")
        assert response.status_code == 200


def test_status_options_is_not_scoped(tight_rates, staff_client, make_order):
    order = make_order()
    for _ in range(4):
        response = staff_client.get(f"/api/v1/orders/{order.id}/status-options/")
        assert response.status_code == 200
