from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from modules.orders.constants import PaymentMethod
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _local_cache(settings):
    """Throttling and the health check hit the cache; keep it in-process."""
    settings.CACHES = {
        "default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"}
    }
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def user():
    return User.objects.create_user(username="atendente", password="testpass123")


@pytest.fixture()
def staff_user():
    return User.objects.create_user(
        username="gerente", password="testpass123", is_staff=True
    )


@pytest.fixture()
def auth_client(user):
    """Authenticated, non-staff client (storefront checkout)."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def staff_client(staff_user):
    """Authenticated staff client (back office)."""
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client


@pytest.fixture()
def order_service():
    return OrderService(order_repository=OrderDjangoRepository())


@pytest.fixture()
def make_order_dto():
    """Factory for ``CreateOrderDTO`` with sensible defaults."""

    def _make(**overrides):
        data = {
            "customer_name": "Maria Souza",
            "customer_phone": "11987654321",
            "address": "Rua das Flores, 123",
            "payment_method": PaymentMethod.CASH,
            "items": [
                CreateOrderItemDTO(
                    menu_item_id="burger-classic",
                    name="X-Burguer",
                    unit_price=Decimal("25.00"),
                    quantity=2,
                )
            ],
            "frete": Decimal("5.00"),
        }
        data.update(overrides)
        return CreateOrderDTO(**data)

    return _make


@pytest.fixture()
def make_order(order_service, make_order_dto):
    """Create an order through the service layer."""

    def _make(**overrides):
        return order_service.create_order(make_order_dto(**overrides))

    return _make


@pytest.fixture()
def order_payload():
    return {
        "customer_name": "João Lima",
        "customer_phone": "11912345678",
        "address": "Av. Paulista, 1000",
        "payment_method": "cash",
        "items": [
            {
                "menu_item_id": "pizza-margherita",
                "name": "Pizza Margherita",
                "unit_price": "42.50",
                "quantity": 2,
            },
            {
                "menu_item_id": "refri-lata",
                "name": "Refrigerante lata",
                "unit_price": "6.00",
                "quantity": 1,
            },
        ],
        "frete": "8.00",
    }
