"""Unit tests for Order, OrderItem and OrderStatusHistory models."""

from __future__ import annotations

import re
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.core.exceptions import ValidationError

from modules.orders.constants import OrderStatus, PaymentMethod, PaymentStatus
from modules.orders.models import Order, OrderItem, OrderStatusHistory

pytestmark = pytest.mark.unit


def _order(**overrides) -> Order:
    data = {
        "customer_name": "Ana Paula",
        "customer_phone": "11999990000",
        "payment_method": PaymentMethod.CASH,
        "payment_status": PaymentStatus.A_RECEBER,
        "total": Decimal("30.00"),
    }
    data.update(overrides)
    return Order.objects.create(**data)


class TestOrderNumber:
    def test_generated_on_first_save(self):
        order = _order()
        assert re.fullmatch(r"PED-\d{8}-[0-9A-F]{6}", order.order_number)

    def test_kept_on_later_saves(self):
        order = _order()
        number = order.order_number
        order.observations = "Sem cebola"
        order.save()
        order.refresh_from_db()
        assert order.order_number == number

    def test_collision_retries_with_new_candidate(self):
        existing = _order()
        with patch.object(
            Order,
            "generate_order_number",
            side_effect=[existing.order_number, "PED-20260101-ABCDEF"],
        ):
            order = _order()
        assert order.order_number == "PED-20260101-ABCDEF"

    def test_gives_up_after_max_retries(self):
        existing = _order()
        with patch.object(
            Order, "generate_order_number", return_value=existing.order_number
        ):
            with pytest.raises(RuntimeError, match="unique order_number"):
                _order()


class TestOrderStatusHelpers:
    def test_defaults_to_pending(self):
        order = _order()
        assert order.status == OrderStatus.PENDING
        assert not order.is_terminal

    @pytest.mark.parametrize("status", [OrderStatus.DELIVERED, OrderStatus.CANCELLED])
    def test_terminal_states(self, status):
        order = _order(status=status)
        assert order.is_terminal
        assert order.next_status_options == []

    def test_next_status_options_standard(self):
        order = _order(status=OrderStatus.READY)
        assert order.next_status_options == [
            OrderStatus.DELIVERING,
            OrderStatus.CANCELLED,
        ]
        assert order.next_natural_status == OrderStatus.DELIVERING

    def test_next_status_options_payroll(self):
        order = _order(
            status=OrderStatus.READY, payment_method=PaymentMethod.PAYROLL_DISCOUNT
        )
        assert order.next_status_options == [
            OrderStatus.TO_DEDUCT,
            OrderStatus.CANCELLED,
        ]
        assert order.can_transition_to(OrderStatus.TO_DEDUCT)
        assert not order.can_transition_to(OrderStatus.DELIVERING)

    def test_payment_received_for_card(self):
        order = _order(payment_method=PaymentMethod.CARD, payment_status=None)
        assert order.is_payment_received

    def test_payment_received_when_recebido(self):
        order = _order(payment_status=PaymentStatus.RECEBIDO)
        assert order.is_payment_received

    def test_payment_pending_for_cash(self):
        assert not _order().is_payment_received

    def test_status_read_back_from_db_still_matches_policy(self):
        order = _order(status=OrderStatus.TO_DEDUCT, payment_method="payroll_discount")
        reloaded = Order.objects.get(pk=order.pk)
        assert reloaded.can_transition_to("paid")

    def test_negative_total_fails_validation(self):
        order = _order()
        order.total = Decimal("-1.00")
        with pytest.raises(ValidationError):
            order.clean()

    def test_str(self):
        order = _order()
        assert str(order) == f"{order.order_number} (pending)"


class TestOrderSoftDelete:
    def test_delete_sets_deleted_at(self):
        order = _order()
        order.delete()
        order.refresh_from_db()
        assert order.is_deleted
        assert not Order.objects.alive().filter(pk=order.pk).exists()
        assert Order.objects.filter(pk=order.pk).exists()

    def test_delete_twice_is_noop(self):
        order = _order()
        order.delete()
        assert order.delete() == (0, {})


class TestOrderItem:
    def test_subtotal_calculated_on_save(self):
        order = _order()
        item = OrderItem.objects.create(
            order=order,
            menu_item_id="acai-500",
            name="Açaí 500ml",
            unit_price=Decimal("18.90"),
            quantity=3,
        )
        assert item.subtotal == Decimal("56.70")

    def test_subtotal_recalculated_on_update(self):
        order = _order()
        item = OrderItem.objects.create(
            order=order,
            menu_item_id="acai-500",
            name="Açaí 500ml",
            unit_price=Decimal("10.00"),
            quantity=1,
        )
        item.quantity = 4
        item.save()
        item.refresh_from_db()
        assert item.subtotal == Decimal("40.00")

    def test_missing_unit_price_rejected(self):
        order = _order()
        with pytest.raises(ValidationError):
            OrderItem.objects.create(
                order=order, menu_item_id="x", name="X", quantity=1
            )

    def test_zero_quantity_fails_validation(self):
        item = OrderItem(
            order=_order(),
            menu_item_id="x",
            name="X",
            unit_price=Decimal("1.00"),
            quantity=0,
        )
        with pytest.raises(ValidationError):
            item.clean()


class TestOrderStatusHistory:
    def test_str_shows_transition(self):
        order = _order()
        history = OrderStatusHistory.objects.create(
            order=order,
            old_status=OrderStatus.PENDING,
            new_status=OrderStatus.CONFIRMED,
        )
        assert str(history).endswith("pending -> confirmed")

    def test_user_is_optional(self):
        history = OrderStatusHistory.objects.create(
            order=_order(), new_status=OrderStatus.PENDING
        )
        assert history.user is None
        assert history.old_status is None
