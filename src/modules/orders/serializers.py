"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import OrderStatus, PaymentMethod, PaymentStatus
from modules.orders.models import Order, OrderItem, OrderStatusHistory

MONEY = {"max_digits": 10, "decimal_places": 2}

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    """Validates a single item in an order creation request."""

    menu_item_id = serializers.CharField(max_length=100)
    name = serializers.CharField(max_length=255)
    unit_price = serializers.DecimalField(**MONEY, min_value=0)
    quantity = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(required=False, default="", allow_blank=True)


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    customer_name = serializers.CharField(max_length=255)
    customer_phone = serializers.CharField(max_length=20)
    address = serializers.CharField(required=False, default="", allow_blank=True)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices)
    payment_status = serializers.ChoiceField(
        choices=PaymentStatus.choices, required=False, allow_null=True
    )
    status = serializers.ChoiceField(
        choices=OrderStatus.choices, required=False, allow_null=True
    )
    observations = serializers.CharField(required=False, default="", allow_blank=True)
    items = CreateOrderItemSerializer(many=True, allow_empty=False)
    frete = serializers.DecimalField(**MONEY, min_value=0, required=False)
    discount = serializers.DecimalField(**MONEY, min_value=0, required=False)
    total = serializers.DecimalField(
        **MONEY, min_value=0, required=False, allow_null=True
    )
    coupon_code = serializers.CharField(
        max_length=50, required=False, allow_null=True, allow_blank=True
    )


class UpdateStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
    notes = serializers.CharField(required=False, default="", allow_blank=True)


class AdvanceStatusSerializer(serializers.Serializer):
    notes = serializers.CharField(required=False, default="", allow_blank=True)


class CancelOrderSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, default="", allow_blank=True)


class UpdatePaymentStatusSerializer(serializers.Serializer):
    payment_status = serializers.ChoiceField(choices=PaymentStatus.choices)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = [
            "id",
            "menu_item_id",
            "name",
            "quantity",
            "unit_price",
            "subtotal",
            "notes",
        ]
        read_only_fields = fields


class StatusHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderStatusHistory
        fields = [
            "id",
            "old_status",
            "new_status",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested items, history and options."""

    items = OrderItemSerializer(many=True, read_only=True)
    status_history = StatusHistorySerializer(many=True, read_only=True)
    payment_received = serializers.BooleanField(
        source="is_payment_received", read_only=True
    )
    next_status_options = serializers.ListField(
        child=serializers.CharField(), read_only=True
    )

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer_name",
            "customer_phone",
            "address",
            "status",
            "payment_method",
            "payment_status",
            "payment_received",
            "next_status_options",
            "observations",
            "subtotal",
            "frete",
            "discount",
            "total",
            "coupon_code",
            "cancellation_reason",
            "created_at",
            "updated_at",
            "items",
            "status_history",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for order list (no nested relations)."""

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer_name",
            "customer_phone",
            "status",
            "payment_method",
            "payment_status",
            "total",
            "created_at",
        ]
        read_only_fields = fields


class StatusOptionsSerializer(serializers.Serializer):
    """Renders a ``StatusOptionsDTO``."""

    order_id = serializers.UUIDField()
    current_status = serializers.CharField()
    payment_method = serializers.CharField()
    payment_received = serializers.BooleanField()
    is_terminal = serializers.BooleanField()
    next_status_options = serializers.ListField(child=serializers.CharField())
    next_natural_status = serializers.CharField(allow_null=True)
