"""Order domain constants.

Defines the status, payment method and payment status choices plus the
transition tables that drive the order lifecycle policy
(see ``modules.orders.status_policy``).
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pendente"
    CONFIRMED = "confirmed", "Confirmado"
    PREPARING = "preparing", "Em preparo"
    READY = "ready", "Pronto"
    DELIVERING = "delivering", "Saiu para entrega"
    RECEIVED = "received", "Recebido"
    DELIVERED = "delivered", "Entregue"
    CANCELLED = "cancelled", "Cancelado"
    TO_DEDUCT = "to_deduct", "A descontar"
    PAID = "paid", "Pago"
    COMPLETED = "completed", "Concluído"


class PaymentMethod(models.TextChoices):
    CARD = "card", "Cartão"
    CASH = "cash", "Dinheiro"
    PIX = "pix", "Pix"
    PAYROLL_DISCOUNT = "payroll_discount", "Desconto em folha"


class PaymentStatus(models.TextChoices):
    A_RECEBER = "a_receber", "A receber"
    RECEBIDO = "recebido", "Recebido"


# Card, cash, pix (or no payment method at all).
STANDARD_TRANSITIONS: dict[str, tuple[str, ...]] = {
    OrderStatus.PENDING: (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
    OrderStatus.CONFIRMED: (OrderStatus.PREPARING, OrderStatus.CANCELLED),
    OrderStatus.PREPARING: (OrderStatus.READY, OrderStatus.CANCELLED),
    OrderStatus.READY: (OrderStatus.DELIVERING, OrderStatus.CANCELLED),
    OrderStatus.DELIVERING: (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
    # Entry point used by the point of sale, outside the main sequence.
    OrderStatus.RECEIVED: (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
}
STANDARD_DEFAULT_TRANSITIONS: tuple[str, ...] = ()

# Payroll discount: payment is deducted from the payroll, so the order must
# pass through TO_DEDUCT and PAID before delivery.
PAYROLL_TRANSITIONS: dict[str, tuple[str, ...]] = {
    OrderStatus.PENDING: (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
    OrderStatus.CONFIRMED: (OrderStatus.PREPARING, OrderStatus.CANCELLED),
    OrderStatus.PREPARING: (OrderStatus.READY, OrderStatus.CANCELLED),
    OrderStatus.READY: (OrderStatus.TO_DEDUCT, OrderStatus.CANCELLED),
    OrderStatus.TO_DEDUCT: (OrderStatus.PAID, OrderStatus.CANCELLED),
    OrderStatus.PAID: (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
}
PAYROLL_DEFAULT_TRANSITIONS: tuple[str, ...] = (OrderStatus.CANCELLED,)

NATURAL_STATUS_SEQUENCE: tuple[str, ...] = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.DELIVERING,
    OrderStatus.DELIVERED,
)

PAYROLL_STATUS_SEQUENCE: tuple[str, ...] = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.TO_DEDUCT,
    OrderStatus.PAID,
    OrderStatus.DELIVERED,
)

TERMINAL_STATES: frozenset[str] = frozenset(
    {OrderStatus.DELIVERED, OrderStatus.CANCELLED}
)

# Statuses an order may be created with.  Anything other than PENDING is a
# point-of-sale order that skips the kitchen flow.
INITIAL_STATUSES: frozenset[str] = frozenset(
    {OrderStatus.PENDING, OrderStatus.RECEIVED, OrderStatus.COMPLETED}
)

ORDER_NUMBER_PREFIX = "PED"
ORDER_NUMBER_MAX_RETRIES = 5
