from __future__ import annotations

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.orders.constants import OrderStatus, PaymentMethod, PaymentStatus
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import InvalidOrderStatus
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService

MENU = [
    ("burger-classic", "X-Burguer", Decimal("25.00")),
    ("burger-bacon", "X-Bacon", Decimal("29.90")),
    ("pizza-margherita", "Pizza Margherita", Decimal("42.50")),
    ("acai-500", "Açaí 500ml", Decimal("18.90")),
    ("pastel-carne", "Pastel de carne", Decimal("9.50")),
    ("refri-lata", "Refrigerante lata", Decimal("6.00")),
]

CUSTOMERS = [
    ("Maria Souza", "11987654321", "Rua das Flores, 123"),
    ("João Lima", "11912345678", "Av. Paulista, 1000"),
    ("Ana Paula Reis", "21998887777", "Rua do Catete, 45"),
    ("Carlos Mendes", "31977776666", "Av. Afonso Pena, 2000"),
]


class Command(BaseCommand):
    help = "Seed database with realistic development orders."

    def add_arguments(self, parser):
        parser.add_argument("--orders", type=int, default=30)

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        orders_created = self._seed_orders(options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed complete: "
                f"users={users_created}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
            created += 1
        if not User.objects.filter(username="gerente").exists():
            User.objects.create_user("gerente", password="gerente123", is_staff=True)
            created += 1
        if not User.objects.filter(username="atendente").exists():
            User.objects.create_user("atendente", password="atendente123")
            created += 1
        return created

    def _seed_orders(self, count: int) -> int:
        self.stdout.write("Creating orders...")
        service = OrderService(order_repository=OrderDjangoRepository())
        created = 0

        for i in range(count):
            name, phone, address = random.choice(CUSTOMERS)
            payment_method = random.choice(PaymentMethod.values)
            items = [
                CreateOrderItemDTO(
                    menu_item_id=menu_item_id,
                    name=item_name,
                    unit_price=price,
                    quantity=random.randint(1, 3),
                )
                for menu_item_id, item_name, price in random.sample(
                    MENU, k=random.randint(1, 3)
                )
            ]
            order = service.create_order(
                CreateOrderDTO(
                    customer_name=name,
                    customer_phone=phone,
                    address=address,
                    payment_method=payment_method,
                    items=items,
                    frete=Decimal("5.00"),
                    idempotency_key=f"seed-{i + 1}",
                )
            )
            created += 1

            # Walk the order forward a random number of steps.
            for _ in range(random.randint(0, 6)):
                try:
                    order = service.advance_status(order.id, notes="Seed")
                except InvalidOrderStatus:
                    break

            if order.status == OrderStatus.PENDING and random.random() < 0.2:
                service.cancel_order(order.id, reason="Seed")
            elif order.status == OrderStatus.DELIVERED:
                service.update_payment_status(order.id, PaymentStatus.RECEBIDO)

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return created
