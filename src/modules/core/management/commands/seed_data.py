from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal
from typing import Iterable

from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.customers.models import Customer
from modules.orders.constants import OrderStatus, PaymentStatus, ShipmentStatus
from modules.orders.models import Order, OrderItem, Payment, Shipment
from modules.orders.pricing import SimulatedPriceSource


class Command(BaseCommand):
    help = "Seed database with development customers and orders."

    def add_arguments(self, parser):
        parser.add_argument("--orders", type=int, default=30)

    def handle(self, *args, **options):
        rng = random.Random(42)
        self.stdout.write("Seeding development data...")

        customers = self._seed_customers()
        orders_created = self._seed_orders(customers, options["orders"], rng)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: customers={len(customers)}, orders={orders_created}"
            )
        )

    def _seed_customers(self) -> list[Customer]:
        self.stdout.write("Creating customers...")
        customers: list[Customer] = []
        seed_customers = [
            ("John Smith", "john.smith@example.com", "+1-555-123-4567", "123 Main St, Springfield"),
            ("Maria Garcia", "maria.garcia@example.com", "+1-555-987-6543", "45 Oak Ave, Shelbyville"),
            ("Wei Chen", "wei.chen@example.com", "+1-555-222-3333", "9 Pine Rd, Capital City"),
            ("Amara Okafor", "amara.okafor@example.com", "+1-555-444-5555", "77 Elm St, Ogdenville"),
            ("Lukas Novak", "lukas.novak@example.com", "+1-555-666-7777", "3 Birch Ln, North Haverbrook"),
        ]
        for name, email, phone, address in seed_customers:
            customer, _ = Customer.objects.get_or_create(
                email=email,
                defaults={"name": name, "phone": phone, "address": address},
            )
            customers.append(customer)
        self.stdout.write(self.style.SUCCESS("Creating customers... Done!"))
        return customers

    def _seed_orders(
        self, customers: Iterable[Customer], count: int, rng: random.Random
    ) -> int:
        self.stdout.write("Creating orders...")
        customers_list = list(customers)
        if not customers_list:
            self.stdout.write(self.style.WARNING("Skipping orders (no customers)."))
            return 0

        prices = SimulatedPriceSource(rng=rng)
        statuses = [
            OrderStatus.PENDING,
            OrderStatus.ALLOCATED,
            OrderStatus.PROCESSING,
            OrderStatus.SHIPPED,
            OrderStatus.DELIVERED,
            OrderStatus.CANCELLED,
        ]

        for i in range(count):
            status = rng.choice(statuses)
            order = Order.objects.create(
                customer=rng.choice(customers_list),
                order_date=timezone.now() - timedelta(days=rng.randint(0, 30)),
                status=status,
            )

            total = Decimal("0.00")
            for product_id in rng.sample(range(1, 51), k=rng.randint(1, 4)):
                item = OrderItem.objects.create(
                    order=order,
                    product_id=product_id,
                    quantity=rng.randint(1, 3),
                    price=prices.price_for(product_id),
                )
                total += item.line_total
            order.total_amount = total
            order.save(update_fields=["total_amount"])

            if status in (OrderStatus.SHIPPED, OrderStatus.DELIVERED):
                Payment.objects.create(
                    order=order,
                    amount=total,
                    payment_method="credit_card",
                    transaction_id=f"TXN-SEED-{i + 1:05d}",
                    status=PaymentStatus.COMPLETED,
                )
                Shipment.objects.create(
                    order=order,
                    shipment_date=order.order_date + timedelta(days=1),
                    carrier="UPS",
                    tracking_number=f"1ZSEED{i + 1:08d}",
                    status=(
                        ShipmentStatus.DELIVERED
                        if status == OrderStatus.DELIVERED
                        else ShipmentStatus.IN_TRANSIT
                    ),
                )

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return count
