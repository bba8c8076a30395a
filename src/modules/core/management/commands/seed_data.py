from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.products.models import Product
from modules.subscribers.models import Subscriber, Subscription


class Command(BaseCommand):
    help = "Seed database with a small development catalog and subscribers."

    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        products = self._seed_products()
        subscriptions_created = self._seed_subscriptions(products)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"products={len(products)}, "
                f"subscriptions={subscriptions_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
            created += 1
        if not User.objects.filter(username="user").exists():
            User.objects.create_user("user", password="user123")
            created += 1
        return created

    def _seed_products(self) -> dict[str, Product]:
        self.stdout.write("Creating products...")
        catalog = [
            ("T-Shirt", "Plain cotton t-shirt", Decimal("19.90"), 0),
            ("Hoodie", "Zip hoodie", Decimal("49.90"), 12),
            ("Cap", "Embroidered cap", Decimal("14.90"), 0),
            ("Mug", "Ceramic mug, 350ml", Decimal("9.90"), 40),
        ]
        products = {}
        for name, description, price, inventory_count in catalog:
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={
                    "description": description,
                    "price": price,
                    "inventory_count": inventory_count,
                },
            )
            products[name] = product
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_subscriptions(self, products: dict[str, Product]) -> int:
        self.stdout.write("Creating subscribers...")
        wanted = {
            "murilo@example.org": ["T-Shirt", "Cap"],
            "alice@example.org": ["T-Shirt"],
        }
        created = 0
        for email, product_names in wanted.items():
            subscriber, _ = Subscriber.objects.get_or_create(email=email)
            for name in product_names:
                _, is_new = Subscription.objects.get_or_create(
                    product=products[name], subscriber=subscriber
                )
                created += int(is_new)
        self.stdout.write(self.style.SUCCESS("Creating subscribers... Done!"))
        return created
