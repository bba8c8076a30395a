"""Tests for the ``seed_data`` management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from modules.products.models import Product
from modules.subscribers.models import Subscriber, Subscription

pytestmark = pytest.mark.unit


class TestSeedData:
    def test_seeds_catalog_and_subscribers(self):
        out = StringIO()
        call_command("seed_data", stdout=out)

        assert Product.objects.count() == 4
        assert Subscriber.objects.count() == 2
        assert Subscription.objects.count() == 3
        assert get_user_model().objects.filter(username="admin").exists()
        assert "Seed completed" in out.getvalue()

    def test_tshirt_starts_out_of_stock_with_a_subscriber(self):
        call_command("seed_data", stdout=StringIO())

        tshirt = Product.objects.get(name="T-Shirt")
        assert tshirt.inventory_count == 0
        assert tshirt.subscribers.filter(email="murilo@example.org").exists()

    def test_running_twice_is_idempotent(self):
        call_command("seed_data", stdout=StringIO())
        out = StringIO()
        call_command("seed_data", stdout=out)

        assert Product.objects.count() == 4
        assert Subscription.objects.count() == 3
        assert "users=0" in out.getvalue()
        assert "subscriptions=0" in out.getvalue()
