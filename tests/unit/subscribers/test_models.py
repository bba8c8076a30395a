"""Unit tests for Subscriber and Subscription models."""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from modules.products.models import Product
from modules.subscribers.models import Subscriber, Subscription

pytestmark = pytest.mark.unit


@pytest.fixture()
def product():
    return Product.objects.create(name="T-Shirt", price=Decimal("19.90"))


class TestSubscriber:
    def test_email_normalised_on_save(self):
        subscriber = Subscriber.objects.create(email="  Murilo@Example.ORG ")
        subscriber.refresh_from_db()
        assert subscriber.email == "murilo@example.org"

    def test_email_unique(self):
        Subscriber.objects.create(email="murilo@example.org")
        with pytest.raises(IntegrityError), transaction.atomic():
            Subscriber.objects.create(email="MURILO@example.org")

    def test_str_returns_email(self):
        assert str(Subscriber(email="a@b.co")) == "a@b.co"


class TestSubscription:
    def test_links_subscriber_to_product(self, product):
        subscriber = Subscriber.objects.create(email="murilo@example.org")
        Subscription.objects.create(product=product, subscriber=subscriber)

        assert list(product.subscribers.all()) == [subscriber]
        assert list(subscriber.products.all()) == [product]

    def test_pair_is_unique(self, product):
        subscriber = Subscriber.objects.create(email="murilo@example.org")
        Subscription.objects.create(product=product, subscriber=subscriber)
        with pytest.raises(IntegrityError), transaction.atomic():
            Subscription.objects.create(product=product, subscriber=subscriber)

    def test_deleting_subscriber_removes_subscriptions(self, product):
        subscriber = Subscriber.objects.create(email="murilo@example.org")
        Subscription.objects.create(product=product, subscriber=subscriber)

        subscriber.delete()

        assert Subscription.objects.count() == 0
        assert Product.objects.filter(pk=product.pk).exists()
