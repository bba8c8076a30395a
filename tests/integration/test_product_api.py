"""Integration tests for Product API endpoints.

Covers:
- CRUD operations via /api/v1/products/.
- PATCH /api/v1/products/{id}/inventory/.
- Filtering, search, ordering and pagination.
- Authentication enforcement (401 without token).
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from django.contrib.auth import get_user_model

from rest_framework.test import APIClient

from modules.products.dtos import MAX_INVENTORY_COUNT
from modules.products.models import Product

pytestmark = pytest.mark.integration

User = get_user_model()

MISSING_ID = "00000000-0000-0000-0000-000000000000"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    user = User.objects.create_user(username="testuser", password="testpass123")
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def sample_product():
    """A persisted Product instance."""
    product = Product(
        name="Widget Alpha",
        description="A fine widget",
        price=Decimal("19.99"),
        inventory_count=100,
    )
    product.save()
    return product


@pytest.fixture()
def product_batch():
    return [
        Product.objects.create(
            name="Cheap Widget", price=Decimal("9.99"), inventory_count=10
        ),
        Product.objects.create(
            name="Premium Widget",
            description="Top shelf",
            price=Decimal("99.99"),
            inventory_count=0,
        ),
        Product.objects.create(name="Mug", price=Decimal("12.50"), inventory_count=3),
    ]


# ===========================================================================
# Authentication
# ===========================================================================


class TestProductAPIAuth:
    def test_unauthenticated_returns_401(self, api_client):
        response = api_client.get("/api/v1/products/")
        assert response.status_code == 401

    def test_unauthenticated_inventory_update_returns_401(self, api_client, sample_product):
        response = api_client.patch(
            f"/api/v1/products/{sample_product.id}/inventory/",
            {"inventory_count": 1},
            format="json",
        )
        assert response.status_code == 401


# ===========================================================================
# LIST
# ===========================================================================


class TestProductList:
    def test_list_empty(self, auth_client):
        response = auth_client.get("/api/v1/products/")
        assert response.status_code == 200
        assert response.data["results"] == []

    def test_list_returns_products(self, auth_client, sample_product):
        response = auth_client.get("/api/v1/products/")
        assert response.status_code == 200
        assert len(response.data["results"]) == 1
        result = response.data["results"][0]
        assert result["name"] == "Widget Alpha"
        assert result["inventory_count"] == 100
        assert result["in_stock"] is True

    def test_filter_in_stock(self, auth_client, product_batch):
        response = auth_client.get("/api/v1/products/?in_stock=false")
        names = [p["name"] for p in response.data["results"]]
        assert names == ["Premium Widget"]

    def test_filter_price_range(self, auth_client, product_batch):
        response = auth_client.get("/api/v1/products/?min_price=10&max_price=50")
        names = [p["name"] for p in response.data["results"]]
        assert names == ["Mug"]

    def test_search(self, auth_client, product_batch):
        response = auth_client.get("/api/v1/products/", {"search": "top shelf"})
        names = [p["name"] for p in response.data["results"]]
        assert names == ["Premium Widget"]

    def test_ordering(self, auth_client, product_batch):
        response = auth_client.get("/api/v1/products/?ordering=-price")
        names = [p["name"] for p in response.data["results"]]
        assert names == ["Premium Widget", "Mug", "Cheap Widget"]

    def test_paginated(self, auth_client):
        for idx in range(25):
            Product.objects.create(name=f"Product {idx:02d}", price=Decimal("1.00"))

        response = auth_client.get("/api/v1/products/")

        assert response.data["count"] == 25
        assert len(response.data["results"]) == 20
        assert response.data["next"] is not None


# ===========================================================================
# RETRIEVE
# ===========================================================================


class TestProductRetrieve:
    def test_retrieve_success(self, auth_client, sample_product):
        response = auth_client.get(f"/api/v1/products/{sample_product.id}/")
        assert response.status_code == 200
        assert response.data["name"] == "Widget Alpha"
        assert response.data["id"] == str(sample_product.id)
        assert response.data["price"] == "19.99"

    def test_retrieve_not_found(self, auth_client):
        response = auth_client.get(f"/api/v1/products/{MISSING_ID}/")
        assert response.status_code == 404


# ===========================================================================
# CREATE
# ===========================================================================


class TestProductCreate:
    def test_create_success(self, auth_client):
        payload = {
            "name": "New Product",
            "price": "29.99",
            "description": "Brand new",
            "inventory_count": 50,
        }
        response = auth_client.post("/api/v1/products/", payload, format="json")
        assert response.status_code == 201
        assert response.data["name"] == "New Product"
        assert response.data["inventory_count"] == 50
        assert Product.objects.filter(id=response.data["id"]).exists()

    def test_create_defaults_to_out_of_stock(self, auth_client):
        payload = {"name": "Placeholder", "price": "5.00"}
        response = auth_client.post("/api/v1/products/", payload, format="json")
        assert response.status_code == 201
        assert response.data["inventory_count"] == 0
        assert response.data["in_stock"] is False

    def test_create_missing_fields_returns_400(self, auth_client):
        response = auth_client.post(
            "/api/v1/products/", {"name": "Incomplete"}, format="json"
        )
        assert response.status_code == 400

    def test_create_invalid_price_returns_400(self, auth_client):
        payload = {"name": "Bad Price", "price": "-5.00"}
        response = auth_client.post("/api/v1/products/", payload, format="json")
        assert response.status_code == 400

    def test_create_negative_inventory_returns_400(self, auth_client):
        payload = {"name": "Bad Stock", "price": "5.00", "inventory_count": -1}
        response = auth_client.post("/api/v1/products/", payload, format="json")
        assert response.status_code == 400
        assert Product.objects.count() == 0


# ===========================================================================
# UPDATE
# ===========================================================================


class TestProductUpdate:
    def test_patch_success(self, auth_client, sample_product):
        response = auth_client.patch(
            f"/api/v1/products/{sample_product.id}/",
            {"name": "Widget Updated"},
            format="json",
        )
        assert response.status_code == 200
        assert response.data["name"] == "Widget Updated"
        assert response.data["inventory_count"] == 100

    def test_put_success(self, auth_client, sample_product):
        payload = {
            "name": "Widget PUT",
            "price": "25.00",
            "description": "Updated via PUT",
            "inventory_count": 200,
        }
        response = auth_client.put(
            f"/api/v1/products/{sample_product.id}/", payload, format="json"
        )
        assert response.status_code == 200
        assert response.data["name"] == "Widget PUT"
        assert response.data["inventory_count"] == 200

    def test_put_without_required_fields_returns_400(self, auth_client, sample_product):
        response = auth_client.put(
            f"/api/v1/products/{sample_product.id}/", {"name": "Only Name"}, format="json"
        )
        assert response.status_code == 400
        assert "price" in response.data["detail"]
        assert "inventory_count" in response.data["detail"]
        sample_product.refresh_from_db()
        assert sample_product.name == "Widget Alpha"

    def test_put_clears_omitted_description(self, auth_client, sample_product):
        payload = {"name": "Widget PUT", "price": "25.00", "inventory_count": 5}
        response = auth_client.put(
            f"/api/v1/products/{sample_product.id}/", payload, format="json"
        )
        assert response.status_code == 200
        assert response.data["description"] == ""

    def test_patch_keeps_omitted_fields(self, auth_client, sample_product):
        response = auth_client.patch(
            f"/api/v1/products/{sample_product.id}/", {"price": "21.00"}, format="json"
        )
        assert response.status_code == 200
        assert response.data["description"] == "A fine widget"

    def test_update_price_out_of_range_returns_400(self, auth_client, sample_product):
        response = auth_client.patch(
            f"/api/v1/products/{sample_product.id}/",
            {"price": "100000000.00"},
            format="json",
        )
        assert response.status_code == 400
        sample_product.refresh_from_db()
        assert sample_product.price == Decimal("19.99")

    def test_update_not_found(self, auth_client):
        response = auth_client.patch(
            f"/api/v1/products/{MISSING_ID}/", {"name": "Ghost"}, format="json"
        )
        assert response.status_code == 404

    def test_update_invalid_price_returns_400(self, auth_client, sample_product):
        response = auth_client.patch(
            f"/api/v1/products/{sample_product.id}/", {"price": "0"}, format="json"
        )
        assert response.status_code == 400
        sample_product.refresh_from_db()
        assert sample_product.price == Decimal("19.99")


# ===========================================================================
# INVENTORY
# ===========================================================================


class TestProductInventory:
    def test_set_inventory(self, auth_client, sample_product):
        response = auth_client.patch(
            f"/api/v1/products/{sample_product.id}/inventory/",
            {"inventory_count": 7},
            format="json",
        )
        assert response.status_code == 200
        assert response.data["inventory_count"] == 7
        sample_product.refresh_from_db()
        assert sample_product.inventory_count == 7

    def test_set_inventory_to_zero(self, auth_client, sample_product):
        response = auth_client.patch(
            f"/api/v1/products/{sample_product.id}/inventory/",
            {"inventory_count": 0},
            format="json",
        )
        assert response.status_code == 200
        assert response.data["in_stock"] is False

    def test_missing_field_returns_400(self, auth_client, sample_product):
        response = auth_client.patch(
            f"/api/v1/products/{sample_product.id}/inventory/", {}, format="json"
        )
        assert response.status_code == 400

    def test_negative_returns_400(self, auth_client, sample_product):
        response = auth_client.patch(
            f"/api/v1/products/{sample_product.id}/inventory/",
            {"inventory_count": -5},
            format="json",
        )
        assert response.status_code == 400
        sample_product.refresh_from_db()
        assert sample_product.inventory_count == 100

    def test_oversized_count_returns_400(self, auth_client, sample_product):
        response = auth_client.patch(
            f"/api/v1/products/{sample_product.id}/inventory/",
            {"inventory_count": 10**20},
            format="json",
        )
        assert response.status_code == 400
        sample_product.refresh_from_db()
        assert sample_product.inventory_count == 100

    def test_maximum_count_accepted(self, auth_client, sample_product):
        response = auth_client.patch(
            f"/api/v1/products/{sample_product.id}/inventory/",
            {"inventory_count": MAX_INVENTORY_COUNT},
            format="json",
        )
        assert response.status_code == 200
        assert response.data["inventory_count"] == MAX_INVENTORY_COUNT

    def test_not_found(self, auth_client):
        response = auth_client.patch(
            f"/api/v1/products/{MISSING_ID}/inventory/",
            {"inventory_count": 1},
            format="json",
        )
        assert response.status_code == 404


# ===========================================================================
# DESTROY
# ===========================================================================


class TestProductDestroy:
    def test_destroy_success(self, auth_client, sample_product):
        response = auth_client.delete(f"/api/v1/products/{sample_product.id}/")
        assert response.status_code == 204
        assert not Product.objects.filter(pk=sample_product.pk).exists()

    def test_destroy_not_found(self, auth_client):
        response = auth_client.delete(f"/api/v1/products/{MISSING_ID}/")
        assert response.status_code == 404
