"""Subscription API views.

``/api/v1/products/{product_pk}/subscribers/`` lists, adds and removes
the addresses notified when that product is back in stock.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.products.exceptions import ProductNotFound
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.subscribers.dtos import SubscribeDTO
from modules.subscribers.exceptions import SubscriptionNotFound
from modules.subscribers.repositories.django_repository import (
    SubscriberDjangoRepository,
)
from modules.subscribers.serializers import SubscriberSerializer
from modules.subscribers.services import SubscriptionService

_PRODUCT_NOT_FOUND = {"detail": "Product not found."}


class ProductSubscriberViewSet(ViewSet):
    """Subscriptions of a single product, addressed by email."""

    lookup_field = "email"
    # Emails contain dots, which the router's default lookup pattern rejects.
    lookup_value_regex = r"[^/]+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = SubscriptionService(
            repository=SubscriberDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    def list(self, request: Request, product_pk: str | None = None) -> Response:
        """GET /api/v1/products/{product_pk}/subscribers/"""
        try:
            subscribers = self._service.list_subscribers(product_pk)
        except ProductNotFound:
            return Response(_PRODUCT_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(SubscriberSerializer(subscribers, many=True).data)

    def create(self, request: Request, product_pk: str | None = None) -> Response:
        """POST /api/v1/products/{product_pk}/subscribers/

        Returns 201 for a new subscription, 200 if it already existed.
        """
        try:
            dto = SubscribeDTO(email=request.data.get("email", ""))
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            subscription, created = self._service.subscribe(product_pk, dto)
        except ProductNotFound:
            return Response(_PRODUCT_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)

        return Response(
            SubscriberSerializer(subscription.subscriber).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    def destroy(
        self,
        request: Request,
        product_pk: str | None = None,
        email: str | None = None,
    ) -> Response:
        """DELETE /api/v1/products/{product_pk}/subscribers/{email}/"""
        try:
            self._service.unsubscribe(product_pk, email or "")
        except ProductNotFound:
            return Response(_PRODUCT_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except SubscriptionNotFound:
            return Response(
                {"detail": "Subscription not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(status=status.HTTP_204_NO_CONTENT)
