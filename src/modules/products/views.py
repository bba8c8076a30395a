"""Product API.

Thin DRF layer over ``ProductService``: request bodies become Pydantic
DTOs, domain exceptions become status codes.  Listing is the only action
that works on a queryset, so filtering, search and pagination come from
DRF's generic machinery.
"""

from __future__ import annotations

from typing import Any, Mapping, Type, TypeVar

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import ParseError
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import ProductNotFound
from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService

DTO = TypeVar("DTO", bound=BaseModel)

_NOT_FOUND = {"detail": "Product not found."}

_UPDATABLE_FIELDS = ("name", "price", "description", "inventory_count")

# PUT replaces the product: everything but the description must be sent.
_REPLACE_REQUIRED_FIELDS = ("name", "price", "inventory_count")


def _build_dto(dto_class: Type[DTO], payload: Mapping[str, Any]) -> DTO:
    """Instantiate ``dto_class`` or raise ``ParseError`` (HTTP 400)."""
    try:
        return dto_class(**payload)
    except (PydanticValidationError, ValueError) as exc:
        raise ParseError(str(exc)) from exc


class ProductViewSet(ListModelMixin, GenericViewSet):
    filterset_class = ProductFilter
    search_fields = ["name", "description"]
    ordering_fields = ["name", "price", "inventory_count", "created_at"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    queryset = Product.objects.none()
    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    def get_queryset(self):
        return self._service.list_products()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        try:
            product = self._service.get_product(pk)
        except ProductNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(ProductSerializer(product).data)

    def create(self, request: Request) -> Response:
        data = request.data
        dto = _build_dto(
            CreateProductDTO,
            {
                "name": data.get("name", ""),
                "price": data.get("price", 0),
                "description": data.get("description", ""),
                "inventory_count": data.get("inventory_count", 0),
            },
        )
        product = self._service.create_product(dto)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """Full replacement. An omitted ``description`` is cleared."""
        missing = [f for f in _REPLACE_REQUIRED_FIELDS if request.data.get(f) is None]
        if missing:
            raise ParseError(
                f"PUT requires: {', '.join(missing)}. Use PATCH for partial updates."
            )
        payload = {"description": ""}
        payload.update({f: request.data[f] for f in _UPDATABLE_FIELDS if f in request.data})
        return self._apply_update(pk, _build_dto(UpdateProductDTO, payload))

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """Change only the fields present in the body."""
        payload = {f: request.data[f] for f in _UPDATABLE_FIELDS if f in request.data}
        return self._apply_update(pk, _build_dto(UpdateProductDTO, payload))

    @action(detail=True, methods=["patch"], url_path="inventory")
    def update_inventory(self, request: Request, pk: str | None = None) -> Response:
        """Set ``inventory_count``; going from zero to positive notifies subscribers."""
        if request.data.get("inventory_count") is None:
            raise ParseError("Field 'inventory_count' is required.")
        dto = _build_dto(
            UpdateProductDTO, {"inventory_count": request.data["inventory_count"]}
        )
        return self._apply_update(pk, dto)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        try:
            self._service.delete_product(pk)
        except ProductNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _apply_update(self, pk: str | None, dto: UpdateProductDTO) -> Response:
        try:
            product = self._service.update_product(pk, dto)
        except ProductNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(ProductSerializer(product).data)
