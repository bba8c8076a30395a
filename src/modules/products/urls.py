"""Catalog routes.

``products/`` and ``products/{pk}/`` come from the viewset; the
``inventory/`` detail action is the dedicated stock-update endpoint.
"""

from rest_framework.routers import SimpleRouter

from modules.products.views import ProductViewSet

router = SimpleRouter()
router.register(r"products", ProductViewSet, basename="product")

urlpatterns = [*router.urls]
