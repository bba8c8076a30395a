from rest_framework.routers import SimpleRouter

from modules.subscribers.views import ProductSubscriberViewSet

# Nested under a product: /products/{product_pk}/subscribers/[{email}/]
router = SimpleRouter()
router.register(
    r"products/(?P<product_pk>[^/.]+)/subscribers",
    ProductSubscriberViewSet,
    basename="product-subscriber",
)

urlpatterns = [*router.urls]
