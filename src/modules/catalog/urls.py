"""Catalog URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.catalog.views import ProductViewSet

router = SimpleRouter(trailing_slash=True)
router.register("products", ProductViewSet, basename="product")

urlpatterns = router.urls
