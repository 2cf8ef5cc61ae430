from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .api import PropertyViewSet

app_name = "imoveis"

router = DefaultRouter()
router.register(r"properties", PropertyViewSet, basename="property")

urlpatterns = [
    path("", include(router.urls)),
]
