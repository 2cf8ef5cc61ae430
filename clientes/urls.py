from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import api

app_name = "clientes"

router = DefaultRouter()
router.register(r"clients", api.ClientViewSet, basename="client")

urlpatterns = [
    path("", include(router.urls)),
]
