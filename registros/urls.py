from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import api

app_name = "registros"

router = DefaultRouter()
router.register(r"cartorios", api.CartorioViewSet, basename="cartorio")
router.register(r"registros", api.RegistroViewSet, basename="registro")

urlpatterns = [
    path("properties/<int:property_id>/registros/", api.PropertyRegistrosView.as_view(), name="property-registros"),
    path("", include(router.urls)),
]
