# core/api_urls.py
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import api_views

app_name = "core_api"

router = DefaultRouter()
router.register(r"b2b/users", api_views.B2BUserViewSet, basename="b2b-user")

urlpatterns = [
    path("", include(router.urls)),
    path("auth/", include("rest_framework.urls")),
]
