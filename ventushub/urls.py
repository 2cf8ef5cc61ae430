"""Configuração principal de URLs do VentusHub.

Agrupa as APIs REST dos apps internos sob ``/api/``, a documentação
Swagger e o endpoint ``/metrics`` (Prometheus).
"""

from __future__ import annotations

import json

from django.contrib import admin
from django.http import HttpRequest, HttpResponse
from django.urls import include, path
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from rest_framework import permissions


def metrics_view(_request: HttpRequest) -> HttpResponse:
    """Endpoint de métricas Prometheus."""
    try:
        output = generate_latest()
    except (ValueError, RuntimeError):  # falhas previsíveis ao gerar métricas
        return HttpResponse(
            json.dumps({"status": "error", "detail": "Falha ao gerar métricas"}),
            status=500,
            content_type="application/json",
        )
    return HttpResponse(output, content_type=CONTENT_TYPE_LATEST)


schema_view = get_schema_view(
    openapi.Info(title="VentusHub API", default_version="v1", description="API do back-office imobiliário"),
    public=True,
    permission_classes=(permissions.IsAuthenticated,),
)


urlpatterns = [
    path("django-admin/", admin.site.urls),
    path("metrics/", metrics_view, name="metrics"),
    path("api/docs/", schema_view.with_ui("swagger", cache_timeout=0), name="api-docs"),
    # --- Módulos ---
    path("api/", include("core.api_urls", namespace="core_api")),
    path("api/", include("imoveis.urls", namespace="imoveis")),
    path("api/", include("pendencias.urls", namespace="pendencias")),
    path("api/", include("notifications.urls", namespace="notifications")),
    path("api/", include("clientes.urls", namespace="clientes")),
    path("api/", include("registros.urls", namespace="registros")),
]
