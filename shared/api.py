"""Integração dos erros de domínio com o Django REST Framework."""

from __future__ import annotations

import logging
from typing import Any

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from .exceptions import NegocioError

logger = logging.getLogger(__name__)


def exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """Converte ``NegocioError`` em respostas HTTP; o resto segue o padrão do DRF."""
    if isinstance(exc, NegocioError):
        view = context.get("view")
        if exc.status_code >= 500:
            logger.warning("Erro %s em %s: %s", exc.code, view.__class__.__name__ if view else "-", exc)
        return Response(exc.payload(), status=exc.status_code)
    return drf_exception_handler(exc, context)
