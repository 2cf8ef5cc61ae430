"""Acesso às consultas de cartório com tempo limite.

Cada chamada roda via ``executar_com_timeout``. Em timeout, se
``CARTORIO_MOCK_FALLBACK`` estiver ligado (desenvolvimento), a simulação é
refeita sem atraso e a resposta sai marcada com ``fallback: True``; caso
contrário o ``TimeoutArmazenamentoError`` sobe como 503.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal
from typing import Any

from django.conf import settings

from shared.exceptions import TimeoutArmazenamentoError
from shared.metrics import CARTORIO_FALLBACK_TOTAL
from shared.timeouts import executar_com_timeout

from . import simulacao

logger = logging.getLogger(__name__)


class CartorioGateway:
    @staticmethod
    def _chamar(operacao: str, func: Callable[..., dict[str, Any]], *args) -> dict[str, Any]:
        atraso = int(getattr(settings, "CARTORIO_MOCK_DELAY_MS", 0))
        try:
            return executar_com_timeout(operacao, lambda: func(*args, atraso_ms=atraso))
        except TimeoutArmazenamentoError:
            if not getattr(settings, "CARTORIO_MOCK_FALLBACK", False):
                raise
            logger.warning("Cartório não respondeu em %s; usando resposta simulada", operacao)
            CARTORIO_FALLBACK_TOTAL.inc()
            return {**func(*args, atraso_ms=0), "fallback": True}

    @staticmethod
    def enviar_documentos(cartorio, valor_imovel: Decimal, documentos: list[str]) -> dict[str, Any]:
        return CartorioGateway._chamar(
            "cartorio.enviar_documentos",
            simulacao.enviar_documentos,
            cartorio.nome,
            cartorio.taxa_base,
            valor_imovel,
            documentos,
        )

    @staticmethod
    def consultar_status(protocolo: str) -> dict[str, Any]:
        return CartorioGateway._chamar("cartorio.consultar_status", simulacao.consultar_status, protocolo)

    @staticmethod
    def forcar_status(protocolo: str, novo_status: str) -> dict[str, Any]:
        return CartorioGateway._chamar("cartorio.forcar_status", simulacao.forcar_status, protocolo, novo_status)

    @staticmethod
    def consultar_taxas(cartorio, valor_imovel: Decimal) -> dict[str, Any]:
        return CartorioGateway._chamar(
            "cartorio.consultar_taxas",
            simulacao.consultar_taxas,
            cartorio.nome,
            cartorio.taxa_base,
            valor_imovel,
        )
