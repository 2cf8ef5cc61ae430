"""Regras dos registros em cartório (escopo por usuário e simulação de envio)."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any

from django.db.models import QuerySet

from imoveis.services import PropertyService
from shared.exceptions import NegocioError, RecursoNaoEncontradoError

from .gateway import CartorioGateway
from .models import Cartorio, Registro

logger = logging.getLogger(__name__)

DOCUMENTOS_ENVIO = ["escritura", "certidao_negativa", "iptu"]


class CartorioService:
    @staticmethod
    def ativos(cidade: str | None = None) -> QuerySet[Cartorio]:
        qs = Cartorio.objects.filter(ativo=True)
        if cidade:
            qs = qs.filter(cidade__iexact=cidade)
        return qs

    @staticmethod
    def localizar(cartorio_id: int | None = None, cartorio_nome: str | None = None) -> Cartorio:
        qs = Cartorio.objects.filter(ativo=True)
        cartorio = qs.filter(pk=cartorio_id).first() if cartorio_id else qs.filter(nome__iexact=cartorio_nome).first()
        if cartorio is None:
            raise RecursoNaoEncontradoError("Cartório não encontrado")
        return cartorio

    @staticmethod
    def consultar_taxas(valor_imovel: Decimal, cartorio_id=None, cartorio_nome=None) -> dict[str, Any]:
        cartorio = CartorioService.localizar(cartorio_id, cartorio_nome)
        return CartorioGateway.consultar_taxas(cartorio, valor_imovel)


class RegistroService:
    @staticmethod
    def do_usuario(user) -> QuerySet[Registro]:
        return Registro.objects.filter(user=user).select_related("cartorio", "property")

    @staticmethod
    def obter_do_usuario(user, registro_id) -> Registro:
        try:
            return RegistroService.do_usuario(user).get(pk=int(registro_id))
        except (Registro.DoesNotExist, TypeError, ValueError) as exc:
            raise RecursoNaoEncontradoError("Registro não encontrado") from exc

    @staticmethod
    def _cartorio(cartorio_id) -> Cartorio:
        cartorio = Cartorio.objects.filter(pk=cartorio_id).first()
        if cartorio is None:
            raise NegocioError("Cartório não encontrado")
        return cartorio

    @staticmethod
    def criar(user, dados: dict[str, Any]) -> Registro:
        """Cria o registro; com status ``em_analise`` simula o envio dos documentos."""
        dados = dict(dados)
        imovel = PropertyService.obter_do_usuario(user, dados.pop("property_id"))
        cartorio = RegistroService._cartorio(dados.pop("cartorio_id"))

        registro = Registro(user=user, property=imovel, cartorio=cartorio, **dados)
        if registro.status == "em_analise":
            mock = CartorioGateway.enviar_documentos(cartorio, imovel.value, DOCUMENTOS_ENVIO)
            registro.mock_status = mock
            if not registro.protocolo and not Registro.objects.filter(protocolo=mock["protocolo"]).exists():
                registro.protocolo = mock["protocolo"]
            if registro.valor_taxas is None:
                registro.valor_taxas = Decimal(str(mock["valorTaxas"]))
            if registro.prazo_estimado is None:
                registro.prazo_estimado = mock["prazoEstimado"]
            if registro.data_envio is None:
                registro.data_envio = datetime.fromisoformat(mock["dataEnvio"])
            if not registro.observacoes:
                registro.observacoes = mock["observacoes"]
        registro.save()
        logger.info("Registro %s criado no %s para o imóvel %s", registro.protocolo, cartorio.nome, imovel.pk)
        return registro

    @staticmethod
    def atualizar(registro: Registro, user, dados: dict[str, Any]) -> Registro:
        dados = dict(dados)
        if "property_id" in dados:
            registro.property = PropertyService.obter_do_usuario(user, dados.pop("property_id"))
        if "cartorio_id" in dados:
            registro.cartorio = RegistroService._cartorio(dados.pop("cartorio_id"))
        for campo, valor in dados.items():
            setattr(registro, campo, valor)
        registro.save()
        return registro

    @staticmethod
    def consultar_status(registro: Registro) -> dict[str, Any]:
        if not registro.protocolo:
            raise NegocioError("Registro sem protocolo para consulta")
        mock = CartorioGateway.consultar_status(registro.protocolo)
        Registro.objects.filter(pk=registro.pk).update(mock_status=mock)
        registro.mock_status = mock
        return {
            "registro": {
                "id": registro.pk,
                "protocolo": registro.protocolo,
                "cartorioNome": registro.cartorio.nome,
            },
            "statusAtual": registro.status,
            "statusConsultado": mock,
        }

    @staticmethod
    def atualizar_status(registro: Registro, novo_status: str) -> tuple[Registro, dict[str, Any]]:
        mock = CartorioGateway.forcar_status(registro.protocolo, novo_status)
        registro.status = novo_status
        registro.mock_status = mock
        registro.save(update_fields=["status", "mock_status", "updated_at"])
        return registro, mock
