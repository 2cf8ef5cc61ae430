"""Consultas de imóveis com escopo de propriedade do usuário."""

from __future__ import annotations

from django.db.models import QuerySet

from shared.exceptions import RecursoNaoEncontradoError

from .models import Property


class PropertyService:
    @staticmethod
    def do_usuario(user) -> QuerySet[Property]:
        return Property.objects.filter(user=user)

    @staticmethod
    def obter_do_usuario(user, property_id) -> Property:
        """Imóvel de outro usuário responde como inexistente."""
        try:
            return PropertyService.do_usuario(user).get(pk=int(property_id))
        except (Property.DoesNotExist, TypeError, ValueError) as exc:
            raise RecursoNaoEncontradoError("Imóvel não encontrado") from exc
