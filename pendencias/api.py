"""Endpoints de pendências e avanço de estágio de um imóvel."""

from __future__ import annotations

from typing import ClassVar

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from imoveis.serializers import PropertySerializer
from imoveis.services import PropertyService

from .models import PropertyRequirement, StageAdvancementLog
from .serializers import (
    AdvanceStageRequestSerializer,
    PropertyRequirementSerializer,
    PropertyRequirementUpdateSerializer,
    RevalidateRequestSerializer,
    StageAdvancementLogSerializer,
)
from .services import PendencyService, StageAdvancementService


class _PropertyScopedView(APIView):
    permission_classes: ClassVar[list] = [permissions.IsAuthenticated]

    def get_property(self, property_id):
        return PropertyService.obter_do_usuario(self.request.user, property_id)


class PropertyPendenciesView(_PropertyScopedView):
    """Situação de pendências do estágio atual."""

    def get(self, request, property_id):
        imovel = self.get_property(property_id)
        return Response(PendencyService.validar_estagio(imovel).to_dict())


class PendencySummaryView(_PropertyScopedView):
    def get(self, request, property_id):
        imovel = self.get_property(property_id)
        return Response(PendencyService.resumo_pendencias(imovel))


class RevalidateView(_PropertyScopedView):
    """Executa a validação automática por regras e devolve o resultado do estágio atual."""

    def post(self, request, property_id):
        imovel = self.get_property(property_id)
        dto = RevalidateRequestSerializer(data=request.data)
        dto.is_valid(raise_exception=True)
        promovidos = PendencyService.revalidar_regras(imovel, dto.validated_data.get("stage"))
        data = PendencyService.validar_estagio(imovel).to_dict()
        data["autoCompleted"] = [pr.requirement.requirement_key for pr in promovidos]
        return Response(data)


class AdvanceStageView(_PropertyScopedView):
    def post(self, request, property_id):
        imovel = self.get_property(property_id)
        dto = AdvanceStageRequestSerializer(data=request.data)
        dto.is_valid(raise_exception=True)
        dados = dto.validated_data
        outcome = StageAdvancementService.avancar_estagio(
            imovel,
            dados["targetStage"],
            actor=request.user,
            force=dados.get("force", False),
            reason=dados.get("reason"),
            metadata=dados.get("metadata"),
        )
        return Response(
            {
                "property": PropertySerializer(outcome.property).data,
                "logId": outcome.log.pk,
                "overridden": outcome.log.overridden,
                "validation": outcome.validation.to_dict(),
            },
            status=status.HTTP_200_OK,
        )


class AdvancementLogView(_PropertyScopedView):
    def get(self, request, property_id):
        imovel = self.get_property(property_id)
        logs = StageAdvancementLog.objects.filter(property=imovel).select_related("user")
        return Response(StageAdvancementLogSerializer(logs, many=True).data)


class PropertyRequirementListView(_PropertyScopedView):
    def get(self, request, property_id):
        imovel = self.get_property(property_id)
        qs = PropertyRequirement.objects.filter(property=imovel).select_related("requirement")
        stage = request.query_params.get("stage")
        if stage:
            if not stage.isdigit():
                return Response({"stage": ["Estágio inválido."]}, status=status.HTTP_400_BAD_REQUEST)
            qs = qs.filter(requirement__stage=int(stage))
        return Response(PropertyRequirementSerializer(qs, many=True).data)


class PropertyRequirementDetailView(_PropertyScopedView):
    def get(self, request, property_id, req_id):
        imovel = self.get_property(property_id)
        return Response(PropertyRequirementSerializer(PendencyService.obter_requisito(imovel, req_id)).data)

    def put(self, request, property_id, req_id):
        imovel = self.get_property(property_id)
        dto = PropertyRequirementUpdateSerializer(data=request.data)
        dto.is_valid(raise_exception=True)
        pr = PendencyService.atualizar_requisito(imovel, req_id, actor=request.user, **dto.validated_data)
        return Response(PropertyRequirementSerializer(pr).data)

    def patch(self, request, property_id, req_id):
        return self.put(request, property_id, req_id)
