"""API REST de clientes e do CRM de notas."""

from __future__ import annotations

from typing import ClassVar

from drf_yasg.utils import swagger_auto_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .serializers import (
    ClientNoteAuditLogSerializer,
    ClientNoteSerializer,
    ClientSerializer,
    ValidateCpfSerializer,
    ValidateEmailSerializer,
)
from .services import ClientService, CRMService


class ClientViewSet(viewsets.ModelViewSet):
    """
    Clientes do corretor autenticado e as notas de CRM de cada um.
    """

    serializer_class = ClientSerializer
    permission_classes: ClassVar[list] = [permissions.IsAuthenticated]
    filterset_fields: ClassVar[list[str]] = ["marital_status", "city", "state"]
    search_fields: ClassVar[list[str]] = ["full_name", "email", "cpf"]
    ordering_fields: ClassVar[list[str]] = ["full_name", "created_at"]

    def get_queryset(self):
        return ClientService.do_usuario(self.request.user)

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        return Response(ClientService.estatisticas(request.user))

    @action(detail=False, methods=["get"])
    def recent(self, request):
        try:
            limit = int(request.query_params.get("limit", 0))
        except ValueError:
            limit = 0
        clientes = ClientService.recentes(request.user, limit or None)
        return Response(self.get_serializer(clientes, many=True).data)

    @swagger_auto_schema(request_body=ValidateCpfSerializer)
    @action(detail=False, methods=["post"], url_path="validate-cpf")
    def validate_cpf(self, request):
        dto = ValidateCpfSerializer(data=request.data)
        dto.is_valid(raise_exception=True)
        return Response(ClientService.validar_cpf(dto.validated_data["cpf"], dto.validated_data.get("excludeId")))

    @swagger_auto_schema(request_body=ValidateEmailSerializer)
    @action(detail=False, methods=["post"], url_path="validate-email")
    def validate_email(self, request):
        dto = ValidateEmailSerializer(data=request.data)
        dto.is_valid(raise_exception=True)
        return Response(
            ClientService.validar_email(dto.validated_data["email"], dto.validated_data.get("excludeId"))
        )

    # --- CRM ---
    @action(detail=True, methods=["get", "post"])
    def notes(self, request, pk=None):
        client = self.get_object()
        if request.method == "GET":
            notas = client.client_notes.all()
            if request.query_params.get("type"):
                notas = notas.filter(type=request.query_params["type"])
            return Response(ClientNoteSerializer(notas, many=True).data)
        serializer = ClientNoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = dict(serializer.validated_data)
        reason = dados.pop("reason", None)
        note = CRMService.criar_nota(client, request.user, dados, reason)
        return Response(ClientNoteSerializer(note).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get", "put", "patch", "delete"], url_path=r"notes/(?P<note_id>\d+)")
    def note_detail(self, request, pk=None, note_id=None):
        client = self.get_object()
        note = CRMService.obter_nota(client, note_id)
        if request.method == "GET":
            return Response(ClientNoteSerializer(note).data)
        if request.method == "DELETE":
            CRMService.excluir_nota(note)
            return Response(status=status.HTTP_204_NO_CONTENT)
        serializer = ClientNoteSerializer(note, data=request.data, partial=request.method == "PATCH")
        serializer.is_valid(raise_exception=True)
        dados = dict(serializer.validated_data)
        reason = dados.pop("reason", None)
        note = CRMService.atualizar_nota(note, request.user, dados, reason)
        return Response(ClientNoteSerializer(note).data)

    @action(detail=True, methods=["get"], url_path=r"notes/(?P<note_id>\d+)/audit")
    def note_audit(self, request, pk=None, note_id=None):
        client = self.get_object()
        note = CRMService.obter_nota(client, note_id)
        return Response(ClientNoteAuditLogSerializer(note.audit_logs.all(), many=True).data)

    @action(detail=True, methods=["get"], url_path="crm-stats")
    def crm_stats(self, request, pk=None):
        client = self.get_object()
        return Response(CRMService.estatisticas(client, request.user))
