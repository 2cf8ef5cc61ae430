"""API de cartórios e registros de imóveis."""

from __future__ import annotations

from typing import ClassVar

from drf_yasg.utils import swagger_auto_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import IsStaffUser
from imoveis.services import PropertyService

from .models import Cartorio
from .serializers import AtualizarStatusSerializer, CartorioSerializer, ConsultarTaxasSerializer, RegistroSerializer
from .services import CartorioService, RegistroService


class CartorioViewSet(viewsets.ModelViewSet):
    """
    Leitura e consulta de taxas para qualquer usuário autenticado;
    cadastro e alteração restritos à equipe interna.
    """

    serializer_class = CartorioSerializer

    def get_permissions(self):
        if self.action in ("list", "retrieve", "consultar_taxas"):
            return [permissions.IsAuthenticated()]
        return [permissions.IsAuthenticated(), IsStaffUser()]

    def get_queryset(self):
        if self.action in ("list", "retrieve"):
            return CartorioService.ativos(self.request.query_params.get("cidade"))
        return Cartorio.objects.all()

    @swagger_auto_schema(request_body=ConsultarTaxasSerializer)
    @action(detail=False, methods=["post"], url_path="consultar-taxas")
    def consultar_taxas(self, request):
        dto = ConsultarTaxasSerializer(data=request.data)
        dto.is_valid(raise_exception=True)
        dados = dto.validated_data
        return Response(
            CartorioService.consultar_taxas(
                dados["valorImovel"], cartorio_id=dados.get("cartorioId"), cartorio_nome=dados.get("cartorioNome")
            )
        )


class RegistroViewSet(viewsets.ModelViewSet):
    serializer_class = RegistroSerializer
    permission_classes: ClassVar[list] = [permissions.IsAuthenticated]
    filterset_fields: ClassVar[list[str]] = ["status", "cartorio", "property"]

    def get_queryset(self):
        return RegistroService.do_usuario(self.request.user)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        registro = RegistroService.criar(request.user, serializer.validated_data)
        return Response(self.get_serializer(registro).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        registro = self.get_object()
        serializer = self.get_serializer(registro, data=request.data, partial=kwargs.pop("partial", False))
        serializer.is_valid(raise_exception=True)
        registro = RegistroService.atualizar(registro, request.user, serializer.validated_data)
        return Response(self.get_serializer(registro).data)

    @action(detail=True, methods=["get"], url_path="status")
    def consultar_status(self, request, pk=None):
        registro = self.get_object()
        return Response(RegistroService.consultar_status(registro))

    @swagger_auto_schema(request_body=AtualizarStatusSerializer)
    @action(detail=True, methods=["post"], url_path="update-status")
    def update_status(self, request, pk=None):
        registro = self.get_object()
        dto = AtualizarStatusSerializer(data=request.data)
        dto.is_valid(raise_exception=True)
        registro, mock = RegistroService.atualizar_status(registro, dto.validated_data["novoStatus"])
        return Response(
            {
                "message": "Status atualizado com sucesso",
                "registro": self.get_serializer(registro).data,
                "mockData": mock,
            }
        )


class PropertyRegistrosView(APIView):
    permission_classes: ClassVar[list] = [permissions.IsAuthenticated]

    def get(self, request, property_id):
        imovel = PropertyService.obter_do_usuario(request.user, property_id)
        registros = imovel.registros.select_related("cartorio")
        return Response(RegistroSerializer(registros, many=True).data)
