"""API REST de imóveis e registros relacionados."""

from __future__ import annotations

from typing import ClassVar

from django.shortcuts import get_object_or_404
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .models import Property
from .serializers import (
    ContractSerializer,
    PropertyDocumentSerializer,
    PropertyOwnerSerializer,
    PropertySerializer,
    ProposalSerializer,
)
from .services import PropertyService

NESTED = {
    "owners": PropertyOwnerSerializer,
    "documents": PropertyDocumentSerializer,
    "proposals": ProposalSerializer,
    "contracts": ContractSerializer,
}


class PropertyViewSet(viewsets.ModelViewSet):
    serializer_class = PropertySerializer
    permission_classes: ClassVar[list] = [permissions.IsAuthenticated]
    filterset_fields: ClassVar[list[str]] = ["type", "status", "current_stage", "city"]
    search_fields: ClassVar[list[str]] = ["sequence_number", "street", "neighborhood", "city", "registration_number"]
    ordering_fields: ClassVar[list[str]] = ["created_at", "value", "current_stage"]

    def get_queryset(self):
        return PropertyService.do_usuario(self.request.user).prefetch_related("owners")

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)

    # --- Coleções aninhadas ---
    def _nested_list_create(self, request, relacao: str):
        imovel: Property = self.get_object()
        serializer_class = NESTED[relacao]
        if request.method == "GET":
            itens = getattr(imovel, relacao).all()
            return Response(serializer_class(itens, many=True).data)
        serializer = serializer_class(data=request.data, context={"request": request, "property": imovel})
        serializer.is_valid(raise_exception=True)
        serializer.save(property=imovel)
        return Response(serializer.data, status=status.HTTP_201_CREATED)

    def _nested_detail(self, request, relacao: str, item_id):
        imovel: Property = self.get_object()
        serializer_class = NESTED[relacao]
        item = get_object_or_404(getattr(imovel, relacao), pk=item_id)
        if request.method == "GET":
            return Response(serializer_class(item).data)
        if request.method == "DELETE":
            item.delete()
            return Response(status=status.HTTP_204_NO_CONTENT)
        serializer = serializer_class(
            item,
            data=request.data,
            partial=request.method == "PATCH",
            context={"request": request, "property": imovel},
        )
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    @action(detail=True, methods=["get", "post"])
    def owners(self, request, pk=None):
        return self._nested_list_create(request, "owners")

    @action(detail=True, methods=["get", "put", "patch", "delete"], url_path=r"owners/(?P<item_id>\d+)")
    def owner_detail(self, request, pk=None, item_id=None):
        return self._nested_detail(request, "owners", item_id)

    @action(detail=True, methods=["get", "post"])
    def documents(self, request, pk=None):
        return self._nested_list_create(request, "documents")

    @action(detail=True, methods=["get", "put", "patch", "delete"], url_path=r"documents/(?P<item_id>\d+)")
    def document_detail(self, request, pk=None, item_id=None):
        return self._nested_detail(request, "documents", item_id)

    @action(detail=True, methods=["get", "post"])
    def proposals(self, request, pk=None):
        return self._nested_list_create(request, "proposals")

    @action(detail=True, methods=["get", "put", "patch", "delete"], url_path=r"proposals/(?P<item_id>\d+)")
    def proposal_detail(self, request, pk=None, item_id=None):
        return self._nested_detail(request, "proposals", item_id)

    @action(detail=True, methods=["get", "post"])
    def contracts(self, request, pk=None):
        return self._nested_list_create(request, "contracts")

    @action(detail=True, methods=["get", "put", "patch", "delete"], url_path=r"contracts/(?P<item_id>\d+)")
    def contract_detail(self, request, pk=None, item_id=None):
        return self._nested_detail(request, "contracts", item_id)
