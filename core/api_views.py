"""API Views do app core.

Gestão de usuários parceiros (B2B), restrita à equipe interna.
"""

from __future__ import annotations

from typing import ClassVar

from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .permissions import IsStaffUser
from .serializers import B2BUserCreateSerializer, B2BUserSerializer, B2BUserUpdateSerializer
from .services.b2b import B2BUserService


class B2BUserViewSet(viewsets.ViewSet):
    """API endpoint para provisionamento de usuários B2B."""

    permission_classes: ClassVar[list] = [IsAuthenticated, IsStaffUser]

    def list(self, request):
        users = B2BUserService.listar()
        return Response(B2BUserSerializer(users, many=True).data)

    def create(self, request):
        serializer = B2BUserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        resultado = B2BUserService.criar(serializer.validated_data, criado_por=request.user)
        data = B2BUserSerializer(resultado.user).data
        # Senha exibida apenas nesta resposta
        data["temp_password"] = resultado.temp_password
        return Response(data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return Response(B2BUserSerializer(B2BUserService.obter(pk)).data)

    def update(self, request, pk=None):
        serializer = B2BUserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = B2BUserService.atualizar(pk, serializer.validated_data)
        return Response(B2BUserSerializer(user).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        B2BUserService.desativar(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
