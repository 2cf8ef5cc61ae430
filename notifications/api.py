"""Endpoints de notificações gerais, de pendência e agendadas (somente do próprio usuário)."""

from __future__ import annotations

from typing import ClassVar

from django.db.models import Case, IntegerField, Value, When
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .models import Notification, PendencyNotification, ScheduledNotification
from .serializers import (
    NotificationPreferenceSerializer,
    NotificationSerializer,
    NotificationSubscriptionSerializer,
    PendencyNotificationSerializer,
    ScheduledNotificationSerializer,
)
from .services import (
    NotificationPreferenceService,
    NotificationService,
    PendencyNotificationService,
    ScheduledNotificationService,
)

VERDADEIRO = ("1", "true", "True", "yes")


class NotificationViewSet(viewsets.ReadOnlyModelViewSet):
    """Notificações do usuário; DELETE arquiva em vez de apagar."""

    serializer_class = NotificationSerializer
    permission_classes: ClassVar[list] = [permissions.IsAuthenticated]

    def get_queryset(self):
        qs = Notification.objects.filter(user=self.request.user, is_archived=False)
        if self.request.query_params.get("unread") in VERDADEIRO:
            qs = qs.filter(is_read=False)
        return qs

    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        notification = NotificationService.obter_do_usuario(request.user, pk)
        notification.marcar_como_lida()
        return Response(self.get_serializer(notification).data)

    @action(detail=False, methods=["post"], url_path="read-all")
    def read_all(self, request):
        total = NotificationService.marcar_todas_como_lidas(request.user)
        return Response({"updated": total})

    @action(detail=False, methods=["get"])
    def summary(self, request):
        return Response(NotificationService.resumo(request.user))

    def destroy(self, request, *args, **kwargs):
        NotificationService.arquivar(request.user, kwargs.get("pk"))
        return Response(status=status.HTTP_204_NO_CONTENT)


class PendencyNotificationViewSet(viewsets.ReadOnlyModelViewSet):
    """Notificações de pendência, mais graves primeiro."""

    serializer_class = PendencyNotificationSerializer
    permission_classes: ClassVar[list] = [permissions.IsAuthenticated]

    def get_queryset(self):
        params = self.request.query_params
        qs = PendencyNotification.objects.filter(user=self.request.user).select_related("requirement")
        if params.get("include_resolved") not in VERDADEIRO:
            qs = qs.filter(is_resolved=False)
        if params.get("property"):
            qs = qs.filter(property_id=params["property"])
        rank = Case(
            *[When(severity=sev, then=Value(peso)) for sev, peso in PendencyNotification.SEVERITY_RANK.items()],
            default=Value(0),
            output_field=IntegerField(),
        )
        return qs.annotate(severity_rank=rank).order_by("-severity_rank", "-created_at", "-id")

    @action(detail=True, methods=["post"])
    def resolve(self, request, pk=None):
        notification = PendencyNotificationService.obter_do_usuario(request.user, pk)
        PendencyNotificationService.resolver(notification, request.user)
        return Response(self.get_serializer(notification).data)

    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        notification = PendencyNotificationService.obter_do_usuario(request.user, pk)
        PendencyNotificationService.marcar_como_lida(notification)
        return Response(self.get_serializer(notification).data)


class ScheduledNotificationViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    serializer_class = ScheduledNotificationSerializer
    permission_classes: ClassVar[list] = [permissions.IsAuthenticated]
    filterset_fields: ClassVar[list[str]] = ["status", "related_type"]

    def get_queryset(self):
        return ScheduledNotification.objects.filter(user=self.request.user)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        agendada = ScheduledNotificationService.cancelar(pk, request.user)
        return Response(self.get_serializer(agendada).data)


class UserPreferencesViewSet(viewsets.ViewSet):
    """Preferências de notificação e inscrições por categoria do próprio usuário."""

    permission_classes: ClassVar[list] = [permissions.IsAuthenticated]

    def _inscricoes(self, user):
        return NotificationSubscriptionSerializer(
            user.notification_subscriptions.filter(is_active=True), many=True
        ).data

    @action(detail=False, methods=["get", "put"])
    def notifications(self, request):
        if request.method == "PUT":
            serializer = NotificationPreferenceSerializer(data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            preferencia = NotificationPreferenceService.atualizar(request.user, **serializer.validated_data)
        else:
            preferencia = NotificationPreferenceService.obter(request.user)
        return Response(
            {
                "preferences": NotificationPreferenceSerializer(preferencia).data,
                "subscriptions": self._inscricoes(request.user),
            }
        )

    @action(detail=False, methods=["get", "post"])
    def subscriptions(self, request):
        if request.method == "GET":
            return Response(self._inscricoes(request.user))
        serializer = NotificationSubscriptionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        inscricao = NotificationPreferenceService.inscrever(request.user, **serializer.validated_data)
        return Response(NotificationSubscriptionSerializer(inscricao).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["delete"], url_path=r"subscriptions/(?P<subscription_id>\d+)")
    def remove_subscription(self, request, subscription_id=None):
        NotificationPreferenceService.remover_inscricao(request.user, subscription_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    def categories(self, request):
        return Response(NotificationPreferenceService.categorias())
