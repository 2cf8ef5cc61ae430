"""Consumidor WebSocket de notificações em tempo real."""

from __future__ import annotations

import json
import logging
from typing import Any

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.contrib.auth.models import AbstractBaseUser, AnonymousUser
from django.utils import timezone

from .models import Notification

logger = logging.getLogger(__name__)

NOTIFICATION_PREVIEW_LENGTH = 120


def grupo_do_usuario(user_id: int) -> str:
    return f"notificacoes_user_{user_id}"


class NotificationConsumer(AsyncWebsocketConsumer):
    """Envia ao usuário autenticado um snapshot das não lidas e as novas notificações.

    Ações aceitas do cliente: ``mark_read`` (com ``notification_id``),
    ``mark_read_bulk`` (com ``ids``) e ``refresh``.
    """

    user: AbstractBaseUser | AnonymousUser

    async def connect(self) -> None:
        self.user = self.scope.get("user", AnonymousUser())

        if not self.user.is_authenticated:
            await self.close()
            return

        self.group = grupo_do_usuario(self.user.id)
        await self.channel_layer.group_add(self.group, self.channel_name)
        await self.accept()
        await self._send_snapshot()

    async def disconnect(self, _close_code: int | None = None) -> None:
        if hasattr(self, "group"):
            await self.channel_layer.group_discard(self.group, self.channel_name)

    async def receive(self, text_data: str) -> None:
        try:
            data = json.loads(text_data)
        except json.JSONDecodeError:
            logger.warning("Mensagem JSON inválida recebida no NotificationConsumer.")
            return

        action = data.get("type") or data.get("action")
        if action == "mark_read":
            nid = data.get("notification_id")
            if nid and await self._mark_read(nid):
                await self._broadcast_count("marked_read", notification_id=nid)
        elif action == "mark_read_bulk":
            ids = data.get("ids") or []
            changed = 0
            for nid in ids:
                if await self._mark_read(nid):
                    changed += 1
            if changed:
                await self._broadcast_count("marked_read_bulk", ids=ids)
        elif action == "refresh":
            await self._send_snapshot()

    async def _broadcast_count(self, event: str, **extra: Any) -> None:
        count = await self._unread_count()
        await self.channel_layer.group_send(
            self.group, {"type": "notifications_update", "event": event, "unread_count": count, **extra}
        )

    async def _send_snapshot(self) -> None:
        notifications = await self._recent_unread()
        count = await self._unread_count()
        await self.send(
            text_data=json.dumps(
                {
                    "type": "notifications_snapshot",
                    "unread_count": count,
                    "notifications": notifications,
                    "timestamp": timezone.now().isoformat(),
                }
            )
        )

    async def notifications_update(self, event: dict[str, Any]) -> None:
        """Repasse das mensagens enviadas ao grupo (ver ``signals``)."""
        await self.send(text_data=json.dumps(event))

    @database_sync_to_async
    def _recent_unread(self, limit: int = 10) -> list[dict[str, Any]]:
        qs = Notification.objects.filter(user=self.user, is_read=False).order_by("-created_at")[:limit]
        return [
            {
                "id": n.id,
                "title": n.title,
                "message": (
                    f"{n.message[:NOTIFICATION_PREVIEW_LENGTH]}..."
                    if len(n.message) > NOTIFICATION_PREVIEW_LENGTH
                    else n.message
                ),
                "type": n.type,
                "category": n.category,
                "created_at": n.created_at.isoformat(),
                "action_url": n.action_url,
            }
            for n in qs
        ]

    @database_sync_to_async
    def _unread_count(self) -> int:
        return Notification.objects.filter(user=self.user, is_read=False).count()

    @database_sync_to_async
    def _mark_read(self, notification_id) -> bool:
        try:
            notification = Notification.objects.get(id=int(notification_id), user=self.user)
        except (Notification.DoesNotExist, TypeError, ValueError):
            return False
        if notification.is_read:
            return False
        notification.marcar_como_lida()
        return True
