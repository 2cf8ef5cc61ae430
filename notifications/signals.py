import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db.models.signals import post_save
from django.dispatch import receiver

from .consumers import grupo_do_usuario
from .models import Notification
from .rules import NotificationRuleService

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Notification)
def broadcast_notification_created(sender, instance, created, raw=False, **kwargs):
    """Envia a nova notificação ao grupo WebSocket do destinatário."""
    if not created or raw:
        return
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    try:
        count = Notification.objects.filter(user_id=instance.user_id, is_read=False).count()
        async_to_sync(channel_layer.group_send)(
            grupo_do_usuario(instance.user_id),
            {
                "type": "notifications_update",
                "event": "notification_created",
                "notification_id": instance.id,
                "unread_count": count,
                "title": instance.title,
                "notification_type": instance.type,
                "category": instance.category,
            },
        )
    except Exception:  # noqa: BLE001 - a entrega em tempo real é best-effort
        logger.warning("Falha ao publicar notificação %s no channel layer", instance.id, exc_info=True)


# Eventos de outros apps tratados por NotificationRule

EVENTOS_DE_NOTA = {"meeting": "client_note:meeting_created", "call": "client_note:call_logged"}


@receiver(post_save, sender="imoveis.Property")
def notificar_imovel_criado(sender, instance, created, raw=False, **kwargs):
    if created and not raw:
        NotificationRuleService.processar_evento("property:created", "property", instance, instance.user)


@receiver(post_save, sender="imoveis.PropertyDocument")
def notificar_documento_enviado(sender, instance, created, raw=False, **kwargs):
    if created and not raw:
        NotificationRuleService.processar_evento("document:uploaded", "document", instance, instance.property.user)


@receiver(post_save, sender="clientes.Client")
def notificar_cliente_criado(sender, instance, created, raw=False, **kwargs):
    if created and not raw:
        NotificationRuleService.processar_evento("client:created", "client", instance, instance.user)


@receiver(post_save, sender="clientes.ClientNote")
def notificar_nota_de_cliente(sender, instance, created, raw=False, **kwargs):
    evento = EVENTOS_DE_NOTA.get(instance.type)
    if created and not raw and evento:
        NotificationRuleService.processar_evento(evento, "client_note", instance, instance.user)
