import logging

from celery import shared_task

from notifications.services import PendencyNotificationService

logger = logging.getLogger(__name__)


@shared_task
def resolver_notificacoes_expiradas():
    """Resolve notificações de pendência cujo auto_resolve_at já passou."""
    total = PendencyNotificationService.resolver_expiradas()
    if total:
        logger.info("%s notificações de pendência resolvidas automaticamente", total)
    return total
