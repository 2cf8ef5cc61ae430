import logging

from celery import shared_task

from .services import ScheduledNotificationService

logger = logging.getLogger(__name__)


@shared_task
def processar_notificacoes_agendadas(batch_size=None):
    """Varredura periódica das notificações agendadas (Celery beat)."""
    return ScheduledNotificationService.processar_pendentes(batch_size=batch_size)
