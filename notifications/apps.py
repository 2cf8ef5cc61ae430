"""Configuração do aplicativo de notificações.

Registra os sinais de broadcast e, quando ``NOTIFICATIONS_SCHEDULER_AUTOSTART``
estiver ligado, inicia o agendador em processo.
"""

import logging

from django.apps import AppConfig
from django.conf import settings


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"
    verbose_name = "Notificações"

    def ready(self) -> None:
        from . import signals  # noqa: F401, PLC0415  # registro dos receivers

        if getattr(settings, "NOTIFICATIONS_SCHEDULER_AUTOSTART", False):
            from .scheduler import get_scheduler  # noqa: PLC0415

            get_scheduler().start()
            logging.getLogger(__name__).info("Agendador de notificações iniciado automaticamente")
