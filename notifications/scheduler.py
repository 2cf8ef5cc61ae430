"""Agendador em processo da varredura de notificações agendadas.

Uma thread daemon chama ``ScheduledNotificationService.processar_pendentes``
a cada ``NOTIFICATIONS_SWEEP_INTERVAL_SECONDS``. Em produção a varredura
também pode ser disparada pelo Celery beat ou pelo comando
``run_notification_scheduler``; o ``skip_locked`` da varredura garante que
execuções simultâneas não entreguem a mesma linha duas vezes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from django.conf import settings
from django.db import close_old_connections

logger = logging.getLogger(__name__)


class NotificationScheduler:
    def __init__(
        self,
        interval_seconds: float | None = None,
        batch_size: int | None = None,
        sweep: Callable[..., dict] | None = None,
    ):
        self.interval_seconds = float(
            interval_seconds or getattr(settings, "NOTIFICATIONS_SWEEP_INTERVAL_SECONDS", 300)
        )
        self.batch_size = batch_size or int(getattr(settings, "NOTIFICATIONS_SWEEP_BATCH_SIZE", 100))
        self._sweep = sweep
        self._stop_event: threading.Event | None = None
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self.cycles = 0
        self.last_result: dict | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Inicia a thread; devolve False se já estiver rodando."""
        with self._lock:
            if self.is_running:
                return False
            # Cada thread recebe o seu evento: uma thread antiga ainda em varredura não é reativada
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._loop, args=(self._stop_event,), name="notification-scheduler", daemon=True
            )
            self._thread.start()
        logger.info(
            "Agendador de notificações iniciado (intervalo=%ss, lote=%s)", self.interval_seconds, self.batch_size
        )
        return True

    def stop(self, timeout: float | None = 10.0) -> bool:
        """Sinaliza a parada e aguarda a thread; devolve False se ela seguir viva após ``timeout``."""
        with self._lock:
            thread = self._thread
            if thread is None:
                return False
            self._stop_event.set()
        thread.join(timeout)
        with self._lock:
            if thread.is_alive():
                logger.warning("Agendador ainda finalizando a varredura em andamento")
                return False
            if self._thread is thread:
                self._thread = None
        logger.info("Agendador de notificações parado")
        return True

    def run_once(self) -> dict:
        sweep = self._sweep
        if sweep is None:
            from .services import ScheduledNotificationService

            sweep = ScheduledNotificationService.processar_pendentes
        result = sweep(batch_size=self.batch_size)
        self.cycles += 1
        self.last_result = result
        return result

    def _loop(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            try:
                self.run_once()
            except Exception:  # noqa: BLE001 - o ciclo seguinte tenta de novo
                logger.exception("Erro na varredura de notificações agendadas")
            finally:
                close_old_connections()
            stop_event.wait(self.interval_seconds)


_scheduler: NotificationScheduler | None = None
_scheduler_lock = threading.Lock()


def get_scheduler() -> NotificationScheduler:
    """Instância única do agendador no processo."""
    global _scheduler
    with _scheduler_lock:
        if _scheduler is None:
            _scheduler = NotificationScheduler()
        return _scheduler
