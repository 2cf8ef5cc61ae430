import signal
import threading

from django.core.management.base import BaseCommand

from notifications.scheduler import NotificationScheduler


class Command(BaseCommand):
    help = "Roda o agendador de notificações em primeiro plano até receber SIGINT/SIGTERM"

    def add_arguments(self, parser):
        parser.add_argument("--interval", type=float, help="Intervalo entre varreduras, em segundos.")
        parser.add_argument("--batch-size", type=int, help="Máximo de linhas por varredura.")

    def handle(self, *args, **options):
        parar = threading.Event()

        def _encerrar(signum, _frame):
            self.stdout.write(f"Sinal {signum} recebido, encerrando...")
            parar.set()

        signal.signal(signal.SIGINT, _encerrar)
        signal.signal(signal.SIGTERM, _encerrar)

        scheduler = NotificationScheduler(interval_seconds=options.get("interval"), batch_size=options.get("batch_size"))
        scheduler.start()
        self.stdout.write(
            self.style.SUCCESS(
                f"Agendador rodando (intervalo={scheduler.interval_seconds}s, lote={scheduler.batch_size})"
            )
        )
        try:
            while not parar.wait(1.0):
                pass
        finally:
            scheduler.stop()
        self.stdout.write(f"Agendador parado após {scheduler.cycles} ciclo(s)")
