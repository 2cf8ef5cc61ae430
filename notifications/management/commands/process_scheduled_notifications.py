from django.core.management.base import BaseCommand
from django.utils import timezone

from notifications.models import ScheduledNotification
from notifications.services import STATUS_REPROCESSAVEIS, ScheduledNotificationService


class Command(BaseCommand):
    help = "Executa uma varredura das notificações agendadas vencidas"

    def add_arguments(self, parser):
        parser.add_argument("--batch-size", type=int, help="Máximo de linhas por varredura.")
        parser.add_argument("--dry-run", action="store_true", help="Apenas conta as notificações vencidas.")

    def handle(self, *args, **options):
        if options["dry_run"]:
            vencidas = ScheduledNotification.objects.filter(
                status__in=STATUS_REPROCESSAVEIS, scheduled_for__lte=timezone.now()
            ).count()
            self.stdout.write(f"[dry-run] {vencidas} notificação(ões) agendada(s) vencida(s)")
            return

        totais = ScheduledNotificationService.processar_pendentes(batch_size=options.get("batch_size"))
        self.stdout.write(
            self.style.SUCCESS(
                f"Processadas={totais['processed']} enviadas={totais['sent']} falhas={totais['failed']}"
            )
        )
