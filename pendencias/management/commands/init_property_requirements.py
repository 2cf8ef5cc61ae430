from django.core.management.base import BaseCommand

from imoveis.models import Property
from pendencias.services import PendencyService


class Command(BaseCommand):
    help = "Inicializa o rastreamento de pendências de imóveis que ainda não possuem requisitos"

    def add_arguments(self, parser):
        parser.add_argument("--dry-run", action="store_true", help="Apenas lista os imóveis afetados.")
        parser.add_argument("--all", action="store_true", help="Reprocessa todos os imóveis (idempotente).")

    def handle(self, *args, **options):
        qs = Property.objects.all() if options["all"] else Property.objects.filter(requirements__isnull=True)
        imoveis = list(qs.distinct().order_by("id"))
        self.stdout.write(f"{len(imoveis)} imóveis sem rastreamento de pendências")
        if options["dry_run"]:
            for imovel in imoveis:
                self.stdout.write(f" - {imovel.sequence_number} ({imovel.pk})")
            return
        total = 0
        for imovel in imoveis:
            total += PendencyService.inicializar_requisitos(imovel)
        self.stdout.write(self.style.SUCCESS(f"{total} requisitos criados em {len(imoveis)} imóveis"))
