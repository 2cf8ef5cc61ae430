from django.core.management.base import BaseCommand
from django.db import transaction

from pendencias.catalog import DEFAULT_STAGE_REQUIREMENTS
from pendencias.models import StageRequirement


class Command(BaseCommand):
    help = "Cadastra o catálogo padrão de requisitos por estágio (idempotente por requirement_key)"

    def add_arguments(self, parser):
        parser.add_argument("--dry-run", action="store_true", help="Mostra o que seria feito sem aplicar mudanças.")
        parser.add_argument(
            "--update", action="store_true", help="Atualiza nome/descrição/regras de requisitos já existentes."
        )

    def handle(self, *args, **options):
        dry = options["dry_run"]
        criados = atualizados = ignorados = 0
        with transaction.atomic():
            for ordem, item in enumerate(DEFAULT_STAGE_REQUIREMENTS):
                dados = {**item, "order": ordem}
                key = dados.pop("requirement_key")
                dados.setdefault("validation_rules", [])
                existente = StageRequirement.objects.filter(requirement_key=key).first()
                if existente is None:
                    if not dry:
                        StageRequirement.objects.create(requirement_key=key, **dados)
                    criados += 1
                elif options["update"]:
                    if not dry:
                        for campo, valor in dados.items():
                            setattr(existente, campo, valor)
                        existente.save()
                    atualizados += 1
                else:
                    ignorados += 1
            if dry:
                transaction.set_rollback(True)

        prefixo = "[dry-run] " if dry else ""
        self.stdout.write(
            self.style.SUCCESS(
                f"{prefixo}Requisitos: criados={criados} atualizados={atualizados} ignorados={ignorados}"
            )
        )
