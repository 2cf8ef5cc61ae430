from django.core.management.base import BaseCommand
from django.db import transaction

from notifications.catalog import DEFAULT_RULES, DEFAULT_TEMPLATES
from notifications.models import NotificationRule, NotificationTemplate


class Command(BaseCommand):
    help = "Cadastra os modelos e regras de notificação padrão (idempotente por chave)"

    def add_arguments(self, parser):
        parser.add_argument("--dry-run", action="store_true", help="Mostra o que seria feito sem aplicar mudanças.")

    def handle(self, *args, **options):
        dry = options["dry_run"]
        modelos = regras = ignorados = 0
        with transaction.atomic():
            for item in DEFAULT_TEMPLATES:
                dados = dict(item)
                key = dados.pop("template_key")
                if NotificationTemplate.objects.filter(template_key=key).exists():
                    ignorados += 1
                    continue
                if not dry:
                    NotificationTemplate.objects.create(template_key=key, **dados)
                modelos += 1

            for item in DEFAULT_RULES:
                dados = dict(item)
                key = dados.pop("rule_key")
                template_key = dados.pop("template_key")
                if NotificationRule.objects.filter(rule_key=key).exists():
                    ignorados += 1
                    continue
                if not dry:
                    NotificationRule.objects.create(
                        rule_key=key, template=NotificationTemplate.objects.get(template_key=template_key), **dados
                    )
                regras += 1
            if dry:
                transaction.set_rollback(True)

        prefixo = "[dry-run] " if dry else ""
        self.stdout.write(
            self.style.SUCCESS(f"{prefixo}Notificações: modelos={modelos} regras={regras} ignorados={ignorados}")
        )
