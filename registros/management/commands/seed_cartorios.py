from django.core.management.base import BaseCommand
from django.db import transaction

from registros.models import Cartorio

SITES_RGI_RIO = {
    1: "https://www.1sri-rj.com.br/",
    2: "https://www.2rgi-rj.com.br/",
    3: "https://3ri-rj.com.br/",
    4: "https://www.4rgirj.com.br/",
    5: "https://www.5rgi-rj.com.br/",
    6: "https://6ri-rj.com.br/",
    7: "https://www.7ri-rj.com.br/",
    8: "http://www.8ri-rj.com.br/index3.asp",
    9: "https://www.9rgirj.com.br/",
    10: "https://www.10ri-rj.com.br/",
    11: "https://www.11rirj.com.br/",
    12: "https://www.registrodeimoveis.org.br/12rj/",
}


def rgis_rio_de_janeiro() -> list[dict]:
    return [
        {
            "numero": f"{n}º",
            "nome": f"{n}º RGI",
            "nome_completo": f"{n}º Registro Geral de Imóveis do Rio de Janeiro",
            "cidade": "Rio de Janeiro",
            "estado": "RJ",
            "site": site,
            "ativo": True,
            "permite_consulta_online": True,
            "observacoes": f"Atende a {n}ª Região de Registro de Imóveis",
        }
        for n, site in SITES_RGI_RIO.items()
    ]


class Command(BaseCommand):
    help = "Cadastra os 12 RGIs do Rio de Janeiro (idempotente por número)"

    def add_arguments(self, parser):
        parser.add_argument("--dry-run", action="store_true", help="Mostra o que seria feito sem aplicar mudanças.")

    def handle(self, *args, **options):
        dry = options["dry_run"]
        criados = existentes = 0
        with transaction.atomic():
            for dados in rgis_rio_de_janeiro():
                numero = dados.pop("numero")
                if Cartorio.objects.filter(numero=numero).exists():
                    existentes += 1
                    continue
                if not dry:
                    Cartorio.objects.create(numero=numero, **dados)
                criados += 1
        prefixo = "[dry-run] " if dry else ""
        self.stdout.write(self.style.SUCCESS(f"{prefixo}Cartórios: criados={criados} existentes={existentes}"))
