"""Estágios do funil de um imóvel.

Cada estágio é identificado pelo número (1 a 8), pelo slug gravado em
``Property.status`` e pelo nome de exibição.
"""

from __future__ import annotations

from shared.exceptions import TransicaoInvalidaError

ESTAGIOS: list[tuple[int, str, str]] = [
    (1, "captacao", "Captação"),
    (2, "diligence", "Due Diligence"),
    (3, "mercado", "Mercado"),
    (4, "proposta", "Propostas"),
    (5, "contrato", "Contratos"),
    (6, "financiamento", "Financiamento"),
    (7, "instrumento", "Instrumento"),
    (8, "concluido", "Concluído"),
]

ESTAGIO_INICIAL = ESTAGIOS[0][0]
ESTAGIO_FINAL = ESTAGIOS[-1][0]

STATUS_CHOICES = [(slug, nome) for _, slug, nome in ESTAGIOS]
ESTAGIO_CHOICES = [(numero, nome) for numero, _, nome in ESTAGIOS]

_POR_NUMERO = {numero: (slug, nome) for numero, slug, nome in ESTAGIOS}


def estagio_valido(numero) -> bool:
    return isinstance(numero, int) and not isinstance(numero, bool) and numero in _POR_NUMERO


def validar_estagio_numero(numero) -> int:
    if not estagio_valido(numero):
        raise TransicaoInvalidaError(f"Estágio inválido: {numero!r} (esperado {ESTAGIO_INICIAL} a {ESTAGIO_FINAL})")
    return numero


def slug_do_estagio(numero: int) -> str:
    return _POR_NUMERO[validar_estagio_numero(numero)][0]


def nome_do_estagio(numero: int) -> str:
    return _POR_NUMERO[validar_estagio_numero(numero)][1]
