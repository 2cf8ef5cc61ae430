"""Simulação das respostas de cartórios.

Não há integração real: as funções abaixo produzem dados fictícios mas
plausíveis. Não acessam o banco para poderem rodar na thread do
``executar_com_timeout``.
"""

from __future__ import annotations

import random
import time
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from django.utils import timezone

PERCENTUAL_ITBI = Decimal("0.02")
PERCENTUAL_REGISTRO = Decimal("0.003")
TAXA_CERTIDOES = Decimal("150.00")
EMOLUMENTOS = Decimal("280.00")
VALIDADE_CONSULTA_DIAS = 7

STATUS_SIMULADOS = ("pronto_para_registro", "em_analise", "em_registro", "exigencia", "registrado")

# (limite do seed, status, observações, próxima etapa)
FAIXAS_STATUS = (
    (20, "pronto_para_registro", "Documentação ainda não recebida pelo cartório", "Aguardando envio da documentação"),
    (50, "em_analise", "Documentação em análise pelo registrador", "Análise documental em andamento"),
    (70, "em_registro", "Análise concluída. Registro em andamento", "Pagamento das taxas e lavratura do registro"),
    (90, "registrado", "Registro concluído com sucesso", "Processo finalizado"),
    (100, "exigencia", "Documentação irregular. Necessária correção", "Correção de documentos necessária"),
)

OBSERVACOES_FORCADAS = {
    "pronto_para_registro": "Status alterado manualmente para pronto para registro",
    "em_analise": "Análise iniciada pelo registrador",
    "em_registro": "Análise aprovada. Registro em andamento",
    "exigencia": "Exigência emitida. Verificar documentação",
    "registrado": "Registro concluído com sucesso!",
}


def _dinheiro(valor: Decimal) -> Decimal:
    return valor.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _aguardar(atraso_ms: int) -> None:
    if atraso_ms > 0:
        time.sleep(atraso_ms / 1000)


def gerar_protocolo() -> str:
    """Últimos 6 dígitos do timestamp em ms seguidos de 3 dígitos aleatórios."""
    timestamp = str(int(time.time() * 1000))
    return f"{timestamp[-6:]}{random.randint(0, 999):03d}"


def calcular_taxa_registro(valor_imovel: Decimal, taxa_base: Decimal) -> Decimal:
    return _dinheiro(Decimal(valor_imovel) * PERCENTUAL_REGISTRO + Decimal(taxa_base))


def enviar_documentos(
    cartorio_nome: str,
    taxa_base: Decimal,
    valor_imovel: Decimal,
    documentos: list[str],
    atraso_ms: int = 0,
) -> dict[str, Any]:
    _aguardar(atraso_ms)
    return {
        "protocolo": gerar_protocolo(),
        "status": "em_analise",
        "dataEnvio": timezone.now().isoformat(),
        "valorTaxas": float(calcular_taxa_registro(valor_imovel, taxa_base)),
        "prazoEstimado": random.randint(10, 30),
        "cartorioInfo": {"nome": cartorio_nome},
        "documentosEnviados": len(documentos),
        "observacoes": "Documentos recebidos e protocolo gerado. Análise iniciada.",
    }


def consultar_status(protocolo: str, atraso_ms: int = 0) -> dict[str, Any]:
    """Status derivado dos dois últimos dígitos do protocolo."""
    _aguardar(atraso_ms)
    digitos = "".join(ch for ch in protocolo if ch.isdigit())
    seed = int(digitos[-2:]) if digitos else 0
    for limite, status, observacoes, proxima_etapa in FAIXAS_STATUS:
        if seed < limite:
            break
    if status == "em_analise":
        prazo = random.randint(5, 20)
    elif status == "em_registro":
        prazo = 5
    else:
        prazo = 0
    return {
        "protocolo": protocolo,
        "status": status,
        "dataConsulta": timezone.now().isoformat(),
        "observacoes": observacoes,
        "prazoEstimado": prazo,
        "proximaEtapa": proxima_etapa,
        "cartorioResponse": {
            "timestamp": int(time.time() * 1000),
            "servidor": f"cartorio-api-{random.randint(1, 3)}",
            "versaoApi": "2.1.0",
        },
    }


def forcar_status(protocolo: str, novo_status: str, atraso_ms: int = 0) -> dict[str, Any]:
    _aguardar(atraso_ms)
    return {
        "protocolo": protocolo,
        "status": novo_status,
        "dataAtualizacao": timezone.now().isoformat(),
        "observacoes": OBSERVACOES_FORCADAS[novo_status],
        "prazoEstimado": random.randint(5, 20) if novo_status == "em_analise" else 0,
        "atualizacaoManual": True,
        "responsavel": "Sistema VentusHub",
    }


def consultar_taxas(
    cartorio_nome: str, taxa_base: Decimal, valor_imovel: Decimal, atraso_ms: int = 0
) -> dict[str, Any]:
    _aguardar(atraso_ms)
    valor = Decimal(valor_imovel)
    itbi = _dinheiro(valor * PERCENTUAL_ITBI)
    registro = calcular_taxa_registro(valor, taxa_base)
    total = _dinheiro(itbi + registro + TAXA_CERTIDOES + EMOLUMENTOS)
    return {
        "cartorio": cartorio_nome,
        "valorImovel": float(valor),
        "detalhamento": {
            "itbi": float(itbi),
            "registro": float(registro),
            "certidoes": float(TAXA_CERTIDOES),
            "emolumentos": float(EMOLUMENTOS),
        },
        "totalTaxas": float(total),
        "validadeConsulta": (timezone.now() + timedelta(days=VALIDADE_CONSULTA_DIAS)).isoformat(),
        "observacoes": "Valores calculados com base na tabela vigente. Consulte o cartório para confirmação.",
    }
