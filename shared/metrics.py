"""Contadores Prometheus do domínio."""

from __future__ import annotations

from prometheus_client import Counter

AVANCOS_ESTAGIO_TOTAL = Counter(
    "vh_avancos_estagio_total",
    "Total de tentativas de avanço de estágio por resultado",
    ["resultado"],
)
NOTIFICACOES_AGENDADAS_TOTAL = Counter(
    "vh_notificacoes_agendadas_total",
    "Total de notificações agendadas processadas pela varredura",
    ["resultado"],
)
CARTORIO_FALLBACK_TOTAL = Counter(
    "vh_cartorio_fallback_total",
    "Total de respostas simuladas servidas após timeout do cartório",
)
