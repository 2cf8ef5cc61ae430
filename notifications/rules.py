"""Processamento de eventos do sistema por ``NotificationRule``.

Cada regra ativa que atende ao evento gera, a partir do seu modelo, uma
notificação imediata ou, com ``delay_minutes``, uma notificação agendada.
Falha de uma regra é registrada e não interrompe as demais.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from .models import NotificationRule
from .services import NotificationService, NotificationTemplateService, ScheduledNotificationService

logger = logging.getLogger(__name__)


def _contexto_da_entidade(entity_type: str, entidade) -> dict[str, Any]:
    if entity_type == "property":
        return {
            "property_address": entidade.endereco_completo,
            # O número sequencial só é gravado depois do primeiro save
            "property_sequence": entidade.sequence_number or f"#{entidade.pk:05d}",
        }
    if entity_type == "client":
        return {"client_name": entidade.full_name}
    if entity_type == "client_note":
        return {
            "client_name": entidade.client.full_name,
            "meeting_date": (
                timezone.localtime(entidade.reminder_date).strftime("%d/%m/%Y %H:%M") if entidade.reminder_date else ""
            ),
            "meeting_location": entidade.location,
            "call_duration": entidade.duration,
            "call_result": entidade.get_call_result_display() if entidade.call_result else "não informado",
        }
    if entity_type == "document":
        return {"document_name": entidade.name, "property_address": entidade.property.endereco_completo}
    return {}


def _action_url(entity_type: str, entidade) -> str:
    if entity_type == "property":
        return f"/property/{entidade.pk}"
    if entity_type == "client":
        return f"/clientes/{entidade.pk}"
    if entity_type == "client_note":
        return f"/clientes/{entidade.client_id}"
    if entity_type == "document":
        return f"/property/{entidade.property_id}/documents"
    return ""


class NotificationRuleService:
    @staticmethod
    def _em_intervalo(regra: NotificationRule, now: datetime) -> bool:
        if not regra.throttle_minutes or regra.last_triggered_at is None:
            return False
        return now - regra.last_triggered_at < timedelta(minutes=regra.throttle_minutes)

    @staticmethod
    def _disparar(regra: NotificationRule, entity_type: str, entidade, user, dados: dict[str, Any], now: datetime):
        contexto = {**_contexto_da_entidade(entity_type, entidade), **dados}
        campos = NotificationTemplateService.montar(regra.template.template_key, contexto)
        action_url = _action_url(entity_type, entidade)

        if regra.delay_minutes:
            expira = campos["expires_at"]
            return ScheduledNotificationService.agendar(
                user=user,
                related_type="notification_rule",
                related_id=regra.pk,
                title=campos["title"],
                message=campos["message"],
                scheduled_for=now + timedelta(minutes=regra.delay_minutes),
                metadata={
                    "ruleKey": regra.rule_key,
                    "entityType": entity_type,
                    "entityId": entidade.pk,
                    "notificationType": campos["type"],
                    "category": campos["category"],
                    "subcategory": campos["subcategory"],
                    "notificationPriority": campos["priority"],
                    "expiresAt": expira.isoformat() if expira else None,
                    "actionUrl": action_url,
                },
            )
        return NotificationService.criar(
            user=user,
            related_id=entidade.pk,
            related_type=entity_type,
            action_url=action_url,
            **campos,
        )

    @staticmethod
    def processar_evento(
        evento: str, entity_type: str, entidade, user, dados: dict[str, Any] | None = None
    ) -> list[Any]:
        """Aplica as regras ativas ao evento e devolve o que foi criado ou agendado."""
        now = timezone.now()
        gerados = []
        regras = NotificationRule.objects.filter(is_active=True, template__is_active=True).select_related("template")
        for regra in regras:
            if not regra.atende(evento, entity_type):
                continue
            if NotificationRuleService._em_intervalo(regra, now):
                logger.debug("Regra %s ignorada: dentro do intervalo mínimo", regra.rule_key)
                continue
            try:
                with transaction.atomic():
                    resultado = NotificationRuleService._disparar(regra, entity_type, entidade, user, dados or {}, now)
                    NotificationRule.objects.filter(pk=regra.pk).update(
                        last_triggered_at=now, trigger_count=F("trigger_count") + 1, updated_at=now
                    )
            except Exception:  # noqa: BLE001 - uma regra com defeito não bloqueia as demais
                logger.exception("Erro ao processar regra %s para o evento %s", regra.rule_key, evento)
                continue
            if resultado is not None:
                gerados.append(resultado)
            logger.info("Regra %s disparada para %s %s", regra.rule_key, entity_type, entidade.pk)
        return gerados
