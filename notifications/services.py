"""Serviços de notificação.

* ``NotificationTemplateService``: resolução e renderização dos modelos de texto.
* ``NotificationPreferenceService``: preferências e inscrições por categoria.
* ``NotificationService``: notificações in-app genéricas, filtradas pelas
  preferências do destinatário.
* ``PendencyNotificationService``: avisos ligados ao funil de pendências, com
  deduplicação por (imóvel, requisito, tipo) e resolução automática.
* ``ScheduledNotificationService``: agendamento, cancelamento e a varredura
  que entrega as notificações vencidas.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any

from django.conf import settings
from django.db import transaction
from django.db.models import Count, Q
from django.template import Context, Template
from django.utils import timezone

from imoveis.stages import nome_do_estagio
from shared.exceptions import RecursoNaoEncontradoError, TransicaoInvalidaError
from shared.metrics import NOTIFICACOES_AGENDADAS_TOTAL

from .catalog import CATEGORIAS, TEMPLATES_POR_CHAVE
from .models import (
    Notification,
    NotificationPreference,
    NotificationSubscription,
    NotificationTemplate,
    PendencyNotification,
    ScheduledNotification,
)

logger = logging.getLogger(__name__)

SEVERIDADE_PARA_TIPO = {
    "CRITICAL": "error",
    "HIGH": "warning",
    "MEDIUM": "warning",
    "LOW": "info",
}

SEVERIDADE_PARA_PRIORIDADE = {"CRITICAL": 1, "HIGH": 2, "MEDIUM": 3, "LOW": 4}

STATUS_REPROCESSAVEIS = ("pending", "failed")
STATUS_CANCELAVEIS = ("pending", "failed")


class NotificationTemplateService:
    @staticmethod
    def obter(template_key: str) -> dict[str, Any]:
        """Devolve o modelo ativo da chave; uma linha no banco substitui o padrão do catálogo."""
        linha = NotificationTemplate.objects.filter(template_key=template_key, is_active=True).first()
        if linha is not None:
            return {
                "template_key": linha.template_key,
                "category": linha.category,
                "subcategory": linha.subcategory,
                "title_template": linha.title_template,
                "message_template": linha.message_template,
                "default_type": linha.default_type,
                "default_priority": linha.default_priority,
                "auto_expire_days": linha.auto_expire_days,
            }
        if template_key in TEMPLATES_POR_CHAVE:
            return dict(TEMPLATES_POR_CHAVE[template_key])
        raise RecursoNaoEncontradoError(f"Modelo de notificação '{template_key}' não encontrado")

    @staticmethod
    def renderizar(texto: str, contexto: dict[str, Any]) -> str:
        # Texto simples, sem escape de HTML
        return Template(texto).render(Context(contexto, autoescape=False)).strip()

    @staticmethod
    def montar(template_key: str, contexto: dict[str, Any]) -> dict[str, Any]:
        modelo = NotificationTemplateService.obter(template_key)
        dias = modelo.get("auto_expire_days")
        return {
            "title": NotificationTemplateService.renderizar(modelo["title_template"], contexto),
            "message": NotificationTemplateService.renderizar(modelo["message_template"], contexto),
            "type": modelo.get("default_type", "info"),
            "category": modelo["category"],
            "subcategory": modelo.get("subcategory", ""),
            "priority": modelo.get("default_priority", 3),
            "expires_at": timezone.now() + timedelta(days=dias) if dias else None,
        }


class NotificationPreferenceService:
    @staticmethod
    def obter(user) -> NotificationPreference:
        preferencia, _ = NotificationPreference.objects.get_or_create(user=user)
        return preferencia

    @staticmethod
    def atualizar(user, **campos) -> NotificationPreference:
        preferencia = NotificationPreferenceService.obter(user)
        alterados = [campo for campo, valor in campos.items() if valor is not None]
        for campo in alterados:
            setattr(preferencia, campo, campos[campo])
        if alterados:
            preferencia.save(update_fields=[*alterados, "updated_at"])
        return preferencia

    @staticmethod
    def inscrever(user, category: str, subcategory: str = "", enable_in_app: bool = True) -> NotificationSubscription:
        inscricao, _ = NotificationSubscription.objects.update_or_create(
            user=user,
            category=category,
            subcategory=subcategory or "",
            defaults={"enable_in_app": enable_in_app, "is_active": True},
        )
        return inscricao

    @staticmethod
    def remover_inscricao(user, subscription_id) -> None:
        try:
            inscricao = NotificationSubscription.objects.get(pk=int(subscription_id), user=user)
        except (NotificationSubscription.DoesNotExist, TypeError, ValueError) as exc:
            raise RecursoNaoEncontradoError("Inscrição não encontrada") from exc
        inscricao.delete()

    @staticmethod
    def categorias() -> list[dict[str, Any]]:
        return CATEGORIAS

    @staticmethod
    def permite(user, category: str, subcategory: str = "", priority: int = 3) -> bool:
        """Diz se o usuário aceita uma notificação in-app dessa categoria e prioridade.

        Sem preferência gravada tudo é aceito. Havendo inscrições ativas na
        categoria, ao menos uma delas (geral ou da subcategoria) precisa estar
        com ``enable_in_app`` ligado.
        """
        preferencia = NotificationPreference.objects.filter(user=user).first()
        if preferencia is not None:
            if not preferencia.enable_in_app or priority > preferencia.in_app_priority_threshold:
                return False
        inscricoes = NotificationSubscription.objects.filter(user=user, category=category, is_active=True).filter(
            Q(subcategory="") | Q(subcategory=subcategory or "")
        )
        if not inscricoes.exists():
            return True
        return inscricoes.filter(enable_in_app=True).exists()


class NotificationService:
    @staticmethod
    def criar(
        user,
        title: str,
        message: str,
        type: str = "info",
        category: str = "system",
        related_id: int | None = None,
        related_type: str = "",
        action_url: str = "",
        source: ScheduledNotification | None = None,
        subcategory: str = "",
        priority: int = 3,
        expires_at: datetime | None = None,
    ) -> Notification | None:
        """Cria a notificação, ou devolve ``None`` se as preferências do usuário a bloquearem."""
        if not NotificationPreferenceService.permite(user, category, subcategory, priority):
            logger.debug("Notificação '%s' bloqueada pelas preferências do usuário %s", title, user.pk)
            return None
        return Notification.objects.create(
            user=user,
            title=title,
            message=message,
            type=type,
            category=category,
            subcategory=subcategory or "",
            priority=priority,
            expires_at=expires_at,
            related_id=related_id,
            related_type=related_type,
            action_url=action_url or "",
            source=source,
        )

    @staticmethod
    def criar_de_template(user, template_key: str, contexto: dict[str, Any], **extras) -> Notification | None:
        campos = NotificationTemplateService.montar(template_key, contexto)
        campos.update({chave: valor for chave, valor in extras.items() if valor is not None})
        return NotificationService.criar(user=user, **campos)

    @staticmethod
    def obter_do_usuario(user, notification_id) -> Notification:
        try:
            return Notification.objects.get(pk=int(notification_id), user=user)
        except (Notification.DoesNotExist, TypeError, ValueError) as exc:
            raise RecursoNaoEncontradoError("Notificação não encontrada") from exc

    @staticmethod
    def marcar_todas_como_lidas(user) -> int:
        return Notification.objects.filter(user=user, is_read=False).update(
            is_read=True, read_at=timezone.now(), updated_at=timezone.now()
        )

    @staticmethod
    def arquivar(user, notification_id) -> Notification:
        notification = NotificationService.obter_do_usuario(user, notification_id)
        if not notification.is_archived:
            notification.is_archived = True
            notification.save(update_fields=["is_archived", "updated_at"])
        return notification

    @staticmethod
    def resumo(user, now: datetime | None = None) -> dict[str, Any]:
        """Totais do usuário e contagem por categoria; arquivadas ficam de fora e expiradas não contam como não lidas."""
        now = now or timezone.now()
        visiveis = Notification.objects.filter(user=user, is_archived=False)
        nao_lidas = visiveis.filter(is_read=False).filter(Q(expires_at__isnull=True) | Q(expires_at__gt=now))
        por_categoria = {
            linha["category"]: {"category": linha["category"], "total": linha["total"], "unread": 0}
            for linha in visiveis.values("category").annotate(total=Count("id")).order_by("category")
        }
        for linha in nao_lidas.values("category").annotate(total=Count("id")):
            por_categoria[linha["category"]]["unread"] = linha["total"]
        return {
            "totals": {
                "total": visiveis.count(),
                "unread": nao_lidas.count(),
                "urgent": nao_lidas.filter(priority=1).count(),
            },
            "byCategory": list(por_categoria.values()),
        }


class PendencyNotificationService:
    @staticmethod
    def criar(
        imovel,
        notification_type: str,
        severity: str,
        title: str,
        message: str,
        requirement=None,
        user=None,
        action_url: str = "",
        auto_resolve_at: datetime | None = None,
        metadata: dict[str, Any] | None = None,
        subcategory: str = "pendency",
        expires_at: datetime | None = None,
    ) -> PendencyNotification:
        """Cria (ou atualiza, se já houver uma aberta) a notificação de pendência.

        Só há deduplicação quando a notificação se refere a um requisito.
        Uma criação nova gera também a notificação geral correspondente, a
        menos que as preferências do usuário a bloqueiem.
        """
        user = user or imovel.user
        if requirement is not None:
            existente = (
                PendencyNotification.objects.filter(
                    property=imovel,
                    requirement=requirement,
                    notification_type=notification_type,
                    is_resolved=False,
                )
                .order_by("-created_at")
                .first()
            )
            if existente is not None:
                existente.title = title
                existente.message = message
                existente.severity = severity
                existente.metadata = metadata or {}
                existente.save(update_fields=["title", "message", "severity", "metadata", "updated_at"])
                return existente

        with transaction.atomic():
            geral = NotificationService.criar(
                user=user,
                title=title,
                message=message,
                type=SEVERIDADE_PARA_TIPO.get(severity, "info"),
                category="property",
                subcategory=subcategory,
                priority=SEVERIDADE_PARA_PRIORIDADE.get(severity, 3),
                expires_at=expires_at,
                related_id=imovel.pk,
                related_type="property",
                action_url=action_url,
            )
            return PendencyNotification.objects.create(
                property=imovel,
                requirement=requirement,
                user=user,
                notification_type=notification_type,
                severity=severity,
                title=title,
                message=message,
                action_url=action_url or "",
                auto_resolve_at=auto_resolve_at,
                metadata=metadata or {},
                notification=geral,
            )

    @staticmethod
    def notificar_estagio_avancado(imovel, from_stage: int, to_stage: int, overridden: bool = False, reason: str = ""):
        origem, destino = nome_do_estagio(from_stage), nome_do_estagio(to_stage)
        textos = NotificationTemplateService.montar(
            "pendency_stage_advanced",
            {
                "sequence_number": imovel.sequence_number,
                "from_stage_name": origem,
                "to_stage_name": destino,
                "overridden": overridden,
            },
        )
        horas = int(getattr(settings, "PENDENCY_NOTIFICATION_AUTO_RESOLVE_HOURS", 24))
        return PendencyNotificationService.criar(
            imovel,
            "STAGE_ADVANCED",
            "MEDIUM" if overridden else "LOW",
            textos["title"],
            textos["message"],
            action_url=f"/property/{imovel.pk}",
            auto_resolve_at=timezone.now() + timedelta(hours=horas),
            metadata={
                "fromStage": from_stage,
                "toStage": to_stage,
                "fromStageName": origem,
                "toStageName": destino,
                "advancementType": "OVERRIDE" if overridden else "MANUAL",
                "reason": reason,
            },
            subcategory=textos["subcategory"],
            expires_at=textos["expires_at"],
        )

    @staticmethod
    def notificar_estagio_bloqueado(imovel, stage: int, blocking: list[dict[str, Any]]):
        nome = nome_do_estagio(stage)
        textos = NotificationTemplateService.montar(
            "pendency_stage_blocked",
            {"sequence_number": imovel.sequence_number, "stage_name": nome, "blocking_count": len(blocking)},
        )
        return PendencyNotificationService.criar(
            imovel,
            "STAGE_BLOCKED",
            "HIGH",
            textos["title"],
            textos["message"],
            action_url=f"/property/{imovel.pk}/stage/{stage}",
            metadata={
                "stageId": stage,
                "stageName": nome,
                "blockingCount": len(blocking),
                "blockingKeys": [item.get("requirementKey") for item in blocking],
            },
            subcategory=textos["subcategory"],
            expires_at=textos["expires_at"],
        )

    @staticmethod
    def notificar_validacao_falhou(imovel, requirement, motivo: str = ""):
        textos = NotificationTemplateService.montar(
            "pendency_validation_failed",
            {
                "sequence_number": imovel.sequence_number,
                "requirement_name": requirement.requirement_name,
                "motivo": motivo,
            },
        )
        return PendencyNotificationService.criar(
            imovel,
            "VALIDATION_FAILED",
            "HIGH" if requirement.is_critical else "MEDIUM",
            textos["title"],
            textos["message"],
            requirement=requirement,
            action_url=f"/property/{imovel.pk}/stage/{requirement.stage}",
            metadata={"requirementKey": requirement.requirement_key, "stageId": requirement.stage},
            subcategory=textos["subcategory"],
            expires_at=textos["expires_at"],
        )

    @staticmethod
    def notificar_pendencias_criticas(imovel, stage: int | None = None) -> list[PendencyNotification]:
        """Uma notificação CRITICAL_PENDENCY por requisito crítico em aberto no estágio."""
        from pendencias.models import PropertyRequirement, StageRequirement

        stage = stage or imovel.current_stage
        concluidos = set(
            PropertyRequirement.objects.filter(property=imovel, status="completed").values_list(
                "requirement_id", flat=True
            )
        )
        criadas = []
        for req in StageRequirement.objects.filter(stage=stage, priority="critical", is_active=True):
            if req.pk in concluidos or not req.aplica_ao_tipo(imovel.type):
                continue
            textos = NotificationTemplateService.montar(
                "pendency_critical",
                {"sequence_number": imovel.sequence_number, "requirement_name": req.requirement_name},
            )
            criadas.append(
                PendencyNotificationService.criar(
                    imovel,
                    "CRITICAL_PENDENCY",
                    "HIGH",
                    textos["title"],
                    textos["message"],
                    requirement=req,
                    action_url=f"/property/{imovel.pk}/stage/{stage}",
                    metadata={"stageId": stage, "requirementKey": req.requirement_key, "category": req.category},
                    subcategory=textos["subcategory"],
                    expires_at=textos["expires_at"],
                )
            )
        return criadas

    @staticmethod
    def notificar_documento_faltante(imovel, document_type: str, obrigatorio: bool = True):
        textos = NotificationTemplateService.montar(
            "pendency_missing_document",
            {"sequence_number": imovel.sequence_number, "document_type": document_type, "obrigatorio": obrigatorio},
        )
        return PendencyNotificationService.criar(
            imovel,
            "MISSING_DOCUMENT",
            "HIGH" if obrigatorio else "MEDIUM",
            textos["title"],
            textos["message"],
            action_url=f"/property/{imovel.pk}/documents",
            metadata={"documentType": document_type, "isRequired": obrigatorio},
            subcategory=textos["subcategory"],
            expires_at=textos["expires_at"],
        )

    @staticmethod
    def resolver_por_requisito(imovel, requirement) -> int:
        return PendencyNotification.objects.filter(
            property=imovel, requirement=requirement, is_resolved=False
        ).update(is_resolved=True, resolved_at=timezone.now(), updated_at=timezone.now())

    @staticmethod
    def obter_do_usuario(user, notification_id) -> PendencyNotification:
        try:
            return PendencyNotification.objects.get(pk=int(notification_id), user=user)
        except (PendencyNotification.DoesNotExist, TypeError, ValueError) as exc:
            raise RecursoNaoEncontradoError("Notificação não encontrada") from exc

    @staticmethod
    def resolver(notification: PendencyNotification, user=None) -> PendencyNotification:
        if not notification.is_resolved:
            notification.is_resolved = True
            notification.resolved_at = timezone.now()
            notification.metadata = {**notification.metadata, "resolvedBy": getattr(user, "pk", None)}
            notification.save(update_fields=["is_resolved", "resolved_at", "metadata", "updated_at"])
        return notification

    @staticmethod
    def marcar_como_lida(notification: PendencyNotification) -> PendencyNotification:
        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read", "updated_at"])
        return notification

    @staticmethod
    def resolver_expiradas(now: datetime | None = None) -> int:
        now = now or timezone.now()
        return PendencyNotification.objects.filter(is_resolved=False, auto_resolve_at__lte=now).update(
            is_resolved=True, resolved_at=now, updated_at=now
        )

    @staticmethod
    def ordenar_por_severidade(notificacoes):
        """Mais grave primeiro; dentro da mesma severidade, mais recente primeiro."""
        rank = PendencyNotification.SEVERITY_RANK
        return sorted(notificacoes, key=lambda n: (-rank.get(n.severity, 0), -n.created_at.timestamp(), -n.pk))


class ScheduledNotificationService:
    @staticmethod
    def agendar(
        user,
        related_type: str,
        related_id: int,
        title: str,
        message: str,
        scheduled_for: datetime,
        notification_type: str = "in_app",
        metadata: dict[str, Any] | None = None,
    ) -> ScheduledNotification:
        return ScheduledNotification.objects.create(
            user=user,
            related_type=related_type,
            related_id=related_id,
            title=title,
            message=message or "",
            scheduled_for=scheduled_for,
            notification_type=notification_type,
            metadata=metadata or {},
        )

    @staticmethod
    def cancelar(notification_id, user) -> ScheduledNotification:
        try:
            agendada = ScheduledNotification.objects.get(pk=int(notification_id), user=user)
        except (ScheduledNotification.DoesNotExist, TypeError, ValueError) as exc:
            raise RecursoNaoEncontradoError("Notificação agendada não encontrada") from exc
        if agendada.status not in STATUS_CANCELAVEIS:
            raise TransicaoInvalidaError(f"Notificação com status '{agendada.status}' não pode ser cancelada")
        agendada.status = "cancelled"
        agendada.save(update_fields=["status", "updated_at"])
        return agendada

    @staticmethod
    def cancelar_por_origem(related_type: str, related_id: int) -> int:
        return ScheduledNotification.objects.filter(
            related_type=related_type, related_id=related_id, status__in=STATUS_CANCELAVEIS
        ).update(status="cancelled", updated_at=timezone.now())

    @staticmethod
    def atualizar_por_origem(related_type: str, related_id: int, **campos) -> int:
        """Reescreve título, mensagem ou metadados das linhas ainda pendentes de uma origem."""
        return ScheduledNotification.objects.filter(
            related_type=related_type, related_id=related_id, status="pending"
        ).update(**campos, updated_at=timezone.now())

    @staticmethod
    def _entregar(agendada: ScheduledNotification, now: datetime) -> bool:
        """Entrega a notificação agendada; ``False`` quando as preferências do usuário a bloqueiam."""
        if not Notification.objects.filter(source=agendada).exists():
            meta = agendada.metadata or {}
            expira = meta.get("expiresAt")
            entregue = NotificationService.criar(
                user=agendada.user,
                title=agendada.title,
                message=agendada.message,
                type=meta.get("notificationType", "info"),
                category=meta.get("category", "crm"),
                subcategory=meta.get("subcategory", "reminder" if agendada.related_type == "client_note" else ""),
                priority=int(meta.get("notificationPriority", 3)),
                expires_at=datetime.fromisoformat(expira) if expira else None,
                related_id=agendada.related_id,
                related_type=agendada.related_type,
                action_url=meta.get("actionUrl", ""),
                source=agendada,
            )
            if entregue is None:
                agendada.status = "cancelled"
                agendada.failure_reason = "Bloqueada pelas preferências do usuário"
                agendada.save(update_fields=["status", "failure_reason", "updated_at"])
                return False
        agendada.status = "sent"
        agendada.sent_at = now
        agendada.failure_reason = ""
        agendada.save(update_fields=["status", "sent_at", "failure_reason", "updated_at"])
        return True

    @staticmethod
    def processar_pendentes(batch_size: int | None = None, now: datetime | None = None) -> dict[str, int]:
        """Varredura: entrega as notificações agendadas vencidas.

        As linhas são reivindicadas com ``select_for_update(skip_locked=True)``
        para que varreduras concorrentes nunca processem a mesma linha. Cada
        entrega roda num savepoint; falhas marcam a linha como ``failed`` e
        ela volta a ser tentada na próxima varredura.
        Linhas bloqueadas pelas preferências do usuário viram ``cancelled``.
        """
        now = now or timezone.now()
        limite = batch_size or int(getattr(settings, "NOTIFICATIONS_SWEEP_BATCH_SIZE", 100))
        totais = {"processed": 0, "sent": 0, "failed": 0}

        with transaction.atomic():
            lote = list(
                ScheduledNotification.objects.select_for_update(skip_locked=True)
                .select_related("user")
                .filter(status__in=STATUS_REPROCESSAVEIS, scheduled_for__lte=now)
                .order_by("scheduled_for", "id")[:limite]
            )
            for agendada in lote:
                totais["processed"] += 1
                try:
                    with transaction.atomic():
                        enviada = ScheduledNotificationService._entregar(agendada, now)
                except Exception as exc:  # noqa: BLE001 - falha de uma entrega não interrompe o lote
                    agendada.status = "failed"
                    agendada.failure_reason = str(exc)[:1000]
                    agendada.retry_count += 1
                    agendada.save(update_fields=["status", "failure_reason", "retry_count", "updated_at"])
                    totais["failed"] += 1
                    NOTIFICACOES_AGENDADAS_TOTAL.labels(resultado="failed").inc()
                    logger.warning("Falha ao entregar notificação agendada %s: %s", agendada.pk, exc)
                else:
                    if enviada:
                        totais["sent"] += 1
                    NOTIFICACOES_AGENDADAS_TOTAL.labels(resultado="sent" if enviada else "blocked").inc()

        if totais["processed"]:
            logger.info(
                "Varredura de notificações agendadas: processadas=%s enviadas=%s falhas=%s",
                totais["processed"],
                totais["sent"],
                totais["failed"],
            )
        return totais
