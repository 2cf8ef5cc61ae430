"""Serviços do motor de pendências e do avanço de estágio.

Concentram as regras de validação por estágio, a atualização de requisitos
e o fluxo de avanço (com bloqueio por pendências críticas, override e
histórico). O avanço grava log e estágio numa única transação.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from django.db import transaction
from django.utils import timezone

from imoveis.models import Property
from imoveis.stages import ESTAGIOS, nome_do_estagio, slug_do_estagio, validar_estagio_numero
from notifications.services import PendencyNotificationService
from shared.exceptions import PendenciasBloqueantesError, RecursoNaoEncontradoError, TransicaoInvalidaError
from shared.metrics import AVANCOS_ESTAGIO_TOTAL

from .models import PropertyRequirement, StageAdvancementLog, StageCompletionMetric, StageRequirement
from .rules import ValidationContext, avaliar_regras

logger = logging.getLogger(__name__)

STATUS_REQUISITO = {choice for choice, _ in PropertyRequirement.STATUS_CHOICES}
# Status elegíveis para promoção pela validação automática
STATUS_PROMOVIVEIS = ("pending", "in_progress")


def percentual(parte: int, total: int) -> int:
    if total == 0:
        return 100
    return int((Decimal(parte) * 100 / Decimal(total)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass
class PendencyValidationResult:
    property_id: int
    stage: int
    can_advance: bool
    total_requirements: int
    completed_requirements: int
    critical_requirements: int
    completed_critical: int
    completion_percentage: int
    critical_completion_percentage: int
    pending_requirements: list[dict[str, Any]] = field(default_factory=list)
    blocking_requirements: list[dict[str, Any]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def pending_critical_count(self) -> int:
        return self.critical_requirements - self.completed_critical

    @property
    def pending_non_critical_count(self) -> int:
        return self.total_requirements - self.completed_requirements - self.pending_critical_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "propertyId": self.property_id,
            "stage": self.stage,
            "stageName": nome_do_estagio(self.stage),
            "canAdvance": self.can_advance,
            "totalRequirements": self.total_requirements,
            "completedRequirements": self.completed_requirements,
            "criticalRequirements": self.critical_requirements,
            "completedCritical": self.completed_critical,
            "completionPercentage": self.completion_percentage,
            "criticalCompletionPercentage": self.critical_completion_percentage,
            "pendingRequirements": self.pending_requirements,
            "blockingRequirements": self.blocking_requirements,
            "warnings": self.warnings,
        }


def _requisitos_aplicaveis(imovel: Property, stage: int | None = None) -> list[StageRequirement]:
    qs = StageRequirement.objects.filter(is_active=True)
    if stage is not None:
        qs = qs.filter(stage=stage)
    return [req for req in qs.order_by("stage", "order", "id") if req.aplica_ao_tipo(imovel.type)]


def _item_pendente(req: StageRequirement, pr: PropertyRequirement | None) -> dict[str, Any]:
    return {
        "id": pr.pk if pr else None,
        "requirementId": req.pk,
        "requirementKey": req.requirement_key,
        "requirementName": req.requirement_name,
        "category": req.category,
        "priority": req.priority,
        "status": pr.status if pr else "pending",
        "notes": pr.notes if pr else "",
        "dueDate": pr.due_date.isoformat() if pr and pr.due_date else None,
    }


class PendencyService:
    @staticmethod
    def validar_estagio(imovel: Property, stage: int | None = None) -> PendencyValidationResult:
        """Calcula a situação de um estágio e atualiza o snapshot de métricas.

        Requisito sem linha em PropertyRequirement conta como pendente e
        ``blocked`` nunca conta como concluído. Só pendências críticas
        impedem o avanço.
        """
        stage = validar_estagio_numero(imovel.current_stage if stage is None else stage)
        requisitos = _requisitos_aplicaveis(imovel, stage)
        existentes = {
            pr.requirement_id: pr
            for pr in PropertyRequirement.objects.filter(property=imovel, requirement__in=requisitos)
        }

        total = len(requisitos)
        concluidos = 0
        criticos = 0
        criticos_concluidos = 0
        pendentes: list[dict[str, Any]] = []
        bloqueantes: list[dict[str, Any]] = []
        for req in requisitos:
            pr = existentes.get(req.pk)
            completo = pr is not None and pr.is_completed
            if req.is_critical:
                criticos += 1
            if completo:
                concluidos += 1
                if req.is_critical:
                    criticos_concluidos += 1
                continue
            item = _item_pendente(req, pr)
            pendentes.append(item)
            if req.is_critical:
                bloqueantes.append(item)

        warnings = []
        if pendentes:
            warnings.append(f"{len(pendentes)} pendências restantes")
        if bloqueantes:
            warnings.append(f"{len(bloqueantes)} pendências críticas restantes")

        result = PendencyValidationResult(
            property_id=imovel.pk,
            stage=stage,
            can_advance=not bloqueantes,
            total_requirements=total,
            completed_requirements=concluidos,
            critical_requirements=criticos,
            completed_critical=criticos_concluidos,
            completion_percentage=percentual(concluidos, total),
            critical_completion_percentage=percentual(criticos_concluidos, criticos),
            pending_requirements=pendentes,
            blocking_requirements=bloqueantes,
            warnings=warnings,
        )
        PendencyService._gravar_metrica(imovel, result)
        return result

    @staticmethod
    def _gravar_metrica(imovel: Property, result: PendencyValidationResult) -> StageCompletionMetric:
        metric, _ = StageCompletionMetric.objects.update_or_create(
            property=imovel,
            stage=result.stage,
            defaults={
                "total_requirements": result.total_requirements,
                "completed_requirements": result.completed_requirements,
                "critical_requirements": result.critical_requirements,
                "completed_critical": result.completed_critical,
                "completion_percentage": result.completion_percentage,
                "critical_completion_percentage": result.critical_completion_percentage,
                "can_advance": result.can_advance,
                "blocking_count": len(result.blocking_requirements),
            },
        )
        return metric

    @staticmethod
    def atualizar_metricas(imovel: Property) -> list[PendencyValidationResult]:
        return [PendencyService.validar_estagio(imovel, numero) for numero, _, _ in ESTAGIOS]

    @staticmethod
    def inicializar_requisitos(imovel: Property) -> int:
        """Cria os PropertyRequirements pendentes do imóvel (idempotente)."""
        criados = 0
        for req in _requisitos_aplicaveis(imovel):
            _, created = PropertyRequirement.objects.get_or_create(
                property=imovel, requirement=req, defaults={"status": "pending"}
            )
            criados += int(created)
        PendencyService.atualizar_metricas(imovel)
        if criados:
            logger.info("Imóvel %s: %s requisitos inicializados", imovel.pk, criados)
        return criados

    @staticmethod
    def obter_requisito(imovel: Property, property_requirement_id) -> PropertyRequirement:
        try:
            return PropertyRequirement.objects.select_related("requirement").get(
                pk=int(property_requirement_id), property=imovel
            )
        except (PropertyRequirement.DoesNotExist, TypeError, ValueError) as exc:
            raise RecursoNaoEncontradoError("Requisito não encontrado") from exc

    @staticmethod
    def atualizar_requisito(
        imovel: Property,
        property_requirement_id,
        status: str | None = None,
        notes: str | None = None,
        due_date=None,
        assigned_to=None,
        actor=None,
    ) -> PropertyRequirement:
        pr = PendencyService.obter_requisito(imovel, property_requirement_id)
        status_anterior = pr.status
        if status is not None:
            if status not in STATUS_REQUISITO:
                raise TransicaoInvalidaError(f"Status de requisito inválido: {status}")
            pr.status = status
        if notes is not None:
            pr.notes = notes
        if due_date is not None:
            pr.due_date = due_date
        if assigned_to is not None:
            pr.assigned_to = assigned_to

        if pr.status == "completed" and status_anterior != "completed":
            pr.completed_at = timezone.now()
            pr.completed_by = actor if getattr(actor, "pk", None) else None
        elif pr.status != "completed":
            pr.completed_at = None
            pr.completed_by = None
        pr.save()

        PendencyService.validar_estagio(imovel, pr.requirement.stage)

        if pr.status == "completed" and status_anterior != "completed":
            PendencyNotificationService.resolver_por_requisito(imovel, pr.requirement)
        elif pr.status == "blocked" and status_anterior != "blocked" and pr.requirement.is_critical:
            PendencyNotificationService.notificar_validacao_falhou(imovel, pr.requirement, motivo=pr.notes)
        logger.info(
            "Requisito %s do imóvel %s: %s -> %s", pr.requirement.requirement_key, imovel.pk, status_anterior, pr.status
        )
        return pr

    @staticmethod
    def revalidar_regras(imovel: Property, stage: int | None = None) -> list[PropertyRequirement]:
        """Avalia as regras configuradas e promove requisitos que passam em todas.

        Nunca rebaixa status e ignora requisitos bloqueados ou sem regras.
        Retorna os requisitos promovidos a ``completed``.
        """
        if stage is not None:
            validar_estagio_numero(stage)
        ctx = ValidationContext.carregar(imovel)
        agora = timezone.now()
        promovidos: list[PropertyRequirement] = []
        estagios = set()
        for req in _requisitos_aplicaveis(imovel, stage):
            if not req.validation_rules:
                continue
            pr, _ = PropertyRequirement.objects.get_or_create(
                property=imovel, requirement=req, defaults={"status": "pending"}
            )
            if pr.status not in STATUS_PROMOVIVEIS:
                continue
            resultados = avaliar_regras(req.validation_rules, ctx)
            aprovados = sum(1 for r in resultados if r.passed)
            pr.validation_data = {
                "rulesApplied": len(resultados),
                "rulesPassed": aprovados,
                "ruleResults": [r.as_dict() for r in resultados],
                "lastValidated": agora.isoformat(),
            }
            pr.last_checked_at = agora
            if resultados and aprovados == len(resultados):
                pr.status = "completed"
                pr.completed_at = agora
                promovidos.append(pr)
            pr.save()
            estagios.add(req.stage)

        for numero in sorted(estagios):
            PendencyService.validar_estagio(imovel, numero)
        for pr in promovidos:
            PendencyNotificationService.resolver_por_requisito(imovel, pr.requirement)
        if promovidos:
            logger.info("Imóvel %s: %s requisitos concluídos por validação automática", imovel.pk, len(promovidos))
        return promovidos

    @staticmethod
    def resumo_pendencias(imovel: Property) -> dict[str, Any]:
        metricas = []
        for result in PendencyService.atualizar_metricas(imovel):
            metricas.append(
                {
                    "stage": result.stage,
                    "stageName": nome_do_estagio(result.stage),
                    "totalRequirements": result.total_requirements,
                    "completedRequirements": result.completed_requirements,
                    "completionPercentage": result.completion_percentage,
                    "canAdvance": result.can_advance,
                    "blockingCount": len(result.blocking_requirements),
                }
            )

        logs = StageAdvancementLog.objects.filter(property=imovel).select_related("user")[:10]
        atividade = [
            {
                "id": log.pk,
                "fromStage": log.from_stage,
                "toStage": log.to_stage,
                "advancementType": log.advancement_type,
                "validationStatus": log.validation_status,
                "overridden": log.overridden,
                "overrideReason": log.override_reason,
                "user": log.user_id,
                "createdAt": log.created_at.isoformat(),
            }
            for log in logs
        ]

        existentes = {pr.requirement_id: pr for pr in PropertyRequirement.objects.filter(property=imovel)}
        criticas = []
        for req in _requisitos_aplicaveis(imovel):
            pr = existentes.get(req.pk)
            if not req.is_critical or (pr is not None and pr.is_completed):
                continue
            criticas.append(
                {
                    "stage": req.stage,
                    "stageName": nome_do_estagio(req.stage),
                    "requirementKey": req.requirement_key,
                    "requirementName": req.requirement_name,
                    "category": req.category,
                    "status": pr.status if pr else "pending",
                    "notes": pr.notes if pr else "",
                }
            )

        return {
            "propertyId": imovel.pk,
            "currentStage": imovel.current_stage,
            "currentStageName": nome_do_estagio(imovel.current_stage),
            "stageMetrics": metricas,
            "recentActivity": atividade,
            "criticalPendencies": criticas,
        }


@dataclass
class AdvancementOutcome:
    property: Property
    log: StageAdvancementLog
    validation: PendencyValidationResult


class StageAdvancementService:
    @staticmethod
    def avancar_estagio(
        imovel: Property,
        target_stage: int,
        actor=None,
        force: bool = False,
        reason: str | None = None,
        metadata: dict | None = None,
    ) -> AdvancementOutcome:
        """Move o imóvel para ``target_stage`` validando o estágio atual.

        Com pendências críticas e sem ``force`` levanta
        ``PendenciasBloqueantesError`` sem gravar nada. Repetir o avanço para
        o estágio atual não muda o estágio mas gera novo registro no log.
        """
        validar_estagio_numero(target_stage)
        try:
            with transaction.atomic():
                bloqueado = Property.objects.select_for_update().get(pk=imovel.pk)
                from_stage = bloqueado.current_stage
                result = PendencyService.validar_estagio(bloqueado, from_stage)
                if not result.can_advance and not force:
                    raise PendenciasBloqueantesError(result.blocking_requirements, stage=from_stage)

                overridden = not result.can_advance
                log = StageAdvancementLog.objects.create(
                    property=bloqueado,
                    from_stage=from_stage,
                    to_stage=target_stage,
                    user=actor if getattr(actor, "pk", None) else None,
                    advancement_type="OVERRIDE" if overridden else "MANUAL",
                    validation_status="OVERRIDDEN" if overridden else "PASSED",
                    overridden=overridden,
                    pending_critical_count=result.pending_critical_count,
                    pending_non_critical_count=result.pending_non_critical_count,
                    completion_percentage=result.completion_percentage,
                    validation_results=result.to_dict(),
                    override_reason=(reason or "") if overridden else "",
                    metadata={**(metadata or {}), "force": force, **({"reason": reason} if reason else {})},
                )
                bloqueado.current_stage = target_stage
                bloqueado.status = slug_do_estagio(target_stage)
                bloqueado.save(update_fields=["current_stage", "status", "updated_at"])

                transaction.on_commit(
                    lambda: StageAdvancementService._apos_avanco(bloqueado, from_stage, target_stage, overridden, reason)
                )
        except PendenciasBloqueantesError as exc:
            AVANCOS_ESTAGIO_TOTAL.labels(resultado="bloqueado").inc()
            logger.info("Avanço do imóvel %s bloqueado por %s pendência(s) crítica(s)", imovel.pk, len(exc.blocking))
            PendencyNotificationService.notificar_estagio_bloqueado(imovel, exc.stage, exc.blocking)
            raise

        AVANCOS_ESTAGIO_TOTAL.labels(resultado="override" if overridden else "aprovado").inc()
        logger.info(
            "Imóvel %s avançou de %s para %s (%s)", imovel.pk, from_stage, target_stage, log.advancement_type
        )
        imovel.current_stage = bloqueado.current_stage
        imovel.status = bloqueado.status
        return AdvancementOutcome(property=bloqueado, log=log, validation=result)

    @staticmethod
    def _apos_avanco(imovel: Property, from_stage: int, to_stage: int, overridden: bool, reason: str | None) -> None:
        try:
            PendencyNotificationService.notificar_estagio_avancado(
                imovel, from_stage, to_stage, overridden=overridden, reason=reason or ""
            )
            PendencyService.validar_estagio(imovel, to_stage)
        except Exception:  # noqa: BLE001 - o avanço já foi confirmado
            logger.exception("Falha no pós-processamento do avanço do imóvel %s", imovel.pk)
