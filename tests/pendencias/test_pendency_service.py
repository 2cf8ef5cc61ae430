"""Testes do motor de pendências: validação por estágio, métricas e regras automáticas."""

from decimal import Decimal

import pytest

from imoveis.models import PropertyDocument, PropertyOwner
from pendencias.models import PropertyRequirement, StageCompletionMetric, StageRequirement
from pendencias.rules import ValidationContext, aplicar_regra
from pendencias.services import PendencyService, percentual
from shared.exceptions import RecursoNaoEncontradoError, TransicaoInvalidaError


def _requisito(stage=1, key="DOC", priority="critical", **extra):
    return StageRequirement.objects.create(
        stage=stage,
        requirement_key=key,
        requirement_name=key.title(),
        category=extra.pop("category", "document"),
        priority=priority,
        **extra,
    )


def test_percentual_arredonda_e_trata_total_zero():
    assert percentual(0, 0) == 100
    assert percentual(1, 3) == 33
    assert percentual(2, 3) == 67
    assert percentual(1, 2) == 50


@pytest.mark.django_db
def test_sem_requisitos_pode_avancar(property_factory):
    imovel = property_factory()
    result = PendencyService.validar_estagio(imovel).to_dict()
    assert result["canAdvance"] is True
    assert result["completionPercentage"] == 100
    assert result["criticalCompletionPercentage"] == 100
    assert result["blockingRequirements"] == []


@pytest.mark.django_db
def test_requisito_critico_pendente_bloqueia(property_factory):
    req = _requisito()
    _requisito(key="OPCIONAL", priority="low")
    imovel = property_factory()

    result = PendencyService.validar_estagio(imovel)
    assert result.can_advance is False
    assert result.total_requirements == 2
    assert result.completion_percentage == 0
    assert [item["requirementKey"] for item in result.blocking_requirements] == [req.requirement_key]
    assert len(result.pending_requirements) == 2
    assert result.pending_critical_count == 1
    assert result.pending_non_critical_count == 1


@pytest.mark.django_db
def test_nao_critico_pendente_nao_bloqueia(property_factory):
    _requisito(key="OPCIONAL", priority="high")
    imovel = property_factory()
    result = PendencyService.validar_estagio(imovel)
    assert result.can_advance is True
    assert result.completion_percentage == 0
    assert result.warnings


@pytest.mark.django_db
def test_requisito_sem_linha_conta_como_pendente(property_factory):
    imovel = property_factory()
    _requisito(key="TARDIO")
    assert not PropertyRequirement.objects.filter(property=imovel).exists()
    result = PendencyService.validar_estagio(imovel)
    assert result.can_advance is False
    assert result.blocking_requirements[0]["id"] is None


@pytest.mark.django_db
def test_requisito_bloqueado_nunca_conta_como_concluido(property_factory):
    _requisito()
    imovel = property_factory()
    pr = PropertyRequirement.objects.get(property=imovel)
    PendencyService.atualizar_requisito(imovel, pr.pk, status="blocked")
    assert PendencyService.validar_estagio(imovel).can_advance is False


@pytest.mark.django_db
def test_inicializar_requisitos_filtra_tipo_e_e_idempotente(property_factory):
    _requisito(key="GERAL")
    _requisito(key="SO_TERRENO", property_types="terreno")
    _requisito(stage=2, key="DILIGENCE", property_types="apartamento,casa")
    _requisito(key="INATIVO", is_active=False)
    imovel = property_factory()

    chaves = set(PropertyRequirement.objects.filter(property=imovel).values_list("requirement__requirement_key", flat=True))
    assert chaves == {"GERAL", "DILIGENCE"}
    assert PendencyService.inicializar_requisitos(imovel) == 0
    assert StageCompletionMetric.objects.filter(property=imovel).count() == 8


@pytest.mark.django_db
def test_concluir_requisito_atualiza_metrica(property_factory, user):
    _requisito()
    imovel = property_factory()
    pr = PropertyRequirement.objects.get(property=imovel)

    atualizado = PendencyService.atualizar_requisito(imovel, pr.pk, status="completed", actor=user)
    assert atualizado.completed_by == user
    assert atualizado.completed_at is not None

    metric = StageCompletionMetric.objects.get(property=imovel, stage=1)
    assert metric.can_advance is True
    assert metric.completion_percentage == 100
    assert metric.blocking_count == 0

    reaberto = PendencyService.atualizar_requisito(imovel, pr.pk, status="in_progress")
    assert reaberto.completed_at is None
    assert reaberto.completed_by is None
    metric.refresh_from_db()
    assert metric.can_advance is False


@pytest.mark.django_db
def test_atualizar_requisito_rejeita_status_e_escopo(property_factory, other_user):
    _requisito()
    imovel = property_factory()
    alheio = property_factory(owner=other_user)
    pr = PropertyRequirement.objects.get(property=imovel)
    with pytest.raises(TransicaoInvalidaError):
        PendencyService.atualizar_requisito(imovel, pr.pk, status="done")
    with pytest.raises(RecursoNaoEncontradoError):
        PendencyService.atualizar_requisito(alheio, pr.pk, status="completed")


@pytest.mark.django_db
def test_validar_estagio_invalido(property_factory):
    imovel = property_factory()
    with pytest.raises(TransicaoInvalidaError):
        PendencyService.validar_estagio(imovel, 9)


@pytest.mark.django_db
def test_revalidar_promove_somente_quando_todas_as_regras_passam(property_factory):
    _requisito(
        key="DOCS_PROPRIETARIO",
        validation_rules=[
            {"type": "required_field", "field": "owners"},
            {"type": "document_uploaded", "document_type": "MATRICULA"},
        ],
    )
    _requisito(key="MANUAL")
    imovel = property_factory()

    assert PendencyService.revalidar_regras(imovel) == []
    pr = PropertyRequirement.objects.get(property=imovel, requirement__requirement_key="DOCS_PROPRIETARIO")
    assert pr.status == "pending"
    assert pr.validation_data["rulesApplied"] == 2
    assert pr.validation_data["rulesPassed"] == 0
    assert pr.last_checked_at is not None

    PropertyOwner.objects.create(property=imovel, full_name="João", cpf="52998224725", phone="21999990000")
    PropertyDocument.objects.create(
        property=imovel, name="Matrícula", type="MATRICULA", url="https://docs.example.com/m.pdf"
    )
    promovidos = PendencyService.revalidar_regras(imovel)
    assert [p.requirement.requirement_key for p in promovidos] == ["DOCS_PROPRIETARIO"]
    pr.refresh_from_db()
    assert pr.status == "completed"
    manual = PropertyRequirement.objects.get(property=imovel, requirement__requirement_key="MANUAL")
    assert manual.status == "pending"


@pytest.mark.django_db
def test_revalidar_nunca_rebaixa_nem_mexe_em_bloqueado(property_factory):
    _requisito(key="VALOR", validation_rules=[{"type": "min_value", "field": "value", "value": 1000}])
    imovel = property_factory()
    pr = PropertyRequirement.objects.get(property=imovel)
    PendencyService.atualizar_requisito(imovel, pr.pk, status="blocked")
    assert PendencyService.revalidar_regras(imovel) == []
    pr.refresh_from_db()
    assert pr.status == "blocked"


@pytest.mark.django_db
def test_regras_individuais(property_factory):
    imovel = property_factory(value=Decimal("50000.00"))
    ctx = ValidationContext.carregar(imovel)

    assert aplicar_regra({"type": "required_field", "field": "street"}, ctx).passed is True
    assert aplicar_regra({"type": "required_field", "field": "complement"}, ctx).passed is False
    assert aplicar_regra({"type": "min_value", "field": "value", "value": 100000}, ctx).passed is False
    assert aplicar_regra({"type": "max_value", "field": "value", "value": 100000}, ctx).passed is True
    assert aplicar_regra({"type": "dependent_stage", "stage": 2}, ctx).passed is False
    assert aplicar_regra({"type": "custom_function", "validator": "valueAbove100k"}, ctx).passed is False

    desconhecido = aplicar_regra({"type": "custom_function", "validator": "eval"}, ctx)
    assert desconhecido.passed is False
    assert "desconhecido" in desconhecido.message
    assert aplicar_regra({"type": "sql"}, ctx).passed is False

    custom = aplicar_regra({"type": "required_field", "field": "complement", "message": "Informe o complemento"}, ctx)
    assert custom.message == "Informe o complemento"


@pytest.mark.django_db
def test_resumo_pendencias(property_factory):
    _requisito(stage=2, key="CRITICO_2")
    imovel = property_factory()
    resumo = PendencyService.resumo_pendencias(imovel)
    assert resumo["currentStage"] == 1
    assert len(resumo["stageMetrics"]) == 8
    assert [c["requirementKey"] for c in resumo["criticalPendencies"]] == ["CRITICO_2"]
    assert resumo["recentActivity"] == []


@pytest.mark.django_db
def test_requisito_expoe_imovel_e_is_completed(property_factory):
    req = _requisito()
    imovel = property_factory()
    pr = PropertyRequirement.objects.get(property=imovel, requirement=req)
    assert pr.property == imovel
    assert pr.is_completed is False
    pr.status = "completed"
    assert pr.is_completed is True
