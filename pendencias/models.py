"""Modelos do motor de pendências e do histórico de avanço de estágio."""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.models import TimestampedModel
from imoveis.models import Property
from imoveis.stages import ESTAGIO_CHOICES, ESTAGIO_FINAL, ESTAGIO_INICIAL

STAGE_VALIDATORS = [MinValueValidator(ESTAGIO_INICIAL), MaxValueValidator(ESTAGIO_FINAL)]


class StageRequirement(TimestampedModel):
    """Requisito configurado para um estágio (catálogo estático)."""

    CATEGORY_CHOICES = [
        ("document", "Documento"),
        ("approval", "Aprovação"),
        ("payment", "Pagamento"),
        ("inspection", "Vistoria / Validação"),
        ("data", "Dados"),
    ]
    PRIORITY_CHOICES = [
        ("low", "Baixa"),
        ("medium", "Média"),
        ("high", "Alta"),
        ("critical", "Crítica"),
    ]

    stage = models.PositiveSmallIntegerField(choices=ESTAGIO_CHOICES, validators=STAGE_VALIDATORS, verbose_name="Estágio")
    requirement_key = models.CharField(max_length=64, unique=True, verbose_name="Chave")
    requirement_name = models.CharField(max_length=200, verbose_name="Nome")
    description = models.TextField(blank=True, default="", verbose_name="Descrição")
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, verbose_name="Categoria")
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default="medium", verbose_name="Prioridade")
    validation_rules = models.JSONField(default=list, blank=True, verbose_name="Regras de validação")
    # "*" ou lista separada por vírgula (ex.: "casa,terreno")
    property_types = models.CharField(max_length=200, default="*", verbose_name="Tipos de imóvel")
    is_active = models.BooleanField(default=True, verbose_name="Ativo")
    order = models.PositiveSmallIntegerField(default=0, verbose_name="Ordem")

    class Meta:
        verbose_name = "Requisito de estágio"
        verbose_name_plural = "Requisitos de estágio"
        ordering = ["stage", "order", "id"]

    def __str__(self):
        return f"[{self.stage}] {self.requirement_name}"

    @property
    def is_critical(self) -> bool:
        return self.priority == "critical"

    def aplica_ao_tipo(self, tipo: str) -> bool:
        tipos = [t.strip() for t in (self.property_types or "*").split(",") if t.strip()]
        return not tipos or "*" in tipos or tipo in tipos


class PropertyRequirement(TimestampedModel):
    STATUS_CHOICES = [
        ("pending", "Pendente"),
        ("in_progress", "Em andamento"),
        ("completed", "Concluído"),
        ("blocked", "Bloqueado"),
    ]

    # Definido antes do campo "property", que encobre o builtin no corpo da classe
    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="requirements", verbose_name="Imóvel")
    requirement = models.ForeignKey(
        StageRequirement,
        on_delete=models.CASCADE,
        related_name="property_requirements",
        verbose_name="Requisito",
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending", db_index=True)
    due_date = models.DateField(null=True, blank=True, verbose_name="Prazo")
    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="requisitos_atribuidos",
        verbose_name="Responsável",
    )
    completed_at = models.DateTimeField(null=True, blank=True, verbose_name="Concluído em")
    completed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="requisitos_concluidos",
        verbose_name="Concluído por",
    )
    notes = models.TextField(blank=True, default="", verbose_name="Observações")
    validation_data = models.JSONField(default=dict, blank=True, verbose_name="Resultado da validação")
    last_checked_at = models.DateTimeField(null=True, blank=True, verbose_name="Última verificação")

    class Meta:
        verbose_name = "Requisito do imóvel"
        verbose_name_plural = "Requisitos do imóvel"
        ordering = ["requirement__stage", "requirement__order", "id"]
        constraints = [
            models.UniqueConstraint(fields=["property", "requirement"], name="uniq_property_requirement"),
        ]

    def __str__(self):
        return f"{self.property_id} - {self.requirement.requirement_key} ({self.status})"


class StageCompletionMetric(models.Model):
    """Snapshot derivado da última validação de um estágio."""

    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="stage_metrics")
    stage = models.PositiveSmallIntegerField(choices=ESTAGIO_CHOICES, validators=STAGE_VALIDATORS)
    total_requirements = models.PositiveIntegerField(default=0)
    completed_requirements = models.PositiveIntegerField(default=0)
    critical_requirements = models.PositiveIntegerField(default=0)
    completed_critical = models.PositiveIntegerField(default=0)
    completion_percentage = models.PositiveSmallIntegerField(default=0)
    critical_completion_percentage = models.PositiveSmallIntegerField(default=0)
    can_advance = models.BooleanField(default=False)
    blocking_count = models.PositiveIntegerField(default=0)
    last_updated = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Métrica de estágio"
        verbose_name_plural = "Métricas de estágio"
        ordering = ["property", "stage"]
        constraints = [
            models.UniqueConstraint(fields=["property", "stage"], name="uniq_stage_metric"),
        ]

    def __str__(self):
        return f"{self.property_id} estágio {self.stage}: {self.completion_percentage}%"


class StageAdvancementLog(models.Model):
    """Histórico somente-inclusão das mudanças de estágio."""

    TYPE_CHOICES = [
        ("AUTOMATIC", "Automático"),
        ("MANUAL", "Manual"),
        ("OVERRIDE", "Forçado"),
    ]
    VALIDATION_CHOICES = [
        ("PASSED", "Aprovado"),
        ("OVERRIDDEN", "Ignorado (forçado)"),
    ]

    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="advancement_logs")
    from_stage = models.PositiveSmallIntegerField(choices=ESTAGIO_CHOICES, validators=STAGE_VALIDATORS)
    to_stage = models.PositiveSmallIntegerField(choices=ESTAGIO_CHOICES, validators=STAGE_VALIDATORS)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="stage_advancements",
    )
    advancement_type = models.CharField(max_length=10, choices=TYPE_CHOICES, default="MANUAL")
    validation_status = models.CharField(max_length=12, choices=VALIDATION_CHOICES, default="PASSED")
    overridden = models.BooleanField(default=False)
    pending_critical_count = models.PositiveIntegerField(default=0)
    pending_non_critical_count = models.PositiveIntegerField(default=0)
    completion_percentage = models.PositiveSmallIntegerField(default=0)
    validation_results = models.JSONField(default=dict, blank=True)
    override_reason = models.TextField(blank=True, default="")
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = "Avanço de estágio"
        verbose_name_plural = "Avanços de estágio"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.property_id}: {self.from_stage} -> {self.to_stage} ({self.advancement_type})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("StageAdvancementLog não pode ser alterado após gravado")
        super().save(*args, **kwargs)
