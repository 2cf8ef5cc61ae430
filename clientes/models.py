"""Modelos do app clientes: cadastro de clientes e notas de CRM com trilha de auditoria."""

from __future__ import annotations

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.models import TimestampedModel

from .validators import validate_cpf


class Client(TimestampedModel):
    MARITAL_STATUS_CHOICES = [
        ("Solteiro", "Solteiro"),
        ("Casado", "Casado"),
        ("Divorciado", "Divorciado"),
        ("Viúvo", "Viúvo"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="clients",
        verbose_name="Corretor responsável",
    )
    full_name = models.CharField(max_length=255, verbose_name="Nome completo")
    # Armazenado só com dígitos
    cpf = models.CharField(max_length=11, unique=True, validators=[validate_cpf], verbose_name="CPF")
    email = models.EmailField(unique=True, verbose_name="E-mail")
    birth_date = models.DateField(null=True, blank=True, verbose_name="Data de nascimento")
    phone_primary = models.CharField(max_length=20, verbose_name="Telefone principal")
    phone_secondary = models.CharField(max_length=20, blank=True, default="", verbose_name="Telefone secundário")
    # --- Endereço ---
    street = models.CharField(max_length=255, blank=True, default="", verbose_name="Logradouro")
    number = models.CharField(max_length=20, blank=True, default="", verbose_name="Número")
    complement = models.CharField(max_length=100, blank=True, default="", verbose_name="Complemento")
    neighborhood = models.CharField(max_length=100, blank=True, default="", verbose_name="Bairro")
    city = models.CharField(max_length=100, blank=True, default="", verbose_name="Cidade")
    state = models.CharField(max_length=2, blank=True, default="", verbose_name="Estado (UF)")
    zip_code = models.CharField(max_length=10, blank=True, default="", verbose_name="CEP")
    # --- Perfil ---
    marital_status = models.CharField(
        max_length=20, choices=MARITAL_STATUS_CHOICES, blank=True, default="", verbose_name="Estado civil"
    )
    profession = models.CharField(max_length=120, blank=True, default="", verbose_name="Profissão")
    monthly_income = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
        verbose_name="Renda mensal",
    )
    notes = models.TextField(blank=True, default="", verbose_name="Observações")

    class Meta:
        verbose_name = "Cliente"
        verbose_name_plural = "Clientes"
        ordering = ["full_name", "id"]

    def __str__(self):
        return self.full_name


class ClientNote(TimestampedModel):
    TYPE_CHOICES = [
        ("note", "Nota"),
        ("reminder", "Lembrete"),
        ("follow_up", "Follow-up"),
        ("meeting", "Reunião"),
        ("call", "Ligação"),
    ]
    PRIORITY_CHOICES = [
        ("low", "Baixa"),
        ("normal", "Normal"),
        ("high", "Alta"),
        ("urgent", "Urgente"),
    ]
    STATUS_CHOICES = [
        ("pending", "Pendente"),
        ("in_progress", "Em andamento"),
        ("completed", "Concluída"),
        ("cancelled", "Cancelada"),
    ]
    CALL_RESULT_CHOICES = [
        ("success", "Sucesso"),
        ("no_answer", "Não atendeu"),
        ("busy", "Ocupado"),
        ("callback_requested", "Pediu retorno"),
        ("voicemail", "Caixa postal"),
        ("disconnected", "Desligou"),
    ]

    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name="client_notes", verbose_name="Cliente")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="client_notes",
        verbose_name="Autor",
    )
    title = models.CharField(max_length=255, verbose_name="Título")
    content = models.TextField(blank=True, default="", verbose_name="Conteúdo")
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default="note", verbose_name="Tipo")
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default="normal", verbose_name="Prioridade")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending", verbose_name="Status")
    reminder_date = models.DateTimeField(null=True, blank=True, verbose_name="Lembrete em")
    location = models.CharField(max_length=255, blank=True, default="", verbose_name="Local")
    participants = models.TextField(blank=True, default="", verbose_name="Participantes")
    duration = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(480)],
        verbose_name="Duração (min)",
    )
    call_result = models.CharField(
        max_length=20, choices=CALL_RESULT_CHOICES, blank=True, default="", verbose_name="Resultado da ligação"
    )
    next_steps = models.TextField(blank=True, default="", verbose_name="Próximos passos")
    metadata = models.JSONField(default=dict, blank=True)
    is_completed = models.BooleanField(default=False, verbose_name="Concluída")
    completed_at = models.DateTimeField(null=True, blank=True, verbose_name="Concluída em")
    completed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="Concluída por",
    )

    class Meta:
        verbose_name = "Nota de cliente"
        verbose_name_plural = "Notas de clientes"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.get_type_display()}: {self.title}"


class ClientNoteAuditLog(models.Model):
    """Evento de auditoria de uma nota. Só inserção."""

    ACTION_CHOICES = [
        ("created", "Criada"),
        ("updated", "Atualizada"),
        ("status_changed", "Status alterado"),
        ("completed", "Concluída"),
        ("cancelled", "Cancelada"),
    ]

    note = models.ForeignKey(ClientNote, on_delete=models.CASCADE, related_name="audit_logs", verbose_name="Nota")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="client_note_audit_logs",
        verbose_name="Usuário",
    )
    action = models.CharField(max_length=20, choices=ACTION_CHOICES, verbose_name="Ação")
    field = models.CharField(max_length=50, blank=True, default="", verbose_name="Campo")
    old_value = models.TextField(blank=True, default="", verbose_name="Valor anterior")
    new_value = models.TextField(blank=True, default="", verbose_name="Novo valor")
    reason = models.CharField(max_length=255, blank=True, default="", verbose_name="Motivo")
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="Data")

    class Meta:
        verbose_name = "Auditoria de nota"
        verbose_name_plural = "Auditoria de notas"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.note_id} {self.action} {self.field}".strip()

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("ClientNoteAuditLog não pode ser alterado após gravado")
        super().save(*args, **kwargs)
