from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from core.models import TimestampedModel


class Notification(TimestampedModel):
    """
    Notificação in-app genérica exibida ao usuário.
    """

    TYPE_CHOICES = [
        ("info", "Informação"),
        ("warning", "Aviso"),
        ("error", "Erro"),
        ("success", "Sucesso"),
    ]
    CATEGORY_CHOICES = [
        ("property", "Imóvel"),
        ("contract", "Contrato"),
        ("document", "Documento"),
        ("system", "Sistema"),
        ("crm", "CRM"),
    ]
    # 1 = urgente, 5 = baixa
    PRIORITY_CHOICES = [(1, "Urgente"), (2, "Alta"), (3, "Normal"), (4, "Baixa"), (5, "Mínima")]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        verbose_name="Usuário",
    )
    type = models.CharField(max_length=10, choices=TYPE_CHOICES, default="info", verbose_name="Tipo")
    title = models.CharField(max_length=200, verbose_name="Título")
    message = models.TextField(verbose_name="Mensagem")
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, default="system", verbose_name="Categoria")
    subcategory = models.CharField(max_length=50, blank=True, default="", verbose_name="Subcategoria")
    priority = models.PositiveSmallIntegerField(choices=PRIORITY_CHOICES, default=3, verbose_name="Prioridade")
    related_id = models.PositiveBigIntegerField(null=True, blank=True, verbose_name="ID relacionado")
    related_type = models.CharField(max_length=50, blank=True, default="", verbose_name="Tipo relacionado")
    action_url = models.CharField(max_length=500, blank=True, default="", verbose_name="URL de ação")
    is_read = models.BooleanField(default=False, db_index=True, verbose_name="Lida")
    read_at = models.DateTimeField(null=True, blank=True, verbose_name="Lida em")
    expires_at = models.DateTimeField(null=True, blank=True, verbose_name="Expira em")
    is_archived = models.BooleanField(default=False, verbose_name="Arquivada")
    # No máximo uma notificação por agendamento processado
    source = models.OneToOneField(
        "notifications.ScheduledNotification",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="delivered_notification",
        verbose_name="Agendamento de origem",
    )

    class Meta:
        verbose_name = "Notificação"
        verbose_name_plural = "Notificações"
        ordering = ["-created_at", "-id"]
        indexes = [models.Index(fields=["user", "is_read"], name="notif_user_read_idx")]

    def __str__(self):
        return f"{self.title} ({self.user_id})"

    def marcar_como_lida(self):
        """Marca a notificação como lida."""
        if self.is_read:
            return
        self.is_read = True
        self.read_at = timezone.now()
        self.save(update_fields=["is_read", "read_at", "updated_at"])


class PendencyNotification(TimestampedModel):
    TYPE_CHOICES = [
        ("MISSING_DOCUMENT", "Documento pendente"),
        ("VALIDATION_FAILED", "Validação falhou"),
        ("STAGE_BLOCKED", "Estágio bloqueado"),
        ("STAGE_ADVANCED", "Estágio avançado"),
        ("CRITICAL_PENDENCY", "Pendência crítica"),
        ("DEADLINE_WARNING", "Prazo próximo"),
        ("REQUIREMENTS_UPDATED", "Requisitos atualizados"),
    ]
    SEVERITY_CHOICES = [
        ("LOW", "Baixa"),
        ("MEDIUM", "Média"),
        ("HIGH", "Alta"),
        ("CRITICAL", "Crítica"),
    ]
    # Ordem de exibição: mais grave primeiro
    SEVERITY_RANK = {"CRITICAL": 4, "HIGH": 3, "MEDIUM": 2, "LOW": 1}

    property = models.ForeignKey(
        "imoveis.Property",
        on_delete=models.CASCADE,
        related_name="pendency_notifications",
        verbose_name="Imóvel",
    )
    requirement = models.ForeignKey(
        "pendencias.StageRequirement",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications",
        verbose_name="Requisito",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="pendency_notifications",
        verbose_name="Usuário",
    )
    notification_type = models.CharField(max_length=30, choices=TYPE_CHOICES, verbose_name="Tipo")
    severity = models.CharField(max_length=10, choices=SEVERITY_CHOICES, default="MEDIUM", verbose_name="Severidade")
    title = models.CharField(max_length=200, verbose_name="Título")
    message = models.TextField(verbose_name="Mensagem")
    action_url = models.CharField(max_length=500, blank=True, default="", verbose_name="URL de ação")
    is_read = models.BooleanField(default=False, verbose_name="Lida")
    is_resolved = models.BooleanField(default=False, db_index=True, verbose_name="Resolvida")
    resolved_at = models.DateTimeField(null=True, blank=True, verbose_name="Resolvida em")
    auto_resolve_at = models.DateTimeField(null=True, blank=True, verbose_name="Resolver automaticamente em")
    metadata = models.JSONField(default=dict, blank=True)
    notification = models.ForeignKey(
        Notification,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="pendency_notifications",
        verbose_name="Notificação geral",
    )

    class Meta:
        verbose_name = "Notificação de pendência"
        verbose_name_plural = "Notificações de pendência"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["property", "notification_type", "is_resolved"], name="pendnotif_prop_type_idx"),
        ]

    def __str__(self):
        return f"{self.notification_type} - {self.title}"


class ScheduledNotification(TimestampedModel):
    RELATED_TYPE_CHOICES = [
        ("client_note", "Nota de cliente"),
        ("reminder", "Lembrete"),
        ("meeting", "Reunião"),
        ("notification_rule", "Regra de notificação"),
    ]
    CHANNEL_CHOICES = [
        ("email", "E-mail"),
        ("push", "Push"),
        ("sms", "SMS"),
        ("in_app", "In-app"),
    ]
    STATUS_CHOICES = [
        ("pending", "Pendente"),
        ("sent", "Enviada"),
        ("failed", "Falhou"),
        ("cancelled", "Cancelada"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="scheduled_notifications",
        verbose_name="Usuário",
    )
    related_type = models.CharField(max_length=20, choices=RELATED_TYPE_CHOICES, verbose_name="Origem")
    related_id = models.PositiveBigIntegerField(verbose_name="ID de origem")
    title = models.CharField(max_length=255, verbose_name="Título")
    message = models.TextField(blank=True, default="", verbose_name="Mensagem")
    scheduled_for = models.DateTimeField(db_index=True, verbose_name="Agendada para")
    notification_type = models.CharField(max_length=10, choices=CHANNEL_CHOICES, default="in_app", verbose_name="Canal")
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="pending", db_index=True)
    sent_at = models.DateTimeField(null=True, blank=True, verbose_name="Enviada em")
    failure_reason = models.TextField(blank=True, default="", verbose_name="Motivo da falha")
    retry_count = models.PositiveIntegerField(default=0, verbose_name="Tentativas")
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        verbose_name = "Notificação agendada"
        verbose_name_plural = "Notificações agendadas"
        ordering = ["scheduled_for", "id"]
        indexes = [models.Index(fields=["status", "scheduled_for"], name="schednotif_status_when_idx")]

    def __str__(self):
        return f"{self.title} @ {self.scheduled_for:%d/%m/%Y %H:%M} ({self.status})"


class NotificationTemplate(TimestampedModel):
    """Modelo de título/mensagem com placeholders no formato de template do Django (``{{ nome }}``)."""

    template_key = models.CharField(max_length=100, unique=True, verbose_name="Chave")
    name = models.CharField(max_length=200, verbose_name="Nome")
    category = models.CharField(max_length=20, choices=Notification.CATEGORY_CHOICES, verbose_name="Categoria")
    subcategory = models.CharField(max_length=50, blank=True, default="", verbose_name="Subcategoria")
    title_template = models.CharField(max_length=300, verbose_name="Título")
    message_template = models.TextField(verbose_name="Mensagem")
    default_type = models.CharField(
        max_length=10, choices=Notification.TYPE_CHOICES, default="info", verbose_name="Tipo padrão"
    )
    default_priority = models.PositiveSmallIntegerField(
        choices=Notification.PRIORITY_CHOICES, default=3, verbose_name="Prioridade padrão"
    )
    auto_expire_days = models.PositiveSmallIntegerField(null=True, blank=True, verbose_name="Expira após (dias)")
    is_active = models.BooleanField(default=True, verbose_name="Ativo")

    class Meta:
        verbose_name = "Modelo de notificação"
        verbose_name_plural = "Modelos de notificação"
        ordering = ["category", "template_key"]

    def __str__(self):
        return self.template_key


class NotificationRule(TimestampedModel):
    """Regra que transforma um evento do sistema em notificação a partir de um modelo."""

    rule_key = models.CharField(max_length=100, unique=True, verbose_name="Chave")
    name = models.CharField(max_length=200, verbose_name="Nome")
    description = models.TextField(blank=True, default="", verbose_name="Descrição")
    trigger_events = models.CharField(max_length=300, verbose_name="Eventos (separados por vírgula)")
    entity_types = models.CharField(max_length=200, default="*", verbose_name="Entidades (separadas por vírgula)")
    template = models.ForeignKey(
        NotificationTemplate, on_delete=models.CASCADE, related_name="rules", verbose_name="Modelo"
    )
    delay_minutes = models.PositiveIntegerField(default=0, verbose_name="Atraso (minutos)")
    throttle_minutes = models.PositiveIntegerField(null=True, blank=True, verbose_name="Intervalo mínimo (minutos)")
    is_active = models.BooleanField(default=True, verbose_name="Ativa")
    last_triggered_at = models.DateTimeField(null=True, blank=True, verbose_name="Último disparo")
    trigger_count = models.PositiveIntegerField(default=0, verbose_name="Disparos")

    class Meta:
        verbose_name = "Regra de notificação"
        verbose_name_plural = "Regras de notificação"
        ordering = ["rule_key"]

    def __str__(self):
        return self.rule_key

    @staticmethod
    def _lista(valor: str) -> list[str]:
        return [item.strip() for item in (valor or "").split(",") if item.strip()]

    def atende(self, evento: str, entity_type: str) -> bool:
        entidades = self._lista(self.entity_types) or ["*"]
        return evento in self._lista(self.trigger_events) and ("*" in entidades or entity_type in entidades)


class NotificationPreference(TimestampedModel):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notification_preference",
        verbose_name="Usuário",
    )
    enable_in_app = models.BooleanField(default=True, verbose_name="Notificações in-app")
    # Entrega só o que tiver prioridade numérica menor ou igual ao limite
    in_app_priority_threshold = models.PositiveSmallIntegerField(
        default=5,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        verbose_name="Prioridade máxima entregue",
    )

    class Meta:
        verbose_name = "Preferência de notificação"
        verbose_name_plural = "Preferências de notificação"

    def __str__(self):
        return f"Preferências de {self.user_id}"


class NotificationSubscription(TimestampedModel):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notification_subscriptions",
        verbose_name="Usuário",
    )
    category = models.CharField(max_length=20, choices=Notification.CATEGORY_CHOICES, verbose_name="Categoria")
    subcategory = models.CharField(max_length=50, blank=True, default="", verbose_name="Subcategoria")
    enable_in_app = models.BooleanField(default=True, verbose_name="Receber in-app")
    is_active = models.BooleanField(default=True, verbose_name="Ativa")

    class Meta:
        verbose_name = "Inscrição em categoria"
        verbose_name_plural = "Inscrições em categorias"
        ordering = ["category", "subcategory"]
        constraints = [
            models.UniqueConstraint(fields=["user", "category", "subcategory"], name="uniq_notif_subscription"),
        ]

    def __str__(self):
        return f"{self.user_id} - {self.category}/{self.subcategory or '*'}"
