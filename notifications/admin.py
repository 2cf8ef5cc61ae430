from django.contrib import admin

from .models import (
    Notification,
    NotificationPreference,
    NotificationRule,
    NotificationSubscription,
    NotificationTemplate,
    PendencyNotification,
    ScheduledNotification,
)


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["id", "title", "user", "type", "category", "priority", "is_read", "is_archived", "created_at"]
    list_filter = ["type", "category", "priority", "is_read", "is_archived", "created_at"]
    search_fields = ["title", "message", "user__email"]
    readonly_fields = ["created_at", "updated_at", "read_at", "source"]
    date_hierarchy = "created_at"


@admin.register(PendencyNotification)
class PendencyNotificationAdmin(admin.ModelAdmin):
    list_display = ["id", "title", "property", "notification_type", "severity", "is_resolved", "created_at"]
    list_filter = ["notification_type", "severity", "is_resolved", "is_read"]
    search_fields = ["title", "message", "property__sequence_number"]
    readonly_fields = ["created_at", "updated_at", "resolved_at", "notification"]


@admin.register(ScheduledNotification)
class ScheduledNotificationAdmin(admin.ModelAdmin):
    """Fila de notificações agendadas; reprocessamento via varredura."""

    list_display = ["id", "title", "user", "related_type", "scheduled_for", "status", "retry_count"]
    list_filter = ["status", "related_type", "notification_type"]
    search_fields = ["title", "user__email"]
    readonly_fields = ["created_at", "updated_at", "sent_at", "failure_reason", "retry_count"]
    actions = ["cancelar_selecionadas"]

    @admin.action(description="Cancelar notificações selecionadas")
    def cancelar_selecionadas(self, request, queryset):
        total = queryset.filter(status__in=["pending", "failed"]).update(status="cancelled")
        self.message_user(request, f"{total} notificação(ões) cancelada(s).")


@admin.register(NotificationTemplate)
class NotificationTemplateAdmin(admin.ModelAdmin):
    list_display = ["template_key", "name", "category", "subcategory", "default_priority", "is_active"]
    list_filter = ["category", "is_active"]
    search_fields = ["template_key", "name", "title_template"]


@admin.register(NotificationRule)
class NotificationRuleAdmin(admin.ModelAdmin):
    list_display = ["rule_key", "trigger_events", "template", "delay_minutes", "is_active", "trigger_count"]
    list_filter = ["is_active"]
    search_fields = ["rule_key", "name", "trigger_events"]
    readonly_fields = ["last_triggered_at", "trigger_count", "created_at", "updated_at"]


@admin.register(NotificationPreference)
class NotificationPreferenceAdmin(admin.ModelAdmin):
    list_display = ["user", "enable_in_app", "in_app_priority_threshold", "updated_at"]
    search_fields = ["user__email"]


@admin.register(NotificationSubscription)
class NotificationSubscriptionAdmin(admin.ModelAdmin):
    list_display = ["user", "category", "subcategory", "enable_in_app", "is_active"]
    list_filter = ["category", "enable_in_app", "is_active"]
    search_fields = ["user__email"]
