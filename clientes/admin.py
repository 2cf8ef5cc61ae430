from django.contrib import admin

from .models import Client, ClientNote, ClientNoteAuditLog


class ClientNoteInline(admin.TabularInline):
    model = ClientNote
    extra = 0
    fields = ["title", "type", "priority", "status", "reminder_date", "is_completed"]
    show_change_link = True


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ["full_name", "cpf", "email", "city", "state", "user", "created_at"]
    list_filter = ["marital_status", "state", "city"]
    search_fields = ["full_name", "cpf", "email"]
    inlines = [ClientNoteInline]


class ClientNoteAuditLogInline(admin.TabularInline):
    """Trilha de auditoria; somente leitura."""

    model = ClientNoteAuditLog
    extra = 0
    can_delete = False
    readonly_fields = ["action", "field", "old_value", "new_value", "reason", "user", "created_at"]

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(ClientNote)
class ClientNoteAdmin(admin.ModelAdmin):
    list_display = ["title", "client", "type", "priority", "status", "reminder_date", "is_completed"]
    list_filter = ["type", "priority", "status", "is_completed"]
    search_fields = ["title", "content", "client__full_name"]
    readonly_fields = ["completed_at", "completed_by", "created_at", "updated_at"]
    inlines = [ClientNoteAuditLogInline]
