from django.contrib import admin

from .models import PropertyRequirement, StageAdvancementLog, StageCompletionMetric, StageRequirement


@admin.register(StageRequirement)
class StageRequirementAdmin(admin.ModelAdmin):
    list_display = ("requirement_key", "requirement_name", "stage", "category", "priority", "is_active")
    list_filter = ("stage", "category", "priority", "is_active")
    search_fields = ("requirement_key", "requirement_name")
    ordering = ("stage", "order")


@admin.register(PropertyRequirement)
class PropertyRequirementAdmin(admin.ModelAdmin):
    list_display = ("property", "requirement", "status", "due_date", "assigned_to", "completed_at")
    list_filter = ("status", "requirement__stage")
    raw_id_fields = ("property", "assigned_to", "completed_by")


@admin.register(StageCompletionMetric)
class StageCompletionMetricAdmin(admin.ModelAdmin):
    list_display = ("property", "stage", "completion_percentage", "can_advance", "blocking_count", "last_updated")
    list_filter = ("stage", "can_advance")


@admin.register(StageAdvancementLog)
class StageAdvancementLogAdmin(admin.ModelAdmin):
    list_display = ("property", "from_stage", "to_stage", "advancement_type", "overridden", "user", "created_at")
    list_filter = ("advancement_type", "validation_status", "overridden")

    def has_change_permission(self, request, obj=None):
        return False
