"""Admin do app core."""

from typing import ClassVar

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.utils.translation import gettext_lazy as _

from .models import B2BUserProfile, CustomUser


class B2BUserProfileInline(admin.StackedInline):
    model = B2BUserProfile
    fk_name = "user"
    extra = 0
    can_delete = False
    verbose_name = _("Perfil B2B")


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ("username", "email", "first_name", "last_name", "user_type", "is_staff", "is_active")
    list_filter = ("user_type", "is_staff", "is_active")
    fieldsets = (*UserAdmin.fieldsets, (_("VentusHub"), {"fields": ("phone", "user_type")}))
    inlines: ClassVar[list] = [B2BUserProfileInline]


@admin.register(B2BUserProfile)
class B2BUserProfileAdmin(admin.ModelAdmin):
    list_display = ("business_name", "user", "user_type", "document", "creci", "is_active", "created_at")
    list_filter = ("user_type", "is_active")
    search_fields = ("business_name", "trade_name", "document", "user__email")
    raw_id_fields = ("user", "created_by")
