from django.contrib import admin

from .models import Contract, Property, PropertyDocument, PropertyOwner, Proposal


class PropertyOwnerInline(admin.TabularInline):
    model = PropertyOwner
    extra = 0
    fields = ("full_name", "cpf", "phone", "email")


class PropertyDocumentInline(admin.TabularInline):
    model = PropertyDocument
    extra = 0
    fields = ("type", "name", "url", "status")


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ("sequence_number", "type", "city", "state", "value", "current_stage", "status", "user")
    list_filter = ("type", "status", "state")
    search_fields = ("sequence_number", "street", "neighborhood", "city", "registration_number")
    readonly_fields = ("sequence_number", "status", "current_stage", "created_at", "updated_at")
    inlines = [PropertyOwnerInline, PropertyDocumentInline]


@admin.register(Proposal)
class ProposalAdmin(admin.ModelAdmin):
    list_display = ("property", "buyer_name", "value", "status", "created_at")
    list_filter = ("status",)


@admin.register(Contract)
class ContractAdmin(admin.ModelAdmin):
    list_display = ("property", "type", "value", "status", "signed_at")
    list_filter = ("status",)
