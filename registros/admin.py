from django.contrib import admin

from .models import Cartorio, Registro


@admin.register(Cartorio)
class CartorioAdmin(admin.ModelAdmin):
    list_display = ["numero", "nome", "cidade", "estado", "ativo", "permite_consulta_online", "taxa_base"]
    list_filter = ["ativo", "estado", "cidade"]
    search_fields = ["nome", "nome_completo", "numero"]


@admin.register(Registro)
class RegistroAdmin(admin.ModelAdmin):
    list_display = ["protocolo", "property", "cartorio", "status", "valor_taxas", "prazo_estimado", "created_at"]
    list_filter = ["status", "cartorio"]
    search_fields = ["protocolo", "property__sequence_number"]
    readonly_fields = ["mock_status", "created_at", "updated_at"]
