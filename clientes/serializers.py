# clientes/serializers.py

from rest_framework import serializers

from .models import Client, ClientNote, ClientNoteAuditLog
from .validators import cpf_valido, somente_digitos


class ClientSerializer(serializers.ModelSerializer):
    # Aceita CPF formatado; grava só os dígitos
    cpf = serializers.CharField(max_length=14)
    email = serializers.EmailField(max_length=254)

    class Meta:
        model = Client
        fields = "__all__"
        read_only_fields = ["user", "created_at", "updated_at"]

    def _outros_clientes(self):
        qs = Client.objects.all()
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        return qs

    def validate_cpf(self, value: str) -> str:
        digitos = somente_digitos(value)
        if not cpf_valido(digitos):
            raise serializers.ValidationError("CPF inválido")
        if self._outros_clientes().filter(cpf=digitos).exists():
            raise serializers.ValidationError("CPF já cadastrado")
        return digitos

    def validate_email(self, value: str) -> str:
        value = value.strip().lower()
        if self._outros_clientes().filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email já cadastrado")
        return value

    def validate_state(self, value: str) -> str:
        value = (value or "").strip().upper()
        if value and (len(value) != 2 or not value.isalpha()):
            raise serializers.ValidationError("UF deve ter 2 letras.")
        return value


class ClientNoteSerializer(serializers.ModelSerializer):
    reason = serializers.CharField(write_only=True, required=False, allow_blank=True, max_length=255)

    class Meta:
        model = ClientNote
        fields = [
            "id",
            "client",
            "user",
            "title",
            "content",
            "type",
            "priority",
            "status",
            "reminder_date",
            "location",
            "participants",
            "duration",
            "call_result",
            "next_steps",
            "metadata",
            "is_completed",
            "completed_at",
            "completed_by",
            "created_at",
            "updated_at",
            "reason",
        ]
        read_only_fields = ["client", "user", "completed_at", "completed_by", "created_at", "updated_at"]


class ClientNoteAuditLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = ClientNoteAuditLog
        fields = ["id", "note", "user", "action", "field", "old_value", "new_value", "reason", "metadata", "created_at"]
        read_only_fields = fields


class ValidateCpfSerializer(serializers.Serializer):
    cpf = serializers.CharField(max_length=14)
    excludeId = serializers.IntegerField(required=False, allow_null=True)


class ValidateEmailSerializer(serializers.Serializer):
    email = serializers.EmailField()
    excludeId = serializers.IntegerField(required=False, allow_null=True)
