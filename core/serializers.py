# core/serializers.py

from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import B2BUserProfile

# Obtém o modelo de usuário personalizado ativo no projeto
CustomUser = get_user_model()


class B2BUserProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = B2BUserProfile
        fields = [
            "id",
            "user_type",
            "business_name",
            "document",
            "creci",
            "trade_name",
            "phone",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["is_active", "created_at", "updated_at"]


class B2BUserSerializer(serializers.ModelSerializer):
    """
    Representação de leitura de um usuário B2B com o perfil aninhado.
    """

    name = serializers.SerializerMethodField()
    b2b_profile = B2BUserProfileSerializer(read_only=True)

    class Meta:
        model = CustomUser
        fields = ["id", "name", "email", "user_type", "is_active", "date_joined", "b2b_profile"]
        read_only_fields = fields

    def get_name(self, obj) -> str:
        return obj.get_full_name() or obj.username


def _somente_digitos(value: str) -> str:
    return "".join(ch for ch in value if ch.isdigit())


class B2BUserCreateSerializer(serializers.Serializer):
    """DTO de criação de parceiro B2B."""

    email = serializers.EmailField()
    name = serializers.CharField(max_length=150)
    user_type = serializers.ChoiceField(choices=B2BUserProfile.TIPO_CHOICES)
    business_name = serializers.CharField(max_length=255)
    document = serializers.CharField(max_length=18)
    creci = serializers.CharField(max_length=20, required=False, allow_blank=True)
    trade_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)

    def validate_document(self, value: str) -> str:
        digitos = _somente_digitos(value)
        if len(digitos) not in (11, 14):
            raise serializers.ValidationError("Documento deve ser um CPF (11 dígitos) ou CNPJ (14 dígitos).")
        return digitos


class B2BUserUpdateSerializer(B2BUserCreateSerializer):
    """Atualização parcial: todos os campos opcionais."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field in self.fields.values():
            field.required = False
