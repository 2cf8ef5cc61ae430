from rest_framework import serializers

from .models import Cartorio, Registro


class CartorioSerializer(serializers.ModelSerializer):
    class Meta:
        model = Cartorio
        fields = "__all__"
        read_only_fields = ["created_at", "updated_at"]


class RegistroSerializer(serializers.ModelSerializer):
    """Imóvel e cartório vão por ID; a posse do imóvel é checada no serviço."""

    property = serializers.IntegerField(source="property_id")
    cartorio = serializers.IntegerField(source="cartorio_id")
    cartorio_nome = serializers.CharField(source="cartorio.nome", read_only=True)
    protocolo = serializers.CharField(max_length=30, required=False, allow_blank=True)

    class Meta:
        model = Registro
        fields = [
            "id",
            "property",
            "user",
            "protocolo",
            "cartorio",
            "cartorio_nome",
            "data_envio",
            "status",
            "observacoes",
            "valor_taxas",
            "prazo_estimado",
            "mock_status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["user", "mock_status", "created_at", "updated_at"]

    def validate_protocolo(self, value: str) -> str:
        value = value.strip()
        if not value:
            return value
        outros = Registro.objects.filter(protocolo=value)
        if self.instance is not None:
            outros = outros.exclude(pk=self.instance.pk)
        if outros.exists():
            raise serializers.ValidationError("Protocolo já utilizado.")
        return value


class ConsultarTaxasSerializer(serializers.Serializer):
    cartorioId = serializers.IntegerField(required=False)
    cartorioNome = serializers.CharField(required=False, allow_blank=False)
    valorImovel = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0)

    def validate(self, attrs):
        if not attrs.get("cartorioId") and not attrs.get("cartorioNome"):
            raise serializers.ValidationError("Informe cartorioId ou cartorioNome.")
        return attrs


class AtualizarStatusSerializer(serializers.Serializer):
    novoStatus = serializers.ChoiceField(choices=Registro.STATUS_CHOICES)
