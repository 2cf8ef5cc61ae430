# imoveis/serializers.py

from rest_framework import serializers

from .models import Contract, Property, PropertyDocument, PropertyOwner, Proposal


class PropertyOwnerSerializer(serializers.ModelSerializer):
    class Meta:
        model = PropertyOwner
        exclude = ["property"]
        read_only_fields = ["created_at", "updated_at"]


class PropertyDocumentSerializer(serializers.ModelSerializer):
    class Meta:
        model = PropertyDocument
        exclude = ["property"]
        read_only_fields = ["uploaded_at"]


class ProposalSerializer(serializers.ModelSerializer):
    class Meta:
        model = Proposal
        exclude = ["property"]
        read_only_fields = ["created_at", "updated_at"]


class ContractSerializer(serializers.ModelSerializer):
    class Meta:
        model = Contract
        exclude = ["property"]
        read_only_fields = ["created_at", "updated_at"]

    def validate_proposal(self, proposal):
        imovel = self.context.get("property")
        if proposal is not None and imovel is not None and proposal.property_id != imovel.pk:
            raise serializers.ValidationError("Proposta não pertence a este imóvel.")
        return proposal


class PropertySerializer(serializers.ModelSerializer):
    """
    Serializer do imóvel. Estágio e status só mudam pelo endpoint de avanço.
    """

    stage_name = serializers.CharField(read_only=True)
    owners = PropertyOwnerSerializer(many=True, read_only=True)

    class Meta:
        model = Property
        fields = "__all__"
        read_only_fields = ["user", "sequence_number", "status", "current_stage", "created_at", "updated_at"]

    def validate_state(self, value: str) -> str:
        value = (value or "").strip().upper()
        if len(value) != 2 or not value.isalpha():
            raise serializers.ValidationError("UF deve ter 2 letras.")
        return value

    def validate_cep(self, value: str) -> str:
        digitos = "".join(ch for ch in value if ch.isdigit())
        if len(digitos) != 8:
            raise serializers.ValidationError("CEP deve ter 8 dígitos.")
        return f"{digitos[:5]}-{digitos[5:]}"
