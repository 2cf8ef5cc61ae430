# pendencias/serializers.py

from django.contrib.auth import get_user_model
from rest_framework import serializers

from imoveis.stages import ESTAGIO_FINAL, ESTAGIO_INICIAL

from .models import PropertyRequirement, StageAdvancementLog, StageRequirement

User = get_user_model()


class StageRequirementSerializer(serializers.ModelSerializer):
    class Meta:
        model = StageRequirement
        fields = [
            "id",
            "stage",
            "requirement_key",
            "requirement_name",
            "description",
            "category",
            "priority",
            "validation_rules",
            "property_types",
            "is_active",
        ]


class PropertyRequirementSerializer(serializers.ModelSerializer):
    requirement = StageRequirementSerializer(read_only=True)
    stage = serializers.IntegerField(source="requirement.stage", read_only=True)
    is_critical = serializers.BooleanField(source="requirement.is_critical", read_only=True)

    class Meta:
        model = PropertyRequirement
        fields = [
            "id",
            "property",
            "requirement",
            "stage",
            "is_critical",
            "status",
            "due_date",
            "assigned_to",
            "completed_at",
            "completed_by",
            "notes",
            "validation_data",
            "last_checked_at",
            "updated_at",
        ]
        read_only_fields = fields


class PropertyRequirementUpdateSerializer(serializers.Serializer):
    """DTO de atualização de um requisito do imóvel."""

    status = serializers.ChoiceField(choices=PropertyRequirement.STATUS_CHOICES, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    due_date = serializers.DateField(required=False)
    assigned_to = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False)


class AdvanceStageRequestSerializer(serializers.Serializer):
    """DTO do pedido de avanço de estágio."""

    targetStage = serializers.IntegerField(min_value=ESTAGIO_INICIAL, max_value=ESTAGIO_FINAL)
    force = serializers.BooleanField(required=False, default=False)
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=2000)
    metadata = serializers.DictField(required=False)


class RevalidateRequestSerializer(serializers.Serializer):
    stage = serializers.IntegerField(min_value=ESTAGIO_INICIAL, max_value=ESTAGIO_FINAL, required=False)


class StageAdvancementLogSerializer(serializers.ModelSerializer):
    user_name = serializers.SerializerMethodField()

    class Meta:
        model = StageAdvancementLog
        fields = [
            "id",
            "property",
            "from_stage",
            "to_stage",
            "user",
            "user_name",
            "advancement_type",
            "validation_status",
            "overridden",
            "pending_critical_count",
            "pending_non_critical_count",
            "completion_percentage",
            "validation_results",
            "override_reason",
            "metadata",
            "created_at",
        ]
        read_only_fields = fields

    def get_user_name(self, obj) -> str:
        if obj.user is None:
            return ""
        return obj.user.get_full_name() or obj.user.username
