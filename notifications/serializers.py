from rest_framework import serializers

from .models import (
    Notification,
    NotificationPreference,
    NotificationSubscription,
    PendencyNotification,
    ScheduledNotification,
)


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = [
            "id",
            "type",
            "title",
            "message",
            "category",
            "subcategory",
            "priority",
            "related_id",
            "related_type",
            "action_url",
            "is_read",
            "read_at",
            "expires_at",
            "created_at",
        ]
        read_only_fields = fields


class PendencyNotificationSerializer(serializers.ModelSerializer):
    requirement_key = serializers.CharField(source="requirement.requirement_key", read_only=True, default=None)

    class Meta:
        model = PendencyNotification
        fields = [
            "id",
            "property",
            "requirement",
            "requirement_key",
            "notification_type",
            "severity",
            "title",
            "message",
            "action_url",
            "is_read",
            "is_resolved",
            "resolved_at",
            "auto_resolve_at",
            "metadata",
            "created_at",
        ]
        read_only_fields = fields


class ScheduledNotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = ScheduledNotification
        fields = [
            "id",
            "related_type",
            "related_id",
            "title",
            "message",
            "scheduled_for",
            "notification_type",
            "status",
            "sent_at",
            "failure_reason",
            "retry_count",
            "metadata",
            "created_at",
        ]
        read_only_fields = fields


class NotificationPreferenceSerializer(serializers.ModelSerializer):
    class Meta:
        model = NotificationPreference
        fields = ["enable_in_app", "in_app_priority_threshold", "updated_at"]
        read_only_fields = ["updated_at"]


class NotificationSubscriptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = NotificationSubscription
        fields = ["id", "category", "subcategory", "enable_in_app", "is_active", "created_at"]
        read_only_fields = ["id", "is_active", "created_at"]
        # O upsert por (usuário, categoria, subcategoria) fica no serviço
        validators = []
