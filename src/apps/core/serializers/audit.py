# src/apps/core/serializers/audit.py
from rest_framework import serializers

from apps.core.models import AuditLog


class AuditLogSerializer(serializers.ModelSerializer):

    class Meta:
        model = AuditLog
        fields = ['id', 'user_id', 'action', 'details', 'ip_address', 'timestamp']
        read_only_fields = fields


class AuditLogListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, default=1)
    page_size = serializers.IntegerField(min_value=1, max_value=100, default=10)
    action = serializers.ChoiceField(choices=AuditLog.Action.choices, required=False)
