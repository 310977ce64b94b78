# src/apps/core/serializers/role.py
from rest_framework import serializers

from apps.core.constants import Roles
from apps.core.models import Role


class RoleSerializer(serializers.ModelSerializer):

    class Meta:
        model = Role
        fields = ['id', 'name']
        read_only_fields = fields


class AssignRoleSerializer(serializers.Serializer):
    """Role to assign, by name."""

    role_name = serializers.CharField(max_length=50)

    def validate_role_name(self, value):
        value = value.strip()
        if value not in [role.value for role in Roles]:
            raise serializers.ValidationError('Invalid role name.')
        return value
