# src/apps/core/serializers/user.py
"""
User Serializers

Includes:
- UserSerializer: Full user details with roles
- UserListSerializer: Lightweight for list views
- UserCreateSerializer: Provisioning request
- UserUpdateSerializer: Profile updates
- UserStateMetricsSerializer / UserCreationStatSerializer: Statistics
"""

from rest_framework import serializers
from apps.core.models import User


class UserSerializer(serializers.ModelSerializer):
    """
    Full User serializer.
    Used for single user retrieval.
    """

    full_name = serializers.CharField(read_only=True)
    country = serializers.StringRelatedField(read_only=True)
    country_id = serializers.IntegerField(read_only=True, allow_null=True)
    roles = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'first_name',
            'last_name',
            'full_name',
            'email',
            'phone_number',
            'country',
            'country_id',
            'account_status',
            'roles',
            'last_login',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_roles(self, obj) -> list:
        return obj.get_roles()


class UserListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for user lists."""

    country = serializers.StringRelatedField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'first_name',
            'last_name',
            'email',
            'phone_number',
            'country',
            'account_status',
            'created_at',
        ]
        read_only_fields = fields


class UserCreateSerializer(serializers.Serializer):
    """Provisioning request. The account is created inactive and without a password."""

    user_name = serializers.CharField(max_length=150)
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    email = serializers.EmailField(max_length=255)
    phone_number = serializers.RegexField(
        regex=r'^\+?1?\d{9,15}$',
        max_length=50,
        error_messages={'invalid': "Phone number format: '+999999999'. Up to 15 digits allowed."}
    )
    country_id = serializers.IntegerField(min_value=1)


class UserUpdateSerializer(serializers.Serializer):
    """Profile update. Omitted fields are left unchanged."""

    user_name = serializers.CharField(max_length=150, required=False)
    first_name = serializers.CharField(max_length=100, required=False)
    last_name = serializers.CharField(max_length=100, required=False)
    email = serializers.EmailField(max_length=255, required=False)
    phone_number = serializers.RegexField(
        regex=r'^\+?1?\d{9,15}$',
        max_length=50,
        required=False,
        error_messages={'invalid': "Phone number format: '+999999999'. Up to 15 digits allowed."}
    )
    country_id = serializers.IntegerField(min_value=1, required=False)

    def to_changes(self) -> dict:
        """Map validated data onto User field names."""
        changes = dict(self.validated_data)
        if 'user_name' in changes:
            changes['username'] = changes.pop('user_name')
        return changes


class UserListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, default=1)
    page_size = serializers.IntegerField(min_value=1, max_value=100, default=10)
    account_status = serializers.ChoiceField(
        choices=User.AccountStatus.choices,
        required=False,
        allow_null=True
    )


class UserStateMetricsSerializer(serializers.Serializer):
    total_users_count = serializers.IntegerField()
    activated_users = serializers.IntegerField()
    deactivated_users = serializers.IntegerField()


class UserCreationStatSerializer(serializers.Serializer):
    date = serializers.DateField()
    count = serializers.IntegerField()
