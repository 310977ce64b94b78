# src/apps/core/serializers/auth.py
"""
Authentication Serializers

Includes:
- Login request and token response
- Password set and update requests
"""

from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    """
    Serializer for user login request.
    """

    user_name = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )

    def validate_user_name(self, value):
        return value.strip()


class TokenResponseSerializer(serializers.Serializer):
    token = serializers.CharField()


class SetPasswordSerializer(serializers.Serializer):
    """
    First password for an account. Policy checks run in the service.
    """

    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
    password_confirmed = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class UpdatePasswordSerializer(serializers.Serializer):
    """
    Password rotation request.
    """

    current_password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
    new_password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
