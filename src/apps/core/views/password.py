# src/apps/core/views/password.py
"""
Password ViewSet

- PUT /password/users/{id}/password/ - Set the first password (anonymous)
- PATCH /password/users/{id}/password/ - Rotate a password
"""

import logging
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny

from apps.core.permissions import IsAuthenticated
from apps.core.serializers import SetPasswordSerializer, UpdatePasswordSerializer
from apps.core.services import PasswordService, SetPasswordRequest, UpdatePasswordRequest
from apps.core.views.base import ServiceResultMixin

logger = logging.getLogger(__name__)


class PasswordViewSet(ServiceResultMixin, viewsets.ViewSet):
    """Password lifecycle endpoints."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.password_service = PasswordService()

    def get_permissions(self):
        if self.request is not None and self.request.method == 'PUT':
            return [AllowAny()]
        return [IsAuthenticated()]

    @action(detail=False, methods=['put', 'patch'], url_path=r'users/(?P<user_id>[^/.]+)/password')
    def password(self, request, user_id=None):
        if request.method == 'PUT':
            return self._set_password(request, user_id)
        return self._update_password(request, user_id)

    def _set_password(self, request, user_id):
        serializer = SetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.password_service.set_password(
            user_id,
            SetPasswordRequest(**serializer.validated_data)
        )
        return self._result_response(result, status_code=status.HTTP_204_NO_CONTENT)

    def _update_password(self, request, user_id):
        serializer = UpdatePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.password_service.update_password(
            self.get_principal(),
            user_id,
            UpdatePasswordRequest(**serializer.validated_data)
        )
        return self._result_response(result, status_code=status.HTTP_204_NO_CONTENT)
