# src/apps/core/views/auth.py
"""
Login ViewSet

- POST /login/tokens/ - Exchange username and password for an access token
"""

import logging
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny

from apps.core.serializers import LoginSerializer, TokenResponseSerializer
from apps.core.services import AuthService
from apps.core.views.base import ServiceResultMixin

logger = logging.getLogger(__name__)


class LoginViewSet(ServiceResultMixin, viewsets.ViewSet):

    permission_classes = [AllowAny]
    authentication_classes = []

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.auth_service = AuthService()

    @action(detail=False, methods=['post'], url_path='tokens')
    def tokens(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.auth_service.login(**serializer.validated_data)
        if not result.success:
            return self._error_response(result)

        return self._result_response(result, data=TokenResponseSerializer(result.data).data)
