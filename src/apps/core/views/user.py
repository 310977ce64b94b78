# src/apps/core/views/user.py
"""
User ViewSet - User management API

Provides endpoints for:
- User listing and statistics (administrators)
- User CRUD (self, or a lower-ranked user)
- Activation and deactivation (administrators)
"""

import logging
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny

from apps.core.permissions import IsAdminRole, IsAuthenticated
from apps.core.serializers import (
    UserSerializer,
    UserListSerializer,
    UserCreateSerializer,
    UserUpdateSerializer,
    UserListQuerySerializer,
    UserStateMetricsSerializer,
    UserCreationStatSerializer,
)
from apps.core.services import UserService
from apps.core.views.base import ServiceResultMixin

logger = logging.getLogger(__name__)


class UserViewSet(ServiceResultMixin, viewsets.ViewSet):
    """
    ViewSet for User management.

    Endpoints:
    - GET /users/ - List users (paginated)
    - POST /users/ - Create user
    - GET /users/{id}/ - Get user details
    - PUT /users/{id}/ - Update user
    - DELETE /users/{id}/ - Delete user
    - PATCH /users/activate/{id}/ - Activate user
    - PATCH /users/deactivate/{id}/ - Deactivate user
    - GET /users/state-metrics/ - Activation counts
    - GET /users/creation-stats/ - Users created per day
    """

    lookup_field = 'user_id'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_service = UserService()

    def get_permissions(self):
        if self.action == 'create':
            return [AllowAny()]
        if self.action in ['list', 'activate', 'deactivate', 'state_metrics', 'creation_stats']:
            return [IsAdminRole()]
        return [IsAuthenticated()]

    def list(self, request):
        """List users ordered by last name."""
        query = UserListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        result = self.user_service.list_users(filters=request.query_params, **query.validated_data)
        if not result.success:
            return self._error_response(result)

        return self._result_response(result, data={
            'users': UserListSerializer(result.data['users'], many=True).data,
            'pagination': result.data['pagination'],
        })

    def create(self, request):
        """Provision a new inactive user."""
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.user_service.create_user(**serializer.validated_data)
        if not result.success:
            return self._error_response(result)

        return self._result_response(
            result,
            data=UserSerializer(result.data).data,
            status_code=status.HTTP_201_CREATED
        )

    def retrieve(self, request, user_id=None):
        result = self.user_service.get_user(self.get_principal(), user_id)
        if not result.success:
            return self._error_response(result)
        return self._result_response(result, data=UserSerializer(result.data).data)

    def update(self, request, user_id=None):
        serializer = UserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.user_service.update_user(self.get_principal(), user_id, serializer.to_changes())
        return self._result_response(result, status_code=status.HTTP_204_NO_CONTENT)

    def destroy(self, request, user_id=None):
        result = self.user_service.delete_user(self.get_principal(), user_id)
        return self._result_response(result, status_code=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['patch'], url_path=r'activate/(?P<user_id>[^/.]+)')
    def activate(self, request, user_id=None):
        result = self.user_service.activate_user(self.get_principal(), user_id)
        return self._result_response(result, status_code=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['patch'], url_path=r'deactivate/(?P<user_id>[^/.]+)')
    def deactivate(self, request, user_id=None):
        result = self.user_service.deactivate_user(self.get_principal(), user_id)
        return self._result_response(result, status_code=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'], url_path='state-metrics')
    def state_metrics(self, request):
        result = self.user_service.get_user_state_metrics()
        return self._result_response(result, data=UserStateMetricsSerializer(result.data).data)

    @action(detail=False, methods=['get'], url_path='creation-stats')
    def creation_stats(self, request):
        result = self.user_service.get_user_creation_stats()
        return self._result_response(result, data=UserCreationStatSerializer(result.data, many=True).data)
