# src/apps/core/views/role.py
"""
Role ViewSet - SuperAdmin only

- GET /roles/ - List roles
- POST /roles/users/{id}/roles/ - Assign a role to a user
- DELETE /roles/users/{id}/roles/ - Remove the user's role
"""

import logging
from rest_framework import viewsets
from rest_framework.decorators import action

from apps.core.permissions import IsSuperAdminRole
from apps.core.serializers import RoleSerializer, AssignRoleSerializer
from apps.core.services import RoleService
from apps.core.views.base import ServiceResultMixin

logger = logging.getLogger(__name__)


class RoleViewSet(ServiceResultMixin, viewsets.ViewSet):

    permission_classes = [IsSuperAdminRole]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.role_service = RoleService()

    def list(self, request):
        result = self.role_service.list_roles()
        return self._result_response(result, data=RoleSerializer(result.data, many=True).data)

    @action(detail=False, methods=['post', 'delete'], url_path=r'users/(?P<user_id>[^/.]+)/roles')
    def user_roles(self, request, user_id=None):
        if request.method == 'DELETE':
            result = self.role_service.remove_role(self.get_principal(), user_id)
            return self._result_response(result)

        serializer = AssignRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.role_service.assign_role(
            self.get_principal(),
            user_id,
            serializer.validated_data['role_name']
        )
        return self._result_response(result)
