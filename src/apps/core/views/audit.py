# src/apps/core/views/audit.py
"""
Audit Log ViewSet - SuperAdmin only

- GET /audit-logs/ - List audit logs (paginated, optional action filter)
- GET /audit-logs/{id}/ - Get a single entry
- DELETE /audit-logs/{id}/ - Delete an entry
"""

import logging
from rest_framework import viewsets, status

from apps.core.permissions import IsSuperAdminRole
from apps.core.serializers import AuditLogSerializer, AuditLogListQuerySerializer
from apps.core.services import AuditLoggerService
from apps.core.views.base import ServiceResultMixin

logger = logging.getLogger(__name__)


class AuditLogViewSet(ServiceResultMixin, viewsets.ViewSet):

    permission_classes = [IsSuperAdminRole]
    lookup_field = 'log_id'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.audit_service = AuditLoggerService()

    def list(self, request):
        query = AuditLogListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        result = self.audit_service.get_logs(filters=request.query_params, **query.validated_data)
        if not result.success:
            return self._error_response(result)

        return self._result_response(result, data={
            'logs': AuditLogSerializer(result.data['logs'], many=True).data,
            'pagination': result.data['pagination'],
        })

    def retrieve(self, request, log_id=None):
        result = self.audit_service.get_log(log_id)
        if not result.success:
            return self._error_response(result)
        return self._result_response(result, data=AuditLogSerializer(result.data).data)

    def destroy(self, request, log_id=None):
        result = self.audit_service.delete_log(log_id)
        return self._result_response(result, status_code=status.HTTP_204_NO_CONTENT)
