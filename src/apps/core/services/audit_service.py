# src/apps/core/services/audit_service.py
"""
Audit Logger Service

Handles audit trail operations including:
- Recording authorization breaches, exceptions and slow requests
- Paginated listing with action filter
- Lookup and deletion of single entries
"""

import logging
import traceback
from typing import Mapping, Optional

from apps.core.constants import ErrorMessages
from apps.core.filters import AuditLogFilter, filter_errors
from apps.core.models import AuditLog
from apps.core.services.results import ServiceResult
from common.pagination import DEFAULT_PAGE_SIZE, paginate_queryset
from common.validators import parse_uuid, validate_not_empty, validate_not_none, validate_positive_int

logger = logging.getLogger(__name__)


class AuditLoggerService:
    """Read and write the audit trail."""

    # ==================== QUERIES ====================

    def get_logs(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        action: Optional[str] = None,
        filters: Optional[Mapping] = None
    ) -> ServiceResult:
        """
        List audit logs, newest first.

        Args:
            page: 1-based page number
            page_size: Items per page
            action: Optional AuditLog.Action value to filter on
            filters: Optional AuditLogFilter parameters

        Returns:
            ServiceResult with {'logs': [...], 'pagination': {...}}
        """
        validate_positive_int(page, 'page')
        validate_positive_int(page_size, 'page_size')

        query = AuditLog.objects.all().order_by('-timestamp')
        if action:
            if action not in AuditLog.Action.values:
                return ServiceResult.failure(ErrorMessages.AuditLog.INVALID_ACTION)
            query = query.filter(action=action)

        if filters:
            filterset = AuditLogFilter(filters, queryset=query)
            if not filterset.is_valid():
                return ServiceResult.failure(filter_errors(filterset))
            query = filterset.qs

        logs, pagination = paginate_queryset(query, page, page_size)
        return ServiceResult.ok({'logs': logs, 'pagination': pagination})

    def get_log(self, log_id: str) -> ServiceResult:
        validate_not_empty(log_id, 'log_id')

        uuid_value = parse_uuid(log_id)
        log = AuditLog.objects.filter(id=uuid_value).first() if uuid_value else None
        if log is None:
            return ServiceResult.not_found(ErrorMessages.AuditLog.NOT_FOUND)
        return ServiceResult.ok(log)

    def delete_log(self, log_id: str) -> ServiceResult:
        result = self.get_log(log_id)
        if not result.success:
            return result

        result.data.delete()
        logger.info(f"Audit log deleted: {log_id}")
        return ServiceResult.ok()

    # ==================== WRITERS ====================

    def log_authorization_breach(
        self,
        user_id: Optional[str],
        details: str,
        ip_address: Optional[str] = None
    ) -> AuditLog:
        return self._add_log(AuditLog.Action.AUTHORIZATION_BREACH, details, user_id, ip_address)

    def log_exception(
        self,
        exception: Exception,
        user_id: Optional[str] = None,
        ip_address: Optional[str] = None
    ) -> AuditLog:
        validate_not_none(exception, 'exception')
        details = ''.join(
            traceback.format_exception(type(exception), exception, exception.__traceback__)
        )
        return self._add_log(AuditLog.Action.EXCEPTION, details, user_id, ip_address)

    def log_slow_performance(
        self,
        response_time_ms: float,
        path: str,
        user_id: Optional[str] = None,
        ip_address: Optional[str] = None
    ) -> AuditLog:
        details = (
            f"{ErrorMessages.AuditLog.PERFORMANCE_LOG} "
            f"Path: {path}. Response time: {response_time_ms:.0f} ms."
        )
        return self._add_log(AuditLog.Action.SLOW_PERFORMANCE, details, user_id, ip_address)

    def _add_log(
        self,
        action: str,
        details: str,
        user_id: Optional[str],
        ip_address: Optional[str]
    ) -> AuditLog:
        validate_not_empty(details, 'details')

        entry = AuditLog.objects.create(
            action=action,
            details=details,
            user_id=parse_uuid(user_id) if user_id else None,
            ip_address=ip_address,
        )
        logger.info(f"Audit log recorded: {action}", extra={'audit_log_id': str(entry.id)})
        return entry
