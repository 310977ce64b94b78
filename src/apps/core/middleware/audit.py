# src/apps/core/middleware/audit.py
"""
Audit Middleware

Writes audit log entries for:
- Unhandled exceptions raised while serving a request
- Requests slower than the configured threshold
"""

import logging
import time

from django.conf import settings
from django.utils.deprecation import MiddlewareMixin

from apps.core.services.audit_service import AuditLoggerService
from apps.core.services.principal import get_client_ip

logger = logging.getLogger(__name__)


class AuditMiddleware(MiddlewareMixin):
    """
    Middleware that records exceptions and slow requests in the audit log.

    DRF views report unhandled exceptions through the exception handler,
    which marks the request with ``_unhandled_exception``.
    """

    # Endpoints to exclude from audit logging
    EXCLUDED_ENDPOINTS = [
        '/health/',
        '/api/schema/',
        '/api/docs/',
    ]

    DEFAULT_SLOW_REQUEST_THRESHOLD_MS = 1000

    def __init__(self, get_response):
        super().__init__(get_response)
        self.audit_service = AuditLoggerService()

    def process_request(self, request):
        request._audit_start_time = time.monotonic()
        return None

    def process_exception(self, request, exception):
        """Called for exceptions that escape the view."""
        request._unhandled_exception = exception
        return None

    def process_response(self, request, response):
        if self._is_excluded(request.path):
            return response

        exception = getattr(request, '_unhandled_exception', None)
        if exception is not None:
            self._record(self.audit_service.log_exception, exception, request)

        start_time = getattr(request, '_audit_start_time', None)
        if start_time is not None:
            duration_ms = (time.monotonic() - start_time) * 1000
            if duration_ms > self._threshold_ms():
                self._record(self.audit_service.log_slow_performance, duration_ms, request, request.path)

        return response

    def _record(self, writer, subject, request, *args) -> None:
        user = getattr(request, 'user', None)
        user_id = getattr(user, 'id', None) if getattr(user, 'is_authenticated', False) else None
        try:
            writer(subject, *args, user_id=user_id, ip_address=get_client_ip(request))
        except Exception as e:
            logger.error(f"Failed to create audit log: {e}")

    def _threshold_ms(self) -> float:
        identity_settings = getattr(settings, 'IDENTITY_SETTINGS', {})
        return identity_settings.get('SLOW_REQUEST_THRESHOLD_MS', self.DEFAULT_SLOW_REQUEST_THRESHOLD_MS)

    def _is_excluded(self, path: str) -> bool:
        """Check if path should be excluded from auditing."""
        for excluded in self.EXCLUDED_ENDPOINTS:
            if path.startswith(excluded):
                return True
        return False
