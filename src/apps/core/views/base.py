# src/apps/core/views/base.py
"""
Shared view helpers

Maps ServiceResult values onto the standard response envelope.
"""

from rest_framework import status
from rest_framework.response import Response

from apps.core.services import Principal, ResultCode, ServiceResult

RESULT_STATUS = {
    ResultCode.INVALID: status.HTTP_400_BAD_REQUEST,
    ResultCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ResultCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ResultCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
}


class ServiceResultMixin:
    """Response helpers for views backed by service results."""

    def get_principal(self) -> Principal:
        return Principal.from_request(self.request)

    def _error_response(self, result: ServiceResult) -> Response:
        """Create standardized error response."""
        return Response({
            'success': False,
            'error': {
                'code': result.code.value.upper(),
                'message': result.errors[0] if result.errors else '',
                'details': result.errors,
            }
        }, status=RESULT_STATUS.get(result.code, status.HTTP_400_BAD_REQUEST))

    def _result_response(self, result: ServiceResult, data=None, status_code: int = status.HTTP_200_OK) -> Response:
        if not result.success:
            return self._error_response(result)
        if status_code == status.HTTP_204_NO_CONTENT:
            return Response(status=status_code)
        return Response({'success': True, 'data': data}, status=status_code)
