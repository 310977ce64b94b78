# src/common/exceptions.py
"""
Exception Handler

Renders every error raised inside a DRF view as
``{"success": false, "error": {"code", "message", ...}}``.
"""

import logging
import traceback
from typing import Dict, Optional
from rest_framework import status
from rest_framework.views import exception_handler
from rest_framework.response import Response
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from django.conf import settings

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = 'An unexpected error occurred. Please try again later.'


def custom_exception_handler(exc, context) -> Optional[Response]:
    """
    Custom exception handler for DRF.

    - DRF exceptions keep their status and are reformatted
    - ValueError (argument guards in the service layer) becomes 400
    - Anything else is logged, flagged for the audit middleware and becomes 500
    """

    # Get the request ID for tracing
    request = context.get('request')
    request_id = getattr(request, 'request_id', None) if request else None

    # Call DRF's default exception handler first
    response = exception_handler(exc, context)
    if response is not None:
        return format_error_response(exc, response, request_id)

    if isinstance(exc, ValueError):
        return error_response('BAD_REQUEST', str(exc), status.HTTP_400_BAD_REQUEST, request_id)

    if isinstance(exc, DjangoValidationError):
        errors = exc.message_dict if hasattr(exc, 'message_dict') else {'detail': exc.messages}
        return error_response(
            'VALIDATION_ERROR',
            'Validation error',
            status.HTTP_400_BAD_REQUEST,
            request_id,
            details=errors
        )

    if isinstance(exc, Http404):
        return error_response('NOT_FOUND', str(exc) or 'Resource not found', status.HTTP_404_NOT_FOUND, request_id)

    logger.exception(
        f"Unhandled exception: {exc}",
        extra={
            'request_id': request_id,
            'exception_type': type(exc).__name__,
        }
    )

    # Picked up by the audit middleware
    django_request = getattr(request, '_request', request)
    if django_request is not None:
        django_request._unhandled_exception = exc

    if settings.DEBUG:
        return error_response(
            'INTERNAL_ERROR',
            str(exc),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            request_id,
            type=type(exc).__name__,
            traceback=traceback.format_exc().split('\n'),
        )

    return error_response('INTERNAL_ERROR', INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR, request_id)


def error_response(code: str, message: str, status_code: int, request_id: str = None, **extra) -> Response:
    """Build an error envelope response."""
    error = {'code': code, 'message': message, 'request_id': request_id}
    error.update(extra)
    return Response({'success': False, 'error': error}, status=status_code)


def format_error_response(exc, response: Response, request_id: str = None) -> Response:
    """Rewrite a DRF error response into the error envelope."""

    error_data = {
        'success': False,
        'error': {
            'code': _default_error_code(response.status_code),
            'message': get_error_message(exc, response),
            'request_id': request_id,
        }
    }

    # Field-level validation errors from DRF
    if isinstance(response.data, dict) and 'detail' not in response.data:
        error_data['error']['details'] = response.data

    response.data = error_data
    return response


def get_error_message(exc, response: Response) -> str:
    """Extract error message from exception or response"""

    detail = getattr(exc, 'detail', None)
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list) and detail:
        return str(detail[0])
    if isinstance(detail, dict):
        return str(detail.get('detail', 'Validation error.'))

    if isinstance(response.data, dict):
        return str(response.data.get('detail', response.data))

    return str(response.data)


def _default_error_code(status_code: int) -> str:
    codes: Dict[int, str] = {
        status.HTTP_400_BAD_REQUEST: 'VALIDATION_ERROR',
        status.HTTP_401_UNAUTHORIZED: 'UNAUTHORIZED',
        status.HTTP_403_FORBIDDEN: 'FORBIDDEN',
        status.HTTP_404_NOT_FOUND: 'NOT_FOUND',
        status.HTTP_405_METHOD_NOT_ALLOWED: 'METHOD_NOT_ALLOWED',
    }
    return codes.get(status_code, 'ERROR')
