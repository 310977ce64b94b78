# src/apps/core/services/results.py
"""
Service result types

Business outcomes (not found, forbidden, validation) are returned as
``ServiceResult`` values. Argument errors raise ``ValueError`` instead.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Union


class ResultCode(str, Enum):
    """Outcome category, mapped to an HTTP status by the views."""
    OK = 'ok'
    INVALID = 'invalid'
    NOT_FOUND = 'not_found'
    FORBIDDEN = 'forbidden'
    UNAUTHORIZED = 'unauthorized'


@dataclass
class ServiceResult:
    """Uniform success/failure value carrying error messages and payload."""

    success: bool
    errors: List[str] = field(default_factory=list)
    code: ResultCode = ResultCode.OK
    data: Any = None

    @classmethod
    def ok(cls, data: Any = None) -> 'ServiceResult':
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        errors: Union[str, Iterable[str]],
        code: ResultCode = ResultCode.INVALID
    ) -> 'ServiceResult':
        if isinstance(errors, str):
            errors = [errors]
        return cls(success=False, errors=list(errors), code=code)

    @classmethod
    def not_found(cls, message: str) -> 'ServiceResult':
        return cls.failure(message, ResultCode.NOT_FOUND)

    @classmethod
    def forbidden(cls, message: str) -> 'ServiceResult':
        return cls.failure(message, ResultCode.FORBIDDEN)
