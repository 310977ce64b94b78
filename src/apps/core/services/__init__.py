# src/apps/core/services/__init__.py
"""
Identity Service - Business Logic Layer

This module exports all service classes for the Identity Service including:
- PermissionService: Role hierarchy authorization
- PasswordService: Password set and rotation
- PasswordHistoryService / PasswordHistoryCleanupService: Reuse detection and retention
- UserService, RoleService: User and role management
- AuthService: Login and token issuance
- AuditLoggerService, CountryService: Audit trail and reference data
"""

from .results import ResultCode, ServiceResult
from .principal import Principal

from .requests import (
    SetPasswordRequest,
    UpdatePasswordRequest,
    StorePasswordHistoryRequest,
    SearchPasswordHistoryRequest,
)

from .audit_service import AuditLoggerService
from .lookup_service import UserLookupService
from .permission_service import PermissionService
from .mutation import GuardedUserMutation

from .password_history_cleanup_service import PasswordHistoryCleanupService
from .password_history_service import PasswordHistoryService
from .password_service import PasswordService

from .country_service import CountryService
from .role_service import RoleService
from .user_service import UserService
from .auth_service import AuthService

__all__ = [
    # Results
    'ResultCode',
    'ServiceResult',
    'Principal',

    # Requests
    'SetPasswordRequest',
    'UpdatePasswordRequest',
    'StorePasswordHistoryRequest',
    'SearchPasswordHistoryRequest',

    # Authorization
    'UserLookupService',
    'PermissionService',
    'GuardedUserMutation',

    # Password lifecycle
    'PasswordHistoryCleanupService',
    'PasswordHistoryService',
    'PasswordService',

    # Management
    'UserService',
    'RoleService',
    'CountryService',
    'AuthService',
    'AuditLoggerService',
]
