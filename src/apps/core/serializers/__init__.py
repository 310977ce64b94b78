# src/apps/core/serializers/__init__.py
"""
Identity Service Serializers

This module exports all serializers for the Identity Service API including:
- User serializers (CRUD, statistics)
- Authentication and password serializers
- Role, audit log and country serializers
"""

from .user import (
    UserSerializer,
    UserListSerializer,
    UserCreateSerializer,
    UserUpdateSerializer,
    UserListQuerySerializer,
    UserStateMetricsSerializer,
    UserCreationStatSerializer,
)

from .auth import (
    LoginSerializer,
    TokenResponseSerializer,
    SetPasswordSerializer,
    UpdatePasswordSerializer,
)

from .role import (
    RoleSerializer,
    AssignRoleSerializer,
)

from .audit import (
    AuditLogSerializer,
    AuditLogListQuerySerializer,
)

from .country import CountrySerializer

__all__ = [
    # User
    'UserSerializer',
    'UserListSerializer',
    'UserCreateSerializer',
    'UserUpdateSerializer',
    'UserListQuerySerializer',
    'UserStateMetricsSerializer',
    'UserCreationStatSerializer',

    # Auth
    'LoginSerializer',
    'TokenResponseSerializer',
    'SetPasswordSerializer',
    'UpdatePasswordSerializer',

    # Role
    'RoleSerializer',
    'AssignRoleSerializer',

    # Audit
    'AuditLogSerializer',
    'AuditLogListQuerySerializer',

    # Country
    'CountrySerializer',
]
