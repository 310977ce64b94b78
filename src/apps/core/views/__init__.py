# src/apps/core/views/__init__.py
"""
Identity Service Views

This module exports all ViewSets for the Identity Service API.
"""

from .user import UserViewSet
from .password import PasswordViewSet
from .auth import LoginViewSet
from .role import RoleViewSet
from .audit import AuditLogViewSet
from .country import CountryViewSet

__all__ = [
    'UserViewSet',
    'PasswordViewSet',
    'LoginViewSet',
    'RoleViewSet',
    'AuditLogViewSet',
    'CountryViewSet',
]
