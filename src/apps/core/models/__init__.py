# src/apps/core/models/__init__.py
"""
Identity Service Models

This module exports all models for the Identity Service including:
- User management (User)
- Roles (Role, UserRole)
- Password lifecycle (PasswordHistory)
- Audit logging (AuditLog)
- Reference data (Country)
"""

from .user import User
from .role import Role, UserRole
from .password_history import PasswordHistory
from .audit import AuditLog
from .country import Country

__all__ = [
    # User models
    'User',

    # Roles
    'Role',
    'UserRole',

    # Password lifecycle
    'PasswordHistory',

    # Audit
    'AuditLog',

    # Reference data
    'Country',
]
