# src/apps/core/permissions.py
"""
DRF Permission Classes

Role-based gates for endpoints. Per-user access rules (self-access and the
role hierarchy) are enforced by PermissionService inside the services.
"""

import logging

from rest_framework import permissions

from apps.core.constants import ADMIN_ROLES, SUPER_ADMIN_ROLES, ErrorMessages

logger = logging.getLogger(__name__)


class IsAuthenticated(permissions.BasePermission):
    """
    Permission class that requires an authenticated principal with an id.
    """

    message = ErrorMessages.Authorization.UNAUTHORIZED

    def has_permission(self, request, view) -> bool:
        return bool(
            request.user and
            getattr(request.user, 'is_authenticated', False) and
            getattr(request.user, 'id', None)
        )


class HasAnyRole(IsAuthenticated):
    """
    Permission class that requires one of ``allowed_roles``.

    Usage:
        permission_classes = [IsAdminRole]
    """

    message = ErrorMessages.Authorization.FORBIDDEN
    allowed_roles = []

    def has_permission(self, request, view) -> bool:
        if not super().has_permission(request, view):
            return False

        roles = getattr(request.user, 'roles', None) or []
        allowed = bool(set(roles) & set(self.allowed_roles))
        if not allowed:
            logger.warning(
                f"Role check failed for user {request.user.id} on {request.path}",
                extra={'required_roles': self.allowed_roles}
            )
        return allowed


class IsAdminRole(HasAnyRole):
    """Admin or SuperAdmin."""
    allowed_roles = ADMIN_ROLES


class IsSuperAdminRole(HasAnyRole):
    """SuperAdmin only."""
    allowed_roles = SUPER_ADMIN_ROLES
