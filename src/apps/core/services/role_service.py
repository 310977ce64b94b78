# src/apps/core/services/role_service.py
"""
Role Service - Role assignment

Handles role operations including:
- Listing and lookup of roles
- Assigning a role to an active user without one
- Removing a user's role
- Seeding the fixed role set
"""

import logging
from typing import Optional

from apps.core.constants import ErrorMessages, Roles
from apps.core.models import Role, User, UserRole
from apps.core.services.mutation import GuardedUserMutation
from apps.core.services.principal import Principal
from apps.core.services.results import ServiceResult
from common.validators import parse_uuid, validate_not_empty

logger = logging.getLogger(__name__)


class RoleService:
    """Role listing and permission-gated role membership changes."""

    def __init__(self, mutation: GuardedUserMutation = None):
        self.mutation = mutation or GuardedUserMutation()

    # ==================== QUERIES ====================

    def list_roles(self) -> ServiceResult:
        return ServiceResult.ok(list(Role.objects.order_by('name')))

    def get_role(self, role_id: str) -> ServiceResult:
        validate_not_empty(role_id, 'role_id')

        uuid_value = parse_uuid(role_id)
        role = Role.objects.filter(id=uuid_value).first() if uuid_value else None
        if role is None:
            return ServiceResult.not_found(ErrorMessages.Role.NOT_FOUND)
        return ServiceResult.ok(role)

    # ==================== MEMBERSHIP ====================

    def assign_role(self, principal: Optional[Principal], user_id: str, role_name: str) -> ServiceResult:
        """
        Assign a role to a user.

        The user must be active and hold no role yet.

        Raises:
            ValueError: If user_id or role_name is empty
        """
        validate_not_empty(user_id, 'user_id')
        validate_not_empty(role_name, 'role_name')

        def _assign(user: User) -> ServiceResult:
            if not user.is_active:
                return ServiceResult.failure(ErrorMessages.Role.INACTIVE_USER)

            role = Role.objects.filter(name=role_name.strip()).first()
            if role is None:
                return ServiceResult.failure(ErrorMessages.Role.INVALID_ROLE)

            if user.user_roles.exists():
                return ServiceResult.failure(ErrorMessages.Role.USER_ALREADY_HAS_ROLE)

            UserRole.objects.create(user=user, role=role)
            logger.info(f"Role {role.name} assigned to user: {user.username}")
            return ServiceResult.ok()

        return self.mutation.execute(principal, user_id, _assign)

    def remove_role(self, principal: Optional[Principal], user_id: str) -> ServiceResult:
        """Remove the role held by a user."""
        validate_not_empty(user_id, 'user_id')

        def _remove(user: User) -> ServiceResult:
            membership = user.user_roles.select_related('role').first()
            if membership is None:
                return ServiceResult.failure(ErrorMessages.Role.MISSING_ROLE)

            role_name = membership.role.name
            membership.delete()
            logger.info(f"Role {role_name} removed from user: {user.username}")
            return ServiceResult.ok()

        return self.mutation.execute(principal, user_id, _remove)

    # ==================== SEEDING ====================

    def seed_roles(self) -> int:
        """Create missing roles. Returns the number created."""
        created = 0
        for role in Roles:
            _, was_created = Role.objects.get_or_create(name=role.value)
            created += int(was_created)

        if created:
            logger.info(f"Seeded {created} roles")
        return created
