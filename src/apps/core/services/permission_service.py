# src/apps/core/services/permission_service.py
"""
Permission Service - Role hierarchy authorization

Decides whether an acting principal may operate on a target user:
- Self-access is always allowed
- SuperAdmin may access anyone
- Otherwise the actor's rank must be strictly higher than the target's
"""

import logging
from typing import Optional

from apps.core.constants import ErrorMessages, Roles, highest_rank, rank_of
from apps.core.services.audit_service import AuditLoggerService
from apps.core.services.lookup_service import UserLookupService
from apps.core.services.principal import Principal
from apps.core.services.results import ServiceResult
from common.validators import same_identifier

logger = logging.getLogger(__name__)


class PermissionService:
    """
    Role hierarchy evaluator (User < Admin < SuperAdmin).

    Every negative path returns False; no exception is raised for a denial.
    """

    def __init__(
        self,
        lookup_service: UserLookupService = None,
        audit_service: AuditLoggerService = None
    ):
        self.lookup_service = lookup_service or UserLookupService()
        self.audit_service = audit_service or AuditLoggerService()

    def validate_permission(self, principal: Optional[Principal], user_id: Optional[str]) -> bool:
        """
        Check whether the principal may act on the target user.

        Args:
            principal: Acting principal, or None when unauthenticated
            user_id: Target user id

        Returns:
            True if access is allowed
        """
        if principal is None or not principal.id:
            return False

        if user_id is None or not str(user_id).strip():
            return False

        if same_identifier(principal.id, user_id):
            return True

        lookup = self.lookup_service.find_user_by_id(str(user_id))
        if not lookup.success:
            return False

        actor_rank = highest_rank(principal.roles)
        if actor_rank == 0:
            return False

        if actor_rank == rank_of(Roles.SUPER_ADMIN):
            return True

        # A target without roles ranks as a plain user.
        target_rank = highest_rank(lookup.data.get_roles()) or rank_of(Roles.USER)
        return actor_rank > target_rank

    def validate_permissions(self, principal: Optional[Principal], user_id: Optional[str]) -> ServiceResult:
        """
        Result-returning variant of validate_permission.

        A denial is recorded as an authorization breach in the audit log.
        """
        if self.validate_permission(principal, user_id):
            return ServiceResult.ok()

        actor_id = principal.id if principal else None
        logger.warning(f"Forbidden access by {actor_id} to user {user_id}")
        self.audit_service.log_authorization_breach(
            user_id=actor_id,
            details=f"User {actor_id} attempted to access user {user_id} without permission",
            ip_address=principal.ip_address if principal else None,
        )
        return ServiceResult.forbidden(ErrorMessages.Authorization.FORBIDDEN)
