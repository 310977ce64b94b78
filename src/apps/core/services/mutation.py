# src/apps/core/services/mutation.py
"""
Permission-gated user mutation

Shared template for every sensitive operation on another account:
validate id -> permission check -> locked lookup -> operation, all inside
one transaction. A failed operation rolls the transaction back.
"""

import logging
from typing import Callable, Optional

from django.db import transaction

from apps.core.models import User
from apps.core.services.lookup_service import UserLookupService
from apps.core.services.permission_service import PermissionService
from apps.core.services.principal import Principal
from apps.core.services.results import ServiceResult
from common.validators import validate_not_empty

logger = logging.getLogger(__name__)


class GuardedUserMutation:
    """Run an operation on a target user only if the principal may act on it."""

    def __init__(
        self,
        permission_service: PermissionService = None,
        lookup_service: UserLookupService = None
    ):
        self.lookup_service = lookup_service or UserLookupService()
        self.permission_service = permission_service or PermissionService(lookup_service=self.lookup_service)

    def execute(
        self,
        principal: Optional[Principal],
        user_id: str,
        operation: Callable[[User], ServiceResult],
        missing_result: ServiceResult = None,
        for_update: bool = True
    ) -> ServiceResult:
        """
        Args:
            principal: Acting principal
            user_id: Target user id
            operation: Applied to the locked target user
            missing_result: Returned instead of NOT_FOUND when the target is absent
            for_update: Lock the target row for the duration of the operation

        Returns:
            FORBIDDEN, the lookup failure, or the operation's result

        Raises:
            ValueError: If user_id is null or empty
        """
        validate_not_empty(user_id, 'user_id')

        permission = self.permission_service.validate_permissions(principal, user_id)
        if not permission.success:
            return permission

        with transaction.atomic():
            lookup = self.lookup_service.find_user_by_id(user_id, for_update=for_update)
            if not lookup.success:
                return missing_result if missing_result is not None else lookup

            result = operation(lookup.data)
            if not result.success:
                transaction.set_rollback(True)
            return result
