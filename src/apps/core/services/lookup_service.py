# src/apps/core/services/lookup_service.py
"""
User Lookup Service

Resolves users by id or username into service results.
"""

import logging

from apps.core.constants import ErrorMessages
from apps.core.models import User
from apps.core.services.results import ServiceResult
from common.validators import parse_uuid, validate_not_empty

logger = logging.getLogger(__name__)


class UserLookupService:
    """Find users, reporting absence as a NOT_FOUND result."""

    def find_user_by_id(self, user_id: str, for_update: bool = False) -> ServiceResult:
        """
        Look up a user by id.

        Args:
            user_id: User UUID as string
            for_update: Lock the row; callers must be inside a transaction

        Returns:
            ServiceResult with the User as data, or NOT_FOUND

        Raises:
            ValueError: If user_id is null or empty
        """
        validate_not_empty(user_id, 'user_id')

        uuid_value = parse_uuid(user_id)
        if uuid_value is None:
            return ServiceResult.not_found(ErrorMessages.User.NOT_FOUND)

        query = User.objects.all()
        if for_update:
            query = query.select_for_update()

        try:
            user = query.get(id=uuid_value)
        except User.DoesNotExist:
            return ServiceResult.not_found(ErrorMessages.User.NOT_FOUND)

        return ServiceResult.ok(user)

    def find_user_by_username(self, username: str) -> ServiceResult:
        """Look up a user by username (case-insensitive)."""
        validate_not_empty(username, 'username')

        try:
            user = User.objects.get(username__iexact=username.strip())
        except User.DoesNotExist:
            return ServiceResult.not_found(ErrorMessages.User.NOT_FOUND)

        return ServiceResult.ok(user)
