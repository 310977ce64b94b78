# src/apps/core/services/password_history_cleanup_service.py
"""
Password History Cleanup Service

Enforces the password history retention window and erases history when
an account is deleted.
"""

import logging

from django.conf import settings

from apps.core.constants import PASSWORD_HISTORY_LIMIT
from apps.core.models import PasswordHistory
from common.validators import parse_uuid, validate_not_empty

logger = logging.getLogger(__name__)


class PasswordHistoryCleanupService:
    """Trim history to the newest entries, or delete it entirely."""

    def __init__(self, history_limit: int = None):
        if history_limit is None:
            identity_settings = getattr(settings, 'IDENTITY_SETTINGS', {})
            history_limit = identity_settings.get('PASSWORD_HISTORY_LIMIT', PASSWORD_HISTORY_LIMIT)
        self.history_limit = history_limit

    def remove_old_passwords(self, user_id: str) -> int:
        """
        Keep only the newest entries for a user.

        Entries are ordered by creation time, ties broken by id.

        Returns:
            Number of deleted entries

        Raises:
            ValueError: If user_id is null, empty or whitespace
        """
        validate_not_empty(user_id, 'user_id')

        uuid_value = parse_uuid(user_id)
        if uuid_value is None:
            return 0

        stale_ids = list(
            PasswordHistory.objects
            .filter(user_id=uuid_value)
            .order_by('-created_at', '-id')
            .values_list('id', flat=True)[self.history_limit:]
        )
        if not stale_ids:
            return 0

        deleted, _ = PasswordHistory.objects.filter(id__in=stale_ids).delete()
        logger.debug(f"Pruned {deleted} password history entries for user {user_id}")
        return deleted

    def delete_password_history(self, user_id: str) -> int:
        """
        Delete every history entry for a user.

        Returns:
            Number of deleted entries

        Raises:
            ValueError: If user_id is null, empty or whitespace
        """
        validate_not_empty(user_id, 'user_id')

        uuid_value = parse_uuid(user_id)
        if uuid_value is None:
            return 0

        deleted, _ = PasswordHistory.objects.filter(user_id=uuid_value).delete()
        if deleted:
            logger.info(f"Deleted {deleted} password history entries for user {user_id}")
        return deleted
