# src/apps/core/services/password_history_service.py
"""
Password History Service

Records password hashes and answers whether a plaintext password was
used before by a user.
"""

import logging

from django.contrib.auth.hashers import check_password
from django.db import transaction
from django.utils import timezone

from apps.core.models import PasswordHistory
from apps.core.services.password_history_cleanup_service import PasswordHistoryCleanupService
from apps.core.services.requests import SearchPasswordHistoryRequest, StorePasswordHistoryRequest
from common.validators import parse_uuid, validate_not_empty, validate_not_none

logger = logging.getLogger(__name__)


class PasswordHistoryService:
    """Append-only password history with reuse detection."""

    def __init__(self, cleanup_service: PasswordHistoryCleanupService = None):
        self.cleanup_service = cleanup_service or PasswordHistoryCleanupService()

    def add_password_history(self, request: StorePasswordHistoryRequest) -> PasswordHistory:
        """
        Record a password hash and prune the user's history.

        The insert and the prune run in one transaction; pruning sees the
        new entry.

        Raises:
            ValueError: If the request or one of its fields is missing
        """
        validate_not_none(request, 'request')
        validate_not_empty(request.user_id, 'user_id')
        validate_not_empty(request.password_hash, 'password_hash')

        with transaction.atomic():
            entry = PasswordHistory.objects.create(
                user_id=request.user_id,
                password_hash=request.password_hash,
                created_at=timezone.now(),
            )
            self.cleanup_service.remove_old_passwords(str(request.user_id))

        return entry

    def find_password_hash(self, request: SearchPasswordHistoryRequest) -> bool:
        """
        Check a plaintext password against every stored hash for the user.

        Returns:
            True if any stored hash verifies; False for an empty history
        """
        validate_not_none(request, 'request')
        validate_not_empty(request.user_id, 'user_id')
        validate_not_empty(request.password, 'password')

        uuid_value = parse_uuid(request.user_id)
        if uuid_value is None:
            return False

        hashes = PasswordHistory.objects.filter(user_id=uuid_value).values_list('password_hash', flat=True)
        return any(check_password(request.password, password_hash) for password_hash in hashes)
