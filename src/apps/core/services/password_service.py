# src/apps/core/services/password_service.py
"""
Password Service - Password lifecycle

Handles the two password mutation entry points:
- Set password: one-time first password, no permission check
- Update password: permission-gated rotation with reuse detection

Both paths write exactly one history entry on success and none on failure.
"""

import logging
from typing import Optional

from django.db import transaction

from apps.core.constants import ErrorMessages
from apps.core.models import User
from apps.core.services.lookup_service import UserLookupService
from apps.core.services.mutation import GuardedUserMutation
from apps.core.services.password_history_service import PasswordHistoryService
from apps.core.services.principal import Principal
from apps.core.services.requests import (
    SearchPasswordHistoryRequest,
    SetPasswordRequest,
    StorePasswordHistoryRequest,
    UpdatePasswordRequest,
)
from apps.core.services.results import ServiceResult
from common.validators import validate_not_empty, validate_not_none

logger = logging.getLogger(__name__)


class PasswordService:
    """Set and rotate user passwords."""

    def __init__(
        self,
        lookup_service: UserLookupService = None,
        history_service: PasswordHistoryService = None,
        mutation: GuardedUserMutation = None
    ):
        self.lookup_service = lookup_service or UserLookupService()
        self.history_service = history_service or PasswordHistoryService()
        self.mutation = mutation or GuardedUserMutation(lookup_service=self.lookup_service)

    # ==================== SET PASSWORD ====================

    def set_password(self, user_id: str, request: SetPasswordRequest) -> ServiceResult:
        """
        Attach the first password to an account.

        Args:
            user_id: Target user id
            request: Password and its confirmation

        Returns:
            ServiceResult; fails with a mismatch, NOT_FOUND, already-set or
            the password policy violations

        Raises:
            ValueError: If an argument is missing
        """
        validate_not_empty(user_id, 'user_id')
        validate_not_none(request, 'request')
        validate_not_empty(request.password, 'password')
        validate_not_empty(request.password_confirmed, 'password_confirmed')

        if request.password != request.password_confirmed:
            return ServiceResult.failure(ErrorMessages.Password.MISMATCH)

        with transaction.atomic():
            lookup = self.lookup_service.find_user_by_id(user_id, for_update=True)
            if not lookup.success:
                return lookup

            user = lookup.data
            if user.has_password:
                return ServiceResult.failure(ErrorMessages.Password.ALREADY_SET)

            errors = user.add_password(request.password)
            if errors:
                return ServiceResult.failure(errors)

            self._record_history(user)

        logger.info(f"Password set for user: {user.username}")
        return ServiceResult.ok()

    # ==================== UPDATE PASSWORD ====================

    def update_password(
        self,
        principal: Optional[Principal],
        user_id: str,
        request: UpdatePasswordRequest
    ) -> ServiceResult:
        """
        Rotate a password for the principal itself or a lower-ranked user.

        A missing user and a user without a password both report invalid
        credentials.

        Returns:
            ServiceResult; fails with FORBIDDEN, invalid credentials,
            reuse or the password policy violations

        Raises:
            ValueError: If an argument is missing
        """
        validate_not_empty(user_id, 'user_id')
        validate_not_none(request, 'request')
        validate_not_empty(request.current_password, 'current_password')
        validate_not_empty(request.new_password, 'new_password')

        result = self.mutation.execute(
            principal,
            user_id,
            lambda user: self._change_password(user, request),
            missing_result=ServiceResult.failure(ErrorMessages.Password.INVALID_CREDENTIALS),
        )
        if result.success:
            logger.info(f"Password changed for user: {user_id}")
        return result

    def _change_password(self, user: User, request: UpdatePasswordRequest) -> ServiceResult:
        if not user.has_password or not user.check_password(request.current_password):
            return ServiceResult.failure(ErrorMessages.Password.INVALID_CREDENTIALS)

        reused = self.history_service.find_password_hash(
            SearchPasswordHistoryRequest(user_id=str(user.id), password=request.new_password)
        )
        if reused:
            return ServiceResult.failure(ErrorMessages.Password.CANNOT_REUSE)

        errors = user.change_password(request.current_password, request.new_password)
        if errors:
            return ServiceResult.failure(errors)

        self._record_history(user)
        return ServiceResult.ok()

    def _record_history(self, user: User) -> None:
        self.history_service.add_password_history(
            StorePasswordHistoryRequest(user_id=str(user.id), password_hash=user.password)
        )
