# src/apps/core/services/auth_service.py
"""
Authentication Service

Handles login:
- Username/password verification for active accounts
- Account lockout after repeated failures
- JWT access token issuance
"""

import logging

from django.conf import settings

from apps.core.constants import ErrorMessages
from apps.core.models import User
from apps.core.services.lookup_service import UserLookupService
from apps.core.services.results import ServiceResult
from common.authentication import JWTTokenGenerator
from common.validators import validate_not_empty

logger = logging.getLogger(__name__)


class AuthService:
    """
    Login service issuing signed access tokens.

    Features:
    - Inactive accounts cannot log in
    - Failed attempts are counted; the account locks at the limit
    """

    # Configuration
    MAX_LOGIN_ATTEMPTS = 5
    LOCKOUT_DURATION_MINUTES = 5

    def __init__(self, lookup_service: UserLookupService = None):
        self.lookup_service = lookup_service or UserLookupService()
        self._load_settings()

    def _load_settings(self):
        """Load settings from Django settings"""
        identity_settings = getattr(settings, 'IDENTITY_SETTINGS', {})
        self.MAX_LOGIN_ATTEMPTS = identity_settings.get('MAX_LOGIN_ATTEMPTS', 5)
        self.LOCKOUT_DURATION_MINUTES = identity_settings.get('LOCKOUT_DURATION_MINUTES', 5)

    def login(self, user_name: str, password: str) -> ServiceResult:
        """
        Authenticate with username and password.

        Args:
            user_name: Username
            password: Plaintext password

        Returns:
            ServiceResult with {'token': ...}; NOT_FOUND for an unknown
            user, INVALID for an inactive account or bad credentials

        Raises:
            ValueError: If user_name or password is empty
        """
        validate_not_empty(user_name, 'user_name')
        validate_not_empty(password, 'password')

        lookup = self.lookup_service.find_user_by_username(user_name)
        if not lookup.success:
            logger.warning(f"Login attempt for non-existent user: {user_name}")
            return lookup

        user = lookup.data
        if not user.is_active:
            return ServiceResult.failure(ErrorMessages.User.NOT_ACTIVATED)

        if user.is_locked:
            logger.warning(f"Login attempt for locked account: {user.username}")
            return ServiceResult.failure(ErrorMessages.Password.INVALID_CREDENTIALS)

        if not user.check_password(password):
            locked = user.record_login_failure(
                max_attempts=self.MAX_LOGIN_ATTEMPTS,
                lock_duration=self.LOCKOUT_DURATION_MINUTES
            )
            logger.warning(
                f"Failed login for {user.username}",
                extra={'attempt_count': user.failed_login_attempts, 'locked': locked}
            )
            return ServiceResult.failure(ErrorMessages.Password.INVALID_CREDENTIALS)

        user.record_login_success()
        token = self.generate_token(user)

        logger.info(f"User logged in: {user.username}")
        return ServiceResult.ok({'token': token})

    def generate_token(self, user: User) -> str:
        return JWTTokenGenerator.generate_access_token(
            user_id=str(user.id),
            username=user.username,
            roles=user.get_roles(),
        )
