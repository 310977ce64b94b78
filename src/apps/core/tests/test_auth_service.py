# src/apps/core/tests/test_auth_service.py
"""
Tests for AuthService

Tests login functionality including:
- Token issuance and claims
- Inactive and unknown accounts
- Lockout after repeated failures
"""

import pytest
import jwt
from datetime import timedelta

from django.utils import timezone

from apps.core.constants import ErrorMessages, Roles
from apps.core.services import ResultCode
from common.authentication import JWTTokenGenerator


pytestmark = pytest.mark.django_db


class TestLogin:
    """Tests for login."""

    def test_login_success(self, auth_service, plain_user, user_password):
        result = auth_service.login(plain_user.username, user_password)

        assert result.success
        payload = JWTTokenGenerator.decode_token(result.data['token'])
        assert payload['sub'] == str(plain_user.id)
        assert payload['name'] == plain_user.username
        assert payload['roles'] == [Roles.USER.value]
        assert payload['type'] == 'access'

    def test_login_case_insensitive_username(self, auth_service, plain_user, user_password):
        assert auth_service.login(plain_user.username.upper(), user_password).success

    def test_login_updates_last_login(self, auth_service, plain_user, user_password):
        auth_service.login(plain_user.username, user_password)

        plain_user.refresh_from_db()
        assert plain_user.last_login is not None

    def test_login_unknown_user(self, auth_service, db):
        result = auth_service.login('ghost', 'Whatever!123')

        assert result.code == ResultCode.NOT_FOUND

    def test_login_inactive_user(self, auth_service, create_user, user_password):
        user = create_user(username='dormant', active=False)

        result = auth_service.login(user.username, user_password)

        assert result.errors == [ErrorMessages.User.NOT_ACTIVATED]

    def test_login_without_password(self, auth_service, create_user):
        user = create_user(username='nopass', with_password=False)

        result = auth_service.login(user.username, 'Whatever!123')

        assert result.errors == [ErrorMessages.Password.INVALID_CREDENTIALS]

    def test_login_wrong_password(self, auth_service, plain_user):
        result = auth_service.login(plain_user.username, 'WrongPassword!1')

        plain_user.refresh_from_db()
        assert result.errors == [ErrorMessages.Password.INVALID_CREDENTIALS]
        assert plain_user.failed_login_attempts == 1

    @pytest.mark.parametrize('user_name,password', [('', 'secret'), ('name', ''), (None, 'secret')])
    def test_login_empty_arguments(self, auth_service, user_name, password):
        with pytest.raises(ValueError):
            auth_service.login(user_name, password)


class TestLockout:
    """Tests for account lockout."""

    def test_lockout_after_max_attempts(self, auth_service, plain_user, user_password):
        for _ in range(auth_service.MAX_LOGIN_ATTEMPTS):
            auth_service.login(plain_user.username, 'WrongPassword!1')

        plain_user.refresh_from_db()
        assert plain_user.is_locked

        result = auth_service.login(plain_user.username, user_password)
        assert result.errors == [ErrorMessages.Password.INVALID_CREDENTIALS]

    def test_lock_expires(self, auth_service, plain_user, user_password):
        plain_user.failed_login_attempts = auth_service.MAX_LOGIN_ATTEMPTS
        plain_user.locked_until = timezone.now() - timedelta(minutes=1)
        plain_user.save()

        result = auth_service.login(plain_user.username, user_password)

        plain_user.refresh_from_db()
        assert result.success
        assert plain_user.failed_login_attempts == 0
        assert plain_user.locked_until is None


class TestTokens:
    """Tests for the JWT token helpers."""

    def test_tampered_token_rejected(self, auth_service, plain_user):
        token = auth_service.generate_token(plain_user)

        with pytest.raises(jwt.InvalidTokenError):
            JWTTokenGenerator.decode_token(token + 'x')

    def test_expired_token_rejected(self, plain_user, settings):
        settings.JWT_SETTINGS = {**settings.JWT_SETTINGS, 'ACCESS_TOKEN_LIFETIME': timedelta(seconds=-1)}
        token = JWTTokenGenerator.generate_access_token(str(plain_user.id), plain_user.username, [])

        with pytest.raises(jwt.ExpiredSignatureError):
            JWTTokenGenerator.decode_token(token)
