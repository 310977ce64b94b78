# src/apps/core/tests/test_password_service.py
"""
Tests for PasswordService

Tests the password lifecycle including:
- First password (set)
- Rotation with permission checks and reuse detection
- History bookkeeping on success and failure
"""

import pytest
from uuid import uuid4

from apps.core.constants import ErrorMessages, Roles
from apps.core.models import PasswordHistory, User
from apps.core.services import Principal, ResultCode, SetPasswordRequest, UpdatePasswordRequest


pytestmark = pytest.mark.django_db

FIRST_PASSWORD = 'FirstSecret!2024'
SECOND_PASSWORD = 'SecondSecret!2024'


def history_count(user: User) -> int:
    return PasswordHistory.objects.filter(user=user).count()


class TestSetPassword:
    """Tests for attaching the first password."""

    def test_set_password_success(self, password_service, new_user):
        result = password_service.set_password(
            str(new_user.id),
            SetPasswordRequest(password=FIRST_PASSWORD, password_confirmed=FIRST_PASSWORD)
        )

        new_user.refresh_from_db()
        assert result.success
        assert new_user.check_password(FIRST_PASSWORD)
        assert history_count(new_user) == 1

    def test_history_stores_the_hash(self, password_service, new_user):
        """Test history keeps the hash, never the plaintext."""
        password_service.set_password(
            str(new_user.id),
            SetPasswordRequest(password=FIRST_PASSWORD, password_confirmed=FIRST_PASSWORD)
        )

        new_user.refresh_from_db()
        entry = PasswordHistory.objects.get(user=new_user)
        assert entry.password_hash == new_user.password
        assert entry.password_hash != FIRST_PASSWORD

    def test_set_password_mismatch(self, password_service, new_user):
        result = password_service.set_password(
            str(new_user.id),
            SetPasswordRequest(password=FIRST_PASSWORD, password_confirmed=SECOND_PASSWORD)
        )

        new_user.refresh_from_db()
        assert not result.success
        assert result.errors == [ErrorMessages.Password.MISMATCH]
        assert not new_user.has_password
        assert history_count(new_user) == 0

    def test_set_password_unknown_user(self, password_service):
        result = password_service.set_password(
            str(uuid4()),
            SetPasswordRequest(password=FIRST_PASSWORD, password_confirmed=FIRST_PASSWORD)
        )

        assert not result.success
        assert result.code == ResultCode.NOT_FOUND

    def test_set_password_already_set(self, password_service, plain_user, user_password):
        """Test the one-time set cannot overwrite an existing password."""
        result = password_service.set_password(
            str(plain_user.id),
            SetPasswordRequest(password=FIRST_PASSWORD, password_confirmed=FIRST_PASSWORD)
        )

        plain_user.refresh_from_db()
        assert not result.success
        assert result.errors == [ErrorMessages.Password.ALREADY_SET]
        assert plain_user.check_password(user_password)
        assert history_count(plain_user) == 0

    def test_set_password_policy_violation(self, password_service, new_user):
        """Test a weak password is rejected with the policy messages."""
        result = password_service.set_password(
            str(new_user.id),
            SetPasswordRequest(password='short', password_confirmed='short')
        )

        new_user.refresh_from_db()
        assert not result.success
        assert result.code == ResultCode.INVALID
        assert result.errors
        assert not new_user.has_password
        assert history_count(new_user) == 0

    @pytest.mark.parametrize('user_id', [None, '', '  '])
    def test_set_password_empty_user_id(self, password_service, user_id):
        with pytest.raises(ValueError):
            password_service.set_password(
                user_id,
                SetPasswordRequest(password=FIRST_PASSWORD, password_confirmed=FIRST_PASSWORD)
            )

    def test_set_password_missing_request(self, password_service, new_user):
        with pytest.raises(ValueError):
            password_service.set_password(str(new_user.id), None)


class TestUpdatePassword:
    """Tests for password rotation."""

    @pytest.fixture
    def user_with_history(self, password_service, new_user):
        """Inactive user whose first password went through the set flow."""
        password_service.set_password(
            str(new_user.id),
            SetPasswordRequest(password=FIRST_PASSWORD, password_confirmed=FIRST_PASSWORD)
        )
        new_user.refresh_from_db()
        return new_user

    def test_update_own_password(self, password_service, user_with_history, principal_for):
        result = password_service.update_password(
            principal_for(user_with_history),
            str(user_with_history.id),
            UpdatePasswordRequest(current_password=FIRST_PASSWORD, new_password=SECOND_PASSWORD)
        )

        user_with_history.refresh_from_db()
        assert result.success
        assert user_with_history.check_password(SECOND_PASSWORD)
        assert history_count(user_with_history) == 2

    def test_update_wrong_current_password(self, password_service, user_with_history, principal_for):
        result = password_service.update_password(
            principal_for(user_with_history),
            str(user_with_history.id),
            UpdatePasswordRequest(current_password='WrongSecret!2024', new_password=SECOND_PASSWORD)
        )

        user_with_history.refresh_from_db()
        assert not result.success
        assert result.errors == [ErrorMessages.Password.INVALID_CREDENTIALS]
        assert user_with_history.check_password(FIRST_PASSWORD)
        assert history_count(user_with_history) == 1

    def test_update_reuses_history(self, password_service, user_with_history, principal_for):
        """Test a password found in the history is refused."""
        principal = principal_for(user_with_history)
        password_service.update_password(
            principal,
            str(user_with_history.id),
            UpdatePasswordRequest(current_password=FIRST_PASSWORD, new_password=SECOND_PASSWORD)
        )

        result = password_service.update_password(
            principal,
            str(user_with_history.id),
            UpdatePasswordRequest(current_password=SECOND_PASSWORD, new_password=FIRST_PASSWORD)
        )

        user_with_history.refresh_from_db()
        assert not result.success
        assert result.errors == [ErrorMessages.Password.CANNOT_REUSE]
        assert user_with_history.check_password(SECOND_PASSWORD)
        assert history_count(user_with_history) == 2

    def test_update_same_as_current(self, password_service, user_with_history, principal_for):
        result = password_service.update_password(
            principal_for(user_with_history),
            str(user_with_history.id),
            UpdatePasswordRequest(current_password=FIRST_PASSWORD, new_password=FIRST_PASSWORD)
        )

        assert result.errors == [ErrorMessages.Password.CANNOT_REUSE]

    def test_update_policy_violation(self, password_service, user_with_history, principal_for):
        result = password_service.update_password(
            principal_for(user_with_history),
            str(user_with_history.id),
            UpdatePasswordRequest(current_password=FIRST_PASSWORD, new_password='12345678')
        )

        user_with_history.refresh_from_db()
        assert not result.success
        assert user_with_history.check_password(FIRST_PASSWORD)
        assert history_count(user_with_history) == 1

    def test_update_without_password(self, password_service, new_user, principal_for):
        """Test an account without a password reports invalid credentials."""
        result = password_service.update_password(
            principal_for(new_user),
            str(new_user.id),
            UpdatePasswordRequest(current_password=FIRST_PASSWORD, new_password=SECOND_PASSWORD)
        )

        assert result.errors == [ErrorMessages.Password.INVALID_CREDENTIALS]

    def test_update_by_higher_rank(self, password_service, admin_user, plain_user, user_password, principal_for):
        result = password_service.update_password(
            principal_for(admin_user),
            str(plain_user.id),
            UpdatePasswordRequest(current_password=user_password, new_password=SECOND_PASSWORD)
        )

        plain_user.refresh_from_db()
        assert result.success
        assert plain_user.check_password(SECOND_PASSWORD)

    def test_update_forbidden_for_peer(self, password_service, plain_user, other_user, user_password, principal_for):
        result = password_service.update_password(
            principal_for(plain_user),
            str(other_user.id),
            UpdatePasswordRequest(current_password=user_password, new_password=SECOND_PASSWORD)
        )

        other_user.refresh_from_db()
        assert result.code == ResultCode.FORBIDDEN
        assert other_user.check_password(user_password)
        assert history_count(other_user) == 0

    def test_update_unknown_user_by_super_admin(self, password_service, super_admin, principal_for):
        """Test an unknown target is denied before any lookup can leak its absence."""
        result = password_service.update_password(
            principal_for(super_admin),
            str(uuid4()),
            UpdatePasswordRequest(current_password=FIRST_PASSWORD, new_password=SECOND_PASSWORD)
        )

        assert result.code == ResultCode.FORBIDDEN

    def test_update_vanished_self(self, password_service):
        """Test a self-matching principal for a missing account gets invalid credentials."""
        ghost_id = str(uuid4())
        principal = Principal(id=ghost_id, roles=[Roles.USER.value])

        result = password_service.update_password(
            principal,
            ghost_id,
            UpdatePasswordRequest(current_password=FIRST_PASSWORD, new_password=SECOND_PASSWORD)
        )

        assert result.errors == [ErrorMessages.Password.INVALID_CREDENTIALS]
        assert result.code == ResultCode.INVALID

    def test_update_missing_principal(self, password_service, plain_user, user_password):
        result = password_service.update_password(
            None,
            str(plain_user.id),
            UpdatePasswordRequest(current_password=user_password, new_password=SECOND_PASSWORD)
        )

        assert result.code == ResultCode.FORBIDDEN

    def test_update_empty_fields(self, password_service, plain_user, principal_for):
        with pytest.raises(ValueError):
            password_service.update_password(
                principal_for(plain_user),
                str(plain_user.id),
                UpdatePasswordRequest(current_password='', new_password=SECOND_PASSWORD)
            )

    def test_history_capped_after_many_rotations(self, password_service, user_with_history, principal_for):
        """Test the history never exceeds five entries."""
        principal = principal_for(user_with_history)
        current = FIRST_PASSWORD
        for index in range(7):
            new_password = f"Rotated!Secret{index}x"
            result = password_service.update_password(
                principal,
                str(user_with_history.id),
                UpdatePasswordRequest(current_password=current, new_password=new_password)
            )
            assert result.success
            current = new_password

        assert history_count(user_with_history) == 5


class TestManagerPasswords:
    """Tests for passwords given at account creation."""

    def test_create_user_records_history(self, db, country):
        user = User.objects.create_user(
            username='managed',
            email='managed@test.com',
            password=FIRST_PASSWORD,
            first_name='Managed',
            last_name='User',
            country=country,
        )

        entry = PasswordHistory.objects.get(user=user)
        assert entry.password_hash == user.password

    def test_create_user_without_password_has_no_history(self, db, country):
        user = User.objects.create_user(username='bare', email='bare@test.com', country=country)

        assert history_count(user) == 0

    def test_initial_password_cannot_be_reused(self, password_service, country, principal_for):
        user = User.objects.create_user(
            username='managed',
            email='managed@test.com',
            password=FIRST_PASSWORD,
            first_name='Managed',
            last_name='User',
            country=country,
            account_status=User.AccountStatus.ACTIVE,
        )

        result = password_service.update_password(
            principal_for(user, roles=[Roles.USER.value]),
            str(user.id),
            UpdatePasswordRequest(current_password=FIRST_PASSWORD, new_password=FIRST_PASSWORD)
        )

        assert result.errors == [ErrorMessages.Password.CANNOT_REUSE]
        assert history_count(user) == 1
