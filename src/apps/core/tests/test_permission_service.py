# src/apps/core/tests/test_permission_service.py
"""
Tests for PermissionService

Tests the role hierarchy rules including:
- Self-access
- SuperAdmin override
- Strictly-higher rank requirement
- Denial paths and breach auditing
"""

import pytest
from uuid import uuid4

from apps.core.models import AuditLog
from apps.core.services import Principal, ResultCode


pytestmark = pytest.mark.django_db


class TestSelfAccess:
    """Tests for acting on one's own account."""

    def test_self_access_allowed(self, permission_service, plain_user, principal_for):
        """Test a user may always act on itself."""
        assert permission_service.validate_permission(principal_for(plain_user), str(plain_user.id))

    def test_self_access_without_roles(self, permission_service, new_user, principal_for):
        """Test self-access does not depend on holding a role."""
        principal = principal_for(new_user, roles=[])

        assert permission_service.validate_permission(principal, str(new_user.id))

    def test_self_access_case_insensitive(self, permission_service, plain_user, principal_for):
        """Test identifiers are compared case-insensitively."""
        principal = principal_for(plain_user)

        assert permission_service.validate_permission(principal, str(plain_user.id).upper())

    @pytest.mark.parametrize('spelling', [
        lambda value: value.hex,
        lambda value: f"{{{value}}}",
        lambda value: value.urn,
    ])
    def test_self_access_equivalent_uuid_spelling(self, permission_service, plain_user, principal_for, spelling):
        """Test the same UUID written differently is still self."""
        principal = principal_for(plain_user)

        assert permission_service.validate_permission(principal, spelling(plain_user.id))

class TestRoleHierarchy:
    """Tests for rank comparison between actor and target."""

    def test_admin_over_user(self, permission_service, admin_user, plain_user, principal_for):
        assert permission_service.validate_permission(principal_for(admin_user), str(plain_user.id))

    def test_admin_over_admin_denied(self, permission_service, admin_user, other_admin, principal_for):
        """Test equal rank is not enough."""
        assert not permission_service.validate_permission(principal_for(admin_user), str(other_admin.id))

    def test_user_over_user_denied(self, permission_service, plain_user, other_user, principal_for):
        assert not permission_service.validate_permission(principal_for(plain_user), str(other_user.id))

    def test_user_over_admin_denied(self, permission_service, plain_user, admin_user, principal_for):
        assert not permission_service.validate_permission(principal_for(plain_user), str(admin_user.id))

    def test_admin_over_super_admin_denied(self, permission_service, admin_user, super_admin, principal_for):
        assert not permission_service.validate_permission(principal_for(admin_user), str(super_admin.id))

    def test_super_admin_over_anyone(
        self, permission_service, super_admin, admin_user, plain_user, create_user, principal_for
    ):
        """Test SuperAdmin may access any user, including another SuperAdmin."""
        principal = principal_for(super_admin)
        another_root = create_user(username='root2', role='SuperAdmin')

        assert permission_service.validate_permission(principal, str(admin_user.id))
        assert permission_service.validate_permission(principal, str(plain_user.id))
        assert permission_service.validate_permission(principal, str(another_root.id))

    def test_admin_over_roleless_user(self, permission_service, admin_user, new_user, principal_for):
        """Test a target without roles ranks as a plain user."""
        assert permission_service.validate_permission(principal_for(admin_user), str(new_user.id))

    def test_user_over_roleless_user_denied(self, permission_service, plain_user, new_user, principal_for):
        assert not permission_service.validate_permission(principal_for(plain_user), str(new_user.id))

    def test_multi_role_actor_uses_highest_rank(self, permission_service, plain_user, other_admin):
        """Test an actor holding several roles is judged by the highest one."""
        principal = Principal(id=str(plain_user.id), roles=['User', 'SuperAdmin'])

        assert permission_service.validate_permission(principal, str(other_admin.id))


class TestDenialPaths:
    """Tests for inputs that must be refused."""

    def test_missing_principal(self, permission_service, plain_user):
        assert not permission_service.validate_permission(None, str(plain_user.id))

    def test_principal_without_id(self, permission_service, plain_user):
        assert not permission_service.validate_permission(Principal(id=None, roles=['SuperAdmin']), str(plain_user.id))

    @pytest.mark.parametrize('target', [None, '', '   '])
    def test_empty_target(self, permission_service, super_admin, principal_for, target):
        assert not permission_service.validate_permission(principal_for(super_admin), target)

    def test_unknown_target(self, permission_service, super_admin, principal_for):
        assert not permission_service.validate_permission(principal_for(super_admin), str(uuid4()))

    def test_malformed_target(self, permission_service, super_admin, principal_for):
        assert not permission_service.validate_permission(principal_for(super_admin), 'not-a-uuid')

    def test_actor_without_known_roles(self, permission_service, plain_user, other_user):
        """Test an actor with no recognised role cannot act on others."""
        principal = Principal(id=str(plain_user.id), roles=['Auditor'])

        assert not permission_service.validate_permission(principal, str(other_user.id))


class TestValidatePermissions:
    """Tests for the result-returning variant."""

    def test_allowed_returns_ok(self, permission_service, admin_user, plain_user, principal_for):
        result = permission_service.validate_permissions(principal_for(admin_user), str(plain_user.id))

        assert result.success
        assert AuditLog.objects.count() == 0

    def test_denied_returns_forbidden(self, permission_service, plain_user, admin_user, principal_for):
        result = permission_service.validate_permissions(principal_for(plain_user), str(admin_user.id))

        assert not result.success
        assert result.code == ResultCode.FORBIDDEN

    def test_denied_records_breach(self, permission_service, plain_user, admin_user, principal_for):
        """Test a denial is written to the audit log against the actor."""
        permission_service.validate_permissions(principal_for(plain_user), str(admin_user.id))

        entry = AuditLog.objects.get()
        assert entry.action == AuditLog.Action.AUTHORIZATION_BREACH
        assert entry.user_id == plain_user.id
        assert entry.ip_address == '127.0.0.1'
        assert str(admin_user.id) in entry.details
