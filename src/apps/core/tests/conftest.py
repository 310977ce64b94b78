# src/apps/core/tests/conftest.py
"""
Pytest Configuration and Fixtures

Provides common fixtures for all Identity Service tests.
"""

import pytest
import uuid
from typing import Dict, List

from rest_framework.test import APIClient

from apps.core.constants import Roles
from apps.core.models import Country, Role, User, UserRole
from apps.core.services import (
    AuditLoggerService,
    AuthService,
    PasswordHistoryCleanupService,
    PasswordHistoryService,
    PasswordService,
    PermissionService,
    Principal,
    RoleService,
    UserService,
)
from common.authentication import JWTTokenGenerator


@pytest.fixture
def api_client() -> APIClient:
    """Return a DRF API client instance."""
    return APIClient()


# ==================== REFERENCE DATA FIXTURES ====================

@pytest.fixture
def roles(db) -> Dict[str, Role]:
    """Create the fixed role set, keyed by role name."""
    return {role.value: Role.objects.create(name=role.value) for role in Roles}


@pytest.fixture
def country(db) -> Country:
    return Country.objects.create(name='Norway')


# ==================== USER FIXTURES ====================

@pytest.fixture
def user_password() -> str:
    """Standard password for test users."""
    return 'TestPassword123!'


@pytest.fixture
def create_user(db, user_password, roles, country):
    """Factory fixture to create test users."""
    def _create_user(
        username: str = None,
        role: str = None,
        active: bool = True,
        password: str = None,
        with_password: bool = True,
        **kwargs
    ) -> User:
        if username is None:
            username = f"user_{uuid.uuid4().hex[:8]}"

        user = User.objects.create_user(
            username=username,
            email=kwargs.get('email', f"{username}@test.com"),
            first_name=kwargs.get('first_name', 'Test'),
            last_name=kwargs.get('last_name', 'User'),
            phone_number=kwargs.get('phone_number', '+4712345678'),
            country=kwargs.get('country', country),
            account_status=User.AccountStatus.ACTIVE if active else User.AccountStatus.INACTIVE,
        )
        if with_password:
            user.set_password(password or user_password)
            user.save()

        if role is not None:
            UserRole.objects.create(user=user, role=roles[role])
        return user

    return _create_user


@pytest.fixture
def plain_user(create_user) -> User:
    """Active user holding the User role."""
    return create_user(username='plain', role=Roles.USER.value, last_name='Plain')


@pytest.fixture
def other_user(create_user) -> User:
    """Second active user holding the User role."""
    return create_user(username='other', role=Roles.USER.value, last_name='Other')


@pytest.fixture
def admin_user(create_user) -> User:
    """Active user holding the Admin role."""
    return create_user(username='admin', role=Roles.ADMIN.value, last_name='Admin')


@pytest.fixture
def other_admin(create_user) -> User:
    return create_user(username='admin2', role=Roles.ADMIN.value, last_name='Admin2')


@pytest.fixture
def super_admin(create_user) -> User:
    """Active user holding the SuperAdmin role."""
    return create_user(username='root', role=Roles.SUPER_ADMIN.value, last_name='Root')


@pytest.fixture
def new_user(create_user) -> User:
    """Freshly provisioned user: inactive, no password, no role."""
    return create_user(username='newcomer', active=False, with_password=False, last_name='Newcomer')


# ==================== PRINCIPAL FIXTURES ====================

@pytest.fixture
def principal_for():
    """Build the acting principal for a user."""
    def _principal_for(user: User, roles: List[str] = None) -> Principal:
        return Principal(
            id=str(user.id),
            roles=user.get_roles() if roles is None else roles,
            ip_address='127.0.0.1',
        )

    return _principal_for


# ==================== SERVICE FIXTURES ====================

@pytest.fixture
def audit_service() -> AuditLoggerService:
    return AuditLoggerService()


@pytest.fixture
def permission_service() -> PermissionService:
    return PermissionService()


@pytest.fixture
def cleanup_service() -> PasswordHistoryCleanupService:
    return PasswordHistoryCleanupService()


@pytest.fixture
def history_service(cleanup_service) -> PasswordHistoryService:
    return PasswordHistoryService(cleanup_service=cleanup_service)


@pytest.fixture
def password_service(history_service) -> PasswordService:
    return PasswordService(history_service=history_service)


@pytest.fixture
def role_service() -> RoleService:
    return RoleService()


@pytest.fixture
def user_service() -> UserService:
    return UserService()


@pytest.fixture
def auth_service() -> AuthService:
    return AuthService()


# ==================== AUTHENTICATED CLIENT FIXTURES ====================

@pytest.fixture
def client_for(api_client):
    """Return an API client authenticated as the given user."""
    def _client_for(user: User) -> APIClient:
        token = JWTTokenGenerator.generate_access_token(
            user_id=str(user.id),
            username=user.username,
            roles=user.get_roles(),
        )
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        return api_client

    return _client_for


@pytest.fixture
def user_client(client_for, plain_user) -> APIClient:
    return client_for(plain_user)


@pytest.fixture
def admin_client(client_for, admin_user) -> APIClient:
    return client_for(admin_user)


@pytest.fixture
def super_admin_client(client_for, super_admin) -> APIClient:
    return client_for(super_admin)
