# src/apps/core/constants.py
"""
Identity Service Constants

Role hierarchy, reference data and user-facing error messages.
"""

from enum import Enum
from typing import Dict, Iterable, List

# =============================================================================
# ROLES
# =============================================================================


class Roles(str, Enum):
    """Closed set of roles, ordered by rank."""
    USER = 'User'
    ADMIN = 'Admin'
    SUPER_ADMIN = 'SuperAdmin'


ROLE_RANKS: Dict[str, int] = {
    Roles.USER.value: 1,
    Roles.ADMIN.value: 2,
    Roles.SUPER_ADMIN.value: 3,
}

ADMIN_ROLES: List[str] = [Roles.ADMIN.value, Roles.SUPER_ADMIN.value]
SUPER_ADMIN_ROLES: List[str] = [Roles.SUPER_ADMIN.value]


def rank_of(role_name: str) -> int:
    """Rank of a role name; unknown names rank 0."""
    if isinstance(role_name, Roles):
        role_name = role_name.value
    return ROLE_RANKS.get(role_name, 0)


def highest_rank(role_names: Iterable[str]) -> int:
    return max((rank_of(name) for name in role_names or []), default=0)


# =============================================================================
# PASSWORD POLICY
# =============================================================================

PASSWORD_HISTORY_LIMIT = 5


# =============================================================================
# REFERENCE DATA
# =============================================================================

COUNTRIES: List[str] = [
    'United States of America',
    'Canada',
    'United Kingdom',
    'Australia',
    'Germany',
    'France',
    'Italy',
    'Spain',
    'Brazil',
    'Mexico',
    'India',
    'China',
    'Japan',
    'South Korea',
    'Russia',
    'South Africa',
    'Argentina',
    'Netherlands',
    'Sweden',
    'Switzerland',
]


# =============================================================================
# ERROR MESSAGES
# =============================================================================

class ErrorMessages:
    """User-facing error messages grouped by area."""

    class Password:
        MISMATCH = 'Passwords do not match.'
        ALREADY_SET = 'Password has already been set for this user.'
        INVALID_CREDENTIALS = 'Invalid credentials.'
        CANNOT_REUSE = 'Cannot reuse a previously used password.'

    class User:
        NOT_FOUND = 'User not found.'
        ALREADY_ACTIVATED = 'User account is already activated.'
        NOT_ACTIVATED = 'User account is not activated.'
        COUNTRY_NOT_FOUND = 'Country not found.'
        USERNAME_TAKEN = 'Username is already taken.'
        EMAIL_TAKEN = 'Email is already registered.'

    class Role:
        NOT_FOUND = 'Role not found.'
        INVALID_ROLE = 'Invalid role name.'
        INACTIVE_USER = 'Cannot assign a role to an inactive user.'
        USER_ALREADY_HAS_ROLE = 'User already has a role assigned.'
        MISSING_ROLE = 'User does not have a role to remove.'

    class Authorization:
        FORBIDDEN = 'You do not have permission to access this resource.'
        UNAUTHORIZED = 'Authentication credentials were not provided or are invalid.'

    class AuditLog:
        NOT_FOUND = 'Audit log not found.'
        INVALID_ACTION = 'Invalid audit action.'
        PERFORMANCE_LOG = 'Request exceeded the response time threshold.'
