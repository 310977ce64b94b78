# src/apps/core/services/principal.py
"""
Acting principal

The authenticated actor is passed explicitly into every gated operation
instead of being read from request state.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from django.core.exceptions import ValidationError
from django.core.validators import validate_ipv46_address


@dataclass(frozen=True)
class Principal:
    """Authenticated actor: user id plus role names."""

    id: Optional[str]
    roles: List[str] = field(default_factory=list)
    ip_address: Optional[str] = None

    @classmethod
    def from_request(cls, request) -> Optional['Principal']:
        """Build a principal from a DRF request, or None when unauthenticated."""
        user = getattr(request, 'user', None)
        if user is None or not getattr(user, 'is_authenticated', False):
            return None

        roles = getattr(user, 'roles', None)
        if roles is None and hasattr(user, 'get_roles'):
            roles = user.get_roles()

        user_id = getattr(user, 'id', None)
        return cls(
            id=str(user_id) if user_id is not None else None,
            roles=list(roles or []),
            ip_address=get_client_ip(request),
        )


def get_client_ip(request) -> Optional[str]:
    """
    Extract client IP from request.

    The first ``X-Forwarded-For`` entry is used only when it is a valid
    IPv4/IPv6 address; otherwise ``REMOTE_ADDR`` is tried.
    """
    meta = getattr(request, 'META', {})
    x_forwarded_for = meta.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        forwarded = _valid_ip(x_forwarded_for.split(',')[0].strip())
        if forwarded:
            return forwarded
    return _valid_ip(meta.get('REMOTE_ADDR'))


def _valid_ip(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    try:
        validate_ipv46_address(value)
    except ValidationError:
        return None
    return value
