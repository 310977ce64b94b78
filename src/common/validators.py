"""
Shared Validators Module.

Argument guards used by the service layer. They raise ``ValueError`` before
any database access so contract violations never turn into business results.
"""
from typing import Any, Optional
from uuid import UUID


# =============================================================================
# ARGUMENT VALIDATORS
# =============================================================================

def validate_not_empty(value: Optional[str], field_name: str = "value") -> str:
    """Reject None, empty and whitespace-only strings."""
    if value is None or not str(value).strip():
        raise ValueError(f"{field_name} cannot be null or empty")
    return value


def validate_not_none(value: Any, field_name: str = "value") -> Any:
    """Reject None."""
    if value is None:
        raise ValueError(f"{field_name} cannot be null")
    return value


def validate_positive_int(value: int, field_name: str = "value") -> int:
    """Reject non-integers and integers below 1."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{field_name} must be a positive integer")
    return value


# =============================================================================
# UUID VALIDATORS
# =============================================================================

def parse_uuid(value: Any) -> Optional[UUID]:
    """Convert a value to UUID, returning None when it is not one."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None


def same_identifier(left: Any, right: Any) -> bool:
    """
    Compare two identifiers.

    UUIDs compare by value regardless of spelling; anything else compares
    as case-insensitive strings.
    """
    if left is None or right is None:
        return False
    left_uuid, right_uuid = parse_uuid(left), parse_uuid(right)
    if left_uuid is not None and right_uuid is not None:
        return left_uuid == right_uuid
    return str(left).strip().lower() == str(right).strip().lower()
