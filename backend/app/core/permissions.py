"""
Role-based access gate.

The gate only inspects an already-resolved caller; credential checks and
session handling happen in the auth layer before it is consulted.
"""
from typing import FrozenSet, Iterable, Optional

from app.core.exceptions import Forbidden, Unauthenticated
from app.models.user import UserRole
from app.schemas.user import CurrentUser

ALL_ROLES: FrozenSet[UserRole] = frozenset(UserRole)

# Role required by each domain operation
TOGGLE_MALL_ROLES: FrozenSet[UserRole] = frozenset({UserRole.ADMIN})
TOGGLE_STORE_ROLES: FrozenSet[UserRole] = frozenset({UserRole.MANAGER})
UPDATE_STORE_ROLES: FrozenSet[UserRole] = frozenset({UserRole.STORE})


def resolve_role(role: str) -> Optional[UserRole]:
    """Map a role string to a UserRole, or None if it is not recognized."""
    try:
        return UserRole(role)
    except ValueError:
        return None


def authorize(caller: Optional[CurrentUser], allowed_roles: Iterable[UserRole]) -> UserRole:
    """
    Permit or deny a caller for an operation.

    Args:
        caller: Resolved caller, or None when the request carried no valid credential
        allowed_roles: Roles the operation accepts

    Returns:
        The caller's role

    Raises:
        Unauthenticated: If there is no caller
        Forbidden: If the caller's role is unknown or not allowed
    """
    if caller is None:
        raise Unauthenticated("Access token required")

    allowed = frozenset(allowed_roles)
    role = resolve_role(caller.role)
    if role is None or role not in allowed:
        required = " or ".join(sorted(r.value for r in allowed))
        raise Forbidden(f"Access denied. Required role: {required}")

    return role
