"""
Authorization checks shared by every mutating operation.

The checks take the acting user and raise on failure. ``authorize`` runs a
sequence of them left to right and stops at the first one that fails:

    authorize(
        user,
        role_check(UserRole.OWNER, UserRole.ADMIN),
        require_owner_approved,
        ownership_check(property_obj.owner_id),
    )
"""

from typing import Callable, Iterable, Optional

from enums.user_role import UserRole
from utils.exceptions import Forbidden, OwnerPending

Check = Callable[[object], None]


def _role_value(role) -> str:
    return role.value if isinstance(role, UserRole) else str(role)


def require_role(identity, allowed_roles: Iterable, message: Optional[str] = None):
    allowed = [_role_value(role) for role in allowed_roles]
    if identity.role not in allowed:
        raise Forbidden(
            message
            or f"User role {identity.role} is not authorized to access this route. "
            f"Required roles: {', '.join(allowed)}"
        )


def require_owner_approved(identity):
    if identity.role == UserRole.OWNER.value and not identity.is_approved:
        raise OwnerPending()


def require_resource_ownership(
    identity, resource_owner_id: Optional[int], message: Optional[str] = None
):
    if identity.role == UserRole.ADMIN.value:
        return
    if resource_owner_id is None or identity.id != resource_owner_id:
        raise Forbidden(message or "User not authorized to access this resource")


def role_check(*roles, message: Optional[str] = None) -> Check:
    return lambda identity: require_role(identity, roles, message)


def ownership_check(resource_owner_id: Optional[int], message: Optional[str] = None) -> Check:
    return lambda identity: require_resource_ownership(identity, resource_owner_id, message)


def authorize(identity, *checks: Check):
    for check in checks:
        check(identity)
    return identity
