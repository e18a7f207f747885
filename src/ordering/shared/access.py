"""Caller authorization.

The identity provider authenticates callers upstream; operations receive the
resolved caller id and role and check them here explicitly.
"""

from enum import Enum

from ordering.shared import errors


class Role(Enum):
    CUSTOMER = "customer"
    STAFF = "staff"
    ADMIN = "admin"


STAFF_ROLES = (Role.STAFF, Role.ADMIN)


def parse_role(value) -> Role:
    try:
        return Role((value or "").strip().lower())
    except ValueError:
        raise errors.Forbidden(f"Unknown role {value!r}") from None


def require_role(caller_role, *allowed: Role) -> Role:
    """Return the parsed role, or raise ``Forbidden`` if it is not in ``allowed``."""
    role = parse_role(caller_role)
    if role not in allowed:
        raise errors.Forbidden(f"Role {role.value!r} may not perform this operation")
    return role


def authorize_owner(caller_id, caller_role, owner_user_id) -> Role:
    """Staff and admins may act on any resource; customers only on their own."""
    role = parse_role(caller_role)
    if role is Role.CUSTOMER and (not caller_id or str(caller_id) != str(owner_user_id)):
        raise errors.Forbidden("Customers may only access their own orders")
    return role
