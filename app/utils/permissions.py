"""Role based access rules.

Every protected endpoint names a ``(resource, action)`` pair; the table below
maps that pair to the roles allowed to call it. Routes depend on
``require_permission`` which resolves the caller once and checks the table.
"""

import logging
from typing import Dict, FrozenSet, Tuple

from fastapi import Depends, HTTPException, Request, status

from database.models.user_model import User
from enums.user_role import UserRole
from utils.dependencies import get_current_user

logger = logging.getLogger(__name__)

ALL_ROLES: FrozenSet[UserRole] = frozenset(UserRole)
FLEET_ROLES: FrozenSet[UserRole] = frozenset(
    {UserRole.ADMIN, UserRole.INDIVIDUAL_OWNER, UserRole.RENTAL_BUSINESS}
)
STAFF_ROLES: FrozenSet[UserRole] = FLEET_ROLES | {UserRole.DELIVERY_PARTNER}
ADMIN_ONLY: FrozenSet[UserRole] = frozenset({UserRole.ADMIN})

PERMISSIONS: Dict[Tuple[str, str], FrozenSet[UserRole]] = {
    ("bikes", "create"): FLEET_ROLES,
    ("bikes", "update"): FLEET_ROLES,
    ("bikes", "delete"): ADMIN_ONLY,
    ("bookings", "read"): ALL_ROLES,
    ("bookings", "create"): ALL_ROLES,
    ("bookings", "update"): ALL_ROLES,
    ("bookings", "cancel"): ALL_ROLES,
    ("bookings", "read_by_bike"): STAFF_ROLES,
    ("bookings", "read_by_status"): STAFF_ROLES,
    ("bookings", "read_by_date"): STAFF_ROLES,
    ("bookings", "read_conflicts"): STAFF_ROLES,
    ("bookings", "transition"): STAFF_ROLES,
    ("dashboard", "customer"): frozenset({UserRole.CUSTOMER}),
    ("dashboard", "admin"): ADMIN_ONLY,
    ("dashboard", "owner"): frozenset({UserRole.INDIVIDUAL_OWNER}),
    ("dashboard", "business"): frozenset({UserRole.RENTAL_BUSINESS}),
    ("dashboard", "partner"): frozenset({UserRole.DELIVERY_PARTNER}),
    ("users", "list"): ADMIN_ONLY,
    ("users", "create"): ADMIN_ONLY,
    ("users", "delete"): ADMIN_ONLY,
    ("users", "read_by_role"): ADMIN_ONLY,
    ("users", "read_active"): ADMIN_ONLY,
    ("users", "read"): ALL_ROLES,
    ("users", "update"): ALL_ROLES,
}


def allowed_roles(resource: str, action: str) -> FrozenSet[UserRole]:
    try:
        return PERMISSIONS[(resource, action)]
    except KeyError:
        raise KeyError(f"No permission rule for {resource}:{action}") from None


def has_permission(role: UserRole, resource: str, action: str) -> bool:
    return role in allowed_roles(resource, action)


def require_permission(resource: str, action: str):
    """Dependency factory returning the authenticated user when their role may perform the action."""
    # Fail at import time for a rule that does not exist
    allowed_roles(resource, action)

    def _dependency(request: Request, user: User = Depends(get_current_user)) -> User:
        if not has_permission(user.role, resource, action):
            logger.warning(
                "Access denied: user_id=%s role=%s permission=%s:%s endpoint=%s %s",
                user.id,
                user.role,
                resource,
                action,
                request.method,
                request.url.path,
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action",
            )
        return user

    return _dependency
