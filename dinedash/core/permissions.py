"""
RBAC (Role-Based Access Control) permission system for restaurant staff
"""

from enum import Enum
from typing import Set

from dinedash.core.errors import ForbiddenError


class Permission(str, Enum):
    """Permission definitions"""
    MANAGE_RESTAURANT = "manage_restaurant"
    MANAGE_STAFF = "manage_staff"
    MANAGE_MENU = "manage_menu"
    MANAGE_ORDERS = "manage_orders"
    MANAGE_TABLES = "manage_tables"
    KITCHEN = "kitchen"
    WAITER = "waiter"
    VIEW_ANALYTICS = "view_analytics"
    VIEW_ORDERS = "view_orders"


# Each role is enumerated independently; there is no inheritance between roles
ROLE_PERMISSIONS = {
    "OWNER": {
        Permission.MANAGE_RESTAURANT,
        Permission.MANAGE_STAFF,
        Permission.MANAGE_MENU,
        Permission.MANAGE_ORDERS,
        Permission.MANAGE_TABLES,
        Permission.KITCHEN,
        Permission.WAITER,
        Permission.VIEW_ANALYTICS,
    },
    "MANAGER": {
        Permission.MANAGE_MENU,
        Permission.MANAGE_ORDERS,
        Permission.MANAGE_TABLES,
        Permission.KITCHEN,
        Permission.WAITER,
        Permission.VIEW_ANALYTICS,
    },
    "CHEF": {
        Permission.KITCHEN,
        Permission.VIEW_ORDERS,
    },
    "WAITER": {
        Permission.WAITER,
        Permission.VIEW_ORDERS,
    },
}


def get_permissions_for_role(role: str) -> Set[Permission]:
    """Get permissions for a given role"""
    if not role:
        return set()
    return ROLE_PERMISSIONS.get(role.upper(), set())


def can_access(role: str, permission: str) -> bool:
    """Check whether a staff role holds a permission"""
    try:
        required = Permission(permission)
    except ValueError:
        return False
    return required in get_permissions_for_role(role)


def ensure_permission(claims, *permissions: Permission) -> None:
    """Raise Forbidden unless the session's role holds at least one of the permissions"""
    if not any(can_access(claims.role, permission) for permission in permissions):
        raise ForbiddenError()
