"""
Unit tests for RBAC permission system
"""

import pytest

from dinedash.core.errors import ForbiddenError
from dinedash.core.permissions import (
    Permission,
    can_access,
    ensure_permission,
    get_permissions_for_role,
)
from dinedash.core.session import SessionClaims, SessionKind


def test_get_permissions_for_role():
    """Test permission retrieval for all roles"""
    owner_perms = get_permissions_for_role("OWNER")
    assert Permission.MANAGE_RESTAURANT in owner_perms
    assert Permission.MANAGE_STAFF in owner_perms
    assert Permission.VIEW_ANALYTICS in owner_perms

    # Manager runs the floor but not the restaurant or its staff
    manager_perms = get_permissions_for_role("MANAGER")
    assert Permission.MANAGE_MENU in manager_perms
    assert Permission.MANAGE_ORDERS in manager_perms
    assert Permission.MANAGE_STAFF not in manager_perms
    assert Permission.MANAGE_RESTAURANT not in manager_perms

    chef_perms = get_permissions_for_role("CHEF")
    assert chef_perms == {Permission.KITCHEN, Permission.VIEW_ORDERS}

    waiter_perms = get_permissions_for_role("WAITER")
    assert waiter_perms == {Permission.WAITER, Permission.VIEW_ORDERS}


def test_unknown_role_has_no_permissions():
    assert get_permissions_for_role("DISHWASHER") == set()
    assert get_permissions_for_role("") == set()


@pytest.mark.parametrize(
    "role, permission, expected",
    [
        ("OWNER", "manage_staff", True),
        ("MANAGER", "manage_staff", False),
        ("MANAGER", "view_analytics", True),
        ("CHEF", "kitchen", True),
        ("CHEF", "waiter", False),
        ("WAITER", "waiter", True),
        ("WAITER", "manage_menu", False),
        ("owner", "manage_restaurant", True),
        ("OWNER", "launch_rockets", False),
    ],
)
def test_can_access(role, permission, expected):
    assert can_access(role, permission) is expected


def test_ensure_permission_accepts_any_listed_permission():
    claims = SessionClaims(sub="1", kind=SessionKind.STAFF, role="CHEF", tenant_id="t")

    ensure_permission(claims, Permission.MANAGE_ORDERS, Permission.KITCHEN)

    with pytest.raises(ForbiddenError):
        ensure_permission(claims, Permission.MANAGE_MENU)
