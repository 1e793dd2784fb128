"""Organization role permissions."""

from __future__ import annotations

from enum import Enum
from typing import Union

from supplr.errors import PermissionDeniedError


class Permission(str, Enum):
    MANAGE_TEAM = "MANAGE_TEAM"
    INVITE_USERS = "INVITE_USERS"
    MANAGE_INVENTORY = "MANAGE_INVENTORY"
    VIEW_INVENTORY = "VIEW_INVENTORY"
    UPDATE_STOCK = "UPDATE_STOCK"
    MANAGE_SETTINGS = "MANAGE_SETTINGS"
    VIEW_REPORTS = "VIEW_REPORTS"
    MANAGE_BILLING = "MANAGE_BILLING"


class OrganizationRole(str, Enum):
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    MEMBER = "MEMBER"


ROLE_PERMISSIONS: dict[OrganizationRole, frozenset[Permission]] = {
    OrganizationRole.OWNER: frozenset(Permission),
    OrganizationRole.ADMIN: frozenset({
        Permission.INVITE_USERS,
        Permission.MANAGE_INVENTORY,
        Permission.VIEW_INVENTORY,
        Permission.UPDATE_STOCK,
        Permission.VIEW_REPORTS,
    }),
    OrganizationRole.MANAGER: frozenset({
        Permission.MANAGE_INVENTORY,
        Permission.VIEW_INVENTORY,
        Permission.UPDATE_STOCK,
        Permission.VIEW_REPORTS,
    }),
    OrganizationRole.MEMBER: frozenset({
        Permission.VIEW_INVENTORY,
        Permission.UPDATE_STOCK,
    }),
}


def get_permissions(role: Union[OrganizationRole, str]) -> frozenset[Permission]:
    """Unknown roles get no permissions."""
    try:
        return ROLE_PERMISSIONS[OrganizationRole(role)]
    except ValueError:
        return frozenset()


def has_permission(role: Union[OrganizationRole, str], permission: Permission) -> bool:
    return permission in get_permissions(role)


def require_permission(role: Union[OrganizationRole, str], permission: Permission) -> None:
    if not has_permission(role, permission):
        role_name = role.value if isinstance(role, OrganizationRole) else role
        raise PermissionDeniedError(
            f"Insufficient permissions. Required: {permission.value}, role: {role_name}"
        )
