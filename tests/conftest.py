"""Pytest fixtures for partguard tests."""

from __future__ import annotations

from typing import Any

import pytest

from partguard.domain.entities import (
    Group,
    GroupHierarchy,
    PermissionData,
    PermissionStructure,
    User,
)
from partguard.domain.value_objects import PermissionValue
from partguard.infrastructure.permission.permission_manager import PermissionManager
from partguard.infrastructure.permission.permission_resolver import PermissionResolver
from partguard.infrastructure.permission.structure_loader import load_permission_structure

ALLOW = PermissionValue.ALLOW
DISALLOW = PermissionValue.DISALLOW
INHERIT = PermissionValue.INHERIT


# --- Builders ---


def structure_config() -> dict[str, Any]:
    """Small permission structure covering alsoSet within and across permissions."""
    return {
        "groups": {
            "data": {"label": "perm.group.data"},
            "system": {"label": "perm.group.system"},
        },
        "perms": {
            "parts": {
                "label": "perm.parts",
                "group": "data",
                "operations": {
                    "read": {"label": "perm.read", "bit": 0, "apiTokenRole": "ROLE_API_READ_ONLY"},
                    "edit": {
                        "label": "perm.edit",
                        "bit": 2,
                        "alsoSet": ["read"],
                        "apiTokenRole": "ROLE_API_EDIT",
                    },
                    "delete": {
                        "label": "perm.delete",
                        "bit": 4,
                        "alsoSet": ["read", "edit"],
                        "apiTokenRole": "ROLE_API_EDIT",
                    },
                    "import": {"label": "perm.import", "bit": 6, "alsoSet": ["delete"]},
                },
            },
            "parts_stock": {
                "label": "perm.parts_stock",
                "group": "data",
                "operations": {
                    "withdraw": {"label": "perm.withdraw", "bit": 0, "alsoSet": ["parts.read"]},
                    "add": {"label": "perm.add", "bit": 2, "alsoSet": ["parts.read"]},
                    "move": {"label": "perm.move", "bit": 4, "alsoSet": ["parts.read"]},
                },
            },
            "parts_description": {
                "label": "perm.parts_description",
                "group": "data",
                "operations": {
                    "read": {"label": "perm.read", "bit": 0},
                    "edit": {"label": "perm.edit", "bit": 2, "alsoSet": ["read"]},
                },
            },
            "parts_minamount": {
                "label": "perm.parts_minamount",
                "operations": {
                    "read": {"label": "perm.read", "bit": 0},
                    "edit": {"label": "perm.edit", "bit": 2, "alsoSet": ["read"]},
                },
            },
            "users": {
                "label": "perm.users",
                "group": "system",
                "operations": {
                    "read": {"label": "perm.read", "bit": 0, "apiTokenRole": "ROLE_API_ADMIN"},
                    "edit_permissions": {
                        "label": "perm.edit_permissions",
                        "bit": 2,
                        "alsoSet": ["read"],
                        "apiTokenRole": "ROLE_API_ADMIN",
                    },
                },
            },
            "groups": {
                "label": "perm.groups",
                "group": "system",
                "operations": {
                    "read": {"label": "perm.read", "bit": 0},
                    "edit_permissions": {
                        "label": "perm.edit_permissions",
                        "bit": 2,
                        "alsoSet": ["read"],
                    },
                },
            },
        },
    }


def make_group(
    group_id: int,
    parent_id: int | None = None,
    values: dict[str, dict[str, PermissionValue]] | None = None,
) -> Group:
    """Group with the given explicit values."""
    group = Group(id=group_id, name=f"group-{group_id}", parent_id=parent_id)
    for permission, operations in (values or {}).items():
        for operation, value in operations.items():
            group.permissions.set_permission_value(permission, operation, value)
    return group


def make_user(
    group_id: int | None = None,
    values: dict[str, dict[str, PermissionValue]] | None = None,
    user_id: int = 1,
) -> User:
    """User with the given explicit values."""
    user = User(id=user_id, name=f"user-{user_id}", group_id=group_id, permissions=PermissionData())
    for permission, operations in (values or {}).items():
        for operation, value in operations.items():
            user.permissions.set_permission_value(permission, operation, value)
    return user


# --- Fixtures ---


@pytest.fixture
def structure() -> PermissionStructure:
    """Small test permission structure."""
    return load_permission_structure(structure_config())


@pytest.fixture
def resolver(structure: PermissionStructure) -> PermissionResolver:
    """Resolver without any groups."""
    return PermissionResolver(structure)


@pytest.fixture
def manager(structure: PermissionStructure) -> PermissionManager:
    return PermissionManager(structure)


def resolver_with_groups(
    structure: PermissionStructure, *groups: Group, **kwargs: Any
) -> PermissionResolver:
    """Resolver over a hierarchy of the given groups."""
    return PermissionResolver(structure, groups=GroupHierarchy(groups), **kwargs)


@pytest.fixture
def mock_permission_checker():
    """Mock for PermissionChecker - allows everything by default."""
    from unittest.mock import Mock

    mock = Mock()
    mock.is_allowed.return_value = True
    return mock
