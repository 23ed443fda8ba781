"""Show the permission table of a user.

Usage:
  partguard-permissions --actors actors.json alice
  partguard-permissions --actors actors.json alice --no-inherit
  partguard-permissions --structure

actors.json holds the groups and users to resolve against:
  {"groups": [{"id": 1, "name": "admins", "parent_id": null, "permissions": {...}}],
   "users": [{"id": 1, "name": "alice", "group_id": 1, "permissions": {...}}]}
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from partguard import __version__
from partguard.config import get_settings
from partguard.domain.entities import Group, GroupHierarchy, PermissionData, User
from partguard.domain.exceptions import ConfigurationError, PartGuardError
from partguard.main import create_permission_services


class _HolderRecord(BaseModel):
    id: int
    name: str
    permissions: dict[str, Any] = Field(default_factory=dict)


class _GroupRecord(_HolderRecord):
    parent_id: int | None = None


class _UserRecord(_HolderRecord):
    group_id: int | None = None
    disabled: bool = False


class _ActorsFile(BaseModel):
    groups: list[_GroupRecord] = Field(default_factory=list)
    users: list[_UserRecord] = Field(default_factory=list)


def load_actors(path: Path) -> tuple[GroupHierarchy, list[User]]:
    """Read groups and users from JSON. Raises ConfigurationError on bad input."""
    try:
        raw = _ActorsFile.model_validate_json(path.read_bytes())
    except OSError as e:
        raise ConfigurationError(f"Cannot read actors file {path}: {e}") from e
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid actors file {path}: {e}") from e

    groups = GroupHierarchy(
        Group(
            id=g.id,
            name=g.name,
            parent_id=g.parent_id,
            permissions=PermissionData(g.permissions),
        )
        for g in raw.groups
    )
    users = [
        User(
            id=u.id,
            name=u.name,
            group_id=u.group_id,
            permissions=PermissionData(u.permissions),
            disabled=u.disabled,
        )
        for u in raw.users
    ]
    for user in users:
        if user.group_id is not None and user.group_id not in groups:
            raise ConfigurationError(
                f"User {user.name} references unknown group {user.group_id}"
            )
    return groups, users


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Show the permissions of a user")
    parser.add_argument("user", nargs="?", help="Name of the user to show")
    parser.add_argument("--actors", type=Path, help="JSON file with groups and users")
    parser.add_argument(
        "--no-inherit",
        action="store_true",
        help="Show only the user's own values, do not inherit from groups",
    )
    parser.add_argument(
        "--structure",
        action="store_true",
        help="Print the permission structure as JSON and exit",
    )
    parser.add_argument("--version", action="version", version=f"partguard {__version__}")
    args = parser.parse_args(argv)

    try:
        if args.structure:
            services = create_permission_services(get_settings())
            print(json.dumps(services.structure.to_dict(), indent=2))
            return 0

        if not args.user or not args.actors:
            parser.error("a user name and --actors are required")

        groups, users = load_actors(args.actors)
        services = create_permission_services(get_settings(), groups=groups)
        user = next((u for u in users if u.name == args.user), None)
        if user is None:
            print(f"No user found with username: {args.user}", file=sys.stderr)
            return 1

        rows = services.list_permissions.execute(user, inherit=not args.no_inherit)
    except PartGuardError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    title = "Inherited" if not args.no_inherit else "Non inherited"
    print(f"{title} permissions for {user.name}")
    width_perm = max((len(r.permission) for r in rows), default=10)
    width_op = max((len(r.operation) for r in rows), default=10)
    current = None
    for row in rows:
        if current is not None and row.permission != current:
            print("-" * (width_perm + width_op + 20))
        current = row.permission
        print(
            f"{row.index:>6}  {row.permission:<{width_perm}}  "
            f"{row.operation:<{width_op}}  {row.value.name}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
