"""User entity - the actor whose access is checked."""

from dataclasses import dataclass, field

from partguard.domain.entities.permission_data import PermissionData


@dataclass
class User:
    """User - belongs to at most one group, own permission overrides.

    A disabled user is denied every operation regardless of its tables.
    """

    id: int
    name: str
    group_id: int | None = None
    permissions: PermissionData = field(default_factory=PermissionData)
    disabled: bool = False
