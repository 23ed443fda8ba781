"""Group entity - users inherit permissions from their group chain."""

from dataclasses import dataclass, field

from partguard.domain.entities.permission_data import PermissionData


@dataclass
class Group:
    """Group - optional parent group, own permission overrides."""

    id: int
    name: str
    parent_id: int | None = None
    permissions: PermissionData = field(default_factory=PermissionData)
