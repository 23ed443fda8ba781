"""Permission holder port - anything carrying a permission table."""

from typing import Protocol

from partguard.domain.entities import PermissionData


class PermissionHolder(Protocol):
    """User or group with its own permission overrides."""

    id: int
    name: str
    permissions: PermissionData
