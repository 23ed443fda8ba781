"""Permission checker port - answers allow/deny for an actor."""

from typing import Protocol

from partguard.application.ports.permission_holder import PermissionHolder


class PermissionChecker(Protocol):
    """Port for checking whether an actor may perform a permission operation."""

    def is_allowed(
        self, actor: PermissionHolder | None, permission: str, operation: str
    ) -> bool: ...
