"""Permission editor port - changes permission tables."""

from typing import Protocol

from partguard.application.ports.permission_holder import PermissionHolder
from partguard.domain.value_objects import PermissionValue


class PermissionEditor(Protocol):
    """Port for validated changes to a holder's permission table."""

    def set_permission(
        self,
        holder: PermissionHolder,
        permission: str,
        operation: str,
        value: PermissionValue,
    ) -> None: ...

    def ensure_correct_set_operations(self, holder: PermissionHolder) -> int: ...
