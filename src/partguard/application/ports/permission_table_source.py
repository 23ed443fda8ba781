"""Permission table source port - structure plus per-holder values."""

from typing import Protocol

from partguard.application.ports.permission_holder import PermissionHolder
from partguard.domain.entities import PermissionStructure
from partguard.domain.value_objects import PermissionValue


class PermissionTableSource(Protocol):
    """Port for reading the structure and a holder's inherited or own values."""

    def get_permission_structure(self) -> PermissionStructure: ...

    def inherit(
        self, actor: PermissionHolder, permission: str, operation: str
    ) -> PermissionValue: ...

    def dont_inherit(
        self, holder: PermissionHolder, permission: str, operation: str
    ) -> PermissionValue: ...
