"""Permission table DTOs."""

from dataclasses import dataclass

from partguard.domain.value_objects import PermissionValue


@dataclass
class PermissionTableRow:
    """One operation of one permission with its value for a holder."""

    index: str  # "<permission no>-<operation no>", both 1-based
    permission: str
    permission_label: str
    operation: str
    operation_label: str
    value: PermissionValue
