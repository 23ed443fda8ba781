"""List permissions use case - the effective permission table of a holder."""

from partguard.application.dto.permission_table import PermissionTableRow
from partguard.application.ports import PermissionHolder, PermissionTableSource


class ListPermissionsUseCase:
    """Build the permission table of a user or group, in structure order."""

    def __init__(self, permission_source: PermissionTableSource) -> None:
        self._source = permission_source

    def execute(self, holder: PermissionHolder, inherit: bool = True) -> list[PermissionTableRow]:
        """
        With inherit the values are resolved through the group chain
        (unresolved stays INHERIT); without, only the holder's own values are shown.
        """
        rows: list[PermissionTableRow] = []
        structure = self._source.get_permission_structure()
        for perm_index, perm in enumerate(structure.permissions.values(), start=1):
            for op_index, op in enumerate(perm.operations.values(), start=1):
                if inherit:
                    value = self._source.inherit(holder, perm.key, op.name)
                else:
                    value = self._source.dont_inherit(holder, perm.key, op.name)
                rows.append(
                    PermissionTableRow(
                        index=f"{perm_index}-{op_index}",
                        permission=perm.key,
                        permission_label=perm.label,
                        operation=op.name,
                        operation_label=op.label,
                        value=value,
                    )
                )
        return rows
