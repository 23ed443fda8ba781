"""Permission manager - administrative changes to permission tables."""

import logging
from collections.abc import Iterable

from partguard.application.ports import PermissionHolder
from partguard.domain.entities import PermissionStructure
from partguard.domain.value_objects import PermissionValue

logger = logging.getLogger(__name__)


class PermissionManager:
    """Sets permission values on users and groups, validated against the structure."""

    def __init__(self, structure: PermissionStructure) -> None:
        self._structure = structure

    @property
    def structure(self) -> PermissionStructure:
        return self._structure

    def set_permission(
        self,
        holder: PermissionHolder,
        permission: str,
        operation: str,
        value: PermissionValue,
    ) -> None:
        """Set one operation. Raises UnknownPermissionError for invalid combinations."""
        self._structure.get_operation(permission, operation)
        holder.permissions.set_permission_value(permission, operation, value)

    def set_all_permissions(self, holder: PermissionHolder, value: PermissionValue) -> None:
        for ref in self._structure.operation_refs():
            holder.permissions.set_permission_value(ref.permission, ref.operation, value)

    def set_all_operations_of_permission(
        self,
        holder: PermissionHolder,
        permission: str,
        value: PermissionValue,
        except_operations: Iterable[str] = (),
    ) -> None:
        """
        Set every operation of a permission, skipping except_operations.
        Call ensure_correct_set_operations() afterwards to apply alsoSet.
        """
        skipped = set(except_operations)
        for operation in self._structure.get_permission(permission).operations:
            if operation in skipped:
                continue
            holder.permissions.set_permission_value(permission, operation, value)

    def ensure_correct_set_operations(self, holder: PermissionHolder) -> int:
        """
        Set every alsoSet target to ALLOW wherever its source is ALLOW on the holder.
        Repeats until nothing changes; returns the number of values changed.
        """
        data = holder.permissions
        changed_total = 0
        while True:
            changed = 0
            for perm in self._structure.permissions.values():
                for op in perm.operations.values():
                    if not op.also_set:
                        continue
                    if data.get_permission_value(perm.key, op.name) is not PermissionValue.ALLOW:
                        continue
                    for target in op.also_set:
                        current = data.get_permission_value(target.permission, target.operation)
                        if current is not PermissionValue.ALLOW:
                            data.set_permission_value(
                                target.permission, target.operation, PermissionValue.ALLOW
                            )
                            changed += 1
            changed_total += changed
            if not changed:
                break

        if changed_total:
            logger.debug(
                "permissions.also_set.applied",
                extra={"holder": holder.name, "changed": changed_total},
            )
        return changed_total
