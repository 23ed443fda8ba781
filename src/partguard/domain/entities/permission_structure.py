"""Permission structure - the static catalogue of permissions and operations."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from partguard.domain.exceptions import UnknownPermissionError
from partguard.domain.value_objects import OperationRef


@dataclass(frozen=True)
class Operation:
    """Single operation of a permission, stored as a 2-bit pair at ``bit``."""

    name: str
    label: str
    bit: int
    api_token_role: str | None = None
    also_set: tuple[OperationRef, ...] = ()


@dataclass(frozen=True)
class PermissionDefinition:
    """Permission - a capability area (e.g. parts) with its ordered operations."""

    key: str
    label: str
    operations: Mapping[str, Operation]
    group: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.operations, MappingProxyType):
            object.__setattr__(self, "operations", MappingProxyType(dict(self.operations)))


@dataclass(frozen=True)
class PermissionGroupDefinition:
    """Display group that permissions are sorted into."""

    key: str
    label: str


@dataclass(frozen=True)
class PermissionStructure:
    """
    Immutable catalogue of all permission groups, permissions and operations.

    ``implied_by`` maps every operation to the operations that transitively
    imply it through alsoSet. It is computed by the loader.
    """

    groups: Mapping[str, PermissionGroupDefinition]
    permissions: Mapping[str, PermissionDefinition]
    implied_by: Mapping[OperationRef, frozenset[OperationRef]] = field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        for name in ("groups", "permissions", "implied_by"):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    def has_operation(self, permission: str, operation: str) -> bool:
        perm = self.permissions.get(permission)
        return perm is not None and operation in perm.operations

    def get_permission(self, permission: str) -> PermissionDefinition:
        perm = self.permissions.get(permission)
        if perm is None:
            raise UnknownPermissionError(permission)
        return perm

    def get_operation(self, permission: str, operation: str) -> Operation:
        op = self.get_permission(permission).operations.get(operation)
        if op is None:
            raise UnknownPermissionError(permission, operation)
        return op

    def operation_refs(self) -> Iterator[OperationRef]:
        """All operations in declaration order."""
        for perm in self.permissions.values():
            for op_name in perm.operations:
                yield OperationRef(perm.key, op_name)

    def implying(self, permission: str, operation: str) -> frozenset[OperationRef]:
        """Operations whose grant implies the given operation (excluding itself)."""
        return self.implied_by.get(OperationRef(permission, operation), frozenset())

    def labels(self) -> Iterator[str]:
        """Every label of groups, permissions and operations (for translation)."""
        for group in self.groups.values():
            yield group.label
        for perm in self.permissions.values():
            yield perm.label
            for op in perm.operations.values():
                yield op.label

    def to_dict(self) -> dict[str, Any]:
        """Export in the same shape the loader accepts."""
        perms: dict[str, Any] = {}
        for perm in self.permissions.values():
            operations: dict[str, Any] = {}
            for op in perm.operations.values():
                entry: dict[str, Any] = {"label": op.label, "bit": op.bit}
                if op.also_set:
                    entry["alsoSet"] = [str(ref) for ref in op.also_set]
                if op.api_token_role:
                    entry["apiTokenRole"] = op.api_token_role
                operations[op.name] = entry
            perm_entry: dict[str, Any] = {"label": perm.label, "operations": operations}
            if perm.group:
                perm_entry["group"] = perm.group
            perms[perm.key] = perm_entry
        return {
            "groups": {g.key: {"label": g.label} for g in self.groups.values()},
            "perms": perms,
        }
