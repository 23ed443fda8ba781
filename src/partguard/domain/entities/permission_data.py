"""Permission data - per user/group override table."""

import json
from collections.abc import Mapping
from typing import Any

from partguard.domain.exceptions import ValidationError
from partguard.domain.value_objects import PermissionValue

CURRENT_SCHEMA_VERSION = 3

_VERSION_KEY = "$ver"


def _coerce(value: Any) -> PermissionValue:
    if isinstance(value, PermissionValue):
        return value
    if value is None or isinstance(value, bool):
        return PermissionValue.from_bool(value)
    if isinstance(value, str):
        try:
            return PermissionValue(value.lower())
        except ValueError:
            pass
    raise ValidationError(f"Invalid permission value: {value!r}")


class PermissionData:
    """
    Explicit ALLOW/DISALLOW values of one holder, keyed by permission and operation.

    INHERIT is never stored: setting an operation to INHERIT removes it.
    """

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        schema_version: int | None = None,
    ) -> None:
        self._values: dict[str, dict[str, PermissionValue]] = {}
        data = data or {}
        version = data.get(_VERSION_KEY)
        if schema_version is not None:
            version = schema_version
        if version is None:
            version = CURRENT_SCHEMA_VERSION
        try:
            version = int(version)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid permission schema version: {version!r}") from e
        self.schema_version = version
        for permission, operations in data.items():
            if permission.startswith("$") or not isinstance(operations, Mapping):
                continue
            for operation, value in operations.items():
                self.set_permission_value(permission, operation, _coerce(value))

    @property
    def schema_version(self) -> int:
        return self._schema_version

    @schema_version.setter
    def schema_version(self, value: int) -> None:
        if value < 0:
            raise ValidationError("The schema version must be a positive integer")
        self._schema_version = value

    def is_any_operation_of_permission_set(self, permission: str) -> bool:
        return bool(self._values.get(permission))

    def get_all_defined_operations_of_permission(
        self, permission: str
    ) -> dict[str, PermissionValue]:
        return dict(self._values.get(permission, {}))

    def set_all_operations_of_permission(
        self, permission: str, operations: Mapping[str, PermissionValue]
    ) -> None:
        """Replace every operation value of the permission."""
        self._values.pop(permission, None)
        for operation, value in operations.items():
            self.set_permission_value(permission, operation, _coerce(value))

    def remove_permission(self, permission: str) -> None:
        self._values.pop(permission, None)

    def is_permission_set(self, permission: str, operation: str) -> bool:
        # metadata keys are never permissions
        if "$" in permission:
            return False
        return operation in self._values.get(permission, {})

    def get_permission_value(self, permission: str, operation: str) -> PermissionValue:
        if not self.is_permission_set(permission, operation):
            return PermissionValue.INHERIT
        return self._values[permission][operation]

    def set_permission_value(
        self, permission: str, operation: str, value: PermissionValue
    ) -> None:
        if value is PermissionValue.INHERIT:
            operations = self._values.get(permission)
            if operations is not None:
                operations.pop(operation, None)
                if not operations:
                    del self._values[permission]
            return
        self._values.setdefault(permission, {})[operation] = value

    def reset_permissions(self) -> None:
        self._values.clear()

    def copy(self) -> "PermissionData":
        return PermissionData(self.to_dict())

    def to_dict(self, include_version: bool = True) -> dict[str, Any]:
        """JSON-ready dict: true = allow, false = disallow, inherit omitted."""
        result: dict[str, Any] = {
            permission: {op: value is PermissionValue.ALLOW for op, value in ops.items()}
            for permission, ops in self._values.items()
            if ops
        }
        if include_version:
            result[_VERSION_KEY] = self.schema_version
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_json(cls, raw: str) -> "PermissionData":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid permission data JSON: {e}") from e
        if not isinstance(data, dict):
            raise ValidationError("Permission data JSON must be an object")
        return cls(data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PermissionData):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"PermissionData({self.to_dict()!r})"
