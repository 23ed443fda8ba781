"""Domain value objects."""

from partguard.domain.value_objects.api_token_level import ApiTokenLevel
from partguard.domain.value_objects.column_security_policy import (
    NO_PLACEHOLDER,
    ColumnSecurityPolicy,
)
from partguard.domain.value_objects.field_type import FieldType
from partguard.domain.value_objects.operation_ref import OperationRef
from partguard.domain.value_objects.permission_value import PermissionValue

__all__ = [
    "NO_PLACEHOLDER",
    "ApiTokenLevel",
    "ColumnSecurityPolicy",
    "FieldType",
    "OperationRef",
    "PermissionValue",
]
