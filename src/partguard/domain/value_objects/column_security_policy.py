"""Column security policy attached to a protected entity field."""

from dataclasses import dataclass
from typing import Any


class _NoPlaceholder:
    def __repr__(self) -> str:
        return "NO_PLACEHOLDER"


# Marks a policy without explicit placeholder (None is a valid placeholder).
NO_PLACEHOLDER: Any = _NoPlaceholder()


@dataclass(frozen=True)
class ColumnSecurityPolicy:
    """
    Who may read and edit a field, and what readers without access see instead.

    With a prefix the operations resolve to ``prefix.read`` / ``prefix.edit``
    (prefix names the permission). Without one, the raw ``read`` / ``edit``
    apply to the owning entity's base permission.
    """

    read: str = "read"
    edit: str = "edit"
    prefix: str | None = None
    placeholder: Any = NO_PLACEHOLDER
    type: str | None = None

    @property
    def has_placeholder(self) -> bool:
        return self.placeholder is not NO_PLACEHOLDER

    @property
    def read_operation_name(self) -> str:
        return self._operation_name(self.read)

    @property
    def edit_operation_name(self) -> str:
        return self._operation_name(self.edit)

    def _operation_name(self, operation: str) -> str:
        if self.prefix:
            return f"{self.prefix}.{operation}"
        return operation
