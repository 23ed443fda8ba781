"""Reference to a single operation of a permission."""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class OperationRef:
    """Permission key plus operation name, e.g. ``parts.read``."""

    permission: str
    operation: str

    @classmethod
    def parse(cls, value: str, default_permission: str | None = None) -> "OperationRef":
        """
        Parse ``perm.op`` or a bare ``op``.
        A bare operation needs default_permission, otherwise ValueError is raised.
        """
        if "." in value:
            permission, _, operation = value.partition(".")
        elif default_permission is not None:
            permission, operation = default_permission, value
        else:
            raise ValueError(f'Operation "{value}" has no permission prefix')
        if not permission or not operation:
            raise ValueError(f'Malformed operation reference "{value}"')
        return cls(permission=permission, operation=operation)

    def __str__(self) -> str:
        return f"{self.permission}.{self.operation}"
