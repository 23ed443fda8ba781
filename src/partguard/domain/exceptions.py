"""Domain exceptions."""


class PartGuardError(Exception):
    """Base exception for partguard."""

    pass


class ConfigurationError(PartGuardError):
    """Permission structure, group hierarchy or column policy is malformed."""

    pass


class UnknownPermissionError(PartGuardError):
    """Requested permission/operation combination does not exist."""

    def __init__(self, permission: str, operation: str | None = None) -> None:
        self.permission = permission
        self.operation = operation
        if operation is None:
            message = f'Unknown permission "{permission}"'
        else:
            message = f'Unknown permission operation "{permission}.{operation}"'
        super().__init__(message)


class PermissionCycleError(PartGuardError):
    """Group inheritance graph contains a cycle."""

    def __init__(self, group_ids: list[int]) -> None:
        self.group_ids = group_ids
        path = " -> ".join(str(g) for g in group_ids)
        super().__init__(f"Group inheritance cycle detected: {path}")


class PermissionDenied(PartGuardError):
    """Actor does not have permission for the requested action."""

    pass


class ValidationError(PartGuardError):
    """Validation failed for input data."""

    pass
