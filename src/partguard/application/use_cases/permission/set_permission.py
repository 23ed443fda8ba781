"""Set permission use case."""

from partguard.application.ports import PermissionChecker, PermissionEditor, PermissionHolder
from partguard.domain.entities import Group
from partguard.domain.exceptions import PermissionDenied
from partguard.domain.value_objects import PermissionValue


class SetPermissionUseCase:
    """Change one permission operation on a user or group."""

    def __init__(
        self,
        permission_editor: PermissionEditor,
        permission_checker: PermissionChecker,
    ) -> None:
        self._editor = permission_editor
        self._permission_checker = permission_checker

    def execute(
        self,
        actor: PermissionHolder,
        holder: PermissionHolder,
        permission: str,
        operation: str,
        value: PermissionValue,
    ) -> PermissionHolder:
        """Set value on holder. Actor needs edit_permissions on users or groups."""
        target = "groups" if isinstance(holder, Group) else "users"
        if not self._permission_checker.is_allowed(actor, target, "edit_permissions"):
            raise PermissionDenied(f"User does not have permission to edit {target} permissions")

        self._editor.set_permission(holder, permission, operation, value)
        self._editor.ensure_correct_set_operations(holder)
        return holder
