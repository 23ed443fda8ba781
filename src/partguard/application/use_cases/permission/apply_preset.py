"""Apply permission preset use case."""

from partguard.application.ports import PermissionChecker, PermissionHolder, PresetApplier
from partguard.domain.entities import Group
from partguard.domain.exceptions import PermissionDenied


class ApplyPresetUseCase:
    """Replace a user's or group's permissions with a named preset."""

    def __init__(
        self,
        preset_applier: PresetApplier,
        permission_checker: PermissionChecker,
    ) -> None:
        self._presets = preset_applier
        self._permission_checker = permission_checker

    def execute(
        self,
        actor: PermissionHolder,
        holder: PermissionHolder,
        preset: str,
    ) -> PermissionHolder:
        target = "groups" if isinstance(holder, Group) else "users"
        if not self._permission_checker.is_allowed(actor, target, "edit_permissions"):
            raise PermissionDenied(f"User does not have permission to edit {target} permissions")
        return self._presets.apply_preset(holder, preset)
