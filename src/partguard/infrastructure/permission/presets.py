"""Permission presets - predefined permission sets for new users and groups."""

from enum import StrEnum

from partguard.application.ports import PermissionHolder
from partguard.domain.exceptions import ValidationError
from partguard.domain.value_objects import PermissionValue
from partguard.infrastructure.permission.permission_manager import PermissionManager

ALLOW = PermissionValue.ALLOW
INHERIT = PermissionValue.INHERIT

# Data structures editors may fully manage, except importing.
_DATA_STRUCTURES = (
    "parts",
    "categories",
    "storelocations",
    "footprints",
    "manufacturers",
    "attachment_types",
    "currencies",
    "measurement_units",
    "suppliers",
    "projects",
)


class PermissionPreset(StrEnum):
    """Available presets."""

    ALL_INHERIT = "all_inherit"
    ALL_FORBID = "all_forbid"
    ALL_ALLOW = "all_allow"
    READ_ONLY = "read_only"
    EDITOR = "editor"
    ADMIN = "admin"


class PermissionPresetsHelper:
    """Applies presets. Permissions the loaded structure lacks are skipped."""

    def __init__(self, permission_manager: PermissionManager) -> None:
        self._manager = permission_manager

    def apply_preset(self, holder: PermissionHolder, preset: str) -> PermissionHolder:
        """Reset the holder's table and apply the preset (plus alsoSet implications)."""
        try:
            preset = PermissionPreset(preset)
        except ValueError as e:
            raise ValidationError(f"Unknown permission preset name: {preset}") from e

        holder.permissions.reset_permissions()
        if preset is PermissionPreset.ALL_FORBID:
            self._manager.set_all_permissions(holder, PermissionValue.DISALLOW)
        elif preset is PermissionPreset.ALL_ALLOW:
            self._manager.set_all_permissions(holder, ALLOW)
        elif preset is PermissionPreset.READ_ONLY:
            self._read_only(holder)
        elif preset is PermissionPreset.EDITOR:
            self._editor(holder)
        elif preset is PermissionPreset.ADMIN:
            self._admin(holder)

        self._manager.ensure_correct_set_operations(holder)
        return holder

    def _read_only(self, holder: PermissionHolder) -> None:
        # read on data structures is inherited from parts.read by voters, so one value suffices
        self._set(holder, "parts", "read", ALLOW)
        for operation in (
            "statistics",
            "label_scanner",
            "reel_calculator",
            "builtin_footprints_viewer",
            "ic_logos",
        ):
            self._set(holder, "tools", operation, ALLOW)
        self._set(holder, "attachments", "list_attachments", ALLOW)
        self._set(holder, "self", "show_permissions", ALLOW)
        for operation in ("create_labels", "edit_options", "read_profiles"):
            self._set(holder, "labels", operation, ALLOW)
        self._set(holder, "projects", "read", ALLOW)

    def _editor(self, holder: PermissionHolder) -> None:
        self._read_only(holder)
        for permission in _DATA_STRUCTURES:
            self._set_all(holder, permission, ALLOW, except_operations=("import",))
        self._set_all(holder, "parts_stock", ALLOW)
        self._set(holder, "attachments", "show_private", ALLOW)
        self._set_all(holder, "labels", ALLOW)
        self._set(holder, "labels", "use_twig", INHERIT)
        self._set(holder, "self", "edit_infos", ALLOW)
        self._set(holder, "tools", "lastActivity", ALLOW)
        self._set(holder, "info_providers", "create_parts", ALLOW)

    def _admin(self, holder: PermissionHolder) -> None:
        self._editor(holder)
        self._set_all(holder, "users", ALLOW)
        self._set_all(holder, "groups", ALLOW)
        self._set(holder, "system", "show_logs", ALLOW)
        self._set(holder, "system", "server_infos", ALLOW)
        for permission in (*_DATA_STRUCTURES, "parts_stock", "part_custom_states"):
            self._set_all(holder, permission, ALLOW)
        self._set(holder, "config", "change_system_settings", ALLOW)
        self._set(holder, "system", "manage_oauth_tokens", ALLOW)
        self._set(holder, "system", "show_updates", ALLOW)

    def _set(
        self,
        holder: PermissionHolder,
        permission: str,
        operation: str,
        value: PermissionValue,
    ) -> None:
        if self._manager.structure.has_operation(permission, operation):
            self._manager.set_permission(holder, permission, operation, value)

    def _set_all(
        self,
        holder: PermissionHolder,
        permission: str,
        value: PermissionValue,
        except_operations: tuple[str, ...] = (),
    ) -> None:
        if self._manager.structure.has_permission(permission):
            self._manager.set_all_operations_of_permission(
                holder, permission, value, except_operations
            )
