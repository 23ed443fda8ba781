"""Permission schema updater - migrates stored permission tables to new layouts."""

import logging
from collections.abc import Callable

from partguard.application.ports import PermissionHolder
from partguard.domain.entities import CURRENT_SCHEMA_VERSION, GroupHierarchy, User
from partguard.domain.exceptions import ValidationError
from partguard.domain.value_objects import PermissionValue

logger = logging.getLogger(__name__)


def _upgrade_to_version_1(holder: PermissionHolder) -> None:
    """Derive the stock permissions from parts.edit."""
    data = holder.permissions
    stock_ops = ("withdraw", "add", "move")
    if any(data.is_permission_set("parts_stock", op) for op in stock_ops):
        return
    value = data.get_permission_value("parts", "edit")
    for op in stock_ops:
        data.set_permission_value("parts_stock", op, value)


def _upgrade_to_version_2(holder: PermissionHolder) -> None:
    """The devices permission was renamed to projects."""
    data = holder.permissions
    if data.is_any_operation_of_permission_set("projects"):
        return
    operations = data.get_all_defined_operations_of_permission("devices")
    data.set_all_operations_of_permission("projects", operations)
    data.remove_permission("devices")


def _upgrade_to_version_3(holder: PermissionHolder) -> None:
    """Whoever could see server infos may also see available updates."""
    data = holder.permissions
    if data.is_permission_set("system", "show_updates"):
        return
    if data.get_permission_value("system", "server_infos") is PermissionValue.ALLOW:
        data.set_permission_value("system", "show_updates", PermissionValue.ALLOW)


# target version -> upgrade step
_UPGRADE_STEPS: dict[int, Callable[[PermissionHolder], None]] = {
    1: _upgrade_to_version_1,
    2: _upgrade_to_version_2,
    3: _upgrade_to_version_3,
}


class PermissionSchemaUpdater:
    """Brings permission tables of users and groups up to the current schema version."""

    def is_schema_update_needed(self, holder: PermissionHolder) -> bool:
        return holder.permissions.schema_version < CURRENT_SCHEMA_VERSION

    def upgrade_schema(
        self,
        holder: PermissionHolder,
        target_version: int = CURRENT_SCHEMA_VERSION,
    ) -> bool:
        """Run every missing step up to target_version. Returns True if anything ran."""
        if target_version > CURRENT_SCHEMA_VERSION:
            raise ValidationError(
                "The target version is higher than the maximum possible schema version"
            )
        data = holder.permissions
        if target_version <= data.schema_version:
            return False

        start = data.schema_version
        for version in range(start + 1, target_version + 1):
            _UPGRADE_STEPS[version](holder)
            data.schema_version = version

        logger.info(
            "permissions.schema.upgraded",
            extra={"holder": holder.name, "from_version": start, "to_version": target_version},
        )
        return True

    def group_upgrade_schema_recursively(
        self,
        groups: GroupHierarchy,
        group_id: int,
        target_version: int = CURRENT_SCHEMA_VERSION,
    ) -> bool:
        """Upgrade the group and all its ancestors."""
        updated = False
        for group in groups.chain(group_id):
            updated = self.upgrade_schema(group, target_version) or updated
        return updated

    def user_upgrade_schema_recursively(
        self,
        user: User,
        groups: GroupHierarchy,
        target_version: int = CURRENT_SCHEMA_VERSION,
    ) -> bool:
        """Upgrade the user, its group and the group's ancestors."""
        updated = self.upgrade_schema(user, target_version)
        if user.group_id is not None:
            updated = (
                self.group_upgrade_schema_recursively(groups, user.group_id, target_version)
                or updated
            )
        return updated
