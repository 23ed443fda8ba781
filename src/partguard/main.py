"""Application entry point and composition root."""

from dataclasses import dataclass

from partguard.application.use_cases.permission.apply_preset import ApplyPresetUseCase
from partguard.application.use_cases.permission.list_permissions import ListPermissionsUseCase
from partguard.application.use_cases.permission.set_permission import SetPermissionUseCase
from partguard.config import Settings, get_settings
from partguard.domain.entities import GroupHierarchy, PermissionStructure, User
from partguard.domain.value_objects import PermissionValue
from partguard.infrastructure.permission.permission_manager import PermissionManager
from partguard.infrastructure.permission.permission_resolver import PermissionResolver
from partguard.infrastructure.permission.presets import PermissionPresetsHelper
from partguard.infrastructure.permission.schema_updater import PermissionSchemaUpdater
from partguard.infrastructure.permission.structure_loader import (
    load_default_permission_structure,
    load_permission_structure_file,
)
from partguard.infrastructure.security.column_security import (
    ColumnSecurityEvaluator,
    ColumnSecurityRegistry,
)
from partguard.infrastructure.security.part_policies import default_part_registry
from partguard.logging_config import configure_logging


@dataclass
class PermissionServices:
    """Everything the hosting application needs, wired together."""

    structure: PermissionStructure
    resolver: PermissionResolver
    manager: PermissionManager
    schema_updater: PermissionSchemaUpdater
    column_registry: ColumnSecurityRegistry
    column_security: ColumnSecurityEvaluator
    set_permission: SetPermissionUseCase
    apply_preset: ApplyPresetUseCase
    list_permissions: ListPermissionsUseCase


def load_structure(settings: Settings) -> PermissionStructure:
    """Configured structure file, or the bundled Part-DB structure."""
    if settings.permissions_file is not None:
        return load_permission_structure_file(
            settings.permissions_file, max_depth=settings.also_set_max_depth
        )
    return load_default_permission_structure(max_depth=settings.also_set_max_depth)


def create_permission_services(
    settings: Settings | None = None,
    groups: GroupHierarchy | None = None,
    anonymous_user: User | None = None,
) -> PermissionServices:
    """
    Composition root - build all permission services from settings.
    anonymous_user is checked whenever a permission check has no actor.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    structure = load_structure(settings)
    resolver = PermissionResolver(
        structure,
        groups=groups,
        default_value=PermissionValue(settings.default_permission),
        anonymous_user=anonymous_user,
    )
    manager = PermissionManager(structure)
    presets = PermissionPresetsHelper(manager)
    column_registry = default_part_registry(structure, masked_text=settings.masked_text)

    return PermissionServices(
        structure=structure,
        resolver=resolver,
        manager=manager,
        schema_updater=PermissionSchemaUpdater(),
        column_registry=column_registry,
        column_security=ColumnSecurityEvaluator(resolver, column_registry),
        set_permission=SetPermissionUseCase(manager, resolver),
        apply_preset=ApplyPresetUseCase(presets, resolver),
        list_permissions=ListPermissionsUseCase(resolver),
    )
