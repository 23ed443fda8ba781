"""Application ports - interfaces for external adapters."""

from partguard.application.ports.permission_checker import PermissionChecker
from partguard.application.ports.permission_editor import PermissionEditor
from partguard.application.ports.permission_holder import PermissionHolder
from partguard.application.ports.permission_table_source import PermissionTableSource
from partguard.application.ports.preset_applier import PresetApplier

__all__ = [
    "PermissionChecker",
    "PermissionEditor",
    "PermissionHolder",
    "PermissionTableSource",
    "PresetApplier",
]
