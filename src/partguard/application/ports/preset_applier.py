"""Preset applier port - replaces permission tables with named presets."""

from typing import Protocol

from partguard.application.ports.permission_holder import PermissionHolder


class PresetApplier(Protocol):
    """Port for applying a permission preset to a user or group."""

    def apply_preset(self, holder: PermissionHolder, preset: str) -> PermissionHolder: ...
