"""Unit tests for permission use cases."""

import ast
from pathlib import Path

import pytest

import partguard.application
from partguard.application.use_cases.permission.apply_preset import ApplyPresetUseCase
from partguard.application.use_cases.permission.list_permissions import (
    ListPermissionsUseCase,
)
from partguard.application.use_cases.permission.set_permission import SetPermissionUseCase
from partguard.domain.entities import PermissionStructure, User
from partguard.domain.exceptions import PermissionDenied, UnknownPermissionError
from partguard.domain.value_objects import PermissionValue
from partguard.infrastructure.permission.permission_manager import PermissionManager
from partguard.infrastructure.permission.permission_resolver import PermissionResolver
from partguard.infrastructure.permission.presets import PermissionPresetsHelper

from tests.conftest import ALLOW, DISALLOW, INHERIT, make_group, make_user, resolver_with_groups


# --- SetPermissionUseCase ---


def test_set_permission_success(manager: PermissionManager, mock_permission_checker) -> None:
    """SetPermissionUseCase sets the value and applies alsoSet."""
    use_case = SetPermissionUseCase(manager, mock_permission_checker)
    admin = make_user(user_id=1)
    target = make_user(user_id=2)

    result = use_case.execute(admin, target, "parts", "delete", ALLOW)

    assert result is target
    assert target.permissions.get_permission_value("parts", "delete") is ALLOW
    assert target.permissions.get_permission_value("parts", "edit") is ALLOW
    mock_permission_checker.is_allowed.assert_called_once_with(admin, "users", "edit_permissions")


def test_set_permission_on_group_checks_groups(
    manager: PermissionManager, mock_permission_checker
) -> None:
    """Changing a group requires groups.edit_permissions."""
    use_case = SetPermissionUseCase(manager, mock_permission_checker)
    admin = make_user()
    group = make_group(5)

    use_case.execute(admin, group, "parts", "read", DISALLOW)

    mock_permission_checker.is_allowed.assert_called_once_with(admin, "groups", "edit_permissions")
    assert group.permissions.get_permission_value("parts", "read") is DISALLOW


def test_set_permission_denied(manager: PermissionManager, mock_permission_checker) -> None:
    """Without edit_permissions the target is left unchanged."""
    mock_permission_checker.is_allowed.return_value = False
    use_case = SetPermissionUseCase(manager, mock_permission_checker)
    target = make_user(user_id=2)

    with pytest.raises(PermissionDenied, match="edit users permissions"):
        use_case.execute(make_user(), target, "parts", "read", ALLOW)
    assert target.permissions.get_permission_value("parts", "read") is INHERIT


def test_set_permission_unknown_operation(
    manager: PermissionManager, mock_permission_checker
) -> None:
    use_case = SetPermissionUseCase(manager, mock_permission_checker)
    with pytest.raises(UnknownPermissionError):
        use_case.execute(make_user(), make_user(user_id=2), "parts", "fly", ALLOW)


def test_set_permission_with_real_resolver(
    structure: PermissionStructure, manager: PermissionManager
) -> None:
    """Members of a group with users.edit_permissions may change other users."""
    resolver = resolver_with_groups(
        structure, make_group(1, values={"users": {"edit_permissions": ALLOW}})
    )
    use_case = SetPermissionUseCase(manager, resolver)
    target = make_user(user_id=2)

    use_case.execute(make_user(1), target, "parts", "edit", ALLOW)

    assert resolver.is_allowed(target, "parts", "read")
    with pytest.raises(PermissionDenied):
        use_case.execute(target, make_user(user_id=3), "parts", "edit", ALLOW)


# --- ApplyPresetUseCase ---


def test_apply_preset(manager: PermissionManager, mock_permission_checker) -> None:
    use_case = ApplyPresetUseCase(PermissionPresetsHelper(manager), mock_permission_checker)
    target = make_user(user_id=2)

    use_case.execute(make_user(), target, "all_forbid")

    assert target.permissions.get_permission_value("parts", "read") is DISALLOW


def test_apply_preset_denied(manager: PermissionManager, mock_permission_checker) -> None:
    mock_permission_checker.is_allowed.return_value = False
    use_case = ApplyPresetUseCase(PermissionPresetsHelper(manager), mock_permission_checker)
    group = make_group(1, values={"parts": {"read": ALLOW}})

    with pytest.raises(PermissionDenied, match="edit groups permissions"):
        use_case.execute(make_user(), group, "all_forbid")
    assert group.permissions.get_permission_value("parts", "read") is ALLOW


# --- ListPermissionsUseCase ---


def test_list_permissions_inherited(structure: PermissionStructure) -> None:
    """Rows follow structure order; values come from the group chain."""
    resolver = resolver_with_groups(structure, make_group(1, values={"parts": {"read": ALLOW}}))
    rows = ListPermissionsUseCase(resolver).execute(make_user(1, {"parts": {"edit": DISALLOW}}))

    assert len(rows) == sum(1 for _ in structure.operation_refs())
    assert rows[0].index == "1-1"
    assert (rows[0].permission, rows[0].operation, rows[0].value) == ("parts", "read", ALLOW)
    assert rows[0].permission_label == "perm.parts"
    assert rows[1].value is DISALLOW
    assert rows[2].value is INHERIT
    assert rows[4].index == "2-1"


def test_list_permissions_not_inherited(structure: PermissionStructure) -> None:
    resolver = resolver_with_groups(structure, make_group(1, values={"parts": {"read": ALLOW}}))
    rows = ListPermissionsUseCase(resolver).execute(make_user(1), inherit=False)
    assert all(row.value is INHERIT for row in rows)


def test_list_permissions_of_group(resolver: PermissionResolver) -> None:
    group = make_group(1, values={"users": {"read": DISALLOW}})
    rows = ListPermissionsUseCase(resolver).execute(group, inherit=False)
    values = {(r.permission, r.operation): r.value for r in rows}
    assert values[("users", "read")] is DISALLOW


# --- Ports ---


class _StaticPermissionSource:
    """Permission table source returning one fixed value for everything."""

    def __init__(self, structure: PermissionStructure, value: PermissionValue) -> None:
        self._structure = structure
        self._value = value
        self.inherit_calls: list[tuple[str, str]] = []

    def get_permission_structure(self) -> PermissionStructure:
        return self._structure

    def inherit(self, actor, permission: str, operation: str) -> PermissionValue:
        self.inherit_calls.append((permission, operation))
        return self._value

    def dont_inherit(self, holder, permission: str, operation: str) -> PermissionValue:
        return INHERIT


class _RecordingEditor:
    """Permission editor that only records calls."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def set_permission(self, holder, permission: str, operation: str, value: PermissionValue) -> None:
        self.calls.append(("set", permission, operation, value))

    def ensure_correct_set_operations(self, holder) -> int:
        self.calls.append(("ensure",))
        return 0


def test_list_permissions_with_any_table_source(structure: PermissionStructure) -> None:
    """ListPermissionsUseCase only needs the table source protocol."""
    source = _StaticPermissionSource(structure, ALLOW)
    rows = ListPermissionsUseCase(source).execute(make_user())
    assert rows
    assert all(row.value is ALLOW for row in rows)
    assert source.inherit_calls[0] == ("parts", "read")


def test_set_permission_with_any_editor(mock_permission_checker) -> None:
    """SetPermissionUseCase only needs the editor protocol."""
    editor = _RecordingEditor()
    target = User(id=2, name="bob")
    SetPermissionUseCase(editor, mock_permission_checker).execute(
        make_user(), target, "parts", "read", ALLOW
    )
    assert editor.calls == [("set", "parts", "read", ALLOW), ("ensure",)]


def test_application_layer_does_not_import_infrastructure() -> None:
    """Use cases and ports depend on the domain only."""
    root = Path(partguard.application.__file__).parent
    offenders = []
    for path in root.rglob("*.py"):
        tree = ast.parse(path.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if isinstance(node, ast.ImportFrom) and node.module:
                names = [node.module]
            elif isinstance(node, ast.Import):
                names = [alias.name for alias in node.names]
            else:
                continue
            if any(name.startswith("partguard.infrastructure") for name in names):
                offenders.append(path.name)
    assert offenders == []
