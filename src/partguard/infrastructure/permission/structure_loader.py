"""Loads the declarative permission structure (groups, perms, operations)."""

import json
import logging
from collections import deque
from collections.abc import Mapping
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from partguard.domain.entities import (
    Operation,
    PermissionDefinition,
    PermissionGroupDefinition,
    PermissionStructure,
)
from partguard.domain.exceptions import ConfigurationError
from partguard.domain.value_objects import OperationRef

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32
DEFAULT_STRUCTURE_RESOURCE = "permissions.json"


class _OperationConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    label: str = ""
    bit: int
    also_set: list[str] = Field(default_factory=list, alias="alsoSet")
    api_token_role: str | None = Field(default=None, alias="apiTokenRole")

    @field_validator("also_set", mode="before")
    @classmethod
    def _single_also_set(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value


class _PermissionConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    label: str = ""
    group: str | None = None
    operations: dict[str, _OperationConfig] = Field(default_factory=dict)


class _GroupConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    label: str = ""


class _StructureConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    groups: dict[str, _GroupConfig] = Field(default_factory=dict)
    perms: dict[str, _PermissionConfig]


def load_permission_structure(
    config: Mapping[str, Any],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> PermissionStructure:
    """
    Build a PermissionStructure from its declarative definition.
    Raises ConfigurationError on malformed input, unknown group references,
    duplicate or invalid bits, unknown alsoSet targets and alsoSet chains
    deeper than max_depth.
    """
    try:
        raw = _StructureConfig.model_validate(config)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Malformed permission structure: {e}") from e

    groups = {
        key: PermissionGroupDefinition(key=key, label=group.label or key)
        for key, group in raw.groups.items()
    }

    for perm_key, perm in raw.perms.items():
        if perm.group is not None and perm.group not in groups:
            raise ConfigurationError(
                f'Permission "{perm_key}" references unknown group "{perm.group}"'
            )
        if not perm.operations:
            raise ConfigurationError(f'Permission "{perm_key}" defines no operations')
        seen_bits: dict[int, str] = {}
        for op_name, op in perm.operations.items():
            if op.bit < 0 or op.bit % 2 != 0:
                raise ConfigurationError(
                    f'Operation "{perm_key}.{op_name}" has invalid bit {op.bit}: '
                    "bits address pairs and must be even and non-negative"
                )
            if op.bit in seen_bits:
                raise ConfigurationError(
                    f'Operation "{perm_key}.{op_name}" reuses bit {op.bit} '
                    f'of "{perm_key}.{seen_bits[op.bit]}"'
                )
            seen_bits[op.bit] = op_name

    permissions: dict[str, PermissionDefinition] = {}
    for perm_key, perm in raw.perms.items():
        operations: dict[str, Operation] = {}
        for op_name, op in perm.operations.items():
            operations[op_name] = Operation(
                name=op_name,
                label=op.label or op_name,
                bit=op.bit,
                api_token_role=op.api_token_role,
                also_set=tuple(
                    _resolve_also_set(raw, perm_key, op_name, entry) for entry in op.also_set
                ),
            )
        permissions[perm_key] = PermissionDefinition(
            key=perm_key,
            label=perm.label or perm_key,
            group=perm.group,
            operations=operations,
        )

    structure = PermissionStructure(
        groups=groups,
        permissions=permissions,
        implied_by=_reverse_closure(permissions, max_depth),
    )
    logger.debug(
        "permissions.structure.loaded",
        extra={
            "permissions": len(permissions),
            "operations": sum(len(p.operations) for p in permissions.values()),
        },
    )
    return structure


def _resolve_also_set(
    raw: _StructureConfig, perm_key: str, op_name: str, entry: str
) -> OperationRef:
    try:
        ref = OperationRef.parse(entry, default_permission=perm_key)
    except ValueError as e:
        raise ConfigurationError(f'Operation "{perm_key}.{op_name}": {e}') from e
    target = raw.perms.get(ref.permission)
    if target is None or ref.operation not in target.operations:
        raise ConfigurationError(
            f'Operation "{perm_key}.{op_name}" alsoSet references unknown operation "{ref}"'
        )
    return ref


def _reverse_closure(
    permissions: Mapping[str, PermissionDefinition], max_depth: int
) -> dict[OperationRef, frozenset[OperationRef]]:
    """For every operation, the operations that imply it transitively."""
    reverse: dict[OperationRef, set[OperationRef]] = {}
    for perm in permissions.values():
        for op in perm.operations.values():
            source = OperationRef(perm.key, op.name)
            for target in op.also_set:
                reverse.setdefault(target, set()).add(source)

    closure: dict[OperationRef, frozenset[OperationRef]] = {}
    for start in reverse:
        found: set[OperationRef] = set()
        queue = deque([(start, 0)])
        while queue:
            current, depth = queue.popleft()
            for source in reverse.get(current, ()):
                if source in found or source == start:
                    continue
                if depth + 1 > max_depth:
                    raise ConfigurationError(
                        f'alsoSet implication chain for "{start}" exceeds depth {max_depth}'
                    )
                found.add(source)
                queue.append((source, depth + 1))
        closure[start] = frozenset(found)
    return closure


def load_permission_structure_file(
    path: str | Path,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> PermissionStructure:
    """Load a permission structure from a JSON file."""
    path = Path(path)
    try:
        config = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read permission structure {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in permission structure {path}: {e}") from e
    return load_permission_structure(config, max_depth=max_depth)


def load_default_permission_structure(
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> PermissionStructure:
    """Load the Part-DB permission structure bundled with the package."""
    text = (
        resources.files("partguard.resources")
        .joinpath(DEFAULT_STRUCTURE_RESOURCE)
        .read_text(encoding="utf-8")
    )
    return load_permission_structure(json.loads(text), max_depth=max_depth)
