"""Column security - per-field read masking and write guarding for entities."""

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from partguard.application.ports import PermissionChecker, PermissionHolder
from partguard.domain.entities import ENTITY_TYPES, NamedElement, PermissionStructure
from partguard.domain.exceptions import ConfigurationError, PermissionDenied
from partguard.domain.value_objects import ColumnSecurityPolicy, OperationRef
from partguard.infrastructure.security.placeholders import (
    DEFAULT_MASKED_TEXT,
    PlaceholderFactory,
    resolve_placeholder_factory,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProtectedField:
    """A registered field with its policy resolved against the structure."""

    entity_type: str
    field: str
    policy: ColumnSecurityPolicy
    read_operation: OperationRef
    edit_operation: OperationRef
    make_placeholder: PlaceholderFactory


def _type_name(entity_type: str | type) -> str:
    return entity_type if isinstance(entity_type, str) else entity_type.__name__


class ColumnSecurityRegistry:
    """
    Explicit mapping (entity type, field) -> policy, validated at registration.

    Each entity type has a base permission that bare ``read`` / ``edit``
    operation names resolve against.
    """

    def __init__(
        self,
        structure: PermissionStructure,
        masked_text: str = DEFAULT_MASKED_TEXT,
        entity_types: Mapping[str, type[NamedElement]] | None = None,
    ) -> None:
        self._structure = structure
        self._masked_text = masked_text
        self._entity_types = dict(ENTITY_TYPES if entity_types is None else entity_types)
        self._base_permissions: dict[str, str] = {}
        self._fields: dict[str, dict[str, ProtectedField]] = {}

    def register_entity(self, entity_type: str | type, base_permission: str) -> None:
        """Declare the permission that bare operation names of this entity refer to."""
        if not self._structure.has_permission(base_permission):
            raise ConfigurationError(
                f'Entity {_type_name(entity_type)} uses unknown base permission "{base_permission}"'
            )
        self._base_permissions[_type_name(entity_type)] = base_permission

    def register(
        self,
        entity_type: str | type,
        field: str,
        policy: ColumnSecurityPolicy,
        entity_class: type[NamedElement] | None = None,
    ) -> ProtectedField:
        """
        Register a policy for a field. Operation names and the placeholder are
        resolved now; raises ConfigurationError when either cannot be.
        """
        type_name = _type_name(entity_type)
        if field in self._fields.get(type_name, {}):
            raise ConfigurationError(f"Field {type_name}.{field} is already registered")

        base_permission = self._base_permission(entity_type)
        protected = ProtectedField(
            entity_type=type_name,
            field=field,
            policy=policy,
            read_operation=self._resolve_operation(
                type_name, field, policy.read_operation_name, base_permission
            ),
            edit_operation=self._resolve_operation(
                type_name, field, policy.edit_operation_name, base_permission
            ),
            make_placeholder=self._resolve_placeholder(type_name, field, policy, entity_class),
        )
        self._fields.setdefault(type_name, {})[field] = protected
        return protected

    def get(self, entity_type: str | type, field: str) -> ProtectedField | None:
        return self._registered_fields(entity_type).get(field)

    def fields_of(self, entity_type: str | type) -> Iterator[ProtectedField]:
        return iter(self._registered_fields(entity_type).values())

    def _registered_fields(self, entity_type: str | type) -> dict[str, ProtectedField]:
        """Fields of the type including those registered for its base classes."""
        if isinstance(entity_type, str):
            return self._fields.get(entity_type, {})
        merged: dict[str, ProtectedField] = {}
        for cls in reversed(entity_type.__mro__):
            merged.update(self._fields.get(cls.__name__, {}))
        return merged

    def _base_permission(self, entity_type: str | type) -> str | None:
        if isinstance(entity_type, str):
            return self._base_permissions.get(entity_type)
        for cls in entity_type.__mro__:
            if cls.__name__ in self._base_permissions:
                return self._base_permissions[cls.__name__]
        return None

    def __len__(self) -> int:
        return sum(len(fields) for fields in self._fields.values())

    def _resolve_operation(
        self,
        type_name: str,
        field: str,
        operation_name: str,
        base_permission: str | None,
    ) -> OperationRef:
        try:
            ref = OperationRef.parse(operation_name, default_permission=base_permission)
        except ValueError as e:
            raise ConfigurationError(
                f"Field {type_name}.{field}: {e} and the entity has no base permission"
            ) from e
        if not self._structure.has_operation(ref.permission, ref.operation):
            raise ConfigurationError(
                f'Field {type_name}.{field} references unknown operation "{ref}"'
            )
        return ref

    def _resolve_placeholder(
        self,
        type_name: str,
        field: str,
        policy: ColumnSecurityPolicy,
        entity_class: type[NamedElement] | None,
    ) -> PlaceholderFactory:
        try:
            return resolve_placeholder_factory(
                policy, self._entity_types, self._masked_text, entity_class
            )
        except ConfigurationError as e:
            raise ConfigurationError(f"Field {type_name}.{field}: {e}") from e


class ColumnSecurityEvaluator:
    """Applies registered column policies on field reads and writes."""

    def __init__(
        self,
        permission_checker: PermissionChecker,
        registry: ColumnSecurityRegistry,
    ) -> None:
        self._permission_checker = permission_checker
        self._registry = registry

    @property
    def registry(self) -> ColumnSecurityRegistry:
        return self._registry

    def can_read(self, actor: PermissionHolder | None, entity: object, field: str) -> bool:
        protected = self._registry.get(type(entity), field)
        if protected is None:
            return True
        return self._check(actor, protected.read_operation)

    def can_edit(self, actor: PermissionHolder | None, entity: object, field: str) -> bool:
        protected = self._registry.get(type(entity), field)
        if protected is None:
            return True
        return self._check(actor, protected.edit_operation)

    def filter_read(
        self, actor: PermissionHolder | None, entity: object, field: str, raw_value: Any
    ) -> Any:
        """Return raw_value if the actor may read the field, else its placeholder."""
        protected = self._registry.get(type(entity), field)
        if protected is None or self._check(actor, protected.read_operation):
            return raw_value
        logger.debug(
            "column_security.read.masked",
            extra={"entity": protected.entity_type, "field": field},
        )
        return protected.make_placeholder()

    def filter_write(
        self, actor: PermissionHolder | None, entity: object, field: str, new_value: Any
    ) -> None:
        """
        Raise PermissionDenied if the actor may not edit the field.
        Never modifies the entity; applying new_value is up to the caller.
        """
        protected = self._registry.get(type(entity), field)
        if protected is None or self._check(actor, protected.edit_operation):
            return
        logger.debug(
            "column_security.write.denied",
            extra={"entity": protected.entity_type, "field": field},
        )
        raise PermissionDenied(
            f"User does not have edit access to {protected.entity_type}.{field}"
        )

    def apply_read_filter(self, actor: PermissionHolder | None, entity: object) -> list[str]:
        """Replace every unreadable protected field in place, after loading an entity."""
        masked: list[str] = []
        for protected in self._registry.fields_of(type(entity)):
            if not self._check(actor, protected.read_operation):
                setattr(entity, protected.field, protected.make_placeholder())
                masked.append(protected.field)
        return masked

    def restore_protected_fields(
        self,
        actor: PermissionHolder | None,
        entity: object,
        original_values: Mapping[str, Any],
    ) -> list[str]:
        """
        Before persisting: put back the stored value of every protected field
        the actor may not read or edit, so placeholders are never saved.
        """
        restored: list[str] = []
        for protected in self._registry.fields_of(type(entity)):
            if protected.field not in original_values:
                continue
            if self._check(actor, protected.read_operation) and self._check(
                actor, protected.edit_operation
            ):
                continue
            setattr(entity, protected.field, original_values[protected.field])
            restored.append(protected.field)
        return restored

    def _check(self, actor: PermissionHolder | None, ref: OperationRef) -> bool:
        return self._permission_checker.is_allowed(actor, ref.permission, ref.operation)
