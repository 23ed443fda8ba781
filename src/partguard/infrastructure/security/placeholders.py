"""Placeholder values shown instead of fields an actor may not read."""

import copy
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from partguard.domain.entities import NamedElement
from partguard.domain.exceptions import ConfigurationError
from partguard.domain.value_objects import ColumnSecurityPolicy, FieldType

DEFAULT_MASKED_TEXT = "???"

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

PlaceholderFactory = Callable[[], Any]


def integer_placeholder() -> int:
    return 0


def float_placeholder() -> float:
    return 0.0


def boolean_placeholder() -> bool:
    return False


def collection_placeholder() -> list[Any]:
    return []


def datetime_placeholder() -> datetime:
    return EPOCH


def string_placeholder(masked_text: str = DEFAULT_MASKED_TEXT) -> PlaceholderFactory:
    return lambda: masked_text


def entity_placeholder(
    entity_class: type[NamedElement], masked_text: str = DEFAULT_MASKED_TEXT
) -> PlaceholderFactory:
    """New, unsaved instance whose display name is masked."""
    return lambda: entity_class(name=masked_text)


def explicit_placeholder(value: Any) -> PlaceholderFactory:
    # copy so callers cannot alter the configured value through a returned list/dict
    return lambda: copy.deepcopy(value)


_SIMPLE_FACTORIES: dict[FieldType, PlaceholderFactory] = {
    FieldType.INTEGER: integer_placeholder,
    FieldType.FLOAT: float_placeholder,
    FieldType.BOOLEAN: boolean_placeholder,
    FieldType.COLLECTION: collection_placeholder,
    FieldType.DATETIME: datetime_placeholder,
}


def resolve_placeholder_factory(
    policy: ColumnSecurityPolicy,
    entity_types: Mapping[str, type[NamedElement]],
    masked_text: str = DEFAULT_MASKED_TEXT,
    entity_class: type[NamedElement] | None = None,
) -> PlaceholderFactory:
    """
    Pick the placeholder constructor for a policy, once, at registration time.

    An explicit placeholder wins. Otherwise the declared type decides; a type
    naming a registered entity (or ``object`` together with entity_class)
    yields a masked entity. Raises ConfigurationError when neither applies.
    """
    if policy.has_placeholder:
        return explicit_placeholder(policy.placeholder)

    declared = policy.type
    field_type = FieldType.parse(declared)
    if field_type is None and declared:
        # "App\Entity\Parts\Category" style names resolve by their last segment
        name = declared.replace("\\", ".").rsplit(".", 1)[-1]
        if name in entity_types:
            return entity_placeholder(entity_types[name], masked_text)

    if field_type is None:
        raise ConfigurationError(
            f"Column security policy has no placeholder and unsupported type {declared!r}"
        )
    if field_type is FieldType.STRING:
        return string_placeholder(masked_text)
    if field_type is FieldType.OBJECT:
        if entity_class is None:
            raise ConfigurationError(
                "Column security policy of type 'object' needs an entity class or a placeholder"
            )
        return entity_placeholder(entity_class, masked_text)
    return _SIMPLE_FACTORIES[field_type]
