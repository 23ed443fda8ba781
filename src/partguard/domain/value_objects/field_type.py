"""Declared value type of a security-protected entity field."""

from enum import StrEnum


class FieldType(StrEnum):
    """Kinds of field values that can be masked by a placeholder."""

    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    COLLECTION = "collection"
    DATETIME = "datetime"
    OBJECT = "object"

    @classmethod
    def parse(cls, value: str | None) -> "FieldType | None":
        """Map a declared type string (or alias) to a FieldType, None if unknown."""
        if not value:
            return None
        return _ALIASES.get(value.strip().lower())


_ALIASES: dict[str, FieldType] = {
    "integer": FieldType.INTEGER,
    "int": FieldType.INTEGER,
    "smallint": FieldType.INTEGER,
    "bigint": FieldType.INTEGER,
    "float": FieldType.FLOAT,
    "decimal": FieldType.FLOAT,
    "double": FieldType.FLOAT,
    "string": FieldType.STRING,
    "str": FieldType.STRING,
    "text": FieldType.STRING,
    "boolean": FieldType.BOOLEAN,
    "bool": FieldType.BOOLEAN,
    "collection": FieldType.COLLECTION,
    "array": FieldType.COLLECTION,
    "list": FieldType.COLLECTION,
    "datetime": FieldType.DATETIME,
    "date": FieldType.DATETIME,
    "datetime_immutable": FieldType.DATETIME,
    "object": FieldType.OBJECT,
}
