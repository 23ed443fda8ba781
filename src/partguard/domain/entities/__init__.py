"""Domain entities."""

from partguard.domain.entities.group import Group
from partguard.domain.entities.group_hierarchy import GroupHierarchy
from partguard.domain.entities.parts import (
    ENTITY_TYPES,
    Category,
    Footprint,
    Manufacturer,
    MeasurementUnit,
    NamedElement,
    Orderdetail,
    Part,
    PartLot,
    StorageLocation,
    Supplier,
)
from partguard.domain.entities.permission_data import (
    CURRENT_SCHEMA_VERSION,
    PermissionData,
)
from partguard.domain.entities.permission_structure import (
    Operation,
    PermissionDefinition,
    PermissionGroupDefinition,
    PermissionStructure,
)
from partguard.domain.entities.user import User

__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "ENTITY_TYPES",
    "Category",
    "Footprint",
    "Group",
    "GroupHierarchy",
    "Manufacturer",
    "MeasurementUnit",
    "NamedElement",
    "Operation",
    "Orderdetail",
    "Part",
    "PartLot",
    "PermissionData",
    "PermissionDefinition",
    "PermissionGroupDefinition",
    "PermissionStructure",
    "StorageLocation",
    "Supplier",
    "User",
]
