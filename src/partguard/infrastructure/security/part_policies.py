"""Built-in column security policies of Part-DB entities."""

from partguard.domain.entities import MeasurementUnit, Part, PermissionStructure
from partguard.domain.value_objects import ColumnSecurityPolicy
from partguard.infrastructure.security.column_security import ColumnSecurityRegistry
from partguard.infrastructure.security.placeholders import DEFAULT_MASKED_TEXT

# field -> policy
PART_FIELD_POLICIES: dict[str, ColumnSecurityPolicy] = {
    "name": ColumnSecurityPolicy(prefix="parts_name", type="string"),
    "description": ColumnSecurityPolicy(prefix="parts_description", type="string"),
    "comment": ColumnSecurityPolicy(prefix="parts_comment", type="string"),
    "favorite": ColumnSecurityPolicy(prefix="parts_favorite", type="boolean"),
    "tags": ColumnSecurityPolicy(prefix="parts_tags", type="string"),
    "mass": ColumnSecurityPolicy(prefix="parts_mass", type="float"),
    "minamount": ColumnSecurityPolicy(prefix="parts_minamount", type="float"),
    "manufacturer_product_number": ColumnSecurityPolicy(prefix="parts_mpn", type="string"),
    "manufacturing_status": ColumnSecurityPolicy(prefix="parts_status", type="string"),
    "category": ColumnSecurityPolicy(prefix="parts_category", type="Category"),
    "footprint": ColumnSecurityPolicy(prefix="parts_footprint", type="Footprint"),
    "manufacturer": ColumnSecurityPolicy(prefix="parts_manufacturer", type="Manufacturer"),
    "part_lots": ColumnSecurityPolicy(prefix="parts_lots", type="collection"),
    "orderdetails": ColumnSecurityPolicy(prefix="parts_orderdetails", type="collection"),
    "last_modified": ColumnSecurityPolicy(type="datetime"),
}


def default_part_registry(
    structure: PermissionStructure,
    masked_text: str = DEFAULT_MASKED_TEXT,
) -> ColumnSecurityRegistry:
    """Registry with the Part field policies. Raises ConfigurationError if the structure lacks them."""
    registry = ColumnSecurityRegistry(structure, masked_text=masked_text)
    registry.register_entity(Part, "parts")
    for field, policy in PART_FIELD_POLICIES.items():
        registry.register(Part, field, policy)
    registry.register(
        Part,
        "part_unit",
        ColumnSecurityPolicy(prefix="parts_unit", type="object"),
        entity_class=MeasurementUnit,
    )
    return registry
