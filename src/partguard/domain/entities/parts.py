"""Part-DB domain entities protected by column security."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class NamedElement:
    """Base for structural elements that are displayed by name."""

    name: str = ""
    id: int | None = None


@dataclass
class Category(NamedElement):
    pass


@dataclass
class Footprint(NamedElement):
    pass


@dataclass
class Manufacturer(NamedElement):
    pass


@dataclass
class MeasurementUnit(NamedElement):
    unit: str | None = None


@dataclass
class StorageLocation(NamedElement):
    pass


@dataclass
class Supplier(NamedElement):
    pass


@dataclass
class PartLot:
    """Stock of a part at one storage location."""

    amount: float = 0.0
    storage_location: StorageLocation | None = None
    description: str = ""


@dataclass
class Orderdetail:
    """Order information of a part at one supplier."""

    supplier: Supplier | None = None
    supplier_part_number: str = ""


@dataclass
class Part(NamedElement):
    """Electronic part - most fields are individually access controlled."""

    description: str = ""
    comment: str = ""
    favorite: bool = False
    needs_review: bool = False
    tags: str = ""
    mass: float | None = None
    minamount: float = 0.0
    manufacturer_product_number: str = ""
    manufacturing_status: str = ""
    category: Category | None = None
    footprint: Footprint | None = None
    manufacturer: Manufacturer | None = None
    part_unit: MeasurementUnit | None = None
    part_lots: list[PartLot] = field(default_factory=list)
    orderdetails: list[Orderdetail] = field(default_factory=list)
    last_modified: datetime | None = None


# entity name -> class, used to build object placeholders
ENTITY_TYPES: dict[str, type[NamedElement]] = {
    cls.__name__: cls
    for cls in (
        Category,
        Footprint,
        Manufacturer,
        MeasurementUnit,
        StorageLocation,
        Supplier,
        Part,
    )
}
