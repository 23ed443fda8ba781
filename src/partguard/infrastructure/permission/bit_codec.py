"""Compact bit encoding of permission tables (2 bits per operation)."""

from partguard.domain.entities import PermissionData, PermissionStructure
from partguard.domain.value_objects import PermissionValue

_PAIR_MASK = 0b11


def read_bit_pair(data: int, n: int) -> int:
    """Read the pair whose lower bit is n (n must be even)."""
    if n < 0 or n % 2:
        raise ValueError(f"n must be even and non-negative, got {n}")
    return (data >> n) & _PAIR_MASK


def write_bit_pair(data: int, n: int, new: int) -> int:
    """Return data with the pair at n replaced by new (0..3)."""
    if n < 0 or n % 2:
        raise ValueError(f"n must be even and non-negative, got {n}")
    if not 0 <= new <= _PAIR_MASK:
        raise ValueError(f"A bit pair holds values 0..3, got {new}")
    mask = _PAIR_MASK << n
    return (data & ~mask) | ((new << n) & mask)


def encode_permission_bits(
    structure: PermissionStructure, data: PermissionData, permission: str
) -> int:
    """Pack every operation value of one permission into an int."""
    raw = 0
    for op in structure.get_permission(permission).operations.values():
        value = data.get_permission_value(permission, op.name)
        raw = write_bit_pair(raw, op.bit, value.to_bits())
    return raw


def decode_permission_bits(
    structure: PermissionStructure, permission: str, raw: int
) -> dict[str, PermissionValue]:
    """Unpack an int produced by encode_permission_bits (or the legacy columns)."""
    return {
        op.name: PermissionValue.from_bits(read_bit_pair(raw, op.bit))
        for op in structure.get_permission(permission).operations.values()
    }


def apply_permission_bits(
    structure: PermissionStructure, data: PermissionData, permission: str, raw: int
) -> None:
    """Write decoded values into a permission table, replacing that permission."""
    data.set_all_operations_of_permission(
        permission,
        {
            op: value
            for op, value in decode_permission_bits(structure, permission, raw).items()
            if value.is_set
        },
    )
