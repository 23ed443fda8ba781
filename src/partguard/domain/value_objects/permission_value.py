"""Tri-state permission value."""

from enum import StrEnum


class PermissionValue(StrEnum):
    """Value of a single permission operation on a user or group."""

    ALLOW = "allow"
    DISALLOW = "disallow"
    INHERIT = "inherit"

    @classmethod
    def from_bool(cls, value: bool | None) -> "PermissionValue":
        """Convert legacy true/false/null representation."""
        if value is None:
            return cls.INHERIT
        return cls.ALLOW if value else cls.DISALLOW

    def to_bool(self) -> bool | None:
        if self is PermissionValue.INHERIT:
            return None
        return self is PermissionValue.ALLOW

    @classmethod
    def from_bits(cls, bits: int) -> "PermissionValue":
        """Decode a 2-bit pair. The unused pattern 0b11 is treated as inherit."""
        if bits == 0b01:
            return cls.ALLOW
        if bits == 0b10:
            return cls.DISALLOW
        return cls.INHERIT

    def to_bits(self) -> int:
        return _BITS[self]

    @property
    def is_set(self) -> bool:
        return self is not PermissionValue.INHERIT


_BITS = {
    PermissionValue.INHERIT: 0b00,
    PermissionValue.ALLOW: 0b01,
    PermissionValue.DISALLOW: 0b10,
}
