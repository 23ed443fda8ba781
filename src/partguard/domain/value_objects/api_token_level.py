"""API token access levels."""

from enum import IntEnum


class ApiTokenLevel(IntEnum):
    """Access level of an API token. Higher levels include all lower roles."""

    READ_ONLY = 1
    EDIT = 2
    ADMIN = 3
    FULL = 4

    @property
    def role(self) -> str:
        return f"ROLE_API_{self.name}"

    @property
    def roles(self) -> frozenset[str]:
        """Roles granted by this level."""
        return frozenset(level.role for level in ApiTokenLevel if level <= self)


# Required role for operations that declare no apiTokenRole.
DEFAULT_API_TOKEN_ROLE = ApiTokenLevel.FULL.role
