"""Permission resolver - walks user -> group -> parent groups to a decision."""

import logging

from partguard.application.ports import PermissionHolder
from partguard.domain.entities import Group, GroupHierarchy, Operation, PermissionStructure, User
from partguard.domain.exceptions import ConfigurationError
from partguard.domain.value_objects import (
    ApiTokenLevel,
    PermissionValue,
)
from partguard.domain.value_objects.api_token_level import DEFAULT_API_TOKEN_ROLE

logger = logging.getLogger(__name__)


class PermissionResolver:
    """
    Resolves permission operations for users and groups.

    Lookup order is the actor's own table, then (for users) its group and the
    group's ancestors. When nothing in the chain decides, ``default_value``
    applies. An operation is also granted when any operation that implies it
    through alsoSet is granted.

    Disabled users are denied everything. Checks without an actor run as
    ``anonymous_user``.
    """

    def __init__(
        self,
        structure: PermissionStructure,
        groups: GroupHierarchy | None = None,
        default_value: PermissionValue = PermissionValue.DISALLOW,
        anonymous_user: User | None = None,
    ) -> None:
        if default_value is PermissionValue.INHERIT:
            raise ValueError("The system default must be ALLOW or DISALLOW")
        self._structure = structure
        self._groups = groups if groups is not None else GroupHierarchy()
        self._default_value = default_value
        self._anonymous_user = anonymous_user

    @property
    def structure(self) -> PermissionStructure:
        return self._structure

    @property
    def groups(self) -> GroupHierarchy:
        return self._groups

    def get_permission_structure(self) -> PermissionStructure:
        """Full structure, for introspection and label extraction."""
        return self._structure

    def is_valid_permission(self, permission: str) -> bool:
        return self._structure.has_permission(permission)

    def is_valid_operation(self, permission: str, operation: str) -> bool:
        return self._structure.has_operation(permission, operation)

    def list_operations(self, permission: str) -> list[str]:
        """Names of all operations of the permission. Raises UnknownPermissionError."""
        return list(self._structure.get_permission(permission).operations)

    def dont_inherit(
        self, holder: PermissionHolder, permission: str, operation: str
    ) -> PermissionValue:
        """Value stored on the holder itself, INHERIT when unset."""
        self._structure.get_operation(permission, operation)
        return holder.permissions.get_permission_value(permission, operation)

    def inherit(self, actor: PermissionHolder, permission: str, operation: str) -> PermissionValue:
        """
        First explicit value walking the actor and its group chain.
        Returns INHERIT when no level decides (the system default is not applied).
        """
        value = self.dont_inherit(actor, permission, operation)
        if value.is_set:
            return value

        for group in self._groups.chain(self._start_group_id(actor)):
            value = group.permissions.get_permission_value(permission, operation)
            if value.is_set:
                return value
        return PermissionValue.INHERIT

    def resolve(self, actor: PermissionHolder, permission: str, operation: str) -> PermissionValue:
        """Like inherit(), but falls back to the system default. Never INHERIT."""
        value = self.inherit(actor, permission, operation)
        if value.is_set:
            return value
        return self._default_value

    def is_allowed(
        self,
        actor: PermissionHolder | None,
        permission: str,
        operation: str,
        token_level: ApiTokenLevel | None = None,
    ) -> bool:
        """
        Check if the actor may perform the operation.
        Raises UnknownPermissionError for operations not in the structure.
        With token_level, the API token must also carry the operation's role.
        Without an actor the anonymous user is checked; raises ConfigurationError
        if none is configured.
        """
        op = self._structure.get_operation(permission, operation)
        actor = self.resolve_actor(actor)
        if isinstance(actor, User) and actor.disabled:
            logger.debug(
                "permissions.check.user_disabled",
                extra={"user": actor.name, "permission": permission, "operation": operation},
            )
            return False
        if token_level is not None and not self._token_grants(token_level, op):
            logger.debug(
                "permissions.check.token_denied",
                extra={
                    "permission": permission,
                    "operation": operation,
                    "token_level": token_level.name,
                },
            )
            return False

        if self.resolve(actor, permission, operation) is PermissionValue.ALLOW:
            return True

        for source in sorted(self._structure.implying(permission, operation)):
            if self.resolve(actor, source.permission, source.operation) is PermissionValue.ALLOW:
                logger.debug(
                    "permissions.check.implied",
                    extra={
                        "permission": permission,
                        "operation": operation,
                        "implied_by": str(source),
                    },
                )
                return True
        return False

    def resolve_actor(self, actor: PermissionHolder | None) -> PermissionHolder:
        """The actor itself, or the anonymous user when there is none."""
        if actor is not None:
            return actor
        if self._anonymous_user is None:
            raise ConfigurationError(
                "No anonymous user configured to check permissions without an actor"
            )
        return self._anonymous_user

    def _start_group_id(self, actor: PermissionHolder) -> int | None:
        if isinstance(actor, Group):
            return actor.parent_id
        if isinstance(actor, User):
            return actor.group_id
        return getattr(actor, "group_id", None)

    @staticmethod
    def _token_grants(token_level: ApiTokenLevel, op: Operation) -> bool:
        return (op.api_token_role or DEFAULT_API_TOKEN_ROLE) in token_level.roles
