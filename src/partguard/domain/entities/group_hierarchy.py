"""Group hierarchy - arena of groups referenced by id."""

from collections.abc import Iterable, Iterator

from partguard.domain.entities.group import Group
from partguard.domain.exceptions import ConfigurationError, PermissionCycleError


class GroupHierarchy:
    """
    All groups keyed by id. Parent links are ids into this arena.

    The constructor rejects dangling parent ids and cycles, so a
    hierarchy that exists is always a forest.
    """

    def __init__(self, groups: Iterable[Group] = ()) -> None:
        self._groups: dict[int, Group] = {}
        for group in groups:
            if group.id in self._groups:
                raise ConfigurationError(f"Duplicate group id {group.id}")
            self._groups[group.id] = group
        self.validate()

    def validate(self) -> None:
        """Raise ConfigurationError on unknown parents, PermissionCycleError on cycles."""
        for group in self._groups.values():
            if group.parent_id is not None and group.parent_id not in self._groups:
                raise ConfigurationError(
                    f"Group {group.id} references unknown parent group {group.parent_id}"
                )
        # groups already proven to reach a root
        acyclic: set[int] = set()
        for group_id in self._groups:
            path: list[int] = []
            on_path: set[int] = set()
            current: int | None = group_id
            while current is not None and current not in acyclic:
                if current in on_path:
                    cycle = path[path.index(current):] + [current]
                    raise PermissionCycleError(cycle)
                path.append(current)
                on_path.add(current)
                current = self._groups[current].parent_id
            acyclic.update(path)

    def add(self, group: Group) -> None:
        """Add or replace a group, keeping the hierarchy valid."""
        previous = self._groups.get(group.id)
        self._groups[group.id] = group
        try:
            self.validate()
        except (ConfigurationError, PermissionCycleError):
            if previous is None:
                del self._groups[group.id]
            else:
                self._groups[group.id] = previous
            raise

    def get(self, group_id: int) -> Group:
        group = self._groups.get(group_id)
        if group is None:
            raise ConfigurationError(f"Unknown group id {group_id}")
        return group

    def __contains__(self, group_id: object) -> bool:
        return group_id in self._groups

    def __iter__(self) -> Iterator[Group]:
        return iter(self._groups.values())

    def __len__(self) -> int:
        return len(self._groups)

    def chain(self, group_id: int | None) -> Iterator[Group]:
        """Yield the group and then its ancestors up to the root."""
        visited: list[int] = []
        current = group_id
        while current is not None:
            if current in visited:
                raise PermissionCycleError(visited[visited.index(current):] + [current])
            visited.append(current)
            group = self.get(current)
            yield group
            current = group.parent_id
