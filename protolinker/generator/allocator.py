"""Per-group message identifier allocation."""

import logging
from collections.abc import Iterable

from .types import GroupConfig

logger = logging.getLogger(__name__)


class AllocationError(RuntimeError):
    """Raised when a message identifier cannot be allocated."""

    def __init__(self, message: str, group: str) -> None:
        super().__init__(message)
        self.group = group
        self.type_name: str | None = None

    def __str__(self) -> str:
        message = super().__str__()
        if self.type_name:
            return f"{self.type_name}: {message}"
        return message


class UnknownGroupError(AllocationError):
    """Raised when a directive names a group absent from the configuration."""

    def __init__(self, group: str) -> None:
        super().__init__(f"group {group} does not exist", group)


class GroupExhaustedError(AllocationError):
    """Raised when every identifier of a group has been handed out."""

    def __init__(self, group: str) -> None:
        super().__init__(f"group {group} has no more available message id", group)


class GroupRegistry:
    """Allocation cursors for every configured group.

    One instance is the single allocation authority for a generation run.
    Cursors start at each group's ``min`` and only move forward.
    """

    def __init__(self, groups: Iterable[GroupConfig]) -> None:
        self._groups = {group.name: group for group in groups}
        self._next = {name: group.min for name, group in self._groups.items()}

    def has_group(self, name: str) -> bool:
        return name in self._next

    def try_allocate(self, name: str) -> int:
        """Hand out the next identifier of group ``name``."""
        if name not in self._next:
            raise UnknownGroupError(name)

        msg_id = self._next[name]
        if msg_id > self._groups[name].max:
            raise GroupExhaustedError(name)

        self._next[name] = msg_id + 1
        logger.debug("allocated id %d from group %s", msg_id, name)
        return msg_id

    def used(self, name: str) -> int:
        """Number of identifiers allocated so far from group ``name``."""
        return self._next[name] - self._groups[name].min
