"""Flatten nested message declarations into an ordered allocation list."""

import logging
from collections.abc import Iterator, Sequence

from .allocator import AllocationError, GroupRegistry
from .directives import extract_group_name
from .types import Allocation, DeclaredType

logger = logging.getLogger(__name__)


def walk(roots: Sequence[DeclaredType]) -> Iterator[DeclaredType]:
    """Yield declarations in pre-order, keeping declaration order.

    A message comes before its nested messages, which all come before the
    message's next sibling.
    """
    stack = list(reversed(roots))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.nested))


def flatten(roots: Sequence[DeclaredType], registry: GroupRegistry) -> list[Allocation]:
    """Allocate identifiers for every annotated declaration under ``roots``.

    Declarations without a directive get no identifier, but their nested
    declarations are still visited. The first allocation failure aborts the
    whole walk.
    """
    allocations: list[Allocation] = []

    for node in walk(roots):
        group = extract_group_name(node.comment)
        if group is None:
            continue

        try:
            msg_id = registry.try_allocate(group)
        except AllocationError as e:
            e.type_name = node.full_name
            raise

        logger.debug("%s -> %s:%d", node.full_name, group, msg_id)
        allocations.append(Allocation(type=node, id=msg_id))

    return allocations
