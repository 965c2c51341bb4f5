# immutableui/lists.py
"""
Positional reconciliation of ordered child collections.

The diff is index based: children are never moved, only trimmed from the tail,
patched in place, overwritten or appended. A reorder of otherwise identical
children is indistinguishable from replacing them.
"""
import logging
from typing import Any, MutableSequence, Optional, Sequence

from .errors import TypeMismatch

logger = logging.getLogger(__name__)


def reconcile_list(
    previous_list: Optional[Sequence],
    new_list: Optional[Sequence],
    target_list: Optional[MutableSequence],
    owner: Any = None,
    member_name: str = "children",
) -> None:
    """
    Bring ``target_list`` (the live children built from ``previous_list``) in line with ``new_list``.

    :param previous_list: Child descriptions that produced ``target_list``, or None.
    :param new_list: Desired child descriptions, or None for "no children".
    :param target_list: The live, mutable child collection.
    :param owner: The live object holding ``target_list`` (only used in messages).
    :param member_name: Name of the bound member (only used in messages).

    After the call ``len(target_list) == len(new_list)`` and every index holds
    either the untouched live child (same description object as before), a
    freshly materialized child, or the previous live child patched in place.
    """
    if not new_list:
        if target_list is not None:
            target_list.clear()
        return

    if target_list is None:
        owner_name = type(owner).__name__ if owner is not None else "target"
        raise TypeMismatch(f"{owner_name}.{member_name} has no live collection to reconcile into")

    # Remove the excess children
    while len(target_list) > len(new_list):
        del target_list[len(target_list) - 1]

    # Count the existing children
    n = len(target_list)

    # Adjust the existing children and create the new children
    for i, new_child in enumerate(new_list):
        prev_child = None
        if previous_list is not None and i < len(previous_list) and i < n:
            prev_child = previous_list[i]

        if prev_child is not None and prev_child is new_child:
            continue

        must_create = i >= n or prev_child is None or prev_child.target_type is not new_child.target_type
        if must_create:
            live_child = new_child.materialize()
            if i >= n:
                target_list.insert(i, live_child)
            else:
                logger.debug("Replacing %s[%d]: %s -> %s", member_name, i,
                             type(target_list[i]).__name__, new_child.target_type.__name__)
                target_list[i] = live_child
        else:
            new_child.apply_incremental_to(prev_child, target_list[i])
