# immutableui/reconciler.py
"""
Reconciler - applies one description's member values onto a live target.

For every bound member the reconciler compares the previous description with
the new one and writes to the target only when something changed:

- **Scalar** members are compared with the member's comparer (``==`` by
  default); equal values are never written.
- **Nested object** members are compared by reference only. An identical child
  description means an untouched sub-tree; a different one is patched in place
  when the live child and both descriptions share one exact type, and rebuilt
  otherwise.
- **Child list** members are handed to :func:`immutableui.lists.reconcile_list`.
"""
import logging
from typing import Any, Iterable, Tuple

from .config import get_config
from .lists import reconcile_list
from .members import MemberBinding, MemberKind

logger = logging.getLogger(__name__)

_MISSING = object()


def _tracing() -> bool:
    return bool(get_config().get_nested("reconciler.trace", False))


def _lookup(description, member: MemberBinding):
    if description is None:
        return _MISSING
    return description.attributes.get(member.unique_name, _MISSING)


def apply_scalar(member: MemberBinding, previous, new, target: Any) -> bool:
    """
    Reconciles a scalar member. Returns True if the target was written.

    With no previous description every value present in ``new`` is written.
    Otherwise both sides fall back to the member default and the write is
    skipped when they compare equal; a value present before and absent now
    therefore resets the member to its default.
    """
    new_value = _lookup(new, member)
    if previous is None:
        if new_value is _MISSING:
            return False
        _write(member, target, new_value)
        return True

    prev_value = _lookup(previous, member)
    if prev_value is _MISSING and new_value is _MISSING:
        return False
    if prev_value is _MISSING:
        prev_value = member.default
    if new_value is _MISSING:
        # Not always the value the target had before the first apply.
        new_value = member.default
    if member.values_equal(prev_value, new_value):
        return False
    _write(member, target, new_value)
    return True


def apply_nested(member: MemberBinding, previous, new, target: Any) -> bool:
    """Reconciles a nested-object member. Returns True if the target was touched."""
    prev_child = _lookup(previous, member)
    new_child = _lookup(new, member)
    if prev_child is _MISSING:
        prev_child = None
    if new_child is _MISSING:
        new_child = None

    if new_child is None:
        if prev_child is None:
            return False
        _write(member, target, member.default)
        return True

    # For structured objects the only caching is based on reference equality
    if prev_child is new_child:
        return False

    if prev_child is not None and not member.by_value:
        live_child = member.read(target)
        # Only an exact type match is patched; any type change rebuilds.
        if (live_child is not None
                and prev_child.target_type is new_child.target_type
                and type(live_child) is new_child.target_type):
            new_child.apply_incremental_to(prev_child, live_child)
            return True
        logger.debug("Rebuilding %s.%s: %s -> %s", type(target).__name__, member.name,
                     type(live_child).__name__, new_child.target_type.__name__)

    _write(member, target, new_child.materialize())
    return True


def apply_child_list(member: MemberBinding, previous, new, target: Any) -> bool:
    prev_list = _lookup(previous, member)
    new_list = _lookup(new, member)
    prev_list = None if prev_list is _MISSING else prev_list
    new_list = None if new_list is _MISSING else new_list
    reconcile_list(prev_list, new_list, member.read(target), owner=target, member_name=member.name)
    return True


_DISPATCH = {
    MemberKind.SCALAR: apply_scalar,
    MemberKind.NESTED_OBJECT: apply_nested,
    MemberKind.CHILD_LIST: apply_child_list,
}


def apply_member(member: MemberBinding, previous, new, target: Any) -> bool:
    return _DISPATCH[member.kind](member, previous, new, target)


class MemberApply:
    """
    An apply step reconciling a fixed table of members in declaration order.

    Instances are what bindings put into an :class:`~immutableui.element.ApplyChain`.

    :param members: The members this step owns.
    :param label: Name used in reprs and trace output (usually the bound type name).
    """
    __slots__ = ("members", "label")

    def __init__(self, members: Iterable[MemberBinding], label: str = ""):
        self.members: Tuple[MemberBinding, ...] = tuple(members)
        self.label = label

    def __call__(self, previous, new, target) -> None:
        for member in self.members:
            apply_member(member, previous, new, target)

    def __repr__(self) -> str:
        names = ", ".join(m.unique_name for m in self.members)
        return f"MemberApply({self.label}: {names})"


def _write(member: MemberBinding, target: Any, value: Any) -> None:
    if _tracing():
        logger.debug("set %s.%s = %r", type(target).__name__, member.name, value)
    member.write(target, value)
