# immutableui/equality.py
"""
Structural equality and hashing over descriptions.

Plain :class:`~immutableui.element.ElementDescription` objects compare by
reference, which is what the reconcilers rely on. :class:`StructuralElement`
compares member-wise instead, so descriptions can be used as memoization keys.
"""
from typing import Any, Iterable, Optional, Tuple

from .element import ElementDescription
from .members import MemberBinding

HASH_SEED = 17
HASH_FACTOR = 37
_HASH_MASK = (1 << 64) - 1


def value_hash(value: Any) -> int:
    """
    Hash of a member value, consistent with ``==`` for the value types it knows.

    Unhashable values that are neither containers nor expose ``to_tuple``
    contribute 0, as their equality cannot be mirrored.
    """
    if value is None:
        return 0
    if isinstance(value, (list, tuple)):
        h = HASH_SEED
        for item in value:
            h = (h * HASH_FACTOR + value_hash(item)) & _HASH_MASK
        return h
    if isinstance(value, dict):
        return sum(value_hash((k, v)) for k, v in value.items()) & _HASH_MASK
    if isinstance(value, (set, frozenset)):
        return sum(value_hash(v) for v in value) & _HASH_MASK
    try:
        return hash(value)
    except TypeError:
        pass
    if hasattr(value, "to_tuple"):
        return value_hash(value.to_tuple())
    return 0


def member_value(description: ElementDescription, member: MemberBinding) -> Any:
    return description.attributes.get(member.unique_name, member.default)


def member_hash(description: ElementDescription, member: MemberBinding) -> int:
    # A custom comparer may equate values with different natural hashes.
    if member.equality is not None:
        return 0
    return value_hash(member_value(description, member))


def descriptions_equal(a: ElementDescription, b: ElementDescription,
                       members: Iterable[MemberBinding]) -> bool:
    """True iff ``a`` and ``b`` share a target type and every member compares equal."""
    if a is b:
        return True
    if a.target_type is not b.target_type:
        return False
    for member in members:
        if not member.values_equal(member_value(a, member), member_value(b, member)):
            return False
    return True


def description_hash(description: ElementDescription, members: Iterable[MemberBinding],
                     seed: Optional[int] = None) -> int:
    """
    Folds ``h = h * 37 + member_hash`` over ``members`` in declaration order.

    :param seed: The base binding's hash when the type has a bound base, else 17.
    """
    h = HASH_SEED if seed is None else seed
    for member in members:
        h = (h * HASH_FACTOR + member_hash(description, member)) & _HASH_MASK
    return h


class StructuralElement(ElementDescription):
    """
    A description compared member-wise rather than by reference.

    :param member_layers: The bound member tables, base binding first. Each layer's
                          hash seeds the next one.
    """
    __slots__ = ("_member_layers",)

    def __init__(self, target_type, create, apply, attributes=None,
                 member_layers: Iterable[Iterable[MemberBinding]] = ()):
        super().__init__(target_type, create, apply, attributes)
        self._member_layers: Tuple[Tuple[MemberBinding, ...], ...] = tuple(
            tuple(layer) for layer in member_layers)

    @property
    def members(self) -> Tuple[MemberBinding, ...]:
        return tuple(m for layer in self._member_layers for m in layer)

    def _derive(self, target_type, create, apply, attributes, member_layers=None):
        layers = self._member_layers if member_layers is None else member_layers
        return StructuralElement(target_type, create, apply, attributes, member_layers=layers)

    def inherit(self, new_target_type, new_create, new_apply, new_attributes=None,
                new_members: Iterable[MemberBinding] = ()):
        derived = super().inherit(new_target_type, new_create, new_apply, new_attributes)
        return StructuralElement(derived.target_type, derived.create_method, derived.apply_method,
                                 derived.attributes,
                                 member_layers=self._member_layers + (tuple(new_members),))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StructuralElement):
            return NotImplemented
        return descriptions_equal(self, other, self.members)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        h = None
        for layer in self._member_layers:
            h = description_hash(self, layer, seed=h)
        return HASH_SEED if h is None else h
