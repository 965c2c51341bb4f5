# immutableui/members.py
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional


class MemberKind(Enum):
    """How a bound member is reconciled."""
    SCALAR = "scalar"                # values, strings, enums, callbacks
    NESTED_OBJECT = "nested_object"  # a single child description
    CHILD_LIST = "child_list"        # an ordered list of child descriptions


@dataclass(frozen=True)
class MemberBinding:
    """
    Metadata for one bound member of a target type.

    :param name: Attribute name on the live target.
    :param unique: Public name used in the attribute bag and accessors, when
                   ``name`` would clash with a same-named member of an
                   unrelated type. Defaults to ``name``.
    :param default: Value written back when a previously set member is unset.
    :param equality: Optional ``(a, b) -> bool`` comparer replacing ``==``.
    :param kind: :class:`MemberKind` selecting the reconcile strategy.
    :param value_type: Optional type (or tuple of types) validated on typed reads.
    :param by_value: For nested members whose live value is a value object:
                     always rebuilt, never patched in place.
    :param setter: Optional ``(target, value) -> None`` hook used instead of ``setattr``.
    :param getter: Optional ``(target) -> value`` hook used instead of ``getattr``.
    """
    name: str
    unique: Optional[str] = None
    default: Any = None
    equality: Optional[Callable[[Any, Any], bool]] = None
    kind: MemberKind = MemberKind.SCALAR
    value_type: Any = None
    by_value: bool = False
    setter: Optional[Callable[[Any, Any], None]] = None
    getter: Optional[Callable[[Any], Any]] = None

    @property
    def unique_name(self) -> str:
        return self.unique or self.name

    @property
    def keyword(self) -> str:
        """Keyword argument name accepted by builders (``BackgroundColor`` -> ``background_color``)."""
        return to_snake_case(self.unique_name)

    def values_equal(self, a: Any, b: Any) -> bool:
        if self.equality is not None:
            return bool(self.equality(a, b))
        return a == b

    # --- Live target access ---
    def read(self, target: Any) -> Any:
        if self.getter is not None:
            return self.getter(target)
        return getattr(target, self.name)

    def write(self, target: Any, value: Any) -> None:
        if self.setter is not None:
            self.setter(target, value)
        else:
            setattr(target, self.name, value)


def scalar(name: str, default: Any = None, **kwargs) -> MemberBinding:
    return MemberBinding(name, default=default, kind=MemberKind.SCALAR, **kwargs)


def nested(name: str, **kwargs) -> MemberBinding:
    return MemberBinding(name, kind=MemberKind.NESTED_OBJECT, **kwargs)


def children(name: str, **kwargs) -> MemberBinding:
    return MemberBinding(name, kind=MemberKind.CHILD_LIST, **kwargs)


def to_snake_case(name: str) -> str:
    out = []
    for i, ch in enumerate(name):
        if ch.isupper():
            if i and (not name[i - 1].isupper() or (i + 1 < len(name) and name[i + 1].islower())):
                out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)
