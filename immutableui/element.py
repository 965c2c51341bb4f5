# immutableui/element.py
"""
ElementDescription - the immutable unit of a declarative UI tree.

A description pairs a target type with a creation thunk, an apply function and
an AttributeBag. Descriptions never change; a new UI state is expressed by
building a new description and applying it incrementally against the previous
one, which lets the apply function skip every member whose value did not move.

Example::

    label = Label.describe(text="Count: 5")
    widget = label.materialize()                  # create + full apply
    label2 = label.with_attribute("Text", "Count: 6")
    label2.apply_incremental_to(label, widget)    # only Text is written
"""
import logging
from typing import Any, Callable, Iterable, Optional, Tuple, Union

from .attributes import AttributeBag, EMPTY
from .config import get_config
from .errors import TypeMismatch, _type_name

logger = logging.getLogger(__name__)

ApplyFn = Callable[[Optional["ElementDescription"], "ElementDescription", Any], None]


class ApplyChain:
    """
    An ordered sequence of apply steps run one after the other.

    Steps are plain callables ``(previous, new, target) -> None``. Chains are
    immutable and shared between the descriptions derived from one another.
    """
    __slots__ = ("steps",)

    def __init__(self, steps: Iterable[ApplyFn] = ()):
        flat = []
        for step in steps:
            if isinstance(step, ApplyChain):
                flat.extend(step.steps)
            elif step is not None:
                flat.append(step)
        self.steps: Tuple[ApplyFn, ...] = tuple(flat)

    @classmethod
    def of(cls, apply: Union["ApplyChain", ApplyFn, None]) -> "ApplyChain":
        if isinstance(apply, ApplyChain):
            return apply
        return cls(() if apply is None else (apply,))

    def then(self, apply: Union["ApplyChain", ApplyFn, None]) -> "ApplyChain":
        """Returns a chain running this chain's steps first, then ``apply``."""
        other = ApplyChain.of(apply)
        if not other.steps:
            return self
        if not self.steps:
            return other
        return ApplyChain(self.steps + other.steps)

    def __call__(self, previous, new, target) -> None:
        for step in self.steps:
            step(previous, new, target)

    def __len__(self) -> int:
        return len(self.steps)

    def __repr__(self) -> str:
        names = ", ".join(getattr(s, "__qualname__", repr(s)) for s in self.steps)
        return f"ApplyChain([{names}])"


class ElementDescription:
    """
    Describes the desired state of one live UI object.

    :param target_type: The class this description materializes into or applies onto.
    :param create: Zero-argument factory returning a new, unconfigured target.
    :param apply: ``(previous, new, target) -> None`` or an :class:`ApplyChain`.
    :param attributes: Member values keyed by unique member name.

    Two descriptions are the "same node across time" only when the caller says
    so (same position in a child list, or an explicit previous/new pair).
    Equality is reference equality.
    """
    __slots__ = ("_target_type", "_create", "_apply", "_attributes")

    def __init__(
        self,
        target_type: type,
        create: Callable[[], Any],
        apply: Union[ApplyChain, ApplyFn, None],
        attributes: Union[AttributeBag, Iterable[Tuple[str, Any]], None] = None,
    ):
        if attributes is None:
            attributes = EMPTY
        elif not isinstance(attributes, AttributeBag):
            attributes = AttributeBag(attributes)
        self._target_type = target_type
        self._create = create
        self._apply = ApplyChain.of(apply)
        self._attributes = attributes

    @property
    def target_type(self) -> type:
        """The type created by this description."""
        return self._target_type

    @property
    def attributes(self) -> AttributeBag:
        return self._attributes

    @property
    def create_method(self) -> Callable[[], Any]:
        return self._create

    @property
    def apply_method(self) -> ApplyChain:
        return self._apply

    # --- Attribute access ---
    def try_get(self, name: str) -> Tuple[bool, Any]:
        return self._attributes.try_get(name)

    def get(self, name: str, default: Any = None) -> Any:
        return self._attributes.get(name, default)

    # --- Materialization ---
    def create(self) -> Any:
        """Invokes the factory. Raises UnsupportedCreate for non-constructible types."""
        return self._create()

    def materialize(self) -> Any:
        """Creates a new target and fully applies this description to it."""
        target = self.create()
        self._apply(None, self, target)
        return target

    def create_as(self, expected_type: type) -> Any:
        """Materializes and checks the result is an ``expected_type``."""
        target = self.materialize()
        if not isinstance(target, expected_type):
            raise TypeMismatch(
                f"{_type_name(self._target_type)} description created a "
                f"{_type_name(type(target))}, expected {_type_name(expected_type)}"
            )
        return target

    def apply_to(self, target: Any) -> None:
        """Applies this description to a target with no known previous description."""
        self._check_target(target)
        self._apply(None, self, target)

    def apply_incremental_to(self, previous: Optional["ElementDescription"], target: Any) -> None:
        """
        Patches ``target``, which currently reflects ``previous``, to reflect this description.

        :raises TypeMismatch: if ``target`` is not an instance of both descriptions' target types.
        """
        self._check_target(target)
        if previous is not None and _check_types():
            if not isinstance(target, previous.target_type):
                raise TypeMismatch(
                    f"previous description targets {_type_name(previous.target_type)}, "
                    f"but target is a {_type_name(type(target))}"
                )
        self._apply(previous, self, target)

    def _check_target(self, target: Any) -> None:
        if _check_types() and not isinstance(target, self._target_type):
            raise TypeMismatch(
                f"description targets {_type_name(self._target_type)}, "
                f"but target is a {_type_name(type(target))}"
            )

    # --- Derivation ---
    def _derive(self, target_type, create, apply, attributes) -> "ElementDescription":
        return type(self)(target_type, create, apply, attributes)

    def with_attribute(self, name: str, value: Any) -> "ElementDescription":
        """Produces a new description with an adjusted attribute."""
        return self._derive(self._target_type, self._create, self._apply,
                            self._attributes.with_attribute(name, value))

    def without_attribute(self, name: str) -> "ElementDescription":
        """Produces a new description with an attribute removed (unset)."""
        return self._derive(self._target_type, self._create, self._apply,
                            self._attributes.without_attribute(name))

    def inherit(
        self,
        new_target_type: type,
        new_create: Callable[[], Any],
        new_apply: Union[ApplyChain, ApplyFn, None],
        new_attributes: Union[AttributeBag, Iterable[Tuple[str, Any]], None] = None,
    ) -> "ElementDescription":
        """
        Produces a description for a derived type.

        The derived apply runs this description's apply first and ``new_apply``
        second, so derived members can override what the base just set. The
        attributes are the union of both bags, derived entries winning.
        """
        combined = self._attributes.union(AttributeBag(new_attributes or ()))
        return self._derive(new_target_type, new_create, self._apply.then(new_apply), combined)

    def __repr__(self) -> str:
        attrs = ", ".join(f"{k}={v!r}" for k, v in self._attributes.items())
        return f"{self._target_type.__name__}({attrs})"


def _check_types() -> bool:
    return bool(get_config().get_nested("reconciler.check_types", True))
