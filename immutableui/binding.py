# immutableui/binding.py
"""
Bindings - registers Python classes as targets of element descriptions.

A :class:`TypeBinding` pairs a target class with a table of
:class:`~immutableui.members.MemberBinding` entries and produces everything a
description of that class needs: a builder, a create factory and an apply
chain. Bindings of subclasses name their base binding and build descriptions
with :meth:`ElementDescription.inherit`, so a subclass description carries
its ancestors' members without re-deriving their apply logic.

Example::

    ui = Bindings()
    view = ui.bind(View, [scalar("opacity", 1.0)])
    label = ui.bind(Label, [scalar("text", "")], base=view)

    d = label.describe(text="Hello", opacity=0.5)
    widget = d.materialize()
    ui.accessor("text").get(d)   # "Hello"
"""
import inspect
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from .element import ApplyChain, ElementDescription
from .equality import StructuralElement
from .errors import MissingMember, TypeMismatch, UnsupportedCreate, _type_name
from .members import MemberBinding, MemberKind
from .reconciler import MemberApply

logger = logging.getLogger(__name__)


def is_default_constructible(target_type: type) -> bool:
    """True if ``target_type`` is concrete and callable with no arguments."""
    if inspect.isabstract(target_type):
        return False
    try:
        signature = inspect.signature(target_type)
    except (TypeError, ValueError):
        # Extension types often carry no signature; assume a default constructor.
        return True
    for param in signature.parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.default is param.empty:
            return False
    return True


def failing_create(target_type: type) -> Callable[[], Any]:
    def create():
        raise UnsupportedCreate(target_type)
    create.__qualname__ = f"failing_create[{target_type.__name__}]"
    return create


def _declares_member(target_type: type, name: str) -> bool:
    if hasattr(target_type, name):
        return True
    for klass in inspect.getmro(target_type):
        if name in getattr(klass, "__annotations__", {}):
            return True
        slots = getattr(klass, "__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        if name in slots:
            return True
    return False


def _check_value(member: MemberBinding, value: Any) -> Any:
    if member.kind is MemberKind.CHILD_LIST:
        if not isinstance(value, (list, tuple)):
            raise TypeMismatch(f"{member.unique_name} expects a sequence of descriptions, "
                               f"got {_type_name(type(value))}")
        for child in value:
            if not isinstance(child, ElementDescription):
                raise TypeMismatch(f"{member.unique_name} items must be descriptions, "
                                   f"got {_type_name(type(child))}")
        return tuple(value)
    if member.kind is MemberKind.NESTED_OBJECT:
        if not isinstance(value, ElementDescription):
            raise TypeMismatch(f"{member.unique_name} expects a description, "
                               f"got {_type_name(type(value))}")
        return value
    if value is not None and member.value_type is not None and not isinstance(value, member.value_type):
        raise TypeMismatch(f"{member.unique_name} expects {_type_name(member.value_type)}, "
                           f"got {_type_name(type(value))}")
    return value


class MemberAccessor:
    """
    Typed access to one member of any description, by unique name.

    Members of unrelated types that share a unique name share one accessor.

    Functional form: ``accessor(value)`` returns a function adjusting a description,
    for use with :func:`pipe`.
    """
    def __init__(self, member: MemberBinding):
        self.member = member

    @property
    def name(self) -> str:
        return self.member.unique_name

    def get(self, element: ElementDescription) -> Any:
        """The member value, or the member default when unset."""
        found, value = element.try_get(self.name)
        if not found:
            return self.member.default
        return _check_value(self.member, value)

    def try_get(self, element: ElementDescription) -> Optional[Any]:
        """The member value, or None when unset."""
        found, value = element.try_get(self.name)
        if not found:
            return None
        return _check_value(self.member, value)

    def with_(self, element: ElementDescription, value: Any) -> ElementDescription:
        return element.with_attribute(self.name, _check_value(self.member, value))

    def without(self, element: ElementDescription) -> ElementDescription:
        return element.without_attribute(self.name)

    def __call__(self, value: Any) -> Callable[[ElementDescription], ElementDescription]:
        checked = _check_value(self.member, value)
        return lambda element: element.with_attribute(self.name, checked)

    def __repr__(self) -> str:
        return f"MemberAccessor({self.name!r}, kind={self.member.kind.value})"


def pipe(element: ElementDescription, *adjustments: Callable[[ElementDescription], ElementDescription]):
    """Threads ``element`` through each adjustment in turn."""
    for adjust in adjustments:
        element = adjust(element)
    return element


class TypeBinding:
    """
    The binding of one target class.

    :param target_type: The live class.
    :param members: Members declared on this class (not its bound ancestors).
    :param base: Binding of the nearest bound ancestor, if any.
    :param name: Display name; defaults to the class name.
    :param creatable: Force the create factory on or off; by default it is on
                      when the class is concrete with a zero-argument constructor.
    :param structural: Build :class:`StructuralElement` descriptions.
    """
    def __init__(
        self,
        target_type: type,
        members: Iterable[MemberBinding] = (),
        base: Optional["TypeBinding"] = None,
        name: Optional[str] = None,
        creatable: Optional[bool] = None,
        structural: bool = False,
    ):
        self.target_type = target_type
        self.name = name or target_type.__name__
        self.base = base
        self.own_members: tuple = tuple(members)
        self.structural = structural or (base is not None and base.structural)

        if base is not None and not issubclass(target_type, base.target_type):
            raise TypeMismatch(f"{self.name} does not derive from {base.name}")
        if structural and base is not None and not base.structural:
            raise ValueError(f"{self.name} is structural but its base {base.name} is not")

        self._validate_members()

        if creatable is None:
            creatable = is_default_constructible(target_type)
        self.creatable = bool(creatable)
        self.create: Callable[[], Any] = target_type if self.creatable else failing_create(target_type)

        self.own_apply = ApplyChain([MemberApply(self.own_members, self.name)] if self.own_members else [])
        self.apply = base.apply.then(self.own_apply) if base is not None else self.own_apply

        self._by_keyword: Dict[str, MemberBinding] = {m.keyword: m for m in self.own_members}
        seen = set()
        for m in self.own_members:
            if m.unique_name in seen:
                raise ValueError(f"{self.name} binds `{m.unique_name}` twice")
            seen.add(m.unique_name)

    def _validate_members(self) -> None:
        for member in self.own_members:
            if member.setter is not None:
                continue
            if not _declares_member(self.target_type, member.name):
                raise MissingMember(self.target_type, member.name)

    # --- Member tables ---
    @property
    def all_members(self) -> tuple:
        """Members of the bound ancestors followed by this class's members."""
        inherited = self.base.all_members if self.base is not None else ()
        return inherited + self.own_members

    @property
    def member_layers(self) -> tuple:
        inherited = self.base.member_layers if self.base is not None else ()
        return inherited + (self.own_members,)

    def member(self, unique_name: str) -> MemberBinding:
        for m in reversed(self.all_members):
            if m.unique_name == unique_name:
                return m
        raise KeyError(unique_name)

    def _keywords(self) -> Dict[str, MemberBinding]:
        keywords = dict(self.base._keywords()) if self.base is not None else {}
        keywords.update(self._by_keyword)
        return keywords

    # --- Builders ---
    def describe(self, **values) -> ElementDescription:
        """
        Describes a target of this type.

        Keyword arguments are the members' snake_case unique names; ``None``
        means "not set".

        :raises TypeError: for keywords that name no member of this type or its bases.
        :raises TypeMismatch: for values of the wrong type.
        """
        known = self._keywords()
        unknown = [k for k in values if k not in known]
        if unknown:
            raise TypeError(f"{self.name}() got unexpected keyword argument(s): {', '.join(unknown)}")

        own = []
        inherited = {}
        for key, value in values.items():
            if key in self._by_keyword:
                if value is not None:
                    member = self._by_keyword[key]
                    own.append((member.unique_name, _check_value(member, value)))
            else:
                inherited[key] = value

        if self.base is None:
            return self._new_element(own)

        base_element = self.base.describe(**inherited)
        if isinstance(base_element, StructuralElement):
            return base_element.inherit(self.target_type, self.create, self.own_apply, own,
                                        new_members=self.own_members)
        return base_element.inherit(self.target_type, self.create, self.own_apply, own)

    __call__ = describe

    def _new_element(self, attributes) -> ElementDescription:
        if self.structural:
            return StructuralElement(self.target_type, self.create, self.apply, attributes,
                                     member_layers=(self.own_members,))
        return ElementDescription(self.target_type, self.create, self.apply, attributes)

    @property
    def initial(self) -> ElementDescription:
        """A description of this type with every member left at its default."""
        if not self.creatable:
            raise UnsupportedCreate(self.target_type)
        return self.describe()

    def __repr__(self) -> str:
        base = f", base={self.base.name}" if self.base is not None else ""
        return f"TypeBinding({self.name}{base}, members={[m.unique_name for m in self.own_members]})"


class Bindings:
    """
    A registry of type bindings sharing one flat accessor namespace.
    """
    def __init__(self, name: str = "bindings"):
        self.name = name
        self._types: Dict[type, TypeBinding] = {}
        self._accessors: Dict[str, MemberAccessor] = {}

    def bind(
        self,
        target_type: type,
        members: Sequence[MemberBinding] = (),
        base: Optional[TypeBinding] = None,
        name: Optional[str] = None,
        creatable: Optional[bool] = None,
        structural: bool = False,
    ) -> TypeBinding:
        """
        Registers ``target_type``.

        :raises MissingMember: if a member names no attribute of ``target_type``.
        """
        if target_type in self._types:
            raise ValueError(f"{_type_name(target_type)} is already bound in {self.name}")
        if base is None:
            base = self._nearest_bound_base(target_type)

        binding = TypeBinding(target_type, members, base=base, name=name,
                              creatable=creatable, structural=structural)

        for member in binding.own_members:
            existing = self._accessors.get(member.unique_name)
            if existing is None:
                self._accessors[member.unique_name] = MemberAccessor(member)
            elif existing.member.kind is not member.kind:
                raise ValueError(
                    f"`{member.unique_name}` is bound as {existing.member.kind.value} and "
                    f"{member.kind.value}; give one of them a distinct unique name")

        self._types[target_type] = binding
        logger.debug("Bound %s (%d members, creatable=%s)", binding.name,
                     len(binding.own_members), binding.creatable)
        return binding

    def _nearest_bound_base(self, target_type: type) -> Optional[TypeBinding]:
        for klass in inspect.getmro(target_type)[1:]:
            if klass in self._types:
                return self._types[klass]
        return None

    def accessor(self, unique_name: str) -> MemberAccessor:
        try:
            return self._accessors[unique_name]
        except KeyError:
            raise KeyError(f"No member `{unique_name}` is bound in {self.name}") from None

    __getitem__ = accessor

    def binding_for(self, target_type: type) -> TypeBinding:
        return self._types[target_type]

    @property
    def types(self) -> List[TypeBinding]:
        return list(self._types.values())

    @property
    def accessors(self) -> Dict[str, MemberAccessor]:
        return dict(self._accessors)

    def __contains__(self, target_type: object) -> bool:
        return target_type in self._types

    def __iter__(self):
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)
