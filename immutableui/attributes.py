# immutableui/attributes.py
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple


_MISSING = object()


class AttributeBag(Mapping):
    """
    An immutable mapping from member name to value.

    Every "update" returns a new bag; the original is never mutated, so a bag
    can be shared freely between descriptions and threads.

    :param pairs: Optional iterable of ``(name, value)`` pairs. Later pairs win
                  when a name repeats.
    """
    __slots__ = ("_items",)

    def __init__(self, pairs: Optional[Iterable[Tuple[str, Any]]] = None):
        self._items: Dict[str, Any] = dict(pairs) if pairs is not None else {}

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, Any]]) -> "AttributeBag":
        return cls(pairs)

    @classmethod
    def _wrap(cls, items: Dict[str, Any]) -> "AttributeBag":
        bag = cls.__new__(cls)
        bag._items = items
        return bag

    # --- Mapping protocol ---
    def __getitem__(self, name: str) -> Any:
        return self._items[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def get(self, name: str, default: Any = None) -> Any:
        return self._items.get(name, default)

    def try_get(self, name: str) -> Tuple[bool, Any]:
        """Returns ``(found, value)``; ``value`` is None when not found."""
        value = self._items.get(name, _MISSING)
        if value is _MISSING:
            return False, None
        return True, value

    # --- Functional updates ---
    def with_attribute(self, name: str, value: Any) -> "AttributeBag":
        """Returns a new bag with ``name`` set to ``value``."""
        items = dict(self._items)
        items[name] = value
        return self._wrap(items)

    def without_attribute(self, name: str) -> "AttributeBag":
        """Returns a new bag without ``name``. Returns ``self`` if it is absent."""
        if name not in self._items:
            return self
        items = dict(self._items)
        del items[name]
        return self._wrap(items)

    def union(self, other: Mapping) -> "AttributeBag":
        """Returns a new bag holding both sets of entries; ``other`` wins on collision."""
        if not other:
            return self
        items = dict(self._items)
        items.update(other)
        return self._wrap(items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeBag):
            return self._items == other._items
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._items.items()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self._items.items())
        return f"AttributeBag({inner})"


EMPTY = AttributeBag()
