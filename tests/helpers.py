# tests/helpers.py
"""Recording targets shared by the test modules."""
from abc import ABC, abstractmethod

from immutableui import Bindings, children, nested, scalar


class Node:
    """A mutable target that records every attribute write."""
    size: int
    title: str
    child: object
    items: list

    def __init__(self):
        object.__setattr__(self, "writes", [])
        self.size = 0
        self.title = "untitled"
        self.child = None
        self.items = []
        self.writes.clear()

    def __setattr__(self, name, value):
        self.writes.append(name)
        object.__setattr__(self, name, value)


class FancyNode(Node):
    flavor: str

    def __init__(self):
        super().__init__()
        self.flavor = "plain"
        self.writes.clear()


class OtherNode(Node):
    pass


class AbstractNode(Node, ABC):
    @abstractmethod
    def kind(self):
        """Not instantiable."""


reg = Bindings("test")

node = reg.bind(Node, [
    scalar("size", 0, value_type=int),
    scalar("title", "untitled", equality=lambda a, b: a.lower() == b.lower()),
    nested("child"),
    children("items"),
])
fancy = reg.bind(FancyNode, [scalar("flavor", "plain")])
other = reg.bind(OtherNode, [])
abstract = reg.bind(AbstractNode, [])


def state(target):
    """Member-for-member snapshot of a Node tree."""
    if target is None:
        return None
    snap = {
        "type": type(target).__name__,
        "size": target.size,
        "title": target.title,
        "child": state(target.child),
        "items": [state(i) for i in target.items],
    }
    if isinstance(target, FancyNode):
        snap["flavor"] = target.flavor
    return snap
