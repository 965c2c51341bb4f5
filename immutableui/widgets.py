# immutableui/widgets.py
"""
A small toolkit of plain, mutable Python widgets and their bindings.

It plays the role of the host UI runtime in tests, the CLI demo and examples:
every widget is an ordinary object with settable attributes, and layouts keep
their children in an ordinary list.

Usage::

    from immutableui.widgets import stack_layout, label, button, dump

    d = stack_layout(children=[label(text="Hi"), button(text="OK")])
    root = d.materialize()
    print(dump(root))
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from .binding import Bindings
from .members import children, nested, scalar


@dataclass(frozen=True)
class Thickness:
    """Spacing around a widget, in pixels."""
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @classmethod
    def uniform(cls, size: float) -> "Thickness":
        return cls(size, size, size, size)

    def to_tuple(self):
        return (self.left, self.top, self.right, self.bottom)


# --- Widgets ---

class View(ABC):
    """Base class of every widget. Not instantiable."""
    opacity: float
    is_visible: bool
    background_color: Optional[str]
    margin: Thickness

    def __init__(self):
        self.opacity = 1.0
        self.is_visible = True
        self.background_color = None
        self.margin = Thickness()

    @abstractmethod
    def render_lines(self) -> List[str]:
        """One line per visible piece of this widget, children indented."""

    def _common(self) -> str:
        parts = []
        if self.opacity != 1.0:
            parts.append(f"opacity={self.opacity}")
        if not self.is_visible:
            parts.append("hidden")
        if self.background_color:
            parts.append(f"bg={self.background_color}")
        if self.margin != Thickness():
            parts.append(f"margin={self.margin.to_tuple()}")
        return (" " + " ".join(parts)) if parts else ""

    def __repr__(self):
        return f"{type(self).__name__}(id={id(self):#x})"


class Label(View):
    text: str
    font_size: float
    text_color: Optional[str]

    def __init__(self):
        super().__init__()
        self.text = ""
        self.font_size = 14.0
        self.text_color = None

    def render_lines(self) -> List[str]:
        return [f"Label {self.text!r}{self._common()}"]


class Button(View):
    text: str
    is_enabled: bool
    clicked: Optional[Callable[[], None]]

    def __init__(self):
        super().__init__()
        self.text = ""
        self.is_enabled = True
        self.clicked = None

    def click(self) -> None:
        """Simulates a user click."""
        if self.is_enabled and self.clicked is not None:
            self.clicked()

    def render_lines(self) -> List[str]:
        state = "" if self.is_enabled else " disabled"
        return [f"Button [{self.text}]{state}{self._common()}"]


class Entry(View):
    text: str
    placeholder: str
    text_changed: Optional[Callable[[str], None]]

    def __init__(self):
        super().__init__()
        self.text = ""
        self.placeholder = ""
        self.text_changed = None

    def type_text(self, text: str) -> None:
        """Simulates the user replacing the entry's text."""
        self.text = text
        if self.text_changed is not None:
            self.text_changed(text)

    def render_lines(self) -> List[str]:
        shown = self.text or f"<{self.placeholder}>"
        return [f"Entry {shown!r}{self._common()}"]


class Switch(View):
    is_toggled: bool
    toggled: Optional[Callable[[bool], None]]

    def __init__(self):
        super().__init__()
        self.is_toggled = False
        self.toggled = None

    def toggle(self) -> None:
        self.is_toggled = not self.is_toggled
        if self.toggled is not None:
            self.toggled(self.is_toggled)

    def render_lines(self) -> List[str]:
        return [f"Switch {'on' if self.is_toggled else 'off'}{self._common()}"]


class Shadow:
    """A drop shadow; replaced wholesale whenever its description changes."""
    color: str
    blur: float

    def __init__(self):
        self.color = "black"
        self.blur = 4.0

    def __repr__(self):
        return f"Shadow({self.color}, {self.blur})"


class ContentView(View):
    content: Optional[View]

    def __init__(self):
        super().__init__()
        self.content = None

    def render_lines(self) -> List[str]:
        lines = [f"{type(self).__name__}{self._common()}"]
        if self.content is not None:
            lines.extend("  " + line for line in self.content.render_lines())
        return lines


class Frame(ContentView):
    corner_radius: float
    shadow: Optional[Shadow]

    def __init__(self):
        super().__init__()
        self.corner_radius = 0.0
        self.shadow = None

    def _common(self) -> str:
        extra = super()._common()
        if self.corner_radius:
            extra += f" radius={self.corner_radius}"
        if self.shadow is not None:
            extra += f" shadow={self.shadow.color}/{self.shadow.blur}"
        return extra


class Layout(View):
    """Base class of widgets with an ordered list of children."""
    children: List[View]
    padding: Thickness

    def __init__(self):
        super().__init__()
        self.children = []
        self.padding = Thickness()

    def render_lines(self) -> List[str]:
        lines = [f"{type(self).__name__}{self._describe_layout()}{self._common()}"]
        for child in self.children:
            lines.extend("  " + line for line in child.render_lines())
        return lines

    def _describe_layout(self) -> str:
        return ""


class StackLayout(Layout):
    orientation: str
    spacing: float

    def __init__(self):
        super().__init__()
        self.orientation = "vertical"
        self.spacing = 6.0

    def _describe_layout(self) -> str:
        return f" ({self.orientation})"


def dump(widget: Any) -> str:
    """Renders a live widget tree as indented text."""
    if widget is None:
        return "<empty>"
    return "\n".join(widget.render_lines())


# --- Bindings ---

ui = Bindings("widgets")

view = ui.bind(View, [
    scalar("opacity", 1.0, value_type=(int, float)),
    scalar("is_visible", True, value_type=bool),
    scalar("background_color", None, value_type=str),
    scalar("margin", Thickness(), value_type=Thickness),
])

label = ui.bind(Label, [
    scalar("text", "", value_type=str),
    scalar("font_size", 14.0, value_type=(int, float)),
    scalar("text_color", None, value_type=str),
])

button = ui.bind(Button, [
    scalar("text", "", value_type=str),
    scalar("is_enabled", True, value_type=bool),
    scalar("clicked", None),
])

entry = ui.bind(Entry, [
    scalar("text", "", value_type=str),
    scalar("placeholder", "", value_type=str),
    scalar("text_changed", None),
])

switch = ui.bind(Switch, [
    scalar("is_toggled", False, value_type=bool),
    scalar("toggled", None),
])

shadow = ui.bind(Shadow, [
    scalar("color", "black", value_type=str),
    scalar("blur", 4.0, value_type=(int, float)),
])

content_view = ui.bind(ContentView, [
    nested("content"),
])

frame = ui.bind(Frame, [
    scalar("corner_radius", 0.0, value_type=(int, float)),
    nested("shadow", by_value=True),
])

layout = ui.bind(Layout, [
    children("children"),
    scalar("padding", Thickness(), value_type=Thickness),
], creatable=False)

stack_layout = ui.bind(StackLayout, [
    scalar("orientation", "vertical", value_type=str),
    scalar("spacing", 6.0, value_type=(int, float)),
])
