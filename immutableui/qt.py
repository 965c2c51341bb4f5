# immutableui/qt.py
"""
Bindings for a handful of PySide6 widgets.

Qt exposes its state through setter methods and signals rather than plain
attributes, so every member here carries ``setter``/``getter`` hooks. Signal
members hold a Python callable; changing the callable reconnects the signal.

A QApplication must exist before any description is materialized::

    app = QApplication.instance() or QApplication([])
    root = panel(children=[qlabel(text="Hello"), push_button(text="OK")]).materialize()
    root.show()
"""
from collections.abc import MutableSequence
from typing import Any, Optional

from PySide6.QtWidgets import (
    QAbstractButton, QApplication, QBoxLayout, QCheckBox, QLabel, QLineEdit,
    QPushButton, QScrollArea, QVBoxLayout, QWidget,
)

from .binding import Bindings
from .members import MemberBinding, MemberKind, scalar


def qt_property(name: str, default: Any, setter: str, getter: Optional[str] = None, **kwargs) -> MemberBinding:
    """A scalar member written through ``target.<setter>(value)``."""
    return scalar(
        name, default,
        setter=lambda widget, value: getattr(widget, setter)(value),
        getter=(lambda widget: getattr(widget, getter)()) if getter else None,
        **kwargs,
    )


def qt_signal(name: str, signal: str, arity: int = 0) -> MemberBinding:
    """
    A callback member connected to ``target.<signal>``.

    The callback receives the first ``arity`` signal arguments.
    """
    slot_attr = f"_immutableui_{signal}"

    def setter(widget, handler):
        previous = getattr(widget, slot_attr, None)
        if previous is not None:
            getattr(widget, signal).disconnect(previous)
            setattr(widget, slot_attr, None)
        if handler is not None:
            def slot(*args):
                handler(*args[:arity])
            getattr(widget, signal).connect(slot)
            setattr(widget, slot_attr, slot)

    return scalar(name, None, setter=setter)


class LayoutChildren(MutableSequence):
    """
    A list view over the widgets of a QBoxLayout.

    Removed widgets are detached and scheduled for deletion.
    """
    def __init__(self, layout: QBoxLayout):
        self._layout = layout

    def __len__(self) -> int:
        return self._layout.count()

    def _index(self, index: int) -> int:
        n = len(self)
        if index < 0:
            index += n
        if not 0 <= index < n:
            raise IndexError("layout index out of range")
        return index

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        return self._layout.itemAt(self._index(index)).widget()

    def __setitem__(self, index: int, widget: QWidget) -> None:
        index = self._index(index)
        del self[index]
        self._layout.insertWidget(index, widget)

    def __delitem__(self, index: int) -> None:
        item = self._layout.takeAt(self._index(index))
        widget = item.widget() if item is not None else None
        if widget is not None:
            widget.setParent(None)
            widget.deleteLater()

    def insert(self, index: int, widget: QWidget) -> None:
        self._layout.insertWidget(index, widget)


class Panel(QWidget):
    """A QWidget laying out its children in a box layout."""
    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._box = QVBoxLayout(self)
        self._items = LayoutChildren(self._box)

    @property
    def items(self) -> LayoutChildren:
        return self._items

    def set_orientation(self, orientation: str) -> None:
        if orientation == "horizontal":
            self._box.setDirection(QBoxLayout.Direction.LeftToRight)
        elif orientation == "vertical":
            self._box.setDirection(QBoxLayout.Direction.TopToBottom)
        else:
            raise ValueError(f"Unknown orientation: {orientation!r}")

    def set_spacing(self, spacing: int) -> None:
        self._box.setSpacing(spacing)


def _set_scroll_widget(area: QScrollArea, widget: Optional[QWidget]) -> None:
    if widget is None:
        old = area.takeWidget()
        if old is not None:
            old.deleteLater()
    else:
        area.setWidget(widget)


qt = Bindings("qt")

widget = qt.bind(QWidget, [
    qt_property("enabled", True, "setEnabled", "isEnabled", value_type=bool),
    qt_property("tool_tip", "", "setToolTip", "toolTip", value_type=str),
    qt_property("style_sheet", "", "setStyleSheet", "styleSheet", value_type=str),
    qt_property("object_name", "", "setObjectName", "objectName", value_type=str),
])

qlabel = qt.bind(QLabel, [
    qt_property("text", "", "setText", "text", value_type=str),
    qt_property("word_wrap", False, "setWordWrap", "wordWrap", value_type=bool),
])

abstract_button = qt.bind(QAbstractButton, [
    qt_property("text", "", "setText", "text", value_type=str),
    qt_property("checkable", False, "setCheckable", "isCheckable", value_type=bool),
    qt_signal("clicked", "clicked"),
], creatable=False)

push_button = qt.bind(QPushButton, [
    qt_property("flat", False, "setFlat", "isFlat", value_type=bool),
])

check_box = qt.bind(QCheckBox, [
    qt_property("checked", False, "setChecked", "isChecked", value_type=bool),
    qt_signal("toggled", "toggled", arity=1),
])

line_edit = qt.bind(QLineEdit, [
    qt_property("text", "", "setText", "text", value_type=str),
    qt_property("placeholder_text", "", "setPlaceholderText", "placeholderText", value_type=str),
    qt_signal("text_changed", "textChanged", arity=1),
])

scroll_area = qt.bind(QScrollArea, [
    qt_property("widget_resizable", False, "setWidgetResizable", "widgetResizable", value_type=bool),
    MemberBinding("content", kind=MemberKind.NESTED_OBJECT,
                  setter=_set_scroll_widget, getter=lambda area: area.widget()),
])

panel = qt.bind(Panel, [
    MemberBinding("items", unique="children", kind=MemberKind.CHILD_LIST),
    qt_property("orientation", "vertical", "set_orientation", value_type=str),
    qt_property("spacing", 6, "set_spacing", value_type=int),
])


def ensure_app(argv: Optional[list] = None) -> QApplication:
    """Returns the running QApplication, creating one if needed."""
    return QApplication.instance() or QApplication(argv or [])
