# immutableui/host.py
"""
Host runtime helpers.

The reconciler needs the description that produced a live target in order to
patch it. :class:`ViewHost` keeps that pairing; :class:`Program` drives a
ViewHost from a model/update/view message loop.
"""
import logging
from collections import deque
from typing import Any, Callable, Deque, Generic, Optional, TypeVar

from .element import ElementDescription

logger = logging.getLogger(__name__)

Model = TypeVar("Model")
Msg = TypeVar("Msg")


class ViewHost:
    """
    Owns one live target and the description it currently reflects.

    :param description: Materialized immediately into :attr:`target`.
    """
    def __init__(self, description: ElementDescription):
        self._description = description
        self._target = description.materialize()

    @classmethod
    def attach(cls, target: Any, description: ElementDescription) -> "ViewHost":
        """Adopts an existing target with no known previous description."""
        host = cls.__new__(cls)
        description.apply_to(target)
        host._description = description
        host._target = target
        return host

    @property
    def target(self) -> Any:
        return self._target

    @property
    def description(self) -> ElementDescription:
        return self._description

    def update(self, description: ElementDescription) -> Any:
        """
        Patches the target to reflect ``description`` and remembers it.

        If the new description targets a different type than the previous one
        the target is rebuilt from scratch. Returns the (possibly new) target.
        """
        if description is self._description:
            return self._target
        if description.target_type is self._description.target_type \
                and isinstance(self._target, description.target_type):
            description.apply_incremental_to(self._description, self._target)
        else:
            logger.debug("ViewHost: root type changed to %s, rebuilding", description.target_type.__name__)
            self._target = description.materialize()
        self._description = description
        return self._target


class Program(Generic[Model, Msg]):
    """
    A model/update/view loop rendering through a :class:`ViewHost`.

    :param init: Returns the initial model.
    :param update: ``(msg, model) -> model``.
    :param view: ``(model, dispatch) -> ElementDescription``.
    :param on_render: Optional callback invoked with the live root after every render.

    ``dispatch`` may be called from inside ``view`` callbacks or ``update``;
    messages raised while a render is in progress are queued and processed
    once it completes.
    """
    def __init__(
        self,
        init: Callable[[], Model],
        update: Callable[[Msg, Model], Model],
        view: Callable[[Model, Callable[[Msg], None]], ElementDescription],
        on_render: Optional[Callable[[Any], None]] = None,
    ):
        self._update = update
        self._view = view
        self._on_render = on_render
        self._queue: Deque[Msg] = deque()
        self._busy = False
        self.model: Model = init()
        self.host = ViewHost(self._view(self.model, self.dispatch))
        if self._on_render:
            self._on_render(self.host.target)

    @property
    def root(self) -> Any:
        return self.host.target

    def dispatch(self, msg: Msg) -> None:
        """Queues ``msg`` and processes the queue unless a render is already running."""
        self._queue.append(msg)
        if self._busy:
            return
        self._busy = True
        try:
            while self._queue:
                current = self._queue.popleft()
                logger.debug("Program: dispatch %r", current)
                self.model = self._update(current, self.model)
                self.host.update(self._view(self.model, self.dispatch))
                if self._on_render:
                    self._on_render(self.host.target)
        except Exception:
            # Messages queued behind a failed one are dropped with it.
            self._queue.clear()
            raise
        finally:
            self._busy = False
