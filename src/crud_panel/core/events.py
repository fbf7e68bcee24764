"""Lifecycle events and the synchronous dispatcher that runs their listeners.

Listeners receive the event and return either ``None`` (carry on), a
:class:`Continue` (after-hooks only: replace the template parameters
wholesale) or a :class:`ShortCircuit` carrying the response that ends the
action. Exceptions raised by a listener propagate to the caller.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar, Union

from crud_panel.core.context import ApplicationContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Continue:
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ShortCircuit:
    response: Any


StageResult = Union[Continue, ShortCircuit]


@dataclass
class CrudActionEvent:
    context: ApplicationContext

    @property
    def action(self) -> str:
        return self.context.action


@dataclass
class BeforeCrudActionEvent(CrudActionEvent):
    pass


@dataclass
class AfterCrudActionEvent(CrudActionEvent):
    parameters: dict[str, Any] = field(default_factory=dict)


E = TypeVar("E", bound=CrudActionEvent)
Listener = Callable[[Any], "StageResult | None"]


class EventDispatcher:
    def __init__(self) -> None:
        self._listeners: dict[type[CrudActionEvent], list[Listener]] = defaultdict(list)

    def add_listener(self, event_type: type[E], listener: Callable[[E], StageResult | None]) -> None:
        self._listeners[event_type].append(listener)

    def listen(
        self, event_type: type[E]
    ) -> Callable[[Callable[[E], StageResult | None]], Callable[[E], StageResult | None]]:
        """Decorator form of :meth:`add_listener`."""

        def _register(listener: Callable[[E], StageResult | None]) -> Callable[[E], StageResult | None]:
            self.add_listener(event_type, listener)
            return listener

        return _register

    def get_listeners(self, event_type: type[CrudActionEvent]) -> list[Listener]:
        return list(self._listeners.get(event_type, ()))

    def dispatch(self, event: CrudActionEvent) -> StageResult:
        """Run the listeners for ``type(event)`` in registration order."""
        for listener in self.get_listeners(type(event)):
            result = listener(event)
            if isinstance(result, ShortCircuit):
                logger.info(
                    "%s short-circuited by %s for controller %s",
                    type(event).__name__,
                    getattr(listener, "__qualname__", repr(listener)),
                    event.context.controller,
                )
                return result
            if isinstance(result, Continue) and isinstance(event, AfterCrudActionEvent):
                event.parameters = result.parameters

        if isinstance(event, AfterCrudActionEvent):
            return Continue(event.parameters)
        return Continue()
