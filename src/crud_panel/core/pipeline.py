from collections.abc import Callable
from typing import Any

from crud_panel.core.context import ApplicationContext
from crud_panel.core.events import AfterCrudActionEvent, BeforeCrudActionEvent, EventDispatcher, ShortCircuit


def run_crud_action(
    dispatcher: EventDispatcher,
    context: ApplicationContext,
    assemble: Callable[[], dict[str, Any]],
    render: Callable[[dict[str, Any]], Any],
) -> Any:
    """Run one CRUD action: before-hook, assemble, after-hook, render.

    A ``ShortCircuit`` from either hook becomes the action's result and skips
    every later stage. Parameter keys removed by after-listeners are not
    checked here; the template decides what it requires.
    """
    before = dispatcher.dispatch(BeforeCrudActionEvent(context))
    if isinstance(before, ShortCircuit):
        return before.response

    parameters = assemble()

    after = dispatcher.dispatch(AfterCrudActionEvent(context, parameters))
    if isinstance(after, ShortCircuit):
        return after.response

    return render(after.parameters)
