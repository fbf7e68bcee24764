from typing import Protocol

from crud_panel.core.context import ApplicationContext


class ContextProvider(Protocol):
    def get_context(self) -> ApplicationContext | None: ...
