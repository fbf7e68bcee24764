from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RenderedTemplate:
    template: str
    parameters: dict[str, Any]


class TemplateResultRenderer:
    """Renderer that returns the template id and parameters untouched.

    Used by the CLI, which formats the parameters itself.
    """

    def render(self, template_id: str, parameters: Mapping[str, Any]) -> RenderedTemplate:
        return RenderedTemplate(template=template_id, parameters=dict(parameters))
