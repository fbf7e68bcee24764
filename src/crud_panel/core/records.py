from collections.abc import Mapping
from typing import Any


def field_value(record: Any, name: str) -> Any:
    """Read ``name`` from a mapping record or an attribute-style record."""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)
