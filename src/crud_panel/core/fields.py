"""Permission-aware iteration over declared fields."""

from collections.abc import Callable, Iterable, Iterator
from typing import Protocol, TypeVar


class _Guarded(Protocol):
    @property
    def permission(self) -> str | None: ...


T = TypeVar("T", bound=_Guarded)


def filter_visible_fields(fields: Iterable[T], is_granted: Callable[[str | None], bool]) -> Iterator[T]:
    """Yield the fields the current actor may view, in declaration order.

    The result is a single-pass generator: the checker is called once per
    field as the caller pulls items, so consuming only a prefix leaves the
    remaining permissions unchecked. Iterating the same ``fields`` again calls
    the checker again. ``is_granted(None)`` must return ``True``; fields with
    no permission requirement are always visible. Checker exceptions propagate.
    """
    for field in fields:
        if is_granted(field.permission):
            yield field
