from typing import Protocol


class AuthorizationChecker(Protocol):
    def is_granted(self, permission: str | None) -> bool: ...
