from collections.abc import Iterable


class RoleAuthorizationChecker:
    """Grant a permission when it names one of the actor's roles.

    A ``None`` permission means no requirement and is always granted.
    """

    def __init__(self, roles: Iterable[str] = ()) -> None:
        self.roles = frozenset(roles)

    def is_granted(self, permission: str | None) -> bool:
        if permission is None:
            return True
        return permission in self.roles
