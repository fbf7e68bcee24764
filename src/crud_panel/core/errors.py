class CrudPanelError(Exception):
    """Base class for errors raised by crud-panel."""


class ConfigurationError(CrudPanelError):
    """Raised when entity or page configuration is missing or invalid.

    Always raised before any lifecycle listener runs.
    """


class InvalidRequestError(CrudPanelError):
    """Raised when an incoming action request is malformed."""


class EntityNotFoundError(CrudPanelError):
    """Raised when the entity targeted by a detail action does not exist."""
