"""Error hierarchy shared by providers, memory and the plugin registry.

Errors raised by capability handlers or storage backends are never
converted into these types; they propagate with their original identity.
"""


class MaiarError(Exception):
    """Base exception for all runtime errors.

    Attributes:
        message: Human readable description
        cause: Underlying exception, when one triggered this error
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ValidationError(MaiarError):
    """Raised on malformed input such as an empty or unprefixed plugin id."""

    pass


class CollisionError(MaiarError):
    """Raised when an identity is already registered.

    Examples:
        - A second plugin registered under an existing id
    """

    pass


class NotFoundError(MaiarError):
    """Raised when a required entity is absent.

    Used for capabilities, conversations and plugins when a lookup
    must succeed. Empty query results are not an error.
    """

    pass


class MissingReferenceError(MaiarError):
    """Raised when an assistant turn cannot be linked to its user message."""

    pass
