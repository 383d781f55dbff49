"""Domain errors and the HTTP status each one maps to.

Learn: Services raise these; the API layer has a single exception
handler that turns any VoyageHubError into {"message": ...} with the
class's status code. Messages are fixed per class where leaking detail
would help an attacker (credentials, ownership).
"""


class ConfigurationError(Exception):
    """Raised when a component is built with unusable configuration."""


class VoyageHubError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500
    message = "Server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(VoyageHubError):
    status_code = 400
    message = "Invalid request"


class Conflict(VoyageHubError):
    """Username or email already taken."""

    status_code = 400
    message = "User already exists"


class InvalidCredentials(VoyageHubError):
    """Login failed. Same message for unknown email and wrong password."""

    status_code = 400
    message = "Invalid credentials"


class MissingToken(VoyageHubError):
    status_code = 401
    message = "Access token required"


class InvalidToken(VoyageHubError):
    status_code = 403
    message = "Invalid token"


class NotFound(VoyageHubError):
    """Entry absent or owned by someone else. The two are indistinguishable."""

    status_code = 404
    message = "Journal not found"


class StorageError(VoyageHubError):
    """Unexpected database failure. Detail is logged, never returned."""
