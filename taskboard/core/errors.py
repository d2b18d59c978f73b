"""Error taxonomy shared by the services.

Services raise these; the HTTP layer maps ``status_code`` onto the response.
Messages are safe to show to clients and never carry credentials.
"""


class TaskboardError(Exception):
    status_code: int = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__name__


class ValidationError(TaskboardError):
    """Malformed or duplicate input."""

    status_code = 400


class AuthError(TaskboardError):
    """Bad credentials or token. Never says which part was wrong."""

    status_code = 401


class NotFoundError(TaskboardError):
    """Row is missing or owned by someone else; both look the same."""

    status_code = 404


class ConfigError(TaskboardError):
    """Server-side misconfiguration (signing key, hashing backend)."""

    status_code = 500
