"""Error taxonomy shared by services and the HTTP layer.

Every error carries the HTTP status it maps to; the API layer turns any
AppError into a JSON body of the form {"error": message}.
"""


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed required input."""

    status_code = 400
    default_message = "Missing data"


class Unauthorized(AppError):
    """Missing or invalid bearer token or cookie."""

    status_code = 401
    default_message = "No token"


class NotFound(AppError):
    """Referenced resource is absent from the store."""

    status_code = 404
    default_message = "Not found"


class UpstreamError(AppError):
    """The music service returned a non-success or malformed response."""

    status_code = 500
    default_message = "Upstream service error"


class InternalError(AppError):
    status_code = 500


class ConfigError(RuntimeError):
    """Raised at startup when required settings are missing."""
