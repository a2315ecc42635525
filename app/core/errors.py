"""
Application error taxonomy.

Services raise these; the handlers registered in app.main translate them into
a JSON body of the form {"error": "<message>"} with the matching status code.
Only ``message`` ever reaches the client.
"""


class SkyCastError(Exception):
    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(SkyCastError):
    """Missing or malformed client input."""

    status_code = 400
    default_message = "Invalid request"


class ConflictError(SkyCastError):
    """A unique key (e.g. email) is already taken."""

    status_code = 400
    default_message = "Resource already exists"


class AuthError(SkyCastError):
    """Missing, invalid or expired token, or bad credentials."""

    status_code = 401
    default_message = "Invalid token"


class NotFoundError(SkyCastError):
    """Missing resource, or one owned by somebody else."""

    status_code = 404
    default_message = "Not found"


class UpstreamError(SkyCastError):
    """A third-party API failed or is not configured."""

    status_code = 500
    default_message = "Upstream service failed"
