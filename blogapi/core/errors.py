"""Application error taxonomy. Every subclass maps to one HTTP status.

Services and auth dependencies raise these; the handlers registered in
``blogapi.main`` render them as a flat ``{"error": message}`` body.
"""


class BlogError(Exception):
    """Base class for errors that are safe to show to API clients."""

    status_code = 500

    def __init__(self, message: str, headers: dict[str, str] | None = None) -> None:
        self.message = message
        self.headers = headers
        super().__init__(message)


class ValidationError(BlogError):
    """Missing or malformed input."""

    status_code = 400


class AuthenticationError(BlogError):
    """Missing, invalid or expired token, or wrong credentials."""

    status_code = 401

    def __init__(self, message: str) -> None:
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationError(BlogError):
    """Authenticated but not permitted."""

    status_code = 403


class NotFoundError(BlogError):
    status_code = 404


class ConflictError(BlogError):
    """Duplicate user, category or post slug. Reported as 400 like other bad input."""

    status_code = 400


class InternalError(BlogError):
    status_code = 500
