"""Error types raised by validators and repositories.

Each error knows the HTTP status it maps to and how to render itself as a
``{message, ...}`` envelope; the blueprints register handlers that do nothing
more than call :meth:`ApiError.to_dict`.
"""


class ApiError(Exception):
    status_code = 500

    def __init__(self, message, error=None, **extra):
        super().__init__(message)
        self.message = message
        self.error = error
        self.extra = extra

    def to_dict(self):
        body = {"message": self.message}
        if self.error is not None:
            body["error"] = self.error
        body.update(self.extra)
        return body


class ValidationError(ApiError):
    """Missing or malformed fields, or a malformed identifier."""

    status_code = 400


class NotFound(ApiError):
    status_code = 404


class StoreError(ApiError):
    """Unexpected failure while talking to the database."""

    status_code = 500
