"""Service errors.

A closed set of failures the request layer can report. Each carries a
stable ``code`` for automated clients, a human-readable ``message`` and
the optional underlying exception as ``cause``.

Cache failures have no variant here: the repository absorbs them and
they never become an operation failure.
"""


class ServiceError(Exception):
    """Base exception for user-facing failures."""

    code: str = "internal_error"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class BadInputError(ServiceError):
    """Malformed identity or request body. Not retryable."""

    code = "bad_input"


class NotFoundError(ServiceError):
    """No user exists for the requested identity."""

    code = "not_found"


class ConflictError(ServiceError):
    """A unique field (the email) is already taken."""

    code = "conflict"


class StoreUnavailableError(ServiceError):
    """The durable store could not be reached or the query failed.

    Retrying is left to the caller.
    """

    code = "store_unavailable"
