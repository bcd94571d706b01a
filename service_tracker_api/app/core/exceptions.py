"""
Domain exceptions.

Service-layer operations raise these with a user-facing (Turkish)
message; the API layer maps them to HTTP status codes.
"""


class ServiceTrackerError(Exception):
    """Base class for errors reported to the user."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceTrackerError):
    status_code = 404


class ConflictError(ServiceTrackerError):
    status_code = 409


class PersistenceError(ServiceTrackerError):
    """Writing to the store failed; stored data is unchanged."""

    status_code = 500


class ServiceRecordError(PersistenceError):
    """A create, update, delete or reorder of service records failed."""


class NoteError(PersistenceError):
    pass


class BackupImportError(ServiceTrackerError):
    """The backup file could not be parsed or has an unexpected shape."""

    status_code = 422


class InvalidInputError(ServiceTrackerError):
    status_code = 422
