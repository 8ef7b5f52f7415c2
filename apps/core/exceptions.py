"""
Domain error taxonomy for the point-of-sale ledger.

Every failure that crosses the Record Store, the invoice transaction or the
analytics aggregation is raised as one of these types so that the HTTP views
and the IPC dispatcher can report it with a stable kind and status.
"""


class LedgerError(Exception):
    """Base class for all ledger errors."""

    status_code = 500
    error_type = "error"

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class RecordValidationError(LedgerError):
    """Raised when a required field is missing or malformed."""

    status_code = 400
    error_type = "validation"


class DuplicateRecordError(LedgerError):
    """Raised when a write violates a uniqueness constraint."""

    status_code = 409
    error_type = "conflict"


class ProtectedRecordError(LedgerError):
    """Raised when a delete is refused because other records still reference the row."""

    status_code = 409
    error_type = "conflict"


class RecordNotFoundError(LedgerError):
    """Raised when an update, delete or lookup targets an absent id."""

    status_code = 404
    error_type = "not_found"


class StorageError(LedgerError):
    """Raised when persistence is unavailable or a write fails."""

    status_code = 503
    error_type = "storage"
