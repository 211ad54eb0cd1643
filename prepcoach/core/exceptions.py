"""Error kinds raised by the service layer.

Every failure leaving a service is one of these. The HTTP layer maps them to
status codes in ``prepcoach.main``; nothing else is expected to reach a client.
"""

from typing import Optional


class ServiceError(Exception):
    """Base class for classified service failures."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Malformed or missing input that the caller can fix."""

    status_code = 400
    code = "VALIDATION_ERROR"


class NotFoundError(ServiceError):
    """No record matches the requested id (and owner)."""

    status_code = 404
    code = "NOT_FOUND"


class InvalidStateError(ServiceError):
    """The requested transition is illegal for the record's current status."""

    status_code = 409
    code = "INVALID_STATE"

    def __init__(self, message: str, current_status: Optional[str] = None):
        super().__init__(message)
        self.current_status = current_status


class InterviewNotCompletedError(InvalidStateError):
    """Results or metrics were requested before the interview finished."""

    status_code = 400
    code = "NOT_COMPLETED"


class UploadError(ServiceError):
    """The artifact storage collaborator failed."""

    code = "UPLOAD_FAILED"


class PersistenceError(ServiceError):
    """The database collaborator failed."""

    code = "PERSISTENCE_FAILED"


class PartialFailure(ServiceError):
    """A secondary coupled effect failed after the primary effect succeeded.

    Never raised to callers: it is logged and attached to the operation result.
    """

    code = "PARTIAL_FAILURE"

    def __init__(self, operation: str, interview_id: str, message: str):
        super().__init__(message)
        self.operation = operation
        self.interview_id = interview_id

    def __str__(self) -> str:
        return f"{self.operation} on interview {self.interview_id}: {self.message}"
