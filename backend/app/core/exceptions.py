class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class ValidationFailure(AppError):
    """Raised when a required identifier or value is missing or malformed."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str | None = None):
        message = f"{resource_type} not found"
        details = {"resource_type": resource_type}
        if resource_id is not None:
            details["resource_id"] = resource_id
        super().__init__(message, status_code=404, details=details)

class SchedulingConflictError(AppError):
    """Raised when a teacher or room is already booked for the requested day and slot."""
    def __init__(self, message: str, kind: str, occupying_course_id: str | None = None):
        super().__init__(
            message,
            status_code=409,
            details={"kind": kind, "occupying_course_id": occupying_course_id},
        )
        self.kind = kind
        self.occupying_course_id = occupying_course_id

class PersistenceError(AppError):
    """Raised when the underlying store rejects or fails an operation."""
    def __init__(self, message: str):
        super().__init__(message, status_code=500)
