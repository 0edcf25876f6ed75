"""
Domain Errors
Raised by the services, translated to HTTP / socket responses by the handlers
"""


class LivePollError(Exception):
    """Base class for expected application errors"""
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(LivePollError):
    status_code = 404
    default_message = "Not found"


class TeacherNotFound(NotFoundError):
    default_message = "Teacher not found"


class ConflictError(LivePollError):
    status_code = 409
    default_message = "Conflict"


class ActivePollExists(ConflictError):
    default_message = "An active poll already exists. Complete it before starting a new one."


class ValidationError(LivePollError):
    status_code = 400
    default_message = "Invalid input"


class InvalidTransition(ConflictError):
    """Poll status change that the lifecycle does not allow"""
    default_message = "Invalid poll status transition"
