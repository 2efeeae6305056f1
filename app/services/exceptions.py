class ServiceError(Exception):
    """Base exception for service layer errors.

    `error` is a short label for the failure kind, `message` is the human
    readable explanation returned to the client.
    """

    error = "Request failed"

    def __init__(self, message: str, error: str = None):
        super().__init__(message)
        self.message = message
        if error is not None:
            self.error = error


class BusinessRuleViolationError(ServiceError):
    """Business rule violation"""

    error = "Bad request"


class AuthenticationError(ServiceError):
    """Missing or invalid credentials"""

    error = "Unauthorized"


class PermissionDeniedError(ServiceError):
    """Permission denied for operation"""

    error = "Forbidden"


class NotFoundError(ServiceError):
    error = "Not found"


class UserNotFoundError(NotFoundError):
    error = "User not found"


class EventNotFoundError(NotFoundError):
    error = "Event not found"


class TicketNotFoundError(NotFoundError):
    error = "Ticket not found"


class RegistrationNotFoundError(NotFoundError):
    error = "Registration not found"


class ForumPostNotFoundError(NotFoundError):
    error = "Post not found"


class PollNotFoundError(NotFoundError):
    error = "Poll not found"


class QuestionNotFoundError(NotFoundError):
    error = "Question not found"


class NotificationNotFoundError(NotFoundError):
    error = "Notification not found"


class ConflictError(ServiceError):
    """Request conflicts with current state"""

    error = "Conflict"
