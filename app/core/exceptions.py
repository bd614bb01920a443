"""
Domain error taxonomy for the RSVP service.

Every error carries the HTTP status the API boundary maps it to, so the
service layer never has to know about FastAPI.
"""


class AppError(Exception):
    """Base class for errors that are reported to API clients."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found"


class EventNotFoundError(NotFoundError):
    default_message = "Event not found"


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class RSVPNotFoundError(NotFoundError):
    default_message = "RSVP not found"


class ConflictError(AppError):
    status_code = 400
    default_message = "Request conflicts with current state"


class RSVPExistsError(ConflictError):
    default_message = "RSVP already exists"


class EventFullError(ConflictError):
    default_message = "Event is full"


class RSVPOverlapError(ConflictError):
    default_message = "User already has an RSVP for an overlapping event"


class BadRequestError(AppError):
    status_code = 400
    default_message = "Bad request"


class InvalidStatusError(BadRequestError):
    default_message = "Invalid RSVP status"


class InvalidRoleError(BadRequestError):
    default_message = "Invalid event role"
