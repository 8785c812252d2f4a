"""
Typed failures raised by the application services.
Each error carries a stable code and the HTTP status the API layer maps it to;
the services raise them and never log or format responses themselves.
"""
from __future__ import annotations


class ApplicationError(Exception):
    code = "APPLICATION_ERROR"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(ApplicationError):
    code = "NOT_FOUND"
    http_status = 404

    def __init__(self, application_id: str):
        super().__init__(f"Application {application_id} not found")
        self.application_id = application_id


class ApplicationNotFound(NotFound):
    """Message append target does not exist."""

    code = "APPLICATION_NOT_FOUND"


class DuplicateIdentifier(ApplicationError):
    code = "DUPLICATE_IDENTIFIER"
    http_status = 409

    def __init__(self, application_id: str):
        super().__init__(f"Application id {application_id} already exists")
        self.application_id = application_id


class IdentifierSpaceExhausted(ApplicationError):
    code = "IDENTIFIER_SPACE_EXHAUSTED"
    http_status = 503

    def __init__(self, attempts: int):
        super().__init__(f"No free application id found after {attempts} attempts")
        self.attempts = attempts


class InvalidStatusValue(ApplicationError):
    code = "INVALID_STATUS"
    http_status = 400

    def __init__(self, status: object):
        super().__init__(f"Invalid status: {status!r}")
        self.status = status


class InvalidTransition(ApplicationError):
    code = "INVALID_TRANSITION"
    http_status = 409

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot change status from {current} to {requested}")
        self.current = current
        self.requested = requested


class InvalidAuthor(ApplicationError):
    code = "INVALID_AUTHOR"
    http_status = 400

    def __init__(self, author: object):
        super().__init__(f"Invalid message author: {author!r}")
        self.author = author


class InvalidMessageBody(ApplicationError):
    code = "INVALID_MESSAGE"
    http_status = 400

    def __init__(self):
        super().__init__("Message body must not be empty")
