"""Application error taxonomy. Each error maps to one HTTP status and a one-line message."""


class AppError(Exception):
    status_code: int = 500
    message: str = "Server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class Unauthenticated(AppError):
    status_code = 401
    message = "Access denied"


class InvalidCredential(AppError):
    status_code = 401
    message = "Invalid token"


class AdminRequired(AppError):
    status_code = 403
    message = "Admin access required"


class NotFound(AppError):
    status_code = 404
    message = "Not found"


class SessionNotFound(NotFound):
    message = "Session not found"


class InvalidRequest(AppError):
    status_code = 400
    message = "Invalid request"


class EmailAlreadyRegistered(InvalidRequest):
    message = "Email already registered"


class InvalidCategory(AppError):
    status_code = 400
    message = "Invalid conversationCategoryId"


class DuplicateName(AppError):
    status_code = 409
    message = "A category with this name already exists"


class CompletionUnavailable(AppError):
    status_code = 502
    message = "Completion service unavailable"


class MalformedCompletion(AppError):
    status_code = 502
    message = "Failed to parse completion response"


class ServerError(AppError):
    pass
