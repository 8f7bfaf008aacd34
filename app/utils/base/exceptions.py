class AppError(Exception):
    """Base error carrying the message and HTTP status sent to the client."""

    status_code = 500
    message = "O Ooo! Something Went Wrong!"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationFailure(AppError):
    status_code = 200
    message = "Invalid request"


class Unauthorized(AppError):
    status_code = 401
    message = "Please login first"


class AccessDenied(AppError):
    status_code = 200
    message = "You not have access to this route"
