# backend/utils/errors.py
# Domain errors raised by the routes; main.py renders them as {"error": message}.


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class AuthError(AppError):
    status_code = 401


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class InternalError(AppError):
    """Store or unexpected failure; the message sent to the client is always generic."""
    status_code = 500

    def __init__(self, message: str = "Erro interno"):
        super().__init__(message)
