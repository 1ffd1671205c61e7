"""Business errors raised by services and mapped to ``{"error": message}`` responses."""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    status_code = 400


class InvalidStateError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 400


class StoreFailure(AppError):
    status_code = 500
