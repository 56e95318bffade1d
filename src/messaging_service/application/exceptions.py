from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    code = "app_error"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class ValidationError(AppError):
    code = "validation_error"


class UnauthorizedError(AppError):
    code = "unauthorized"


class ForbiddenError(AppError):
    code = "forbidden"


class NotFoundError(AppError):
    code = "not_found"


class ConflictError(AppError):
    code = "conflict"


class StorageError(AppError):
    """Backing storage is unavailable or rejected the operation."""

    code = "storage_error"
