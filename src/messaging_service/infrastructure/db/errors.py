"""Translate SQLAlchemy failures into application errors."""
from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from messaging_service.application.exceptions import ConflictError, StorageError

P = ParamSpec("P")
R = TypeVar("R")


def translate_storage_errors(
    func: Callable[P, Awaitable[R]],
) -> Callable[P, Awaitable[R]]:
    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except IntegrityError as exc:
            raise ConflictError("Record conflicts with existing data") from exc
        except SQLAlchemyError as exc:
            raise StorageError(f"{func.__qualname__} failed: {exc.__class__.__name__}") from exc

    return wrapper
