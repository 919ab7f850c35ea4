"""Error handling utilities and decorators"""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast

from ..exceptions import WordAudioError

T = TypeVar("T")


def handle_errors(
    default_return: Any = None,
    operation_name: str | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator that logs a failure and returns a default value instead.

    Args:
        default_return: Value to return when an error occurs
        operation_name: Custom operation name for logging (defaults to function name)
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            op_name = operation_name or func.__name__
            logger = logging.getLogger(func.__module__)

            try:
                return func(*args, **kwargs)
            except WordAudioError as e:
                logger.error(f"Application error in {op_name}: {e}")
                return cast(T, default_return)
            except Exception as e:
                logger.error(f"Unexpected error in {op_name}: {e}", exc_info=True)
                return cast(T, default_return)

        return wrapper

    return decorator


class ErrorCollector:
    """Collects per-file failures so a folder command can report them once"""

    def __init__(self) -> None:
        self.errors: list[Exception] = []

    def add_error(self, error: Exception) -> None:
        self.errors.append(error)

    def messages(self) -> list[str]:
        """Error messages in the order they were collected"""
        return [str(error) for error in self.errors]

    def log_all(self, logger: logging.Logger) -> None:
        for error in self.errors:
            logger.error(f"Skipped after error: {error}")
