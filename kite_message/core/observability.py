"""Observability for message validation.

Configures structlog once for the package and provides the
``validation_trace`` decorator, which logs every validation run with its
duration and outcome.
"""

import functools
import logging
import sys
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

import structlog
from structlog.contextvars import bind_contextvars, unbind_contextvars

# Configure structured logging
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),  # type: ignore[list-item]
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging to stderr at the given level.

    structlog renders the final line, so the stdlib handler only passes the
    message through.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper())


def validation_trace(*, schema: str) -> Callable[[F], F]:
    """Decorator logging a validation call and its result.

    The wrapped function must return an object exposing ``is_valid``,
    ``errors`` and ``warnings``. Valid results are logged at DEBUG, invalid
    ones at INFO. Exceptions are logged and re-raised.

    Example:
        >>> @validation_trace(schema="message")
        ... def validate(data: dict) -> ValidationResult:
        ...     ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            execution_id = f"{func.__module__}.{func.__name__}_{int(time.time() * 1000000)}"
            bind_contextvars(execution_id=execution_id)
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    "Validation raised",
                    schema=schema,
                    execution_id=execution_id,
                    duration_ms=(time.perf_counter() - start_time) * 1000,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise
            else:
                log = logger.debug if result.is_valid else logger.info
                log(
                    "Validated payload",
                    schema=schema,
                    execution_id=execution_id,
                    duration_ms=(time.perf_counter() - start_time) * 1000,
                    is_valid=result.is_valid,
                    error_count=len(result.errors),
                    warning_count=len(result.warnings),
                    error_fields=[err.field for err in result.errors][:20],
                )
                return result
            finally:
                unbind_contextvars("execution_id")

        return cast(F, wrapper)

    return decorator
