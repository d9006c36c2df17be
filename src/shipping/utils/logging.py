"""Logging configuration for the shipping domain.

Standard library handlers own the output streams (console plus rotating
files); structlog owns the event format. Use-case handlers and
queries are wrapped with ``log_call`` so every booking, routing, handling
and tracking request is logged with its duration and outcome.
"""

import functools
import inspect
import logging
import logging.handlers
import os
import sys
import time
from collections.abc import Callable
from pathlib import Path

import structlog


def get_log_level() -> str:
    """Get log level based on environment."""
    env = (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()

    level_map = {
        "production": "INFO",
        "staging": "INFO",
        "development": "DEBUG",
        "test": "WARNING",
    }

    return os.getenv("LOG_LEVEL", level_map.get(env, "INFO"))


def setup_stdlib_logging(log_dir: str | Path = "logs") -> None:
    """Configure standard library logging."""
    log_level = get_log_level()

    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_dir / "shipping.log",
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)

    error_handler = logging.handlers.RotatingFileHandler(
        filename=log_dir / "shipping_error.log",
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(error_handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def setup_structlog() -> None:
    """Configure structlog for structured logging."""
    env = os.getenv("ENVIRONMENT", "development").lower()

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.contextvars.merge_contextvars,
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
    ]

    if env in ["production", "staging"]:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: str | Path = "logs") -> None:
    """Configure all logging for the application."""
    setup_stdlib_logging(log_dir)
    setup_structlog()


def _call_context(signature: inspect.Signature, fields: tuple[str, ...], args, kwargs) -> dict:
    arguments = signature.bind_partial(*args, **kwargs).arguments
    message = next((value for name, value in arguments.items() if name != "self"), None)
    return {name: arguments[name] if name in arguments else getattr(message, name, None) for name in fields}


def log_call(method: str, *fields: str) -> Callable:
    """Log a use-case call with its duration and outcome.

    ``fields`` are logged alongside ``method``, ``took`` and ``err``. A field
    naming an argument of the wrapped function is logged as that argument;
    any other field is read from the first argument after ``self``, which for
    a handler is the command or event being handled. Exceptions are logged
    and re-raised unchanged.

    Decorators compose, so a metrics wrapper can be stacked on the same
    handler method::

        @handle(BookNewCargo)
        @log_call("book", "origin", "destination")
        def book_new_cargo(self, command): ...

    Queries are plain functions::

        @log_call("load", "tracking_id")
        def load_cargo(tracking_id): ...
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            context = _call_context(signature, fields, args, kwargs)
            begin = time.perf_counter()
            err = None
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                err = type(exc).__name__
                raise
            finally:
                structlog.get_logger(func.__module__).info(
                    method,
                    method=method,
                    took=round(time.perf_counter() - begin, 6),
                    err=err,
                    **context,
                )

        return wrapper

    return decorator
