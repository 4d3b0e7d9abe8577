"""Observability for the analysis engine.

Configures structured logging and provides the ``trace_component`` decorator
that wraps every analysis component with timing and failure logging.
"""

import functools
import logging
import sys
import time
import traceback
import uuid
from collections.abc import Callable
from typing import Any, TypeVar, cast

import structlog
from structlog.contextvars import bind_contextvars, unbind_contextvars

from rift_coach.config.settings import get_settings

F = TypeVar("F", bound=Callable[..., Any])

_PACKAGE_LOGGER = "rift_coach"


def configure_logging(level: str = "INFO", *, json_output: bool = False) -> None:
    """Configure structlog for the engine's loggers.

    Console rendering on a TTY, JSON otherwise (or when ``json_output`` is set).
    """
    logging.getLogger(_PACKAGE_LOGGER).setLevel(level.upper())

    renderer: Any
    if json_output or not sys.stderr.isatty():
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer()

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
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


_settings = get_settings()
configure_logging(_settings.log_level, json_output=_settings.log_json)

logger = structlog.get_logger(__name__)


def trace_component(component: str) -> Callable[[F], F]:
    """Decorator for analysis components.

    Binds ``component`` and ``execution_id`` to the logging context, logs the
    duration on success and the error with its traceback on failure, then
    re-raises so the caller decides how to isolate it.

    Example:
        >>> @trace_component("cs")
        ... def analyze(match): ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            execution_id = f"{component}_{uuid.uuid4().hex[:12]}"
            bind_contextvars(component=component, execution_id=execution_id)
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
                logger.debug(
                    "component_completed",
                    function_name=f"{func.__module__}.{func.__name__}",
                    duration_ms=(time.perf_counter() - start_time) * 1000,
                )
                return result

            except Exception as e:
                logger.error(
                    "component_failed",
                    function_name=f"{func.__module__}.{func.__name__}",
                    duration_ms=(time.perf_counter() - start_time) * 1000,
                    error_type=type(e).__name__,
                    error_message=str(e),
                    traceback=traceback.format_exc(),
                )
                raise

            finally:
                unbind_contextvars("component", "execution_id")

        return cast(F, wrapper)

    return decorator
