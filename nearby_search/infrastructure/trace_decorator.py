"""
@traced: run an async search stage or MCP handler inside a span.

The span carries the handler kind, its name and its stringified arguments;
a workflow event with the elapsed time and outcome is added when it ends.

    @traced(span_name="search.resolver", handler_type="stage")
    async def resolve(self, candidates, origin): ...
"""

from __future__ import annotations

import functools
import inspect
import time
from typing import Any, Callable

from loguru import logger

from nearby_search.infrastructure.observability import get_observability_manager


def _span_attributes(
    sig: inspect.Signature,
    handler_type: str,
    name: str,
    args: tuple,
    kwargs: dict,
) -> dict[str, Any]:
    bound = sig.bind(*args, **kwargs)
    bound.apply_defaults()
    attributes: dict[str, Any] = {
        "handler.type": handler_type,
        "handler.name": name,
    }
    for param, value in bound.arguments.items():
        if param != "self":
            attributes[f"{handler_type}.param.{param}"] = str(value)
    return attributes


def traced(span_name: str, handler_type: str = "tool") -> Callable:
    """Wrap an async callable in a span named ``span_name``."""

    def decorator(func: Callable) -> Callable:
        sig = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            observability = get_observability_manager()
            attributes = _span_attributes(sig, handler_type, func.__name__, args, kwargs)
            started = time.monotonic()

            def finish(success: bool, error: Exception | None = None) -> float:
                elapsed_ms = round((time.monotonic() - started) * 1000, 2)
                observability.record_workflow_step(
                    step_name=func.__name__,
                    step_type=handler_type,
                    duration_ms=elapsed_ms,
                    success=success,
                    metadata={"error": str(error)} if error else None,
                )
                return elapsed_ms

            with observability.create_span(name=span_name, attributes=attributes):
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    elapsed_ms = finish(False, e)
                    logger.debug(f"{span_name}: {type(e).__name__} after {elapsed_ms}ms")
                    raise
                elapsed_ms = finish(True)
                logger.debug(f"{span_name}: ok in {elapsed_ms}ms")
                return result

        return wrapper

    return decorator
