"""
OpenTelemetry tracing for the search service.

Spans go to whichever tracer provider is installed; with none configured the
API's no-op provider is used. To export, run under auto-instrumentation:

    opentelemetry-instrument python -m nearby_search.main

Settings: AGENT_OBSERVABILITY_ENABLED turns span creation on or off,
OTEL_SERVICE_NAME names the tracer.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from loguru import logger
from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind, Status, StatusCode


class ObservabilityManager:
    """Creates spans and span events; every method is a no-op when disabled."""

    def __init__(self, service_name: str = "nearby-search", enabled: bool = True) -> None:
        self.service_name = service_name
        self.enabled = enabled
        self._tracer = trace.get_tracer(service_name) if enabled else None
        logger.info(
            f"Tracing {'enabled' if enabled else 'disabled'} for {service_name}"
        )

    @contextmanager
    def create_span(
        self,
        name: str,
        kind: SpanKind = SpanKind.INTERNAL,
        attributes: Optional[dict] = None,
    ) -> Iterator[Optional[Span]]:
        """Open a span for the duration of the block; errors mark it failed."""
        if self._tracer is None:
            yield None
            return

        with self._tracer.start_as_current_span(
            name, kind=kind, attributes=attributes or {}
        ) as span:
            try:
                yield span
            except Exception as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                span.record_exception(e)
                raise

    def add_span_event(self, name: str, attributes: Optional[dict] = None) -> None:
        if self.enabled:
            trace.get_current_span().add_event(name, attributes=attributes or {})

    def record_workflow_step(
        self,
        step_name: str,
        step_type: str,
        duration_ms: Optional[float] = None,
        success: bool = True,
        metadata: Optional[dict] = None,
    ) -> None:
        """Attach a ``workflow.<step>`` event describing a finished stage."""
        attributes: dict = {
            "workflow.step.name": step_name,
            "workflow.step.type": step_type,
            "workflow.step.success": success,
        }
        if duration_ms is not None:
            attributes["workflow.step.duration_ms"] = duration_ms
        for key, value in (metadata or {}).items():
            attributes[f"workflow.step.{key}"] = str(value)

        self.add_span_event(f"workflow.{step_name}", attributes)


_observability_manager: ObservabilityManager | None = None


def get_observability_manager() -> ObservabilityManager:
    """Shared manager, built from settings on first use."""
    global _observability_manager

    if _observability_manager is None:
        from nearby_search.config import settings

        _observability_manager = ObservabilityManager(
            service_name=settings.OTEL_SERVICE_NAME,
            enabled=settings.AGENT_OBSERVABILITY_ENABLED,
        )
    return _observability_manager


def initialize_observability(
    service_name: str = "nearby-search",
    enabled: bool = True,
) -> ObservabilityManager:
    """Replace the shared manager; called once at startup."""
    global _observability_manager

    _observability_manager = ObservabilityManager(service_name=service_name, enabled=enabled)
    return _observability_manager
