"""Tracing and logging for the content inventory."""

import logging
import sys
import threading
from datetime import datetime
from typing import Any


class EventTracer:
    """Tracer for store and API events."""

    def __init__(self, name: str = "inventory", max_events: int = 1000):
        self.logger = logging.getLogger(name)
        self._setup_handler()
        self.events: list[dict[str, Any]] = []
        self.max_events = max_events
        self.enabled = True
        self._lock = threading.Lock()

    def _setup_handler(self) -> None:
        """Setup console handler with formatting."""
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            formatter = logging.Formatter(
                "[%(asctime)s] %(levelname)s - %(name)s - %(message)s",
                datefmt="%H:%M:%S",
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)
            self.logger.propagate = False

    def log(
        self,
        event_type: str,
        component: str,
        message: str,
        data: dict[str, Any] | None = None,
        level: int = logging.INFO,
    ) -> None:
        """Log an event.

        Args:
            event_type: Type of event (e.g., "create", "update", "missing_file").
            component: Name of the component emitting it (e.g., "store", "api").
            message: Human-readable message.
            data: Optional additional data.
            level: Logging level for the console line.
        """
        log_msg = f"[{component}] {event_type}: {message}"
        if data:
            log_msg += f" | {data}"
        self.logger.log(level, log_msg)

        if not self.enabled:
            return

        event = {
            "timestamp": datetime.now().isoformat(),
            "event_type": event_type,
            "component": component,
            "message": message,
            "data": data or {},
        }
        with self._lock:
            self.events.append(event)
            # Oldest events go first once the buffer is full
            if len(self.events) > self.max_events:
                del self.events[: len(self.events) - self.max_events]

    def get_events(self, component: str | None = None) -> list[dict[str, Any]]:
        """Get logged events, optionally filtered by component."""
        with self._lock:
            if component:
                return [e for e in self.events if e["component"] == component]
            return self.events.copy()

    def clear(self) -> None:
        """Clear all logged events."""
        with self._lock:
            self.events.clear()


# Global tracer instance
_tracer: EventTracer | None = None


def setup_tracing(log_level: str = "INFO", enabled: bool = True) -> EventTracer:
    """Setup global tracing.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        enabled: Whether events are kept in memory for the trace endpoint.

    Returns:
        The configured EventTracer instance.
    """
    global _tracer
    _tracer = EventTracer()
    _tracer.logger.setLevel(getattr(logging, log_level.upper()))
    _tracer.enabled = enabled
    return _tracer


def get_tracer() -> EventTracer:
    """Get the global tracer instance."""
    global _tracer
    if _tracer is None:
        _tracer = EventTracer()
    return _tracer


def log_event(
    event_type: str,
    component: str,
    message: str,
    data: dict[str, Any] | None = None,
    level: int = logging.INFO,
) -> None:
    """Log an event using the global tracer."""
    get_tracer().log(event_type, component, message, data, level)
