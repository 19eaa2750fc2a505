"""Tracing and logging for the content inventory."""

from .logger import get_tracer, log_event, setup_tracing

__all__ = [
    "get_tracer",
    "setup_tracing",
    "log_event",
]
