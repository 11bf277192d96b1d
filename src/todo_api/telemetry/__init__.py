"""Telemetry module for OpenTelemetry instrumentation."""
from todo_api.telemetry.instrumentation import TelemetryManager

__all__ = [
    "TelemetryManager",
]
