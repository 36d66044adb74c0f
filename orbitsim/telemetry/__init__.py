"""
Telemetry Module
================

Engine events for front ends.
"""

from .events import EventBus, EventType, TelemetryEvent

__all__ = [
    'EventBus',
    'EventType',
    'TelemetryEvent',
]
