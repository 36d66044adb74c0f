"""
Telemetry Events
================

Discrete events the engine emits for front ends to consume. The engine
only knows this bus; it never touches a display layer.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    LOW_ALTITUDE_WARNING = "low_altitude_warning"
    CRASH = "crash"
    MANEUVER_REJECTED = "maneuver_rejected"
    ESCAPE_VELOCITY_EXCEEDED = "escape_velocity_exceeded"
    TRANSFER_COMPLETE = "transfer_complete"


@dataclass
class TelemetryEvent:
    """One engine event."""
    event_type: EventType
    time_s: float
    message: str
    data: dict = field(default_factory=dict)


EventCallback = Callable[[TelemetryEvent], None]


class EventBus:
    """
    Dispatches engine events to subscribers.

    Keeps a bounded history and per-type counters so a front end that
    polls instead of subscribing still sees what happened.
    """

    def __init__(self, max_history: int = 1000):
        """
        Initialize event bus.

        Args:
            max_history: Number of past events retained
        """
        self._subscribers: List[tuple] = []
        self._history: deque = deque(maxlen=max_history)
        self.counts: Dict[EventType, int] = {t: 0 for t in EventType}
        self.stats = {
            'events_emitted': 0,
            'callback_errors': 0,
        }

    def subscribe(self,
                  callback: EventCallback,
                  event_type: Optional[EventType] = None):
        """
        Register a callback.

        Args:
            callback: Called with each matching event
            event_type: Only deliver this type; all types when None
        """
        self._subscribers.append((callback, event_type))

    def unsubscribe(self, callback: EventCallback):
        """Remove every registration of callback."""
        self._subscribers = [(cb, t) for cb, t in self._subscribers if cb != callback]

    def emit(self, event: TelemetryEvent) -> TelemetryEvent:
        """Record and dispatch an event."""
        self._history.append(event)
        self.counts[event.event_type] += 1
        self.stats['events_emitted'] += 1

        for callback, event_type in list(self._subscribers):
            if event_type is not None and event_type is not event.event_type:
                continue
            try:
                callback(event)
            except Exception:
                # A broken subscriber must not stop the tick loop
                self.stats['callback_errors'] += 1
                logger.exception("Event callback failed for %s", event.event_type.value)

        return event

    def get_latest(self, count: int = 10) -> List[TelemetryEvent]:
        """Most recent events, oldest first."""
        if count <= 0:
            return []
        return list(self._history)[-count:]

    def events_of(self, event_type: EventType) -> List[TelemetryEvent]:
        """Retained events of one type."""
        return [e for e in self._history if e.event_type is event_type]

    def clear_history(self):
        """Clear history; counters are kept."""
        self._history.clear()

    def reset(self):
        """Clear history, per-type counters and stats."""
        self._history.clear()
        self.counts = {t: 0 for t in EventType}
        for key in self.stats:
            self.stats[key] = 0
