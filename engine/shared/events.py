"""
Append-only audit log for externally observable engine events.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .logger import component_logger


@dataclass(frozen=True)
class AuditEvent:
    """Structured audit record."""
    name: str
    height: int
    fields: Dict[str, Any] = field(default_factory=dict)


class AuditLog:
    """
    Append-only event sink.

    Events are recorded after the state mutation they describe has been
    applied. Subscribers are notified synchronously; a failing subscriber is
    logged and skipped.
    """

    def __init__(self):
        self.logger = component_logger("AUDIT")
        self._events: List[AuditEvent] = []
        self.handlers: list[Callable[[AuditEvent], None]] = []

    def subscribe(self, handler: Callable[[AuditEvent], None]) -> None:
        """Register event handler."""
        self.handlers.append(handler)

    def emit(self, name: str, height: int, **fields: Any) -> AuditEvent:
        """Append an event and notify subscribers."""
        event = AuditEvent(name=name, height=height, fields=fields)
        self._events.append(event)

        for handler in self.handlers:
            try:
                handler(event)
            except Exception:
                self.logger.exception("Handler error", audit_event=name)

        return event

    def events(self, name: Optional[str] = None) -> List[AuditEvent]:
        """Get recorded events, optionally filtered by name."""
        if name is None:
            return list(self._events)
        return [e for e in self._events if e.name == name]

    def last(self, name: str) -> Optional[AuditEvent]:
        """Get the most recent event with the given name."""
        for event in reversed(self._events):
            if event.name == name:
                return event
        return None

    def __len__(self) -> int:
        return len(self._events)
