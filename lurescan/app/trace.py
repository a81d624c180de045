"""
trace.py

Append-only record of what the engine did during one scan, in the order it
happened. The front end prints it as a running console log.
"""

from typing import List, Tuple

from .models import Severity, TraceEvent


class Trace:
    def __init__(self):
        self._events: List[TraceEvent] = []

    def record(self, event: TraceEvent) -> TraceEvent:
        self._events.append(event)
        return event

    def emit(self, message: str, severity: Severity = Severity.INFO) -> TraceEvent:
        return self.record(TraceEvent(message, severity))

    def info(self, message: str) -> TraceEvent:
        return self.emit(message, Severity.INFO)

    def warning(self, message: str) -> TraceEvent:
        return self.emit(message, Severity.WARNING)

    def danger(self, message: str) -> TraceEvent:
        return self.emit(message, Severity.DANGER)

    def success(self, message: str) -> TraceEvent:
        return self.emit(message, Severity.SUCCESS)

    def events(self) -> Tuple[TraceEvent, ...]:
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)
