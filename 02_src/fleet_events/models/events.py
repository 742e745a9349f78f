"""Event-log data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum


class EventLevel(IntEnum):
    """Severity levels understood by the modern event query API."""

    CRITICAL = 1
    ERROR = 2
    WARNING = 3
    INFORMATION = 4
    VERBOSE = 5


@dataclass(frozen=True)
class EventRecord:
    """A single event in the shape reported to the caller."""

    host_name: str
    time_created: datetime
    provider_name: str
    log_name: str
    event_id: int
    level_display_name: str
    message: str


@dataclass(frozen=True)
class LogChannel:
    """An event log channel as enumerated on a host."""

    log_name: str
    log_type: str  # "Administrative", "Operational", "Analytical", "Debug"
    log_isolation: str  # "Application", "System", "Custom"
    record_count: int | None = None


@dataclass(frozen=True)
class LegacyLogEntry:
    """An entry read through the legacy event log API, in its native shape."""

    machine_name: str
    time_generated: datetime
    source: str
    event_id: int
    entry_type: str  # "Error", "Warning", "Information", ...
    message: str
