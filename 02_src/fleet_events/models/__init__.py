"""Core data models for the fleet event sweep."""

from .events import EventLevel, EventRecord, LegacyLogEntry, LogChannel
from .notices import HostNotice
from .outcome import HostOutcome, OutcomeKind, QueryPath
from .request import Credential, QueryRequest

__all__ = [
    # Events
    "EventLevel",
    "EventRecord",
    "LegacyLogEntry",
    "LogChannel",
    # Outcomes
    "HostOutcome",
    "OutcomeKind",
    "QueryPath",
    # Requests
    "Credential",
    "QueryRequest",
    # Notices
    "HostNotice",
]
