"""Per-host query outcome models."""

from dataclasses import dataclass
from enum import Enum

from .events import EventRecord


class OutcomeKind(str, Enum):
    """Result of querying one host."""

    EVENTS = "events"
    EMPTY = "empty"
    UNREACHABLE = "unreachable"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"


class QueryPath(str, Enum):
    """Which API surface produced an outcome."""

    PRIMARY = "primary"
    LEGACY = "legacy"


@dataclass(frozen=True)
class HostOutcome:
    """
    Outcome of one query attempt against one host.

    Only EVENTS carries records, and it always carries at least one.
    Use the named constructors rather than building instances directly.
    """

    host_name: str
    kind: OutcomeKind
    path: QueryPath = QueryPath.PRIMARY
    events: tuple[EventRecord, ...] = ()
    detail: str | None = None

    def __post_init__(self) -> None:
        if self.kind is OutcomeKind.EVENTS and not self.events:
            raise ValueError("EVENTS outcome requires at least one event")
        if self.kind is not OutcomeKind.EVENTS and self.events:
            raise ValueError(f"{self.kind.value} outcome cannot carry events")

    @classmethod
    def from_events(
        cls, host_name: str, events: list[EventRecord], path: QueryPath
    ) -> "HostOutcome":
        """EVENTS for a non-empty sequence, EMPTY otherwise."""
        if not events:
            return cls(host_name, OutcomeKind.EMPTY, path)
        return cls(host_name, OutcomeKind.EVENTS, path, tuple(events))

    @classmethod
    def empty(cls, host_name: str, path: QueryPath = QueryPath.PRIMARY) -> "HostOutcome":
        return cls(host_name, OutcomeKind.EMPTY, path)

    @classmethod
    def unreachable(cls, host_name: str, detail: str | None = None) -> "HostOutcome":
        return cls(host_name, OutcomeKind.UNREACHABLE, QueryPath.PRIMARY, detail=detail)

    @classmethod
    def unsupported(cls, host_name: str, detail: str | None = None) -> "HostOutcome":
        return cls(host_name, OutcomeKind.UNSUPPORTED, QueryPath.PRIMARY, detail=detail)

    @classmethod
    def unknown(
        cls,
        host_name: str,
        detail: str | None = None,
        path: QueryPath = QueryPath.PRIMARY,
    ) -> "HostOutcome":
        return cls(host_name, OutcomeKind.UNKNOWN, path, detail=detail)

    @property
    def is_failure(self) -> bool:
        """True for outcomes that could not establish what the host logged."""
        return self.kind in (
            OutcomeKind.UNREACHABLE,
            OutcomeKind.UNSUPPORTED,
            OutcomeKind.UNKNOWN,
        )
