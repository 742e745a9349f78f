"""Fleet event sweep."""

from .aggregate import IReportAggregator, ReportAggregator, fold_outcomes
from .app import EventCollector, IEventCollector, collect_events
from .config import Settings
from .consolidate import consolidate
from .dispatch import ConcurrentJobRunner, IJobRunner, SequentialJobRunner
from .models import (
    Credential,
    EventLevel,
    EventRecord,
    HostNotice,
    HostOutcome,
    LegacyLogEntry,
    LogChannel,
    OutcomeKind,
    QueryPath,
    QueryRequest,
)
from .notifier import INotifier, Notifier
from .query import HostEventQuery, IHostEventQuery, select_log_channels
from .remote import (
    ErrorKind,
    EventQueryError,
    IEventLogClient,
    PowerShellEventLogClient,
    classify_error,
)

__all__ = [
    # Collector
    "EventCollector",
    "IEventCollector",
    "collect_events",
    "Settings",
    # Models
    "Credential",
    "EventLevel",
    "EventRecord",
    "HostNotice",
    "HostOutcome",
    "LegacyLogEntry",
    "LogChannel",
    "OutcomeKind",
    "QueryPath",
    "QueryRequest",
    # Components
    "HostEventQuery",
    "IHostEventQuery",
    "select_log_channels",
    "consolidate",
    "IReportAggregator",
    "ReportAggregator",
    "fold_outcomes",
    "IJobRunner",
    "SequentialJobRunner",
    "ConcurrentJobRunner",
    "INotifier",
    "Notifier",
    # Remote
    "ErrorKind",
    "EventQueryError",
    "IEventLogClient",
    "PowerShellEventLogClient",
    "classify_error",
]
