"""Notification data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class HostNotice:
    """A warning raised while querying a host."""

    id: str
    host_name: str
    kind: str  # OutcomeKind value, e.g. "unreachable"
    message: str
    timestamp: datetime
