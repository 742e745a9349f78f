"""Event-log client interface."""

from datetime import datetime
from typing import Protocol

from ..models import Credential, EventLevel, EventRecord, LegacyLogEntry, LogChannel


class IEventLogClient(Protocol):
    """Remote access to a host's event logs. Failures raise EventQueryError."""

    async def list_logs(
        self, host_name: str, credential: Credential | None = None
    ) -> list[LogChannel]:
        """Enumerate the log channels available on a host."""
        ...

    async def query_events(
        self,
        host_name: str,
        log_names: list[str],
        levels: list[EventLevel],
        start_time: datetime,
        credential: Credential | None = None,
    ) -> list[EventRecord]:
        """Query events at the given levels created at or after start_time."""
        ...

    async def read_legacy_log(
        self,
        host_name: str,
        log_name: str,
        entry_type: str,
        newest: int,
        credential: Credential | None = None,
    ) -> list[LegacyLogEntry]:
        """Read the newest entries of one log through the legacy API."""
        ...
