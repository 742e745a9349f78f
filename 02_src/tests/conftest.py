"""Pytest configuration and fixtures."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fleet_events.models import (  # noqa: E402
    EventRecord,
    LegacyLogEntry,
    LogChannel,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

SYSTEM_CHANNEL = LogChannel(
    log_name="System",
    log_type="Administrative",
    log_isolation="System",
    record_count=500,
)


class FakeEventLogClient:
    """In-memory IEventLogClient with per-host responses and call recording."""

    def __init__(self):
        self.channels: dict[str, list[LogChannel]] = {}
        self.events: dict[str, list[EventRecord]] = {}
        self.legacy: dict[str, list[LegacyLogEntry]] = {}
        self.errors: dict[tuple[str, str], Exception] = {}
        self.calls: list[tuple[str, str]] = []
        self.call_args: list[tuple[str, dict]] = []

    def fail(self, host_name: str, method: str, error: Exception) -> None:
        """Make `method` raise `error` for `host_name`."""
        self.errors[(host_name, method)] = error

    def calls_for(self, host_name: str) -> list[str]:
        return [method for method, host in self.calls if host == host_name]

    def _enter(self, method: str, host_name: str, **kwargs) -> None:
        self.calls.append((method, host_name))
        self.call_args.append((method, {"host_name": host_name, **kwargs}))
        error = self.errors.get((host_name, method))
        if error is not None:
            raise error

    async def list_logs(self, host_name, credential=None):
        self._enter("list_logs", host_name, credential=credential)
        return self.channels.get(host_name, [SYSTEM_CHANNEL])

    async def query_events(self, host_name, log_names, levels, start_time, credential=None):
        self._enter(
            "query_events",
            host_name,
            log_names=log_names,
            levels=levels,
            start_time=start_time,
            credential=credential,
        )
        return list(self.events.get(host_name, []))

    async def read_legacy_log(self, host_name, log_name, entry_type, newest, credential=None):
        self._enter(
            "read_legacy_log",
            host_name,
            log_name=log_name,
            entry_type=entry_type,
            newest=newest,
            credential=credential,
        )
        return list(self.legacy.get(host_name, []))


def make_event(
    host_name: str = "SRV01",
    event_id: int = 10,
    minutes_ago: int = 10,
    provider_name: str = "Service Control Manager",
    log_name: str = "System",
    message: str = "The service terminated unexpectedly.",
) -> EventRecord:
    return EventRecord(
        host_name=host_name,
        time_created=NOW - timedelta(minutes=minutes_ago),
        provider_name=provider_name,
        log_name=log_name,
        event_id=event_id,
        level_display_name="Error",
        message=message,
    )


def make_legacy_entry(
    host_name: str = "SRV03",
    event_id: int = 7000,
    minutes_ago: int = 10,
    source: str = "Service Control Manager",
) -> LegacyLogEntry:
    return LegacyLogEntry(
        machine_name=host_name,
        time_generated=NOW - timedelta(minutes=minutes_ago),
        source=source,
        event_id=event_id,
        entry_type="Error",
        message="The service failed to start.",
    )


@pytest.fixture
def now():
    """Fixed current time."""
    return NOW


@pytest.fixture
def clock():
    """Clock returning the fixed current time."""
    return lambda: NOW


@pytest.fixture
def fake_client():
    """Create an in-memory event-log client."""
    return FakeEventLogClient()


@pytest.fixture
def notifier():
    """Create a Notifier."""
    from fleet_events.notifier import Notifier

    return Notifier()


@pytest.fixture
def host_query(fake_client, notifier, clock):
    """Create HostEventQuery over the fake client."""
    from fleet_events.query import HostEventQuery

    return HostEventQuery(client=fake_client, notifier=notifier, clock=clock)


@pytest.fixture
def event_factory():
    """Factory for EventRecords relative to the fixed current time."""
    return make_event


@pytest.fixture
def legacy_factory():
    """Factory for LegacyLogEntries relative to the fixed current time."""
    return make_legacy_entry
