"""HostEventQuery implementation: tiered event retrieval against one host."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Protocol

from ..config import DEFAULT_LEGACY_NEWEST, LEGACY_ENTRY_TYPE, LEGACY_LOG_NAME
from ..logging_config import get_logger
from ..models import (
    Credential,
    EventLevel,
    EventRecord,
    HostOutcome,
    LegacyLogEntry,
    OutcomeKind,
    QueryPath,
)
from ..notifier import INotifier
from ..remote import ErrorKind, EventQueryError, IEventLogClient
from .selector import select_log_channels

logger = get_logger(__name__)

PRIMARY_LEVELS = [EventLevel.CRITICAL, EventLevel.ERROR]

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def project_legacy_entry(entry: LegacyLogEntry) -> EventRecord:
    """Project a legacy entry into the EventRecord shape."""
    return EventRecord(
        host_name=entry.machine_name,
        time_created=entry.time_generated,
        provider_name=entry.source,
        log_name=LEGACY_LOG_NAME,
        event_id=entry.event_id,
        level_display_name=entry.entry_type,
        message=entry.message,
    )


class IHostEventQuery(Protocol):
    """Produces exactly one HostOutcome per host."""

    async def query(
        self,
        host_name: str,
        credential: Credential | None = None,
        hours_back: int = 1,
    ) -> HostOutcome:
        """Query one host, falling back to the legacy API when needed."""
        ...


class HostEventQuery:
    """
    Tiered retrieval of recent critical and error events from one host.

    The primary path enumerates log channels and queries the selected ones
    through the modern API. A host that reports an unsupported endpoint is
    retried once through the legacy API; every other failure is final.
    Failures never propagate: they come back as HostOutcome values, and each
    non-EVENTS outcome is reported to the notifier exactly once.
    """

    def __init__(
        self,
        client: IEventLogClient,
        notifier: INotifier,
        clock: Clock | None = None,
        legacy_newest: int = DEFAULT_LEGACY_NEWEST,
        legacy_fallback: bool = True,
    ):
        self._client = client
        self._notifier = notifier
        self._clock = clock or utc_now
        self._legacy_newest = legacy_newest
        self._legacy_fallback = legacy_fallback

    async def query(
        self,
        host_name: str,
        credential: Credential | None = None,
        hours_back: int = 1,
    ) -> HostOutcome:
        """Query one host and return its final outcome."""
        start_time = self._clock() - timedelta(hours=hours_back)
        await self._notifier.verbose(
            f"Querying {host_name} for events since {start_time.isoformat()}"
        )

        try:
            events = await self._query_primary(host_name, credential, start_time)
        except EventQueryError as e:
            outcome = await self._handle_primary_failure(
                host_name, credential, start_time, e
            )
        except Exception as e:
            logger.error("Unexpected error querying %s", host_name, exc_info=True)
            outcome = HostOutcome.unknown(host_name, str(e))
        else:
            outcome = HostOutcome.from_events(host_name, events, QueryPath.PRIMARY)

        await self._report(outcome, hours_back)
        return outcome

    async def _query_primary(
        self,
        host_name: str,
        credential: Credential | None,
        start_time: datetime,
    ) -> list[EventRecord]:
        channels = await self._client.list_logs(host_name, credential)
        selected = select_log_channels(channels)
        if not selected:
            await self._notifier.verbose(
                f"{host_name}: no administrative system logs with records"
            )
            return []

        log_names = [channel.log_name for channel in selected]
        await self._notifier.verbose(
            f"{host_name}: querying {len(log_names)} logs: {', '.join(log_names)}"
        )
        return await self._client.query_events(
            host_name, log_names, PRIMARY_LEVELS, start_time, credential
        )

    async def _handle_primary_failure(
        self,
        host_name: str,
        credential: Credential | None,
        start_time: datetime,
        error: EventQueryError,
    ) -> HostOutcome:
        if error.kind is ErrorKind.NO_EVENTS:
            return HostOutcome.empty(host_name)
        if error.kind is ErrorKind.RPC_UNAVAILABLE:
            return HostOutcome.unreachable(host_name, error.message)
        if error.kind is ErrorKind.UNSUPPORTED_ENDPOINT:
            if not self._legacy_fallback:
                return HostOutcome.unsupported(host_name, error.message)
            await self._notifier.verbose(
                f"{host_name}: modern event API unsupported, using legacy event log"
            )
            return await self._query_legacy(host_name, credential, start_time)
        return HostOutcome.unknown(host_name, error.message)

    async def _query_legacy(
        self,
        host_name: str,
        credential: Credential | None,
        start_time: datetime,
    ) -> HostOutcome:
        try:
            entries = await self._client.read_legacy_log(
                host_name,
                LEGACY_LOG_NAME,
                LEGACY_ENTRY_TYPE,
                self._legacy_newest,
                credential,
            )
        except EventQueryError as e:
            if e.kind is ErrorKind.NO_EVENTS:
                return HostOutcome.empty(host_name, QueryPath.LEGACY)
            return HostOutcome.unknown(host_name, e.message, QueryPath.LEGACY)
        except Exception as e:
            logger.error("Unexpected legacy error querying %s", host_name, exc_info=True)
            return HostOutcome.unknown(host_name, str(e), QueryPath.LEGACY)

        events = [
            project_legacy_entry(entry)
            for entry in entries
            if entry.time_generated > start_time
        ]
        return HostOutcome.from_events(host_name, events, QueryPath.LEGACY)

    async def _report(self, outcome: HostOutcome, hours_back: int) -> None:
        host_name = outcome.host_name
        via = "legacy event log" if outcome.path is QueryPath.LEGACY else "event log"

        if outcome.kind is OutcomeKind.EVENTS:
            await self._notifier.verbose(
                f"{host_name}: {len(outcome.events)} events found via {via}"
            )
            return

        if outcome.kind is OutcomeKind.EMPTY:
            message = (
                f"No critical or error events in the last {hours_back} hour(s) ({via})"
            )
        elif outcome.kind is OutcomeKind.UNREACHABLE:
            message = f"RPC error, host unreachable: {outcome.detail}"
        elif outcome.kind is OutcomeKind.UNSUPPORTED:
            message = f"Event query not supported and legacy fallback disabled: {outcome.detail}"
        else:
            message = f"Event query failed ({via}): {outcome.detail}"

        await self._notifier.warn(host_name, outcome.kind.value, message)
