"""Collector wiring: host query, consolidation and aggregation."""

import asyncio
from typing import Protocol

from .aggregate import ReportAggregator
from .config import Settings
from .consolidate import consolidate
from .dispatch import IJobRunner, create_job_runner
from .logging_config import get_logger
from .models import Credential, EventRecord, HostOutcome, OutcomeKind, QueryRequest
from .notifier import INotifier, Notifier
from .query import HostEventQuery, IHostEventQuery
from .query.host_query import Clock
from .remote import IEventLogClient, PowerShellEventLogClient

logger = get_logger(__name__)


class IEventCollector(Protocol):
    """Sweeps a list of hosts into one consolidated report."""

    async def collect(self, request: QueryRequest) -> list[EventRecord]:
        """Run the sweep and return the report."""
        ...


class EventCollector:
    """Runs every host through query, consolidation and aggregation."""

    def __init__(
        self,
        client: IEventLogClient | None = None,
        notifier: INotifier | None = None,
        runner: IJobRunner | None = None,
        settings: Settings | None = None,
        clock: Clock | None = None,
        host_query: IHostEventQuery | None = None,
    ):
        self._settings = settings or Settings()
        self._client = client or PowerShellEventLogClient(
            executable=self._settings.powershell,
            timeout=self._settings.command_timeout,
        )
        self._notifier = notifier or Notifier()
        self._runner = runner or create_job_runner(self._settings.max_concurrency)
        self._host_query = host_query or HostEventQuery(
            client=self._client,
            notifier=self._notifier,
            clock=clock,
            legacy_newest=self._settings.legacy_newest,
        )
        self._last_outcomes: dict[str, OutcomeKind] = {}

    async def collect(self, request: QueryRequest) -> list[EventRecord]:
        """Run the sweep and return the report (unsorted)."""
        aggregator = ReportAggregator()
        logger.info(
            "Collecting events from %s hosts over the last %s hour(s)",
            len(request.computer_names),
            request.hours_back,
        )

        async def process_host(host_name: str) -> HostOutcome:
            outcome = await self._host_query.query(
                host_name, request.credential, request.hours_back
            )
            records = consolidate(outcome.events) if outcome.kind is OutcomeKind.EVENTS else []
            await aggregator.add(outcome, records)
            return outcome

        await self._runner.run(process_host, list(request.computer_names))

        self._last_outcomes = aggregator.outcomes
        report = aggregator.report
        logger.info(
            "Collected %s records from %s hosts",
            len(report),
            sum(1 for kind in self._last_outcomes.values() if kind is OutcomeKind.EVENTS),
        )
        return report

    @property
    def last_outcomes(self) -> dict[str, OutcomeKind]:
        """Final outcome per host from the most recent collect()."""
        return dict(self._last_outcomes)

    @property
    def notifier(self) -> INotifier:
        return self._notifier


def collect_events(
    computer_names: list[str],
    credential: Credential | None = None,
    hours_back: int = 1,
    client: IEventLogClient | None = None,
    settings: Settings | None = None,
) -> list[EventRecord]:
    """
    Synchronous entry point for a sweep.

    Args:
        computer_names: Hosts to query, in order. Must not be empty.
        credential: Passed through to the remote APIs; None uses the
                    current identity.
        hours_back: Lookback window in hours.
        client: Event-log client; defaults to PowerShell.
        settings: Runtime settings; defaults to Settings().

    Returns:
        Consolidated records for every host that reported events.

    Raises:
        pydantic.ValidationError: on invalid input, before any host is contacted.
    """
    request = QueryRequest(
        computer_names=computer_names,
        credential=credential,
        hours_back=hours_back,
    )
    collector = EventCollector(client=client, settings=settings)
    return asyncio.run(collector.collect(request))
