"""Report accumulation across hosts."""

import asyncio
from typing import Iterable, Protocol

from ..logging_config import get_logger
from ..models import EventRecord, HostOutcome, OutcomeKind

logger = get_logger(__name__)


class IReportAggregator(Protocol):
    """Append-only report built from per-host results."""

    async def add(self, outcome: HostOutcome, records: list[EventRecord]) -> None:
        """Merge one host's consolidated records."""
        ...

    @property
    def report(self) -> list[EventRecord]:
        """Records accumulated so far."""
        ...


class ReportAggregator:
    """Collects consolidated records from hosts whose outcome was EVENTS."""

    def __init__(self):
        self._records: list[EventRecord] = []
        self._outcomes: dict[str, OutcomeKind] = {}
        self._lock = asyncio.Lock()

    async def add(self, outcome: HostOutcome, records: list[EventRecord]) -> None:
        """Merge one host's result. Non-EVENTS outcomes contribute nothing."""
        async with self._lock:
            self._outcomes[outcome.host_name] = outcome.kind
            if outcome.kind is not OutcomeKind.EVENTS:
                return
            self._records.extend(records)
            logger.debug(
                "Added %s records for %s (report size %s)",
                len(records),
                outcome.host_name,
                len(self._records),
            )

    @property
    def report(self) -> list[EventRecord]:
        return self._records.copy()

    @property
    def outcomes(self) -> dict[str, OutcomeKind]:
        """Final outcome kind per host, in merge order."""
        return dict(self._outcomes)


def fold_outcomes(
    results: Iterable[tuple[HostOutcome, list[EventRecord]]],
) -> list[EventRecord]:
    """
    Reduce (outcome, consolidated records) pairs into a report without shared state.

    Public helper for callers that fan hosts out through their own job
    framework and merge the per-host results themselves; EventCollector
    uses ReportAggregator instead.
    """
    report: list[EventRecord] = []
    for outcome, records in results:
        if outcome.kind is OutcomeKind.EVENTS:
            report.extend(records)
    return report
