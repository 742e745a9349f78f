"""Job runners that fan a per-host job out over a list of hosts."""

import asyncio
from typing import Awaitable, Callable, Protocol, TypeVar

from ..logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

HostJob = Callable[[str], Awaitable[T]]


class IJobRunner(Protocol):
    """Runs a job once per host and collects results in host order."""

    async def run(self, job: HostJob, host_names: list[str]) -> list:
        """Run job for every host."""
        ...


class SequentialJobRunner:
    """Processes each host to completion before starting the next."""

    async def run(self, job: HostJob, host_names: list[str]) -> list:
        results = []
        for host_name in host_names:
            results.append(await job(host_name))
        return results


class ConcurrentJobRunner:
    """One asyncio task per host, at most max_concurrency running at once."""

    def __init__(self, max_concurrency: int = 8):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._max_concurrency = max_concurrency

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    async def run(self, job: HostJob, host_names: list[str]) -> list:
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def bounded(host_name: str):
            async with semaphore:
                return await job(host_name)

        logger.debug(
            "Dispatching %s hosts with concurrency %s",
            len(host_names),
            self._max_concurrency,
        )
        return await asyncio.gather(*[bounded(host_name) for host_name in host_names])


def create_job_runner(max_concurrency: int) -> IJobRunner:
    """Sequential for a concurrency of one, bounded-concurrent otherwise."""
    if max_concurrency <= 1:
        return SequentialJobRunner()
    return ConcurrentJobRunner(max_concurrency)
