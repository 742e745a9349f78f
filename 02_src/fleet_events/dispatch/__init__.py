"""Dispatch module."""

from .runner import (
    ConcurrentJobRunner,
    HostJob,
    IJobRunner,
    SequentialJobRunner,
    create_job_runner,
)

__all__ = [
    "ConcurrentJobRunner",
    "HostJob",
    "IJobRunner",
    "SequentialJobRunner",
    "create_job_runner",
]
