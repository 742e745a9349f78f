"""Notifier implementation for per-host warnings and progress messages."""

import uuid
from datetime import datetime, timezone
from typing import Protocol

from ..logging_config import get_logger
from ..models import HostNotice

logger = get_logger(__name__)


class INotifier(Protocol):
    """Sink for warnings and verbose progress. Return values are never consumed."""

    async def warn(self, host_name: str, kind: str, message: str) -> None:
        """Record a warning about a host."""
        ...

    async def verbose(self, message: str) -> None:
        """Emit a progress message."""
        ...


class Notifier:
    """Logs notifications and keeps warnings as HostNotices for the caller."""

    def __init__(self):
        self._notices: list[HostNotice] = []

    async def warn(self, host_name: str, kind: str, message: str) -> None:
        """Create a HostNotice and log it at WARNING."""
        notice = HostNotice(
            id=str(uuid.uuid4()),
            host_name=host_name,
            kind=kind,
            message=message,
            timestamp=datetime.now(timezone.utc),
        )
        self._notices.append(notice)
        logger.warning(
            "%s: %s",
            host_name,
            message,
            extra={"context": {"host": host_name, "kind": kind}},
        )

    async def verbose(self, message: str) -> None:
        """Log a progress message at DEBUG."""
        logger.debug(message)

    @property
    def notices(self) -> list[HostNotice]:
        """Warnings recorded so far, oldest first."""
        return self._notices.copy()

    def clear(self) -> None:
        """Forget recorded warnings."""
        self._notices.clear()
