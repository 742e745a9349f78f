"""Log channel selection for the primary query path."""

from ..models import LogChannel

ADMINISTRATIVE = "administrative"
SYSTEM_ISOLATION = "system"


def is_candidate_channel(channel: LogChannel) -> bool:
    """Administrative, system-isolated and holding at least one record."""
    return (
        channel.log_type.lower() == ADMINISTRATIVE
        and channel.log_isolation.lower() == SYSTEM_ISOLATION
        and (channel.record_count or 0) > 0
    )


def select_log_channels(channels: list[LogChannel]) -> list[LogChannel]:
    """Filter enumerated channels down to the ones worth querying."""
    return [channel for channel in channels if is_candidate_channel(channel)]
