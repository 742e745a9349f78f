"""Host query module."""

from .host_query import HostEventQuery, IHostEventQuery, project_legacy_entry
from .selector import is_candidate_channel, select_log_channels

__all__ = [
    "HostEventQuery",
    "IHostEventQuery",
    "is_candidate_channel",
    "project_legacy_entry",
    "select_log_channels",
]
