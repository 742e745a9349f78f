"""Remote event-log access module."""

from .client import IEventLogClient
from .errors import ErrorKind, EventQueryError, classify_error
from .powershell import PowerShellEventLogClient

__all__ = [
    "ErrorKind",
    "EventQueryError",
    "IEventLogClient",
    "PowerShellEventLogClient",
    "classify_error",
]
