"""Error kinds raised by event-log clients and the adapter that derives them."""

from enum import Enum


class ErrorKind(str, Enum):
    """Classified failure of a remote event-log call."""

    NO_EVENTS = "no_events"
    RPC_UNAVAILABLE = "rpc_unavailable"
    UNSUPPORTED_ENDPOINT = "unsupported_endpoint"
    UNKNOWN = "unknown"


class EventQueryError(Exception):
    """A remote event-log call failed."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"EventQueryError({self.kind.value!r}, {self.message!r})"


# HRESULTs wrapping Win32 RPC errors, as signed 32-bit ints and raw Win32 codes
_RPC_UNAVAILABLE_CODES = {-2147023174, 0x800706BA, 1722}
_UNSUPPORTED_ENDPOINT_CODES = {-2147023143, 0x800706D9, 1753}

_NO_EVENTS_ERROR_ID = "NoMatchingEventsFound"

_NO_EVENTS_TEXT = ("no events were found",)
_RPC_TEXT = (
    "rpc server is unavailable",
    "rpc server is too busy",
    "remote procedure call failed",
)
_UNSUPPORTED_TEXT = (
    "no more endpoints available from the endpoint mapper",
    "endpoint mapper",
)


def classify_error(
    message: str | None,
    hresult: int | None = None,
    error_id: str | None = None,
) -> ErrorKind:
    """
    Map a platform error to an ErrorKind.

    Structured codes win over message text; the text checks only exist
    because some hosts report nothing but a localized message.

    Args:
        message: Free-form error message.
        hresult: HRESULT or Win32 error code, if the platform exposed one.
        error_id: Fully qualified PowerShell error id, if any.

    Returns:
        The classified ErrorKind.
    """
    if error_id and error_id.split(",")[0] == _NO_EVENTS_ERROR_ID:
        return ErrorKind.NO_EVENTS
    if hresult is not None:
        if hresult in _RPC_UNAVAILABLE_CODES:
            return ErrorKind.RPC_UNAVAILABLE
        if hresult in _UNSUPPORTED_ENDPOINT_CODES:
            return ErrorKind.UNSUPPORTED_ENDPOINT

    text = (message or "").lower()
    if any(marker in text for marker in _NO_EVENTS_TEXT):
        return ErrorKind.NO_EVENTS
    # Endpoint-mapper messages also mention RPC, so check them first
    if any(marker in text for marker in _UNSUPPORTED_TEXT):
        return ErrorKind.UNSUPPORTED_ENDPOINT
    if any(marker in text for marker in _RPC_TEXT):
        return ErrorKind.RPC_UNAVAILABLE
    return ErrorKind.UNKNOWN
