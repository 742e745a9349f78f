"""Tests for error classification."""

import pytest

from fleet_events.remote import ErrorKind, EventQueryError, classify_error


class TestClassifyErrorCodes:
    """Tests for classification by structured codes."""

    def test_no_matching_events_error_id(self):
        """Test the Get-WinEvent no-match error id."""
        error_id = "NoMatchingEventsFound,Microsoft.PowerShell.Commands.GetWinEventCommand"
        assert classify_error("anything", error_id=error_id) is ErrorKind.NO_EVENTS

    @pytest.mark.parametrize("code", [-2147023174, 0x800706BA, 1722])
    def test_rpc_unavailable_codes(self, code):
        """Test RPC server unavailable codes."""
        assert classify_error("", hresult=code) is ErrorKind.RPC_UNAVAILABLE

    @pytest.mark.parametrize("code", [-2147023143, 0x800706D9, 1753])
    def test_endpoint_mapper_codes(self, code):
        """Test endpoint-mapper codes."""
        assert classify_error("", hresult=code) is ErrorKind.UNSUPPORTED_ENDPOINT

    def test_code_beats_text(self):
        """Test that a structured code wins over the message."""
        kind = classify_error("The RPC server is unavailable", hresult=1753)
        assert kind is ErrorKind.UNSUPPORTED_ENDPOINT


class TestClassifyErrorText:
    """Tests for classification by message text."""

    def test_rpc_message(self):
        """Test the RPC unavailable message."""
        assert classify_error("The RPC server is unavailable.") is ErrorKind.RPC_UNAVAILABLE

    def test_endpoint_message(self):
        """Test the endpoint-mapper message, which also names RPC."""
        message = (
            "There are no more endpoints available from the endpoint mapper. "
            "(RPC endpoint mapper)"
        )
        assert classify_error(message) is ErrorKind.UNSUPPORTED_ENDPOINT

    def test_no_events_message(self):
        """Test the no-match message."""
        message = "No events were found that match the specified selection criteria."
        assert classify_error(message) is ErrorKind.NO_EVENTS

    @pytest.mark.parametrize("message", ["Access is denied.", "", None])
    def test_other_messages_unknown(self, message):
        """Test that anything else is UNKNOWN."""
        assert classify_error(message) is ErrorKind.UNKNOWN

    @pytest.mark.parametrize(
        "message",
        [
            "Access is denied connecting to host hrpc-db01.",
            "The rpcss service on SRV07 is disabled.",
        ],
    )
    def test_incidental_rpc_letters_unknown(self, message):
        """Test that 'rpc' inside unrelated text does not mean unreachable."""
        assert classify_error(message) is ErrorKind.UNKNOWN

    def test_remote_procedure_call_failed(self):
        """Test the spelled-out RPC failure message."""
        assert classify_error("The remote procedure call failed.") is ErrorKind.RPC_UNAVAILABLE


class TestEventQueryError:
    """Tests for EventQueryError."""

    def test_carries_kind_and_message(self):
        """Test that the error keeps kind and message."""
        error = EventQueryError(ErrorKind.RPC_UNAVAILABLE, "The RPC server is unavailable.")
        assert error.kind is ErrorKind.RPC_UNAVAILABLE
        assert str(error) == "The RPC server is unavailable."
        assert "rpc_unavailable" in repr(error)
