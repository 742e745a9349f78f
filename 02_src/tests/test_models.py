"""Tests for data models."""

import dataclasses
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from fleet_events.models import (
    Credential,
    EventRecord,
    HostOutcome,
    OutcomeKind,
    QueryPath,
    QueryRequest,
)


def _record(event_id: int = 10) -> EventRecord:
    return EventRecord(
        host_name="SRV01",
        time_created=datetime(2026, 10, 18, 11, 50, tzinfo=timezone.utc),
        provider_name="Disk",
        log_name="System",
        event_id=event_id,
        level_display_name="Error",
        message="The device has a bad block.",
    )


class TestEventRecord:
    """Tests for EventRecord model."""

    def test_create_record(self):
        """Test creating an EventRecord."""
        record = _record()
        assert record.host_name == "SRV01"
        assert record.event_id == 10
        assert record.log_name == "System"

    def test_record_is_immutable(self):
        """Test that EventRecord cannot be modified."""
        record = _record()
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.event_id = 11


class TestHostOutcome:
    """Tests for HostOutcome tagged union."""

    def test_from_events_non_empty(self):
        """Test that events produce an EVENTS outcome."""
        outcome = HostOutcome.from_events("SRV01", [_record()], QueryPath.PRIMARY)
        assert outcome.kind is OutcomeKind.EVENTS
        assert outcome.events == (_record(),)
        assert outcome.path is QueryPath.PRIMARY

    def test_from_events_empty(self):
        """Test that no events produce an EMPTY outcome."""
        outcome = HostOutcome.from_events("SRV01", [], QueryPath.LEGACY)
        assert outcome.kind is OutcomeKind.EMPTY
        assert outcome.events == ()
        assert outcome.path is QueryPath.LEGACY

    def test_events_kind_requires_events(self):
        """Test that EVENTS without records is rejected."""
        with pytest.raises(ValueError):
            HostOutcome("SRV01", OutcomeKind.EVENTS)

    def test_failure_kind_rejects_events(self):
        """Test that a failure outcome cannot carry records."""
        with pytest.raises(ValueError):
            HostOutcome("SRV01", OutcomeKind.UNREACHABLE, events=(_record(),))

    def test_empty_and_unreachable_are_distinct(self):
        """Test that EMPTY and UNREACHABLE are distinguishable."""
        empty = HostOutcome.empty("SRV01")
        unreachable = HostOutcome.unreachable("SRV01", "RPC server is unavailable")
        assert empty != unreachable
        assert not empty.is_failure
        assert unreachable.is_failure
        assert unreachable.detail == "RPC server is unavailable"

    def test_unknown_keeps_path(self):
        """Test that UNKNOWN records which path failed."""
        outcome = HostOutcome.unknown("SRV03", "access denied", QueryPath.LEGACY)
        assert outcome.kind is OutcomeKind.UNKNOWN
        assert outcome.path is QueryPath.LEGACY


class TestQueryRequest:
    """Tests for QueryRequest validation."""

    def test_defaults(self):
        """Test default lookback and credential."""
        request = QueryRequest(computer_names=["SRV01"])
        assert request.hours_back == 1
        assert request.credential is None

    def test_strips_names(self):
        """Test that host names are stripped."""
        request = QueryRequest(computer_names=[" SRV01 ", "SRV02"])
        assert request.computer_names == ["SRV01", "SRV02"]

    def test_empty_host_list_rejected(self):
        """Test that an empty host list fails fast."""
        with pytest.raises(ValidationError):
            QueryRequest(computer_names=[])

    def test_duplicate_hosts_dropped(self):
        """Test that repeated names keep only the first, ignoring case."""
        request = QueryRequest(computer_names=["SRV01", "srv02", " SRV01", "SRV02", "srv01"])
        assert request.computer_names == ["SRV01", "srv02"]

    def test_blank_host_rejected(self):
        """Test that a blank host name fails fast."""
        with pytest.raises(ValidationError):
            QueryRequest(computer_names=["SRV01", "  "])

    @pytest.mark.parametrize("hours_back", [0, -1, 1.5, "2", True])
    def test_malformed_lookback_rejected(self, hours_back):
        """Test that a non-positive or non-integer lookback fails fast."""
        with pytest.raises(ValidationError):
            QueryRequest(computer_names=["SRV01"], hours_back=hours_back)

    def test_credential_secret_hidden(self):
        """Test that the password does not leak through repr."""
        credential = Credential(username="CORP\\ops", password="hunter2")
        assert "hunter2" not in repr(credential)
        assert credential.password.get_secret_value() == "hunter2"
