"""Consolidation of a host's raw event stream."""

from typing import Iterable

from ..models import EventRecord


def consolidate(events: Iterable[EventRecord]) -> list[EventRecord]:
    """
    Keep the most recent record per event id.

    On equal timestamps the first record seen wins. Output follows the order
    in which each event id first appears, so identical input always yields
    identical output.
    """
    latest: dict[int, EventRecord] = {}
    for event in events:
        kept = latest.get(event.event_id)
        if kept is None or event.time_created > kept.time_created:
            latest[event.event_id] = event
    return list(latest.values())
