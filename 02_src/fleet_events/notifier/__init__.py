"""Notifier module."""

from .notifier import INotifier, Notifier

__all__ = ["INotifier", "Notifier"]
