"""Consolidation module."""

from .consolidator import consolidate

__all__ = ["consolidate"]
