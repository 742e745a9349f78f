"""Aggregation module."""

from .aggregator import IReportAggregator, ReportAggregator, fold_outcomes

__all__ = ["IReportAggregator", "ReportAggregator", "fold_outcomes"]
