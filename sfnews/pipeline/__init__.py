"""Aggregation pipeline."""

from .orchestrator import AggregationOptions, AggregationOrchestrator, print_aggregation_summary

__all__ = [
    "AggregationOptions",
    "AggregationOrchestrator",
    "print_aggregation_summary",
]
