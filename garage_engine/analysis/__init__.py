"""Tabular analysis helpers built on pandas."""

from garage_engine.analysis.breakdown import (
    build_breakdown_frame,
    catalog_frame,
    rank_by_value,
)

__all__ = ["build_breakdown_frame", "catalog_frame", "rank_by_value"]
