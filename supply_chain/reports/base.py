"""
Report Base Class

Shared base class for all reports, plus expression helpers used by several
of them.
"""

from abc import ABC, abstractmethod

import polars as pl

from ..pipeline.tables import Tables
from ..data.reference.reporting import DECIMALS


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def order_count(alias: str) -> pl.Expr:
    """Row count of a group as Int64 (COUNT(*))."""
    return pl.len().cast(pl.Int64).alias(alias)


def rounded(expr: pl.Expr) -> pl.Expr:
    """Round to the reporting precision."""
    return expr.round(DECIMALS)


def sort_descending(df: pl.DataFrame, by: str, ties: list[str]) -> pl.DataFrame:
    """
    Sort descending by one column, ties broken ascending by `ties`.

    Keeps report output identical across runs on the same tables.
    """
    return df.sort(
        [by] + ties,
        descending=[True] + [False] * len(ties),
        nulls_last=True,
    )


# =============================================================================
# BASE CLASS
# =============================================================================

class Report(ABC):
    """
    Base class for all reports.

    Attributes:
        name     - Snake-case key (e.g., "top_plants_by_weight")
        title    - Human readable title used by the emitter
        row_type - NamedTuple fixing output columns and their types
    """

    name: str
    title: str
    row_type: type

    @classmethod
    def columns(cls) -> list[str]:
        """Output columns in order."""
        return list(cls.row_type._fields)

    @classmethod
    @abstractmethod
    def compute(cls, tables: Tables) -> pl.DataFrame:
        """Compute the report as a DataFrame with exactly `columns()`."""

    @classmethod
    def run(cls, tables: Tables) -> pl.DataFrame:
        """Compute the report and fix its column order."""
        return cls.compute(tables).select(cls.columns())

    @classmethod
    def rows(cls, tables: Tables) -> list:
        """Compute the report as a list of typed rows."""
        return [cls.row_type(**row) for row in cls.run(tables).iter_rows(named=True)]
