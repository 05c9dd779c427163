"""
Orders Exceeding Weight Limits

Orders heavier than the maximum weight of a freight rate on their lane.

The lane join matches on origin and destination port only (not carrier),
so one order can match several rate rows with different max_wgh_qty. Each
matching rate row produces its own output row; only exact duplicate rows
are collapsed.
"""

from typing import NamedTuple

import polars as pl

from .base import Report
from ..data.reference.reporting import STATUS_EXCEEDED, STATUS_WITHIN_LIMIT


class WeightViolation(NamedTuple):
    Order_ID: str
    Origin_Port: str
    Destination_Port: str
    Weight: float
    max_wgh_qty: float
    Shipping_Status: str


def shipping_status() -> pl.Expr:
    """EXCEEDED when Weight is strictly above max_wgh_qty, else WITHIN LIMIT."""
    return (
        pl.when(pl.col("Weight") > pl.col("max_wgh_qty"))
        .then(pl.lit(STATUS_EXCEEDED))
        .otherwise(pl.lit(STATUS_WITHIN_LIMIT))
        .alias("Shipping_Status")
    )


class WeightLimitViolations(Report):
    """Distinct (order, rate limit) pairs where the order exceeds the limit."""

    name = "weight_limit_violations"
    title = "Orders Exceeding Weight Limits"
    row_type = WeightViolation

    @classmethod
    def compute(cls, tables) -> pl.DataFrame:
        orders = tables.orders.select(["Order_ID", "Origin_Port", "Destination_Port", "Weight"])
        limits = tables.freight_rates.select(["orig_port_cd", "dest_port_cd", "max_wgh_qty"])

        return (
            orders
            .join(
                limits,
                left_on=["Origin_Port", "Destination_Port"],
                right_on=["orig_port_cd", "dest_port_cd"],
                how="inner",
            )
            .with_columns(shipping_status())
            .filter(pl.col("Shipping_Status") == STATUS_EXCEEDED)
            .unique(maintain_order=True)
            .sort(
                ["Weight", "Order_ID", "max_wgh_qty"],
                descending=[True, False, False],
            )
        )
