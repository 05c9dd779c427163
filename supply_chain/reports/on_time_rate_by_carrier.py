"""
On-Time Shipping Percentage by Carrier

Share of each carrier's orders shipped with zero late days.
"""

from typing import NamedTuple

import polars as pl

from .base import Report, order_count, rounded, sort_descending
from ..data.reference.reporting import ON_TIME_LATE_DAYS


class CarrierOnTime(NamedTuple):
    Carrier: str
    Total_Orders: int
    OnTime_Orders: int
    OnTimeRate: float


class OnTimeRateByCarrier(Report):
    """
    On-time rate per carrier, as a percentage rounded to 2 decimals.

    A carrier with no orders reports 0.0 instead of dividing by zero.
    """

    name = "on_time_rate_by_carrier"
    title = "On-Time Shipping Percentage by Carrier"
    row_type = CarrierOnTime

    @classmethod
    def compute(cls, tables) -> pl.DataFrame:
        df = (
            tables.orders
            .group_by("Carrier")
            .agg(
                order_count("Total_Orders"),
                (pl.col("Ship_Late_Day_count") == ON_TIME_LATE_DAYS)
                .sum()
                .cast(pl.Int64)
                .alias("OnTime_Orders"),
            )
            .with_columns(
                pl.when(pl.col("Total_Orders") > 0)
                .then(rounded(pl.col("OnTime_Orders") * 100.0 / pl.col("Total_Orders")))
                .otherwise(pl.lit(0.0))
                .alias("OnTimeRate")
            )
        )
        return sort_descending(df, "OnTimeRate", ties=["Carrier"])
