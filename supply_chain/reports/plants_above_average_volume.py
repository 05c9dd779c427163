"""
Plants Exceeding Average Order Volume

Plants whose order count is strictly above the mean order count per plant.
"""

from typing import NamedTuple

import polars as pl

from .base import Report, order_count, sort_descending


class PlantOrders(NamedTuple):
    Plant_Code: str
    Total_Orders: int


class PlantsAboveAverageVolume(Report):
    """
    Plants with more orders than the average plant.

    The average is a float mean over plants that have at least one order.
    """

    name = "plants_above_average_volume"
    title = "Plants Exceeding Historical Average Order Volume"
    row_type = PlantOrders

    @classmethod
    def compute(cls, tables) -> pl.DataFrame:
        counts = tables.orders.group_by("Plant_Code").agg(order_count("Total_Orders"))

        df = counts.filter(
            pl.col("Total_Orders") > pl.col("Total_Orders").cast(pl.Float64).mean()
        )
        return sort_descending(df, "Total_Orders", ties=["Plant_Code"])
