"""
Top Plants by Total Weight Shipped

Plants ranked by total weight with competition ranking (1, 1, 3, ...).
"""

from typing import NamedTuple

import polars as pl

from .base import Report, order_count, rounded, sort_descending
from ..data.reference.reporting import TOP_N


class PlantWeight(NamedTuple):
    Plant_Code: str
    Total_Weight: float
    Order_Count: int
    Weight_Rank: int


class TopPlantsByWeight(Report):
    """
    Top TOP_N plants by rounded total weight.

    Ranks are assigned over all plants before the cut, so equal weights
    share a rank and the next distinct weight skips ahead.
    """

    name = "top_plants_by_weight"
    title = f"Top {TOP_N} Plants by Total Weight Shipped"
    row_type = PlantWeight

    @classmethod
    def compute(cls, tables) -> pl.DataFrame:
        df = (
            tables.orders
            .group_by("Plant_Code")
            .agg(
                rounded(pl.col("Weight").sum()).alias("Total_Weight"),
                order_count("Order_Count"),
            )
            .with_columns(
                pl.col("Total_Weight")
                .rank(method="min", descending=True)
                .cast(pl.Int64)
                .alias("Weight_Rank")
            )
        )
        return sort_descending(df, "Total_Weight", ties=["Plant_Code"]).head(TOP_N)
