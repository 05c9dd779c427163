"""
Total Orders and Weight by Plant

Order volume, units and weight shipped per plant.
"""

from typing import NamedTuple

import polars as pl

from .base import Report, order_count, rounded, sort_descending


class PlantVolume(NamedTuple):
    Plant_Code: str
    Total_Orders: int
    Total_Units: int
    Total_Weight: float


class OrdersAndWeightByPlant(Report):
    """
    Orders, units and weight per plant.

    Total_Weight is rounded to 2 decimals. Sorted by order count
    descending, ties by Plant_Code.
    """

    name = "orders_and_weight_by_plant"
    title = "Total Orders and Weight by Plant"
    row_type = PlantVolume

    @classmethod
    def compute(cls, tables) -> pl.DataFrame:
        df = (
            tables.orders
            .group_by("Plant_Code")
            .agg(
                order_count("Total_Orders"),
                pl.col("Unit_Quantity").sum().alias("Total_Units"),
                rounded(pl.col("Weight").sum()).alias("Total_Weight"),
            )
        )
        return sort_descending(df, "Total_Orders", ties=["Plant_Code"])
