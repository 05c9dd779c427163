"""
Warehouse Utilization

Units ordered per plant per calendar day against the plant's daily capacity.
"""

from datetime import date
from typing import NamedTuple

import polars as pl

from .base import Report
from ..data.reference.reporting import STATUS_OVER_CAPACITY, STATUS_UNDER_CAPACITY


class PlantDayUtilization(NamedTuple):
    Plant_Code: str
    OrderDay: date
    TotalUnits: int
    Daily_Capacity: int
    CapacityStatus: str


class WarehouseUtilization(Report):
    """
    Daily units per plant with an over/under capacity flag.

    Orders from plants without a WarehouseCapacity row are left out.
    A plant-day exactly at capacity is "Under Capacity".
    """

    name = "warehouse_utilization"
    title = "Warehouse Utilisation Analysis"
    row_type = PlantDayUtilization

    @classmethod
    def compute(cls, tables) -> pl.DataFrame:
        group_cols = ["Plant_Code", "OrderDay", "Daily_Capacity"]

        return (
            tables.orders
            .with_columns(pl.col("Order_Date").cast(pl.Date).alias("OrderDay"))
            .join(
                tables.warehouse_capacity,
                left_on="Plant_Code",
                right_on="Plant_ID",
                how="inner",
            )
            .group_by(group_cols)
            .agg(pl.col("Unit_Quantity").sum().alias("TotalUnits"))
            .with_columns(
                pl.when(pl.col("TotalUnits") > pl.col("Daily_Capacity"))
                .then(pl.lit(STATUS_OVER_CAPACITY))
                .otherwise(pl.lit(STATUS_UNDER_CAPACITY))
                .alias("CapacityStatus")
            )
            .sort(group_cols)
        )
