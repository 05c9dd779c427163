"""
Top Products by Units

Most ordered products by total unit quantity, per plant.
"""

from typing import NamedTuple

import polars as pl

from .base import Report, sort_descending
from ..data.reference.reporting import TOP_N


class ProductUnits(NamedTuple):
    Product_ID: str
    Plant_Code: str
    Total_Units: int


class TopProductsByUnits(Report):
    """Top TOP_N (product, plant) pairs by units ordered."""

    name = "top_products_by_units"
    title = f"Top {TOP_N} Most Ordered Products by Unit"
    row_type = ProductUnits

    @classmethod
    def compute(cls, tables) -> pl.DataFrame:
        df = (
            tables.orders
            .group_by(["Product_ID", "Plant_Code"])
            .agg(pl.col("Unit_Quantity").sum().alias("Total_Units"))
        )
        return sort_descending(df, "Total_Units", ties=["Product_ID", "Plant_Code"]).head(TOP_N)
