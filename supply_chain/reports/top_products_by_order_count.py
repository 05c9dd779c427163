"""
Top Products by Order Count

Most ordered products by number of orders placed.
"""

from typing import NamedTuple

import polars as pl

from .base import Report, order_count, sort_descending
from ..data.reference.reporting import TOP_N


class ProductOrders(NamedTuple):
    Product_ID: str
    OrderCount: int


class TopProductsByOrderCount(Report):
    """Top TOP_N products by order count."""

    name = "top_products_by_order_count"
    title = f"Top {TOP_N} Most Ordered Products by Number of Orders"
    row_type = ProductOrders

    @classmethod
    def compute(cls, tables) -> pl.DataFrame:
        df = tables.orders.group_by("Product_ID").agg(order_count("OrderCount"))
        return sort_descending(df, "OrderCount", ties=["Product_ID"]).head(TOP_N)
