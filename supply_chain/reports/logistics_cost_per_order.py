"""
Logistics Cost per Order

Freight cost from the carrier's rate band plus warehouse storage cost.

JOINS
-----
    1. FreightRates on (Carrier, origin port, destination port), keeping rate
       rows whose band [minm_wgh_qty, max_wgh_qty] contains the order weight
       (both ends inclusive)
    2. WarehouseCosts on Plant_Code = WH

Orders without a matching band or warehouse are left out. Overlapping bands
or duplicate warehouse rows produce one output row per match.

COSTS
-----
    Freight_Cost         = minimum_cost if Weight < minm_wgh_qty
                           else round(Weight * rate, 2)
    Warehouse_Cost       = round(Unit_Quantity * Cost_unit, 2)
    Total_Logistics_Cost = Freight_Cost + Warehouse_Cost

The minimum_cost branch cannot fire once the band join has run; it is kept
so that a looser join would still floor light orders at the minimum charge.
"""

from typing import NamedTuple

import polars as pl

from .base import Report, rounded


class OrderLogisticsCost(NamedTuple):
    Order_ID: str
    Freight_Cost: float
    Warehouse_Cost: float
    Total_Logistics_Cost: float


class LogisticsCostPerOrder(Report):
    """Freight, warehouse and total logistics cost per order."""

    name = "logistics_cost_per_order"
    title = "Logistics Cost per Order"
    row_type = OrderLogisticsCost

    @classmethod
    def compute(cls, tables) -> pl.DataFrame:
        df = _match_rate_band(tables.orders, tables.freight_rates)
        df = _match_warehouse(df, tables.warehouse_costs)
        df = _calculate_costs(df)

        # Restore input order: order, then rate row, then warehouse row
        return df.sort(["_row_id", "_rate_id", "_wh_id"]).drop(["_row_id", "_rate_id", "_wh_id"])


def _match_rate_band(orders: pl.DataFrame, freight_rates: pl.DataFrame) -> pl.DataFrame:
    """Join each order to the rate rows whose weight band contains it."""
    rates = freight_rates.with_row_index("_rate_id")

    return (
        orders
        .with_row_index("_row_id")
        .join(
            rates,
            left_on=["Carrier", "Origin_Port", "Destination_Port"],
            right_on=["Carrier", "orig_port_cd", "dest_port_cd"],
            how="inner",
        )
        .filter(
            pl.col("Weight").is_between(
                pl.col("minm_wgh_qty"), pl.col("max_wgh_qty"), closed="both"
            )
        )
    )


def _match_warehouse(df: pl.DataFrame, warehouse_costs: pl.DataFrame) -> pl.DataFrame:
    """Join the storage cost of the order's plant."""
    return df.join(
        warehouse_costs.with_row_index("_wh_id"),
        left_on="Plant_Code",
        right_on="WH",
        how="inner",
    )


def _calculate_costs(df: pl.DataFrame) -> pl.DataFrame:
    """Add freight, warehouse and total cost columns."""
    df = df.with_columns([
        pl.when(pl.col("Weight") < pl.col("minm_wgh_qty"))
        .then(pl.col("minimum_cost"))
        .otherwise(rounded(pl.col("Weight") * pl.col("rate")))
        .alias("Freight_Cost"),

        rounded(pl.col("Unit_Quantity") * pl.col("Cost_unit")).alias("Warehouse_Cost"),
    ])

    return df.with_columns(
        (pl.col("Freight_Cost") + pl.col("Warehouse_Cost")).alias("Total_Logistics_Cost")
    )
