"""
Data Quality Checks

Counts the input problems that reports resolve silently: overlapping freight
rate bands (one order, several rates) and orders dropped by inner joins.
Reports are never changed by these checks; scripts print them as notes.
"""

import polars as pl

from .tables import Tables


BAND_KEY = ["Carrier", "orig_port_cd", "dest_port_cd"]


def overlapping_freight_bands(freight_rates: pl.DataFrame) -> pl.DataFrame:
    """
    Find pairs of rate rows on the same carrier lane with overlapping bands.

    Bands are inclusive at both ends, so [100, 200] and [200, 300] overlap.

    Returns:
        DataFrame with columns Carrier, orig_port_cd, dest_port_cd,
        minm_wgh_qty, max_wgh_qty, minm_wgh_qty_other, max_wgh_qty_other
    """
    rates = freight_rates.select(BAND_KEY + ["minm_wgh_qty", "max_wgh_qty"]).with_row_index("_id")

    return (
        rates
        .join(rates, on=BAND_KEY, how="inner", suffix="_other")
        .filter(
            (pl.col("_id") < pl.col("_id_other")) &
            (pl.col("minm_wgh_qty") <= pl.col("max_wgh_qty_other")) &
            (pl.col("minm_wgh_qty_other") <= pl.col("max_wgh_qty"))
        )
        .sort(["_id", "_id_other"])
        .drop(["_id", "_id_other"])
    )


def unmatched_orders(tables: Tables) -> dict[str, int]:
    """
    Count orders without a reference match, per reason.

    Returns:
        Dict of reason -> number of orders excluded for that reason
    """
    orders = tables.orders
    rates = tables.freight_rates

    lane = orders.join(
        rates.select(["orig_port_cd", "dest_port_cd"]).unique(),
        left_on=["Origin_Port", "Destination_Port"],
        right_on=["orig_port_cd", "dest_port_cd"],
        how="anti",
    )

    band = orders.join(
        rates.select(BAND_KEY + ["minm_wgh_qty", "max_wgh_qty"]),
        left_on=["Carrier", "Origin_Port", "Destination_Port"],
        right_on=BAND_KEY,
        how="inner",
    ).filter(
        pl.col("Weight").is_between(pl.col("minm_wgh_qty"), pl.col("max_wgh_qty"), closed="both")
    )
    no_band = orders.join(band.select("Order_ID").unique(), on="Order_ID", how="anti")

    return {
        "no freight rate for port lane": len(lane),
        "no freight rate band for carrier, lane and weight": len(no_band),
        "no plant port mapping": _anti_count(
            orders, tables.plant_ports.filter(pl.col("Port").is_not_null()), "Plant_Code", "Plant_Code"
        ),
        "no warehouse capacity": _anti_count(orders, tables.warehouse_capacity, "Plant_Code", "Plant_ID"),
        "no warehouse cost": _anti_count(orders, tables.warehouse_costs, "Plant_Code", "WH"),
    }


def _anti_count(orders: pl.DataFrame, reference: pl.DataFrame, left_on: str, right_on: str) -> int:
    """Number of orders with no row in `reference` on the given key."""
    return len(orders.join(reference.select(right_on), left_on=left_on, right_on=right_on, how="anti"))
