"""
Orders by Plant and Valid Ports

Order counts per plant lane, paired with each port the plant is mapped to.

Only orders whose plant has at least one PlantPorts row are counted, and an
order is repeated once per mapped port. The source query is written as a
LEFT JOIN with a "port is not null" filter, which is an inner join; it is
written as one here.
"""

from typing import NamedTuple

import polars as pl

from .base import Report, order_count, sort_descending


class PlantPortLane(NamedTuple):
    Plant_Code: str
    Origin_Port: str
    Destination_Port: str
    Valid_Port: str
    Order_Count: int


class OrdersByPlantAndValidPorts(Report):
    """Order counts per (plant, destination, valid port, origin) group."""

    name = "orders_by_plant_and_valid_ports"
    title = "Orders by Plant and Valid Ports"
    row_type = PlantPortLane

    @classmethod
    def compute(cls, tables) -> pl.DataFrame:
        ports = tables.plant_ports.filter(pl.col("Port").is_not_null())

        df = (
            tables.orders
            .join(ports, on="Plant_Code", how="inner")
            .group_by(["Plant_Code", "Destination_Port", "Port", "Origin_Port"])
            .agg(order_count("Order_Count"))
            .rename({"Port": "Valid_Port"})
        )
        return sort_descending(
            df,
            "Order_Count",
            ties=["Plant_Code", "Origin_Port", "Destination_Port", "Valid_Port"],
        )
