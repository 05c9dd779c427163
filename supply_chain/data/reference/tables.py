"""
Table Schemas

Canonical columns and dtypes for the seven input tables.

Column names follow the source database (OrderList, FreightRates, ...).
Identifiers are kept as strings so that numeric-looking IDs read from CSV
and integer IDs from in-memory frames join against each other.
"""

from typing import NamedTuple

import polars as pl


class TableSchema(NamedTuple):
    """Schema of one input table."""
    name: str                       # Attribute on Tables
    source: str                     # Source table name (database / CSV stem)
    columns: dict[str, type[pl.DataType]]
    non_negative: tuple[str, ...] = ()
    key: str | None = None          # Non-null, unique identifier column


# =============================================================================
# SCHEMAS
# =============================================================================

ORDERS = TableSchema(
    name="orders",
    source="OrderList",
    columns={
        "Order_ID": pl.Utf8,
        "Order_Date": pl.Datetime,
        "Origin_Port": pl.Utf8,
        "Carrier": pl.Utf8,
        "Plant_Code": pl.Utf8,
        "Product_ID": pl.Utf8,
        "Destination_Port": pl.Utf8,
        "Unit_Quantity": pl.Int64,
        "Weight": pl.Float64,
        "Ship_Late_Day_count": pl.Int64,
    },
    non_negative=("Unit_Quantity", "Weight", "Ship_Late_Day_count"),
    key="Order_ID",
)

FREIGHT_RATES = TableSchema(
    name="freight_rates",
    source="FreightRates",
    columns={
        "Carrier": pl.Utf8,
        "orig_port_cd": pl.Utf8,
        "dest_port_cd": pl.Utf8,
        "minm_wgh_qty": pl.Float64,
        "max_wgh_qty": pl.Float64,
        "rate": pl.Float64,
        "minimum_cost": pl.Float64,
    },
    non_negative=("minm_wgh_qty", "max_wgh_qty", "rate", "minimum_cost"),
)

PLANT_PORTS = TableSchema(
    name="plant_ports",
    source="PlantPorts",
    columns={
        "Plant_Code": pl.Utf8,
        "Port": pl.Utf8,
    },
)

PRODUCTS_PER_PLANT = TableSchema(
    name="products_per_plant",
    source="ProductsPerPlant",
    columns={
        "Plant_Code": pl.Utf8,
        "Product_ID": pl.Utf8,
    },
)

WAREHOUSE_CAPACITY = TableSchema(
    name="warehouse_capacity",
    source="WarehouseCapacity",
    columns={
        "Plant_ID": pl.Utf8,
        "Daily_Capacity": pl.Int64,
    },
    non_negative=("Daily_Capacity",),
)

WAREHOUSE_COSTS = TableSchema(
    name="warehouse_costs",
    source="WarehouseCosts",
    columns={
        "WH": pl.Utf8,
        "Cost_unit": pl.Float64,
    },
    non_negative=("Cost_unit",),
)

VMI_CUSTOMERS = TableSchema(
    name="vmi_customers",
    source="VmiCustomers",
    columns={
        "Plant_Code": pl.Utf8,
        "Customers": pl.Utf8,
    },
)


# Load order
ALL_TABLES = [
    ORDERS,
    FREIGHT_RATES,
    PLANT_PORTS,
    PRODUCTS_PER_PLANT,
    WAREHOUSE_CAPACITY,
    WAREHOUSE_COSTS,
    VMI_CUSTOMERS,
]


# =============================================================================
# PARSING
# =============================================================================

# Order_Date formats tried in order; first match wins
DATETIME_FORMATS = [
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M:%S%.f",
    "%Y-%m-%dT%H:%M:%S",
    "%m/%d/%Y %H:%M",
]

DATE_FORMATS = [
    "%Y-%m-%d",
    "%m/%d/%Y",
]

# Offending values quoted in load errors
MAX_REPORTED_ROWS = 5
