"""Supply chain reference configuration: table schemas and reporting constants."""

from .tables import (
    TableSchema,
    ORDERS,
    FREIGHT_RATES,
    PLANT_PORTS,
    PRODUCTS_PER_PLANT,
    WAREHOUSE_CAPACITY,
    WAREHOUSE_COSTS,
    VMI_CUSTOMERS,
    ALL_TABLES,
)

__all__ = [
    "TableSchema",
    "ORDERS",
    "FREIGHT_RATES",
    "PLANT_PORTS",
    "PRODUCTS_PER_PLANT",
    "WAREHOUSE_CAPACITY",
    "WAREHOUSE_COSTS",
    "VMI_CUSTOMERS",
    "ALL_TABLES",
]
