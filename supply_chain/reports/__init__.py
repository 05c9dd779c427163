"""
Reports Package

Exports all report classes, the ordered registry and the runner.

Every report is a pure function of the loaded Tables: no report reads
another report's output, and none mutates the tables.
"""

import polars as pl

from .base import Report
from .orders_and_weight_by_plant import OrdersAndWeightByPlant
from .orders_by_plant_and_valid_ports import OrdersByPlantAndValidPorts
from .top_products_by_units import TopProductsByUnits
from .top_products_by_order_count import TopProductsByOrderCount
from .plants_above_average_volume import PlantsAboveAverageVolume
from .top_plants_by_weight import TopPlantsByWeight
from .weight_limit_violations import WeightLimitViolations
from .warehouse_utilization import WarehouseUtilization
from .on_time_rate_by_carrier import OnTimeRateByCarrier
from .logistics_cost_per_order import LogisticsCostPerOrder
from ..pipeline.tables import Tables


# All reports, in presentation order
ALL = [
    OrdersAndWeightByPlant,
    OrdersByPlantAndValidPorts,
    TopProductsByUnits,
    TopProductsByOrderCount,
    PlantsAboveAverageVolume,
    TopPlantsByWeight,
    WeightLimitViolations,
    WarehouseUtilization,
    OnTimeRateByCarrier,
    LogisticsCostPerOrder,
]


# =============================================================================
# HELPERS
# =============================================================================

def get_report(name: str) -> type[Report]:
    """
    Look up a report class by name.

    Raises:
        KeyError: If no report has this name
    """
    for report in ALL:
        if report.name == name:
            return report
    raise KeyError(f"Unknown report '{name}'. Valid: {[r.name for r in ALL]}")


def run_reports(
    tables: Tables,
    names: list[str] | None = None,
) -> dict[str, pl.DataFrame]:
    """
    Run reports against the loaded tables.

    Args:
        tables: Loaded input tables
        names: Report names to run (default: all, in ALL order)

    Returns:
        Dict of report name -> result DataFrame, in run order
    """
    reports = ALL if names is None else [get_report(n) for n in names]
    return {report.name: report.run(tables) for report in reports}


# =============================================================================
# VALIDATION
# =============================================================================

def validate_reports() -> None:
    """
    Validate report registry integrity.

    Raises ValueError if any configuration issues are found.
    Called at import time to fail fast on configuration errors.
    """
    errors = []
    seen = set()

    for r in ALL:
        if not getattr(r, "name", None):
            errors.append(f"{r.__name__}: missing name")
        elif r.name in seen:
            errors.append(f"{r.name}: duplicate report name")
        seen.add(getattr(r, "name", None))

        row_type = getattr(r, "row_type", None)
        if row_type is None or not hasattr(row_type, "_fields"):
            errors.append(f"{r.__name__}: row_type must be a NamedTuple")

    if errors:
        raise ValueError("Report configuration errors:\n  " + "\n  ".join(errors))


# Run validation at import time
validate_reports()

__all__ = [
    # Base
    "Report",
    # Report classes
    "OrdersAndWeightByPlant",
    "OrdersByPlantAndValidPorts",
    "TopProductsByUnits",
    "TopProductsByOrderCount",
    "PlantsAboveAverageVolume",
    "TopPlantsByWeight",
    "WeightLimitViolations",
    "WarehouseUtilization",
    "OnTimeRateByCarrier",
    "LogisticsCostPerOrder",
    # Registry
    "ALL",
    "get_report",
    "run_reports",
]
