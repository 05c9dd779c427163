"""
Unit Tests for Supply Chain Reports

Tests grouping, joins, derived columns and ordering of each report.

Run with: pytest supply_chain/tests/test_reports.py -v
"""

import pytest
import polars as pl
from datetime import date, datetime
from polars.testing import assert_frame_equal

from supply_chain.pipeline import Tables
from supply_chain.reports import (
    ALL,
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
    get_report,
    run_reports,
)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def orders():
    """Six orders across three plants, four carriers and three lanes."""
    return pl.DataFrame({
        "Order_ID": ["O1", "O2", "O3", "O4", "O5", "O6"],
        "Order_Date": [
            datetime(2013, 5, 26, 8, 0),
            datetime(2013, 5, 26, 15, 30),
            datetime(2013, 5, 27),
            datetime(2013, 5, 26),
            datetime(2013, 5, 26),
            datetime(2013, 5, 27),
        ],
        "Origin_Port": ["PO1", "PO1", "PO1", "PO4", "PO4", "PO5"],
        "Carrier": ["V44_3", "V44_3", "V444_0", "V444_0", "V444_0", "V444_6"],
        "Plant_Code": ["PL01", "PL01", "PL01", "PL02", "PL02", "PL03"],
        "Product_ID": ["P1", "P1", "P2", "P3", "P1", "P4"],
        "Destination_Port": ["PO2"] * 6,
        "Unit_Quantity": [10, 300, 20, 500, 40, 5],
        "Weight": [500.0, 120.0, 50.0, 800.0, 30.0, 7.5],
        "Ship_Late_Day_count": [0, 0, 2, 0, 1, 0],
    })


@pytest.fixture
def freight_rates():
    """Rate bands; lane PO1->PO2 is served by two carriers, PO5 has no rates."""
    return pl.DataFrame({
        "Carrier": ["V44_3", "V444_0", "V444_0", "V444_0"],
        "orig_port_cd": ["PO1", "PO1", "PO4", "PO4"],
        "dest_port_cd": ["PO2", "PO2", "PO2", "PO2"],
        "minm_wgh_qty": [100.0, 0.0, 0.0, 500.0],
        "max_wgh_qty": [1000.0, 99.99, 499.99, 1000.0],
        "rate": [0.5, 1.2, 0.9, 0.7],
        "minimum_cost": [50.0, 20.0, 30.0, 40.0],
    })


@pytest.fixture
def plant_ports():
    """PL01 ships from two ports; PL03 only has a row without a port."""
    return pl.DataFrame({
        "Plant_Code": ["PL01", "PL01", "PL02", "PL03"],
        "Port": ["PO1", "PO9", "PO4", None],
    })


@pytest.fixture
def warehouse_capacity():
    return pl.DataFrame({
        "Plant_ID": ["PL01", "PL02"],
        "Daily_Capacity": [310, 500],
    })


@pytest.fixture
def warehouse_costs():
    return pl.DataFrame({
        "WH": ["PL01", "PL02"],
        "Cost_unit": [2.0, 0.25],
    })


@pytest.fixture
def tables(orders, freight_rates, plant_ports, warehouse_capacity, warehouse_costs):
    return Tables.from_frames(
        orders,
        freight_rates=freight_rates,
        plant_ports=plant_ports,
        warehouse_capacity=warehouse_capacity,
        warehouse_costs=warehouse_costs,
    )


def make_orders(**columns) -> pl.DataFrame:
    """Build an orders frame, filling unspecified columns with defaults."""
    n = len(next(iter(columns.values())))
    defaults = {
        "Order_ID": [f"O{i}" for i in range(1, n + 1)],
        "Order_Date": [datetime(2013, 5, 26)] * n,
        "Origin_Port": ["PO1"] * n,
        "Carrier": ["V44_3"] * n,
        "Plant_Code": ["PL01"] * n,
        "Product_ID": ["P1"] * n,
        "Destination_Port": ["PO2"] * n,
        "Unit_Quantity": [1] * n,
        "Weight": [1.0] * n,
        "Ship_Late_Day_count": [0] * n,
    }
    defaults.update(columns)
    return pl.DataFrame(defaults)


# =============================================================================
# REGISTRY TESTS
# =============================================================================

class TestRegistry:
    """Tests for the report registry and runner."""

    def test_ten_reports(self):
        assert len(ALL) == 10
        assert len({r.name for r in ALL}) == 10

    def test_get_report(self):
        assert get_report("warehouse_utilization") is WarehouseUtilization

    def test_get_report_unknown(self):
        with pytest.raises(KeyError, match="Unknown report"):
            get_report("no_such_report")

    def test_run_reports_all(self, tables):
        results = run_reports(tables)
        assert list(results) == [r.name for r in ALL]
        for report in ALL:
            assert results[report.name].columns == report.columns()

    def test_run_reports_subset_keeps_order(self, tables):
        results = run_reports(tables, ["on_time_rate_by_carrier", "top_plants_by_weight"])
        assert list(results) == ["on_time_rate_by_carrier", "top_plants_by_weight"]

    def test_reports_are_idempotent(self, tables):
        """Same tables, same output."""
        for report in ALL:
            assert_frame_equal(report.run(tables), report.run(tables))

    def test_reports_do_not_mutate_tables(self, tables):
        before = tables.orders.clone()
        run_reports(tables)
        assert_frame_equal(tables.orders, before)

    def test_reports_on_empty_orders(self):
        """Empty input gives empty, correctly shaped output."""
        tables = Tables.from_frames(make_orders(Order_ID=[]))
        for report in ALL:
            df = report.run(tables)
            assert len(df) == 0
            assert df.columns == report.columns()


# =============================================================================
# VOLUME REPORTS
# =============================================================================

class TestOrdersAndWeightByPlant:

    def test_totals_per_plant(self, tables):
        rows = OrdersAndWeightByPlant.rows(tables)
        assert [r.Plant_Code for r in rows] == ["PL01", "PL02", "PL03"]
        assert rows[0].Total_Orders == 3
        assert rows[0].Total_Units == 330
        assert rows[0].Total_Weight == pytest.approx(670.0)
        assert rows[2].Total_Weight == pytest.approx(7.5)

    def test_total_weight_rounded(self):
        tables = Tables.from_frames(make_orders(
            Plant_Code=["PL01", "PL01"],
            Weight=[1.111, 2.222],
        ))
        df = OrdersAndWeightByPlant.run(tables)
        assert df["Total_Weight"][0] == pytest.approx(3.33)

    def test_count_matches_order_rows(self, tables, orders):
        df = OrdersAndWeightByPlant.run(tables)
        for row in df.iter_rows(named=True):
            expected = orders.filter(pl.col("Plant_Code") == row["Plant_Code"]).height
            assert row["Total_Orders"] == expected

    def test_ties_sorted_by_plant(self):
        tables = Tables.from_frames(make_orders(Plant_Code=["PL09", "PL02", "PL05"]))
        df = OrdersAndWeightByPlant.run(tables)
        assert df["Plant_Code"].to_list() == ["PL02", "PL05", "PL09"]


class TestTopProducts:

    def test_top_products_by_units(self, tables):
        rows = TopProductsByUnits.rows(tables)
        assert [(r.Product_ID, r.Plant_Code, r.Total_Units) for r in rows] == [
            ("P3", "PL02", 500),
            ("P1", "PL01", 310),
            ("P1", "PL02", 40),
            ("P2", "PL01", 20),
            ("P4", "PL03", 5),
        ]

    def test_top_products_by_order_count(self, tables):
        rows = TopProductsByOrderCount.rows(tables)
        assert rows[0].Product_ID == "P1"
        assert rows[0].OrderCount == 3
        assert [r.Product_ID for r in rows[1:]] == ["P2", "P3", "P4"]

    def test_at_most_five_rows_non_increasing(self):
        products = ["A", "A", "A", "B", "B", "C", "D", "E", "F", "G"]
        tables = Tables.from_frames(make_orders(Product_ID=products))
        df = TopProductsByOrderCount.run(tables)
        assert len(df) == 5
        counts = df["OrderCount"].to_list()
        assert counts == sorted(counts, reverse=True)
        assert counts[:2] == [3, 2]

    def test_top_units_cut_at_five(self):
        tables = Tables.from_frames(make_orders(
            Product_ID=["A", "B", "C", "D", "E", "F"],
            Unit_Quantity=[6, 5, 4, 3, 2, 1],
        ))
        df = TopProductsByUnits.run(tables)
        assert df["Product_ID"].to_list() == ["A", "B", "C", "D", "E"]


class TestPlantsAboveAverageVolume:

    def test_strictly_above_mean(self, tables):
        """Counts 3, 2, 1: mean 2.0, only PL01 is above."""
        rows = PlantsAboveAverageVolume.rows(tables)
        assert rows == [PlantsAboveAverageVolume.row_type("PL01", 3)]

    def test_float_mean(self):
        """Counts 2, 1: mean 1.5 (not truncated to 1)."""
        tables = Tables.from_frames(make_orders(Plant_Code=["PL01", "PL01", "PL02"]))
        df = PlantsAboveAverageVolume.run(tables)
        assert df["Plant_Code"].to_list() == ["PL01"]

    def test_all_equal_returns_nothing(self):
        tables = Tables.from_frames(make_orders(Plant_Code=["PL01", "PL02"]))
        assert len(PlantsAboveAverageVolume.run(tables)) == 0


class TestTopPlantsByWeight:

    def test_rank_by_weight(self, tables):
        rows = TopPlantsByWeight.rows(tables)
        assert [(r.Plant_Code, r.Weight_Rank) for r in rows] == [
            ("PL02", 1),
            ("PL01", 2),
            ("PL03", 3),
        ]
        assert rows[0].Total_Weight == pytest.approx(830.0)
        assert rows[0].Order_Count == 2

    def test_ties_share_rank_and_skip(self):
        """Competition ranking: 1, 1, 3."""
        tables = Tables.from_frames(make_orders(
            Plant_Code=["PL01", "PL02", "PL03"],
            Weight=[100.0, 100.0, 50.0],
        ))
        df = TopPlantsByWeight.run(tables)
        assert df["Weight_Rank"].to_list() == [1, 1, 3]
        assert df["Plant_Code"].to_list() == ["PL01", "PL02", "PL03"]

    def test_total_weight_rounded(self):
        tables = Tables.from_frames(make_orders(
            Plant_Code=["PL01", "PL01"],
            Weight=[1.111, 2.222],
        ))
        df = TopPlantsByWeight.run(tables)
        assert df["Total_Weight"][0] == pytest.approx(3.33)

    def test_top_five_only(self):
        plants = [f"PL0{i}" for i in range(1, 8)]
        tables = Tables.from_frames(make_orders(
            Plant_Code=plants,
            Weight=[float(i) for i in range(1, 8)],
        ))
        df = TopPlantsByWeight.run(tables)
        assert len(df) == 5
        assert df["Weight_Rank"].to_list() == [1, 2, 3, 4, 5]


# =============================================================================
# PORT REPORTS
# =============================================================================

class TestOrdersByPlantAndValidPorts:

    def test_one_group_per_valid_port(self, tables):
        rows = OrdersByPlantAndValidPorts.rows(tables)
        assert [(r.Plant_Code, r.Origin_Port, r.Destination_Port, r.Valid_Port, r.Order_Count)
                for r in rows] == [
            ("PL01", "PO1", "PO2", "PO1", 3),
            ("PL01", "PO1", "PO2", "PO9", 3),
            ("PL02", "PO4", "PO2", "PO4", 2),
        ]

    def test_plants_without_port_excluded(self, tables):
        """PL03 has only a null port row, so it never appears."""
        df = OrdersByPlantAndValidPorts.run(tables)
        assert "PL03" not in df["Plant_Code"].to_list()
        assert df["Valid_Port"].null_count() == 0


class TestWeightLimitViolations:

    def test_only_exceeded_rows(self, tables):
        rows = WeightLimitViolations.rows(tables)
        assert [(r.Order_ID, r.Weight, r.max_wgh_qty) for r in rows] == [
            ("O4", 800.0, 499.99),
            ("O1", 500.0, 99.99),
            ("O2", 120.0, 99.99),
        ]
        assert all(r.Shipping_Status == "EXCEEDED" for r in rows)
        assert all(r.Weight > r.max_wgh_qty for r in rows)

    def test_sorted_by_weight_descending(self, tables):
        weights = WeightLimitViolations.run(tables)["Weight"].to_list()
        assert weights == sorted(weights, reverse=True)

    def test_example_single_order(self):
        tables = Tables.from_frames(
            make_orders(
                Order_ID=[1],
                Plant_Code=["PL01"],
                Origin_Port=["PO1"],
                Destination_Port=["PO2"],
                Weight=[500.0],
                Unit_Quantity=[10],
            ),
            freight_rates=pl.DataFrame({
                "Carrier": ["V44_3"],
                "orig_port_cd": ["PO1"],
                "dest_port_cd": ["PO2"],
                "minm_wgh_qty": [100.0],
                "max_wgh_qty": [400.0],
                "rate": [0.5],
                "minimum_cost": [50.0],
            }),
        )
        rows = WeightLimitViolations.rows(tables)
        assert len(rows) == 1
        assert rows[0].Shipping_Status == "EXCEEDED"
        assert rows[0].Weight == 500.0
        assert rows[0].Order_ID == "1"

    def test_weight_at_limit_is_within(self, freight_rates):
        tables = Tables.from_frames(
            make_orders(Weight=[1000.0], Carrier=["V44_3"]),
            freight_rates=freight_rates.filter(pl.col("Carrier") == "V44_3"),
        )
        assert len(WeightLimitViolations.run(tables)) == 0

    def test_exact_duplicate_rates_collapse(self, tables, freight_rates):
        """An identical rate row adds no output rows."""
        dup = Tables.from_frames(
            tables.orders,
            freight_rates=pl.concat([freight_rates, freight_rates.slice(1, 1)]),
        )
        assert len(WeightLimitViolations.run(dup)) == 3

    def test_each_violated_limit_reported(self, tables, freight_rates):
        """A second lane rate with a different limit adds a row per order."""
        extra = pl.DataFrame({
            "Carrier": ["V444_1"],
            "orig_port_cd": ["PO1"],
            "dest_port_cd": ["PO2"],
            "minm_wgh_qty": [0.0],
            "max_wgh_qty": [200.0],
            "rate": [1.0],
            "minimum_cost": [10.0],
        })
        more = Tables.from_frames(tables.orders, freight_rates=pl.concat([freight_rates, extra]))
        df = WeightLimitViolations.run(more)
        o1 = df.filter(pl.col("Order_ID") == "O1")
        assert o1["max_wgh_qty"].to_list() == [99.99, 200.0]


# =============================================================================
# CAPACITY AND CARRIER REPORTS
# =============================================================================

class TestWarehouseUtilization:

    def test_daily_units_per_plant(self, tables):
        rows = WarehouseUtilization.rows(tables)
        assert [(r.Plant_Code, r.OrderDay, r.TotalUnits, r.Daily_Capacity, r.CapacityStatus)
                for r in rows] == [
            ("PL01", date(2013, 5, 26), 310, 310, "Under Capacity"),
            ("PL01", date(2013, 5, 27), 20, 310, "Under Capacity"),
            ("PL02", date(2013, 5, 26), 540, 500, "Over Capacity"),
        ]

    def test_plant_without_capacity_excluded(self, tables):
        df = WarehouseUtilization.run(tables)
        assert "PL03" not in df["Plant_Code"].to_list()

    def test_time_of_day_ignored(self, tables):
        """O1 (08:00) and O2 (15:30) fall on the same day."""
        df = WarehouseUtilization.run(tables).filter(pl.col("Plant_Code") == "PL01")
        assert df["OrderDay"].to_list()[0] == date(2013, 5, 26)
        assert df["TotalUnits"].to_list()[0] == 310


class TestOnTimeRateByCarrier:

    def test_rates(self, tables):
        rows = OnTimeRateByCarrier.rows(tables)
        assert [r.Carrier for r in rows] == ["V444_6", "V44_3", "V444_0"]
        assert rows[0].OnTimeRate == 100.0
        assert rows[2].OnTimeRate == pytest.approx(33.33)
        assert rows[2].Total_Orders == 3
        assert rows[2].OnTime_Orders == 1

    def test_rate_bounds(self, tables):
        for row in OnTimeRateByCarrier.rows(tables):
            assert 0.0 <= row.OnTimeRate <= 100.0

    def test_hundred_iff_all_on_time(self):
        tables = Tables.from_frames(make_orders(
            Carrier=["A", "A", "B", "B"],
            Ship_Late_Day_count=[0, 0, 0, 4],
        ))
        rates = dict(OnTimeRateByCarrier.run(tables).select(["Carrier", "OnTimeRate"]).iter_rows())
        assert rates == {"A": 100.0, "B": 50.0}

    def test_all_late_is_zero(self):
        tables = Tables.from_frames(make_orders(Carrier=["A"], Ship_Late_Day_count=[1]))
        assert OnTimeRateByCarrier.rows(tables)[0].OnTimeRate == 0.0


# =============================================================================
# COST REPORT
# =============================================================================

class TestLogisticsCostPerOrder:

    def test_example_order(self):
        tables = Tables.from_frames(
            make_orders(
                Order_ID=[1],
                Plant_Code=["PL01"],
                Carrier=["V44_3"],
                Origin_Port=["PO1"],
                Destination_Port=["PO2"],
                Weight=[500.0],
                Unit_Quantity=[10],
            ),
            freight_rates=pl.DataFrame({
                "Carrier": ["V44_3"],
                "orig_port_cd": ["PO1"],
                "dest_port_cd": ["PO2"],
                "minm_wgh_qty": [100.0],
                "max_wgh_qty": [1000.0],
                "rate": [0.5],
                "minimum_cost": [50.0],
            }),
            warehouse_costs=pl.DataFrame({"WH": ["PL01"], "Cost_unit": [2.0]}),
        )
        rows = LogisticsCostPerOrder.rows(tables)
        assert len(rows) == 1
        assert rows[0].Freight_Cost == pytest.approx(250.0)
        assert rows[0].Warehouse_Cost == pytest.approx(20.0)
        assert rows[0].Total_Logistics_Cost == pytest.approx(270.0)

    def test_costs_per_order(self, tables):
        rows = LogisticsCostPerOrder.rows(tables)
        assert [r.Order_ID for r in rows] == ["O1", "O2", "O3", "O4", "O5"]
        costs = {r.Order_ID: (r.Freight_Cost, r.Warehouse_Cost) for r in rows}
        assert costs["O2"] == pytest.approx((60.0, 600.0))
        assert costs["O3"] == pytest.approx((60.0, 40.0))   # V444_0 band [0, 99.99]
        assert costs["O4"] == pytest.approx((560.0, 125.0))  # V444_0 band [500, 1000]
        assert costs["O5"] == pytest.approx((27.0, 10.0))

    def test_total_is_exact_sum(self, tables):
        df = LogisticsCostPerOrder.run(tables)
        assert (df["Total_Logistics_Cost"] == df["Freight_Cost"] + df["Warehouse_Cost"]).all()

    def test_unmatched_orders_excluded(self, tables):
        """O6 has no rate for its lane and no warehouse cost for its plant."""
        df = LogisticsCostPerOrder.run(tables)
        assert "O6" not in df["Order_ID"].to_list()

    def test_band_bounds_inclusive(self, freight_rates):
        """Weights exactly at minm_wgh_qty and max_wgh_qty are in the band."""
        tables = Tables.from_frames(
            make_orders(Weight=[100.0, 1000.0, 99.5]),
            freight_rates=freight_rates,
            warehouse_costs=pl.DataFrame({"WH": ["PL01"], "Cost_unit": [1.0]}),
        )
        df = LogisticsCostPerOrder.run(tables)
        assert df["Order_ID"].to_list() == ["O1", "O2"]
        assert df["Freight_Cost"].to_list() == pytest.approx([50.0, 500.0])

    def test_freight_cost_rounded(self, freight_rates):
        tables = Tables.from_frames(
            make_orders(Weight=[123.456], Unit_Quantity=[3]),
            freight_rates=freight_rates,
            warehouse_costs=pl.DataFrame({"WH": ["PL01"], "Cost_unit": [0.333]}),
        )
        row = LogisticsCostPerOrder.rows(tables)[0]
        assert row.Freight_Cost == pytest.approx(61.73)
        assert row.Warehouse_Cost == pytest.approx(1.0)

    def test_overlapping_bands_multiply(self, freight_rates):
        """An order inside two overlapping bands is costed once per band."""
        overlap = pl.DataFrame({
            "Carrier": ["V44_3"],
            "orig_port_cd": ["PO1"],
            "dest_port_cd": ["PO2"],
            "minm_wgh_qty": [400.0],
            "max_wgh_qty": [600.0],
            "rate": [0.4],
            "minimum_cost": [0.0],
        })
        tables = Tables.from_frames(
            make_orders(Weight=[500.0]),
            freight_rates=pl.concat([freight_rates, overlap]),
            warehouse_costs=pl.DataFrame({"WH": ["PL01"], "Cost_unit": [0.0]}),
        )
        df = LogisticsCostPerOrder.run(tables)
        assert df["Freight_Cost"].to_list() == pytest.approx([250.0, 200.0])
