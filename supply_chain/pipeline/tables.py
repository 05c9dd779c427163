"""
Input Tables

The immutable context every report reads from, and the validation that turns
a raw frame (CSV text, database fetch, hand-built fixture) into a table with
canonical column names and dtypes.

VALIDATION RULES
----------------
    - Headers are matched case-insensitively with punctuation and spaces
      collapsed to "_" ("Order ID" -> Order_ID, "Cost/unit" -> Cost_unit)
    - Missing columns, unparseable numbers or dates, fractional integers,
      negative quantities and duplicate Order_IDs raise ValueError
    - Nothing is coerced silently: the first offending row is quoted
"""

import re
from dataclasses import dataclass, fields

import polars as pl

from ..data.reference.tables import (
    TableSchema,
    ALL_TABLES,
    DATETIME_FORMATS,
    DATE_FORMATS,
    MAX_REPORTED_ROWS,
)


ROW_INDEX = "_row"

# Int64 columns hold magnitudes below 2**63
INT64_LIMIT = float(2**63)


# =============================================================================
# TABLES CONTEXT
# =============================================================================

@dataclass(frozen=True)
class Tables:
    """
    The seven loaded input tables.

    Built once per run and shared read-only by all reports.
    """

    orders: pl.DataFrame
    freight_rates: pl.DataFrame
    plant_ports: pl.DataFrame
    products_per_plant: pl.DataFrame
    warehouse_capacity: pl.DataFrame
    warehouse_costs: pl.DataFrame
    vmi_customers: pl.DataFrame

    @classmethod
    def from_frames(
        cls,
        orders: pl.DataFrame,
        freight_rates: pl.DataFrame | None = None,
        plant_ports: pl.DataFrame | None = None,
        products_per_plant: pl.DataFrame | None = None,
        warehouse_capacity: pl.DataFrame | None = None,
        warehouse_costs: pl.DataFrame | None = None,
        vmi_customers: pl.DataFrame | None = None,
    ) -> "Tables":
        """
        Validate in-memory frames into a Tables context.

        Reference tables not supplied are replaced with empty typed frames.
        """
        frames = {
            "orders": orders,
            "freight_rates": freight_rates,
            "plant_ports": plant_ports,
            "products_per_plant": products_per_plant,
            "warehouse_capacity": warehouse_capacity,
            "warehouse_costs": warehouse_costs,
            "vmi_customers": vmi_customers,
        }

        prepared = {}
        for schema in ALL_TABLES:
            frame = frames[schema.name]
            if frame is None:
                prepared[schema.name] = empty_table(schema)
            else:
                prepared[schema.name] = prepare_table(frame, schema)

        return cls(**prepared)

    def summary(self) -> dict[str, int]:
        """Row count per table, in load order."""
        return {f.name: len(getattr(self, f.name)) for f in fields(self)}


def empty_table(schema: TableSchema) -> pl.DataFrame:
    """Empty frame with the schema's columns and dtypes."""
    return pl.DataFrame(schema=schema.columns)


# =============================================================================
# VALIDATION
# =============================================================================

def normalize_header(header: str) -> str:
    """Lowercase a header and collapse non-alphanumeric runs to "_"."""
    return re.sub(r"[^0-9a-z]+", "_", header.strip().lower()).strip("_")


def prepare_table(df: pl.DataFrame, schema: TableSchema) -> pl.DataFrame:
    """
    Validate a raw frame against a table schema.

    Args:
        df: Raw frame (any column spelling, text or typed values)
        schema: Target table schema

    Returns:
        DataFrame with exactly the schema's columns, in schema order,
        cast to the schema's dtypes

    Raises:
        ValueError: If a column is missing or any value is malformed
    """
    df = _rename_columns(df, schema)
    df = df.select(list(schema.columns)).with_row_index(ROW_INDEX)

    for column, dtype in schema.columns.items():
        if dtype == pl.Utf8:
            df = _parse_text(df, column)
        elif dtype == pl.Datetime:
            df = _parse_datetime(df, schema, column)
        else:
            df = _parse_number(df, schema, column, dtype)

    for column in schema.non_negative:
        _check(df, schema, column, pl.col(column) < 0, "negative value")

    if schema.key is not None:
        _check_key(df, schema)

    return df.drop(ROW_INDEX)


def _rename_columns(df: pl.DataFrame, schema: TableSchema) -> pl.DataFrame:
    """Map raw headers onto canonical column names."""
    canonical = {normalize_header(c): c for c in schema.columns}

    rename = {}
    for raw in df.columns:
        target = canonical.get(normalize_header(raw))
        if target is not None and target not in rename.values():
            rename[raw] = target

    missing = [c for c in schema.columns if c not in rename.values()]
    if missing:
        raise ValueError(
            f"{schema.source}: missing required column(s) {missing}. "
            f"Found: {df.columns}"
        )

    return df.rename(rename)


def _parse_text(df: pl.DataFrame, column: str) -> pl.DataFrame:
    """Cast to string, strip whitespace, turn empty strings into nulls."""
    dtype = df.schema[column]

    if dtype.is_float():
        # IDs fetched as floats (1447296447.0) keep their integer spelling
        values = df[column].drop_nulls()
        if (values == values.floor()).all():
            df = df.with_columns(pl.col(column).cast(pl.Int64))

    text = pl.col(column).cast(pl.Utf8).str.strip_chars()
    return df.with_columns(
        pl.when(text.str.len_chars() == 0)
        .then(pl.lit(None, dtype=pl.Utf8))
        .otherwise(text)
        .alias(column)
    )


def _parse_number(
    df: pl.DataFrame,
    schema: TableSchema,
    column: str,
    dtype: type[pl.DataType],
) -> pl.DataFrame:
    """Parse a numeric column strictly."""
    source = pl.col(column)
    if df.schema[column] == pl.Utf8:
        source = source.str.strip_chars()

    parsed = source.cast(pl.Float64, strict=False)
    _check(
        df, schema, column,
        parsed.is_null() | parsed.is_nan() | parsed.is_infinite(),
        "non-numeric value",
    )

    if dtype == pl.Int64:
        _check(df, schema, column, parsed != parsed.floor(), "non-integer value")
        _check(df, schema, column, parsed.abs() >= INT64_LIMIT, "integer out of range")

    return df.with_columns(parsed.cast(dtype).alias(column))


def _parse_datetime(df: pl.DataFrame, schema: TableSchema, column: str) -> pl.DataFrame:
    """Parse a date/datetime column, trying each configured format."""
    if df.schema[column].is_temporal():
        parsed = pl.col(column).cast(pl.Datetime)
    else:
        text = pl.col(column).cast(pl.Utf8).str.strip_chars()
        attempts = [
            text.str.strptime(pl.Datetime, fmt, strict=False)
            for fmt in DATETIME_FORMATS
        ] + [
            text.str.strptime(pl.Date, fmt, strict=False).cast(pl.Datetime)
            for fmt in DATE_FORMATS
        ]
        parsed = pl.coalesce(attempts)

    _check(df, schema, column, parsed.is_null(), "unparseable date")

    return df.with_columns(parsed.alias(column))


def _check_key(df: pl.DataFrame, schema: TableSchema) -> None:
    """Key column must be present on every row and unique."""
    key = schema.key
    _check(df, schema, key, pl.col(key).is_null(), "missing identifier")

    duplicated = (
        df
        .filter(pl.col(key).is_duplicated())
        .get_column(key)
        .unique(maintain_order=True)
    )
    if len(duplicated) > 0:
        raise ValueError(
            f"{schema.source}: duplicate {key} value(s) "
            f"{duplicated.head(MAX_REPORTED_ROWS).to_list()} "
            f"({len(duplicated):,} duplicated)"
        )


def _check(
    df: pl.DataFrame,
    schema: TableSchema,
    column: str,
    invalid: pl.Expr,
    reason: str,
) -> None:
    """
    Raise ValueError quoting the first row where `invalid` holds.

    Evaluated against the frame before the column is replaced, so the quoted
    value is the raw input.
    """
    bad = df.filter(invalid.fill_null(False))
    if len(bad) == 0:
        return

    first = bad.row(0, named=True)
    location = f"row {first[ROW_INDEX] + 1}"
    if schema.key is not None and schema.key != column:
        location += f" ({schema.key}={first[schema.key]!r})"

    raise ValueError(
        f"{schema.source}: {reason} in column '{column}' at {location}: "
        f"{first[column]!r} ({len(bad):,} bad row(s))"
    )
