"""
Load Tables from CSV

Reads the seven input tables from a directory of CSV files, one file per
source table (OrderList.csv, FreightRates.csv, ...).
"""

import polars as pl
from pathlib import Path

from ...pipeline.tables import Tables, prepare_table
from ..reference.tables import TableSchema, ALL_TABLES


def table_path(data_dir: Path, schema: TableSchema) -> Path:
    """CSV file holding a table."""
    return Path(data_dir) / f"{schema.source}.csv"


def read_table_csv(path: Path, schema: TableSchema) -> pl.DataFrame:
    """
    Read one CSV file and validate it against its schema.

    All columns are read as text so that validation sees the raw values.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is empty or unreadable, or its contents do
            not match the schema
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{schema.source}: file not found: {path}")

    try:
        raw = pl.read_csv(path, infer_schema_length=0)
    except pl.exceptions.PolarsError as e:
        raise ValueError(f"{schema.source}: cannot read {path}: {e}") from e

    return prepare_table(raw, schema)


def load_tables_from_csv(data_dir: Path, verbose: bool = True) -> Tables:
    """
    Load all seven tables from a directory of CSV files.

    Args:
        data_dir: Directory containing <source>.csv for every table
        verbose: If True, print progress messages

    Returns:
        Tables context ready for the reports

    Raises:
        FileNotFoundError: If a table file is missing
        ValueError: If any table fails validation (nothing is returned)
    """
    data_dir = Path(data_dir)
    if verbose:
        print(f"Loading tables from {data_dir}...")

    frames = {}
    for schema in ALL_TABLES:
        frames[schema.name] = read_table_csv(table_path(data_dir, schema), schema)
        if verbose:
            print(f"  {schema.source}: {len(frames[schema.name]):,} rows")

    return Tables(**frames)
