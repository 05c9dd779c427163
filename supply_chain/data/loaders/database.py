"""
Load Tables from Database

Pulls the seven input tables from a database schema holding the source
tables (OrderList, FreightRates, ...).
"""

import polars as pl

from shared.database import pull_data, select_table
from ...pipeline.tables import Tables, prepare_table
from ..reference.tables import ALL_TABLES


DEFAULT_SCHEMA = "dbo"


def load_tables_from_database(schema: str = DEFAULT_SCHEMA, verbose: bool = True) -> Tables:
    """
    Load all seven tables with SELECT * from a database schema.

    Args:
        schema: Database schema containing the source tables
        verbose: If True, print progress messages

    Returns:
        Tables context ready for the reports

    Raises:
        RuntimeError: If a query fails
        ValueError: If any table fails validation
    """
    if verbose:
        print(f"Loading tables from database schema '{schema}'...")

    frames = {}
    for table in ALL_TABLES:
        # Use pandas for initial load to handle mixed types, then convert to polars
        df_pd = pull_data(select_table(schema, table.source), as_polars=False)
        frames[table.name] = prepare_table(pl.from_pandas(df_pd), table)
        if verbose:
            print(f"  {table.source}: {len(frames[table.name]):,} rows")

    return Tables(**frames)
