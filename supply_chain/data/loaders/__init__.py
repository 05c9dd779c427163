"""Supply chain table loaders: CSV directory and database schema."""

from .csv_files import load_tables_from_csv, read_table_csv, table_path
from .database import load_tables_from_database, DEFAULT_SCHEMA

__all__ = [
    "load_tables_from_csv",
    "read_table_csv",
    "table_path",
    "load_tables_from_database",
    "DEFAULT_SCHEMA",
]
