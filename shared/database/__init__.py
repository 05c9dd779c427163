"""
Database Connection and Operations

Read-only access to the relational store holding the supply-chain tables.
Used by the database table loader; reports never touch the database.
"""

import os

import polars as pl
import pandas as pd
import redshift_connector
from pathlib import Path
from typing import Union, Optional


# Database connection parameters (environment overrides the defaults)
HOST = os.environ.get("SUPPLY_CHAIN_DB_HOST", "localhost")
PORT = int(os.environ.get("SUPPLY_CHAIN_DB_PORT", "5439"))
DBNAME = os.environ.get("SUPPLY_CHAIN_DB_NAME", "supply_chain")
USER = os.environ.get("SUPPLY_CHAIN_DB_USER", "analyst")

PASSWORD_ENV = "SUPPLY_CHAIN_DB_PASSWORD"


# Global connection object
_connection: Optional[redshift_connector.Connection] = None


# ============================================================================
# CONNECTION MANAGEMENT
# ============================================================================

def _read_password() -> str:
    """
    Read the database password.

    Looks at the SUPPLY_CHAIN_DB_PASSWORD environment variable first, then
    at pass.txt in the database directory.

    Returns:
        str: The database password

    Raises:
        RuntimeError: If no password is configured
    """
    env_value = os.environ.get(PASSWORD_ENV, "").strip()
    if env_value:
        return env_value

    path = Path(__file__).parent / "pass.txt"

    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                val = line.strip()
                if val:
                    return val

    raise RuntimeError(
        f"Password not found. Set {PASSWORD_ENV} or create 'pass.txt' in {path.parent}"
    )


def get_connection(force_new: bool = False) -> redshift_connector.Connection:
    """
    Get or create a database connection.

    By default, returns the existing connection if one exists.
    Use force_new=True to create a fresh connection.

    Args:
        force_new: If True, closes existing connection and creates a new one

    Returns:
        redshift_connector.Connection: Active database connection

    Raises:
        RuntimeError: If connection cannot be established
    """
    global _connection

    if force_new:
        close_connection()

    if _connection is not None:
        return _connection

    try:
        _connection = redshift_connector.connect(
            host=HOST,
            database=DBNAME,
            port=PORT,
            user=USER,
            password=_read_password()
        )
        return _connection
    except Exception as e:
        raise RuntimeError(f"Failed to create database connection: {e}") from e


def close_connection() -> None:
    """Close the active database connection if one exists."""
    global _connection

    if _connection is not None:
        try:
            _connection.close()
        finally:
            _connection = None


# ============================================================================
# DATA OPERATIONS
# ============================================================================

def pull_data(query: str, as_polars: bool = True) -> Union[pl.DataFrame, pd.DataFrame]:
    """
    Execute a SQL query and return results as a DataFrame.

    Args:
        query: SQL query string to execute
        as_polars: If True, return Polars DataFrame; if False, return Pandas DataFrame

    Returns:
        pl.DataFrame or pd.DataFrame: Query results

    Raises:
        RuntimeError: If query execution fails

    Example:
        df = pull_data("SELECT * FROM dbo.OrderList")
    """
    conn = get_connection()

    try:
        cursor = conn.cursor()
        cursor.execute(query)

        columns = [desc[0] for desc in cursor.description]
        rows = cursor.fetchall()
        cursor.close()
    except Exception as e:
        raise RuntimeError(f"Error executing query: {e}") from e

    if as_polars:
        return pl.DataFrame(rows, schema=columns, orient="row")
    return pd.DataFrame(rows, columns=columns)


def select_table(schema: str, table: str) -> str:
    """
    Build a SELECT * query for a schema-qualified table.

    Raises:
        ValueError: If schema or table name is not a plain identifier
    """
    for part in (schema, table):
        if not part.replace("_", "").isalnum():
            raise ValueError(f"Invalid identifier: '{part}'")

    return f"SELECT * FROM {schema}.{table}"
