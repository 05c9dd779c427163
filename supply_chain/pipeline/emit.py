"""
Report Emitter

Prints report results as tables and exports them to files.
"""

import polars as pl
from pathlib import Path


EXPORT_FORMATS = ("csv", "parquet", "json")


def format_report(title: str, df: pl.DataFrame) -> str:
    """Render a report as a titled table with every row and column shown."""
    with pl.Config(
        tbl_rows=-1,
        tbl_cols=-1,
        tbl_hide_dataframe_shape=True,
        fmt_str_lengths=100,
    ):
        table = str(df)

    return "\n".join([
        "=" * 60,
        title.upper(),
        "=" * 60,
        table,
        f"{len(df):,} row(s)",
    ])


def print_report(title: str, df: pl.DataFrame) -> None:
    """Print a report to stdout."""
    print(format_report(title, df))


def export_report(df: pl.DataFrame, path: Path, fmt: str = "csv") -> Path:
    """
    Write one report to a file.

    Args:
        df: Report result
        path: Output file path (parent directories are created)
        fmt: One of EXPORT_FORMATS

    Returns:
        The written path

    Raises:
        ValueError: If fmt is not supported
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"fmt must be one of {EXPORT_FORMATS}, got '{fmt}'")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if fmt == "csv":
        df.write_csv(path)
    elif fmt == "parquet":
        df.write_parquet(path)
    else:
        df.write_json(path)

    return path


def export_reports(
    results: dict[str, pl.DataFrame],
    out_dir: Path,
    fmt: str = "csv",
    verbose: bool = True,
) -> list[Path]:
    """
    Write every report to <out_dir>/<name>.<fmt>.

    Returns:
        Written paths, in results order
    """
    paths = []
    for name, df in results.items():
        path = export_report(df, Path(out_dir) / f"{name}.{fmt}", fmt)
        if verbose:
            print(f"  Saved {len(df):,} rows to {path}")
        paths.append(path)
    return paths
