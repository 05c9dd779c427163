"""
Supply Chain Data

Reference configuration and loaders for the input tables.

Structure:
    - reference/: Table schemas and reporting constants
    - loaders/: CSV and database loaders (supply_chain.data.loaders)
    - sample/: Small sample dataset in the source CSV layout
"""

from pathlib import Path


SAMPLE_DIR = Path(__file__).parent / "sample"
