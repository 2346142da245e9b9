"""I/O utilities for CSV import and seed data."""

from .import_csv import import_requests_csv, import_staff_csv
from .seed import seed_database

__all__ = [
    "import_requests_csv",
    "import_staff_csv",
    "seed_database",
]
