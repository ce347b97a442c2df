# rwhsim/postprocess/__init__.py

from .tables import write_tables, strip_units, TABLE_FILES

__all__ = [
    "write_tables",
    "strip_units",
    "TABLE_FILES"
]
