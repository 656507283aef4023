"""Datenquellen für Antennendiagramme"""

from .sources import (
    DIALECTS,
    DialectSpec,
    MatrixMode,
    MemorySource,
    PatternSource,
    SchemaDialect,
    TableSource,
)
from .table_loader import load_tables

__all__ = [
    "DIALECTS",
    "DialectSpec",
    "MatrixMode",
    "MemorySource",
    "PatternSource",
    "SchemaDialect",
    "TableSource",
    "load_tables",
]
