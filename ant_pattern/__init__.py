"""
Antennendiagramm-Engine: Extraktion, Normalisierung und Prüfung von
Antennendiagrammen aus Stationsdatenbanken.
"""

from .models import (
    AntPoint,
    AntSlice,
    HorizontalPattern,
    ElevationPattern,
    MatrixPattern,
    RecordContext,
)
from .patterns import (
    EmptyPolicy,
    ErrorLogger,
    MatrixMode,
    PatternError,
    assemble_elevation,
    assemble_horizontal,
    assemble_matrix,
    merge_matrix,
    get_antenna_pattern,
    get_elevation_pattern,
    get_matrix_pattern,
)
from .loaders import SchemaDialect, TableSource, MemorySource, load_tables

__all__ = [
    "AntPoint",
    "AntSlice",
    "HorizontalPattern",
    "ElevationPattern",
    "MatrixPattern",
    "RecordContext",
    "EmptyPolicy",
    "ErrorLogger",
    "MatrixMode",
    "PatternError",
    "assemble_elevation",
    "assemble_horizontal",
    "assemble_matrix",
    "merge_matrix",
    "get_antenna_pattern",
    "get_elevation_pattern",
    "get_matrix_pattern",
    "SchemaDialect",
    "TableSource",
    "MemorySource",
    "load_tables",
]
