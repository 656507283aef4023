"""
Prüf-Engine für Antennendiagramme.

Ablauf:
- Normalisierung der Rohwerte (normalize)
- Sequenz-Prüfung einer Zeilenfolge (sequence)
- Aufbau Horizontal-/Vertikaldiagramm (assembler)
- Aufbau Matrix-Diagramm, Modus A und B (matrix)
- Fehler/Hinweise (diagnostics)
"""

from .normalize import (
    AngleKind,
    round_to,
    normalize_angle,
    normalize_field,
    db_to_relative_field,
)

from .sequence import (
    ScanState,
    SequenceResult,
    unpack_row,
    scan,
    finish,
    validate_sequence,
)

from .assembler import (
    EmptyPolicy,
    assemble_horizontal,
    assemble_elevation,
)

from .matrix import (
    MatrixMode,
    SliceList,
    assemble_matrix,
    merge_matrix,
    base_grid_azimuths,
)

from .diagnostics import (
    PatternError,
    ErrorLogger,
    make_message,
    is_fatal,
)

from .retrieval import (
    get_antenna_pattern,
    get_elevation_pattern,
    get_matrix_pattern,
)

__all__ = [
    # Normalisierung
    'AngleKind',
    'round_to',
    'normalize_angle',
    'normalize_field',
    'db_to_relative_field',

    # Sequenz-Prüfung
    'ScanState',
    'SequenceResult',
    'unpack_row',
    'scan',
    'finish',
    'validate_sequence',

    # Aufbau
    'EmptyPolicy',
    'assemble_horizontal',
    'assemble_elevation',
    'MatrixMode',
    'SliceList',
    'assemble_matrix',
    'merge_matrix',
    'base_grid_azimuths',

    # Fehler/Hinweise
    'PatternError',
    'ErrorLogger',
    'make_message',
    'is_fatal',

    # Abruf
    'get_antenna_pattern',
    'get_elevation_pattern',
    'get_matrix_pattern',
]
