"""
Abruf von Antennendiagrammen aus einer Datenquelle.

Liefert None, wenn keine Antennen-ID gesetzt ist oder (mit
Datensatz-Kontext) wenn das Diagramm ungültig ist; die Meldung steht dann
im ErrorLogger. Ohne Datensatz-Kontext wird ein ungültiges Diagramm als
PatternError an den Aufrufer gemeldet.
"""

from typing import Optional

from ..models import HorizontalPattern, ElevationPattern, MatrixPattern, RecordContext
from .assembler import assemble_horizontal, assemble_elevation
from .diagnostics import ErrorLogger, PatternError, classify_failure, classify_advisories
from .matrix import MatrixMode, assemble_matrix, merge_matrix


def _has_id(antenna_id) -> bool:
    return (antenna_id is not None) and (str(antenna_id).strip() != "")


def get_antenna_pattern(
    source,
    antenna_id,
    errors: Optional[ErrorLogger] = None,
    record: Optional[RecordContext] = None,
) -> Optional[HorizontalPattern]:
    """
    Lädt und prüft ein Horizontaldiagramm.

    Ein leeres Diagramm ist kein Fehler, sofern die Datenquelle das erlaubt
    (Antennen-ID nur als Typbezeichnung, Antenne omnidirektional).

    Args:
        source: Datenquelle (PatternSource)
        antenna_id: ID des Antennendatensatzes
        errors: Optional - ErrorLogger für Meldungen
        record: Optional - Datensatz-Kontext (Batch-Betrieb)

    Returns:
        HorizontalPattern oder None

    Raises:
        PatternError: ungültige Daten ohne Datensatz-Kontext
    """
    if not _has_id(antenna_id):
        return None

    try:
        pattern = assemble_horizontal(source.horizontal_rows(antenna_id), source.horizontal_empty)
    except PatternError as e:
        classify_failure(e, "antenna", antenna_id, errors, record)
        return None

    classify_advisories(pattern.advisories, "antenna", antenna_id, errors, record)
    return pattern


def get_elevation_pattern(
    source,
    antenna_id,
    errors: Optional[ErrorLogger] = None,
    record: Optional[RecordContext] = None,
) -> Optional[ElevationPattern]:
    """
    Lädt und prüft ein Vertikaldiagramm.

    Ob ein leeres Diagramm zulässig ist, bestimmt source.elevation_empty.
    Siehe get_antenna_pattern() für Argumente und Fehlerbehandlung.
    """
    if not _has_id(antenna_id):
        return None

    try:
        pattern = assemble_elevation(source.elevation_rows(antenna_id), source.elevation_empty)
    except PatternError as e:
        classify_failure(e, "elevation antenna", antenna_id, errors, record)
        return None

    classify_advisories(pattern.advisories, "elevation antenna", antenna_id, errors, record)
    return pattern


def get_matrix_pattern(
    source,
    antenna_id,
    errors: Optional[ErrorLogger] = None,
    record: Optional[RecordContext] = None,
    check_slice_peak: bool = True,
) -> Optional[MatrixPattern]:
    """
    Lädt und prüft ein Matrix-Diagramm (Modus je nach source.matrix_mode).

    Args:
        check_slice_peak: Maximum jedes Schnitts prüfen (siehe matrix.py)

    Raises:
        ValueError: wenn die Datenquelle keine Matrix-Diagramme kennt
        PatternError: ungültige Daten ohne Datensatz-Kontext
    """
    if not _has_id(antenna_id):
        return None

    if source.matrix_mode is MatrixMode.NONE:
        raise ValueError("Data source has no matrix patterns")

    try:
        if source.matrix_mode is MatrixMode.SPLIT:
            pattern = merge_matrix(
                lambda azimuth: source.base_grid_rows(antenna_id, azimuth),
                source.matrix_rows(antenna_id),
                check_slice_peak=check_slice_peak,
            )
        else:
            pattern = assemble_matrix(
                source.matrix_rows(antenna_id),
                check_slice_peak=check_slice_peak,
            )
    except PatternError as e:
        classify_failure(e, "elevation antenna", antenna_id, errors, record)
        return None

    classify_advisories(pattern.advisories, "elevation antenna", antenna_id, errors, record)
    return pattern
