"""
Aufbau von Horizontal- und Vertikaldiagrammen aus einer Zeilenfolge.
"""

from enum import Enum
from typing import Iterable, Tuple

from ..models import HorizontalPattern, ElevationPattern
from .diagnostics import PatternError, NOT_FOUND
from .normalize import AngleKind
from .sequence import scan, finish, validate_sequence


class EmptyPolicy(Enum):
    """
    Bedeutung einer leeren Zeilenfolge, pro Datenquelle festgelegt.

    OMNI: Antennen-ID ist evtl. nur Typbezeichnung, leer = kein Richtdiagramm
    REQUIRED: zur ID existieren immer Daten, leer = "nicht gefunden" (fatal)
    """
    OMNI = "omni"
    REQUIRED = "required"


def assemble_horizontal(
    rows: Iterable[Tuple],
    empty_policy: EmptyPolicy = EmptyPolicy.OMNI,
) -> HorizontalPattern:
    """
    Baut ein Horizontaldiagramm aus (azimuth, field)-Zeilen.

    Args:
        rows: Zeilen aufsteigend nach Azimut
        empty_policy: Behandlung einer leeren Folge

    Returns:
        HorizontalPattern (leer = omnidirektional)

    Raises:
        PatternError: bei ungültigen Daten
    """
    result = validate_sequence(rows, AngleKind.AZIMUTH)

    if result.is_empty and (empty_policy is EmptyPolicy.REQUIRED):
        raise PatternError(NOT_FOUND)

    return HorizontalPattern(points=result.points, advisories=result.advisories)


def assemble_elevation(
    rows: Iterable[Tuple],
    empty_policy: EmptyPolicy = EmptyPolicy.REQUIRED,
    check_peak: bool = True,
) -> ElevationPattern:
    """
    Baut ein Vertikaldiagramm aus (depression, field)-Zeilen.

    Eine Folge, deren Werte alle auf FIELD_MIN liegen, gilt wie eine leere
    Folge als "nicht vorhanden" (tritt auf, wenn eine Matrix-Spalte als
    normales Diagramm gelesen wird oder umgekehrt).

    Args:
        rows: Zeilen aufsteigend nach Depressionswinkel
        empty_policy: Behandlung einer leeren Folge
        check_peak: Maximum prüfen

    Returns:
        ElevationPattern (leer nur bei EmptyPolicy.OMNI)

    Raises:
        PatternError: bei ungültigen Daten oder NOT_FOUND
    """
    # Leer/alles FIELD_MIN vor den Punkt- und Maximum-Prüfungen erkennen
    state = scan(rows, AngleKind.DEPRESSION)

    if state.is_empty or state.all_floor:
        if empty_policy is EmptyPolicy.REQUIRED:
            raise PatternError(NOT_FOUND)
        return ElevationPattern()

    result = finish(state, check_peak)

    return ElevationPattern(points=result.points, advisories=result.advisories)
