"""
Fehler- und Hinweisbehandlung für Antennendiagramme.

Jede verletzte Bedingung (Bereich, Reihenfolge, Punktzahl, Maximum) ist
fatal: das ganze Diagramm wird verworfen. Umrechnung aus dB und ein Maximum
knapp unter 1.0 sind nur Hinweise, das Diagramm bleibt verwendbar.

Mit Datensatz-Kontext (Batch-Betrieb) werden alle Meldungen mit den
Kennfeldern des Datensatzes geloggt und die Verarbeitung läuft weiter.
Ohne Kontext wird ein fataler Fehler als PatternError an den Aufrufer
weitergegeben.
"""

from typing import Iterable, List, Optional

from ..models import RecordContext
from ..utils import print_error, print_message

# Fatale Gründe
ANGLE_RANGE = "angle out of range"
SEQUENCE = "duplicate or out-of-sequence angle"
FIELD_RANGE = "field value out of range"
NOT_ENOUGH_POINTS = "not enough points"
PEAK_TOO_SMALL = "maximum value too small"
NOT_FOUND = "pattern data not found"
DUPLICATE_VERTICAL = "duplicate vertical angles"

# Hinweise
ASSUMED_DB = "has negative values, assumed to be dB"
SUB_UNITY_PEAK = "does not have a 1"

FATAL_REASONS = frozenset([
    ANGLE_RANGE,
    SEQUENCE,
    FIELD_RANGE,
    NOT_ENOUGH_POINTS,
    PEAK_TOO_SMALL,
    NOT_FOUND,
    DUPLICATE_VERTICAL,
])

ADVISORIES = frozenset([ASSUMED_DB, SUB_UNITY_PEAK])

# Matrix-Stufen (Legacy-Schema mit Basis-Raster)
STAGE_BASE_GRID = "base grid"
STAGE_REFINEMENT = "refinement"


def is_fatal(code: str) -> bool:
    """True für Gründe, die zum Verwerfen des Diagramms führen."""
    if code in FATAL_REASONS:
        return True
    if code in ADVISORIES:
        return False
    raise ValueError(f"Unknown diagnostic code: {code}")


class PatternError(ValueError):
    """
    Fataler Fehler beim Aufbau eines Diagramms.

    Attributes:
        reason: Grund (eine der Konstanten oben)
        azimuth: Azimut des betroffenen Matrix-Schnitts (oder None)
        depression: Betroffener Depressionswinkel (oder None)
        stage: Matrix-Stufe (STAGE_BASE_GRID, STAGE_REFINEMENT oder None)
    """

    def __init__(
        self,
        reason: str,
        azimuth: Optional[float] = None,
        depression: Optional[float] = None,
        stage: Optional[str] = None,
    ):
        self.reason = reason
        self.azimuth = azimuth
        self.depression = depression
        self.stage = stage
        super().__init__(self.detail)

    @property
    def detail(self) -> str:
        if self.azimuth is None:
            return self.reason
        return f"{self.reason}, at azimuth {self.azimuth:g}"

    def describe(self) -> str:
        """Detail inkl. Matrix-Stufe, für Log-Meldungen."""
        if self.stage is None:
            return self.detail
        return f"{self.detail} ({self.stage})"

    def at(
        self,
        azimuth: Optional[float] = None,
        stage: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> "PatternError":
        """Kopie mit ergänzter Fundstelle; vorhandene Angaben bleiben."""
        return PatternError(
            reason or self.reason,
            azimuth=self.azimuth if self.azimuth is not None else azimuth,
            depression=self.depression,
            stage=self.stage or stage,
        )


class ErrorLogger:
    """
    Sammelt Fehler und Meldungen.

    Fehler (report_error) bedeuten einen Abbruch beim Aufrufer, Meldungen
    (log_message) sind nur informativ und beeinflussen die Fehlerbehandlung
    nicht. Mit echo=True wird zusätzlich farbig im Terminal ausgegeben.
    """

    def __init__(self, echo: bool = False):
        self.errors: List[str] = []
        self.messages: List[str] = []
        self.echo = echo

    def report_error(self, message: str):
        self.errors.append(message)
        if self.echo:
            print_error(message)

    def log_message(self, message: str):
        self.messages.append(message)
        if self.echo:
            print_message(message)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def has_messages(self) -> bool:
        return len(self.messages) > 0

    def clear(self):
        self.errors.clear()
        self.messages.clear()


def make_message(record: RecordContext, message: str) -> str:
    """
    Meldung mit Kennfeldern des Datensatzes (feste Spaltenbreiten).

    Format: Facility-ID, Rufzeichen, Kanal, Dienst, Status, Text
    """
    return (
        f"{str(record.facility_id):<6.6} {str(record.call_sign):<8.8} "
        f"{str(record.channel):<3.3} {str(record.service_code):<2.2} "
        f"{str(record.status):<6.6}: {message}"
    )


def classify_failure(
    error: PatternError,
    label: str,
    antenna_id: str,
    errors: Optional[ErrorLogger] = None,
    record: Optional[RecordContext] = None,
) -> None:
    """
    Behandelt einen fatalen Fehler.

    Mit Datensatz-Kontext wird die Meldung geloggt und None zurückgegeben,
    damit der Batch weiterlaufen kann. Ohne Kontext wird der Fehler an den
    Aufrufer weitergereicht.

    Args:
        error: Der aufgetretene PatternError
        label: "antenna" oder "elevation antenna" (für den Meldungstext)
        antenna_id: ID des Antennendatensatzes
        errors: Optional - ErrorLogger
        record: Optional - Datensatz-Kontext

    Raises:
        PatternError: wenn kein Datensatz-Kontext vorhanden ist
    """
    if record is None:
        raise error

    if errors is not None:
        msg = f"Pattern for {label} record ID {antenna_id} is bad, {error.describe()}."
        errors.log_message(make_message(record, msg))


def classify_advisories(
    advisories: Iterable[str],
    label: str,
    antenna_id: str,
    errors: Optional[ErrorLogger] = None,
    record: Optional[RecordContext] = None,
) -> List[str]:
    """
    Formatiert die Hinweise eines gültigen Diagramms und loggt sie.

    Returns:
        Liste der formatierten Meldungen
    """
    result = []
    for code in advisories:
        msg = f"Pattern for {label} record ID {antenna_id} {code}."
        if record is not None:
            msg = make_message(record, msg)
        if errors is not None:
            errors.log_message(msg)
        result.append(msg)
    return result
