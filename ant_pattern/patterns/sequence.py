"""
Sequenz-Prüfung eines Diagramms.

Die Zeilen der Datenquelle werden in einem Durchlauf zu einer Punktliste
gefaltet. Der Zwischenstand steckt vollständig im ScanState, so dass auch
Teil-Durchläufe geprüft werden können.

Die Prüfung sortiert nicht: die Datenquelle muss die Zeilen aufsteigend
nach Winkel liefern, hier wird nur strikte Monotonie erzwungen.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from ..config import (
    FIELD_MIN,
    FIELD_MAX,
    FIELD_MAX_CHECK,
    PATTERN_REQUIRED_POINTS,
    PEAK_SIGNIFICANCE_MIN,
)
from ..models import AntPoint
from .diagnostics import (
    PatternError,
    ANGLE_RANGE,
    SEQUENCE,
    FIELD_RANGE,
    NOT_ENOUGH_POINTS,
    PEAK_TOO_SMALL,
    ASSUMED_DB,
    SUB_UNITY_PEAK,
)
from .normalize import AngleKind, normalize_angle, normalize_field


@dataclass
class ScanState:
    """Akkumulator für einen Durchlauf über eine Zeilenfolge"""
    kind: AngleKind
    last_angle: float
    max_field: float = FIELD_MIN
    points: List[AntPoint] = field(default_factory=list)
    assumed_db: bool = False
    all_floor: bool = True  # alle Feldwerte auf FIELD_MIN angehoben

    @classmethod
    def start(cls, kind: AngleKind) -> "ScanState":
        # Eine Einheit unter dem Minimum: der erste Winkel ist immer "grösser"
        return cls(kind=kind, last_angle=kind.minimum - 1.0)

    def step(self, angle_raw, value_raw) -> "ScanState":
        """
        Verarbeitet eine Zeile (angle, value).

        Raises:
            PatternError: bei Bereichs- oder Reihenfolgeverletzung
        """
        angle = normalize_angle(angle_raw, self.kind)
        if angle <= self.last_angle:
            raise PatternError(SEQUENCE)
        self.last_angle = angle

        pat, was_db = normalize_field(value_raw)
        if pat > FIELD_MAX:
            raise PatternError(FIELD_RANGE)
        if was_db:
            self.assumed_db = True
        if pat > FIELD_MIN:
            self.all_floor = False
        if pat > self.max_field:
            self.max_field = pat

        self.points.append(AntPoint(angle, pat))
        return self

    @property
    def is_empty(self) -> bool:
        return len(self.points) == 0


@dataclass(frozen=True)
class SequenceResult:
    """Ergebnis einer erfolgreichen Prüfung"""
    points: Tuple[AntPoint, ...]
    max_field: float
    assumed_db: bool
    all_floor: bool
    advisories: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return len(self.points) == 0


def unpack_row(row, width: int) -> Tuple:
    """
    Zerlegt eine Zeile der Datenquelle in genau width Felder.

    Raises:
        PatternError: ANGLE_RANGE bei falscher Feldzahl (fehlerhafte Zeile)
    """
    try:
        values = tuple(row)
    except TypeError:
        raise PatternError(ANGLE_RANGE) from None
    if len(values) != width:
        raise PatternError(ANGLE_RANGE)
    return values


def scan(rows: Iterable[Tuple], kind: AngleKind) -> ScanState:
    """
    Faltet eine Zeilenfolge in einen ScanState.

    Bricht beim ersten fatalen Fehler ab (keine weiteren Zeilen gelesen).
    """
    state = ScanState.start(kind)
    for row in rows:
        angle_raw, value_raw = unpack_row(row, 2)
        state = state.step(angle_raw, value_raw)
    return state


def check_points(state: ScanState, check_peak: bool = True) -> None:
    """
    Prüfungen am Ende der Zeilenfolge (nur für nicht-leere Zustände).

    Raises:
        PatternError: NOT_ENOUGH_POINTS oder PEAK_TOO_SMALL
    """
    if len(state.points) < PATTERN_REQUIRED_POINTS:
        raise PatternError(NOT_ENOUGH_POINTS)
    if check_peak and (state.max_field < PEAK_SIGNIFICANCE_MIN):
        raise PatternError(PEAK_TOO_SMALL)


def finish(state: ScanState, check_peak: bool = True) -> SequenceResult:
    """
    Schliesst einen Durchlauf ab.

    Ein leerer Zustand wird ungeprüft zurückgegeben, ob "leer" zulässig ist
    entscheidet der Aufrufer.

    Args:
        state: ScanState nach dem Durchlauf
        check_peak: Maximum prüfen (PEAK_SIGNIFICANCE_MIN, FIELD_MAX_CHECK)

    Returns:
        SequenceResult mit Hinweisen (ASSUMED_DB, SUB_UNITY_PEAK)
    """
    advisories = []
    if not state.is_empty:
        check_points(state, check_peak)
        if state.assumed_db:
            advisories.append(ASSUMED_DB)
        if check_peak and (state.max_field < FIELD_MAX_CHECK):
            advisories.append(SUB_UNITY_PEAK)

    return SequenceResult(
        points=tuple(state.points),
        max_field=state.max_field,
        assumed_db=state.assumed_db,
        all_floor=state.all_floor,
        advisories=tuple(advisories),
    )


def validate_sequence(
    rows: Iterable[Tuple],
    kind: AngleKind,
    check_peak: bool = True,
) -> SequenceResult:
    """
    Prüft eine Zeilenfolge (angle, value) vollständig.

    Args:
        rows: Zeilen aufsteigend nach Winkel
        kind: AngleKind.AZIMUTH oder AngleKind.DEPRESSION
        check_peak: Maximum prüfen

    Returns:
        SequenceResult (bei leerer Folge ohne Punkte)

    Raises:
        PatternError: bei jedem fatalen Fehler; es gibt kein Teilergebnis
    """
    return finish(scan(rows, kind), check_peak)
