"""
Matrix-Diagramme (ein Vertikaldiagramm pro Azimut-Schnitt).

Zwei Betriebsarten, je nach Datenquelle:

Modus A (assemble_matrix):
    Eine einzige Zeilenfolge (azimuth, depression, field), sortiert nach
    Azimut und Depression. Jede Azimut-Gruppe wird ein eigener Schnitt.

Modus B (merge_matrix, Legacy-Schema):
    1. Basis-Raster: 36 Schnitte bei 0°, 10°, ..., 350°, jeder Schnitt aus
       einer eigenen Spalte der Haupttabelle. Pflicht und atomar.
    2. Ergänzungen: Zeilenfolge (azimuth, depression, field) mit
       zusätzlichen Schnitten bei anderen Azimuten und/oder zusätzlichen
       Depressionswinkeln für bestehende Schnitte. Wird sortiert in die
       vorhandene Schnittliste eingefügt.

In beiden Modi gilt alles-oder-nichts: ein einziger ungültiger Schnitt
verwirft die ganze Matrix.
"""

from enum import Enum
from typing import Callable, Iterable, Iterator, List, Tuple

from ..config import (
    AZIMUTH_MIN,
    BASE_GRID_COUNT,
    BASE_GRID_STEP_DEG,
    DEPRESSION_MIN,
    FIELD_MAX,
    FIELD_MAX_CHECK,
    FIELD_MIN,
    PATTERN_REQUIRED_POINTS,
    PEAK_SIGNIFICANCE_MIN,
)
from ..models import AntPoint, AntSlice, MatrixPattern
from .assembler import EmptyPolicy, assemble_elevation
from .diagnostics import (
    PatternError,
    ASSUMED_DB,
    DUPLICATE_VERTICAL,
    FIELD_RANGE,
    NOT_ENOUGH_POINTS,
    NOT_FOUND,
    PEAK_TOO_SMALL,
    SEQUENCE,
    STAGE_BASE_GRID,
    STAGE_REFINEMENT,
    SUB_UNITY_PEAK,
)
from .normalize import AngleKind, normalize_angle, normalize_field
from .sequence import ScanState, check_points, unpack_row


class MatrixMode(Enum):
    """Aufbau der Matrix-Diagramme einer Datenquelle"""
    NONE = "none"        # keine Matrix-Diagramme
    UNIFIED = "unified"  # Modus A: eine Tabelle mit allen Schnitten
    SPLIT = "split"      # Modus B: Basis-Raster + Ergänzungstabelle


class SliceList:
    """
    Nach Azimut aufsteigend sortierte Liste von Schnitten.

    Suche und Einfügen per linearer Suche, O(n) pro Einfügung. Eine Matrix
    hat höchstens einige Dutzend Schnitte.
    """

    def __init__(self):
        self._slices: List[AntSlice] = []

    def locate(self, value: float) -> Tuple[int, bool]:
        """
        Sucht einen Azimut.

        Returns:
            (index, found) - bei found=False die Einfügeposition
        """
        for i, s in enumerate(self._slices):
            if value == s.value:
                return i, True
            if value < s.value:
                return i, False
        return len(self._slices), False

    def insert(self, index: int, new_slice: AntSlice):
        self._slices.insert(index, new_slice)

    def append(self, new_slice: AntSlice):
        if self._slices and (new_slice.value <= self._slices[-1].value):
            raise ValueError(f"Slice at {new_slice.value} breaks ascending order")
        self._slices.append(new_slice)

    @property
    def last_value(self) -> float:
        return self._slices[-1].value if self._slices else AZIMUTH_MIN - 1.0

    def __getitem__(self, index: int) -> AntSlice:
        return self._slices[index]

    def __len__(self) -> int:
        return len(self._slices)

    def __iter__(self) -> Iterator[AntSlice]:
        return iter(self._slices)

    def freeze(self) -> Tuple[AntSlice, ...]:
        return tuple(s.frozen() for s in self._slices)


def _matrix_advisories(max_field: float, assumed_db: bool) -> Tuple[str, ...]:
    # Matrixweit, höchstens einmal pro Hinweis
    advisories = []
    if assumed_db:
        advisories.append(ASSUMED_DB)
    if max_field < FIELD_MAX_CHECK:
        advisories.append(SUB_UNITY_PEAK)
    return tuple(advisories)


def _check_matrix_peak(max_field: float):
    if max_field < PEAK_SIGNIFICANCE_MIN:
        raise PatternError(PEAK_TOO_SMALL)


def assemble_matrix(
    rows: Iterable[Tuple],
    check_slice_peak: bool = True,
) -> MatrixPattern:
    """
    Modus A: Matrix aus einer einzigen, sortierten Zeilenfolge.

    Args:
        rows: Zeilen (azimuth, depression, field), sortiert nach Azimut,
            dann Depression
        check_slice_peak: Maximum jedes Schnitts prüfen (PEAK_SIGNIFICANCE_MIN)

    Returns:
        MatrixPattern

    Raises:
        PatternError: bei ungültigen Daten, mit Azimut des Schnitts
    """
    slices = SliceList()
    state = None
    current_az = None
    max_field = FIELD_MIN
    assumed_db = False

    def close_slice():
        nonlocal max_field, assumed_db
        try:
            check_points(state, check_slice_peak)
        except PatternError as e:
            raise e.at(azimuth=current_az) from None
        max_field = max(max_field, state.max_field)
        assumed_db = assumed_db or state.assumed_db
        slices.append(AntSlice(current_az, list(state.points)))

    for row in rows:
        az_raw, dep_raw, val_raw = unpack_row(row, 3)
        az = normalize_angle(az_raw, AngleKind.AZIMUTH)

        if az != current_az:
            if state is not None:
                close_slice()
            # Gruppen müssen aufsteigend kommen
            if az <= slices.last_value:
                raise PatternError(SEQUENCE, azimuth=az)
            state = ScanState.start(AngleKind.DEPRESSION)
            current_az = az

        try:
            state.step(dep_raw, val_raw)
        except PatternError as e:
            reason = DUPLICATE_VERTICAL if e.reason == SEQUENCE else None
            raise e.at(azimuth=az, reason=reason) from None

    if state is None:
        raise PatternError(NOT_FOUND)
    close_slice()

    _check_matrix_peak(max_field)

    return MatrixPattern(
        slices=slices.freeze(),
        advisories=_matrix_advisories(max_field, assumed_db),
    )


def base_grid_azimuths() -> List[int]:
    """Azimute des Basis-Rasters: 0, 10, ..., 350"""
    return [i * BASE_GRID_STEP_DEG for i in range(BASE_GRID_COUNT)]


def _build_base_grid(
    base_columns: Callable[[int], Iterable[Tuple]],
    check_slice_peak: bool,
) -> Tuple[SliceList, float, bool]:
    slices = SliceList()
    max_field = FIELD_MIN
    assumed_db = False

    for az in base_grid_azimuths():
        try:
            column = assemble_elevation(
                base_columns(az),
                empty_policy=EmptyPolicy.REQUIRED,
                check_peak=check_slice_peak,
            )
        except PatternError as e:
            raise e.at(azimuth=float(az), stage=STAGE_BASE_GRID) from None

        max_field = max(max_field, column.peak)
        assumed_db = assumed_db or (ASSUMED_DB in column.advisories)
        slices.append(AntSlice(float(az), list(column.points)))

    return slices, max_field, assumed_db


def merge_matrix(
    base_columns: Callable[[int], Iterable[Tuple]],
    refinement_rows: Iterable[Tuple],
    check_slice_peak: bool = True,
) -> MatrixPattern:
    """
    Modus B: Basis-Raster plus sortiert eingefügte Ergänzungen.

    Ergänzungszeilen zu einem vorhandenen Azimut werden per Einfügesuche in
    dessen Punktliste einsortiert (ein bereits vorhandener
    Depressionswinkel ist fatal). Zeilen zu einem neuen Azimut bilden einen
    neuen Schnitt, der an der passenden Stelle eingefügt wird; dessen
    Punktzahl und Maximum werden geprüft, sobald die Gruppe abgeschlossen
    ist.

    Args:
        base_columns: Liefert zu einem Raster-Azimut (0, 10, ...) die Zeilen
            (depression, field) der zugehörigen Spalte
        refinement_rows: Zeilen (azimuth, depression, field), sortiert nach
            Azimut, dann Depression
        check_slice_peak: Maximum jedes Raster- und jedes neuen Schnitts prüfen

    Returns:
        MatrixPattern

    Raises:
        PatternError: mit Azimut und Stufe (Basis-Raster / Ergänzung)
    """
    slices, max_field, assumed_db = _build_base_grid(base_columns, check_slice_peak)

    current = None
    is_new = False
    last_az = AZIMUTH_MIN - 1.0
    last_dep = DEPRESSION_MIN - 1.0

    def fail(reason: str) -> PatternError:
        return PatternError(reason, azimuth=current.value, stage=STAGE_REFINEMENT)

    def check_new_slice():
        # Neue Schnitte entstehen zeilenweise, Prüfung erst am Gruppenende.
        # Gleiche Regeln wie ein Raster-Schnitt (assemble_elevation).
        if not is_new:
            return
        if check_slice_peak and all(p.relative_field <= FIELD_MIN for p in current.points):
            raise fail(NOT_FOUND)
        if len(current.points) < PATTERN_REQUIRED_POINTS:
            raise fail(NOT_ENOUGH_POINTS)
        if check_slice_peak and (current.peak() < PEAK_SIGNIFICANCE_MIN):
            raise fail(PEAK_TOO_SMALL)

    for row in refinement_rows:
        try:
            az_raw, dep_raw, val_raw = unpack_row(row, 3)
            az = normalize_angle(az_raw, AngleKind.AZIMUTH)
        except PatternError as e:
            raise e.at(stage=STAGE_REFINEMENT) from None

        if az != last_az:
            check_new_slice()

            index, found = slices.locate(az)
            if found:
                current = slices[index]
                is_new = False
            else:
                current = AntSlice(az, [])
                slices.insert(index, current)
                is_new = True

            last_az = az
            last_dep = DEPRESSION_MIN - 1.0

        try:
            dep = normalize_angle(dep_raw, AngleKind.DEPRESSION)
        except PatternError as e:
            raise e.at(azimuth=current.value, stage=STAGE_REFINEMENT) from None
        if dep <= last_dep:
            raise fail(DUPLICATE_VERTICAL)
        last_dep = dep

        try:
            pat, was_db = normalize_field(val_raw)
        except PatternError as e:
            raise e.at(azimuth=current.value, stage=STAGE_REFINEMENT) from None
        if pat > FIELD_MAX:
            raise fail(FIELD_RANGE)
        assumed_db = assumed_db or was_db
        max_field = max(max_field, pat)

        new_point = AntPoint(dep, pat)

        if is_new:
            current.points.append(new_point)
        elif not current.insert_point(new_point):
            raise fail(DUPLICATE_VERTICAL)

    check_new_slice()

    _check_matrix_peak(max_field)

    return MatrixPattern(
        slices=slices.freeze(),
        advisories=_matrix_advisories(max_field, assumed_db),
    )
