"""Test der Sequenz-Prüfung (Reihenfolge, Bereich, Punktzahl, Maximum)."""

import pytest

from ant_pattern.models import AntPoint
from ant_pattern.patterns import (
    AngleKind,
    PatternError,
    ScanState,
    finish,
    scan,
    unpack_row,
    validate_sequence,
)
from ant_pattern.patterns.diagnostics import (
    ANGLE_RANGE,
    ASSUMED_DB,
    FIELD_RANGE,
    NOT_ENOUGH_POINTS,
    PEAK_TOO_SMALL,
    SEQUENCE,
    SUB_UNITY_PEAK,
)


def test_valid_horizontal_stream():
    """4 Punkte mit Maximum 1.0 -> gültig, keine Hinweise."""
    rows = [(0, 1.0), (90, 0.5), (180, 0.25), (270, 0.5)]
    result = validate_sequence(rows, AngleKind.AZIMUTH)

    assert result.points == (
        AntPoint(0.0, 1.0),
        AntPoint(90.0, 0.5),
        AntPoint(180.0, 0.25),
        AntPoint(270.0, 0.5),
    )
    assert result.max_field == 1.0
    assert result.advisories == ()


def test_duplicate_angle_is_fatal():
    """Doppelter Azimut -> fatal."""
    with pytest.raises(PatternError, match="duplicate or out-of-sequence angle") as exc_info:
        validate_sequence([(0, 1.0), (0, 0.5)], AngleKind.AZIMUTH)
    assert exc_info.value.reason == SEQUENCE


def test_decreasing_angle_is_fatal():
    """Nicht aufsteigende Winkel werden nicht sortiert, sondern abgelehnt."""
    with pytest.raises(PatternError) as exc_info:
        validate_sequence([(10, 1.0), (5, 0.5), (20, 0.5)], AngleKind.AZIMUTH)
    assert exc_info.value.reason == SEQUENCE


def test_duplicate_after_rounding_is_fatal():
    """Winkel, die auf denselben Rasterwert fallen, gelten als doppelt."""
    with pytest.raises(PatternError) as exc_info:
        validate_sequence([(10.0001, 1.0), (10.0002, 0.5)], AngleKind.AZIMUTH)
    assert exc_info.value.reason == SEQUENCE


def test_angle_out_of_range():
    with pytest.raises(PatternError) as exc_info:
        validate_sequence([(0, 1.0), (400, 0.5)], AngleKind.AZIMUTH)
    assert exc_info.value.reason == ANGLE_RANGE


def test_field_above_ceiling():
    with pytest.raises(PatternError, match="field value out of range") as exc_info:
        validate_sequence([(0, 1.0), (90, 1.5)], AngleKind.AZIMUTH)
    assert exc_info.value.reason == FIELD_RANGE


def test_malformed_rows_are_range_violations():
    """Nicht-numerische Zeilen: fatal, kein Absturz."""
    with pytest.raises(PatternError) as exc_info:
        validate_sequence([(0, 1.0), ("x", 0.5)], AngleKind.AZIMUTH)
    assert exc_info.value.reason == ANGLE_RANGE

    with pytest.raises(PatternError) as exc_info:
        validate_sequence([(0, 1.0), (90, "")], AngleKind.AZIMUTH)
    assert exc_info.value.reason == FIELD_RANGE


def test_not_enough_points():
    with pytest.raises(PatternError, match="not enough points"):
        validate_sequence([(0, 1.0)], AngleKind.AZIMUTH)


def test_maximum_too_small():
    """Maximum unter 0.5 -> Diagramm unbrauchbar."""
    with pytest.raises(PatternError) as exc_info:
        validate_sequence([(0, 0.3), (90, 0.4)], AngleKind.AZIMUTH)
    assert exc_info.value.reason == PEAK_TOO_SMALL


def test_sub_unity_peak_is_advisory():
    """Maximum 0.9 -> gültig mit Hinweis."""
    result = validate_sequence([(0, 0.9), (90, 0.5)], AngleKind.AZIMUTH)
    assert len(result.points) == 2
    assert result.advisories == (SUB_UNITY_PEAK,)


def test_near_unity_peak_has_no_advisory():
    result = validate_sequence([(0, 0.98), (90, 0.5)], AngleKind.AZIMUTH)
    assert result.advisories == ()


def test_db_values_are_advisory():
    """Negative Werte: Umrechnung aus dB mit Hinweis."""
    result = validate_sequence([(0, 1.0), (180, -20.0)], AngleKind.AZIMUTH)
    assert result.points[1].relative_field == pytest.approx(0.1)
    assert result.assumed_db is True
    assert result.advisories == (ASSUMED_DB,)


def test_empty_stream_is_not_a_failure():
    """Ob leer zulässig ist, entscheidet der Aufrufer."""
    result = validate_sequence([], AngleKind.DEPRESSION)
    assert result.is_empty
    assert result.advisories == ()


def test_fail_fast():
    """Nach einem fatalen Fehler werden keine weiteren Zeilen gelesen."""
    def rows():
        yield (0, 1.0)
        yield (0, 0.5)
        raise AssertionError("read past the failing row")

    with pytest.raises(PatternError):
        validate_sequence(rows(), AngleKind.AZIMUTH)


def test_partial_scan_state():
    """Der Zwischenstand ist nach jedem Schritt prüfbar."""
    state = ScanState.start(AngleKind.DEPRESSION)
    assert state.last_angle == -91.0

    state.step(-10, 0.5).step(0, 1.0)
    assert state.last_angle == 0.0
    assert state.max_field == 1.0
    assert len(state.points) == 2
    assert not state.all_floor

    result = finish(state)
    assert result.points[-1] == AntPoint(0.0, 1.0)


def test_all_floor_flag():
    state = scan([(-10, 0.0), (0, 0.0), (10, 0.0)], AngleKind.DEPRESSION)
    assert state.all_floor
    assert all(p.relative_field == 0.001 for p in state.points)


def test_output_invariants():
    """Gültige Diagramme: strikt aufsteigend, alle Werte im Bereich."""
    rows = [(az, 0.2 + 0.8 * abs(180 - az) / 180) for az in range(0, 360, 5)]
    result = validate_sequence(rows, AngleKind.AZIMUTH)

    angles = [p.angle for p in result.points]
    assert all(a < b for a, b in zip(angles, angles[1:]))
    assert all(0.0 <= a <= 359.999 for a in angles)
    assert all(0.001 <= p.relative_field <= 1.0 for p in result.points)


@pytest.mark.parametrize("row", [(0,), (0, 1.0, 5), (), 7, None])
def test_row_with_wrong_width_is_range_violation(row):
    """Zeilen mit falscher Feldzahl sind fatal, kein Absturz."""
    with pytest.raises(PatternError) as exc_info:
        unpack_row(row, 2)
    assert exc_info.value.reason == ANGLE_RANGE


def test_short_row_in_stream():
    rows = [(0, 1.0), (90,), (180, 0.5)]
    with pytest.raises(PatternError) as exc_info:
        validate_sequence(rows, AngleKind.AZIMUTH)
    assert exc_info.value.reason == ANGLE_RANGE
