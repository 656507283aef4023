"""Test der Normalisierung von Winkeln und Feldwerten."""

import math

import pytest

from ant_pattern.patterns import (
    AngleKind,
    PatternError,
    db_to_relative_field,
    normalize_angle,
    normalize_field,
    round_to,
)
from ant_pattern.patterns.diagnostics import ANGLE_RANGE, FIELD_RANGE


def test_round_to_is_idempotent():
    """Bereits gerundete Werte bleiben beim erneuten Runden unverändert."""
    for value in [0.1234, 12.3456, 359.9994, -45.0005, 0.0, 1.0]:
        once = round_to(value, 1000.0)
        twice = round_to(once, 1000.0)
        assert once == twice, f"{value}: {once} != {twice}"


def test_round_to_half_even():
    """Halbe Werte werden zur geraden Zahl gerundet."""
    assert round_to(1.5, 1.0) == 2.0
    assert round_to(2.5, 1.0) == 2.0
    assert round_to(12.3456, 1000.0) == pytest.approx(12.346)


def test_db_conversion():
    """-20 dB entspricht 0.1, 0 dB entspricht 1.0."""
    assert db_to_relative_field(-20.0) == pytest.approx(0.1)
    assert db_to_relative_field(0.0) == 1.0
    assert db_to_relative_field(-6.0) == pytest.approx(0.501187, rel=1e-5)


def test_normalize_field_plain_value():
    """Positive Werte sind relative Feldstärke."""
    assert normalize_field(0.5) == (0.5, False)
    assert normalize_field(0.12345) == (pytest.approx(0.123), False)


def test_normalize_field_negative_is_db():
    """Negative Werte werden als dB umgerechnet und markiert."""
    field, assumed_db = normalize_field(-20.0)
    assert field == pytest.approx(0.1)
    assert assumed_db is True


def test_normalize_field_floor():
    """Werte unter FIELD_MIN werden still angehoben."""
    assert normalize_field(0.0) == (0.001, False)
    assert normalize_field(0.0004) == (0.001, False)

    field, assumed_db = normalize_field(-200.0)
    assert field == 0.001
    assert assumed_db is True


def test_normalize_field_keeps_values_above_ceiling():
    """Die Obergrenze prüft erst der Aufrufer."""
    assert normalize_field(1.2) == (1.2, False)


@pytest.mark.parametrize("raw", ["abc", None, float("nan"), float("inf")])
def test_normalize_field_malformed(raw):
    """Nicht-numerische Werte gelten als Bereichsverletzung."""
    with pytest.raises(PatternError) as exc_info:
        normalize_field(raw)
    assert exc_info.value.reason == FIELD_RANGE


def test_normalize_angle_range():
    """Azimut 0 bis 359.999, Depression -90 bis 90."""
    assert normalize_angle(0.0, AngleKind.AZIMUTH) == 0.0
    assert normalize_angle("90.5", AngleKind.AZIMUTH) == 90.5
    assert normalize_angle(359.9994, AngleKind.AZIMUTH) == pytest.approx(359.999)
    assert normalize_angle(-90.0, AngleKind.DEPRESSION) == -90.0
    assert normalize_angle(90.0, AngleKind.DEPRESSION) == 90.0

    for raw, kind in [
        (360.0, AngleKind.AZIMUTH),
        (359.9996, AngleKind.AZIMUTH),  # rundet auf 360.0
        (-1.0, AngleKind.AZIMUTH),
        (90.5, AngleKind.DEPRESSION),
        (-91.0, AngleKind.DEPRESSION),
        ("north", AngleKind.AZIMUTH),
        (None, AngleKind.DEPRESSION),
        (math.nan, AngleKind.AZIMUTH),
    ]:
        with pytest.raises(PatternError) as exc_info:
            normalize_angle(raw, kind)
        assert exc_info.value.reason == ANGLE_RANGE, f"{raw} {kind}"


def test_angle_kind_limits():
    """AngleKind liefert Grenzen und Raster."""
    assert AngleKind.AZIMUTH.minimum == 0.0
    assert AngleKind.AZIMUTH.maximum == 359.999
    assert AngleKind.DEPRESSION.minimum == -90.0
    assert AngleKind.DEPRESSION.scale == 1000.0
