"""Test Tabellen-Datenquellen (pandas) und Laden von CSV-Tabellen."""

import pandas as pd
import pytest

from ant_pattern.loaders import SchemaDialect, TableSource, load_tables
from ant_pattern.patterns import (
    MatrixMode,
    PatternError,
    get_antenna_pattern,
    get_elevation_pattern,
    get_matrix_pattern,
)
from ant_pattern.patterns.diagnostics import NOT_FOUND, STAGE_BASE_GRID


def cdbs_elevation_table(antenna_id=7, depressions=(-10, 0, 10), fields=(0.5, 1.0, 0.5)):
    """elevation_pattern mit Basis-Raster-Spalten field_value0 ... field_value350."""
    data = {
        "elevation_antenna_id": [antenna_id] * len(depressions),
        "depression_angle": list(depressions),
        "field_value": list(fields),
    }
    for az in range(0, 360, 10):
        data[f"field_value{az}"] = list(fields)
    return pd.DataFrame(data)


@pytest.fixture
def cdbs_tables():
    return {
        "ant_pattern": pd.DataFrame({
            "antenna_id": [1, 1, 1, 2, 1],
            "azimuth": [180, 0, 90, 0, 270],
            "field_value": [0.25, 1.0, 0.5, 1.0, 0.5],
        }),
        "elevation_pattern": cdbs_elevation_table(),
        "elevation_pattern_addl": pd.DataFrame({
            "elevation_antenna_id": [7, 7, 7, 7],
            "azimuth": [15, 15, 15, 10],
            "depression_angle": [5, -5, 0, 5],
            "field_value": [0.6, 0.6, 1.0, 0.7],
        }),
    }


def test_cdbs_horizontal_sorted(cdbs_tables):
    source = TableSource(SchemaDialect.CDBS, cdbs_tables)
    rows = source.horizontal_rows(1)
    assert [r[0] for r in rows] == [0, 90, 180, 270]

    pattern = get_antenna_pattern(source, 1)
    assert list(pattern.angles) == [0.0, 90.0, 180.0, 270.0]


def test_key_as_string_or_number(cdbs_tables):
    source = TableSource("cdbs", cdbs_tables)
    assert len(source.horizontal_rows("1")) == 4
    assert len(source.horizontal_rows(1.0)) == 4
    assert len(source.horizontal_rows(" 2 ")) == 1


def test_cdbs_split_matrix(cdbs_tables):
    """Basis-Raster aus field_valueNN-Spalten plus Ergänzungstabelle."""
    source = TableSource(SchemaDialect.CDBS, cdbs_tables)
    assert source.matrix_mode is MatrixMode.SPLIT
    assert source.base_grid_rows(7, 20) == [(-10, 0.5), (0, 1.0), (10, 0.5)]

    pattern = get_matrix_pattern(source, 7)
    assert len(pattern) == 37
    assert [p.angle for p in pattern.slice_at(15.0).points] == [-5.0, 0.0, 5.0]
    assert [p.angle for p in pattern.slice_at(10.0).points] == [-10.0, 0.0, 5.0, 10.0]


def test_cdbs_base_grid_column_missing_values(cdbs_tables):
    table = cdbs_tables["elevation_pattern"]
    table["field_value120"] = [0.0, 0.0, 0.0]
    source = TableSource(SchemaDialect.CDBS, cdbs_tables)

    with pytest.raises(PatternError) as exc_info:
        get_matrix_pattern(source, 7)
    assert exc_info.value.reason == NOT_FOUND
    assert exc_info.value.azimuth == 120.0
    assert exc_info.value.stage == STAGE_BASE_GRID


def test_cdbs_elevation_required(cdbs_tables):
    source = TableSource(SchemaDialect.CDBS, cdbs_tables)
    assert len(get_elevation_pattern(source, 7)) == 3
    with pytest.raises(PatternError, match="not found"):
        get_elevation_pattern(source, 99)


def test_lms_elevation_uses_azimuth_zero():
    tables = {
        "app_antenna_elevation_pattern": pd.DataFrame({
            "aaep_antenna_record_id": ["a1"] * 5,
            "aaep_azimuth": [90, 0, 0, 90, 0],
            "aaep_depression_angle": [-10, 10, -10, 0, 0],
            "aaep_field_value": [0.3, 0.5, 0.5, 0.4, 1.0],
        }),
    }
    source = TableSource(SchemaDialect.LMS, tables)

    elevation = get_elevation_pattern(source, "a1")
    assert [(p.angle, p.relative_field) for p in elevation.points] == [
        (-10.0, 0.5), (0.0, 1.0), (10.0, 0.5)
    ]

    # Matrix: alle Azimute, sortiert nach Azimut und Depression
    assert source.matrix_rows("a1") == [
        (0, -10, 0.5), (0, 0, 1.0), (0, 10, 0.5), (90, -10, 0.3), (90, 0, 0.4)
    ]


def test_lms_empty_elevation_is_omni():
    source = TableSource(SchemaDialect.LMS, {})
    assert get_elevation_pattern(source, "a1").is_empty
    assert source.elevation_rows("a1") == []


def test_wireless_has_no_matrix():
    source = TableSource(SchemaDialect.WIRELESS, {})
    with pytest.raises(ValueError):
        get_matrix_pattern(source, 1)
    with pytest.raises(ValueError):
        source.matrix_rows(1)


def test_missing_column():
    tables = {"ant_pattern": pd.DataFrame({"antenna_id": [1], "azimuth": [0]})}
    source = TableSource(SchemaDialect.CDBS, tables)
    with pytest.raises(ValueError, match="field_value"):
        source.horizontal_rows(1)


def test_malformed_values_fail_validation():
    tables = {
        "source_horizontal_pattern": pd.DataFrame({
            "source_key": [3, 3, 3],
            "azimuth": ["0", "90", "x"],
            "relative_field": [1.0, 0.5, 0.5],
        }),
    }
    source = TableSource(SchemaDialect.GENERIC, tables)
    with pytest.raises(PatternError):
        get_antenna_pattern(source, 3)


def test_load_tables_csv_directory(tmp_path):
    (tmp_path / "ant_pattern.csv").write_text(
        "antenna_id,azimuth,field_value\n"
        "1,0,1.0\n"
        "1,180,0.5\n"
    )
    (tmp_path / "notes.txt").write_text("ignored")

    tables = load_tables(tmp_path)
    assert list(tables) == ["ant_pattern"]
    assert list(tables["ant_pattern"].columns) == ["antenna_id", "azimuth", "field_value"]


def test_load_tables_german_csv(tmp_path):
    csv_file = tmp_path / "source_vertical_pattern.csv"
    csv_file.write_text(
        "source_key; depression_angle; relative_field\n"
        "5;-2,5;0,5\n"
        "5;0;1\n"
    )

    tables = load_tables(csv_file, sep=";", decimal=",")
    source = TableSource(SchemaDialect.GENERIC, tables)
    pattern = get_elevation_pattern(source, 5)
    assert [(p.angle, p.relative_field) for p in pattern.points] == [(-2.5, 0.5), (0.0, 1.0)]


def test_load_tables_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_tables(tmp_path / "missing.csv")

    other = tmp_path / "tables.json"
    other.write_text("{}")
    with pytest.raises(ValueError):
        load_tables(other)
