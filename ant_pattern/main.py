"""
Antennendiagramm-Engine: CLI

Prüft ein Antennendiagramm aus Stationsdaten-Tabellen (ODS/XLSX-Arbeitsmappe
oder CSV-Verzeichnis) und zeigt eine Zusammenfassung an.
"""

from pathlib import Path
from typing import Optional
import sys

from .loaders import SchemaDialect, TableSource, load_tables
from .patterns import (
    ErrorLogger,
    PatternError,
    get_antenna_pattern,
    get_elevation_pattern,
    get_matrix_pattern,
)
from .utils import error_and_exit, print_ok, warn_advisories

KINDS = ("horizontal", "elevation", "matrix")


def check_pattern(
    tables_path: Path,
    dialect: str,
    antenna_id: str,
    kind: str = "horizontal",
    sep: str = ",",
    decimal: str = ".",
    errors: Optional[ErrorLogger] = None,
):
    """
    Lädt ein Diagramm und gibt eine Zusammenfassung aus.

    Args:
        tables_path: Arbeitsmappe oder CSV-Verzeichnis
        dialect: Schema ("cdbs", "lms", "wireless", "generic")
        antenna_id: ID des Antennendatensatzes
        kind: "horizontal", "elevation" oder "matrix"
        sep: CSV-Trennzeichen
        decimal: CSV-Dezimaltrenner
        errors: Optional - ErrorLogger für Hinweise

    Returns:
        HorizontalPattern, ElevationPattern oder MatrixPattern

    Raises:
        PatternError: bei ungültigen Diagrammdaten
    """
    print("=" * 60)
    print(f"Antennendiagramm {antenna_id} ({dialect}, {kind})")
    print("=" * 60)

    tables = load_tables(Path(tables_path), sep=sep, decimal=decimal)
    source = TableSource(SchemaDialect(dialect), tables)

    if kind == "horizontal":
        pattern = get_antenna_pattern(source, antenna_id, errors)
    elif kind == "elevation":
        pattern = get_elevation_pattern(source, antenna_id, errors)
    elif kind == "matrix":
        pattern = get_matrix_pattern(source, antenna_id, errors)
    else:
        raise ValueError(f"Unknown pattern kind: {kind}")

    if pattern is None:
        raise ValueError("Keine Antennen-ID angegeben")

    if kind == "matrix":
        points = sum(len(s.points) for s in pattern.slices)
        print(f"  Schnitte: {len(pattern)}, Punkte: {points}")
        if len(pattern):
            print(f"  Azimut: {pattern.azimuths.min():.1f}° - {pattern.azimuths.max():.1f}°")
        print(f"  Maximum: {pattern.peak:.3f}")
    elif pattern.is_empty:
        print("  Keine Diagrammdaten (omnidirektional)")
    else:
        print(f"  Punkte: {len(pattern)}, "
              f"{pattern.angles.min():.1f}° - {pattern.angles.max():.1f}°")
        print(f"  Maximum: {pattern.peak:.3f}, "
              f"max. Dämpfung: {pattern.attenuation_db().max():.1f} dB")

    return pattern


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(
        description="Antennendiagramm-Engine: Prüft Antennendiagramme aus Stationsdaten-Tabellen"
    )
    parser.add_argument(
        "tables",
        type=Path,
        help="ODS/XLSX-Arbeitsmappe (ein Blatt pro Tabelle) oder Verzeichnis mit CSV-Dateien",
    )
    parser.add_argument(
        "-d", "--dialect",
        choices=[d.value for d in SchemaDialect],
        default=SchemaDialect.CDBS.value,
        help="Schema der Tabellen (default: cdbs)",
    )
    parser.add_argument(
        "-a", "--antenna-id",
        required=True,
        help="ID des Antennendatensatzes",
    )
    parser.add_argument(
        "-k", "--kind",
        choices=KINDS,
        default="horizontal",
        help="Diagrammart (default: horizontal)",
    )
    parser.add_argument(
        "--sep",
        default=",",
        help="CSV-Trennzeichen (default: ',')",
    )
    parser.add_argument(
        "--decimal",
        default=".",
        help="CSV-Dezimaltrenner (default: '.')",
    )

    args = parser.parse_args(argv)

    if not args.tables.exists():
        print(f"Fehler: Datei nicht gefunden: {args.tables}")
        sys.exit(1)

    errors = ErrorLogger()

    try:
        check_pattern(
            tables_path=args.tables,
            dialect=args.dialect,
            antenna_id=args.antenna_id,
            kind=args.kind,
            sep=args.sep,
            decimal=args.decimal,
            errors=errors,
        )
    except PatternError as e:
        error_and_exit(
            f"Diagramm für Antennen-ID {args.antenna_id} ist ungültig: {e.describe()}"
        )
    except ValueError as e:
        error_and_exit(str(e))

    if errors.has_messages():
        warn_advisories(args.antenna_id, errors.messages)
    else:
        print_ok("Diagramm gültig")


if __name__ == "__main__":
    main()
