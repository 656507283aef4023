"""
Lädt Stationsdaten-Tabellen für TableSource.

Unterstützt:
- ODS/XLSX-Arbeitsmappe, ein Blatt pro Tabelle
- Verzeichnis mit <tabelle>.csv Dateien
- Einzelne CSV-Datei (Tabellenname = Dateiname ohne Endung)
"""

from pathlib import Path
from typing import Dict
import pandas as pd


def _clean(df: pd.DataFrame) -> pd.DataFrame:
    # Spaltennamen normalisieren (Leerzeichen entfernen)
    df.columns = [str(c).strip() for c in df.columns]
    return df


def load_tables(
    path: Path,
    sep: str = ",",
    decimal: str = ".",
) -> Dict[str, pd.DataFrame]:
    """
    Lädt alle Tabellen aus einer Datei oder einem Verzeichnis.

    Args:
        path: Arbeitsmappe (.ods, .xlsx, .xls), CSV-Datei oder Verzeichnis
        sep: CSV-Trennzeichen (z.B. ";" bei deutschem Format)
        decimal: Dezimaltrenner für CSV (z.B. ",")

    Returns:
        Dictionary: Tabellenname -> DataFrame

    Raises:
        FileNotFoundError: wenn path nicht existiert
        ValueError: bei unbekanntem Dateiformat
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)

    if path.is_dir():
        tables = {
            csv_file.stem: _clean(pd.read_csv(csv_file, sep=sep, decimal=decimal))
            for csv_file in sorted(path.glob("*.csv"))
        }
    elif path.suffix.lower() == ".csv":
        tables = {path.stem: _clean(pd.read_csv(path, sep=sep, decimal=decimal))}
    elif path.suffix.lower() in (".ods", ".xlsx", ".xls"):
        engine = 'odf' if path.suffix.lower() == ".ods" else None
        sheets = pd.read_excel(path, sheet_name=None, engine=engine)
        tables = {str(name).strip(): _clean(df) for name, df in sheets.items()}
    else:
        raise ValueError(f"Unbekanntes Tabellenformat: {path.suffix}")

    print(f"  Tabellen aus {path.name}: {', '.join(tables) or '(keine)'}")
    return tables
