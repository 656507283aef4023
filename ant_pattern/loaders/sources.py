"""
Datenquellen für Antennendiagramme.

Eine Datenquelle liefert pro Antennen-ID geordnete Zeilenfolgen:
- Horizontal: (azimuth, field), aufsteigend nach Azimut
- Vertikal: (depression, field), aufsteigend nach Depression
- Matrix: (azimuth, depression, field), nach Azimut, dann Depression
- Basis-Raster (nur Modus B): pro 10°-Azimut eine (depression, field)-Folge

Zusätzlich legt sie fest, ob leere Diagramme zulässig sind (EmptyPolicy)
und wie Matrix-Diagramme aufgebaut sind (MatrixMode). Die Prüf-Engine
kennt nur diese Schnittstelle, nie das Schema dahinter.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Protocol, Tuple, runtime_checkable
import pandas as pd

from ..config import CDBS_TABLES, LMS_TABLES, WIRELESS_TABLES, GENERIC_TABLES
from ..patterns.assembler import EmptyPolicy
from ..patterns.matrix import MatrixMode


@runtime_checkable
class PatternSource(Protocol):
    """Schnittstelle einer Datenquelle"""
    horizontal_empty: EmptyPolicy
    elevation_empty: EmptyPolicy
    matrix_mode: MatrixMode

    def horizontal_rows(self, antenna_id) -> Iterable[Tuple]:
        ...

    def elevation_rows(self, antenna_id) -> Iterable[Tuple]:
        ...

    def matrix_rows(self, antenna_id) -> Iterable[Tuple]:
        ...

    def base_grid_rows(self, antenna_id, azimuth: int) -> Iterable[Tuple]:
        ...


class SchemaDialect(Enum):
    """Bekannte Schemas der Stationsdatenbanken"""
    CDBS = "cdbs"
    LMS = "lms"
    WIRELESS = "wireless"
    GENERIC = "generic"


@dataclass(frozen=True)
class DialectSpec:
    """Tabellen und Semantik eines Schemas"""
    tables: Dict[str, dict]
    horizontal_empty: EmptyPolicy
    elevation_empty: EmptyPolicy
    matrix_mode: MatrixMode


# CDBS: Vertikal-IDs sind nie reine Typbezeichnungen -> leer = nicht gefunden.
# Andere Schemas haben gemeinsame Antennen-IDs, evtl. ohne Diagrammdaten.
DIALECTS = {
    SchemaDialect.CDBS: DialectSpec(
        tables=CDBS_TABLES,
        horizontal_empty=EmptyPolicy.OMNI,
        elevation_empty=EmptyPolicy.REQUIRED,
        matrix_mode=MatrixMode.SPLIT,
    ),
    SchemaDialect.LMS: DialectSpec(
        tables=LMS_TABLES,
        horizontal_empty=EmptyPolicy.OMNI,
        elevation_empty=EmptyPolicy.OMNI,
        matrix_mode=MatrixMode.UNIFIED,
    ),
    SchemaDialect.WIRELESS: DialectSpec(
        tables=WIRELESS_TABLES,
        horizontal_empty=EmptyPolicy.OMNI,
        elevation_empty=EmptyPolicy.OMNI,
        matrix_mode=MatrixMode.NONE,
    ),
    SchemaDialect.GENERIC: DialectSpec(
        tables=GENERIC_TABLES,
        horizontal_empty=EmptyPolicy.OMNI,
        elevation_empty=EmptyPolicy.OMNI,
        matrix_mode=MatrixMode.UNIFIED,
    ),
}


def _key_mask(series: pd.Series, antenna_id) -> pd.Series:
    # IDs können als Zahl oder Text gespeichert sein ("123" vs. 123.0)
    mask = series.astype(str).str.strip() == str(antenna_id).strip()
    try:
        numeric_id = float(antenna_id)
    except (TypeError, ValueError):
        return mask
    return mask | (pd.to_numeric(series, errors='coerce') == numeric_id)


class TableSource:
    """
    Datenquelle über pandas-Tabellen (eine DataFrame pro Datenbanktabelle).

    Filtert nach Antennen-ID und sortiert wie ORDER BY 1 bzw. ORDER BY 1, 2.
    Fehlt eine Tabelle ganz, gibt es keine Zeilen.
    """

    def __init__(self, dialect, tables: Dict[str, pd.DataFrame]):
        """
        Args:
            dialect: SchemaDialect oder Name ("cdbs", "lms", ...)
            tables: Tabellenname -> DataFrame
        """
        self.dialect = SchemaDialect(dialect) if isinstance(dialect, str) else dialect
        self.schema = DIALECTS[self.dialect]
        self.tables = tables

    @property
    def horizontal_empty(self) -> EmptyPolicy:
        return self.schema.horizontal_empty

    @property
    def elevation_empty(self) -> EmptyPolicy:
        return self.schema.elevation_empty

    @property
    def matrix_mode(self) -> MatrixMode:
        return self.schema.matrix_mode

    def _query(self, kind: str, antenna_id, azimuth: Optional[int] = None) -> List[Tuple]:
        query = self.schema.tables.get(kind)
        if query is None:
            raise ValueError(f"{self.dialect.value}: no {kind} pattern table")

        df = self.tables.get(query["table"])
        if df is None:
            return []

        columns = [c.format(azimuth=azimuth) for c in query["columns"]]
        missing = [c for c in [query["key"]] + columns if c not in df.columns]
        if missing:
            raise ValueError(f"Table {query['table']} has no column(s): {', '.join(missing)}")

        mask = _key_mask(df[query["key"]], antenna_id)
        for col, value in query.get("filter", {}).items():
            mask &= pd.to_numeric(df[col], errors='coerce') == value

        subset = df.loc[mask, columns].reset_index(drop=True)
        if subset.empty:
            return []

        # Sortierung nach allen Spalten ausser dem Feldwert; ungültige Werte
        # bleiben roh erhalten und scheitern später bei der Prüfung
        sort_cols = columns[:-1]
        keys = subset[sort_cols].apply(pd.to_numeric, errors='coerce')
        order = keys.sort_values(sort_cols, kind='mergesort', na_position='last').index
        subset = subset.loc[order]

        return list(subset.itertuples(index=False, name=None))

    def horizontal_rows(self, antenna_id) -> List[Tuple]:
        return self._query("horizontal", antenna_id)

    def elevation_rows(self, antenna_id) -> List[Tuple]:
        return self._query("elevation", antenna_id)

    def matrix_rows(self, antenna_id) -> List[Tuple]:
        return self._query("matrix", antenna_id)

    def base_grid_rows(self, antenna_id, azimuth: int) -> List[Tuple]:
        return self._query("base_grid", antenna_id, azimuth=azimuth)


@dataclass
class MemorySource:
    """
    Datenquelle aus bereits abgefragten Zeilen (Antennen-ID -> Zeilenliste).

    Für Aufrufer mit eigener Abfrageschicht. base_grid: Antennen-ID ->
    {Azimut -> Zeilen}.
    """
    horizontal: Dict[str, List[Tuple]] = field(default_factory=dict)
    elevation: Dict[str, List[Tuple]] = field(default_factory=dict)
    matrix: Dict[str, List[Tuple]] = field(default_factory=dict)
    base_grid: Dict[str, Dict[int, List[Tuple]]] = field(default_factory=dict)
    horizontal_empty: EmptyPolicy = EmptyPolicy.OMNI
    elevation_empty: EmptyPolicy = EmptyPolicy.OMNI
    matrix_mode: MatrixMode = MatrixMode.UNIFIED

    def horizontal_rows(self, antenna_id) -> List[Tuple]:
        return list(self.horizontal.get(antenna_id, []))

    def elevation_rows(self, antenna_id) -> List[Tuple]:
        return list(self.elevation.get(antenna_id, []))

    def matrix_rows(self, antenna_id) -> List[Tuple]:
        return list(self.matrix.get(antenna_id, []))

    def base_grid_rows(self, antenna_id, azimuth: int) -> List[Tuple]:
        return list(self.base_grid.get(antenna_id, {}).get(azimuth, []))
