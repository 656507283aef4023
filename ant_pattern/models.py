"""
Antennendiagramm-Engine: Datenmodelle
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import numpy as np
from scipy.interpolate import interp1d


@dataclass(frozen=True)
class AntPoint:
    """Einzelner Diagrammpunkt: Winkel [°] und relative Feldstärke (linear)"""
    angle: float
    relative_field: float


@dataclass(frozen=True)
class AntSlice:
    """
    Ein Azimut-Schnitt eines Matrix-Diagramms.

    value ist der Azimut des Schnitts, points das zugehörige Vertikaldiagramm
    (aufsteigend nach Depressionswinkel). Während des Aufbaus ist points eine
    Liste, im fertigen MatrixPattern ein Tupel (siehe frozen()).
    """
    value: float
    points: Sequence[AntPoint] = field(default_factory=list)

    def locate_point(self, angle: float) -> Tuple[int, bool]:
        """
        Sucht die Einfügeposition für einen Depressionswinkel (lineare Suche).

        Returns:
            (index, found) - found=True bei exakt gleichem Winkel
        """
        for i, point in enumerate(self.points):
            if angle == point.angle:
                return i, True
            if angle < point.angle:
                return i, False
        return len(self.points), False

    def insert_point(self, point: AntPoint) -> bool:
        """
        Fügt einen Punkt sortiert ein.

        Nur während des Aufbaus, solange points eine Liste ist.

        Returns:
            False wenn der Winkel bereits existiert (nichts eingefügt)
        """
        if isinstance(self.points, tuple):
            raise TypeError(f"Slice at {self.value:g} is frozen")
        index, found = self.locate_point(point.angle)
        if found:
            return False
        self.points.insert(index, point)
        return True

    def peak(self) -> float:
        return max((p.relative_field for p in self.points), default=0.0)

    def frozen(self) -> "AntSlice":
        """Kopie mit unveränderlicher Punktliste."""
        return AntSlice(value=self.value, points=tuple(self.points))


def _angles(points: Sequence[AntPoint]) -> np.ndarray:
    return np.array([p.angle for p in points], dtype=float)


def _fields(points: Sequence[AntPoint]) -> np.ndarray:
    return np.array([p.relative_field for p in points], dtype=float)


def _interp_elevation(points: Sequence[AntPoint], depression: float) -> float:
    """Lineare Interpolation im Vertikaldiagramm, ausserhalb Randwerte."""
    if not points:
        return 1.0
    fields = _fields(points)
    if len(points) == 1:
        return float(fields[0])
    interpolator = interp1d(
        _angles(points),
        fields,
        kind='linear',
        bounds_error=False,
        fill_value=(fields[0], fields[-1])
    )
    return float(interpolator(depression))


@dataclass(frozen=True)
class _PointPattern:
    """Gemeinsame Basis für Horizontal- und Vertikaldiagramm"""
    points: Tuple[AntPoint, ...] = ()
    advisories: Tuple[str, ...] = ()

    @property
    def angles(self) -> np.ndarray:
        return _angles(self.points)

    @property
    def fields(self) -> np.ndarray:
        return _fields(self.points)

    @property
    def is_empty(self) -> bool:
        return len(self.points) == 0

    @property
    def peak(self) -> float:
        return float(self.fields.max()) if self.points else 0.0

    def attenuation_db(self) -> np.ndarray:
        """
        Dämpfung in dB relativ zum Maximum 1.0 (positiv = Abschwächung).

        Formel für Feldgrössen: A = -20 * log10(E_rel)
        """
        return -20.0 * np.log10(self.fields)

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class HorizontalPattern(_PointPattern):
    """Horizontaldiagramm (Azimut). Leer = omnidirektional."""

    @property
    def is_omni(self) -> bool:
        return self.is_empty

    def field_at(self, azimuth: float) -> float:
        """
        Relative Feldstärke bei beliebigem Azimut (interpoliert, periodisch 360°).

        Args:
            azimuth: Azimut in Grad (wird auf [0, 360) normalisiert)

        Returns:
            Relative Feldstärke, 1.0 bei omnidirektionalem Diagramm
        """
        if self.is_empty:
            return 1.0
        return float(np.interp(azimuth % 360.0, self.angles, self.fields, period=360.0))


@dataclass(frozen=True)
class ElevationPattern(_PointPattern):
    """Vertikaldiagramm (Depressionswinkel)."""

    def field_at(self, depression: float) -> float:
        """
        Relative Feldstärke bei beliebigem Depressionswinkel.

        Ausserhalb des Diagramms gilt der jeweilige Randwert.
        """
        return _interp_elevation(self.points, depression)


@dataclass(frozen=True)
class MatrixPattern:
    """Matrix-Diagramm: ein Vertikaldiagramm pro Azimut-Schnitt"""
    slices: Tuple[AntSlice, ...] = ()
    advisories: Tuple[str, ...] = ()

    @property
    def azimuths(self) -> np.ndarray:
        return np.array([s.value for s in self.slices], dtype=float)

    @property
    def peak(self) -> float:
        return max((s.peak() for s in self.slices), default=0.0)

    def __len__(self) -> int:
        return len(self.slices)

    def slice_at(self, azimuth: float) -> Optional[AntSlice]:
        """Schnitt mit exakt diesem Azimut oder None."""
        for s in self.slices:
            if s.value == azimuth:
                return s
        return None

    def field_at(self, azimuth: float, depression: float) -> float:
        """
        Relative Feldstärke bei (Azimut, Depression).

        Interpoliert zuerst in den beiden benachbarten Schnitten nach
        Depressionswinkel, dann linear nach Azimut (periodisch über 360°).
        """
        if not self.slices:
            return 1.0
        if len(self.slices) == 1:
            return _interp_elevation(self.slices[0].points, depression)

        az = azimuth % 360.0
        azimuths = self.azimuths
        n = len(azimuths)
        idx = int(np.searchsorted(azimuths, az, side='right'))

        # Nachbarn mit Umlauf über 360°
        lower = self.slices[(idx - 1) % n]
        upper = self.slices[idx % n]
        lower_az = azimuths[idx - 1] if idx > 0 else azimuths[-1] - 360.0
        upper_az = azimuths[idx] if idx < n else azimuths[0] + 360.0

        e_lower = _interp_elevation(lower.points, depression)
        e_upper = _interp_elevation(upper.points, depression)

        span = upper_az - lower_az
        if span <= 0.0:
            return e_lower
        weight = (az - lower_az) / span
        return float(e_lower + weight * (e_upper - e_lower))

    def derive_horizontal(self) -> Tuple[Optional[HorizontalPattern], "MatrixPattern"]:
        """
        Leitet ein Pseudo-Horizontaldiagramm aus den Schnitt-Maxima ab.

        Falls nicht alle Schnitte ein Maximum von 1.0 haben, wird jeder Schnitt
        auf sein eigenes Maximum normiert und die Maxima bilden das
        Horizontaldiagramm. Horizontal * normierter Schnitt ergibt wieder die
        ursprüngliche Matrix.

        Returns:
            (HorizontalPattern oder None, MatrixPattern) - None und die
            unveränderte Matrix, falls alle Schnitte bereits 1.0 erreichen
        """
        peaks = [s.peak() for s in self.slices]
        if not self.slices or all(p >= 1.0 for p in peaks):
            return None, self

        h_points = tuple(AntPoint(s.value, p) for s, p in zip(self.slices, peaks))
        normalized = tuple(
            AntSlice(
                value=s.value,
                points=tuple(AntPoint(pt.angle, pt.relative_field / p) for pt in s.points),
            )
            for s, p in zip(self.slices, peaks)
        )

        return (
            HorizontalPattern(points=h_points),
            MatrixPattern(slices=normalized, advisories=self.advisories),
        )


@dataclass
class RecordContext:
    """Identifikation eines Stationsdatensatzes (für Meldungen im Batch-Betrieb)"""
    facility_id: str = ""
    call_sign: str = ""
    channel: str = ""
    service_code: str = ""
    status: str = ""
