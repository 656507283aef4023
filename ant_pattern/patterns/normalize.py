"""
Normalisierung von Rohwerten aus den Quell-Datenbanken.

Winkel und Feldwerte werden auf feste Raster gerundet (np.rint, d.h.
Round-Half-to-Even). Negative Feldwerte gelten als Dämpfung in dB relativ
zum Maximum und werden in relative Feldstärke umgerechnet.
"""

import math
from enum import Enum
from typing import Tuple
import numpy as np

from ..config import (
    AZIMUTH_MIN,
    AZIMUTH_MAX,
    AZIMUTH_ROUND,
    DEPRESSION_MIN,
    DEPRESSION_MAX,
    DEPRESSION_ROUND,
    FIELD_MIN,
    FIELD_ROUND,
)
from .diagnostics import PatternError, ANGLE_RANGE, FIELD_RANGE


class AngleKind(Enum):
    """Winkelart mit Wertebereich und Rundungsraster: (min, max, round)"""
    AZIMUTH = (AZIMUTH_MIN, AZIMUTH_MAX, AZIMUTH_ROUND)
    DEPRESSION = (DEPRESSION_MIN, DEPRESSION_MAX, DEPRESSION_ROUND)

    @property
    def minimum(self) -> float:
        return self.value[0]

    @property
    def maximum(self) -> float:
        return self.value[1]

    @property
    def scale(self) -> float:
        return self.value[2]


def round_to(value: float, scale: float) -> float:
    """
    Rundet auf das Raster 1/scale (Round-Half-to-Even).

    Idempotent: ein bereits gerundeter Wert bleibt unverändert.
    """
    return float(np.rint(value * scale) / scale)


def _to_float(raw, reason: str) -> float:
    # Nicht-numerische Zeilen werden wie Bereichsverletzungen behandelt
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise PatternError(reason) from None
    if math.isnan(value) or math.isinf(value):
        raise PatternError(reason)
    return value


def normalize_angle(raw, kind: AngleKind) -> float:
    """
    Rundet und prüft einen Winkel.

    Args:
        raw: Rohwert aus der Datenquelle
        kind: AngleKind.AZIMUTH oder AngleKind.DEPRESSION

    Returns:
        Gerundeter Winkel in [kind.minimum, kind.maximum]

    Raises:
        PatternError: ANGLE_RANGE bei Bereichsverletzung oder ungültigem Wert
    """
    angle = round_to(_to_float(raw, ANGLE_RANGE), kind.scale)
    if (angle < kind.minimum) or (angle > kind.maximum):
        raise PatternError(ANGLE_RANGE)
    return angle


def db_to_relative_field(value_db: float) -> float:
    """
    Dämpfung in dB (relativ zum Maximum) -> relative Feldstärke.

    Das Vorzeichen spielt keine Rolle, der Betrag ist die Dämpfung:
    -20 dB -> 0.1, 0 dB -> 1.0
    """
    return 10.0 ** (-abs(value_db) / 20.0)


def normalize_field(raw) -> Tuple[float, bool]:
    """
    Rundet einen Feldwert und rechnet negative Werte aus dB um.

    Reihenfolge wie in den Quelldaten üblich: zuerst Rohwert runden, dann
    (falls negativ) umrechnen, das Ergebnis der Umrechnung wird nicht
    nochmals gerundet. Werte unter FIELD_MIN werden still auf FIELD_MIN
    angehoben. Die Obergrenze prüft der Aufrufer.

    Returns:
        (relative_field, assumed_db)
    """
    pat = round_to(_to_float(raw, FIELD_RANGE), FIELD_ROUND)

    assumed_db = False
    if pat < 0.0:
        pat = db_to_relative_field(pat)
        assumed_db = True

    if pat < FIELD_MIN:
        pat = FIELD_MIN

    return pat, assumed_db
