"""
Antennendiagramm-Engine: Konfiguration und Konstanten
"""

# Azimut (Horizontaldiagramm, Matrix-Slices) [°]
AZIMUTH_MIN = 0.0
AZIMUTH_MAX = 359.999  # 360° ist identisch mit 0°
AZIMUTH_ROUND = 1000.0  # Raster 0.001°

# Depressionswinkel (Vertikaldiagramm) [°], positiv = unter dem Horizont
DEPRESSION_MIN = -90.0
DEPRESSION_MAX = 90.0
DEPRESSION_ROUND = 1000.0

# Relative Feldstärke (linear, Maximum 1.0)
# FIELD_MIN > 0, damit -20*log10(E) immer definiert ist
FIELD_MIN = 0.001
FIELD_MAX = 1.0
FIELD_ROUND = 1000.0

# Maximum unter diesem Wert: Diagramm unbrauchbar (fatal)
PEAK_SIGNIFICANCE_MIN = 0.5
# Maximum unter diesem Wert: nur Hinweis "erreicht keine 1"
FIELD_MAX_CHECK = 0.977

# Mindestanzahl Punkte pro Diagramm bzw. Matrix-Slice
PATTERN_REQUIRED_POINTS = 2

# Basis-Raster der Matrix-Diagramme in Legacy-Schemas (0°, 10°, ..., 350°)
BASE_GRID_STEP_DEG = 10
BASE_GRID_COUNT = 36


# Tabellen/Spalten der Quell-Datenbanken (Dialekte)
#
# Pro Dialekt: Tabelle, Schlüsselspalte, Winkel-/Wertspalten. "filter" schränkt
# die Zeilen zusätzlich ein (Spalte -> Wert).
CDBS_TABLES = {
    "horizontal": {
        "table": "ant_pattern",
        "key": "antenna_id",
        "columns": ["azimuth", "field_value"],
    },
    "elevation": {
        "table": "elevation_pattern",
        "key": "elevation_antenna_id",
        "columns": ["depression_angle", "field_value"],
    },
    # Basis-Raster: Spalten field_value0 ... field_value350 in elevation_pattern
    "base_grid": {
        "table": "elevation_pattern",
        "key": "elevation_antenna_id",
        "columns": ["depression_angle", "field_value{azimuth}"],
    },
    "matrix": {
        "table": "elevation_pattern_addl",
        "key": "elevation_antenna_id",
        "columns": ["azimuth", "depression_angle", "field_value"],
    },
}

LMS_TABLES = {
    "horizontal": {
        "table": "app_antenna_field_value",
        "key": "aafv_aant_antenna_record_id",
        "columns": ["aafv_azimuth", "aafv_field_value"],
    },
    "elevation": {
        "table": "app_antenna_elevation_pattern",
        "key": "aaep_antenna_record_id",
        "columns": ["aaep_depression_angle", "aaep_field_value"],
        "filter": {"aaep_azimuth": 0.0},
    },
    "matrix": {
        "table": "app_antenna_elevation_pattern",
        "key": "aaep_antenna_record_id",
        "columns": ["aaep_azimuth", "aaep_depression_angle", "aaep_field_value"],
    },
}

WIRELESS_TABLES = {
    "horizontal": {
        "table": "antenna_pattern",
        "key": "ant_id",
        "columns": ["degree", "relative_field"],
    },
    "elevation": {
        "table": "antenna_pattern",
        "key": "ant_id",
        "columns": ["degree", "relative_field"],
    },
}

GENERIC_TABLES = {
    "horizontal": {
        "table": "source_horizontal_pattern",
        "key": "source_key",
        "columns": ["azimuth", "relative_field"],
    },
    "elevation": {
        "table": "source_vertical_pattern",
        "key": "source_key",
        "columns": ["depression_angle", "relative_field"],
    },
    "matrix": {
        "table": "source_matrix_pattern",
        "key": "source_key",
        "columns": ["azimuth", "depression_angle", "relative_field"],
    },
}
