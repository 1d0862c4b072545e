"""
Shared constants and formulas (NOT calibration logic).

Usage:
    from freespeed.shared import JunctionType, legacy_free_speed
"""
from .constants import (
    JunctionType,
    MOTORWAY_PREFIX,
    MIN_SPEED_FACTOR,
    URBAN_SPEED_LIMIT,
    MS_TO_KMH,
    FREE_FLOW_HOURS,
    FEATURE_COLUMNS,
    LEGACY_PRESETS,
    EVAL_CSV_HEADER,
)
from .formulas import legacy_free_speed, clip_speed_factor
from .geo import euclidean_distance

__all__ = [
    # Constants
    "JunctionType",
    "MOTORWAY_PREFIX",
    "MIN_SPEED_FACTOR",
    "URBAN_SPEED_LIMIT",
    "MS_TO_KMH",
    "FREE_FLOW_HOURS",
    "FEATURE_COLUMNS",
    "LEGACY_PRESETS",
    "EVAL_CSV_HEADER",
    # Formulas
    "legacy_free_speed",
    "clip_speed_factor",
    # Geo
    "euclidean_distance",
]
