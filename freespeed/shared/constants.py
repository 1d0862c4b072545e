"""
Constants shared by the network, calibration and API layers.

Single source of truth for junction types, feature columns and the
preset legacy requests used for baseline comparison.
"""

from enum import Enum


class JunctionType(str, Enum):
    """
    Junction type of the node a link leads into.

    Determines which speed-factor model applies to the link.
    """
    PRIORITY = "priority"
    RIGHT_BEFORE_LEFT = "right_before_left"
    TRAFFIC_LIGHT = "traffic_light"


# Highway type prefix of links that are never modeled
MOTORWAY_PREFIX = "motorway"

# Hard lower bound on any model-derived speed factor
MIN_SPEED_FACTOR = 0.25

# Urban speed limit (m/s) below which the legacy formula scales speeds
URBAN_SPEED_LIMIT = 51 / 3.6

# m/s -> km/h
MS_TO_KMH = 3.6

# Hours of day whose samples are considered free-flow traffic
FREE_FLOW_HOURS: tuple[int, ...] = (3, 21)

# Raw feature columns read from the feature table, in vector order
FEATURE_COLUMNS: tuple[str, ...] = (
    "length",
    "speed",
    "num_lanes",
    "change_speed",
    "change_num_lanes",
    "num_to_links",
    "num_conns",
    "num_response",
    "num_foes",
    "junction_inc_lanes",
)

# Preset legacy requests evaluated in batch mode: (label, f)
LEGACY_PRESETS: tuple[tuple[str, float], ...] = (
    ("05", 0.5),
    ("075", 0.75),
    ("09", 0.9),
)

# Header of the per-sample evaluation CSV
EVAL_CSV_HEADER = ("from_node", "to_node", "beeline_dist", "dist", "travel_time")
