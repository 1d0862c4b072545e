"""
Geometric helpers for projected network coordinates.
"""
import math


def euclidean_distance(
    x1: float, y1: float,
    x2: float, y2: float
) -> float:
    """
    Straight-line distance between two projected points.

    Network coordinates are in a metric projection, so this is the
    beeline distance in meters.
    """
    return math.hypot(x2 - x1, y2 - y1)
