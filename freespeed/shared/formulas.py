"""
Speed formulas applied to network links.
"""

from .constants import URBAN_SPEED_LIMIT


def legacy_free_speed(allowed_speed: float, f: float) -> float:
    """
    Free speed from the uniform legacy rule.

    Urban links (allowed speed up to ~51 km/h) are scaled by ``f``,
    faster roads keep their allowed speed.

    Args:
        allowed_speed: Allowed speed in m/s
        f: Urban speed factor

    Returns:
        Free speed in m/s
    """
    if allowed_speed <= URBAN_SPEED_LIMIT:
        return allowed_speed * f
    return allowed_speed


def clip_speed_factor(factor: float, floor: float) -> float:
    """Apply the hard lower bound to a predicted speed factor."""
    return max(floor, factor)
