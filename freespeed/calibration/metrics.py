"""
Error metrics for evaluated networks.

Provides the aggregate speed errors between predicted and observed
origin/destination speeds.
"""

from dataclasses import dataclass, field
from statistics import fmean
from typing import List

from freespeed.shared.constants import MS_TO_KMH


@dataclass
class SpeedErrorMetrics:
    """
    Accumulates per-pair speed errors.

    ``rmse`` is the mean of squared errors (m/s)^2 and ``mae`` the mean
    absolute error in km/h. Both are 0 when nothing was added.
    """

    squared_errors: List[float] = field(default_factory=list)
    absolute_errors_kmh: List[float] = field(default_factory=list)

    def add(self, target_speed: float, predicted_speed: float) -> None:
        """Record one pair; speeds in m/s."""
        error = target_speed - predicted_speed
        self.squared_errors.append(error ** 2)
        self.absolute_errors_kmh.append(abs(error * MS_TO_KMH))

    @property
    def n_samples(self) -> int:
        return len(self.squared_errors)

    @property
    def rmse(self) -> float:
        if not self.squared_errors:
            return 0.0
        return fmean(self.squared_errors)

    @property
    def mae(self) -> float:
        if not self.absolute_errors_kmh:
            return 0.0
        return fmean(self.absolute_errors_kmh)
