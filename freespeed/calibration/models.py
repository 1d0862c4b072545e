"""
Speed Factor Models

One regression model per junction type. Each model turns a link's raw
feature vector into an input vector and predicts the factor by which
the allowed speed is reduced.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Sequence

from freespeed.errors import InvalidRequestError, UnknownJunctionTypeError
from freespeed.shared.constants import FEATURE_COLUMNS, JunctionType

_IDX = {name: i for i, name in enumerate(FEATURE_COLUMNS)}


def _ratio(features: Sequence[float], num: str, den: str) -> float:
    return features[_IDX[num]] / max(1.0, features[_IDX[den]])


class SpeedFactorModel(ABC):
    """
    Abstract base class for speed factor models.

    Models are linear in their input vector:

        factor = p[0] + sum(p[i + 1] * x[i])

    where ``x = transform_features(features)``. No bound is applied
    here; the mutator clips the result.
    """

    @property
    @abstractmethod
    def junction_type(self) -> JunctionType:
        """Junction type this model applies to."""
        pass

    @abstractmethod
    def derived_features(self, features: Sequence[float]) -> List[float]:
        """Additional inputs computed from the raw features."""
        pass

    def transform_features(self, features: Sequence[float]) -> List[float]:
        """
        Input vector of the regression.

        This is also the representation recorded for offline refitting.
        """
        return [float(v) for v in features] + self.derived_features(features)

    @property
    def n_params(self) -> int:
        """Intercept plus one coefficient per input."""
        return len(FEATURE_COLUMNS) + len(self.derived_features([0.0] * len(FEATURE_COLUMNS))) + 1

    def check_params(self, params: Sequence[float] | None) -> None:
        """
        Raises:
            InvalidRequestError: If params cannot be used with this model
        """
        if params is None:
            raise InvalidRequestError(
                f"Missing parameters for junction type '{self.junction_type.value}'"
            )
        if len(params) != self.n_params:
            raise InvalidRequestError(
                f"Expected {self.n_params} parameters for '{self.junction_type.value}', "
                f"got {len(params)}"
            )

    def predict(self, features: Sequence[float], params: Sequence[float]) -> float:
        x = self.transform_features(features)
        return params[0] + sum(p * v for p, v in zip(params[1:], x))


class PriorityModel(SpeedFactorModel):
    """Links ending at a junction where they have right of way."""

    @property
    def junction_type(self) -> JunctionType:
        return JunctionType.PRIORITY

    def derived_features(self, features: Sequence[float]) -> List[float]:
        # share of conflicting movements
        return [_ratio(features, "num_foes", "num_conns")]


class RightBeforeLeftModel(SpeedFactorModel):
    """Links ending at an unsignalized equal-priority junction."""

    @property
    def junction_type(self) -> JunctionType:
        return JunctionType.RIGHT_BEFORE_LEFT

    def derived_features(self, features: Sequence[float]) -> List[float]:
        return [_ratio(features, "num_response", "num_conns")]


class TrafficLightModel(SpeedFactorModel):
    """Links ending at a signalized junction."""

    @property
    def junction_type(self) -> JunctionType:
        return JunctionType.TRAFFIC_LIGHT

    def derived_features(self, features: Sequence[float]) -> List[float]:
        # lane gain at the stop line
        return [_ratio(features, "junction_inc_lanes", "num_lanes")]


class ModelRegistry:
    """
    Junction type -> model.

    Built once at startup and passed to the mutator and calibrator.
    """

    def __init__(self, models: Iterable[SpeedFactorModel]):
        self._models: Dict[str, SpeedFactorModel] = {}
        for model in models:
            self._models[model.junction_type.value] = model

    @classmethod
    def default(cls) -> "ModelRegistry":
        return cls([PriorityModel(), RightBeforeLeftModel(), TrafficLightModel()])

    def __contains__(self, junction_type: str) -> bool:
        return junction_type in self._models

    def junction_types(self) -> List[JunctionType]:
        return [m.junction_type for m in self._models.values()]

    def get(self, junction_type: str) -> SpeedFactorModel:
        """
        Raises:
            UnknownJunctionTypeError: If no model is registered for the type
        """
        try:
            return self._models[junction_type]
        except KeyError:
            raise UnknownJunctionTypeError(f"Unknown junction type: {junction_type}") from None
