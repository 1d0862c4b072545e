"""
Network mutation.

Applies a calibration request to every link of a network: model-derived
speed factors in structural mode, the uniform legacy formula otherwise.
"""

import logging
from typing import Optional

from freespeed.errors import MissingFeatureError
from freespeed.network.features import FeatureTable
from freespeed.network.models import NetworkGraph
from freespeed.schemas.calibration import CalibrationRequest
from freespeed.shared.constants import MIN_SPEED_FACTOR
from freespeed.shared.formulas import clip_speed_factor, legacy_free_speed
from .models import ModelRegistry

logger = logging.getLogger(__name__)


class NetworkMutator:
    """
    Sets link free speeds from a request.

    Usage:
        mutator = NetworkMutator(features, ModelRegistry.default())
        mutator.apply(graph, request)
    """

    def __init__(
        self,
        features: FeatureTable,
        registry: ModelRegistry,
        min_factor: float = MIN_SPEED_FACTOR,
    ):
        self._features = features
        self._registry = registry
        self._min_factor = min_factor

    def apply(self, graph: NetworkGraph, request: Optional[CalibrationRequest]) -> None:
        """
        Mutate ``graph`` according to ``request``.

        A None request leaves free speeds untouched. The request is
        fully checked against the network before the first link is
        changed, so a failing request leaves the graph as it was.

        Raises:
            InvalidRequestError: Parameters missing or of wrong size
            UnknownJunctionTypeError: Link with an unregistered junction type
            MissingFeatureError: Modeled link without features
        """
        if request is None:
            graph.reset_scratch()
            return

        if request.is_legacy:
            self._apply_legacy(graph, request.f)
        else:
            self._apply_structural(graph, request)

    def _apply_legacy(self, graph: NetworkGraph, f: float) -> None:
        graph.reset_scratch()
        for link in graph:
            if link.is_motorway:
                link.free_speed = link.allowed_speed
            else:
                link.free_speed = legacy_free_speed(link.allowed_speed, f)

    def _check(self, graph: NetworkGraph, request: CalibrationRequest) -> None:
        checked = set()
        for link in graph:
            if link.is_motorway:
                continue

            entry = self._features.get(link.id)
            if entry is None:
                raise MissingFeatureError(f"No features for link {link.id}")

            if entry.junction_type in checked:
                continue

            model = self._registry.get(entry.junction_type)
            model.check_params(request.params_for(model.junction_type))
            checked.add(entry.junction_type)

    def _apply_structural(self, graph: NetworkGraph, request: CalibrationRequest) -> None:
        self._check(graph, request)
        graph.reset_scratch()

        clipped = 0
        for link in graph:
            if link.is_motorway:
                link.free_speed = link.allowed_speed
                continue

            entry = self._features.get(link.id)
            model = self._registry.get(entry.junction_type)
            params = request.params_for(model.junction_type)

            predicted = model.predict(entry.features, params)
            factor = clip_speed_factor(predicted, self._min_factor)
            if factor != predicted:
                clipped += 1

            link.junction_type = entry.junction_type
            link.free_speed = link.allowed_speed * factor
            link.applied_factor = factor
            link.diagnostic_input = model.transform_features(entry.features)

        if clipped:
            logger.debug(f"{clipped} speed factors clipped to {self._min_factor}")
