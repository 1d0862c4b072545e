"""
Calibrator - evaluates a candidate request against measured speeds.

Mutates the network, routes every validation pair over it, and
aggregates speed errors plus per-link diagnostics for refitting.
"""

import csv
import logging
from contextlib import ExitStack
from pathlib import Path
from typing import Dict, List, Optional

from freespeed.errors import DegeneratePathError
from freespeed.network.models import NetworkGraph
from freespeed.network.validation import ValidationSet
from freespeed.schemas.calibration import (
    CalibrationRequest,
    CalibrationResult,
    DiagnosticPoint,
)
from freespeed.shared.constants import EVAL_CSV_HEADER, JunctionType
from freespeed.shared.geo import euclidean_distance
from .metrics import SpeedErrorMetrics
from .models import ModelRegistry
from .mutator import NetworkMutator
from .oracle import PathOracle

logger = logging.getLogger(__name__)


class Calibrator:
    """
    Evaluates requests on one shared network.

    Not thread-safe: link free speeds and diagnostics are scratch state
    of a single ``evaluate()`` call. Callers serialize access.

    Usage:
        calibrator = Calibrator(graph, validation, mutator, registry)
        result = calibrator.evaluate(request, label="trial-1")
    """

    def __init__(
        self,
        graph: NetworkGraph,
        validation: ValidationSet,
        mutator: NetworkMutator,
        registry: ModelRegistry,
        output_dir: Path = Path("."),
    ):
        self.graph = graph
        self._validation = validation
        self._mutator = mutator
        self._registry = registry
        self._output_dir = Path(output_dir)
        self._oracle: Optional[PathOracle] = None

    def params_path(self, label: str) -> Path:
        return self._output_dir / f"{label}-params.json"

    def eval_path(self, label: str) -> Path:
        return self._output_dir / f"{label}-eval.csv"

    def evaluate(
        self,
        request: Optional[CalibrationRequest],
        label: Optional[str] = None,
    ) -> CalibrationResult:
        """
        Evaluate the network under ``request``.

        Args:
            request: Parameters to apply, None to score the network as is
            label: If given, ``<label>-params.json`` and ``<label>-eval.csv``
                are written to the output directory

        Returns:
            CalibrationResult with errors and diagnostics
        """
        self._mutator.apply(self.graph, request)

        if label is not None:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            if request is not None:
                self.params_path(label).write_text(request.to_json(), encoding="utf-8")

        if self._oracle is None:
            self._oracle = PathOracle(self.graph)
        else:
            self._oracle.refresh()

        metrics = SpeedErrorMetrics()
        diagnostics: Dict[str, List[DiagnosticPoint]] = {
            jt.value: [] for jt in self._registry.junction_types()
        }

        with ExitStack() as stack:
            writer = None
            if label is not None:
                f = stack.enter_context(
                    open(self.eval_path(label), "w", newline="", encoding="utf-8")
                )
                writer = csv.writer(f)
                writer.writerow(EVAL_CSV_HEADER)

            for sample in self._validation:
                path = self._oracle.route(sample.from_node, sample.to_node)

                distance = path.distance
                if distance <= 0 or path.travel_time <= 0:
                    raise DegeneratePathError(
                        f"Path from {sample.from_node} to {sample.to_node} has "
                        f"length {distance} and travel time {path.travel_time}"
                    )
                speed = distance / path.travel_time

                # OD-level scale, only used for diagnostics
                correction = speed / sample.target_speed

                for link in path.links:
                    if link.diagnostic_input is None:
                        continue

                    diagnostics[link.junction_type].append(DiagnosticPoint(
                        x=link.diagnostic_input,
                        y_pred=link.applied_factor,
                        y_true=link.applied_factor / correction,
                    ))

                metrics.add(sample.target_speed, speed)

                if writer is not None:
                    from_node = self.graph.nodes[sample.from_node]
                    to_node = self.graph.nodes[sample.to_node]
                    beeline = euclidean_distance(from_node.x, from_node.y, to_node.x, to_node.y)
                    writer.writerow([
                        sample.from_node,
                        sample.to_node,
                        int(beeline),
                        int(distance),
                        int(path.travel_time),
                    ])

        name = request if request is not None else "baseline"
        logger.info(f"{name}, rmse: {metrics.rmse}, mae: {metrics.mae}")

        return CalibrationResult(
            rmse=metrics.rmse,
            mae=metrics.mae,
            priority=diagnostics.get(JunctionType.PRIORITY.value, []),
            right_before_left=diagnostics.get(JunctionType.RIGHT_BEFORE_LEFT.value, []),
            traffic_light=diagnostics.get(JunctionType.TRAFFIC_LIGHT.value, []),
        )
