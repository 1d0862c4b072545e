"""
Calibration service - request/response facade around the Calibrator.

Loads the network inputs once and serves batch, direct and interactive
evaluations. Every evaluation runs under one lock because the network
is shared mutable state.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from freespeed.network.features import FeatureTable
from freespeed.network.io import read_network, write_network
from freespeed.network.validation import ValidationSet
from freespeed.schemas.calibration import CalibrationRequest, CalibrationResult
from freespeed.shared.constants import LEGACY_PRESETS, MIN_SPEED_FACTOR
from .calibrator import Calibrator
from .models import ModelRegistry
from .mutator import NetworkMutator

logger = logging.getLogger(__name__)


@dataclass
class BatchEntry:
    """One evaluation of a batch run."""
    label: str
    request: Optional[CalibrationRequest]
    result: CalibrationResult


@dataclass
class BatchReport:
    """Baseline plus preset evaluations."""
    run_at: datetime
    entries: List[BatchEntry]

    @property
    def best(self) -> Optional[BatchEntry]:
        """Entry with the lowest MAE."""
        if not self.entries:
            return None
        return min(self.entries, key=lambda e: e.result.mae)


class CalibrationService:
    """
    Main calibration orchestrator.

    Usage:
        service = CalibrationService.load(network, features, validation_files)
        report = service.run_batch()
        result = service.evaluate(request)
    """

    def __init__(
        self,
        calibrator: Calibrator,
        save_label: str = "network-opt",
        save_network_name: str = "network-opt.xml.gz",
        output_dir: Path = Path("."),
    ):
        self._calibrator = calibrator
        self._save_label = save_label
        self._save_network_name = save_network_name
        self._output_dir = Path(output_dir)
        self._lock = threading.Lock()

    @classmethod
    def load(
        cls,
        network_path: str | Path,
        features_path: str | Path,
        validation_files: Iterable[str | Path],
        output_dir: Path = Path("."),
        min_speed_factor: float = MIN_SPEED_FACTOR,
        save_label: str = "network-opt",
        save_network_name: str = "network-opt.xml.gz",
    ) -> "CalibrationService":
        """
        Read all inputs and build the service.

        Any I/O or format error aborts startup.
        """
        graph = read_network(network_path)
        features = FeatureTable.read_csv(features_path)
        attached = features.attach(graph)
        logger.info(f"Junction types attached to {attached} links")

        validation = ValidationSet.read(validation_files)

        registry = ModelRegistry.default()
        mutator = NetworkMutator(features, registry, min_factor=min_speed_factor)
        calibrator = Calibrator(graph, validation, mutator, registry, output_dir=output_dir)

        return cls(
            calibrator,
            save_label=save_label,
            save_network_name=save_network_name,
            output_dir=output_dir,
        )

    @property
    def calibrator(self) -> Calibrator:
        return self._calibrator

    @property
    def saved_network_path(self) -> Path:
        return self._output_dir / self._save_network_name

    def evaluate(
        self,
        request: Optional[CalibrationRequest],
        label: Optional[str] = None,
    ) -> CalibrationResult:
        """Evaluate one request; calls are serialized."""
        with self._lock:
            return self._calibrator.evaluate(request, label)

    def evaluate_and_save(self, request: CalibrationRequest) -> CalibrationResult:
        """Evaluate and persist parameters and the mutated network."""
        with self._lock:
            result = self._calibrator.evaluate(request, self._save_label)
            write_network(self._calibrator.graph, self.saved_network_path)
            return result

    def run_batch(self) -> BatchReport:
        """Baseline evaluation followed by the preset legacy requests."""
        logger.info("Initial score:")
        entries = [BatchEntry("init", None, self.evaluate(None, "init"))]

        for label, f in LEGACY_PRESETS:
            request = CalibrationRequest(f=f)
            entries.append(BatchEntry(label, request, self.evaluate(request, label)))

        return BatchReport(run_at=datetime.now(), entries=entries)

    def run_direct(self, params_path: str | Path, output_path: str | Path) -> CalibrationResult:
        """Apply the request stored in ``params_path`` and write the network."""
        request = CalibrationRequest.from_file(params_path)
        with self._lock:
            result = self._calibrator.evaluate(request, None)
            write_network(self._calibrator.graph, output_path)
        return result
