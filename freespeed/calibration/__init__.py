"""
Free speed calibration engine.

Usage:
    from freespeed.calibration import CalibrationService
    service = CalibrationService.load(network, features, validation_files)
    result = service.evaluate(request)

Components:
- ModelRegistry / SpeedFactorModel: per-junction-type speed factor models
- NetworkMutator: applies a request to link free speeds
- PathOracle: least travel-time paths on the mutated network
- Calibrator: validation loop, error metrics and diagnostics
- CalibrationService: batch, direct and interactive evaluation
"""

from .models import (
    SpeedFactorModel,
    PriorityModel,
    RightBeforeLeftModel,
    TrafficLightModel,
    ModelRegistry,
)
from .mutator import NetworkMutator
from .oracle import PathOracle, RoutedPath
from .metrics import SpeedErrorMetrics
from .calibrator import Calibrator
from .service import CalibrationService, BatchReport, BatchEntry
from .report import ReportGenerator

__all__ = [
    # Models
    "SpeedFactorModel",
    "PriorityModel",
    "RightBeforeLeftModel",
    "TrafficLightModel",
    "ModelRegistry",
    # Mutation and routing
    "NetworkMutator",
    "RoutedPath",
    "PathOracle",
    # Evaluation
    "SpeedErrorMetrics",
    "Calibrator",
    # Service
    "CalibrationService",
    "BatchReport",
    "BatchEntry",
    # Report
    "ReportGenerator",
]
