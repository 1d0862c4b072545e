"""
Calibration Schemas

Pydantic models for evaluation requests and results.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from freespeed.shared.constants import JunctionType


# === Request Models ===

class CalibrationRequest(BaseModel):
    """
    Candidate parameter set.

    Either per-junction-type parameter vectors (``f == 0``) or a single
    legacy speed factor ``f > 0``, never both. Negative or non-finite
    numbers are rejected.
    """
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    priority: Optional[List[float]] = None
    right_before_left: Optional[List[float]] = None
    traffic_light: Optional[List[float]] = None

    f: float = Field(default=0.0, ge=0)

    @model_validator(mode="after")
    def check_exclusive_modes(self) -> "CalibrationRequest":
        if self.f != 0 and any(v is not None for v in self._vectors()):
            raise ValueError("'f' cannot be combined with junction type parameters")
        return self

    def _vectors(self) -> List[Optional[List[float]]]:
        return [self.priority, self.right_before_left, self.traffic_light]

    @property
    def is_legacy(self) -> bool:
        return self.f != 0

    def params_for(self, junction_type: JunctionType) -> Optional[List[float]]:
        """Parameter vector for one junction type."""
        return getattr(self, junction_type.value)

    def to_json(self) -> str:
        """Persisted form; fields left at their defaults are omitted."""
        return self.model_dump_json(exclude_defaults=True, indent=2)

    @classmethod
    def from_file(cls, path: str | Path) -> "CalibrationRequest":
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))

    def __str__(self) -> str:
        if self.is_legacy:
            return f"Request{{f={self.f}}}"

        def _n(v: Optional[List[float]]) -> int:
            return len(v) if v is not None else 0

        return (
            f"Request{{priority={_n(self.priority)}, "
            f"right_before_left={_n(self.right_before_left)}, "
            f"traffic_light={_n(self.traffic_light)}}}"
        )


# === Response Models ===

class DiagnosticPoint(BaseModel):
    """Input vector, predicted factor and implied true factor of one link."""
    model_config = ConfigDict(populate_by_name=True)

    x: List[float]
    y_pred: float = Field(alias="yPred")
    y_true: float = Field(alias="yTrue")


class CalibrationResult(BaseModel):
    """Accuracy of one evaluated network plus diagnostics per junction type."""
    rmse: float
    mae: float  # km/h

    priority: List[DiagnosticPoint] = Field(default_factory=list)
    right_before_left: List[DiagnosticPoint] = Field(default_factory=list)
    traffic_light: List[DiagnosticPoint] = Field(default_factory=list)

    def diagnostics(self, junction_type: JunctionType) -> List[DiagnosticPoint]:
        return getattr(self, junction_type.value)

    def diagnostic_counts(self) -> dict:
        return {jt.value: len(self.diagnostics(jt)) for jt in JunctionType}
