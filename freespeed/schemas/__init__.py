from .calibration import CalibrationRequest, CalibrationResult, DiagnosticPoint

__all__ = ["CalibrationRequest", "CalibrationResult", "DiagnosticPoint"]
