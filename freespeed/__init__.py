"""Free speed calibration for road networks."""

__version__ = "0.1.0"
