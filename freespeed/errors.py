"""
Calibration errors.

All failures raised by loaders, the mutator and the validation loop
derive from CalibrationError.
"""


class CalibrationError(Exception):
    """Base calibration error."""
    pass


class NetworkFormatError(CalibrationError):
    """Network, feature or validation file could not be read."""
    pass


class UnknownJunctionTypeError(CalibrationError):
    """Link carries a junction type without a registered model."""
    pass


class MissingFeatureError(CalibrationError):
    """Modeled link has no entry in the feature table."""
    pass


class InvalidRequestError(CalibrationError):
    """Request cannot be applied to the loaded network."""
    pass


class EmptyValidationSampleError(CalibrationError):
    """Validation pair has no free-flow samples."""
    pass


class PathNotFoundError(CalibrationError):
    """No path between the nodes of a validation pair."""
    pass


class DegeneratePathError(CalibrationError):
    """Routed path has zero length or zero travel time."""
    pass
