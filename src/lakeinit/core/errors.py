"""
Exceptions raised while reading and validating lake parameters.

All of these derive from ValueError, so callers that only care whether the
lake setup succeeded can catch that. The driver uses the subclasses to report
which check a cell failed, and (if `ignore_errors` is set in the model setup)
skips that cell rather than stopping.
"""


class LakeParameterError(ValueError):
    """Base class for malformed or missing lake parameter records."""

    def __init__(self, message, gridcel=None):
        super().__init__(message)
        self.gridcel = gridcel


class CellNotFoundError(LakeParameterError):
    """The requested grid cell is not in the lake parameter file."""


class NodeCountError(LakeParameterError):
    """
    Number of lake nodes is outside the supported range, or does not match
    the number of area fractions given.
    """


class DepthInvariantError(LakeParameterError):
    """
    Maximum lake depth does not leave room below the surface layer, or the
    initial lake depth exceeds it.
    """


class AreaFractionError(LakeParameterError):
    """A lake area fraction lies outside [0, 1], or is NaN."""


class ProfileShapeError(LakeParameterError):
    """The exponent of a parabolic lake profile is not a positive number."""
