# trajectory_metrics/exceptions.py
"""
Custom exceptions for the trajectory metrics library.
"""


class TrajectoryMetricsError(Exception):
    """Base exception class for all trajectory metrics errors."""
    def __init__(self, message, *args, metric=None, **kwargs):
        super().__init__(message, *args)
        self.message = message
        self.metric = metric

    def __str__(self):
        base_message = super().__str__()
        if self.metric is not None:
            return f"{base_message} (Metric: {self.metric})"
        return base_message


class EmptyInputError(TrajectoryMetricsError):
    """One or both point sequences contain no points."""


class DimensionMismatchError(TrajectoryMetricsError):
    """Point coordinate arity differs between the compared samples."""

    def __init__(self, message, soll_dimension=None, ist_dimension=None, metric=None):
        super().__init__(message, metric=metric)
        self.soll_dimension = soll_dimension
        self.ist_dimension = ist_dimension

    def __str__(self):
        base_msg = super().__str__()
        if self.soll_dimension is not None and self.ist_dimension is not None:
            return f"{base_msg} - soll: {self.soll_dimension}D, ist: {self.ist_dimension}D"
        return base_msg


class InvalidThresholdError(TrajectoryMetricsError):
    """LCSS matching threshold is not strictly positive."""


class InvalidWindowError(TrajectoryMetricsError):
    """Band width of a windowed alignment is not a positive integer."""


class ConfigurationError(TrajectoryMetricsError):
    """Errors related to metrics configuration (unknown metric, bad config file)."""


class RecordMappingError(TrajectoryMetricsError):
    """A storage or application record could not be translated."""


# Names used by callers that think in terms of error kinds rather than classes
EmptyInput = EmptyInputError
DimensionMismatch = DimensionMismatchError
InvalidThreshold = InvalidThresholdError
InvalidWindow = InvalidWindowError
