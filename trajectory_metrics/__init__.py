"""
Trajectory Metrics Library
==========================

This library compares a planned ("soll") robot trajectory with a measured
("ist") trajectory. It provides an index-aligned Euclidean comparison,
Dynamic Time Warping (general and banded "Johnen" variant), the discrete
Frechet distance and LCSS similarity, all returning a uniform MetricResult,
plus evaluation helpers and a translation layer for the record schemas.
"""

from . import constants as const

from .trajectory import Point, Trajectory, as_points_array
from .distance import distance, distance_matrix
from .results import MetricResult, assemble_result, summary_statistics

from .metrics import (
    compute_metric,
    euclidean_align,
    dtw,
    dtw_johnen,
    discrete_frechet,
    lcss,
)

from .config import MetricsConfig, load_config, save_config
from .evaluation import PrecisionGrader, SegmentEvaluation, evaluate, evaluate_segments
from .records import (
    segments_from_records,
    to_application,
    to_info_record,
    to_position_records,
    to_storage,
    trajectory_from_records,
)

from .exceptions import (
    TrajectoryMetricsError,
    EmptyInputError,
    DimensionMismatchError,
    InvalidThresholdError,
    InvalidWindowError,
    ConfigurationError,
    RecordMappingError,
    EmptyInput,
    DimensionMismatch,
    InvalidThreshold,
    InvalidWindow,
)

__version__ = "0.1.0"

__all__ = [
    "const",

    # Data model
    "Point",
    "Trajectory",
    "as_points_array",

    # Distance primitive
    "distance",
    "distance_matrix",

    # Results
    "MetricResult",
    "assemble_result",
    "summary_statistics",

    # Engines
    "compute_metric",
    "euclidean_align",
    "dtw",
    "dtw_johnen",
    "discrete_frechet",
    "lcss",

    # Configuration and evaluation
    "MetricsConfig",
    "load_config",
    "save_config",
    "PrecisionGrader",
    "SegmentEvaluation",
    "evaluate",
    "evaluate_segments",

    # Record translation
    "segments_from_records",
    "to_application",
    "to_info_record",
    "to_position_records",
    "to_storage",
    "trajectory_from_records",

    # Exceptions
    "TrajectoryMetricsError",
    "EmptyInputError",
    "DimensionMismatchError",
    "InvalidThresholdError",
    "InvalidWindowError",
    "ConfigurationError",
    "RecordMappingError",
    "EmptyInput",
    "DimensionMismatch",
    "InvalidThreshold",
    "InvalidWindow",
]
